from __future__ import annotations

import logging

from tablebook.core.entities.table import Table
from tablebook.core.errors import InvalidArgumentError, NotFoundError
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.core.repositories.transaction_scope import TransactionScope

logger = logging.getLogger(__name__)


class ChangeTableCapacityUseCase:
    """
    Administrative capacity change. Bookings already on the table are left as they are.
    """

    def __init__(self, *, table_repo: TableRepository, transaction: TransactionScope) -> None:
        self._table_repo = table_repo
        self._transaction = transaction

    def execute(self, *, table_id: int, capacity: int) -> Table:
        if capacity < 1:
            raise InvalidArgumentError("Capacity must be at least 1")

        with self._transaction.atomic():
            table = self._table_repo.get(table_id)
            if table is None:
                raise NotFoundError(f"Table not found: {table_id!r}")

            previous = table.capacity
            table.capacity = capacity
            self._table_repo.update(table)

        logger.info("Table %s capacity changed %s -> %s", table.table_number, previous, capacity)
        return table
