from __future__ import annotations

import logging

from tablebook.core.entities.table import Table
from tablebook.core.errors import ConflictError, InvalidArgumentError
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.core.repositories.transaction_scope import TransactionScope

logger = logging.getLogger(__name__)


class RegisterTableUseCase:
    """
    Adds a physical table to the floor plan.

    Table numbers are unique; the store's unique index backs up the pre-check below
    when two registrations race.
    """

    def __init__(self, *, table_repo: TableRepository, transaction: TransactionScope) -> None:
        self._table_repo = table_repo
        self._transaction = transaction

    def execute(self, *, table_number: int, capacity: int) -> Table:
        if table_number < 1:
            raise InvalidArgumentError("Table number must be at least 1")
        if capacity < 1:
            raise InvalidArgumentError("Capacity must be at least 1")

        with self._transaction.atomic():
            if self._table_repo.get_by_number(table_number) is not None:
                raise ConflictError(f"Table number {table_number} is already registered")
            table = self._table_repo.add(Table(table_number=table_number, capacity=capacity))

        logger.info("Registered table %s (id=%s, capacity=%s)", table.table_number, table.table_id, table.capacity)
        return table
