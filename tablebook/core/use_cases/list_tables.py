from __future__ import annotations

from tablebook.core.entities.table import Table
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.core.repositories.transaction_scope import TransactionScope


class ListTablesUseCase:
    def __init__(self, *, table_repo: TableRepository, transaction: TransactionScope) -> None:
        self._table_repo = table_repo
        self._transaction = transaction

    def execute(self) -> list[Table]:
        with self._transaction.atomic():
            return self._table_repo.find_by_capacity(min_capacity=1)
