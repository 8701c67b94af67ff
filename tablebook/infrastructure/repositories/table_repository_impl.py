from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tablebook.core.entities.table import Table
from tablebook.core.errors import ConflictError
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.infrastructure.models.models import TableModel


class TableRepositoryImpl(TableRepository):
    """SQLAlchemy implementation for dining table persistence. Writes flush; the transaction scope commits."""

    def __init__(self, db: Session) -> None:
        self._db = db

    @staticmethod
    def _to_entity(row: TableModel) -> Table:
        return Table(
            table_id=row.table_id,
            table_number=row.table_number,
            capacity=row.capacity,
        )

    def get(self, table_id: int) -> Table | None:
        row = self._db.get(TableModel, table_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_number(self, table_number: int) -> Table | None:
        row = self._db.scalars(select(TableModel).where(TableModel.table_number == table_number)).first()
        if row is None:
            return None
        return self._to_entity(row)

    def find_by_capacity(self, *, min_capacity: int = 1) -> list[Table]:
        q = (
            select(TableModel)
            .where(TableModel.capacity >= min_capacity)
            .order_by(TableModel.table_number)
        )
        return [self._to_entity(row) for row in self._db.scalars(q)]

    def add(self, table: Table) -> Table:
        row = TableModel(table_number=table.table_number, capacity=table.capacity)
        self._db.add(row)
        try:
            self._db.flush()
        except IntegrityError as e:
            raise ConflictError(f"Table number {table.table_number} is already registered") from e

        table.table_id = row.table_id
        return table

    def update(self, table: Table) -> int:
        row = self._db.get(TableModel, table.table_id)
        if row is None:
            return 0

        row.table_number = table.table_number
        row.capacity = table.capacity
        self._db.flush()
        return 1
