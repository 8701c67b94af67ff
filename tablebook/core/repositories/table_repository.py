from __future__ import annotations

from abc import ABC, abstractmethod

from tablebook.core.entities.table import Table


class TableRepository(ABC):
    """
    Repository interface for dining table persistence.
    """

    @abstractmethod
    def get(self, table_id: int) -> Table | None:
        """Return a table by its store-assigned id, or None if missing."""
        raise NotImplementedError

    @abstractmethod
    def get_by_number(self, table_number: int) -> Table | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_capacity(self, *, min_capacity: int = 1) -> list[Table]:
        """Tables seating at least `min_capacity`, ordered by table number ascending."""
        raise NotImplementedError

    @abstractmethod
    def add(self, table: Table) -> Table:
        """Insert a new table and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(self, table: Table) -> int:
        """Update a table in place. Returns the affected row count (0 or 1)."""
        raise NotImplementedError
