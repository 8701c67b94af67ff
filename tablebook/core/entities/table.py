from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Table:
    table_number: int
    capacity: int
    table_id: int | None = None

    def can_seat(self, party_size: int) -> bool:
        return party_size <= self.capacity
