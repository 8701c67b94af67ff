from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from tablebook.core.entities.reservation import Reservation


class ReservationRepository(ABC):
    @abstractmethod
    def get(self, reservation_id: int) -> Reservation | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, reservation: Reservation) -> Reservation:
        """Insert a new reservation and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(self, reservation: Reservation) -> int:
        """Update a reservation in place. Returns the affected row count (0 or 1)."""
        raise NotImplementedError

    @abstractmethod
    def find_active_overlapping(
            self,
            *,
            start_utc: datetime,
            end_utc: datetime,
            table_id: int | None = None,
    ) -> list[Reservation]:
        """
        Booked reservations with start < end_utc and end > start_utc.

        Restricted to one table when `table_id` is given, store-wide otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def list_overlapping(self, *, start_utc: datetime, end_utc: datetime) -> list[Reservation]:
        """Reservations of any status intersecting the window, ordered by start ascending."""
        raise NotImplementedError
