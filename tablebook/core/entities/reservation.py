from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ReservationStatus(str, Enum):
    FREE = "Free"
    BOOKED = "Booked"
    CANCELED = "Canceled"


@dataclass(slots=True)
class Reservation:
    table_id: int
    party_name: str
    party_size: int
    start_utc: datetime
    end_utc: datetime
    status: ReservationStatus = ReservationStatus.FREE
    phone: str | None = None
    notes: str | None = None
    reservation_id: int | None = None

    @property
    def is_active(self) -> bool:
        return self.status is ReservationStatus.BOOKED

    @property
    def is_canceled(self) -> bool:
        return self.status is ReservationStatus.CANCELED

    def overlaps(self, start_utc: datetime, end_utc: datetime) -> bool:
        """Half-open [start, end) intersection; touching boundaries do not overlap."""
        return self.start_utc < end_utc and self.end_utc > start_utc

    def mark_booked(self) -> None:
        self.status = ReservationStatus.BOOKED

    def cancel(self) -> bool:
        """Flip to Canceled. Returns False when it already was."""
        if self.is_canceled:
            return False
        self.status = ReservationStatus.CANCELED
        return True
