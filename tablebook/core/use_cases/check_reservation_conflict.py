from __future__ import annotations

from datetime import datetime

from tablebook.core.repositories.reservation_repository import ReservationRepository


class ReservationConflictChecker:
    """
    Answers whether a table already has an active booking overlapping a time window.

    The window is half-open: a booking ending exactly at `start_utc` is not a conflict.
    The interval is assumed valid (start < end); callers reject anything else first.
    """

    def __init__(self, *, reservation_repo: ReservationRepository) -> None:
        self._reservation_repo = reservation_repo

    def has_conflict(
            self,
            table_id: int,
            start_utc: datetime,
            end_utc: datetime,
            exclude_reservation_id: int | None = None,
    ) -> bool:
        candidates = self._reservation_repo.find_active_overlapping(
            start_utc=start_utc,
            end_utc=end_utc,
            table_id=table_id,
        )
        return any(r.reservation_id != exclude_reservation_id for r in candidates)
