from __future__ import annotations

from datetime import datetime, timedelta, tzinfo

from tablebook.core.entities.table import Table
from tablebook.core.errors import InvalidArgumentError
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.core.repositories.transaction_scope import TransactionScope
from tablebook.core.timeutils import utc_window


class GetAvailableTablesUseCase:
    """
    Tables with enough seats and no active booking overlapping the requested window.

    Computed as one set difference (candidate tables minus tables referenced by
    overlapping bookings) rather than one conflict query per table; the result is the
    same as asking `ReservationConflictChecker.has_conflict` for every candidate.
    """

    def __init__(
            self,
            *,
            table_repo: TableRepository,
            reservation_repo: ReservationRepository,
            transaction: TransactionScope,
            local_tz: tzinfo,
    ) -> None:
        self._table_repo = table_repo
        self._reservation_repo = reservation_repo
        self._transaction = transaction
        self._local_tz = local_tz

    def execute(self, *, start_local: datetime, duration: timedelta, min_capacity: int = 1) -> list[Table]:
        if duration <= timedelta(0):
            raise InvalidArgumentError("Duration must be greater than zero")
        if min_capacity < 1:
            raise InvalidArgumentError("Minimum capacity must be at least 1")

        start_utc, end_utc = utc_window(start_local, duration, self._local_tz)

        with self._transaction.atomic():
            tables = self._table_repo.find_by_capacity(min_capacity=min_capacity)
            overlapping = self._reservation_repo.find_active_overlapping(start_utc=start_utc, end_utc=end_utc)

        busy = {r.table_id for r in overlapping}
        return sorted(
            (t for t in tables if t.table_id not in busy),
            key=lambda t: t.table_number,
        )
