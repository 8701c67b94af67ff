from __future__ import annotations

from datetime import date, datetime, tzinfo

from tablebook.core.entities.reservation import Reservation
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.core.repositories.transaction_scope import TransactionScope
from tablebook.core.timeutils import local_day_window


class ListReservationsForDayUseCase:
    """
    Every reservation, whatever its status, touching the given local calendar day.

    A booking running across midnight shows up on both days.
    """

    def __init__(
            self,
            *,
            reservation_repo: ReservationRepository,
            transaction: TransactionScope,
            local_tz: tzinfo,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._transaction = transaction
        self._local_tz = local_tz

    def execute(self, *, day_local: date | datetime) -> list[Reservation]:
        start_utc, end_utc = local_day_window(day_local, self._local_tz)
        with self._transaction.atomic():
            return self._reservation_repo.list_overlapping(start_utc=start_utc, end_utc=end_utc)
