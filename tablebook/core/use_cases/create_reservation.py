from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo

from tablebook.core.entities.reservation import Reservation
from tablebook.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.core.repositories.transaction_scope import TransactionScope
from tablebook.core.timeutils import utc_window
from tablebook.core.use_cases.check_reservation_conflict import ReservationConflictChecker

logger = logging.getLogger(__name__)


class CreateReservationUseCase:
    """
    Books one table for one contiguous time window.

    Checks run in a fixed order so callers can tell causes apart when several apply:
    argument validity, table existence, capacity, then overlap with existing bookings.
    The whole sequence runs inside one store transaction.
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
        self._conflicts = ReservationConflictChecker(reservation_repo=reservation_repo)

    def execute(
            self,
            *,
            table_id: int,
            party_name: str,
            start_local: datetime,
            duration: timedelta,
            party_size: int,
            phone: str | None = None,
            notes: str | None = None,
    ) -> Reservation:
        if duration <= timedelta(0):
            raise InvalidArgumentError("Duration must be greater than zero")
        if party_size < 1:
            raise InvalidArgumentError("Party size must be at least 1")
        if not party_name or not party_name.strip():
            raise InvalidArgumentError("Reservation name must not be empty")

        start_utc, end_utc = utc_window(start_local, duration, self._local_tz)

        with self._transaction.atomic():
            table = self._table_repo.get(table_id)
            if table is None:
                raise NotFoundError(f"Table not found: {table_id!r}")

            if not table.can_seat(party_size):
                logger.warning("Rejected booking on table %s: party of %s exceeds capacity %s",
                               table.table_number, party_size, table.capacity)
                raise InvalidArgumentError(f"Party of {party_size} exceeds table capacity ({table.capacity})")

            if self._conflicts.has_conflict(table_id, start_utc, end_utc):
                logger.warning("Rejected booking on table %s: %s - %s overlaps an existing booking",
                               table.table_number, start_utc.isoformat(), end_utc.isoformat())
                raise ConflictError(
                    f"Table {table.table_number} is already booked between "
                    f"{start_utc.isoformat()} and {end_utc.isoformat()}"
                )

            reservation = Reservation(
                table_id=table_id,
                party_name=party_name.strip(),
                party_size=party_size,
                start_utc=start_utc,
                end_utc=end_utc,
                phone=phone,
                notes=notes,
            )
            reservation.mark_booked()
            reservation = self._reservation_repo.add(reservation)

        logger.info("Booked reservation %s on table %s for %s", reservation.reservation_id,
                    table.table_number, reservation.party_name)
        return reservation
