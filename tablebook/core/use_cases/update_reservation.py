from __future__ import annotations

import logging

from tablebook.core.entities.reservation import Reservation
from tablebook.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.core.repositories.table_repository import TableRepository
from tablebook.core.repositories.transaction_scope import TransactionScope
from tablebook.core.use_cases.check_reservation_conflict import ReservationConflictChecker

logger = logging.getLogger(__name__)


class UpdateReservationUseCase:
    """
    Rewrites an existing booking (time window, table, party) in place.

    Capacity against the target table is always re-validated. `check_conflicts=False`
    skips only the overlap check, for callers that knowingly double-book a table.
    The stored status is kept: a canceled reservation cannot be edited back to life.
    """

    def __init__(
            self,
            *,
            table_repo: TableRepository,
            reservation_repo: ReservationRepository,
            transaction: TransactionScope,
    ) -> None:
        self._table_repo = table_repo
        self._reservation_repo = reservation_repo
        self._transaction = transaction
        self._conflicts = ReservationConflictChecker(reservation_repo=reservation_repo)

    def execute(self, reservation: Reservation, *, check_conflicts: bool = True) -> Reservation:
        if reservation.end_utc <= reservation.start_utc:
            raise InvalidArgumentError("End must be after start")
        if reservation.party_size < 1:
            raise InvalidArgumentError("Party size must be at least 1")
        if not reservation.party_name or not reservation.party_name.strip():
            raise InvalidArgumentError("Reservation name must not be empty")
        if reservation.reservation_id is None:
            raise InvalidArgumentError("Reservation id is required for an update")

        with self._transaction.atomic():
            existing = self._reservation_repo.get(reservation.reservation_id)
            if existing is None:
                raise NotFoundError(f"Reservation not found: {reservation.reservation_id!r}")
            if existing.is_canceled:
                raise InvalidArgumentError(
                    f"Reservation {reservation.reservation_id!r} is canceled and cannot be modified"
                )

            table = self._table_repo.get(reservation.table_id)
            if table is None:
                raise NotFoundError(f"Table not found: {reservation.table_id!r}")
            if not table.can_seat(reservation.party_size):
                raise InvalidArgumentError(
                    f"Party of {reservation.party_size} exceeds table capacity ({table.capacity})"
                )

            if check_conflicts and self._conflicts.has_conflict(
                    reservation.table_id,
                    reservation.start_utc,
                    reservation.end_utc,
                    exclude_reservation_id=reservation.reservation_id,
            ):
                logger.warning("Rejected update of reservation %s: overlaps a booking on table %s",
                               reservation.reservation_id, table.table_number)
                raise ConflictError(
                    f"Table {table.table_number} is already booked between "
                    f"{reservation.start_utc.isoformat()} and {reservation.end_utc.isoformat()}"
                )

            reservation.party_name = reservation.party_name.strip()
            reservation.status = existing.status
            self._reservation_repo.update(reservation)

        logger.info("Updated reservation %s (conflict check %s)", reservation.reservation_id,
                    "on" if check_conflicts else "bypassed")
        return reservation
