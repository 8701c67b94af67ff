from __future__ import annotations

import logging

from tablebook.core.errors import NotFoundError
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.core.repositories.transaction_scope import TransactionScope

logger = logging.getLogger(__name__)


class CancelReservationUseCase:
    """
    Cancels a booking, freeing its slot. The record itself is kept.

    Returns the number of affected rows: 1 on cancel, 0 if it was already canceled.
    """

    def __init__(self, *, reservation_repo: ReservationRepository, transaction: TransactionScope) -> None:
        self._reservation_repo = reservation_repo
        self._transaction = transaction

    def execute(self, *, reservation_id: int) -> int:
        with self._transaction.atomic():
            reservation = self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise NotFoundError(f"Reservation not found: {reservation_id!r}")

            if not reservation.cancel():
                logger.info("Reservation %s already canceled", reservation_id)
                return 0

            affected = self._reservation_repo.update(reservation)

        logger.info("Canceled reservation %s", reservation_id)
        return affected
