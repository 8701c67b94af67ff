from __future__ import annotations

from tablebook.core.entities.reservation import Reservation
from tablebook.core.errors import NotFoundError
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.core.repositories.transaction_scope import TransactionScope


class GetReservationUseCase:
    def __init__(self, *, reservation_repo: ReservationRepository, transaction: TransactionScope) -> None:
        self._reservation_repo = reservation_repo
        self._transaction = transaction

    def execute(self, *, reservation_id: int) -> Reservation:
        with self._transaction.atomic():
            reservation = self._reservation_repo.get(reservation_id)
        if reservation is None:
            raise NotFoundError(f"Reservation not found: {reservation_id!r}")
        return reservation
