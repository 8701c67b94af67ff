from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from tablebook.core.entities.reservation import Reservation, ReservationStatus
from tablebook.core.repositories.reservation_repository import ReservationRepository
from tablebook.infrastructure.models.models import ReservationModel


def _to_db_time(value: datetime) -> datetime:
    """Aware instant -> naive UTC column value."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_db_time(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


class ReservationRepositoryImpl(ReservationRepository):
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_entity(row: ReservationModel) -> Reservation:
        return Reservation(
            reservation_id=row.reservation_id,
            table_id=row.table_id,
            party_name=row.party_name,
            party_size=row.party_size,
            start_utc=_from_db_time(row.start_utc),
            end_utc=_from_db_time(row.end_utc),
            status=ReservationStatus(row.status) if not isinstance(row.status, ReservationStatus) else row.status,
            phone=row.phone,
            notes=row.notes,
        )

    @staticmethod
    def _copy_onto(row: ReservationModel, reservation: Reservation) -> None:
        row.table_id = reservation.table_id
        row.party_name = reservation.party_name
        row.party_size = reservation.party_size
        row.start_utc = _to_db_time(reservation.start_utc)
        row.end_utc = _to_db_time(reservation.end_utc)
        row.status = reservation.status
        row.phone = reservation.phone
        row.notes = reservation.notes

    def get(self, reservation_id: int) -> Reservation | None:
        row = self.db.get(ReservationModel, reservation_id)
        if row is None:
            return None
        return self._to_entity(row)

    def add(self, reservation: Reservation) -> Reservation:
        row = ReservationModel()
        self._copy_onto(row, reservation)
        self.db.add(row)
        self.db.flush()

        reservation.reservation_id = row.reservation_id
        return reservation

    def update(self, reservation: Reservation) -> int:
        row = self.db.get(ReservationModel, reservation.reservation_id)
        if row is None:
            return 0

        self._copy_onto(row, reservation)
        self.db.flush()
        return 1

    def find_active_overlapping(
            self,
            *,
            start_utc: datetime,
            end_utc: datetime,
            table_id: int | None = None,
    ) -> list[Reservation]:
        q = (
            select(ReservationModel)
            .where(ReservationModel.status == ReservationStatus.BOOKED)
            .where(ReservationModel.start_utc < _to_db_time(end_utc))
            .where(ReservationModel.end_utc > _to_db_time(start_utc))
        )
        if table_id is not None:
            q = q.where(ReservationModel.table_id == table_id)

        return [self._to_entity(row) for row in self.db.scalars(q)]

    def list_overlapping(self, *, start_utc: datetime, end_utc: datetime) -> list[Reservation]:
        q = (
            select(ReservationModel)
            .where(ReservationModel.start_utc < _to_db_time(end_utc))
            .where(ReservationModel.end_utc > _to_db_time(start_utc))
            .order_by(ReservationModel.start_utc, ReservationModel.reservation_id)
        )
        return [self._to_entity(row) for row in self.db.scalars(q)]
