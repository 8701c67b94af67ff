from __future__ import annotations

from datetime import date, datetime, tzinfo

from sqlalchemy.orm import Session

from tablebook.core.entities.reservation import Reservation as CoreReservation
from tablebook.core.entities.table import Table as CoreTable
from tablebook.core.timeutils import minutes, to_utc
from tablebook.core.use_cases.cancel_reservation import CancelReservationUseCase
from tablebook.core.use_cases.change_table_capacity import ChangeTableCapacityUseCase
from tablebook.core.use_cases.create_reservation import CreateReservationUseCase
from tablebook.core.use_cases.get_available_tables import GetAvailableTablesUseCase
from tablebook.core.use_cases.get_reservation import GetReservationUseCase
from tablebook.core.use_cases.list_reservations_for_day import ListReservationsForDayUseCase
from tablebook.core.use_cases.list_tables import ListTablesUseCase
from tablebook.core.use_cases.register_table import RegisterTableUseCase
from tablebook.core.use_cases.update_reservation import UpdateReservationUseCase
from tablebook.infrastructure.repositories.reservation_repository_impl import ReservationRepositoryImpl
from tablebook.infrastructure.repositories.table_repository_impl import TableRepositoryImpl
from tablebook.infrastructure.repositories.transaction_scope_impl import SqlTransactionScope
from tablebook.schemas.models import (
    CancelResult,
    Reservation,
    ReservationCreate,
    ReservationUpdate,
    Status,
    Table,
    TableCreate,
)


def _to_table_schema(table: CoreTable) -> Table:
    return Table(
        table_id=table.table_id,
        table_number=table.table_number,
        capacity=table.capacity,
    )


def _to_reservation_schema(reservation: CoreReservation) -> Reservation:
    return Reservation(
        reservation_id=reservation.reservation_id,
        table_id=reservation.table_id,
        party_name=reservation.party_name,
        party_size=reservation.party_size,
        start_utc=reservation.start_utc,
        end_utc=reservation.end_utc,
        status=Status(reservation.status.value),
        phone=reservation.phone,
        notes=reservation.notes,
    )


# -----------------------------
# Tables
# -----------------------------
def list_tables_service(db: Session) -> list[Table]:
    use_case = ListTablesUseCase(table_repo=TableRepositoryImpl(db), transaction=SqlTransactionScope(db))
    return [_to_table_schema(t) for t in use_case.execute()]


def register_table_service(body: TableCreate, db: Session) -> Table:
    use_case = RegisterTableUseCase(table_repo=TableRepositoryImpl(db), transaction=SqlTransactionScope(db))
    table = use_case.execute(table_number=body.table_number, capacity=body.capacity)
    return _to_table_schema(table)


def change_table_capacity_service(table_id: int, capacity: int, db: Session) -> Table:
    use_case = ChangeTableCapacityUseCase(table_repo=TableRepositoryImpl(db), transaction=SqlTransactionScope(db))
    table = use_case.execute(table_id=table_id, capacity=capacity)
    return _to_table_schema(table)


def get_available_tables_service(
        start: datetime,
        duration_minutes: int,
        min_capacity: int,
        db: Session,
        local_tz: tzinfo,
) -> list[Table]:
    use_case = GetAvailableTablesUseCase(
        table_repo=TableRepositoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
        local_tz=local_tz,
    )
    tables = use_case.execute(
        start_local=start,
        duration=minutes(duration_minutes),
        min_capacity=min_capacity,
    )
    return [_to_table_schema(t) for t in tables]


# -----------------------------
# Reservations
# -----------------------------
def create_reservation_service(body: ReservationCreate, db: Session, local_tz: tzinfo) -> Reservation:
    use_case = CreateReservationUseCase(
        table_repo=TableRepositoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
        local_tz=local_tz,
    )
    reservation = use_case.execute(
        table_id=body.table_id,
        party_name=body.party_name,
        start_local=body.start,
        duration=minutes(body.duration_minutes),
        party_size=body.party_size,
        phone=body.phone,
        notes=body.notes,
    )
    return _to_reservation_schema(reservation)


def update_reservation_service(
        reservation_id: int,
        body: ReservationUpdate,
        check_conflicts: bool,
        db: Session,
        local_tz: tzinfo,
) -> Reservation:
    """
    Translate the API body into a core Reservation. Naive start/end are restaurant-local wall time.
    """
    use_case = UpdateReservationUseCase(
        table_repo=TableRepositoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
    )
    reservation = CoreReservation(
        reservation_id=reservation_id,
        table_id=body.table_id,
        party_name=body.party_name,
        party_size=body.party_size,
        start_utc=to_utc(body.start, local_tz),
        end_utc=to_utc(body.end, local_tz),
        phone=body.phone,
        notes=body.notes,
    )
    updated = use_case.execute(reservation, check_conflicts=check_conflicts)
    return _to_reservation_schema(updated)


def cancel_reservation_service(reservation_id: int, db: Session) -> CancelResult:
    use_case = CancelReservationUseCase(
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
    )
    return CancelResult(affected=use_case.execute(reservation_id=reservation_id))


def get_reservation_service(reservation_id: int, db: Session) -> Reservation:
    use_case = GetReservationUseCase(
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
    )
    return _to_reservation_schema(use_case.execute(reservation_id=reservation_id))


def list_reservations_for_day_service(day: date, db: Session, local_tz: tzinfo) -> list[Reservation]:
    use_case = ListReservationsForDayUseCase(
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
        local_tz=local_tz,
    )
    return [_to_reservation_schema(r) for r in use_case.execute(day_local=day)]
