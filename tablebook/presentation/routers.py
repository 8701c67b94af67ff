from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from sqlalchemy.orm import Session

from tablebook.core.errors import BookingError, ErrorKind
from tablebook.schemas.models import (
    MAX_DURATION_MINUTES,
    MAX_ID,
    CancelResult,
    CapacityUpdate,
    Health,
    Reservation,
    ReservationCreate,
    ReservationUpdate,
    Table,
    TableCreate,
)
from tablebook.services.tablebook_service import (
    cancel_reservation_service,
    change_table_capacity_service,
    create_reservation_service,
    get_available_tables_service,
    get_reservation_service,
    list_reservations_for_day_service,
    list_tables_service,
    register_table_service,
    update_reservation_service,
)

router = APIRouter()

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORE_ERROR: 503,
}


def _http_error(e: BookingError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_KIND[e.kind], detail=str(e))


def get_db(request: Request) -> Iterator[Session]:
    try:
        db = request.app.state.database.session()
    except BookingError as e:
        raise _http_error(e)
    try:
        yield db
    finally:
        db.close()


def get_local_tz(request: Request) -> tzinfo:
    return request.app.state.settings.local_tz


@router.get("/health", response_model=Health)
def get_health(request: Request) -> Health:
    """
    Report whether the record store has been initialized
    """
    return Health(initialized=request.app.state.database.initialized)


@router.get("/tables", response_model=list[Table])
def get_tables(db: Session = Depends(get_db)) -> list[Table]:
    """
    List all tables ordered by table number
    """
    try:
        return list_tables_service(db)
    except BookingError as e:
        raise _http_error(e)


@router.post("/tables", response_model=Table, status_code=201)
def post_tables(body: TableCreate, db: Session = Depends(get_db)) -> Table:
    """
    Register a table

    Returns:
      - 201 with the stored table
      - 409 if the table number is taken
      - 422 on non-positive number or capacity
    """
    try:
        return register_table_service(body, db)
    except BookingError as e:
        raise _http_error(e)


@router.patch("/tables/{table_id}/capacity", response_model=Table)
def patch_tables_table_id_capacity(
    body: CapacityUpdate,
    table_id: int = Path(ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
) -> Table:
    """
    Change a table's seating capacity
    """
    try:
        return change_table_capacity_service(table_id, body.capacity, db)
    except BookingError as e:
        raise _http_error(e)


@router.get("/tables/available", response_model=list[Table])
def get_tables_available(
    start: datetime,
    duration_minutes: int = Query(gt=0, le=MAX_DURATION_MINUTES),
    min_capacity: int = Query(default=1, le=MAX_ID),
    db: Session = Depends(get_db),
    local_tz: tzinfo = Depends(get_local_tz),
) -> list[Table]:
    """
    Tables free for the whole window [start, start + duration) with at least min_capacity seats
    """
    try:
        return get_available_tables_service(start, duration_minutes, min_capacity, db, local_tz)
    except BookingError as e:
        raise _http_error(e)


@router.post("/reservations", response_model=Reservation, status_code=201)
def post_reservations(
    body: ReservationCreate,
    db: Session = Depends(get_db),
    local_tz: tzinfo = Depends(get_local_tz),
) -> Reservation:
    """
    Book a table

    Returns:
      - 201 with the booked reservation
      - 404 if the table does not exist
      - 409 if the slot overlaps an active booking
      - 422 on invalid duration, party size or name
    """
    try:
        return create_reservation_service(body, db, local_tz)
    except BookingError as e:
        raise _http_error(e)


@router.get("/reservations", response_model=list[Reservation])
def get_reservations(
    day: date,
    db: Session = Depends(get_db),
    local_tz: tzinfo = Depends(get_local_tz),
) -> list[Reservation]:
    """
    All reservations touching a local calendar day, ordered by start
    """
    try:
        return list_reservations_for_day_service(day, db, local_tz)
    except BookingError as e:
        raise _http_error(e)


@router.get("/reservations/{reservation_id}", response_model=Reservation)
def get_reservations_reservation_id(
    reservation_id: int = Path(ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
) -> Reservation:
    """
    Get a reservation
    """
    try:
        return get_reservation_service(reservation_id, db)
    except BookingError as e:
        raise _http_error(e)


@router.put("/reservations/{reservation_id}", response_model=Reservation)
def put_reservations_reservation_id(
    body: ReservationUpdate,
    reservation_id: int = Path(ge=1, le=MAX_ID),
    check_conflicts: bool = True,
    db: Session = Depends(get_db),
    local_tz: tzinfo = Depends(get_local_tz),
) -> Reservation:
    """
    Change a reservation's table, party or time window
    """
    try:
        return update_reservation_service(reservation_id, body, check_conflicts, db, local_tz)
    except BookingError as e:
        raise _http_error(e)


@router.post("/reservations/{reservation_id}/cancel", response_model=CancelResult)
def post_reservations_reservation_id_cancel(
    reservation_id: int = Path(ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
) -> CancelResult:
    """
    Cancel a reservation. affected is 0 when it was already canceled
    """
    try:
        return cancel_reservation_service(reservation_id, db)
    except BookingError as e:
        raise _http_error(e)
