from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

import pytest
from sqlalchemy.orm import Session

from tablebook.core.entities.reservation import Reservation
from tablebook.core.entities.table import Table
from tablebook.core.use_cases.create_reservation import CreateReservationUseCase
from tablebook.core.use_cases.register_table import RegisterTableUseCase
from tablebook.infrastructure.database import Database
from tablebook.infrastructure.repositories.reservation_repository_impl import ReservationRepositoryImpl
from tablebook.infrastructure.repositories.table_repository_impl import TableRepositoryImpl
from tablebook.infrastructure.repositories.transaction_scope_impl import SqlTransactionScope


@pytest.fixture()
def database() -> Iterator[Database]:
    """
    A fresh in-memory store per test, no seed tables.
    """
    database = Database("sqlite+pysqlite:///:memory:")
    database.initialize()
    yield database
    database.dispose()


@pytest.fixture()
def db(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def register_table(db: Session) -> Callable[..., Table]:
    use_case = RegisterTableUseCase(table_repo=TableRepositoryImpl(db), transaction=SqlTransactionScope(db))

    def _register(table_number: int, capacity: int) -> Table:
        return use_case.execute(table_number=table_number, capacity=capacity)

    return _register


@pytest.fixture()
def book(db: Session) -> Callable[..., Reservation]:
    """
    Create a reservation through the real use case, UTC as the local zone.
    """
    use_case = CreateReservationUseCase(
        table_repo=TableRepositoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
        local_tz=timezone.utc,
    )

    def _book(
            table: Table,
            start: datetime,
            minutes: int,
            *,
            name: str = "Guest",
            party_size: int = 2,
    ) -> Reservation:
        return use_case.execute(
            table_id=table.table_id,
            party_name=name,
            start_local=start,
            duration=timedelta(minutes=minutes),
            party_size=party_size,
        )

    return _book
