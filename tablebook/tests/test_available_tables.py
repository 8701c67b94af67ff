from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tablebook.core.errors import InvalidArgumentError
from tablebook.core.use_cases.cancel_reservation import CancelReservationUseCase
from tablebook.core.use_cases.check_reservation_conflict import ReservationConflictChecker
from tablebook.core.use_cases.get_available_tables import GetAvailableTablesUseCase
from tablebook.core.use_cases.list_tables import ListTablesUseCase
from tablebook.infrastructure.repositories.reservation_repository_impl import ReservationRepositoryImpl
from tablebook.infrastructure.repositories.table_repository_impl import TableRepositoryImpl
from tablebook.infrastructure.repositories.transaction_scope_impl import SqlTransactionScope
from tablebook.tests.helpers import utc


@pytest.fixture()
def available(db) -> GetAvailableTablesUseCase:
    return GetAvailableTablesUseCase(
        table_repo=TableRepositoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
        local_tz=timezone.utc,
    )


def _numbers(tables) -> list[int]:
    return [t.table_number for t in tables]


def test_all_tables_free_on_an_empty_evening(register_table, available) -> None:
    for number, capacity in [(3, 6), (1, 2), (2, 12)]:
        register_table(number, capacity)

    tables = available.execute(start_local=utc(2024, 1, 1, 18, 0), duration=timedelta(minutes=90))
    assert _numbers(tables) == [1, 2, 3]


def test_capacity_floor_filters_small_tables(register_table, available) -> None:
    for number, capacity in [(1, 2), (2, 12), (3, 6), (4, 4)]:
        register_table(number, capacity)

    tables = available.execute(start_local=utc(2024, 1, 1, 18, 0), duration=timedelta(minutes=90), min_capacity=4)
    assert _numbers(tables) == [2, 3, 4]


def test_booked_table_is_excluded_only_while_it_overlaps(register_table, book, available) -> None:
    register_table(1, 2)
    table3 = register_table(3, 6)
    book(table3, utc(2024, 1, 1, 18, 0), 90)

    during = available.execute(start_local=utc(2024, 1, 1, 19, 0), duration=timedelta(minutes=60))
    after = available.execute(start_local=utc(2024, 1, 1, 19, 30), duration=timedelta(minutes=60))

    assert _numbers(during) == [1]
    assert _numbers(after) == [1, 3]


def test_canceled_booking_frees_the_table(db, register_table, book, available) -> None:
    table3 = register_table(3, 6)
    smith = book(table3, utc(2024, 1, 1, 18, 0), 90, name="Smith", party_size=4)

    before = available.execute(start_local=utc(2024, 1, 1, 18, 0), duration=timedelta(minutes=90), min_capacity=4)
    assert 3 not in _numbers(before)

    CancelReservationUseCase(
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
    ).execute(reservation_id=smith.reservation_id)

    after = available.execute(start_local=utc(2024, 1, 1, 18, 0), duration=timedelta(minutes=90), min_capacity=4)
    assert 3 in _numbers(after)


@pytest.mark.parametrize("minutes", [0, -15])
def test_non_positive_duration_is_invalid(register_table, available, minutes) -> None:
    register_table(1, 2)

    with pytest.raises(InvalidArgumentError):
        available.execute(start_local=utc(2024, 1, 1, 18, 0), duration=timedelta(minutes=minutes))


def test_capacity_floor_below_one_is_invalid(available) -> None:
    with pytest.raises(InvalidArgumentError):
        available.execute(start_local=utc(2024, 1, 1, 18, 0), duration=timedelta(minutes=60), min_capacity=0)


def test_naive_start_uses_restaurant_time_zone(db, register_table, book) -> None:
    from zoneinfo import ZoneInfo

    table = register_table(3, 6)
    book(table, utc(2024, 1, 2, 1, 0), 90)  # 18:00 in Calgary
    use_case = GetAvailableTablesUseCase(
        table_repo=TableRepositoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
        local_tz=ZoneInfo("America/Edmonton"),
    )

    assert use_case.execute(start_local=datetime(2024, 1, 1, 18, 30), duration=timedelta(minutes=30)) == []


def test_availability_matches_per_table_conflict_checks(db, register_table, book, available) -> None:
    """
    The set difference must agree with asking the conflict checker table by table.
    """
    tables = {n: register_table(n, c) for n, c in [(1, 2), (2, 12), (3, 6), (4, 4), (5, 5), (6, 4)]}
    book(tables[1], utc(2024, 1, 1, 17, 0), 60)
    book(tables[2], utc(2024, 1, 1, 18, 0), 120)
    book(tables[3], utc(2024, 1, 1, 18, 0), 90)
    book(tables[3], utc(2024, 1, 1, 20, 0), 45)
    book(tables[4], utc(2024, 1, 1, 19, 15), 30)
    canceled = book(tables[5], utc(2024, 1, 1, 18, 0), 240)
    CancelReservationUseCase(
        reservation_repo=ReservationRepositoryImpl(db),
        transaction=SqlTransactionScope(db),
    ).execute(reservation_id=canceled.reservation_id)

    checker = ReservationConflictChecker(reservation_repo=ReservationRepositoryImpl(db))
    all_tables = ListTablesUseCase(table_repo=TableRepositoryImpl(db), transaction=SqlTransactionScope(db)).execute()

    start = utc(2024, 1, 1, 16, 0)
    while start < utc(2024, 1, 1, 22, 0):
        for minutes in (15, 30, 60, 90, 150):
            end = start + timedelta(minutes=minutes)
            for min_capacity in (1, 2, 4, 5, 6, 12, 13):
                expected = [
                    t.table_number
                    for t in all_tables
                    if t.capacity >= min_capacity and not checker.has_conflict(t.table_id, start, end)
                ]
                actual = _numbers(
                    available.execute(start_local=start, duration=timedelta(minutes=minutes),
                                      min_capacity=min_capacity)
                )
                assert actual == expected, (start, minutes, min_capacity)
        start += timedelta(minutes=15)


@pytest.mark.parametrize(
    "start, minutes",
    [
        (utc(9999, 12, 31, 23, 30), 90),
        (utc(2024, 1, 1, 18, 0), 10**12),
    ],
)
def test_window_past_the_calendar_is_invalid(register_table, available, start, minutes) -> None:
    register_table(1, 2)

    with pytest.raises(InvalidArgumentError):
        available.execute(start_local=start, duration=timedelta(minutes=minutes))
