from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

from tablebook.core.errors import InvalidArgumentError

ONE_DAY = timedelta(hours=24)


def to_utc(value: datetime, local_tz: tzinfo) -> datetime:
    """
    Convert a caller-supplied instant to the canonical UTC reference.

    Naive values are read as wall-clock time in `local_tz`; aware values keep their own offset.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=local_tz)
    try:
        return value.astimezone(timezone.utc)
    except (OverflowError, ValueError) as e:
        raise InvalidArgumentError(f"Time {value.isoformat()} is outside the supported range") from e


def utc_window(start: datetime, duration: timedelta, local_tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the UTC bounds of [start, start + duration)."""
    start_utc = to_utc(start, local_tz)
    try:
        return start_utc, start_utc + duration
    except OverflowError as e:
        raise InvalidArgumentError("Reservation window ends outside the supported time range") from e


def local_day_window(day: date | datetime, local_tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the UTC bounds of [local midnight, local midnight + 24h) for `day`."""
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(local_tz)
        day = day.date()

    start = to_utc(datetime.combine(day, time.min, tzinfo=local_tz), local_tz)
    try:
        return start, start + ONE_DAY
    except OverflowError as e:
        raise InvalidArgumentError(f"Day {day.isoformat()} is outside the supported range") from e


def minutes(value: int) -> timedelta:
    try:
        return timedelta(minutes=value)
    except OverflowError as e:
        raise InvalidArgumentError(f"Duration of {value} minutes is outside the supported range") from e
