"""UTC datetime utilities.

All timestamps are stored as **naive** UTC datetimes (no tzinfo), which keeps
them comparable with SQLAlchemy ``DateTime`` columns on both SQLite and
PostgreSQL without ``timezone=True``.
"""

from datetime import UTC, date, datetime, time, timedelta


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def expires_in(seconds: int) -> datetime:
    """Return the naive UTC instant ``seconds`` from now."""
    return utcnow() + timedelta(seconds=seconds)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)
