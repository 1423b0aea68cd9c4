"""
UTC timestamp helpers.

Every stored timestamp is timezone-aware UTC.  Naive values coming from
callers or read back from SQLite are taken to be UTC already.
"""

import datetime

UTC = datetime.timezone.utc


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(UTC)


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Attach UTC to a naive value, or convert an aware one to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_date(value: datetime.datetime) -> datetime.date:
    """Calendar day of *value* in UTC."""
    return as_utc(value).date()


def day_bounds(start: datetime.date, end: datetime.date) -> tuple[datetime.datetime, datetime.datetime]:
    """First and last instant of the UTC days ``[start, end]``."""
    return (datetime.datetime.combine(start, datetime.time.min, tzinfo=UTC),
            datetime.datetime.combine(end, datetime.time.max, tzinfo=UTC))
