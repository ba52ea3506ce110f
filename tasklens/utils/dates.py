"""Date helpers shared by filtering and sorting."""

from datetime import date, datetime, time


def to_timestamp(value: datetime | date | str | None) -> float | None:
    """Convert a date-like value to POSIX seconds.

    Naive datetimes are interpreted in local time, aware ones keep their
    offset, so mixed values remain comparable. Unparseable strings and
    ``None`` give ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, date):
        return datetime.combine(value, time.min).timestamp()
    return None
