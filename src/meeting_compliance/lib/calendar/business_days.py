"""Business-day arithmetic for statutory deadlines.

Business days are Monday through Friday. Holidays are not skipped; the
newspaper schedule resolver handles publication closures separately.
"""

from datetime import date, datetime, timedelta

_ONE_DAY = timedelta(days=1)


def _as_date(value: date | datetime) -> date:
    """Reduce a datetime to its calendar date, leaving plain dates untouched."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_business_day(day: date | datetime) -> bool:
    """Return True when ``day`` falls on Monday through Friday."""
    return _as_date(day).weekday() < 5


def add_business_days(start: date | datetime, days: int) -> date:
    """Advance ``start`` by ``days`` business days.

    Walks forward one calendar day at a time and only decrements the
    remaining count on weekdays, so weekends are skipped.

    Args:
        start: The date to count from (not itself counted).
        days: Number of business days to add. Zero returns ``start``.

    Returns:
        The resulting calendar date.

    Raises:
        ValueError: If ``days`` is negative.
    """
    if days < 0:
        msg = f"days must be non-negative, got {days}"
        raise ValueError(msg)

    current = _as_date(start)
    remaining = days
    while remaining > 0:
        current += _ONE_DAY
        if is_business_day(current):
            remaining -= 1
    return current


def count_business_days(start: date | datetime, end: date | datetime) -> int:
    """Count weekdays from ``start`` (inclusive) up to ``end`` (exclusive).

    Args:
        start: First day considered.
        end: Day at which counting stops.

    Returns:
        Number of weekdays visited; 0 when ``start`` is on or after ``end``.
    """
    current = _as_date(start)
    stop = _as_date(end)
    count = 0
    while current < stop:
        if is_business_day(current):
            count += 1
        current += _ONE_DAY
    return count


def weeks_before(day: date, weeks: int) -> date:
    """Return the date ``weeks`` whole weeks before ``day``."""
    return day - timedelta(weeks=weeks)
