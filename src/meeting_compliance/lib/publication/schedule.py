"""Newspaper schedule resolution.

Maps target dates onto actual editions of a newspaper and computes the
submission cutoff for each edition. Scans are bounded; when no edition is
found within the bound the resolver degrades to a one-week offset and logs
a warning instead of failing.
"""

from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from loguru import logger

from meeting_compliance.lib.publication.types import DayOfWeek, NewspaperSchedule

DEFAULT_TIMEZONE = ZoneInfo("America/Indiana/Indianapolis")
DEFAULT_SCAN_DAYS = 60
DEFAULT_SUBMISSION_TIME = "17:00"

_ONE_DAY = timedelta(days=1)
_FALLBACK_OFFSET = timedelta(days=7)


def parse_time_of_day(value: str) -> time:
    """Parse an ``HH:MM`` string into a ``time``."""
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def local_deadline(day: date, time_of_day: str, tz: tzinfo) -> datetime:
    """Combine a calendar day and ``HH:MM`` into an aware local datetime."""
    return datetime.combine(day, parse_time_of_day(time_of_day), tzinfo=tz)


def is_publication_day(schedule: NewspaperSchedule, day: date) -> bool:
    """True when the paper prints an edition on ``day``."""
    return DayOfWeek.of(day) in schedule.publication_days and day not in schedule.holiday_closures


def find_next_publication_date(
    schedule: NewspaperSchedule,
    on_or_after: date,
    scan_days: int = DEFAULT_SCAN_DAYS,
) -> date:
    """First edition on or after ``on_or_after``.

    Args:
        schedule: The newspaper schedule.
        on_or_after: Earliest acceptable date.
        scan_days: Maximum number of days examined.

    Returns:
        The edition date, or ``on_or_after + 7 days`` if none is found.
    """
    candidate = on_or_after
    for _ in range(scan_days):
        if is_publication_day(schedule, candidate):
            return candidate
        candidate += _ONE_DAY

    fallback = on_or_after + _FALLBACK_OFFSET
    logger.warning(
        f"No publication date within {scan_days} days on or after {on_or_after} "
        f"for schedule {schedule.id or schedule.name!r}; using {fallback}"
    )
    return fallback


def find_previous_publication_date(
    schedule: NewspaperSchedule,
    on_or_before: date,
    scan_days: int = DEFAULT_SCAN_DAYS,
) -> date:
    """Latest edition on or before ``on_or_before``.

    Returns:
        The edition date, or ``on_or_before - 7 days`` if none is found.
    """
    candidate = on_or_before
    for _ in range(scan_days):
        if is_publication_day(schedule, candidate):
            return candidate
        candidate -= _ONE_DAY

    fallback = on_or_before - _FALLBACK_OFFSET
    logger.warning(
        f"No publication date within {scan_days} days on or before {on_or_before} "
        f"for schedule {schedule.id or schedule.name!r}; using {fallback}"
    )
    return fallback


def get_submission_deadline(
    schedule: NewspaperSchedule,
    publication_date: date,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> datetime:
    """Submission cutoff for the edition on ``publication_date``.

    A per-weekday override wins; otherwise the cutoff is
    ``submission_lead_days`` before the edition at 17:00 local time.
    """
    override = schedule.deadline_rule_for(DayOfWeek.of(publication_date))
    if override is not None:
        day = publication_date - timedelta(days=override.days_before_publication)
        return local_deadline(day, override.submission_time, tz)
    day = publication_date - timedelta(days=schedule.submission_lead_days)
    return local_deadline(day, DEFAULT_SUBMISSION_TIME, tz)


def is_deadline_passed(
    schedule: NewspaperSchedule,
    publication_date: date,
    now: datetime,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> bool:
    return now > get_submission_deadline(schedule, publication_date, tz)
