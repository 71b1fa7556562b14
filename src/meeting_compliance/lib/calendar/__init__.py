"""Business-day calendar library.

Public API:
    - ``add_business_days``: Advance a date by N weekdays
    - ``count_business_days``: Count weekdays between two dates
    - ``is_business_day``: Monday-Friday check
    - ``weeks_before``: Step back whole weeks from a date
"""

from meeting_compliance.lib.calendar.business_days import (
    add_business_days,
    count_business_days,
    is_business_day,
    weeks_before,
)

__all__ = [
    "add_business_days",
    "count_business_days",
    "is_business_day",
    "weeks_before",
]
