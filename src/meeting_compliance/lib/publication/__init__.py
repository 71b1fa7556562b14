"""Publication planning library: rules, newspaper schedules and deadlines.

Public API:
    - ``NoticeReason``, ``NoticeChannel``, ``RiskLevel``, ``DayOfWeek``
    - ``PublicationRule``: Statutory requirement for one notice reason
    - ``PublicationRuleRegistry``: Immutable rule lookup with ``with_rule`` overrides
    - ``default_indiana_rules``: Registry seeded with Indiana rules
    - ``NewspaperSchedule`` / ``SubmissionDeadlineRule``: Newspaper cadence
    - ``find_next_publication_date`` / ``find_previous_publication_date``
    - ``get_submission_deadline`` / ``is_deadline_passed``
    - ``DeadlineCalculator`` / ``calculate_deadlines``: Publication plan for a hearing
    - ``assess_risk``, ``risk_message``, ``is_high_risk``, ``calculate_simple_deadline``
"""

from meeting_compliance.lib.publication.deadlines import (
    RISK_MESSAGES,
    DeadlineCalculator,
    SimpleDeadline,
    assess_risk,
    calculate_deadlines,
    calculate_simple_deadline,
    is_high_risk,
    risk_message,
)
from meeting_compliance.lib.publication.rules import (
    INDIANA_PUBLICATION_RULES,
    PublicationRuleRegistry,
    default_indiana_rules,
)
from meeting_compliance.lib.publication.schedule import (
    DEFAULT_TIMEZONE,
    find_next_publication_date,
    find_previous_publication_date,
    get_submission_deadline,
    is_deadline_passed,
    is_publication_day,
)
from meeting_compliance.lib.publication.types import (
    DayOfWeek,
    DeadlineCalculation,
    NewspaperSchedule,
    NoticeChannel,
    NoticeReason,
    PublicationRule,
    RequiredPublication,
    RiskLevel,
    SubmissionDeadlineRule,
)

__all__ = [
    "DEFAULT_TIMEZONE",
    "INDIANA_PUBLICATION_RULES",
    "RISK_MESSAGES",
    "DayOfWeek",
    "DeadlineCalculation",
    "DeadlineCalculator",
    "NewspaperSchedule",
    "NoticeChannel",
    "NoticeReason",
    "PublicationRule",
    "PublicationRuleRegistry",
    "RequiredPublication",
    "RiskLevel",
    "SimpleDeadline",
    "SubmissionDeadlineRule",
    "assess_risk",
    "calculate_deadlines",
    "calculate_simple_deadline",
    "default_indiana_rules",
    "find_next_publication_date",
    "find_previous_publication_date",
    "get_submission_deadline",
    "is_deadline_passed",
    "is_high_risk",
    "is_publication_day",
    "risk_message",
]
