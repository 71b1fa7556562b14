"""Publication deadline calculator and risk assessment.

Combines a statutory ``PublicationRule`` with an optional newspaper schedule
to produce the editions a hearing notice must run in, the submission cutoff
for each, and how urgent the earliest cutoff is.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo

from loguru import logger

from meeting_compliance.lib.calendar import count_business_days, weeks_before
from meeting_compliance.lib.publication.rules import PublicationRuleRegistry, default_indiana_rules
from meeting_compliance.lib.publication.schedule import (
    DEFAULT_SCAN_DAYS,
    DEFAULT_SUBMISSION_TIME,
    DEFAULT_TIMEZONE,
    find_previous_publication_date,
    get_submission_deadline,
    local_deadline,
)
from meeting_compliance.lib.publication.types import (
    DeadlineCalculation,
    NewspaperSchedule,
    NoticeReason,
    PublicationRule,
    RequiredPublication,
    RiskLevel,
)

RISK_MESSAGES: dict[RiskLevel, str | None] = {
    RiskLevel.LOW: None,
    RiskLevel.MEDIUM: "Publication deadline approaching. Submit notice soon.",
    RiskLevel.HIGH: "Publication deadline is imminent. Submit notice immediately.",
    RiskLevel.IMPOSSIBLE: (
        "Statutory publication deadline cannot be met. Contact the newspaper immediately "
        "to request accommodation and consult your attorney before proceeding."
    ),
}

# More than this many business days left is LOW risk.
LOW_RISK_MIN_BUSINESS_DAYS = 5
# At least this many business days left is MEDIUM risk; fewer is HIGH.
MEDIUM_RISK_MIN_BUSINESS_DAYS = 2

DEFAULT_SUBMISSION_LEAD_DAYS = 3
NO_OBLIGATION_HORIZON = timedelta(days=365)


def assess_risk(deadline: datetime, now: datetime) -> RiskLevel:
    """Classify how urgent ``deadline`` is relative to ``now``.

    IMPOSSIBLE once ``now`` is past the deadline. Otherwise by business days
    remaining: more than 5 is LOW, 2 to 5 is MEDIUM, fewer than 2 is HIGH.
    Business days are counted on local calendar dates in the deadline's zone.
    """
    if now > deadline:
        return RiskLevel.IMPOSSIBLE

    local_now = now.astimezone(deadline.tzinfo) if deadline.tzinfo is not None else now
    remaining = count_business_days(local_now, deadline)
    if remaining > LOW_RISK_MIN_BUSINESS_DAYS:
        return RiskLevel.LOW
    if remaining >= MEDIUM_RISK_MIN_BUSINESS_DAYS:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def risk_message(level: RiskLevel) -> str | None:
    return RISK_MESSAGES[level]


def is_high_risk(level: RiskLevel) -> bool:
    """True for HIGH and IMPOSSIBLE."""
    return level in (RiskLevel.HIGH, RiskLevel.IMPOSSIBLE)


@dataclass(frozen=True)
class SimpleDeadline:
    """Rough plan when no newspaper details are known."""

    latest_publication: date
    estimated_submission: datetime


def calculate_simple_deadline(
    hearing_date: date,
    lead_days: int,
    publications: int = 1,
    consecutive: bool = False,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> SimpleDeadline:
    """Estimate the first publication date and its submission cutoff.

    For consecutive publications the first edition is ``publications - 1``
    weeks before the last. The submission estimate is three days before
    that edition at 17:00.
    """
    latest = hearing_date - timedelta(days=lead_days)
    if consecutive and publications > 1:
        latest = weeks_before(latest, publications - 1)
    submission = local_deadline(latest - timedelta(days=DEFAULT_SUBMISSION_LEAD_DAYS), DEFAULT_SUBMISSION_TIME, tz)
    return SimpleDeadline(latest_publication=latest, estimated_submission=submission)


@dataclass(frozen=True)
class DeadlineCalculator:
    """Computes publication plans against an injected rule registry.

    Attributes:
        registry: Rules keyed by notice reason.
        tz: Local timezone for submission cutoffs.
        default_submission_lead_days: Days before an edition that a notice is
            due when no newspaper schedule is given.
        default_submission_time: ``HH:MM`` cutoff when no schedule is given.
        scan_days: Bound on newspaper date scans.
    """

    registry: PublicationRuleRegistry = field(default_factory=default_indiana_rules)
    tz: tzinfo = DEFAULT_TIMEZONE
    default_submission_lead_days: int = DEFAULT_SUBMISSION_LEAD_DAYS
    default_submission_time: str = DEFAULT_SUBMISSION_TIME
    scan_days: int = DEFAULT_SCAN_DAYS

    def calculate_deadlines(
        self,
        hearing_date: date | datetime,
        notice_reason: NoticeReason | str,
        schedule: NewspaperSchedule | None = None,
        now: datetime | None = None,
    ) -> DeadlineCalculation:
        """Build the publication plan for a hearing.

        Args:
            hearing_date: Hearing day; datetimes are reduced to their local date.
            notice_reason: Notice category selecting the rule.
            schedule: Newspaper schedule; target dates are used as-is without one.
            now: Current time for risk assessment. Defaults to the local now.

        Returns:
            DeadlineCalculation with publications ordered oldest first.

        Raises:
            RuleNotFoundError: If no rule exists for ``notice_reason``.
        """
        rule = self.registry.get(notice_reason)
        hearing = self._as_local_date(hearing_date)
        current = now if now is not None else datetime.now(self.tz)

        if rule.required_publications == 0:
            logger.debug(f"No publication required for {rule.notice_reason}")
            return DeadlineCalculation(
                hearing_date=hearing,
                notice_reason=rule.notice_reason,
                rule=rule,
                required_publications=(),
                earliest_submission_deadline=current + NO_OBLIGATION_HORIZON,
                risk_level=RiskLevel.LOW,
                risk_message=RISK_MESSAGES[RiskLevel.LOW],
                has_publication_obligation=False,
            )

        publications = self.required_publications(hearing, rule, schedule)
        earliest = min(p.submission_deadline for p in publications)
        level = assess_risk(earliest, current)
        logger.debug(
            f"Calculated {len(publications)} publication(s) for {rule.notice_reason} "
            f"hearing on {hearing}; earliest submission {earliest.isoformat()} ({level})"
        )
        return DeadlineCalculation(
            hearing_date=hearing,
            notice_reason=rule.notice_reason,
            rule=rule,
            required_publications=tuple(publications),
            earliest_submission_deadline=earliest,
            risk_level=level,
            risk_message=RISK_MESSAGES[level],
        )

    def required_publications(
        self,
        hearing_date: date,
        rule: PublicationRule,
        schedule: NewspaperSchedule | None = None,
    ) -> list[RequiredPublication]:
        """Editions required by ``rule``, sorted by publication number."""
        latest = hearing_date - timedelta(days=rule.required_lead_days)
        count = rule.required_publications

        if rule.must_be_consecutive and count > 1:
            # Walk back from the last edition; each earlier one is a week before the edition after it.
            dates = {count: self._snap(schedule, latest)}
            for number in range(count - 1, 0, -1):
                dates[number] = self._snap(schedule, weeks_before(dates[number + 1], 1))
        else:
            dates = dict.fromkeys(range(1, count + 1), self._snap(schedule, latest))

        publications = []
        for number in sorted(dates):
            publication_date = dates[number]
            publications.append(
                RequiredPublication(
                    publication_number=number,
                    latest_publication_date=publication_date,
                    submission_deadline=self.submission_deadline(publication_date, schedule),
                    newspaper_schedule_id=schedule.id if schedule is not None else None,
                )
            )
        return publications

    def submission_deadline(self, publication_date: date, schedule: NewspaperSchedule | None = None) -> datetime:
        if schedule is not None:
            return get_submission_deadline(schedule, publication_date, self.tz)
        day = publication_date - timedelta(days=self.default_submission_lead_days)
        return local_deadline(day, self.default_submission_time, self.tz)

    def _snap(self, schedule: NewspaperSchedule | None, target: date) -> date:
        if schedule is None:
            return target
        return find_previous_publication_date(schedule, target, self.scan_days)

    def _as_local_date(self, value: date | datetime) -> date:
        if isinstance(value, datetime):
            return value.astimezone(self.tz).date() if value.tzinfo is not None else value.date()
        return value


def calculate_deadlines(
    hearing_date: date | datetime,
    notice_reason: NoticeReason | str,
    schedule: NewspaperSchedule | None = None,
    now: datetime | None = None,
    registry: PublicationRuleRegistry | None = None,
) -> DeadlineCalculation:
    """Calculate deadlines with default settings and the given (or Indiana) registry."""
    calculator = DeadlineCalculator(registry=registry or default_indiana_rules())
    return calculator.calculate_deadlines(hearing_date, notice_reason, schedule, now)
