"""Data types for statutory publication planning.

Rules, newspaper schedules and the derived deadline calculation are frozen
dataclasses. Calendar days are ``date``; submission deadlines are
timezone-aware ``datetime`` values in the municipality's local zone.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

_HH_MM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class NoticeReason(StrEnum):
    """Statutory category of a notice; selects the publication rule."""

    OPEN_DOOR_MEETING = "OPEN_DOOR_MEETING"
    GENERAL_PUBLIC_HEARING = "GENERAL_PUBLIC_HEARING"
    ZONING_MAP_AMENDMENT = "ZONING_MAP_AMENDMENT"
    VARIANCE_HEARING = "VARIANCE_HEARING"
    BOND_HEARING = "BOND_HEARING"
    BUDGET_HEARING = "BUDGET_HEARING"
    ANNEXATION_HEARING = "ANNEXATION_HEARING"
    TAX_ABATEMENT_HEARING = "TAX_ABATEMENT_HEARING"
    ECONOMIC_DEVELOPMENT_HEARING = "ECONOMIC_DEVELOPMENT_HEARING"


class NoticeChannel(StrEnum):
    """Where a notice must appear."""

    NEWSPAPER = "NEWSPAPER"
    WEBSITE = "WEBSITE"
    PHYSICAL_POSTING = "PHYSICAL_POSTING"
    EMAIL_LIST = "EMAIL_LIST"
    SOCIAL_MEDIA = "SOCIAL_MEDIA"


class RiskLevel(StrEnum):
    """How close the earliest submission deadline is."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    IMPOSSIBLE = "IMPOSSIBLE"


class DayOfWeek(StrEnum):
    """Named weekday, ordered to match ``date.weekday()``."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def weekday(self) -> int:
        return list(DayOfWeek).index(self)

    @classmethod
    def of(cls, day: date) -> "DayOfWeek":
        return list(cls)[day.weekday()]


@dataclass(frozen=True)
class PublicationRule:
    """Statutory publication requirement for one notice reason.

    Attributes:
        notice_reason: The notice category this rule governs.
        required_publications: Number of newspaper publications (0 = none).
        required_lead_days: Calendar days between the last publication and
            the hearing.
        must_be_consecutive: Publications must fall in consecutive weeks.
        required_channels: Channels the notice must appear in.
        statutory_cite: Statute establishing the requirement.
        description: Human-readable summary.
    """

    notice_reason: NoticeReason
    required_publications: int
    required_lead_days: int
    must_be_consecutive: bool = False
    required_channels: tuple[NoticeChannel, ...] = (NoticeChannel.NEWSPAPER,)
    statutory_cite: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if self.required_publications < 0:
            msg = "required_publications must be non-negative"
            raise ValueError(msg)
        if self.required_lead_days < 0:
            msg = "required_lead_days must be non-negative"
            raise ValueError(msg)


@dataclass(frozen=True)
class SubmissionDeadlineRule:
    """Per-weekday submission cutoff published by a newspaper.

    Attributes:
        publication_day: Weekday of the edition this cutoff applies to.
        days_before_publication: Calendar days before the edition.
        submission_time: Local cutoff time as ``HH:MM`` (24 hour).
    """

    publication_day: DayOfWeek
    days_before_publication: int
    submission_time: str = "17:00"

    def __post_init__(self) -> None:
        if not _HH_MM.match(self.submission_time):
            msg = f"submission_time must be HH:MM, got {self.submission_time!r}"
            raise ValueError(msg)
        if self.days_before_publication < 0:
            msg = "days_before_publication must be non-negative"
            raise ValueError(msg)


@dataclass(frozen=True)
class NewspaperSchedule:
    """A newspaper's publication cadence and submission cutoffs."""

    publication_days: frozenset[DayOfWeek]
    submission_lead_days: int = 3
    holiday_closures: frozenset[date] = field(default_factory=frozenset)
    submission_deadlines: tuple[SubmissionDeadlineRule, ...] = ()
    id: str | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if self.submission_lead_days < 0:
            msg = "submission_lead_days must be non-negative"
            raise ValueError(msg)

    def deadline_rule_for(self, publication_day: DayOfWeek) -> SubmissionDeadlineRule | None:
        return next((d for d in self.submission_deadlines if d.publication_day == publication_day), None)


@dataclass(frozen=True)
class RequiredPublication:
    """One publication the notice must appear in."""

    publication_number: int
    latest_publication_date: date
    submission_deadline: datetime
    newspaper_schedule_id: str | None = None


@dataclass(frozen=True)
class DeadlineCalculation:
    """Derived publication plan for a hearing. Never persisted.

    When the rule requires no publications, ``required_publications`` is
    empty, ``has_publication_obligation`` is False and
    ``earliest_submission_deadline`` is a sentinel one year after ``now``.
    """

    hearing_date: date
    notice_reason: NoticeReason
    rule: PublicationRule
    required_publications: tuple[RequiredPublication, ...]
    earliest_submission_deadline: datetime
    risk_level: RiskLevel
    risk_message: str | None
    has_publication_obligation: bool = True
