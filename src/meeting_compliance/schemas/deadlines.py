"""Pydantic v2 schemas for publication deadline operations."""

from datetime import date

from pydantic import AwareDatetime, BaseModel, Field

from meeting_compliance.lib.publication import (
    DayOfWeek,
    NewspaperSchedule,
    NoticeChannel,
    NoticeReason,
    RiskLevel,
    SubmissionDeadlineRule,
)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SubmissionDeadlineSchema(BaseModel):
    """Per-weekday submission cutoff."""

    publication_day: DayOfWeek
    days_before_publication: int = Field(ge=0)
    submission_time: str = Field(default="17:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


class NewspaperScheduleSchema(BaseModel):
    """A newspaper's publication cadence."""

    model_config = {"from_attributes": True}

    id: str | None = None
    name: str = ""
    publication_days: list[DayOfWeek] = Field(min_length=1)
    submission_lead_days: int = Field(default=3, ge=0)
    holiday_closures: list[date] = Field(default_factory=list)
    submission_deadlines: list[SubmissionDeadlineSchema] = Field(default_factory=list)

    def to_domain(self) -> NewspaperSchedule:
        return NewspaperSchedule(
            id=self.id,
            name=self.name,
            publication_days=frozenset(self.publication_days),
            submission_lead_days=self.submission_lead_days,
            holiday_closures=frozenset(self.holiday_closures),
            submission_deadlines=tuple(
                SubmissionDeadlineRule(d.publication_day, d.days_before_publication, d.submission_time)
                for d in self.submission_deadlines
            ),
        )


class DeadlineRequest(BaseModel):
    """Input for a deadline calculation."""

    hearing_date: date
    notice_reason: NoticeReason
    schedule: NewspaperScheduleSchema | None = None
    now: AwareDatetime | None = Field(default=None, description="Evaluation time; defaults to the current time")


class RiskRequest(BaseModel):
    deadline: AwareDatetime
    now: AwareDatetime | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PublicationRuleResponse(BaseModel):
    """Statutory publication rule."""

    model_config = {"from_attributes": True}

    notice_reason: NoticeReason
    required_publications: int
    required_lead_days: int
    must_be_consecutive: bool
    required_channels: list[NoticeChannel]
    statutory_cite: str
    description: str


class RequiredPublicationResponse(BaseModel):
    model_config = {"from_attributes": True}

    publication_number: int
    latest_publication_date: date
    submission_deadline: AwareDatetime
    newspaper_schedule_id: str | None = None


class DeadlineCalculationResponse(BaseModel):
    """Publication plan for a hearing."""

    model_config = {"from_attributes": True}

    hearing_date: date
    notice_reason: NoticeReason
    rule: PublicationRuleResponse
    required_publications: list[RequiredPublicationResponse]
    earliest_submission_deadline: AwareDatetime
    risk_level: RiskLevel
    risk_message: str | None = None
    has_publication_obligation: bool


class RiskResponse(BaseModel):
    risk_level: RiskLevel
    risk_message: str | None = None
    is_high_risk: bool
