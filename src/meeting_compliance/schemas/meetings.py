"""Pydantic v2 schemas for meeting workflow, quorum and voting operations.

Entity schemas mirror the frozen dataclasses in ``meeting_compliance.lib``
field for field; ``to_domain`` builds the dataclass and ``model_validate``
(with ``from_attributes``) reads one back.
"""

from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, Field, model_validator

from meeting_compliance.lib.meetings import (
    ActionResult,
    ActionType,
    Agenda,
    AgendaItem,
    AgendaItemStatus,
    AgendaStatus,
    AttendanceStatus,
    ExecutiveSession,
    ExecutiveSessionStatus,
    GoverningBody,
    Meeting,
    MeetingAction,
    MeetingAttendance,
    MeetingCommand,
    MeetingStatus,
    MemberRecusal,
    Minutes,
    MinutesStatus,
    QuorumType,
    VoteRecord,
    VoteValue,
)

# ---------------------------------------------------------------------------
# Entity schemas
# ---------------------------------------------------------------------------


class GoverningBodySchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    total_seats: int = Field(ge=0)
    quorum_type: QuorumType = QuorumType.MAJORITY
    quorum_number: int | None = Field(default=None, ge=0)
    name: str = ""

    def to_domain(self) -> GoverningBody:
        return GoverningBody(**self.model_dump())


class AttendanceSchema(BaseModel):
    model_config = {"from_attributes": True}

    meeting_id: str
    member_id: str
    status: AttendanceStatus

    def to_domain(self) -> MeetingAttendance:
        return MeetingAttendance(**self.model_dump())


class RecusalSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    member_id: str
    agenda_item_id: str | None = Field(default=None, description="None means the recusal is meeting-wide")
    reason: str | None = None

    def to_domain(self) -> MemberRecusal:
        return MemberRecusal(**self.model_dump())


class VoteRecordSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    member_id: str
    vote: VoteValue
    action_id: str | None = None
    agenda_item_id: str | None = None
    is_recused: bool = False
    recusal_id: str | None = None
    voted_at: AwareDatetime | None = None

    def to_domain(self) -> VoteRecord:
        return VoteRecord(**self.model_dump())


class MeetingActionSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    action_type: ActionType
    title: str = ""
    agenda_item_id: str | None = None
    moved_by: str | None = None
    seconded_by: str | None = None
    result: ActionResult = ActionResult.PENDING

    def to_domain(self) -> MeetingAction:
        return MeetingAction(**self.model_dump())


class ExecutiveSessionSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    status: ExecutiveSessionStatus = ExecutiveSessionStatus.PENDING
    basis_code: str = ""
    statutory_cite: str = "IC 5-14-1.5-6.1"
    subject: str = ""
    pre_cert_statement: str | None = None
    pre_cert_by: str | None = None
    post_cert_statement: str | None = None
    post_cert_by: str | None = None
    actual_start: AwareDatetime | None = None
    actual_end: AwareDatetime | None = None

    def to_domain(self) -> ExecutiveSession:
        return ExecutiveSession(**self.model_dump())


class MinutesSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    status: MinutesStatus = MinutesStatus.DRAFT
    body: str = ""
    approved_at: AwareDatetime | None = None
    approved_by: str | None = None

    def to_domain(self) -> Minutes:
        return Minutes(**self.model_dump())


class AgendaSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    status: AgendaStatus = AgendaStatus.DRAFT
    title: str = ""
    published_at: AwareDatetime | None = None

    def to_domain(self) -> Agenda:
        return Agenda(**self.model_dump())


class AgendaItemSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    meeting_id: str
    title: str
    status: AgendaItemStatus = AgendaItemStatus.PENDING
    order_index: int = 0
    requires_vote: bool = False

    def to_domain(self) -> AgendaItem:
        return AgendaItem(**self.model_dump())


class MeetingSchema(BaseModel):
    """A meeting with the records it owns."""

    model_config = {"from_attributes": True}

    id: str
    status: MeetingStatus
    scheduled_start: AwareDatetime
    is_emergency: bool = False
    governing_body_id: str | None = None
    notice_posted_at: AwareDatetime | None = None
    executive_sessions: list[ExecutiveSessionSchema] = Field(default_factory=list)
    recusals: list[RecusalSchema] = Field(default_factory=list)
    attendance: list[AttendanceSchema] = Field(default_factory=list)
    actions: list[MeetingActionSchema] = Field(default_factory=list)
    minutes: MinutesSchema | None = None
    cancelled_at: AwareDatetime | None = None
    cancellation_reason: str | None = None
    adjourned_at: AwareDatetime | None = None

    def to_domain(self) -> Meeting:
        return Meeting(
            id=self.id,
            status=self.status,
            scheduled_start=self.scheduled_start,
            is_emergency=self.is_emergency,
            governing_body_id=self.governing_body_id,
            notice_posted_at=self.notice_posted_at,
            executive_sessions=tuple(s.to_domain() for s in self.executive_sessions),
            recusals=tuple(r.to_domain() for r in self.recusals),
            attendance=tuple(a.to_domain() for a in self.attendance),
            actions=tuple(a.to_domain() for a in self.actions),
            minutes=self.minutes.to_domain() if self.minutes else None,
            cancelled_at=self.cancelled_at,
            cancellation_reason=self.cancellation_reason,
            adjourned_at=self.adjourned_at,
        )


# ---------------------------------------------------------------------------
# Quorum and vote schemas
# ---------------------------------------------------------------------------


class QuorumRequest(BaseModel):
    body: GoverningBodySchema
    attendance: list[AttendanceSchema] = Field(default_factory=list)
    recusals: list[RecusalSchema] = Field(default_factory=list)
    agenda_item_id: str | None = None


class QuorumResponse(BaseModel):
    model_config = {"from_attributes": True}

    is_quorum_met: bool
    total_members: int
    present_members: int
    recused_members: int
    required_for_quorum: int
    eligible_voters: int


class TallyRequest(BaseModel):
    votes: list[VoteRecordSchema]
    recusals: list[RecusalSchema] = Field(default_factory=list)
    pass_threshold: float = Field(default=0.5, ge=0, lt=1)


class TallyResponse(BaseModel):
    model_config = {"from_attributes": True}

    yea: int
    nay: int
    abstain: int
    absent: int
    recused: int
    total: int
    passed: bool
    margin: int
    super_majority_passed: bool = False
    summary: str = ""


class RecordVoteRequest(BaseModel):
    """Inputs for recording one member's vote on an action."""

    meeting: MeetingSchema
    body: GoverningBodySchema
    action_id: str
    member_id: str
    vote: VoteValue
    vote_id: str | None = None
    now: AwareDatetime | None = None


# ---------------------------------------------------------------------------
# Transition schemas
# ---------------------------------------------------------------------------


class TransitionEntity(StrEnum):
    MEETING = "meeting"
    AGENDA = "agenda"
    AGENDA_ITEM = "agenda-item"
    EXECUTIVE_SESSION = "executive-session"
    MINUTES = "minutes"


class TransitionCheckRequest(BaseModel):
    from_status: str
    to_status: str


class TransitionCheckResponse(BaseModel):
    entity: TransitionEntity
    from_status: str
    to_status: str
    allowed: bool


class AllowedTransitionsResponse(BaseModel):
    entity: TransitionEntity
    status: str
    allowed_targets: list[str]
    is_terminal: bool
    available_commands: list[MeetingCommand] = Field(default_factory=list)


class MeetingTransitionRequest(BaseModel):
    """Move a meeting either to an explicit status or by a lifecycle verb."""

    meeting: MeetingSchema
    to_status: MeetingStatus | None = None
    command: MeetingCommand | None = None
    cancellation_reason: str | None = None
    now: AwareDatetime | None = None

    @model_validator(mode="after")
    def exactly_one_target(self) -> "MeetingTransitionRequest":
        if (self.to_status is None) == (self.command is None):
            msg = "Provide exactly one of to_status or command"
            raise ValueError(msg)
        return self


class ExecutiveSessionTransitionRequest(BaseModel):
    session: ExecutiveSessionSchema
    to_status: ExecutiveSessionStatus
    now: AwareDatetime | None = None


class MinutesTransitionRequest(BaseModel):
    minutes: MinutesSchema
    to_status: MinutesStatus
    executive_sessions: list[ExecutiveSessionSchema] = Field(default_factory=list)
    approved_by: str | None = None
    now: AwareDatetime | None = None


class AgendaTransitionRequest(BaseModel):
    agenda: AgendaSchema
    to_status: AgendaStatus
    now: AwareDatetime | None = None


class AgendaItemTransitionRequest(BaseModel):
    item: AgendaItemSchema
    to_status: AgendaItemStatus


# ---------------------------------------------------------------------------
# Compliance check schemas
# ---------------------------------------------------------------------------


class NoticeCheckRequest(BaseModel):
    meeting: MeetingSchema
    posted_at: AwareDatetime | None = Field(default=None, description="Defaults to the meeting's notice_posted_at")


class ScheduleCheckRequest(BaseModel):
    meeting: MeetingSchema
    now: AwareDatetime | None = None


class ExecutiveSessionsRequest(BaseModel):
    executive_sessions: list[ExecutiveSessionSchema]


class RecusalCheckRequest(BaseModel):
    member_id: str
    recusals: list[RecusalSchema]
    agenda_item_id: str | None = None
