"""Data types for governed meeting entities.

Every entity is a frozen dataclass. Status changes and edits produce new
instances through ``dataclasses.replace``; the persistence layer owns the
canonical copy and the core never holds on to references.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from meeting_compliance.lib.meetings.constants import EXEC_SESSION_CITE

if TYPE_CHECKING:
    from datetime import datetime


class MeetingStatus(StrEnum):
    """Meeting lifecycle status."""

    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    NOTICED = "NOTICED"
    IN_PROGRESS = "IN_PROGRESS"
    RECESSED = "RECESSED"
    ADJOURNED = "ADJOURNED"
    CANCELLED = "CANCELLED"


class AgendaStatus(StrEnum):
    """Agenda publication workflow status."""

    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    PUBLISHED = "PUBLISHED"
    AMENDED = "AMENDED"


class AgendaItemStatus(StrEnum):
    """Status of a single agenda item during a meeting."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DISCUSSED = "DISCUSSED"
    TABLED = "TABLED"
    WITHDRAWN = "WITHDRAWN"
    ACTED_UPON = "ACTED_UPON"


class ExecutiveSessionStatus(StrEnum):
    """Executive session lifecycle per IC 5-14-1.5-6.1."""

    PENDING = "PENDING"
    IN_SESSION = "IN_SESSION"
    ENDED = "ENDED"
    CERTIFIED = "CERTIFIED"
    CANCELLED = "CANCELLED"


class MinutesStatus(StrEnum):
    """Minutes approval workflow status per IC 5-14-1.5-4."""

    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    AMENDED = "AMENDED"


class QuorumType(StrEnum):
    """How a governing body's quorum is computed."""

    MAJORITY = "MAJORITY"
    TWO_THIRDS = "TWO_THIRDS"
    SPECIFIC = "SPECIFIC"


class AttendanceStatus(StrEnum):
    """Member attendance status for a meeting."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"
    LATE = "LATE"
    LEFT_EARLY = "LEFT_EARLY"


class VoteValue(StrEnum):
    """A member's recorded vote."""

    YEA = "YEA"
    NAY = "NAY"
    ABSTAIN = "ABSTAIN"
    ABSENT = "ABSENT"
    RECUSED = "RECUSED"


class ActionType(StrEnum):
    """Kind of formal action taken by the body."""

    MOTION = "MOTION"
    RESOLUTION = "RESOLUTION"
    ORDINANCE = "ORDINANCE"
    AMENDMENT = "AMENDMENT"
    NOMINATION = "NOMINATION"
    PROCEDURAL = "PROCEDURAL"


class ActionResult(StrEnum):
    """Outcome of a formal action."""

    PENDING = "PENDING"
    PASSED = "PASSED"
    FAILED = "FAILED"
    TABLED = "TABLED"
    WITHDRAWN = "WITHDRAWN"
    DIED_FOR_LACK_OF_SECOND = "DIED_FOR_LACK_OF_SECOND"


# Attendance statuses that count toward quorum.
PRESENT_STATUSES: frozenset[AttendanceStatus] = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


@dataclass(frozen=True)
class TenantContext:
    """Caller identity used to scope stores and stamp audit fields.

    Attributes:
        tenant_id: Owning tenant (municipality) identifier.
        user_id: Acting user, when known.
    """

    tenant_id: str
    user_id: str | None = None


@dataclass(frozen=True)
class GoverningBody:
    """A council, board or commission with a fixed number of seats."""

    id: str
    total_seats: int
    quorum_type: QuorumType = QuorumType.MAJORITY
    quorum_number: int | None = None
    name: str = ""
    tenant_id: str = ""
    version: int = 1

    def __post_init__(self) -> None:
        if self.total_seats < 0:
            msg = "total_seats must be non-negative"
            raise ValueError(msg)


@dataclass(frozen=True)
class MeetingAttendance:
    """Attendance of one member at one meeting."""

    meeting_id: str
    member_id: str
    status: AttendanceStatus


@dataclass(frozen=True)
class MemberRecusal:
    """A member's disclosed conflict of interest.

    Attributes:
        id: Recusal identifier.
        meeting_id: Meeting the recusal was disclosed in.
        member_id: The recused member.
        agenda_item_id: Item the recusal applies to; ``None`` means meeting-wide.
        reason: Optional disclosure text.
    """

    id: str
    meeting_id: str
    member_id: str
    agenda_item_id: str | None = None
    reason: str | None = None

    @property
    def is_meeting_wide(self) -> bool:
        return self.agenda_item_id is None

    def applies_to(self, member_id: str, agenda_item_id: str | None) -> bool:
        """True when this recusal disqualifies ``member_id`` from voting on the item."""
        if self.member_id != member_id:
            return False
        return self.is_meeting_wide or self.agenda_item_id == agenda_item_id


@dataclass(frozen=True)
class VoteRecord:
    """A single member's vote on an action. Immutable once created."""

    id: str
    meeting_id: str
    member_id: str
    vote: VoteValue
    action_id: str | None = None
    agenda_item_id: str | None = None
    is_recused: bool = False
    recusal_id: str | None = None
    voted_at: datetime | None = None
    tenant_id: str = ""
    version: int = 1


@dataclass(frozen=True)
class MeetingAction:
    """A motion, resolution or other formal action under consideration."""

    id: str
    meeting_id: str
    action_type: ActionType
    title: str = ""
    agenda_item_id: str | None = None
    moved_by: str | None = None
    seconded_by: str | None = None
    result: ActionResult = ActionResult.PENDING


@dataclass(frozen=True)
class ExecutiveSession:
    """A closed portion of a meeting held under an enumerated statutory basis."""

    id: str
    meeting_id: str
    status: ExecutiveSessionStatus = ExecutiveSessionStatus.PENDING
    basis_code: str = ""
    statutory_cite: str = EXEC_SESSION_CITE
    subject: str = ""
    pre_cert_statement: str | None = None
    pre_cert_by: str | None = None
    post_cert_statement: str | None = None
    post_cert_by: str | None = None
    actual_start: datetime | None = None
    actual_end: datetime | None = None
    tenant_id: str = ""
    version: int = 1


@dataclass(frozen=True)
class Minutes:
    """Meeting minutes moving through the approval workflow."""

    id: str
    meeting_id: str
    status: MinutesStatus = MinutesStatus.DRAFT
    body: str = ""
    approved_at: datetime | None = None
    approved_by: str | None = None
    tenant_id: str = ""
    version: int = 1


@dataclass(frozen=True)
class Agenda:
    """The published agenda of a meeting."""

    id: str
    meeting_id: str
    status: AgendaStatus = AgendaStatus.DRAFT
    title: str = ""
    published_at: datetime | None = None
    tenant_id: str = ""
    version: int = 1


@dataclass(frozen=True)
class AgendaItem:
    """One item of business on an agenda."""

    id: str
    meeting_id: str
    title: str
    status: AgendaItemStatus = AgendaItemStatus.PENDING
    order_index: int = 0
    requires_vote: bool = False
    tenant_id: str = ""
    version: int = 1


@dataclass(frozen=True)
class Meeting:
    """A meeting of a governing body together with its owned records.

    Attributes:
        id: Meeting identifier.
        status: Current lifecycle status.
        scheduled_start: Scheduled start (timezone-aware).
        is_emergency: Emergency meetings are exempt from advance notice.
        notice_posted_at: When public notice was posted, if it has been.
        executive_sessions: Executive sessions held or planned in the meeting.
        recusals: Disclosed recusals.
        attendance: Attendance records.
        actions: Formal actions taken.
        minutes: Minutes, once drafted.
    """

    id: str
    status: MeetingStatus
    scheduled_start: datetime
    is_emergency: bool = False
    governing_body_id: str | None = None
    notice_posted_at: datetime | None = None
    executive_sessions: tuple[ExecutiveSession, ...] = ()
    recusals: tuple[MemberRecusal, ...] = ()
    attendance: tuple[MeetingAttendance, ...] = ()
    actions: tuple[MeetingAction, ...] = ()
    minutes: Minutes | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    adjourned_at: datetime | None = None
    tenant_id: str = ""
    version: int = 1
