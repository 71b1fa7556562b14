"""Statutory compliance gates for Indiana public meetings.

Checks come in two forms. The ``validate_*`` functions never raise; they
return a ``ValidationResult`` that callers can show to clerks as-is. The
``transition_*`` functions and ``record_vote`` are the mutating operations:
they validate the transition table plus every statutory gate that applies,
raise on the first failure, and otherwise return a new entity. Inputs are
never modified.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from meeting_compliance.lib.meetings.constants import (
    CONFLICT_OF_INTEREST_CITE,
    EXEC_SESSION_CITE,
    OPEN_DOOR_NOTICE_CITE,
    OPEN_DOOR_NOTICE_HOURS,
    MeetingsErrorCode,
)
from meeting_compliance.lib.meetings.errors import ComplianceError
from meeting_compliance.lib.meetings.quorum import QuorumResult, calculate_quorum
from meeting_compliance.lib.meetings.state_machines import (
    AGENDA_ITEM_STATE_MACHINE,
    AGENDA_STATE_MACHINE,
    EXECUTIVE_SESSION_STATE_MACHINE,
    MEETING_STATE_MACHINE,
    MINUTES_STATE_MACHINE,
)
from meeting_compliance.lib.meetings.types import (
    ActionType,
    Agenda,
    AgendaItem,
    AgendaItemStatus,
    AgendaStatus,
    ExecutiveSession,
    ExecutiveSessionStatus,
    GoverningBody,
    Meeting,
    MeetingAction,
    MeetingStatus,
    MemberRecusal,
    Minutes,
    MinutesStatus,
    VoteRecord,
    VoteValue,
)

_SECONDS_PER_HOUR = 3600

# Sessions in these statuses satisfy the certification gate.
_CLOSED_SESSION_STATUSES = frozenset({ExecutiveSessionStatus.CERTIFIED, ExecutiveSessionStatus.CANCELLED})


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of an advisory compliance check.

    Attributes:
        valid: Whether the check passed.
        error_code: Machine-readable code when the check failed.
        message: Human-readable explanation when the check failed.
        statutory_cite: Statute the check enforces, when applicable.
        details: Structured data supporting the message.
    """

    valid: bool
    error_code: MeetingsErrorCode | None = None
    message: str | None = None
    statutory_cite: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(
        cls,
        error_code: MeetingsErrorCode,
        message: str,
        statutory_cite: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> "ValidationResult":
        return cls(
            valid=False,
            error_code=error_code,
            message=message,
            statutory_cite=statutory_cite,
            details=details or {},
        )


def assert_compliance(result: ValidationResult) -> None:
    """Raise ``ComplianceError`` when ``result`` is a failure."""
    if not result.valid:
        raise ComplianceError(
            result.error_code or MeetingsErrorCode.INVALID_TRANSITION,
            result.message or f"Compliance violation: {result.error_code}",
            statutory_cite=result.statutory_cite,
            details=result.details,
        )


def elapsed_hours(later: datetime, earlier: datetime) -> int:
    """Whole elapsed hours between two instants, rounded down."""
    return math.floor((later - earlier).total_seconds() / _SECONDS_PER_HOUR)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(UTC)


# -- Open Door Law notice (IC 5-14-1.5-5) ------------------------------------


def validate_open_door_notice(
    meeting: Meeting,
    posted_at: datetime,
    notice_hours: int = OPEN_DOOR_NOTICE_HOURS,
) -> ValidationResult:
    """Check that notice was posted at least ``notice_hours`` before the meeting.

    Emergency meetings are exempt. Hours are measured as absolute elapsed
    time, so DST changes between posting and the meeting do not matter.
    """
    if meeting.is_emergency:
        return ValidationResult.ok()

    actual = elapsed_hours(meeting.scheduled_start, posted_at)
    if actual < notice_hours:
        return ValidationResult.fail(
            MeetingsErrorCode.INSUFFICIENT_NOTICE,
            f"Open Door Law requires {notice_hours} hours notice. Current: {actual} hours.",
            statutory_cite=OPEN_DOOR_NOTICE_CITE,
            details={
                "required_hours": notice_hours,
                "actual_hours": actual,
                "meeting_start": meeting.scheduled_start.isoformat(),
                "notice_posted": posted_at.isoformat(),
            },
        )
    return ValidationResult.ok()


def validate_meeting_schedule(
    meeting: Meeting,
    now: datetime | None = None,
    notice_hours: int = OPEN_DOOR_NOTICE_HOURS,
) -> ValidationResult:
    """Check there is still time to give notice before the scheduled start."""
    if meeting.is_emergency:
        return ValidationResult.ok()

    available = elapsed_hours(meeting.scheduled_start, _now(now))
    if available < notice_hours:
        return ValidationResult.fail(
            MeetingsErrorCode.INSUFFICIENT_NOTICE,
            f"Cannot schedule meeting without sufficient notice time. "
            f"Requires {notice_hours} hours, only {available} hours until meeting.",
            statutory_cite=OPEN_DOOR_NOTICE_CITE,
            details={"required_hours": notice_hours, "available_hours": available},
        )
    return ValidationResult.ok()


# -- Executive sessions (IC 5-14-1.5-6.1) ------------------------------------


def validate_vote_not_in_exec_session(executive_sessions: Iterable[ExecutiveSession]) -> ValidationResult:
    """Block all votes in a meeting while any executive session is IN_SESSION."""
    active = next((s for s in executive_sessions if s.status == ExecutiveSessionStatus.IN_SESSION), None)
    if active is not None:
        return ValidationResult.fail(
            MeetingsErrorCode.VOTE_DURING_EXEC_SESSION,
            "Cannot record vote while in executive session",
            statutory_cite=EXEC_SESSION_CITE,
            details={"active_session_id": active.id, "session_basis": active.basis_code},
        )
    return ValidationResult.ok()


def validate_all_exec_sessions_certified(executive_sessions: Iterable[ExecutiveSession]) -> ValidationResult:
    """Every session must be CERTIFIED or CANCELLED."""
    uncertified = [s for s in executive_sessions if s.status not in _CLOSED_SESSION_STATUSES]
    if uncertified:
        return ValidationResult.fail(
            MeetingsErrorCode.EXEC_SESSION_UNCERTIFIED,
            "Cannot proceed without all executive session certifications",
            statutory_cite=EXEC_SESSION_CITE,
            details={
                "uncertified_sessions": [
                    {"id": s.id, "status": str(s.status), "basis_code": s.basis_code} for s in uncertified
                ]
            },
        )
    return ValidationResult.ok()


def validate_exec_session_pre_cert(session: ExecutiveSession) -> ValidationResult:
    """A session needs a pre-certification statement and signer before it starts."""
    if not session.pre_cert_statement or not session.pre_cert_by:
        return ValidationResult.fail(
            MeetingsErrorCode.EXEC_SESSION_UNCERTIFIED,
            "Executive session requires pre-certification before entering",
            statutory_cite=EXEC_SESSION_CITE,
            details={"session_id": session.id},
        )
    return ValidationResult.ok()


def validate_exec_session_post_cert(session: ExecutiveSession) -> ValidationResult:
    """An ENDED session needs a post-certification statement and signer."""
    if session.status == ExecutiveSessionStatus.ENDED and (
        not session.post_cert_statement or not session.post_cert_by
    ):
        return ValidationResult.fail(
            MeetingsErrorCode.EXEC_SESSION_UNCERTIFIED,
            "Executive session requires post-certification statement confirming "
            "no unauthorized matters were discussed",
            statutory_cite=EXEC_SESSION_CITE,
            details={"session_id": session.id},
        )
    return ValidationResult.ok()


# -- Quorum, recusal and actions ----------------------------------------------


def validate_quorum(quorum: QuorumResult) -> ValidationResult:
    if not quorum.is_quorum_met:
        return ValidationResult.fail(
            MeetingsErrorCode.NO_QUORUM,
            f"Quorum not present. Required: {quorum.required_for_quorum}, "
            f"Present: {quorum.present_members}, Eligible (minus recused): {quorum.eligible_voters}",
            details={
                "is_quorum_met": quorum.is_quorum_met,
                "total_members": quorum.total_members,
                "present_members": quorum.present_members,
                "recused_members": quorum.recused_members,
                "required_for_quorum": quorum.required_for_quorum,
                "eligible_voters": quorum.eligible_voters,
            },
        )
    return ValidationResult.ok()


def find_recusal(
    member_id: str,
    recusals: Iterable[MemberRecusal],
    agenda_item_id: str | None = None,
) -> MemberRecusal | None:
    """The first recusal disqualifying ``member_id`` from the item, if any."""
    return next((r for r in recusals if r.applies_to(member_id, agenda_item_id)), None)


def validate_not_recused(
    member_id: str,
    recusals: Iterable[MemberRecusal],
    agenda_item_id: str | None = None,
) -> ValidationResult:
    """Advisory form of recusal enforcement; ``apply_recusal`` is the mutating form."""
    recusal = find_recusal(member_id, recusals, agenda_item_id)
    if recusal is not None:
        return ValidationResult.fail(
            MeetingsErrorCode.RECUSED_MEMBER_VOTE,
            "Recused member cannot vote on this item",
            statutory_cite=CONFLICT_OF_INTEREST_CITE,
            details={"member_id": member_id, "agenda_item_id": agenda_item_id, "recusal_id": recusal.id},
        )
    return ValidationResult.ok()


def filter_recused_votes(
    votes: Iterable[VoteRecord],
    recusals: Iterable[MemberRecusal],
    agenda_item_id: str | None = None,
) -> list[VoteRecord]:
    """Drop votes cast by members recused from the item."""
    recusals = list(recusals)
    return [v for v in votes if find_recusal(v.member_id, recusals, agenda_item_id) is None]


def apply_recusal(
    vote: VoteRecord,
    recusals: Iterable[MemberRecusal],
    agenda_item_id: str | None = None,
) -> VoteRecord:
    """Force ``vote`` to RECUSED when its member has a matching recusal.

    The item defaults to the vote's own ``agenda_item_id``. Votes without a
    matching recusal are returned unchanged.
    """
    item_id = agenda_item_id if agenda_item_id is not None else vote.agenda_item_id
    recusal = find_recusal(vote.member_id, recusals, item_id)
    if recusal is None:
        return vote
    return replace(vote, vote=VoteValue.RECUSED, is_recused=True, recusal_id=recusal.id)


def validate_action_has_second(action: MeetingAction) -> ValidationResult:
    """A MOTION cannot go to a vote without a seconder."""
    if action.action_type == ActionType.MOTION and not action.seconded_by:
        return ValidationResult.fail(
            MeetingsErrorCode.ACTION_REQUIRES_SECOND,
            "Motion requires a second before voting",
            details={"action_id": action.id, "action_type": str(action.action_type)},
        )
    return ValidationResult.ok()


def validate_minutes_approval(meeting: Meeting) -> ValidationResult:
    return validate_all_exec_sessions_certified(meeting.executive_sessions)


# -- Gated transitions ---------------------------------------------------------


def transition_meeting(
    meeting: Meeting,
    to_status: MeetingStatus,
    now: datetime | None = None,
    notice_hours: int = OPEN_DOOR_NOTICE_HOURS,
    cancellation_reason: str | None = None,
) -> Meeting:
    """Move a meeting to ``to_status``, enforcing the statutory gates.

    - DRAFT -> SCHEDULED requires enough time left to give notice.
    - -> NOTICED stamps ``notice_posted_at`` (if unset) and requires it to
      satisfy the Open Door notice period.
    - -> ADJOURNED requires every executive session to be certified.

    Raises:
        InvalidTransitionError: If the table forbids the change.
        ComplianceError: If a statutory gate fails.
    """
    MEETING_STATE_MACHINE.validate_transition(meeting.status, to_status)
    current = _now(now)
    changes: dict[str, Any] = {"status": to_status}

    if meeting.status == MeetingStatus.DRAFT and to_status == MeetingStatus.SCHEDULED:
        assert_compliance(validate_meeting_schedule(meeting, current, notice_hours))
    elif to_status == MeetingStatus.NOTICED:
        posted_at = meeting.notice_posted_at or current
        assert_compliance(validate_open_door_notice(meeting, posted_at, notice_hours))
        changes["notice_posted_at"] = posted_at
    elif to_status == MeetingStatus.ADJOURNED:
        assert_compliance(validate_all_exec_sessions_certified(meeting.executive_sessions))
        changes["adjourned_at"] = current
    elif to_status == MeetingStatus.CANCELLED:
        changes["cancelled_at"] = current
        changes["cancellation_reason"] = cancellation_reason
    elif to_status == MeetingStatus.DRAFT and meeting.status == MeetingStatus.CANCELLED:
        changes["cancelled_at"] = None
        changes["cancellation_reason"] = None

    return replace(meeting, **changes)


def transition_minutes(
    minutes: Minutes,
    to_status: MinutesStatus,
    executive_sessions: Sequence[ExecutiveSession] = (),
    now: datetime | None = None,
    approved_by: str | None = None,
) -> Minutes:
    """Move minutes to ``to_status``; APPROVED requires all sessions certified."""
    MINUTES_STATE_MACHINE.validate_transition(minutes.status, to_status)
    if to_status == MinutesStatus.APPROVED:
        assert_compliance(validate_all_exec_sessions_certified(executive_sessions))
        return replace(minutes, status=to_status, approved_at=_now(now), approved_by=approved_by)
    return replace(minutes, status=to_status)


def certify_exec_session(
    session: ExecutiveSession,
    statement: str,
    certified_by: str,
    *,
    post: bool = False,
) -> ExecutiveSession:
    """Attach a pre- (default) or post-session certification statement."""
    if post:
        return replace(session, post_cert_statement=statement, post_cert_by=certified_by)
    return replace(session, pre_cert_statement=statement, pre_cert_by=certified_by)


def transition_executive_session(
    session: ExecutiveSession,
    to_status: ExecutiveSessionStatus,
    now: datetime | None = None,
) -> ExecutiveSession:
    """Move an executive session to ``to_status``.

    Entering IN_SESSION requires pre-certification; reaching CERTIFIED
    requires post-certification.
    """
    EXECUTIVE_SESSION_STATE_MACHINE.validate_transition(session.status, to_status)
    if to_status == ExecutiveSessionStatus.IN_SESSION:
        assert_compliance(validate_exec_session_pre_cert(session))
        return replace(session, status=to_status, actual_start=_now(now))
    if to_status == ExecutiveSessionStatus.ENDED:
        return replace(session, status=to_status, actual_end=_now(now))
    if to_status == ExecutiveSessionStatus.CERTIFIED:
        assert_compliance(validate_exec_session_post_cert(session))
    return replace(session, status=to_status)


def transition_agenda(agenda: Agenda, to_status: AgendaStatus, now: datetime | None = None) -> Agenda:
    AGENDA_STATE_MACHINE.validate_transition(agenda.status, to_status)
    if to_status == AgendaStatus.PUBLISHED:
        return replace(agenda, status=to_status, published_at=_now(now))
    return replace(agenda, status=to_status)


def transition_agenda_item(item: AgendaItem, to_status: AgendaItemStatus) -> AgendaItem:
    AGENDA_ITEM_STATE_MACHINE.validate_transition(item.status, to_status)
    return replace(item, status=to_status)


# -- Voting --------------------------------------------------------------------


def record_vote(
    meeting: Meeting,
    body: GoverningBody,
    action: MeetingAction,
    vote_id: str,
    member_id: str,
    vote: VoteValue,
    now: datetime | None = None,
) -> VoteRecord:
    """Create a vote record after running every voting gate.

    Gates run in order: no active executive session, the motion has a
    second, and the item has quorum. A member with a matching recusal gets a
    RECUSED record instead of the requested value; the request is not
    rejected.

    Raises:
        ComplianceError: If a gate fails.
    """
    assert_compliance(validate_vote_not_in_exec_session(meeting.executive_sessions))
    assert_compliance(validate_action_has_second(action))
    quorum = calculate_quorum(body, meeting.attendance, meeting.recusals, action.agenda_item_id)
    assert_compliance(validate_quorum(quorum))

    record = VoteRecord(
        id=vote_id,
        meeting_id=meeting.id,
        member_id=member_id,
        vote=vote,
        action_id=action.id,
        agenda_item_id=action.agenda_item_id,
        voted_at=_now(now),
    )
    return apply_recusal(record, meeting.recusals)
