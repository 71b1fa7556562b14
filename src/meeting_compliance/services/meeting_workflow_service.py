"""Meeting workflow service: read, validate and write against entity stores.

Each operation loads the current entity, runs the pure compliance core on
it, and writes the returned value back. Stores reject stale writes with
``ConcurrencyError``; this layer does not retry or serialize callers.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime

from meeting_compliance.core.logging import audit_logger
from meeting_compliance.lib.meetings import (
    OPEN_DOOR_NOTICE_HOURS,
    EntityStore,
    ExecutiveSession,
    ExecutiveSessionStatus,
    InMemoryEntityStore,
    Meeting,
    MeetingCommand,
    Minutes,
    MinutesStatus,
    NotFoundError,
    QuorumResult,
    TenantContext,
    VoteRecord,
    VoteTally,
    VoteValue,
    calculate_quorum,
    certify_exec_session,
    record_vote,
    resolve_meeting_command,
    tally_votes,
    transition_executive_session,
    transition_meeting,
    transition_minutes,
)
from meeting_compliance.lib.meetings.quorum import recusals_for_item


@dataclass(frozen=True)
class MeetingStores:
    """Stores the workflow service reads and writes."""

    meetings: EntityStore
    bodies: EntityStore
    votes: EntityStore


def create_in_memory_stores() -> MeetingStores:
    return MeetingStores(
        meetings=InMemoryEntityStore("meeting", parent_field="governing_body_id"),
        bodies=InMemoryEntityStore("governing body", parent_field="id"),
        votes=InMemoryEntityStore("vote", parent_field="meeting_id"),
    )


def _log(tenant: TenantContext, meeting_id: str):
    return audit_logger(tenant, meeting_id=meeting_id)


def _find_session(meeting: Meeting, session_id: str) -> ExecutiveSession:
    for session in meeting.executive_sessions:
        if session.id == session_id:
            return session
    raise NotFoundError("executive session", session_id)


def _with_session(meeting: Meeting, session: ExecutiveSession) -> Meeting:
    sessions = tuple(session if s.id == session.id else s for s in meeting.executive_sessions)
    return replace(meeting, executive_sessions=sessions)


# ---------------------------------------------------------------------------
# Meeting lifecycle
# ---------------------------------------------------------------------------


async def apply_meeting_command(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    command: MeetingCommand,
    *,
    now: datetime | None = None,
    notice_hours: int = OPEN_DOOR_NOTICE_HOURS,
    cancellation_reason: str | None = None,
) -> Meeting:
    """Apply a lifecycle verb (schedule, start, adjourn...) to a stored meeting.

    Args:
        stores: Entity stores.
        tenant: Caller context.
        meeting_id: The meeting to change.
        command: Verb to apply.
        now: Current time; defaults to UTC now.
        notice_hours: Open Door notice period.
        cancellation_reason: Recorded when cancelling.

    Returns:
        The stored meeting after the change.

    Raises:
        NotFoundError: If the meeting does not exist.
        InvalidTransitionError: If the verb is illegal in the current status.
        ComplianceError: If a statutory gate fails.
        ConcurrencyError: If the meeting changed since it was read.
    """
    meeting = await stores.meetings.get(tenant, meeting_id)
    target = resolve_meeting_command(meeting.status, command)
    updated = transition_meeting(
        meeting, target, now=now, notice_hours=notice_hours, cancellation_reason=cancellation_reason
    )
    stored = await stores.meetings.update(tenant, updated)
    _log(tenant, meeting_id).info(f"Meeting {meeting_id} {command}: {meeting.status} -> {stored.status}")
    return stored


async def certify_executive_session(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    session_id: str,
    statement: str,
    *,
    post: bool = False,
) -> Meeting:
    """Record a pre- or post-session certification signed by the acting user."""
    if not tenant.user_id:
        msg = "Certification requires an acting user"
        raise ValueError(msg)
    meeting = await stores.meetings.get(tenant, meeting_id)
    session = certify_exec_session(_find_session(meeting, session_id), statement, tenant.user_id, post=post)
    stored = await stores.meetings.update(tenant, _with_session(meeting, session))
    kind = "post" if post else "pre"
    _log(tenant, meeting_id).info(f"Executive session {session_id} {kind}-certified by {tenant.user_id}")
    return stored


async def change_executive_session_status(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    session_id: str,
    to_status: ExecutiveSessionStatus,
    *,
    now: datetime | None = None,
) -> Meeting:
    meeting = await stores.meetings.get(tenant, meeting_id)
    session = _find_session(meeting, session_id)
    updated = transition_executive_session(session, to_status, now=now)
    stored = await stores.meetings.update(tenant, _with_session(meeting, updated))
    _log(tenant, meeting_id).info(f"Executive session {session_id}: {session.status} -> {to_status}")
    return stored


async def change_minutes_status(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    to_status: MinutesStatus,
    *,
    now: datetime | None = None,
) -> Meeting:
    """Move the meeting's minutes through approval; creates DRAFT minutes if none exist."""
    meeting = await stores.meetings.get(tenant, meeting_id)
    minutes = meeting.minutes or Minutes(id=f"{meeting_id}-minutes", meeting_id=meeting_id, tenant_id=tenant.tenant_id)
    updated = transition_minutes(
        minutes, to_status, meeting.executive_sessions, now=now, approved_by=tenant.user_id
    )
    stored = await stores.meetings.update(tenant, replace(meeting, minutes=updated))
    _log(tenant, meeting_id).info(f"Minutes for meeting {meeting_id}: {minutes.status} -> {to_status}")
    return stored


# ---------------------------------------------------------------------------
# Quorum and voting
# ---------------------------------------------------------------------------


async def get_quorum(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    agenda_item_id: str | None = None,
) -> QuorumResult:
    meeting = await stores.meetings.get(tenant, meeting_id)
    if meeting.governing_body_id is None:
        msg = f"Meeting {meeting_id} has no governing body"
        raise ValueError(msg)
    body = await stores.bodies.get(tenant, meeting.governing_body_id)
    return calculate_quorum(body, meeting.attendance, meeting.recusals, agenda_item_id)


async def cast_vote(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    action_id: str,
    member_id: str,
    vote: VoteValue,
    *,
    now: datetime | None = None,
) -> VoteRecord:
    """Record a member's vote on an action.

    A member recused from the action's agenda item gets a RECUSED record
    rather than an error.

    Raises:
        NotFoundError: If the meeting, its body or the action does not exist.
        ComplianceError: If voting is blocked, the motion lacks a second, or
            quorum is not present.
    """
    meeting = await stores.meetings.get(tenant, meeting_id)
    action = next((a for a in meeting.actions if a.id == action_id), None)
    if action is None:
        raise NotFoundError("action", action_id)
    if meeting.governing_body_id is None:
        msg = f"Meeting {meeting_id} has no governing body"
        raise ValueError(msg)
    body = await stores.bodies.get(tenant, meeting.governing_body_id)

    record = record_vote(meeting, body, action, str(uuid.uuid4()), member_id, vote, now=now)
    stored = await stores.votes.create(tenant, record)
    _log(tenant, meeting_id).info(
        f"Vote {stored.vote} recorded for member {member_id} on action {action_id}"
        + (" (recused)" if stored.is_recused else "")
    )
    return stored


async def get_vote_tally(
    stores: MeetingStores,
    tenant: TenantContext,
    meeting_id: str,
    action_id: str,
    pass_threshold: float = 0.5,
) -> VoteTally:
    meeting = await stores.meetings.get(tenant, meeting_id)
    action = next((a for a in meeting.actions if a.id == action_id), None)
    if action is None:
        raise NotFoundError("action", action_id)
    votes = [v for v in await stores.votes.find_by_parent_id(tenant, meeting_id) if v.action_id == action_id]
    recusals = recusals_for_item(meeting.recusals, action.agenda_item_id)
    return tally_votes(votes, recusals, pass_threshold)
