"""Status transition API endpoints.

The ``/transitions`` routes answer table lookups only. The entity routes run
the gated transition and return the updated record; nothing is persisted,
the caller owns the stored copy.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from meeting_compliance.core.config import Settings, get_settings
from meeting_compliance.lib.meetings import (
    AGENDA_ITEM_STATE_MACHINE,
    AGENDA_STATE_MACHINE,
    EXECUTIVE_SESSION_STATE_MACHINE,
    MEETING_STATE_MACHINE,
    MINUTES_STATE_MACHINE,
    MeetingStatus,
    StateMachine,
    available_meeting_commands,
    resolve_meeting_command,
    transition_agenda,
    transition_agenda_item,
    transition_executive_session,
    transition_meeting,
    transition_minutes,
)
from meeting_compliance.schemas.common import ErrorResponse
from meeting_compliance.schemas.meetings import (
    AgendaItemSchema,
    AgendaItemTransitionRequest,
    AgendaSchema,
    AgendaTransitionRequest,
    AllowedTransitionsResponse,
    ExecutiveSessionSchema,
    ExecutiveSessionTransitionRequest,
    MeetingSchema,
    MeetingTransitionRequest,
    MinutesSchema,
    MinutesTransitionRequest,
    TransitionCheckRequest,
    TransitionCheckResponse,
    TransitionEntity,
)

transitions_router = APIRouter(tags=["transitions"])

_MACHINES: dict[TransitionEntity, StateMachine] = {
    TransitionEntity.MEETING: MEETING_STATE_MACHINE,
    TransitionEntity.AGENDA: AGENDA_STATE_MACHINE,
    TransitionEntity.AGENDA_ITEM: AGENDA_ITEM_STATE_MACHINE,
    TransitionEntity.EXECUTIVE_SESSION: EXECUTIVE_SESSION_STATE_MACHINE,
    TransitionEntity.MINUTES: MINUTES_STATE_MACHINE,
}

_GATE_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Table lookups
# ---------------------------------------------------------------------------


@transitions_router.get("/transitions/{entity}/{current_status}")
async def get_allowed_transitions(entity: TransitionEntity, current_status: str) -> AllowedTransitionsResponse:
    """List the statuses reachable in one step from ``current_status``."""
    machine = _MACHINES[entity]
    current = machine.parse_status(current_status)
    commands = available_meeting_commands(current) if entity == TransitionEntity.MEETING else []
    return AllowedTransitionsResponse(
        entity=entity,
        status=str(current),
        allowed_targets=sorted(str(s) for s in machine.allowed_targets(current)),
        is_terminal=machine.is_terminal(current),
        available_commands=commands,
    )


@transitions_router.post("/transitions/{entity}/check")
async def check_transition(entity: TransitionEntity, request: TransitionCheckRequest) -> TransitionCheckResponse:
    machine = _MACHINES[entity]
    from_status = machine.parse_status(request.from_status)
    to_status = machine.parse_status(request.to_status)
    return TransitionCheckResponse(
        entity=entity,
        from_status=str(from_status),
        to_status=str(to_status),
        allowed=machine.can_transition(from_status, to_status),
    )


# ---------------------------------------------------------------------------
# Gated transitions
# ---------------------------------------------------------------------------


@transitions_router.post("/meetings/transition", responses=_GATE_RESPONSES)
async def transition_meeting_status(
    request: MeetingTransitionRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> MeetingSchema:
    """Move a meeting to a new status, by target status or lifecycle command."""
    meeting = request.meeting.to_domain()
    target: MeetingStatus
    if request.command is not None:
        target = resolve_meeting_command(meeting.status, request.command)
    else:
        target = request.to_status  # type: ignore[assignment]
    updated = transition_meeting(
        meeting,
        target,
        now=request.now,
        notice_hours=settings.open_door_notice_hours,
        cancellation_reason=request.cancellation_reason,
    )
    return MeetingSchema.model_validate(updated)


@transitions_router.post("/executive-sessions/transition", responses=_GATE_RESPONSES)
async def transition_executive_session_status(request: ExecutiveSessionTransitionRequest) -> ExecutiveSessionSchema:
    updated = transition_executive_session(request.session.to_domain(), request.to_status, now=request.now)
    return ExecutiveSessionSchema.model_validate(updated)


@transitions_router.post("/minutes/transition", responses=_GATE_RESPONSES)
async def transition_minutes_status(request: MinutesTransitionRequest) -> MinutesSchema:
    """Move minutes through approval. APPROVED requires every executive session certified."""
    updated = transition_minutes(
        request.minutes.to_domain(),
        request.to_status,
        [s.to_domain() for s in request.executive_sessions],
        now=request.now,
        approved_by=request.approved_by,
    )
    return MinutesSchema.model_validate(updated)


@transitions_router.post("/agendas/transition", responses=_GATE_RESPONSES)
async def transition_agenda_status(request: AgendaTransitionRequest) -> AgendaSchema:
    updated = transition_agenda(request.agenda.to_domain(), request.to_status, now=request.now)
    return AgendaSchema.model_validate(updated)


@transitions_router.post("/agenda-items/transition", responses=_GATE_RESPONSES)
async def transition_agenda_item_status(request: AgendaItemTransitionRequest) -> AgendaItemSchema:
    updated = transition_agenda_item(request.item.to_domain(), request.to_status)
    return AgendaItemSchema.model_validate(updated)
