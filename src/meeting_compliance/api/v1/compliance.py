"""Advisory compliance check endpoints.

Each check returns a ``ValidationResultResponse`` rather than an error, so
clients can show the statutory reason before attempting a change.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from meeting_compliance.core.config import Settings, get_settings
from meeting_compliance.lib.meetings import (
    EXEC_SESSION_BASES,
    ValidationResult,
    validate_all_exec_sessions_certified,
    validate_meeting_schedule,
    validate_not_recused,
    validate_open_door_notice,
    validate_vote_not_in_exec_session,
)
from meeting_compliance.schemas.common import ValidationResultResponse
from meeting_compliance.schemas.meetings import (
    ExecutiveSessionsRequest,
    NoticeCheckRequest,
    RecusalCheckRequest,
    ScheduleCheckRequest,
)

compliance_router = APIRouter(
    prefix="/compliance",
    tags=["compliance"],
)


class ExecSessionBasisResponse(BaseModel):
    model_config = {"from_attributes": True}

    code: str
    cite: str
    description: str


def _to_response(result: ValidationResult) -> ValidationResultResponse:
    return ValidationResultResponse.model_validate(result)


@compliance_router.post("/notice")
async def check_notice(
    request: NoticeCheckRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ValidationResultResponse:
    """Check Open Door Law notice for a meeting.

    Uses ``posted_at`` when given, else the meeting's ``notice_posted_at``,
    else the current time.
    """
    meeting = request.meeting.to_domain()
    posted_at = request.posted_at or meeting.notice_posted_at or datetime.now(UTC)
    return _to_response(validate_open_door_notice(meeting, posted_at, settings.open_door_notice_hours))


@compliance_router.post("/schedule")
async def check_schedule(
    request: ScheduleCheckRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ValidationResultResponse:
    result = validate_meeting_schedule(request.meeting.to_domain(), request.now, settings.open_door_notice_hours)
    return _to_response(result)


@compliance_router.post("/executive-sessions/certified")
async def check_sessions_certified(request: ExecutiveSessionsRequest) -> ValidationResultResponse:
    """Check that every executive session is certified (or cancelled)."""
    return _to_response(validate_all_exec_sessions_certified(s.to_domain() for s in request.executive_sessions))


@compliance_router.post("/executive-sessions/voting-allowed")
async def check_voting_allowed(request: ExecutiveSessionsRequest) -> ValidationResultResponse:
    return _to_response(validate_vote_not_in_exec_session(s.to_domain() for s in request.executive_sessions))


@compliance_router.post("/recusal")
async def check_recusal(request: RecusalCheckRequest) -> ValidationResultResponse:
    recusals = [r.to_domain() for r in request.recusals]
    return _to_response(validate_not_recused(request.member_id, recusals, request.agenda_item_id))


@compliance_router.get("/executive-session-bases")
async def list_exec_session_bases() -> list[ExecSessionBasisResponse]:
    """List the statutory bases an executive session may be held under."""
    return [ExecSessionBasisResponse.model_validate(basis) for basis in EXEC_SESSION_BASES]
