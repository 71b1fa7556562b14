"""Quorum and voting API endpoints."""

import uuid

from fastapi import APIRouter, status

from meeting_compliance.lib.meetings import (
    NotFoundError,
    calculate_quorum,
    did_super_majority_pass,
    format_vote_tally,
    record_vote,
    tally_votes,
)
from meeting_compliance.schemas.common import ErrorResponse
from meeting_compliance.schemas.meetings import (
    QuorumRequest,
    QuorumResponse,
    RecordVoteRequest,
    TallyRequest,
    TallyResponse,
    VoteRecordSchema,
)

votes_router = APIRouter(tags=["votes"])


@votes_router.post("/quorum")
async def get_quorum(request: QuorumRequest) -> QuorumResponse:
    """Calculate quorum for a meeting, or for one agenda item when ``agenda_item_id`` is set.

    Members recused from the item (or meeting-wide) do not count toward quorum.
    """
    result = calculate_quorum(
        request.body.to_domain(),
        [a.to_domain() for a in request.attendance],
        [r.to_domain() for r in request.recusals],
        request.agenda_item_id,
    )
    return QuorumResponse.model_validate(result)


@votes_router.post("/votes/tally")
async def get_vote_tally(request: TallyRequest) -> TallyResponse:
    tally = tally_votes(
        [v.to_domain() for v in request.votes],
        [r.to_domain() for r in request.recusals],
        request.pass_threshold,
    )
    response = TallyResponse.model_validate(tally)
    response.super_majority_passed = did_super_majority_pass(tally)
    response.summary = format_vote_tally(tally)
    return response


@votes_router.post(
    "/votes",
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def create_vote(request: RecordVoteRequest) -> VoteRecordSchema:
    """Record one member's vote on an action.

    Rejected during an active executive session, on an unseconded motion, or
    without item quorum. A recused member's vote is recorded as RECUSED.
    """
    meeting = request.meeting.to_domain()
    action = next((a for a in meeting.actions if a.id == request.action_id), None)
    if action is None:
        raise NotFoundError("action", request.action_id)
    record = record_vote(
        meeting,
        request.body.to_domain(),
        action,
        request.vote_id or str(uuid.uuid4()),
        request.member_id,
        request.vote,
        now=request.now,
    )
    return VoteRecordSchema.model_validate(record)
