"""Findings-of-fact API endpoints."""

from fastapi import APIRouter, status

from meeting_compliance.lib.findings import (
    FINDINGS_TEMPLATES,
    adopt_findings,
    create_findings_from_template,
    record_board_determination,
    reject_findings,
    validate_findings,
    validate_findings_for_action,
)
from meeting_compliance.schemas.common import ErrorResponse, ValidationResultResponse
from meeting_compliance.schemas.findings import (
    DeterminationRequest,
    FindingsActionCheckRequest,
    FindingsDecisionRequest,
    FindingsSchema,
    FindingsTemplateRequest,
    FindingsValidationResponse,
)

findings_router = APIRouter(
    prefix="/findings",
    tags=["findings"],
)

_DECISION_RESPONSES = {
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
}


@findings_router.get("/templates")
async def list_templates() -> list[str]:
    """Case types that have statutory criteria templates."""
    return [str(case_type) for case_type in FINDINGS_TEMPLATES]


@findings_router.post("/from-template", status_code=status.HTTP_201_CREATED)
async def create_from_template(request: FindingsTemplateRequest) -> FindingsSchema:
    findings = create_findings_from_template(
        request.findings_id, request.case_type, request.meeting_id, request.agenda_item_id
    )
    return FindingsSchema.model_validate(findings)


@findings_router.post("/validate")
async def validate(request: FindingsSchema) -> FindingsValidationResponse:
    """Report completeness and which decisions the findings support."""
    return FindingsValidationResponse.model_validate(validate_findings(request.to_domain()))


@findings_router.post("/validate-action")
async def validate_for_action(request: FindingsActionCheckRequest) -> ValidationResultResponse:
    return ValidationResultResponse.model_validate(
        validate_findings_for_action(request.findings.to_domain(), request.action)
    )


@findings_router.post("/determination", responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}})
async def set_determination(request: DeterminationRequest) -> FindingsSchema:
    updated = record_board_determination(
        request.findings.to_domain(), request.criterion_id, request.determination, request.rationale
    )
    return FindingsSchema.model_validate(updated)


@findings_router.post("/adopt", responses=_DECISION_RESPONSES)
async def adopt(request: FindingsDecisionRequest) -> FindingsSchema:
    """Adopt findings supporting approval and lock them."""
    adopted = adopt_findings(request.findings.to_domain(), request.vote_record_id, request.decided_by, request.now)
    return FindingsSchema.model_validate(adopted)


@findings_router.post("/reject", responses=_DECISION_RESPONSES)
async def reject(request: FindingsDecisionRequest) -> FindingsSchema:
    """Finalize findings supporting denial and lock them."""
    rejected = reject_findings(request.findings.to_domain(), request.vote_record_id, request.decided_by, request.now)
    return FindingsSchema.model_validate(rejected)
