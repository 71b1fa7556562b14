"""Publication deadline API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status

from meeting_compliance.core.config import Settings, get_settings
from meeting_compliance.core.dependencies import get_deadline_calculator, get_rule_registry
from meeting_compliance.lib.publication import (
    DeadlineCalculator,
    NoticeReason,
    PublicationRuleRegistry,
    assess_risk,
    is_high_risk,
    risk_message,
)
from meeting_compliance.schemas.common import ErrorResponse
from meeting_compliance.schemas.deadlines import (
    DeadlineCalculationResponse,
    DeadlineRequest,
    PublicationRuleResponse,
    RiskRequest,
    RiskResponse,
)

deadlines_router = APIRouter(
    prefix="/deadlines",
    tags=["deadlines"],
)


@deadlines_router.post(
    "/calculate",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def calculate_deadlines(
    request: DeadlineRequest,
    calculator: Annotated[DeadlineCalculator, Depends(get_deadline_calculator)],
) -> DeadlineCalculationResponse:
    """Calculate the newspaper publications and submission deadlines for a hearing.

    Without a newspaper schedule, target dates are used as publication dates
    and submission falls back to the configured lead time.
    """
    schedule = request.schedule.to_domain() if request.schedule else None
    result = calculator.calculate_deadlines(request.hearing_date, request.notice_reason, schedule, request.now)
    return DeadlineCalculationResponse.model_validate(result)


@deadlines_router.get("/rules")
async def list_rules(
    registry: Annotated[PublicationRuleRegistry, Depends(get_rule_registry)],
) -> list[PublicationRuleResponse]:
    """List the statutory publication rules."""
    return [PublicationRuleResponse.model_validate(rule) for rule in registry]


@deadlines_router.get(
    "/rules/{notice_reason}",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_rule(
    notice_reason: NoticeReason,
    registry: Annotated[PublicationRuleRegistry, Depends(get_rule_registry)],
) -> PublicationRuleResponse:
    return PublicationRuleResponse.model_validate(registry.get(notice_reason))


@deadlines_router.post("/risk")
async def get_risk(
    request: RiskRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> RiskResponse:
    """Classify how urgent a submission deadline is."""
    now = request.now or datetime.now(settings.tzinfo)
    level = assess_risk(request.deadline, now)
    return RiskResponse(risk_level=level, risk_message=risk_message(level), is_high_risk=is_high_risk(level))
