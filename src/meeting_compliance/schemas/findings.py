"""Pydantic v2 schemas for findings-of-fact operations."""

from pydantic import AwareDatetime, BaseModel, Field

from meeting_compliance.lib.findings import (
    Determination,
    FindingsAction,
    FindingsCaseType,
    FindingsCondition,
    FindingsCriterion,
    FindingsOfFact,
    FindingsStatus,
    MissingPart,
)


class CriterionSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    criterion_number: int = Field(ge=1)
    criterion_text: str
    is_required: bool = True
    statutory_cite: str | None = None
    staff_recommendation: Determination | None = None
    staff_rationale: str | None = None
    board_determination: Determination | None = None
    board_rationale: str | None = None
    guidance_notes: str | None = None

    def to_domain(self) -> FindingsCriterion:
        return FindingsCriterion(**self.model_dump())


class ConditionSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    condition_number: int = Field(ge=1)
    condition_text: str

    def to_domain(self) -> FindingsCondition:
        return FindingsCondition(**self.model_dump())


class FindingsSchema(BaseModel):
    """Findings of fact with criteria and conditions of approval."""

    model_config = {"from_attributes": True}

    id: str
    case_type: FindingsCaseType
    statutory_cite: str
    criteria: list[CriterionSchema] = Field(default_factory=list)
    conditions: list[ConditionSchema] = Field(default_factory=list)
    status: FindingsStatus = FindingsStatus.DRAFT
    is_locked: bool = False
    meeting_id: str | None = None
    agenda_item_id: str | None = None
    vote_record_id: str | None = None
    adopted_at: AwareDatetime | None = None
    adopted_by: str | None = None

    def to_domain(self) -> FindingsOfFact:
        return FindingsOfFact(
            id=self.id,
            case_type=self.case_type,
            statutory_cite=self.statutory_cite,
            criteria=tuple(c.to_domain() for c in self.criteria),
            conditions=tuple(c.to_domain() for c in self.conditions),
            status=self.status,
            is_locked=self.is_locked,
            meeting_id=self.meeting_id,
            agenda_item_id=self.agenda_item_id,
            vote_record_id=self.vote_record_id,
            adopted_at=self.adopted_at,
            adopted_by=self.adopted_by,
        )


class MissingCriterionResponse(BaseModel):
    model_config = {"from_attributes": True}

    criterion_number: int
    criterion_text: str
    missing: MissingPart


class FindingsValidationResponse(BaseModel):
    model_config = {"from_attributes": True}

    is_complete: bool
    missing_criteria: list[MissingCriterionResponse]
    can_approve: bool
    can_deny: bool
    unmet_criteria: list[int]


class FindingsTemplateRequest(BaseModel):
    findings_id: str
    case_type: FindingsCaseType
    meeting_id: str | None = None
    agenda_item_id: str | None = None


class FindingsActionCheckRequest(BaseModel):
    findings: FindingsSchema
    action: FindingsAction


class FindingsDecisionRequest(BaseModel):
    """Adopt or reject findings."""

    findings: FindingsSchema
    vote_record_id: str | None = None
    decided_by: str | None = None
    now: AwareDatetime | None = None


class DeterminationRequest(BaseModel):
    findings: FindingsSchema
    criterion_id: str
    determination: Determination
    rationale: str | None = None
