"""Findings-of-fact validation and edits.

Approval is supportable only when every required criterion is MET; denial
only when at least one required criterion is NOT_MET. Either decision first
requires written findings (a board determination and a non-empty rationale)
for every criterion. Edits return new ``FindingsOfFact`` values and fail
with FINDINGS_LOCKED once the record has been adopted or rejected.
"""

from dataclasses import replace
from datetime import UTC, datetime

from meeting_compliance.lib.findings.types import (
    Determination,
    FindingsAction,
    FindingsCondition,
    FindingsCriterion,
    FindingsOfFact,
    FindingsStatus,
    FindingsValidation,
    MissingCriterion,
)
from meeting_compliance.lib.meetings.compliance import ValidationResult
from meeting_compliance.lib.meetings.constants import MeetingsErrorCode
from meeting_compliance.lib.meetings.errors import FindingsError


def validate_findings(findings: FindingsOfFact) -> FindingsValidation:
    """Report completeness and which decisions the findings support."""
    missing = tuple(
        MissingCriterion(c.criterion_number, c.criterion_text, c.missing_part)
        for c in findings.criteria
        if c.missing_part is not None
    )
    required = [c for c in findings.criteria if c.is_required]
    unmet = tuple(c.criterion_number for c in required if c.board_determination == Determination.NOT_MET)
    is_complete = not missing

    return FindingsValidation(
        is_complete=is_complete,
        missing_criteria=missing,
        can_approve=is_complete and all(c.board_determination == Determination.MET for c in required),
        can_deny=bool(unmet),
        unmet_criteria=unmet,
    )


def _missing_details(validation: FindingsValidation) -> dict:
    return {
        "missing_criteria": [
            {"criterion_number": m.criterion_number, "criterion_text": m.criterion_text, "missing": str(m.missing)}
            for m in validation.missing_criteria
        ]
    }


def validate_findings_for_action(findings: FindingsOfFact, action: FindingsAction) -> ValidationResult:
    """Check completeness, then whether the findings support ``action``."""
    validation = validate_findings(findings)
    if not validation.is_complete:
        return ValidationResult.fail(
            MeetingsErrorCode.FINDINGS_INCOMPLETE,
            "Written findings required for all criteria",
            statutory_cite=findings.statutory_cite,
            details=_missing_details(validation),
        )

    if action == FindingsAction.APPROVE and not validation.can_approve:
        return ValidationResult.fail(
            MeetingsErrorCode.FINDINGS_NOT_SUPPORTED,
            "Cannot approve: every required criterion must be found MET",
            statutory_cite=findings.statutory_cite,
            details={
                "not_met_criteria": [
                    c.criterion_number
                    for c in findings.criteria
                    if c.is_required and c.board_determination != Determination.MET
                ]
            },
        )
    if action == FindingsAction.DENY and not validation.can_deny:
        return ValidationResult.fail(
            MeetingsErrorCode.FINDINGS_NOT_SUPPORTED,
            "Cannot deny: at least one required criterion must be found NOT_MET",
            statutory_cite=findings.statutory_cite,
            details={"all_criteria_met": True},
        )
    return ValidationResult.ok()


def validate_findings_not_locked(findings: FindingsOfFact) -> ValidationResult:
    if findings.is_locked:
        return ValidationResult.fail(
            MeetingsErrorCode.FINDINGS_LOCKED,
            "Cannot modify findings after adoption",
            details={
                "adopted_at": findings.adopted_at.isoformat() if findings.adopted_at else None,
                "vote_record_id": findings.vote_record_id,
            },
        )
    return ValidationResult.ok()


def ensure_not_locked(findings: FindingsOfFact) -> None:
    """Raise ``FindingsError`` when the findings are locked."""
    result = validate_findings_not_locked(findings)
    if not result.valid:
        raise FindingsError(MeetingsErrorCode.FINDINGS_LOCKED, result.message or "", details=result.details)


def _raise_for(result: ValidationResult) -> None:
    if not result.valid:
        raise FindingsError(
            result.error_code or MeetingsErrorCode.FINDINGS_NOT_SUPPORTED,
            result.message or "",
            statutory_cite=result.statutory_cite,
            details=result.details,
        )


def _replace_criterion(findings: FindingsOfFact, criterion_id: str, **changes: object) -> FindingsOfFact:
    ensure_not_locked(findings)
    if not any(c.id == criterion_id for c in findings.criteria):
        raise FindingsError(
            MeetingsErrorCode.CRITERION_NOT_FOUND,
            f"Criterion not found: {criterion_id}",
            details={"criterion_id": criterion_id, "findings_id": findings.id},
        )
    criteria: tuple[FindingsCriterion, ...] = tuple(
        replace(c, **changes) if c.id == criterion_id else c for c in findings.criteria
    )
    return replace(findings, criteria=criteria)


def update_staff_recommendation(
    findings: FindingsOfFact,
    criterion_id: str,
    recommendation: Determination,
    rationale: str | None = None,
) -> FindingsOfFact:
    return _replace_criterion(
        findings, criterion_id, staff_recommendation=recommendation, staff_rationale=rationale
    )


def record_board_determination(
    findings: FindingsOfFact,
    criterion_id: str,
    determination: Determination,
    rationale: str | None = None,
) -> FindingsOfFact:
    return _replace_criterion(
        findings, criterion_id, board_determination=determination, board_rationale=rationale
    )


def _condition_not_found(findings: FindingsOfFact, condition_id: str) -> FindingsError:
    return FindingsError(
        MeetingsErrorCode.CONDITION_NOT_FOUND,
        f"Condition not found: {condition_id}",
        details={"condition_id": condition_id, "findings_id": findings.id},
    )


def add_condition(findings: FindingsOfFact, condition_id: str, condition_text: str) -> FindingsOfFact:
    """Append a condition numbered one past the current highest."""
    ensure_not_locked(findings)
    next_number = max((c.condition_number for c in findings.conditions), default=0) + 1
    condition = FindingsCondition(id=condition_id, condition_number=next_number, condition_text=condition_text)
    return replace(findings, conditions=(*findings.conditions, condition))


def update_condition(findings: FindingsOfFact, condition_id: str, condition_text: str) -> FindingsOfFact:
    ensure_not_locked(findings)
    if not any(c.id == condition_id for c in findings.conditions):
        raise _condition_not_found(findings, condition_id)
    conditions = tuple(
        replace(c, condition_text=condition_text) if c.id == condition_id else c for c in findings.conditions
    )
    return replace(findings, conditions=conditions)


def remove_condition(findings: FindingsOfFact, condition_id: str) -> FindingsOfFact:
    ensure_not_locked(findings)
    conditions = tuple(c for c in findings.conditions if c.id != condition_id)
    if len(conditions) == len(findings.conditions):
        raise _condition_not_found(findings, condition_id)
    return replace(findings, conditions=conditions)


def submit_for_review(findings: FindingsOfFact) -> FindingsOfFact:
    ensure_not_locked(findings)
    return replace(findings, status=FindingsStatus.PENDING_REVIEW)


def _finalize(
    findings: FindingsOfFact,
    action: FindingsAction,
    status: FindingsStatus,
    vote_record_id: str | None,
    finalized_by: str | None,
    now: datetime | None,
) -> FindingsOfFact:
    ensure_not_locked(findings)
    _raise_for(validate_findings_for_action(findings, action))
    return replace(
        findings,
        status=status,
        is_locked=True,
        vote_record_id=vote_record_id,
        adopted_at=now if now is not None else datetime.now(UTC),
        adopted_by=finalized_by,
    )


def adopt_findings(
    findings: FindingsOfFact,
    vote_record_id: str | None = None,
    adopted_by: str | None = None,
    now: datetime | None = None,
) -> FindingsOfFact:
    """Adopt findings supporting approval and lock them.

    Raises:
        FindingsError: FINDINGS_LOCKED, FINDINGS_INCOMPLETE or
            FINDINGS_NOT_SUPPORTED.
    """
    return _finalize(findings, FindingsAction.APPROVE, FindingsStatus.ADOPTED, vote_record_id, adopted_by, now)


def reject_findings(
    findings: FindingsOfFact,
    vote_record_id: str | None = None,
    rejected_by: str | None = None,
    now: datetime | None = None,
) -> FindingsOfFact:
    """Finalize findings supporting denial and lock them."""
    return _finalize(findings, FindingsAction.DENY, FindingsStatus.REJECTED, vote_record_id, rejected_by, now)
