"""Findings-of-fact library for zoning board decisions.

Public API:
    - ``FindingsOfFact``, ``FindingsCriterion``, ``FindingsCondition`` and enums
    - ``validate_findings``: Completeness plus can-approve / can-deny
    - ``validate_findings_for_action``: Standard ``ValidationResult`` for a decision
    - ``adopt_findings`` / ``reject_findings``: Finalize and lock
    - ``update_staff_recommendation`` / ``record_board_determination``
    - ``add_condition`` / ``update_condition`` / ``remove_condition``
    - ``create_findings_from_template``: Statutory variance criteria
"""

from meeting_compliance.lib.findings.templates import (
    FINDINGS_TEMPLATES,
    FindingsTemplate,
    create_findings_from_template,
    get_template,
)
from meeting_compliance.lib.findings.types import (
    Determination,
    FindingsAction,
    FindingsCaseType,
    FindingsCondition,
    FindingsCriterion,
    FindingsOfFact,
    FindingsStatus,
    FindingsValidation,
    MissingCriterion,
    MissingPart,
)
from meeting_compliance.lib.findings.validator import (
    add_condition,
    adopt_findings,
    ensure_not_locked,
    record_board_determination,
    reject_findings,
    remove_condition,
    submit_for_review,
    update_condition,
    update_staff_recommendation,
    validate_findings,
    validate_findings_for_action,
    validate_findings_not_locked,
)

__all__ = [
    "FINDINGS_TEMPLATES",
    "Determination",
    "FindingsAction",
    "FindingsCaseType",
    "FindingsCondition",
    "FindingsCriterion",
    "FindingsOfFact",
    "FindingsStatus",
    "FindingsTemplate",
    "FindingsValidation",
    "MissingCriterion",
    "MissingPart",
    "add_condition",
    "adopt_findings",
    "create_findings_from_template",
    "ensure_not_locked",
    "get_template",
    "record_board_determination",
    "reject_findings",
    "remove_condition",
    "submit_for_review",
    "update_condition",
    "update_staff_recommendation",
    "validate_findings",
    "validate_findings_for_action",
    "validate_findings_not_locked",
]
