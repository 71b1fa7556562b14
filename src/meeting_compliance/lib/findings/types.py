"""Data types for zoning board findings of fact (IC 36-7-4-918)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class FindingsCaseType(StrEnum):
    DEVELOPMENT_VARIANCE = "DEVELOPMENT_VARIANCE"
    USE_VARIANCE = "USE_VARIANCE"
    SPECIAL_EXCEPTION = "SPECIAL_EXCEPTION"
    SUBDIVISION_WAIVER = "SUBDIVISION_WAIVER"


class FindingsStatus(StrEnum):
    DRAFT = "DRAFT"
    PENDING_REVIEW = "PENDING_REVIEW"
    ADOPTED = "ADOPTED"
    REJECTED = "REJECTED"


class Determination(StrEnum):
    """Staff recommendation or board determination for one criterion."""

    MET = "MET"
    NOT_MET = "NOT_MET"
    UNABLE_TO_DETERMINE = "UNABLE_TO_DETERMINE"


class FindingsAction(StrEnum):
    """Board decision the findings must support."""

    APPROVE = "APPROVE"
    DENY = "DENY"


class MissingPart(StrEnum):
    BOTH = "both"
    DETERMINATION = "determination"
    RATIONALE = "rationale"


@dataclass(frozen=True)
class FindingsCriterion:
    """One statutory criterion and the staff and board analysis of it.

    Attributes:
        id: Criterion identifier.
        criterion_number: 1-based position in the statutory list.
        criterion_text: The statutory test.
        is_required: Whether the criterion must be MET for approval.
        statutory_cite: Statute the criterion comes from.
        staff_recommendation: Staff's determination, if made.
        staff_rationale: Staff's supporting text.
        board_determination: The board's determination, if made.
        board_rationale: The board's "because" statement.
        guidance_notes: Help text for staff.
    """

    id: str
    criterion_number: int
    criterion_text: str
    is_required: bool = True
    statutory_cite: str | None = None
    staff_recommendation: Determination | None = None
    staff_rationale: str | None = None
    board_determination: Determination | None = None
    board_rationale: str | None = None
    guidance_notes: str | None = None

    @property
    def has_rationale(self) -> bool:
        return bool(self.board_rationale and self.board_rationale.strip())

    @property
    def missing_part(self) -> MissingPart | None:
        """What the board still has to supply, or ``None`` when complete."""
        has_determination = self.board_determination is not None
        if not has_determination and not self.has_rationale:
            return MissingPart.BOTH
        if not has_determination:
            return MissingPart.DETERMINATION
        if not self.has_rationale:
            return MissingPart.RATIONALE
        return None

    @property
    def is_complete(self) -> bool:
        return self.missing_part is None


@dataclass(frozen=True)
class FindingsCondition:
    """A numbered condition of approval."""

    id: str
    condition_number: int
    condition_text: str


@dataclass(frozen=True)
class FindingsOfFact:
    """Findings of fact for a board of zoning appeals or plan commission case.

    Once ADOPTED or REJECTED, ``is_locked`` is True and neither the criteria
    nor the conditions may change.
    """

    id: str
    case_type: FindingsCaseType
    statutory_cite: str
    criteria: tuple[FindingsCriterion, ...] = ()
    conditions: tuple[FindingsCondition, ...] = ()
    status: FindingsStatus = FindingsStatus.DRAFT
    is_locked: bool = False
    meeting_id: str | None = None
    agenda_item_id: str | None = None
    vote_record_id: str | None = None
    adopted_at: datetime | None = None
    adopted_by: str | None = None
    tenant_id: str = ""
    version: int = 1


@dataclass(frozen=True)
class MissingCriterion:
    criterion_number: int
    criterion_text: str
    missing: MissingPart


@dataclass(frozen=True)
class FindingsValidation:
    """Completeness and supportability of a findings record.

    Attributes:
        is_complete: Every criterion has a board determination and rationale.
        missing_criteria: Criteria still lacking a determination or rationale.
        can_approve: Complete, and every required criterion is MET.
        can_deny: At least one required criterion is NOT_MET.
        unmet_criteria: Numbers of required criteria found NOT_MET.
    """

    is_complete: bool
    missing_criteria: tuple[MissingCriterion, ...]
    can_approve: bool
    can_deny: bool
    unmet_criteria: tuple[int, ...]
