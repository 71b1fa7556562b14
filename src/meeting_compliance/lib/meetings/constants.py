"""Indiana statutory constants for meeting compliance.

Citations and thresholds from the Indiana Code used by the validators.
"""

from dataclasses import dataclass
from enum import StrEnum

# Open Door Law (IC 5-14-1.5)
OPEN_DOOR_NOTICE_HOURS = 48
OPEN_DOOR_NOTICE_CITE = "IC 5-14-1.5-5"
EXEC_SESSION_CITE = "IC 5-14-1.5-6.1"
MINUTES_CITE = "IC 5-14-1.5-4"
CONFLICT_OF_INTEREST_CITE = "IC 35-44.1-1-4"

# Publication law (IC 5-3-1)
PUBLICATION_CITE = "IC 5-3-1"


class MeetingsErrorCode(StrEnum):
    """Machine-readable error codes for compliance and workflow violations."""

    NOT_FOUND = "MEETINGS.NOT_FOUND"
    INVALID_TRANSITION = "MEETINGS.INVALID_TRANSITION"
    INSUFFICIENT_NOTICE = "MEETINGS.INSUFFICIENT_NOTICE"
    NO_QUORUM = "MEETINGS.NO_QUORUM"
    CONCURRENT_UPDATE = "MEETINGS.CONCURRENT_UPDATE"

    EXEC_SESSION_UNCERTIFIED = "COMPLIANCE.EXEC_SESSION_UNCERTIFIED"
    VOTE_DURING_EXEC_SESSION = "COMPLIANCE.VOTE_DURING_EXEC_SESSION"
    RECUSED_MEMBER_VOTE = "COMPLIANCE.RECUSED_MEMBER_VOTE"
    PUBLICATION_RULE_NOT_FOUND = "COMPLIANCE.PUBLICATION_RULE_NOT_FOUND"

    ACTION_REQUIRES_SECOND = "WORKFLOW.ACTION_REQUIRES_SECOND"

    FINDINGS_NOT_FOUND = "FINDINGS.NOT_FOUND"
    CRITERION_NOT_FOUND = "FINDINGS.CRITERION_NOT_FOUND"
    CONDITION_NOT_FOUND = "FINDINGS.CONDITION_NOT_FOUND"
    FINDINGS_INCOMPLETE = "FINDINGS.INCOMPLETE"
    FINDINGS_NOT_SUPPORTED = "FINDINGS.NOT_SUPPORTED"
    FINDINGS_LOCKED = "FINDINGS.LOCKED"


@dataclass(frozen=True)
class ExecSessionBasis:
    """A statutory basis for holding an executive session.

    Attributes:
        code: Short code stored on the session.
        cite: Full statutory citation.
        description: Human-readable summary of the permitted subject.
    """

    code: str
    cite: str
    description: str


EXEC_SESSION_BASES: tuple[ExecSessionBasis, ...] = (
    ExecSessionBasis(
        "MISSING_CHILD",
        "IC 5-14-1.5-6.1(b)(1)",
        "Discussion of strategy for missing or exploited children",
    ),
    ExecSessionBasis(
        "INITIATION_OF_LITIGATION",
        "IC 5-14-1.5-6.1(b)(2)(B)",
        "Discussion of strategy with respect to initiation of litigation",
    ),
    ExecSessionBasis(
        "PENDING_LITIGATION",
        "IC 5-14-1.5-6.1(b)(2)(B)",
        "Discussion of strategy with respect to pending or threatened litigation",
    ),
    ExecSessionBasis(
        "PURCHASE_LEASE",
        "IC 5-14-1.5-6.1(b)(2)(D)",
        "Purchase or lease of real property before competitive or public offering",
    ),
    ExecSessionBasis(
        "COLLECTIVE_BARGAINING",
        "IC 5-14-1.5-6.1(b)(4)",
        "Strategy regarding collective bargaining or labor negotiations",
    ),
    ExecSessionBasis(
        "INDUSTRIAL_PROSPECT",
        "IC 5-14-1.5-6.1(b)(5)",
        "Information about a prospective employee or industrial/commercial prospect",
    ),
    ExecSessionBasis(
        "PERSONNEL",
        "IC 5-14-1.5-6.1(b)(6)",
        "Job performance evaluation of individual employees",
    ),
    ExecSessionBasis(
        "SECURITY",
        "IC 5-14-1.5-6.1(b)(7)",
        "Records classified as confidential by state or federal statute",
    ),
    ExecSessionBasis(
        "SCHOOL_SAFETY",
        "IC 5-14-1.5-6.1(b)(8)",
        "School safety and security measures",
    ),
)


def get_exec_session_basis(code: str) -> ExecSessionBasis | None:
    """Look up an executive session basis by its code."""
    return next((basis for basis in EXEC_SESSION_BASES if basis.code == code), None)
