"""Domain exceptions raised by mutating meeting operations.

Advisory checks return ``ValidationResult`` instead; these exceptions are
reserved for hard preconditions (state transitions, recording votes,
adopting findings).
"""

from collections.abc import Iterable
from typing import Any

from meeting_compliance.lib.meetings.constants import MeetingsErrorCode


class MeetingsError(Exception):
    """Base class for meeting compliance errors.

    Args:
        code: Machine-readable error code.
        message: Human-readable description.
        statutory_cite: Optional statute the violation relates to.
        details: Optional structured payload for logging and UI.
    """

    def __init__(
        self,
        code: MeetingsErrorCode,
        message: str,
        statutory_cite: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.statutory_cite = statutory_cite
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error into the standard error response body."""
        return {
            "code": str(self.code),
            "message": self.message,
            "statutory_cite": self.statutory_cite,
            "details": self.details,
        }


class InvalidTransitionError(MeetingsError):
    """Raised when a status change is not listed in the entity's transition table.

    Args:
        entity: Name of the governed entity (e.g. "meeting").
        from_status: Current status.
        to_status: Attempted target status.
        allowed: Statuses reachable from ``from_status``.
    """

    def __init__(self, entity: str, from_status: str, to_status: str, allowed: Iterable[str]) -> None:
        self.entity = entity
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = frozenset(allowed)
        valid = ", ".join(sorted(str(s) for s in self.allowed)) or "none (terminal state)"
        super().__init__(
            MeetingsErrorCode.INVALID_TRANSITION,
            f"Invalid {entity} status transition from {from_status} to {to_status}. Valid transitions: {valid}",
            details={
                "entity": entity,
                "from": str(from_status),
                "to": str(to_status),
                "allowed": sorted(str(s) for s in self.allowed),
            },
        )


class ComplianceError(MeetingsError):
    """Raised when a statutory gate fails during a mutating operation."""


class FindingsError(MeetingsError):
    """Raised when a findings-of-fact operation violates a precondition."""


class RuleNotFoundError(MeetingsError):
    """Raised when no publication rule exists for a notice reason."""

    def __init__(self, notice_reason: str) -> None:
        self.notice_reason = notice_reason
        super().__init__(
            MeetingsErrorCode.PUBLICATION_RULE_NOT_FOUND,
            f"No publication rule found for reason: {notice_reason}",
            details={"notice_reason": str(notice_reason)},
        )


class NotFoundError(MeetingsError):
    """Raised by stores and services when an entity does not exist for the tenant."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            MeetingsErrorCode.NOT_FOUND,
            f"{entity} not found: {entity_id}",
            details={"entity": entity, "id": entity_id},
        )


class ConcurrencyError(MeetingsError):
    """Raised when an update is based on a stale version of an entity."""

    def __init__(self, entity: str, entity_id: str, expected: int, actual: int) -> None:
        super().__init__(
            MeetingsErrorCode.CONCURRENT_UPDATE,
            f"{entity} {entity_id} was modified concurrently (expected version {expected}, found {actual})",
            details={"entity": entity, "id": entity_id, "expected_version": expected, "actual_version": actual},
        )
