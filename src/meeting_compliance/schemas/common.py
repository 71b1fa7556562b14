"""Common Pydantic v2 schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    statutory_cite: str | None = Field(default=None, description="Statute the violation relates to")
    details: dict[str, Any] = Field(default_factory=dict, description="Structured context for the error")


class ValidationResultResponse(BaseModel):
    """Outcome of an advisory compliance check."""

    model_config = {"from_attributes": True}

    valid: bool
    error_code: str | None = None
    message: str | None = None
    statutory_cite: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
