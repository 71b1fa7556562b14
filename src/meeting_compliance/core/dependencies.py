"""FastAPI dependency injection for settings-derived compliance services.

Provides the publication rule registry and a ``DeadlineCalculator`` configured
from ``Settings`` (timezone, fallback submission lead time and cutoff).
"""

from typing import Annotated

from fastapi import Depends

from meeting_compliance.core.config import Settings, get_settings
from meeting_compliance.lib.publication import DeadlineCalculator, PublicationRuleRegistry, default_indiana_rules


def build_deadline_calculator(
    settings: Settings, registry: PublicationRuleRegistry | None = None
) -> DeadlineCalculator:
    """Build a deadline calculator bound to the configured jurisdiction settings."""
    return DeadlineCalculator(
        registry=registry if registry is not None else default_indiana_rules(),
        tz=settings.tzinfo,
        default_submission_lead_days=settings.default_submission_lead_days,
        default_submission_time=settings.default_submission_time,
        scan_days=settings.publication_scan_days,
    )


def get_rule_registry() -> PublicationRuleRegistry:
    """Return the publication rule registry used by API requests."""
    return default_indiana_rules()


def get_deadline_calculator(
    settings: Annotated[Settings, Depends(get_settings)],
    registry: Annotated[PublicationRuleRegistry, Depends(get_rule_registry)],
) -> DeadlineCalculator:
    """Build a deadline calculator from application settings.

    Args:
        settings: Application settings.
        registry: Publication rules to calculate against.

    Returns:
        A calculator bound to the configured jurisdiction timezone.
    """
    return build_deadline_calculator(settings, registry)
