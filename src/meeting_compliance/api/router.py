"""Root API router with /api/v1 prefix."""

from fastapi import APIRouter

from meeting_compliance.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from meeting_compliance.api.v1.compliance import compliance_router
    from meeting_compliance.api.v1.deadlines import deadlines_router
    from meeting_compliance.api.v1.findings import findings_router
    from meeting_compliance.api.v1.transitions import transitions_router
    from meeting_compliance.api.v1.votes import votes_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(deadlines_router)
    root_router.include_router(transitions_router)
    root_router.include_router(votes_router)
    root_router.include_router(compliance_router)
    root_router.include_router(findings_router)

    return root_router
