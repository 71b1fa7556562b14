"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from meeting_compliance.core.config import get_settings
from meeting_compliance.core.logging import setup_logging
from meeting_compliance.lib.meetings import (
    ConcurrencyError,
    InvalidTransitionError,
    MeetingsError,
    MeetingsErrorCode,
    NotFoundError,
    RuleNotFoundError,
)

_STATUS_BY_CODE: dict[MeetingsErrorCode, int] = {
    MeetingsErrorCode.FINDINGS_LOCKED: status.HTTP_409_CONFLICT,
    MeetingsErrorCode.FINDINGS_NOT_SUPPORTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    MeetingsErrorCode.CRITERION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    MeetingsErrorCode.CONDITION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    MeetingsErrorCode.FINDINGS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def status_code_for(exc: MeetingsError) -> int:
    """Map a domain error to its HTTP status code."""
    if isinstance(exc, NotFoundError | RuleNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, InvalidTransitionError | ConcurrencyError):
        return status.HTTP_409_CONFLICT
    return _STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Configure logging on startup."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    logger.info(f"Meeting compliance API starting ({settings.environment}, timezone {settings.timezone})")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Meeting Compliance API",
        description="Indiana Open Door Law, publication deadline and findings-of-fact compliance checks",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register exception handlers
    @app.exception_handler(MeetingsError)
    async def meetings_error_handler(request: Request, exc: MeetingsError) -> JSONResponse:
        status_code = status_code_for(exc)
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    from meeting_compliance.api.router import create_router

    app.include_router(create_router(settings))

    return app
