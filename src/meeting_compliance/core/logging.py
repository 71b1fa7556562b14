"""Loguru structured logging configuration.

Operational messages go to a human-readable stderr sink. Audit records for
compliance decisions are bound with ``json_output=True`` by
:func:`audit_logger` and go to a separate JSON sink instead.  Optionally
writes to a rotating log file when a ``log_dir`` is provided.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from meeting_compliance.lib.meetings import TenantContext

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks for the service and CLI.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_LOG_FORMAT,
        serialize=False,
        filter=lambda record: not record["extra"].get("json_output", False),
    )
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        serialize=True,
        filter=lambda record: record["extra"].get("json_output", False),
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "meeting-compliance.log",
            level=log_level.upper(),
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )


def audit_logger(tenant: TenantContext, **context: Any):
    """Logger for audit records of a tenant's compliance decisions.

    Records carry ``tenant_id``, ``user_id`` and ``context`` as extras and
    are emitted on the JSON sink only.
    """
    return logger.bind(json_output=True, tenant_id=tenant.tenant_id, user_id=tenant.user_id, **context)
