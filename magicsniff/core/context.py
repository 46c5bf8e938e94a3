"""Per-request logging context.

Request and correlation ids live in structlog's contextvars, so the
``merge_contextvars`` processor stamps them on every event logged while a
file is detected or validated.
"""

from uuid import uuid4

import structlog


REQUEST_ID_KEY = "request_id"
CORRELATION_ID_KEY = "correlation_id"


def bind_request_context(
    request_id: str | None = None,
    correlation_id: str | None = None,
) -> str:
    """Bind ids for the current request, generating a request id if missing.

    Returns:
        The bound request id.
    """
    rid = request_id or str(uuid4())
    values = {REQUEST_ID_KEY: rid}
    if correlation_id:
        values[CORRELATION_ID_KEY] = correlation_id
    structlog.contextvars.bind_contextvars(**values)
    return rid


def get_request_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(REQUEST_ID_KEY)


def get_correlation_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID_KEY)


def clear_context() -> None:
    """Drop everything bound for the finished request."""
    structlog.contextvars.clear_contextvars()
