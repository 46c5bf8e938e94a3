# Core infrastructure
from magicsniff.core.context import (
    bind_request_context,
    clear_context,
    get_correlation_id,
    get_request_id,
)
from magicsniff.core.logging import configure_structlog, get_logger
from magicsniff.core.middleware import RequestContextMiddleware


__all__ = [
    "RequestContextMiddleware",
    "bind_request_context",
    "clear_context",
    "configure_structlog",
    "get_correlation_id",
    "get_logger",
    "get_request_id",
]
