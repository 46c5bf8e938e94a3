"""Request middleware binding log context and timing each request."""

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from magicsniff.core.context import bind_request_context, clear_context


logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request/correlation ids for logging and echo them back.

    Uploads are logged with their declared Content-Length so oversized
    requests can be spotted before validation runs.
    """

    REQUEST_ID_HEADER = "X-Request-ID"
    CORRELATION_ID_HEADER = "X-Correlation-ID"

    def __init__(
        self,
        app: ASGIApp,
        log_requests: bool = True,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.log_requests = log_requests
        self.exclude_paths = tuple(exclude_paths or ("/health",))

    def _is_logged(self, path: str) -> bool:
        return self.log_requests and not path.startswith(self.exclude_paths)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        correlation_id = request.headers.get(self.CORRELATION_ID_HEADER)
        request_id = bind_request_context(
            request.headers.get(self.REQUEST_ID_HEADER), correlation_id
        )
        request.state.request_id = request_id

        path = request.url.path
        should_log = self._is_logged(path)
        if should_log:
            logger.info(
                "request_started",
                method=request.method,
                path=path,
                content_length=request.headers.get("content-length"),
            )

        try:
            response = await call_next(request)
            if should_log:
                log = logger.warning if response.status_code >= 400 else logger.info
                log(
                    "request_completed",
                    method=request.method,
                    path=path,
                    status_code=response.status_code,
                    duration_ms=_elapsed_ms(started),
                )
        except Exception:
            logger.exception(
                "request_failed",
                method=request.method,
                path=path,
                duration_ms=_elapsed_ms(started),
            )
            raise
        finally:
            clear_context()

        response.headers[self.REQUEST_ID_HEADER] = request_id
        if correlation_id:
            response.headers[self.CORRELATION_ID_HEADER] = correlation_id
        return response
