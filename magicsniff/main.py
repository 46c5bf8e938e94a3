"""magicsniff API - file type detection and upload validation service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from magicsniff.config import get_settings
from magicsniff.core.context import get_request_id
from magicsniff.core.logging import configure_structlog, get_logger
from magicsniff.core.middleware import RequestContextMiddleware
from magicsniff.files import router as files_router
from magicsniff.health import router as health_router
from magicsniff.signatures.table import get_file_signatures


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        signatures=len(get_file_signatures()),
    )

    yield

    logger.info("shutting_down_application")


def _get_request_id_safe(request: Request) -> str | None:
    """Get request_id from request state or context."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return get_request_id()


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    **extra: object,
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": message,
            "status_code": status_code,
            "request_id": _get_request_id_safe(request),
            **extra,
        },
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_structlog(settings)

    # Never let Starlette render stack traces; handlers below log them instead
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="File type detection by binary signature",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Handle HTTP exceptions with safe error messages."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )
        message = (
            str(exc.detail)
            if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
            else "Internal server error"
        )
        return _error_response(request, exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Handle request validation errors."""
        logger.warning(
            "request_validation_error",
            errors=exc.errors(),
            path=request.url.path,
            method=request.method,
        )
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Validation error",
            details=[
                {
                    "field": ".".join(str(loc) for loc in err.get("loc", [])),
                    "message": err.get("msg", "Invalid value"),
                }
                for err in exc.errors()
            ],
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler; details are logged, never returned."""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again later.",
        )

    app.include_router(health_router)
    app.include_router(files_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {
            "message": "magicsniff API",
            "version": settings.app_version,
        }

    return app


app = create_app()
