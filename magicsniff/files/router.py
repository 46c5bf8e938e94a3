"""Router for file detection and validation endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from magicsniff.config.settings import Settings, get_settings
from magicsniff.detection.service import (
    DetectionError,
    InvalidInputError,
    UnknownFileTypeError,
)
from magicsniff.files.dependencies import FileTypeServiceDep, ValidationServiceDep
from magicsniff.files.schemas import (
    FileErrorResponse,
    FileTypeResponse,
    SignatureListResponse,
    SignatureResponse,
    ValidationResponse,
)
from magicsniff.signatures.table import get_file_signatures


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1/files", tags=["files"])


def handle_detection_error(error: DetectionError) -> HTTPException:
    """Convert DetectionError to HTTPException."""
    status_map = {
        "invalid_input": status.HTTP_400_BAD_REQUEST,
        "unknown_file_type": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    }
    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )


@router.get(
    "/signatures",
    response_model=SignatureListResponse,
    summary="List known file signatures",
)
async def list_signatures() -> SignatureListResponse:
    """Return the signature table used for detection."""
    items = [SignatureResponse.from_signature(entry) for entry in get_file_signatures()]
    return SignatureListResponse(items=items, total=len(items))


@router.post(
    "/detect",
    response_model=FileTypeResponse,
    responses={
        400: {"model": FileErrorResponse, "description": "Invalid input"},
        415: {"model": FileErrorResponse, "description": "Unknown file type"},
    },
    summary="Detect file type",
    description="Identify an uploaded file from its name and binary signature.",
)
async def detect_file_type(
    service: FileTypeServiceDep,
    file: Annotated[UploadFile, File(description="File to inspect")],
) -> FileTypeResponse:
    """Detect the type of an uploaded file.

    Only the header and trailer windows are read unless the format needs a
    content check.
    """
    try:
        file_type = await service.detect_from_stream_async(file.filename or "", file)
    except (InvalidInputError, UnknownFileTypeError) as e:
        raise handle_detection_error(e) from e

    logger.info(
        "file_type_detected",
        filename=file.filename,
        mime_type=file_type.mime,
    )
    return FileTypeResponse.from_file_type(file_type)


@router.post(
    "/validate",
    response_model=ValidationResponse,
    responses={
        400: {"model": FileErrorResponse, "description": "Invalid input"},
    },
    summary="Validate file",
    description="Check an uploaded file against size limits and allowed MIME types.",
)
async def validate_file(
    service: ValidationServiceDep,
    settings: Annotated[Settings, Depends(get_settings)],
    file: Annotated[UploadFile, File(description="File to validate")],
    allowed_mime_types: Annotated[
        str | None,
        Form(description="Comma-separated allowed MIME types (empty allows all)"),
    ] = None,
    max_file_size: Annotated[
        int | None,
        Form(description="Maximum size in bytes", ge=0),
    ] = None,
    min_file_size: Annotated[
        int | None,
        Form(description="Minimum size in bytes", ge=0),
    ] = None,
) -> ValidationResponse:
    """Validate an uploaded file, using configured defaults for omitted limits."""
    try:
        result = await service.validate_stream_early_exit_async(
            file.filename or "",
            file,
            allowed_mime_types
            if allowed_mime_types is not None
            else settings.upload_allowed_mime_types,
            max_file_size
            if max_file_size is not None
            else settings.upload_max_file_size,
            min_file_size
            if min_file_size is not None
            else settings.upload_min_file_size_bytes,
        )
    except InvalidInputError as e:
        raise handle_detection_error(e) from e

    return ValidationResponse.from_result(result)
