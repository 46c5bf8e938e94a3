"""File validation service.

Checks uploaded files against size limits and an allow-list of MIME types.
Failures are reported as data in a ValidationResult, never raised. Empty
content is a file of size zero with an unknown type. Only cancellation and
absent input (no file name, no data or stream) escape a validation call.
"""

import asyncio
from typing import Any

import structlog

from magicsniff.detection.service import (
    FileTypeService,
    InvalidInputError,
    UnknownFileTypeError,
)
from magicsniff.signatures.models import FileType
from magicsniff.signatures.streams import AsyncStreamReader, raise_if_cancelled
from magicsniff.validation.models import ValidationErrors, ValidationResult


logger = structlog.get_logger(__name__)


def parse_allowed_mime_types(allowed_mime_types: str | None) -> list[str]:
    """Split a comma-separated allow-list, dropping blanks."""
    if not allowed_mime_types:
        return []
    return [item.strip() for item in allowed_mime_types.split(",") if item.strip()]


def is_file_type_allowed(mime_type: str, allowed_mime_types: str | None) -> bool:
    """Case-insensitive allow-list check; an empty list allows everything."""
    allowed = parse_allowed_mime_types(allowed_mime_types)
    if not allowed:
        return True
    mime = mime_type.lower()
    return any(item.lower() == mime for item in allowed)


class ValidationService:
    """Validates files against allowed MIME types and size constraints."""

    def __init__(self, file_type_service: FileTypeService) -> None:
        """Initialize validation service.

        Args:
            file_type_service: Service used for MIME type detection.
        """
        if file_type_service is None:
            msg = "file_type_service cannot be None"
            raise ValueError(msg)
        self.file_type_service = file_type_service

    def _check_size(
        self,
        file_name: str,
        size: int,
        max_file_size: int,
        min_file_size: int,
    ) -> ValidationErrors:
        errors = ValidationErrors.NONE

        if size > max_file_size:
            logger.warning(
                "file_too_large",
                file_name=file_name,
                file_size=size,
                max_file_size=max_file_size,
            )
            errors |= ValidationErrors.FILE_TOO_LARGE

        if size < min_file_size:
            logger.warning(
                "file_too_small",
                file_name=file_name,
                file_size=size,
                min_file_size=min_file_size,
            )
            errors |= ValidationErrors.FILE_TOO_SMALL

        return errors

    def _check_type(
        self,
        file_name: str,
        file_type: FileType,
        allowed_mime_types: str | None,
    ) -> ValidationErrors:
        if is_file_type_allowed(file_type.mime, allowed_mime_types):
            return ValidationErrors.NONE

        logger.warning(
            "file_type_not_allowed",
            file_name=file_name,
            mime_type=file_type.mime,
        )
        return ValidationErrors.FILE_TYPE_NOT_ALLOWED

    def _unknown_type(self, file_name: str, error: Exception) -> ValidationErrors:
        if isinstance(error, UnknownFileTypeError):
            logger.warning("unknown_file_type", file_name=file_name)
        elif isinstance(error, InvalidInputError):
            logger.warning("empty_file", file_name=file_name)
        else:
            logger.exception(
                "validation_error",
                file_name=file_name,
                error_type=type(error).__name__,
                error=str(error),
            )
        return ValidationErrors.FILE_TYPE_UNKNOWN

    @staticmethod
    def _build_result(file_name: str, errors: ValidationErrors) -> ValidationResult:
        result = ValidationResult()
        if errors != ValidationErrors.NONE:
            result.add_invalid_file(file_name, errors)
        return result

    def validate(
        self,
        file_name: str,
        file_data: bytes,
        allowed_mime_types: str | None,
        max_file_size: int,
        min_file_size: int = 0,
    ) -> ValidationResult:
        """Validate in-memory content.

        Args:
            file_name: Name of the file.
            file_data: Content of the file.
            allowed_mime_types: Comma-separated list of allowed MIME types.
            max_file_size: Maximum allowed size in bytes.
            min_file_size: Minimum allowed size in bytes.

        Returns:
            ValidationResult with one entry for the file if any check failed.

        Raises:
            InvalidInputError: If the file name is empty or the data is None.
        """
        if file_data is None:
            msg = "File data cannot be null or empty."
            raise InvalidInputError(msg, "file_data")

        logger.debug("validating_file", file_name=file_name, file_size=len(file_data))

        errors = self._check_size(file_name, len(file_data), max_file_size, min_file_size)

        try:
            file_type = self.file_type_service.get_mime_type(file_name, file_data)
        except InvalidInputError as e:
            if e.param != "file_data":
                raise
            errors |= self._unknown_type(file_name, e)
        except Exception as e:
            errors |= self._unknown_type(file_name, e)
        else:
            errors |= self._check_type(file_name, file_type, allowed_mime_types)

        return self._build_result(file_name, errors)

    async def validate_async(
        self,
        file_name: str,
        file_data: bytes,
        allowed_mime_types: str | None,
        max_file_size: int,
        min_file_size: int = 0,
        cancel_event: asyncio.Event | None = None,
    ) -> ValidationResult:
        """Async variant of validate honouring cancellation."""
        if file_data is None:
            msg = "File data cannot be null or empty."
            raise InvalidInputError(msg, "file_data")

        raise_if_cancelled(cancel_event)
        logger.debug("validating_file", file_name=file_name, file_size=len(file_data))

        errors = self._check_size(file_name, len(file_data), max_file_size, min_file_size)

        try:
            file_type = await self.file_type_service.get_mime_type_async(
                file_name, file_data, cancel_event
            )
        except InvalidInputError as e:
            if e.param != "file_data":
                raise
            errors |= self._unknown_type(file_name, e)
        except Exception as e:
            errors |= self._unknown_type(file_name, e)
        else:
            errors |= self._check_type(file_name, file_type, allowed_mime_types)

        return self._build_result(file_name, errors)

    async def validate_stream_async(
        self,
        file_name: str,
        stream: Any,
        allowed_mime_types: str | None,
        max_file_size: int,
        min_file_size: int = 0,
        cancel_event: asyncio.Event | None = None,
    ) -> ValidationResult:
        """Read the whole stream into memory, then validate it."""
        if stream is None:
            msg = "Stream cannot be null."
            raise InvalidInputError(msg, "stream")

        raise_if_cancelled(cancel_event)
        file_data = await AsyncStreamReader(stream).read_all(cancel_event)

        return await self.validate_async(
            file_name,
            file_data,
            allowed_mime_types,
            max_file_size,
            min_file_size,
            cancel_event,
        )

    async def validate_stream_early_exit_async(
        self,
        file_name: str,
        stream: Any,
        allowed_mime_types: str | None,
        max_file_size: int,
        min_file_size: int = 0,
        cancel_event: asyncio.Event | None = None,
    ) -> ValidationResult:
        """Validate a stream, checking its size before reading any content.

        On a seekable stream an oversized file is reported with
        FILE_TOO_LARGE alone and type detection is skipped. Otherwise type
        detection reads only the header and trailer windows of the stream.
        """
        if stream is None:
            msg = "Stream cannot be null."
            raise InvalidInputError(msg, "stream")

        logger.debug("validating_file_stream", file_name=file_name)
        raise_if_cancelled(cancel_event)

        errors = ValidationErrors.NONE
        reader = AsyncStreamReader(stream)

        if await reader.seekable():
            position = await reader.tell()
            try:
                stream_length = await reader.size()
            finally:
                await reader.seek(position)
            logger.debug("stream_length", file_name=file_name, stream_length=stream_length)

            if stream_length > max_file_size:
                errors = self._check_size(file_name, stream_length, max_file_size, 0)
                return self._build_result(file_name, errors)

            errors = self._check_size(file_name, stream_length, max_file_size, min_file_size)

        try:
            file_type = await self.file_type_service.detect_from_stream_async(
                file_name, stream, cancel_event
            )
        except InvalidInputError as e:
            if e.param != "file_data":
                raise
            errors |= self._unknown_type(file_name, e)
        except Exception as e:
            errors |= self._unknown_type(file_name, e)
        else:
            errors |= self._check_type(file_name, file_type, allowed_mime_types)

        return self._build_result(file_name, errors)
