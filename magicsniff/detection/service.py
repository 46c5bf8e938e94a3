"""File type detection service.

Fail-fast entrypoints over the signature matcher: invalid input and
unrecognised content are raised as errors, while the matcher itself only
ever answers "found" or "not found".
"""

import asyncio
from typing import Any

import structlog

from magicsniff.signatures.matcher import match_signature, match_signature_stream
from magicsniff.signatures.models import FileType, FileTypeSignature
from magicsniff.signatures.streams import AsyncStreamReader, raise_if_cancelled


logger = structlog.get_logger(__name__)


class DetectionError(Exception):
    """Base error for detection operations."""

    def __init__(self, message: str, code: str = "detection_error") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidInputError(DetectionError):
    """Error when the file name, data or stream is missing."""

    def __init__(self, message: str, param: str) -> None:
        self.param = param
        super().__init__(message, "invalid_input")


class UnknownFileTypeError(DetectionError):
    """Error when the content does not match the claimed file type."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Unknown file type for file {file_name}", "unknown_file_type")


def _require_file_name(file_name: str | None) -> None:
    if not file_name:
        msg = "File name cannot be null or empty."
        raise InvalidInputError(msg, "file_name")


def _require_data(data: bytes | None) -> None:
    if not data:
        msg = "File data cannot be null or empty."
        raise InvalidInputError(msg, "file_data")


def _require_stream(stream: Any) -> None:
    if stream is None:
        msg = "Stream cannot be null."
        raise InvalidInputError(msg, "stream")


class FileTypeService:
    """Detects the MIME type of files from their name and content."""

    def _to_file_type(
        self,
        file_name: str,
        signature: FileTypeSignature | None,
    ) -> FileType:
        if signature is None:
            logger.debug("unknown_file_type", file_name=file_name)
            raise UnknownFileTypeError(file_name)

        file_type = FileType.from_signature(signature)
        logger.debug(
            "mime_type_detected",
            file_name=file_name,
            mime_type=file_type.mime,
        )
        return file_type

    def get_mime_type(self, file_name: str, file_data: bytes) -> FileType:
        """Determine the file type of in-memory content.

        Args:
            file_name: File name; its extension selects the expected signature.
            file_data: File content.

        Returns:
            The detected FileType.

        Raises:
            InvalidInputError: If file_name or file_data is empty.
            UnknownFileTypeError: If the content does not match the extension.
        """
        _require_file_name(file_name)
        _require_data(file_data)

        logger.debug(
            "detecting_mime_type",
            file_name=file_name,
            file_size=len(file_data),
        )
        return self._to_file_type(file_name, match_signature(file_name, file_data))

    async def get_mime_type_async(
        self,
        file_name: str,
        file_data: bytes,
        cancel_event: asyncio.Event | None = None,
    ) -> FileType:
        """Async variant of get_mime_type honouring cancellation."""
        raise_if_cancelled(cancel_event)
        return self.get_mime_type(file_name, file_data)

    async def get_mime_type_from_stream_async(
        self,
        file_name: str,
        stream: Any,
        cancel_event: asyncio.Event | None = None,
    ) -> FileType:
        """Read the whole stream from its current position and detect its type.

        Raises:
            InvalidInputError: If file_name is empty, stream is None or empty.
            UnknownFileTypeError: If the content does not match the extension.
            asyncio.CancelledError: If cancellation was requested.
        """
        _require_file_name(file_name)
        _require_stream(stream)
        raise_if_cancelled(cancel_event)

        data = await AsyncStreamReader(stream).read_all(cancel_event)
        return await self.get_mime_type_async(file_name, data, cancel_event)

    async def detect_from_stream_async(
        self,
        file_name: str,
        stream: Any,
        cancel_event: asyncio.Event | None = None,
    ) -> FileType:
        """Detect the type of a stream reading only the bytes needed.

        Raises:
            InvalidInputError: If file_name is empty or stream is None.
            UnknownFileTypeError: If the content does not match the extension.
            asyncio.CancelledError: If cancellation was requested.
        """
        _require_file_name(file_name)
        _require_stream(stream)

        logger.debug("detecting_mime_type_from_stream", file_name=file_name)
        signature = await match_signature_stream(file_name, stream, cancel_event)
        return self._to_file_type(file_name, signature)
