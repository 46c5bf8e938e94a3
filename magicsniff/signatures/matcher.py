"""Signature matching engine.

The claimed extension selects exactly one table entry; the content then has
to confirm it:

1. any header pattern must match at its offset from the start;
2. if the entry defines trailers, one of them must match at its offset from
   the end, and when a content sniff target is defined the decoded content
   must contain it;
3. a header match whose trailers all miss is still accepted when the
   content contains the sniff target.

Content alone never selects a type. A PDF named ``file.txt`` is not a PDF.
"""

import asyncio
from typing import Any

import structlog

from magicsniff.signatures.models import FileTypeSignature, Signature
from magicsniff.signatures.streams import AsyncStreamReader, raise_if_cancelled
from magicsniff.signatures.table import find_signature


logger = structlog.get_logger(__name__)

# Bytes read from each end of a stream. Headers or trailers that need more
# than this never match in streaming mode.
HEADER_WINDOW_SIZE = 1024


def get_extension(file_name: str | None) -> str | None:
    """Return the uppercase extension (with dot) of a file name.

    Returns None for empty names and names without an extension.
    """
    if not file_name:
        return None

    _, dot, suffix = file_name.rpartition(".")
    if not dot or not suffix or "/" in suffix or "\\" in suffix:
        return None
    return f".{suffix.upper()}"


def _header_matches(data: bytes, header: Signature) -> bool:
    # Too short to hold the pattern is a plain miss, never an error
    if len(data) < header.end:
        return False
    return data[header.offset : header.end] == header.value


def _trailer_matches(data: bytes, trailer: Signature) -> bool:
    start = len(data) - len(trailer.value) - trailer.offset
    if start < 0:
        return False
    return data[start : start + len(trailer.value)] == trailer.value


def _contains_text(data: bytes, target: str) -> bool:
    return target in data.decode("utf-8", errors="replace")


def _lookup(file_name: str | None) -> FileTypeSignature | None:
    extension = get_extension(file_name)
    if extension is None:
        return None
    return find_signature(extension)


def match_signature(file_name: str | None, data: bytes | None) -> FileTypeSignature | None:
    """Identify in-memory content, returning None when it is not recognised."""
    entry = _lookup(file_name)
    if entry is None or not data:
        return None

    target = entry.content_sniff_target

    for header in entry.headers:
        if not _header_matches(data, header):
            continue

        if entry.trailers is None:
            return entry

        for trailer in entry.trailers:
            if _trailer_matches(data, trailer):
                # The first trailer hit decides, together with the content check
                if not target:
                    return entry
                return entry if _contains_text(data, target) else None

        if target and _contains_text(data, target):
            return entry

    return None


async def _stream_contains_text(
    reader: AsyncStreamReader,
    target: str,
    cancel_event: asyncio.Event | None,
) -> bool:
    await reader.seek(0)
    content = await reader.read_all(cancel_event)
    return _contains_text(content, target)


async def _match_stream(
    entry: FileTypeSignature,
    reader: AsyncStreamReader,
    seekable: bool,
    cancel_event: asyncio.Event | None,
) -> FileTypeSignature | None:
    if seekable:
        await reader.seek(0)
    header_window = await reader.read_up_to(HEADER_WINDOW_SIZE, cancel_event)
    if not header_window:
        return None

    target = entry.content_sniff_target
    trailer_window: bytes | None = None

    for header in entry.headers:
        if not _header_matches(header_window, header):
            continue

        if entry.trailers is None:
            return entry

        if not seekable:
            logger.debug(
                "trailer_check_skipped",
                extension=entry.extension,
                reason="stream_not_seekable",
            )
            continue

        if trailer_window is None:
            raise_if_cancelled(cancel_event)
            length = await reader.size()
            await reader.seek(max(0, length - HEADER_WINDOW_SIZE))
            trailer_window = await reader.read_up_to(HEADER_WINDOW_SIZE, cancel_event)

        for trailer in entry.trailers:
            if _trailer_matches(trailer_window, trailer):
                if not target:
                    return entry
                if await _stream_contains_text(reader, target, cancel_event):
                    return entry
                return None

        if target and await _stream_contains_text(reader, target, cancel_event):
            return entry

    return None


async def match_signature_stream(
    file_name: str | None,
    stream: Any,
    cancel_event: asyncio.Event | None = None,
) -> FileTypeSignature | None:
    """Identify a stream while reading as little of it as possible.

    Only the first and last ``HEADER_WINDOW_SIZE`` bytes are read, plus the
    full content when a sniff target has to be confirmed. Trailer and
    content checks need a seekable stream; without one such entries cannot
    be confirmed and are reported as not found. The stream position is
    restored on every exit path when the stream is seekable.

    Raises:
        asyncio.CancelledError: If ``cancel_event`` is set before or between reads.
    """
    raise_if_cancelled(cancel_event)

    entry = _lookup(file_name)
    if entry is None:
        return None

    reader = AsyncStreamReader(stream)
    seekable = await reader.seekable()
    original_position = await reader.tell() if seekable else None

    try:
        return await _match_stream(entry, reader, seekable, cancel_event)
    finally:
        if original_position is not None:
            await reader.seek(original_position)
