"""Uniform async access to sync and async binary streams.

Signature matching over a stream only needs read/seek/tell. Plain file
objects (BytesIO, open files, SpooledTemporaryFile) are driven through
worker threads so slow disks never block the event loop; async file
objects (aiofiles style) are awaited directly. Starlette's UploadFile is
unwrapped to its underlying spooled file.
"""

import asyncio
import inspect
import io
from typing import Any


READ_CHUNK_SIZE = 64 * 1024


def raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    """Abort the current operation if cancellation was requested."""
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError


class AsyncStreamReader:
    """Awaitable read/seek/tell facade over a binary stream."""

    def __init__(self, stream: Any) -> None:
        if stream is None:
            msg = "Stream cannot be None"
            raise ValueError(msg)

        # UploadFile exposes coroutine read/seek but no tell; use its file
        if inspect.iscoroutinefunction(getattr(stream, "read", None)) and hasattr(
            stream, "file"
        ):
            stream = stream.file

        self._stream = stream
        self._is_async = inspect.iscoroutinefunction(getattr(stream, "read", None))

    async def _call(self, name: str, *args: Any) -> Any:
        method = getattr(self._stream, name)
        if self._is_async:
            result = method(*args)
            if not inspect.isawaitable(result):
                return result
            pending = asyncio.ensure_future(result)
        else:
            pending = asyncio.ensure_future(asyncio.to_thread(method, *args))

        # A worker thread cannot be interrupted; let the call land before
        # the cancellation unwinds, so callers restore a settled position.
        try:
            return await asyncio.shield(pending)
        except asyncio.CancelledError:
            await asyncio.wait([pending])
            raise

    async def seekable(self) -> bool:
        """Whether the stream supports random access."""
        if not hasattr(self._stream, "seekable"):
            return False
        try:
            return bool(await self._call("seekable"))
        except (OSError, ValueError):
            return False

    async def read(self, size: int) -> bytes:
        return await self._call("read", size)

    async def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return await self._call("seek", offset, whence)

    async def tell(self) -> int:
        return await self._call("tell")

    async def size(self) -> int:
        """Total stream length; leaves the position at the end of the stream."""
        return await self.seek(0, io.SEEK_END)

    async def read_up_to(
        self,
        size: int,
        cancel_event: asyncio.Event | None = None,
    ) -> bytes:
        """Read until `size` bytes were collected or the stream is exhausted.

        Streams may return short reads, so keep reading until either limit.
        """
        chunks: list[bytes] = []
        remaining = size
        while remaining > 0:
            raise_if_cancelled(cancel_event)
            chunk = await self.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    async def read_all(self, cancel_event: asyncio.Event | None = None) -> bytes:
        """Read from the current position to the end of the stream."""
        buffer = bytearray()
        while True:
            raise_if_cancelled(cancel_event)
            chunk = await self.read(READ_CHUNK_SIZE)
            if not chunk:
                return bytes(buffer)
            buffer.extend(chunk)
