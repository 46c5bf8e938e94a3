"""Tests for streaming signature matching."""

import asyncio
import io
import time
from collections.abc import Callable

import pytest

from magicsniff.signatures.matcher import HEADER_WINDOW_SIZE, match_signature_stream
from magicsniff.signatures.streams import AsyncStreamReader
from magicsniff.signatures.table import FILE_SIGNATURES, find_signature


class NonSeekableStream(io.RawIOBase):
    """Forward-only stream, like a socket or pipe."""

    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


class TrickleStream(io.BytesIO):
    """Seekable stream returning at most a few bytes per read."""

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0:
            return super().read()
        return super().read(min(size, 7))


class AsyncBytesStream:
    """aiofiles-style stream with coroutine methods."""

    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    async def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._buffer.seek(offset, whence)

    async def tell(self) -> int:
        return self._buffer.tell()

    async def seekable(self) -> bool:
        return True


class FailingStream(io.BytesIO):
    """Stream whose reads fail after the position was moved."""

    def read(self, size: int | None = -1) -> bytes:
        msg = "disk error"
        raise OSError(msg)


def _large_pdf(size: int = 10 * HEADER_WINDOW_SIZE) -> bytes:
    data = bytearray(size)
    data[:4] = b"%PDF"
    data[-6:] = b"\n%%EOF"
    return bytes(data)


class TestMatchSignatureStream:
    """Tests for match_signature_stream."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entry", FILE_SIGNATURES, ids=[e.extension for e in FILE_SIGNATURES]
    )
    async def test_every_entry_detects_its_own_signature(
        self,
        entry,
        signed_bytes: Callable[..., bytes],
    ) -> None:
        content = (entry.content_sniff_target or "").encode()
        stream = io.BytesIO(signed_bytes(entry, content=content))

        result = await match_signature_stream(f"f{entry.extension}", stream)

        assert result is entry

    @pytest.mark.asyncio
    async def test_large_pdf_only_edges_needed(self) -> None:
        stream = io.BytesIO(_large_pdf())
        result = await match_signature_stream("big.pdf", stream)
        assert result is find_signature(".pdf")

    @pytest.mark.asyncio
    async def test_wrong_extension(self, pdf_bytes: bytes) -> None:
        assert await match_signature_stream("x.txt", io.BytesIO(pdf_bytes)) is None

    @pytest.mark.asyncio
    async def test_empty_stream(self) -> None:
        assert await match_signature_stream("x.pdf", io.BytesIO()) is None

    @pytest.mark.asyncio
    async def test_zero_bytes_not_found(self) -> None:
        assert await match_signature_stream("x.pdf", io.BytesIO(bytes(4096))) is None

    @pytest.mark.asyncio
    async def test_header_at_offset_inside_window(self) -> None:
        """Offset headers are read from the first window."""
        data = bytearray(4096)
        data[512:516] = b"\xfd\xff\xff\xff"
        assert await match_signature_stream("x.xls", io.BytesIO(bytes(data))) is not None

        short = bytearray(516)
        short[512:516] = b"\xfd\xff\xff\xff"
        assert await match_signature_stream("x.xls", io.BytesIO(bytes(short))) is not None

    @pytest.mark.asyncio
    async def test_short_reads_are_completed(self) -> None:
        stream = TrickleStream(_large_pdf())
        assert await match_signature_stream("x.pdf", stream) is find_signature(".pdf")

    @pytest.mark.asyncio
    async def test_async_stream(self) -> None:
        stream = AsyncBytesStream(_large_pdf())
        assert await match_signature_stream("x.pdf", stream) is find_signature(".pdf")

    @pytest.mark.asyncio
    async def test_content_sniff_reads_whole_stream(self) -> None:
        data = bytearray(5 * HEADER_WINDOW_SIZE)
        data[:8] = bytes.fromhex("504B030414000600")
        data[2000:2017] = b"word/document.xml"
        data[-22:-18] = b"PK\x05\x06"
        result = await match_signature_stream("a.docx", io.BytesIO(bytes(data)))
        assert result is find_signature(".docx")

    @pytest.mark.asyncio
    async def test_content_sniff_target_missing(self) -> None:
        data = bytearray(5 * HEADER_WINDOW_SIZE)
        data[:8] = bytes.fromhex("504B030414000600")
        data[-22:-18] = b"PK\x05\x06"
        assert await match_signature_stream("a.docx", io.BytesIO(bytes(data))) is None


class TestNonSeekableStreams:
    """Trailer and content checks need a seekable stream."""

    @pytest.mark.asyncio
    async def test_header_only_format_detected(self) -> None:
        stream = NonSeekableStream(b"BM" + bytes(100))
        assert await match_signature_stream("x.bmp", stream) is find_signature(".bmp")

    @pytest.mark.asyncio
    async def test_trailer_format_unconfirmed(self, pdf_bytes: bytes) -> None:
        stream = NonSeekableStream(pdf_bytes)
        assert await match_signature_stream("x.pdf", stream) is None


class TestStreamPosition:
    """The stream position is restored on every outcome."""

    @pytest.mark.asyncio
    async def test_restored_after_match(self) -> None:
        stream = io.BytesIO(_large_pdf())
        stream.seek(123)
        assert await match_signature_stream("x.pdf", stream) is not None
        assert stream.tell() == 123

    @pytest.mark.asyncio
    async def test_restored_after_miss(self) -> None:
        stream = io.BytesIO(bytes(4096))
        stream.seek(10)
        assert await match_signature_stream("x.pdf", stream) is None
        assert stream.tell() == 10

    @pytest.mark.asyncio
    async def test_restored_after_content_sniff(self) -> None:
        data = bytearray(4096)
        data[:8] = bytes.fromhex("504B030414000600")
        data[-22:-18] = b"PK\x05\x06"
        stream = io.BytesIO(bytes(data))
        stream.seek(42)
        assert await match_signature_stream("a.xlsx", stream) is None
        assert stream.tell() == 42

    @pytest.mark.asyncio
    async def test_restored_after_error(self) -> None:
        stream = FailingStream(_large_pdf())
        stream.seek(5)
        with pytest.raises(OSError, match="disk error"):
            await match_signature_stream("x.pdf", stream)
        assert stream.tell() == 5

    @pytest.mark.asyncio
    async def test_restored_after_cancellation(self) -> None:
        cancel_event = asyncio.Event()

        class CancelOnRead(io.BytesIO):
            def read(self, size: int | None = -1) -> bytes:
                cancel_event.set()
                return super().read(min(size, 16) if size and size > 0 else size)

        stream = CancelOnRead(_large_pdf())
        stream.seek(7)
        with pytest.raises(asyncio.CancelledError):
            await match_signature_stream("x.pdf", stream, cancel_event)
        assert stream.tell() == 7


class SlowStream(io.BytesIO):
    """Blocking stream whose reads take a while to complete."""

    def read(self, size: int | None = -1) -> bytes:
        time.sleep(0.3)
        return super().read(size)


class TestCancellation:
    """Tests for cooperative cancellation."""

    @pytest.mark.asyncio
    async def test_task_cancelled_during_blocking_read(self) -> None:
        """The in-flight read lands before the position is restored."""
        stream = SlowStream(_large_pdf())
        stream.seek(100)

        task = asyncio.create_task(match_signature_stream("x.pdf", stream))
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert stream.tell() == 100

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, pdf_bytes: bytes) -> None:
        cancel_event = asyncio.Event()
        cancel_event.set()
        stream = io.BytesIO(pdf_bytes)

        with pytest.raises(asyncio.CancelledError):
            await match_signature_stream("x.pdf", stream, cancel_event)
        assert stream.tell() == 0

    @pytest.mark.asyncio
    async def test_not_cancelled(self, pdf_bytes: bytes) -> None:
        cancel_event = asyncio.Event()
        result = await match_signature_stream("x.pdf", io.BytesIO(pdf_bytes), cancel_event)
        assert result is find_signature(".pdf")


class TestAsyncStreamReader:
    """Tests for the stream adapter."""

    def test_none_rejected(self) -> None:
        with pytest.raises(ValueError, match="None"):
            AsyncStreamReader(None)

    @pytest.mark.asyncio
    async def test_size_and_read_up_to(self) -> None:
        reader = AsyncStreamReader(TrickleStream(b"0123456789" * 10))
        assert await reader.seekable() is True
        assert await reader.size() == 100
        await reader.seek(0)
        assert await reader.read_up_to(25) == (b"0123456789" * 3)[:25]

    @pytest.mark.asyncio
    async def test_read_all(self) -> None:
        reader = AsyncStreamReader(io.BytesIO(b"abc" * 50_000))
        assert len(await reader.read_all()) == 150_000

    @pytest.mark.asyncio
    async def test_object_without_seekable(self) -> None:
        class ReadOnly:
            def read(self, size: int = -1) -> bytes:
                return b""

        assert await AsyncStreamReader(ReadOnly()).seekable() is False

    @pytest.mark.asyncio
    async def test_upload_file_unwrapped(self) -> None:
        from starlette.datastructures import UploadFile

        upload = UploadFile(file=io.BytesIO(_large_pdf()), filename="x.pdf")
        assert await match_signature_stream("x.pdf", upload) is find_signature(".pdf")
