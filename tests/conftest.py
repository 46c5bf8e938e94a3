"""Shared fixtures."""

import os
from collections.abc import Callable, Iterator

import pytest


os.environ.setdefault("MAGICSNIFF_ENVIRONMENT", "testing")
os.environ.setdefault("MAGICSNIFF_LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from magicsniff.signatures.models import FileTypeSignature  # noqa: E402


PDF_HEADER = b"%PDF"
PDF_TRAILER = b"\n%%EOF"


def build_signed_bytes(
    entry: FileTypeSignature,
    size: int = 1024,
    content: bytes = b"",
) -> bytes:
    """Zero-filled buffer carrying the entry's first header and first trailer.

    `content` is written right after the header area when given.
    """
    data = bytearray(size)
    header = entry.headers[0]
    data[header.offset : header.end] = header.value

    if content:
        start = max(header.end, 16)
        data[start : start + len(content)] = content

    if entry.trailers:
        trailer = entry.trailers[0]
        start = size - len(trailer.value) - trailer.offset
        data[start : start + len(trailer.value)] = trailer.value

    return bytes(data)


def build_pdf(size: int = 1024) -> bytes:
    """Minimal buffer accepted as a PDF."""
    data = bytearray(size)
    data[: len(PDF_HEADER)] = PDF_HEADER
    data[-len(PDF_TRAILER) :] = PDF_TRAILER
    return bytes(data)


@pytest.fixture
def signed_bytes() -> Callable[..., bytes]:
    return build_signed_bytes


@pytest.fixture
def pdf_bytes() -> bytes:
    return build_pdf()


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client over a freshly created application."""
    from magicsniff.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    return build_pdf
