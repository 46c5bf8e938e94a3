"""Signature data model.

Value objects describing the byte patterns that identify a file format and
the detected file type returned to callers. Everything here is immutable so
the signature table can be shared freely between concurrent callers.
"""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Signature:
    """Byte pattern expected at a fixed offset.

    For headers the offset counts from the start of the file, for trailers
    it counts back from the end of the file.
    """

    value: bytes
    offset: int = 0

    def __post_init__(self) -> None:
        if self.offset < 0:
            msg = "Signature offset cannot be negative"
            raise ValueError(msg)
        if not self.value:
            msg = "Signature value cannot be empty"
            raise ValueError(msg)

    @property
    def end(self) -> int:
        """Number of bytes needed before/after the file edge to hold the pattern."""
        return self.offset + len(self.value)


@dataclass(frozen=True, slots=True)
class FileTypeSignature:
    """Signature definition for a single extension."""

    extension: str
    mime_type: str
    headers: tuple[Signature, ...]
    trailers: tuple[Signature, ...] | None = None
    content_sniff_target: str | None = None

    def __post_init__(self) -> None:
        if not self.headers:
            msg = f"Signature for {self.extension} needs at least one header"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FileType:
    """Detected file type (MIME plus lowercase extension with leading dot)."""

    mime: str
    extension: str

    # Well-known types, set below the class body
    PDF: ClassVar["FileType"]
    DOC: ClassVar["FileType"]
    DOCX: ClassVar["FileType"]
    RTF: ClassVar["FileType"]
    XLS: ClassVar["FileType"]
    XLSX: ClassVar["FileType"]
    JPEG: ClassVar["FileType"]
    PNG: ClassVar["FileType"]
    GIF: ClassVar["FileType"]
    MP4: ClassVar["FileType"]
    MP4V: ClassVar["FileType"]
    FLV: ClassVar["FileType"]
    BMP: ClassVar["FileType"]

    @classmethod
    def from_signature(cls, signature: FileTypeSignature) -> "FileType":
        """Build the result value for a matched signature."""
        return cls(mime=signature.mime_type, extension=signature.extension.lower())


FileType.PDF = FileType("application/pdf", ".pdf")
FileType.DOC = FileType("application/msword", ".doc")
FileType.DOCX = FileType(
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".docx",
)
FileType.RTF = FileType("application/rtf", ".rtf")
FileType.XLS = FileType("application/vnd.ms-excel", ".xls")
FileType.XLSX = FileType(
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xlsx",
)
FileType.JPEG = FileType("image/jpeg", ".jpg")
FileType.PNG = FileType("image/png", ".png")
FileType.GIF = FileType("image/gif", ".gif")
FileType.MP4 = FileType("video/mp4", ".mp4")
FileType.MP4V = FileType("video/mp4v-es", ".mp4v")
FileType.FLV = FileType("video/x-flv", ".flv")
FileType.BMP = FileType("image/bmp", ".bmp")
