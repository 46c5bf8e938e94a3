"""Identify files by their binary signatures and validate uploads."""

from magicsniff.detection import (
    DetectionError,
    FileTypeService,
    InvalidInputError,
    UnknownFileTypeError,
)
from magicsniff.signatures import (
    FileType,
    FileTypeSignature,
    Signature,
    get_file_signatures,
    match_signature,
    match_signature_stream,
)
from magicsniff.validation import (
    InvalidFile,
    ValidationErrors,
    ValidationResult,
    ValidationService,
)


__version__ = "0.1.0"

__all__ = [
    "DetectionError",
    "FileType",
    "FileTypeService",
    "FileTypeSignature",
    "InvalidFile",
    "InvalidInputError",
    "Signature",
    "UnknownFileTypeError",
    "ValidationErrors",
    "ValidationResult",
    "ValidationService",
    "get_file_signatures",
    "match_signature",
    "match_signature_stream",
]
