"""File signature table and matching engine."""

from magicsniff.signatures.matcher import (
    HEADER_WINDOW_SIZE,
    get_extension,
    match_signature,
    match_signature_stream,
)
from magicsniff.signatures.models import FileType, FileTypeSignature, Signature
from magicsniff.signatures.table import (
    FILE_SIGNATURES,
    find_signature,
    get_file_signatures,
)


__all__ = [
    "FILE_SIGNATURES",
    "HEADER_WINDOW_SIZE",
    "FileType",
    "FileTypeSignature",
    "Signature",
    "find_signature",
    "get_extension",
    "get_file_signatures",
    "match_signature",
    "match_signature_stream",
]
