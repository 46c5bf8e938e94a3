"""File validation against size limits and MIME allow-lists."""

from magicsniff.validation.models import InvalidFile, ValidationErrors, ValidationResult
from magicsniff.validation.service import (
    ValidationService,
    is_file_type_allowed,
    parse_allowed_mime_types,
)


__all__ = [
    "InvalidFile",
    "ValidationErrors",
    "ValidationResult",
    "ValidationService",
    "is_file_type_allowed",
    "parse_allowed_mime_types",
]
