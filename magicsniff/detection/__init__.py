"""File type detection entrypoints."""

from magicsniff.detection.service import (
    DetectionError,
    FileTypeService,
    InvalidInputError,
    UnknownFileTypeError,
)


__all__ = [
    "DetectionError",
    "FileTypeService",
    "InvalidInputError",
    "UnknownFileTypeError",
]
