"""HTTP endpoints for file type detection and validation."""

from magicsniff.files.router import router


__all__ = ["router"]
