"""Dependencies for files module."""

from typing import Annotated

from fastapi import Depends

from magicsniff.detection.service import FileTypeService
from magicsniff.validation.service import ValidationService


# Service singletons; both are stateless
_file_type_service: FileTypeService | None = None
_validation_service: ValidationService | None = None


def get_file_type_service() -> FileTypeService:
    """Get file type service instance (singleton)."""
    global _file_type_service  # noqa: PLW0603

    if _file_type_service is None:
        _file_type_service = FileTypeService()

    return _file_type_service


def get_validation_service(
    file_type_service: Annotated[FileTypeService, Depends(get_file_type_service)],
) -> ValidationService:
    """Get validation service instance (singleton).

    Args:
        file_type_service: Detection service used by the validator.

    Returns:
        ValidationService instance.
    """
    global _validation_service  # noqa: PLW0603

    if _validation_service is None:
        _validation_service = ValidationService(file_type_service)

    return _validation_service


# Type aliases for dependency injection
FileTypeServiceDep = Annotated[FileTypeService, Depends(get_file_type_service)]
ValidationServiceDep = Annotated[ValidationService, Depends(get_validation_service)]
