"""Validation result value objects."""

from dataclasses import dataclass, field
from enum import IntFlag


class ValidationErrors(IntFlag):
    """Reasons a file failed validation; flags combine."""

    NONE = 0
    FILE_TYPE_NOT_ALLOWED = 1 << 0
    FILE_TOO_LARGE = 1 << 1
    FILE_TOO_SMALL = 1 << 2
    FILE_TYPE_UNKNOWN = 1 << 3

    def to_list(self) -> list[str]:
        """Names of the set flags, lowercase, in declaration order."""
        return [
            flag.name.lower()
            for flag in ValidationErrors
            if flag and flag.name and flag in self
        ]


@dataclass(frozen=True)
class InvalidFile:
    """A file that failed validation together with every reason."""

    file_name: str
    errors: ValidationErrors


@dataclass
class ValidationResult:
    """Outcome of validating one or more files."""

    invalid_files: list[InvalidFile] = field(default_factory=list)

    @property
    def has_failed(self) -> bool:
        return len(self.invalid_files) > 0

    def add_invalid_file(self, file_name: str, errors: ValidationErrors) -> None:
        self.invalid_files.append(InvalidFile(file_name, errors))
