"""Pydantic schemas for file detection and validation endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from magicsniff.signatures.models import FileType, FileTypeSignature, Signature
from magicsniff.validation.models import ValidationResult


class FileTypeResponse(BaseModel):
    """Detected file type."""

    model_config = ConfigDict(from_attributes=True)

    mime: str = Field(..., description="Detected MIME type")
    extension: str = Field(..., description="Lowercase extension with leading dot")

    @classmethod
    def from_file_type(cls, file_type: FileType) -> "FileTypeResponse":
        return cls(mime=file_type.mime, extension=file_type.extension)


class InvalidFileResponse(BaseModel):
    """A file that failed validation."""

    file_name: str
    errors: list[str] = Field(..., description="Names of the failed checks")


class ValidationResponse(BaseModel):
    """Validation outcome for an uploaded file."""

    has_failed: bool
    invalid_files: list[InvalidFileResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResponse":
        return cls(
            has_failed=result.has_failed,
            invalid_files=[
                InvalidFileResponse(
                    file_name=invalid.file_name,
                    errors=invalid.errors.to_list(),
                )
                for invalid in result.invalid_files
            ],
        )


class SignaturePattern(BaseModel):
    """Byte pattern rendered as hex."""

    value: str = Field(..., description="Pattern bytes as uppercase hex")
    offset: int

    @classmethod
    def from_signature(cls, signature: Signature) -> "SignaturePattern":
        return cls(value=signature.value.hex().upper(), offset=signature.offset)


class SignatureResponse(BaseModel):
    """One entry of the signature table."""

    extension: str
    mime_type: str
    headers: list[SignaturePattern]
    trailers: list[SignaturePattern] | None = None
    content_sniff_target: str | None = None

    @classmethod
    def from_signature(cls, entry: FileTypeSignature) -> "SignatureResponse":
        return cls(
            extension=entry.extension,
            mime_type=entry.mime_type,
            headers=[SignaturePattern.from_signature(h) for h in entry.headers],
            trailers=(
                [SignaturePattern.from_signature(t) for t in entry.trailers]
                if entry.trailers is not None
                else None
            ),
            content_sniff_target=entry.content_sniff_target,
        )


class SignatureListResponse(BaseModel):
    items: list[SignatureResponse]
    total: int


class FileErrorResponse(BaseModel):
    """Response model for detection errors."""

    error: bool = Field(default=True)
    message: str = Field(..., description="Error message")
    status_code: int
    request_id: str | None = None
