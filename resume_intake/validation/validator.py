"""Format and size validation for incoming files (pure, no side effects)."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from resume_intake.validation import errors
from resume_intake.validation.models import FileFormatSpec, RawInput, UploadError


@dataclass(frozen=True)
class BatchValidation:
    """Outcome of validating one submitted batch."""

    valid_files: list[RawInput] = field(default_factory=list)
    file_errors: list[UploadError] = field(default_factory=list)
    batch_error: UploadError | None = None

    @property
    def accepted_files(self) -> list[RawInput]:
        """Files that may enter the pipeline; none when the batch was rejected."""
        if self.batch_error is not None:
            return []
        return self.valid_files


def match_format(file: RawInput, formats: Sequence[FileFormatSpec]) -> FileFormatSpec | None:
    """Return the accepted format matching the file's extension, falling back to its mime type."""
    name = file.name.lower()
    for fmt in formats:
        if name.endswith(fmt.extension.lower()):
            return fmt
    for fmt in formats:
        if file.mime_type and file.mime_type == fmt.mime_type:
            return fmt
    return None


def validate(
    file: RawInput,
    formats: Sequence[FileFormatSpec],
    max_size_bytes: int,
) -> UploadError | None:
    """Validate a single file; the first failing check wins.

    Order: global size limit, accepted type, per-format size limit, emptiness.
    """
    if file.size_bytes > max_size_bytes:
        return errors.file_too_large(file, max_size_bytes)

    fmt = match_format(file, formats)
    if fmt is None:
        return errors.invalid_file_type(file, formats)

    if file.size_bytes > fmt.max_size_bytes:
        return errors.file_too_large(file, fmt.max_size_bytes)

    if file.size_bytes == 0:
        return errors.empty_file(file)

    return None


def validate_batch(
    files: Sequence[RawInput],
    formats: Sequence[FileFormatSpec],
    max_size_bytes: int,
    enable_multiple_files: bool,
) -> BatchValidation:
    """Validate every file, then apply the batch-level multi-file rule once."""
    valid_files: list[RawInput] = []
    file_errors: list[UploadError] = []
    for file in files:
        error = validate(file, formats, max_size_bytes)
        if error is None:
            valid_files.append(file)
        else:
            file_errors.append(error)

    batch_error = None
    if not enable_multiple_files and len(valid_files) > 1:
        batch_error = errors.multiple_files_not_allowed(len(valid_files))

    return BatchValidation(
        valid_files=valid_files,
        file_errors=file_errors,
        batch_error=batch_error,
    )
