from dataclasses import replace
from typing import Final

from resume_intake.validation.models import ErrorCode, UploadError

_RECOVERY_OPTIONS: Final[dict[str, tuple[str, ...]]] = {
    ErrorCode.FILE_TOO_LARGE.value: (
        "Compress your file",
        "Use PDF format",
        "Remove images if possible",
    ),
    ErrorCode.INVALID_FILE_TYPE.value: (
        "Convert to PDF or DOCX",
        "Use camera capture",
        "Try cloud import",
    ),
    ErrorCode.EMPTY_FILE.value: (
        "Check file content",
        "Re-save the document",
        "Try a different file",
    ),
    ErrorCode.MULTIPLE_FILES_NOT_ALLOWED.value: (
        "Upload one file at a time",
        "Enable batch upload",
        "Combine documents into a single PDF",
    ),
    ErrorCode.UPLOAD_FAILED.value: (
        "Try uploading again",
        "Check your internet connection",
        "Try a different file format",
    ),
    ErrorCode.UPLOAD_CANCELLED.value: (
        "Upload the file again",
        "Keep the page open until processing completes",
    ),
}

_DEFAULT_OPTIONS: Final[tuple[str, ...]] = (
    "Try again",
    "Check internet connection",
    "Contact support",
)


def advise_on(error: UploadError) -> list[str]:
    """Map an error to human-actionable recovery options (never empty)."""
    return list(_RECOVERY_OPTIONS.get(error.code, _DEFAULT_OPTIONS))


def with_recovery(error: UploadError) -> UploadError:
    """Return a copy of the error whose details carry ``recoverySuggestions``."""
    return replace(
        error,
        details={**error.details, "recoverySuggestions": advise_on(error)},
    )
