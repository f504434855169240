"""Constructors for every UploadError the pipeline can report.

Each one is usable on its own, so tests and callers can build the exact
error value without running validation or the orchestrator.
"""

from collections.abc import Sequence

from resume_intake.validation.models import ErrorCode, FileFormatSpec, RawInput, UploadError

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Render a byte count the way the upload UI shows it, e.g. ``11 MB``."""
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while size_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size_bytes / 1024**exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


def file_too_large(file: RawInput, max_size_bytes: int) -> UploadError:
    return UploadError(
        code=ErrorCode.FILE_TOO_LARGE.value,
        message=(
            f"File size ({format_file_size(file.size_bytes)}) exceeds maximum "
            f"allowed size ({format_file_size(max_size_bytes)})"
        ),
        details={
            "fileName": file.name,
            "fileSize": file.size_bytes,
            "maxSize": max_size_bytes,
        },
    )


def invalid_file_type(file: RawInput, formats: Sequence[FileFormatSpec]) -> UploadError:
    extensions = [fmt.extension for fmt in formats]
    suggested = ", ".join(extensions)
    return UploadError(
        code=ErrorCode.INVALID_FILE_TYPE.value,
        message=(
            f"File type not supported. Please upload: {suggested}. Consider converting "
            "your file or using our camera capture feature."
        ),
        details={
            "fileName": file.name,
            "fileType": file.mime_type,
            "suggestedFormats": suggested,
            "acceptedExtensions": extensions,
        },
    )


def empty_file(file: RawInput) -> UploadError:
    return UploadError(
        code=ErrorCode.EMPTY_FILE.value,
        message="File appears to be empty. Please select a valid document.",
        details={"fileName": file.name},
    )


def multiple_files_not_allowed(file_count: int) -> UploadError:
    return UploadError(
        code=ErrorCode.MULTIPLE_FILES_NOT_ALLOWED.value,
        message="Only one file can be uploaded at a time. Please select a single file.",
        details={"fileCount": file_count},
    )


def upload_failed(
    file: RawInput,
    exc: BaseException,
    *,
    transient: bool = False,
) -> UploadError:
    return UploadError(
        code=ErrorCode.UPLOAD_FAILED.value,
        message=str(exc) or "Upload failed",
        details={
            "fileName": file.name,
            "fileId": file.file_id,
            "errorType": type(exc).__name__,
            "transient": transient,
        },
    )


def upload_cancelled(file: RawInput) -> UploadError:
    return UploadError(
        code=ErrorCode.UPLOAD_CANCELLED.value,
        message="Upload cancelled",
        details={"fileName": file.name, "fileId": file.file_id},
    )
