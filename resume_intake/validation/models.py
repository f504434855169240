import mimetypes
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from resume_intake.config.settings import MEGABYTE


class ErrorCode(str, Enum):
    """Stable error codes reported through ``on_error``."""

    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    EMPTY_FILE = "EMPTY_FILE"
    MULTIPLE_FILES_NOT_ALLOWED = "MULTIPLE_FILES_NOT_ALLOWED"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    UPLOAD_CANCELLED = "UPLOAD_CANCELLED"


@dataclass(frozen=True)
class RawInput:
    """A received file: opaque bytes plus the attributes the browser reports."""

    content: bytes = field(repr=False)
    name: str
    mime_type: str
    size_bytes: int
    last_modified_ms: int

    @property
    def file_id(self) -> str:
        return f"{self.name}-{self.size_bytes}-{self.last_modified_ms}"

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lower()

    @classmethod
    def from_bytes(
        cls,
        name: str,
        content: bytes,
        mime_type: str | None = None,
        last_modified_ms: int | None = None,
    ) -> "RawInput":
        """Build a RawInput, guessing the mime type from the file name."""
        if mime_type is None:
            mime_type = mimetypes.guess_type(name)[0] or ""
        if last_modified_ms is None:
            last_modified_ms = int(time.time() * 1000)
        return cls(
            content=content,
            name=name,
            mime_type=mime_type,
            size_bytes=len(content),
            last_modified_ms=last_modified_ms,
        )

    @classmethod
    def from_path(cls, path: Path) -> "RawInput":
        """Read a local file into a RawInput."""
        stat = path.stat()
        return cls.from_bytes(
            path.name,
            path.read_bytes(),
            last_modified_ms=int(stat.st_mtime * 1000),
        )


@dataclass(frozen=True)
class FileFormatSpec:
    """One entry of the accepted-formats allow-list."""

    extension: str
    mime_type: str
    max_size_bytes: int


@dataclass(frozen=True)
class UploadError:
    """Structured error value; never raised, always reported."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

DEFAULT_FILE_FORMATS: tuple[FileFormatSpec, ...] = (
    FileFormatSpec(".pdf", "application/pdf", 10 * MEGABYTE),
    FileFormatSpec(".docx", DOCX_MIME_TYPE, 10 * MEGABYTE),
    FileFormatSpec(".doc", "application/msword", 10 * MEGABYTE),
    FileFormatSpec(".txt", "text/plain", 5 * MEGABYTE),
    FileFormatSpec(".jpg", "image/jpeg", 5 * MEGABYTE),
    FileFormatSpec(".png", "image/png", 5 * MEGABYTE),
)
