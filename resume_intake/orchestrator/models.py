from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from resume_intake.extraction.models import SectionType
from resume_intake.orchestrator.exceptions import InvalidTransitionError
from resume_intake.validation.models import UploadError


class UploadStatus(str, Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    ERROR = "error"


ALLOWED_TRANSITIONS: dict[UploadStatus, frozenset[UploadStatus]] = {
    UploadStatus.PENDING: frozenset({UploadStatus.UPLOADING, UploadStatus.ERROR}),
    UploadStatus.UPLOADING: frozenset({UploadStatus.PROCESSING, UploadStatus.ERROR}),
    UploadStatus.PROCESSING: frozenset({UploadStatus.ANALYZING, UploadStatus.ERROR}),
    UploadStatus.ANALYZING: frozenset({UploadStatus.COMPLETE, UploadStatus.ERROR}),
    UploadStatus.COMPLETE: frozenset(),
    UploadStatus.ERROR: frozenset(),
}
TERMINAL_STATUSES = frozenset({UploadStatus.COMPLETE, UploadStatus.ERROR})


@dataclass(frozen=True)
class UploadProgress:
    """Immutable progress snapshot for one file."""

    file_id: str
    file_name: str
    progress: float
    status: UploadStatus
    estimated_time_remaining_ms: int | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def advance(
        self,
        status: UploadStatus,
        progress: float,
        estimated_time_remaining_ms: int | None = None,
        error: str | None = None,
    ) -> "UploadProgress":
        """Return the next snapshot, enforcing the state machine."""
        if status != self.status and status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot move {self.file_id} from {self.status.value} to {status.value}"
            )
        if status == self.status and self.is_terminal:
            raise InvalidTransitionError(f"{self.file_id} is already {self.status.value}")
        return replace(
            self,
            status=status,
            progress=progress,
            estimated_time_remaining_ms=estimated_time_remaining_ms,
            error=error,
        )


@dataclass(frozen=True)
class UploadResult:
    file_id: str
    analysis_id: str
    initial_score: float
    processing_time_ms: int


@dataclass(frozen=True)
class DetectedSection:
    type: SectionType
    content: str
    start_index: int
    end_index: int
    confidence: float


@dataclass(frozen=True)
class FileMetadata:
    name: str
    size: int
    type: str
    last_modified: datetime
    word_count: int
    page_count: int | None = None


@dataclass(frozen=True)
class QualityIndicators:
    """Coarse 0..1 indicators kept for older consumers."""

    completeness: float
    formatting: float
    ats_compatibility: float
    readability: float


@dataclass(frozen=True)
class ContentAnalysis:
    """Backward-compatible coarse summary of one document."""

    extracted_text: str
    detected_sections: list[DetectedSection]
    file_metadata: FileMetadata
    quality_indicators: QualityIndicators


@dataclass
class BatchReport:
    """Accumulates the outcome of one submitted batch."""

    validation_errors: list[UploadError] = field(default_factory=list)
    batch_error: UploadError | None = None
    completed: list[UploadResult] = field(default_factory=list)
    failed: list[UploadError] = field(default_factory=list)

    @property
    def errors(self) -> list[UploadError]:
        batch = [self.batch_error] if self.batch_error is not None else []
        return [*self.validation_errors, *batch, *self.failed]
