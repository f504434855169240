from dataclasses import dataclass

from resume_intake.extraction.models import ExtractedContent
from resume_intake.orchestrator.models import ContentAnalysis, UploadProgress
from resume_intake.scoring.models import EnhancedAnalysisResult
from resume_intake.validation.models import RawInput, UploadError


@dataclass(slots=True)
class FileContext:
    """Per-file record threaded through the upload stages."""

    raw: RawInput
    progress: UploadProgress
    received_bytes: int = 0
    extracted_content: ExtractedContent | None = None
    content_analysis: ContentAnalysis | None = None
    analysis: EnhancedAnalysisResult | None = None
    error: UploadError | None = None
    started_at: float = 0.0

    @property
    def file_id(self) -> str:
        return self.raw.file_id
