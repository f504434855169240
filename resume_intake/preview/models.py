from dataclasses import dataclass, field

from resume_intake.extraction.models import ExtractedSection


@dataclass(frozen=True)
class LivePreview:
    """Best-effort early look at a document; superseded by ExtractedContent."""

    is_enabled: bool
    extracted_text: str | None = None
    detected_sections: list[ExtractedSection] = field(default_factory=list)
    quality_score: float = 0.0
