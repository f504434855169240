from resume_intake.extraction.models import ExtractedSection
from resume_intake.extraction.pipeline import clean_text
from resume_intake.extraction.readers.factory import DocumentReader
from resume_intake.extraction.sections import segment
from resume_intake.logging.logger import Log
from resume_intake.preview.models import LivePreview
from resume_intake.validation.models import RawInput

_CORE_SECTION_COUNT = 5
DISABLED_PREVIEW = LivePreview(is_enabled=False)


def preview_quality(preview_sections: list[ExtractedSection], text: str) -> float:
    """Rough 0..1 quality: section coverage and heading confidence, equally weighted."""
    if not text or not preview_sections:
        return 0.0
    coverage = min(1.0, len(preview_sections) / _CORE_SECTION_COUNT)
    confidence = sum(s.confidence for s in preview_sections) / len(preview_sections)
    return round(0.5 * coverage + 0.5 * confidence, 3)


class LivePreviewGenerator:
    """Produces a quick preview from the raw input while the upload runs.

    Never raises: any failure yields a disabled preview.
    """

    def __init__(self, reader: DocumentReader, max_chars: int = 500, enabled: bool = True) -> None:
        self._reader = reader
        self._max_chars = max_chars
        self._enabled = enabled

    def generate(self, raw: RawInput) -> LivePreview:
        if not self._enabled:
            return DISABLED_PREVIEW
        try:
            text = clean_text(self._reader.read(raw).text)
        except Exception as exc:
            Log.warning(f"Live preview failed for {raw.name}: {exc}")
            return DISABLED_PREVIEW
        if not text:
            return DISABLED_PREVIEW

        sections = segment(text)
        return LivePreview(
            is_enabled=True,
            extracted_text=text[: self._max_chars],
            detected_sections=sections,
            quality_score=preview_quality(sections, text),
        )
