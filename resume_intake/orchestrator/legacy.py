from dataclasses import astuple

from resume_intake.extraction import patterns
from resume_intake.extraction.missing_content import EXPECTED_SECTIONS
from resume_intake.extraction.models import ExtractedContent, Importance
from resume_intake.orchestrator.models import (
    ContentAnalysis,
    DetectedSection,
    FileMetadata,
    QualityIndicators,
)

_COMFORTABLE_SENTENCE_WORDS = 20
_SENTENCE_WORDS_TOLERANCE = 30


def build_content_analysis(content: ExtractedContent) -> ContentAnalysis:
    """Derive the coarse legacy summary from extracted content."""
    text = content.text
    detected: list[DetectedSection] = []
    for section in content.sections:
        start = max(0, text.find(section.content)) if section.content else 0
        detected.append(
            DetectedSection(
                type=section.type,
                content=section.content,
                start_index=start,
                end_index=start + len(section.content),
                confidence=section.confidence,
            )
        )

    metadata = content.metadata
    return ContentAnalysis(
        extracted_text=text,
        detected_sections=detected,
        file_metadata=FileMetadata(
            name=metadata.file_name,
            size=metadata.file_size,
            type=metadata.file_type,
            last_modified=metadata.modified_date,
            word_count=metadata.word_count,
            page_count=metadata.page_count,
        ),
        quality_indicators=QualityIndicators(
            completeness=_completeness(content),
            formatting=_formatting(content),
            ats_compatibility=content.ats_compatibility.score,
            readability=_readability(text),
        ),
    )


def _completeness(content: ExtractedContent) -> float:
    expected = [e for e in EXPECTED_SECTIONS if e.importance != Importance.OPTIONAL]
    if not expected or not content.sections:
        return 0.0
    present = 1 - len(content.missing_content) / len(expected)
    complete = sum(1 for s in content.sections if s.is_complete) / len(content.sections)
    return round(max(0.0, present) * (0.5 + 0.5 * complete), 3)


def _formatting(content: ExtractedContent) -> float:
    flags = astuple(content.ats_compatibility.format_compliance)
    return round(sum(flags) / len(flags), 3)


def _readability(text: str) -> float:
    average = patterns.average_sentence_length(text)
    if average == 0:
        return 0.0
    excess = max(0.0, average - _COMFORTABLE_SENTENCE_WORDS)
    return round(max(0.0, 1 - excess / _SENTENCE_WORDS_TOLERANCE), 3)
