import re
from dataclasses import replace
from datetime import datetime, timezone

from resume_intake.extraction.ats import assess_ats
from resume_intake.extraction.exceptions import EmptyDocumentError
from resume_intake.extraction.missing_content import find_missing_content
from resume_intake.extraction.models import DocumentMetadata, ExtractedContent
from resume_intake.extraction.readers.factory import DocumentReader
from resume_intake.extraction.sections import segment
from resume_intake.logging.logger import Log
from resume_intake.suggestions.base import BaseSuggestionProvider
from resume_intake.validation.models import RawInput

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")
_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")


def clean_text(text: str) -> str:
    """Normalize line endings, drop control characters and trailing blanks."""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\xa0", " ")
    text = _CONTROL_CHARS_RE.sub("", text)
    text = _TRAILING_SPACE_RE.sub("\n", text)
    return text.strip()


class ContentExtractionPipeline:
    """Turns one RawInput into ExtractedContent.

    Pipeline: read -> clean -> segment -> missing content -> ATS -> suggestions.
    Only reading can fail; an unreadable or text-less document raises
    ExtractionError.
    """

    def __init__(
        self,
        reader: DocumentReader,
        suggestion_provider: BaseSuggestionProvider,
    ) -> None:
        self._reader = reader
        self._suggestion_provider = suggestion_provider

    def extract(self, raw: RawInput) -> ExtractedContent:
        document = self._reader.read(raw)
        text = clean_text(document.text)
        if not text:
            raise EmptyDocumentError(f"No text could be extracted from '{raw.name}'")
        document = replace(document, text=text)
        Log.info(f"Read {len(text)} chars from {raw.name}", pages=document.page_count)

        sections = segment(text)
        missing = find_missing_content(sections)
        ats = assess_ats(document, sections)
        suggestions = self._suggestion_provider.suggest(text, sections, missing)
        Log.info(
            f"Extracted {len(sections)} sections from {raw.name}",
            missing=len(missing),
            ats_score=ats.score,
        )

        metadata = DocumentMetadata(
            file_name=raw.name,
            file_size=raw.size_bytes,
            file_type=raw.mime_type,
            page_count=document.page_count,
            word_count=len(text.split()),
            character_count=len(text),
            modified_date=datetime.fromtimestamp(raw.last_modified_ms / 1000, tz=timezone.utc),
            created_date=document.created_date,
            author=document.author,
        )
        return ExtractedContent(
            sections=sections,
            metadata=metadata,
            suggestions=suggestions,
            missing_content=missing,
            ats_compatibility=ats,
            text=text,
        )
