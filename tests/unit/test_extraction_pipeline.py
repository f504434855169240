from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from resume_intake.extraction.exceptions import EmptyDocumentError, ExtractionError
from resume_intake.extraction.models import DocumentText, SectionType
from resume_intake.extraction.pipeline import ContentExtractionPipeline, clean_text
from resume_intake.extraction.readers.factory import DocumentReader
from resume_intake.suggestions.base import BaseSuggestionProvider
from resume_intake.suggestions.rules import RuleBasedSuggestionProvider
from resume_intake.validation.models import RawInput


def _make_reader(document: DocumentText) -> MagicMock:
    reader = MagicMock(spec=DocumentReader)
    reader.read.return_value = document
    return reader


def _make_raw(name: str = "resume.txt") -> RawInput:
    return RawInput.from_bytes(name, b"ignored", last_modified_ms=1700000000000)


class TestCleanText:
    def test_normalizes_whitespace(self) -> None:
        assert clean_text("  a\xa0b  \r\nc\t\rd  ") == "a b\nc\nd"

    def test_removes_control_characters(self) -> None:
        assert clean_text("a\x00b\x07c\nd") == "abc\nd"

    def test_keeps_tabs(self) -> None:
        assert clean_text("Python\tDocker") == "Python\tDocker"


class TestContentExtractionPipeline:
    def test_extracts_sections_and_metadata(self, resume_text: str) -> None:
        reader = _make_reader(DocumentText(text=resume_text, author="Jane Doe"))
        pipeline = ContentExtractionPipeline(reader, RuleBasedSuggestionProvider())

        content = pipeline.extract(_make_raw())

        assert content.section(SectionType.SKILLS) is not None
        assert content.missing_content == []
        assert content.ats_compatibility.score == 1.0
        assert content.metadata.file_name == "resume.txt"
        assert content.metadata.file_type == "text/plain"
        assert content.metadata.author == "Jane Doe"
        assert content.metadata.word_count == len(resume_text.split())
        assert content.metadata.character_count == len(resume_text)
        assert content.metadata.modified_date == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_text_is_cleaned_before_analysis(self, resume_text: str) -> None:
        reader = _make_reader(DocumentText(text=resume_text.replace("\n", "\r\n") + "\x00"))
        pipeline = ContentExtractionPipeline(reader, RuleBasedSuggestionProvider())
        assert pipeline.extract(_make_raw()).text == resume_text

    def test_passes_analysis_to_suggestion_provider(self, resume_text: str) -> None:
        provider = MagicMock(spec=BaseSuggestionProvider)
        provider.suggest.return_value = []
        pipeline = ContentExtractionPipeline(_make_reader(DocumentText(text=resume_text)), provider)

        content = pipeline.extract(_make_raw())

        provider.suggest.assert_called_once_with(
            resume_text, content.sections, content.missing_content
        )

    def test_empty_text_raises(self) -> None:
        pipeline = ContentExtractionPipeline(
            _make_reader(DocumentText(text=" \n\x00 ")), RuleBasedSuggestionProvider()
        )
        with pytest.raises(EmptyDocumentError, match="resume.txt"):
            pipeline.extract(_make_raw())

    def test_reader_errors_propagate(self) -> None:
        reader = MagicMock(spec=DocumentReader)
        reader.read.side_effect = ExtractionError("pdfplumber extraction failed: broken")
        pipeline = ContentExtractionPipeline(reader, RuleBasedSuggestionProvider())
        with pytest.raises(ExtractionError, match="broken"):
            pipeline.extract(_make_raw("resume.pdf"))

    def test_missing_skills_produces_alert_and_suggestion(self, resume_text: str) -> None:
        text = resume_text.rsplit("\nSkills", 1)[0]
        pipeline = ContentExtractionPipeline(
            _make_reader(DocumentText(text=text)), RuleBasedSuggestionProvider()
        )

        content = pipeline.extract(_make_raw())

        assert [a.section for a in content.missing_content] == [SectionType.SKILLS]
        assert any(s.id == "missing-skills" and s.priority == "critical" for s in content.suggestions)
