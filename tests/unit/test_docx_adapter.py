import pytest

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.readers.docx_adapter import DocxAdapter


class TestDocxAdapter:
    def test_reads_paragraphs(self, resume_docx_bytes: bytes) -> None:
        result = DocxAdapter().read(resume_docx_bytes)
        assert result.text.startswith("Jane Doe")
        assert "Experience" in result.text

    def test_reads_table_cells_as_tab_separated_rows(self, resume_docx_bytes: bytes) -> None:
        result = DocxAdapter().read(resume_docx_bytes)
        assert "Python\tDocker" in result.text
        assert result.table_count == 1

    def test_reads_core_properties(self, resume_docx_bytes: bytes) -> None:
        result = DocxAdapter().read(resume_docx_bytes)
        assert result.author == "Jane Doe"
        assert result.page_count == 1

    def test_raises_on_corrupted_archive(self) -> None:
        with pytest.raises(ExtractionError, match="python-docx"):
            DocxAdapter().read(b"PK\x03\x04 definitely not a docx")
