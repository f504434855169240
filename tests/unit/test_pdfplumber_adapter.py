from datetime import datetime

import pytest

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.readers.pdfplumber_adapter import PdfPlumberAdapter, parse_pdf_date


class TestPdfPlumberAdapter:
    def test_read_returns_text(self, sample_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.read(sample_pdf_bytes)
        assert "Hello PDF World" in result.text
        assert result.page_count == 1

    def test_read_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.read(multi_page_pdf_bytes)
        assert "Page one content" in result.text
        assert "Page two content" in result.text
        assert result.page_count == 2

    def test_read_empty_pdf_returns_empty_text(self, empty_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.read(empty_pdf_bytes)
        assert result.text == ""

    def test_text_only_pdf_has_no_images(self, resume_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.read(resume_pdf_bytes)
        assert result.image_count == 0
        assert "Skills" in result.text

    def test_read_raises_on_invalid_bytes(self) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(ExtractionError):
            adapter.read(b"not a pdf")

    def test_read_result_is_stripped(self, sample_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.read(sample_pdf_bytes)
        assert result.text == result.text.strip()


class TestParsePdfDate:
    def test_parses_full_timestamp(self) -> None:
        assert parse_pdf_date("D:20240115093000+01'00'") == datetime(2024, 1, 15, 9, 30, 0)

    def test_parses_date_only(self) -> None:
        assert parse_pdf_date("D:20240115") == datetime(2024, 1, 15)

    def test_returns_none_for_garbage(self) -> None:
        assert parse_pdf_date("yesterday") is None
        assert parse_pdf_date(None) is None
