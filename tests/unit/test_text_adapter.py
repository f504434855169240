import codecs

import pytest

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.readers.text_adapter import PlainTextAdapter


class TestPlainTextAdapter:
    def test_reads_utf8(self) -> None:
        assert PlainTextAdapter().read("Jane Doe\nSkills".encode()).text == "Jane Doe\nSkills"

    def test_strips_utf8_bom(self) -> None:
        result = PlainTextAdapter().read(codecs.BOM_UTF8 + b"Jane Doe")
        assert result.text == "Jane Doe"

    def test_reads_utf16_with_bom(self) -> None:
        result = PlainTextAdapter().read("Jane Doe".encode("utf-16"))
        assert result.text == "Jane Doe"

    def test_falls_back_to_cp1252(self) -> None:
        assert PlainTextAdapter().read(b"Caf\xe9 manager").text == "Café manager"

    def test_normalizes_line_endings(self) -> None:
        assert PlainTextAdapter().read(b"a\r\nb\rc").text == "a\nb\nc"

    def test_counts_pages_by_lines(self) -> None:
        content = "\n".join(f"line {i}" for i in range(61)).encode()
        assert PlainTextAdapter().read(content).page_count == 2

    def test_rejects_binary_content(self) -> None:
        with pytest.raises(ExtractionError, match="binary"):
            PlainTextAdapter().read(b"abc\x00def")
