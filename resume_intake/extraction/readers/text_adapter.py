import codecs

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader

_LINES_PER_PAGE = 60


class PlainTextAdapter(BaseTextReader):
    """Decodes plain-text resumes (BOM-aware UTF-8/UTF-16, cp1252 fallback)."""

    def read(self, content: bytes) -> DocumentText:
        text = self._decode(content)
        if "\x00" in text:
            raise ExtractionError("text extraction failed: file contains binary data")
        text = text.replace("\r\n", "\n").replace("\r", "\n").strip()
        line_count = text.count("\n") + 1 if text else 0
        return DocumentText(
            text=text,
            page_count=max(1, -(-line_count // _LINES_PER_PAGE)),
        )

    @staticmethod
    def _decode(content: bytes) -> str:
        if content.startswith(codecs.BOM_UTF8):
            encoding = "utf-8-sig"
        elif content.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
            encoding = "utf-16"
        else:
            encoding = "utf-8"
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            pass
        try:
            return content.decode("cp1252")
        except UnicodeDecodeError as exc:
            raise ExtractionError(f"text extraction failed: {exc}") from exc
