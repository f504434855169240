import io
from datetime import datetime

import pdfplumber

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader


def parse_pdf_date(raw: object) -> datetime | None:
    """Parse a PDF date string such as ``D:20240115093000+01'00'``."""
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if value.startswith("D:"):
        value = value[2:]
    try:
        return datetime.strptime(value[:14], "%Y%m%d%H%M%S")
    except ValueError:
        try:
            return datetime.strptime(value[:8], "%Y%m%d")
        except ValueError:
            return None


class PdfPlumberAdapter(BaseTextReader):
    """Reads PDF text and layout signals using pdfplumber."""

    def read(self, content: bytes) -> DocumentText:
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
                table_count = sum(len(page.find_tables()) for page in pdf.pages)
                image_count = sum(len(page.images) for page in pdf.pages)
                metadata = pdf.metadata or {}
            return DocumentText(
                text="\n".join(pages).strip(),
                page_count=len(pages),
                table_count=table_count,
                image_count=image_count,
                author=metadata.get("Author") or None,
                created_date=parse_pdf_date(metadata.get("CreationDate")),
            )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
