import pymupdf

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader
from resume_intake.extraction.readers.pdfplumber_adapter import parse_pdf_date


class PyMuPdfAdapter(BaseTextReader):
    """Reads PDF text and layout signals using PyMuPDF."""

    def read(self, content: bytes) -> DocumentText:
        try:
            with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
                table_count = sum(len(page.find_tables().tables) for page in doc)
                image_count = sum(len(page.get_images()) for page in doc)
                metadata = doc.metadata or {}
            return DocumentText(
                text="\n".join(pages).strip(),
                page_count=len(pages),
                table_count=table_count,
                image_count=image_count,
                author=metadata.get("author") or None,
                created_date=parse_pdf_date(metadata.get("creationDate")),
            )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pymupdf extraction failed: {exc}") from exc
