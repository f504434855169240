import io

from docx import Document

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader

_WORDS_PER_PAGE = 500


class DocxAdapter(BaseTextReader):
    """Reads DOCX paragraphs and table cells using python-docx."""

    def read(self, content: bytes) -> DocumentText:
        try:
            document = Document(io.BytesIO(content))
            lines = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
            for table in document.tables:
                for row in table.rows:
                    cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                    if cells:
                        lines.append("\t".join(cells))
            text = "\n".join(lines).strip()
            props = document.core_properties
            return DocumentText(
                text=text,
                page_count=max(1, -(-len(text.split()) // _WORDS_PER_PAGE)),
                table_count=len(document.tables),
                image_count=len(document.inline_shapes),
                author=props.author or None,
                created_date=props.created,
            )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"python-docx extraction failed: {exc}") from exc
