from typing import ClassVar

from resume_intake.config.settings import Settings
from resume_intake.extraction.exceptions import UnsupportedDocumentError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader
from resume_intake.extraction.readers.docx_adapter import DocxAdapter
from resume_intake.extraction.readers.image_adapter import BaseOcrEngine, ImageAdapter
from resume_intake.extraction.readers.legacy_doc_adapter import LegacyDocAdapter
from resume_intake.extraction.readers.pdfplumber_adapter import PdfPlumberAdapter
from resume_intake.extraction.readers.pymupdf_adapter import PyMuPdfAdapter
from resume_intake.extraction.readers.text_adapter import PlainTextAdapter
from resume_intake.validation.models import DOCX_MIME_TYPE, RawInput


class DocumentReader:
    """Routes a RawInput to the reader registered for its format."""

    EXTENSION_KINDS: ClassVar[dict[str, str]] = {
        ".pdf": "pdf",
        ".docx": "docx",
        ".doc": "doc",
        ".txt": "txt",
        ".jpg": "image",
        ".jpeg": "image",
        ".png": "image",
    }
    MIME_KINDS: ClassVar[dict[str, str]] = {
        "application/pdf": "pdf",
        DOCX_MIME_TYPE: "docx",
        "application/msword": "doc",
        "text/plain": "txt",
        "image/jpeg": "image",
        "image/png": "image",
    }

    def __init__(self, readers: dict[str, BaseTextReader]) -> None:
        self._readers = readers

    def kind_of(self, raw: RawInput) -> str | None:
        return self.EXTENSION_KINDS.get(raw.extension) or self.MIME_KINDS.get(raw.mime_type)

    def read(self, raw: RawInput) -> DocumentText:
        kind = self.kind_of(raw)
        reader = self._readers.get(kind) if kind else None
        if reader is None:
            raise UnsupportedDocumentError(
                f"No reader registered for '{raw.name}' ({raw.mime_type or 'unknown type'})"
            )
        return reader.read(raw.content)


class TextReaderFactory:
    """Creates the document reader with the configured PDF engine."""

    PDF_ADAPTERS: ClassVar[dict[str, type[BaseTextReader]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_reader(cls, settings: Settings) -> BaseTextReader:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create(cls, settings: Settings, ocr: BaseOcrEngine | None = None) -> DocumentReader:
        return DocumentReader(
            {
                "pdf": cls.create_pdf_reader(settings),
                "docx": DocxAdapter(),
                "doc": LegacyDocAdapter(),
                "txt": PlainTextAdapter(),
                "image": ImageAdapter(ocr=ocr),
            }
        )
