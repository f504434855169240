import io
from abc import ABC, abstractmethod

from PIL import Image

from resume_intake.extraction.exceptions import ExtractionError
from resume_intake.extraction.models import DocumentText
from resume_intake.extraction.readers.base import BaseTextReader


class BaseOcrEngine(ABC):
    """Contract for OCR backends used on camera captures and image uploads."""

    @abstractmethod
    def recognize(self, image: Image.Image) -> str:
        """Return the text recognized in the image (empty when none)."""


class NullOcrEngine(BaseOcrEngine):
    """OCR engine that recognizes nothing.

    No network calls. Register a real engine through ImageAdapter(ocr=...)
    to make photographed resumes extractable.
    """

    def recognize(self, image: Image.Image) -> str:
        _ = image
        return ""


class ImageAdapter(BaseTextReader):
    """Verifies JPG/PNG payloads with Pillow and delegates text to an OCR engine."""

    def __init__(self, ocr: BaseOcrEngine | None = None) -> None:
        self._ocr = ocr if ocr is not None else NullOcrEngine()

    def read(self, content: bytes) -> DocumentText:
        try:
            with Image.open(io.BytesIO(content)) as probe:
                probe.verify()
            with Image.open(io.BytesIO(content)) as image:
                image.load()
                text = self._ocr.recognize(image)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"image decoding failed: {exc}") from exc
        return DocumentText(text=text.strip(), image_count=1)
