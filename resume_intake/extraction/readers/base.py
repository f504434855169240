from abc import ABC, abstractmethod

from resume_intake.extraction.models import DocumentText


class BaseTextReader(ABC):
    """Contract for all document text reading adapters."""

    @abstractmethod
    def read(self, content: bytes) -> DocumentText:
        """Extract plain text and layout signals from raw document bytes.

        Args:
            content: Raw file content.

        Returns:
            DocumentText with the normalized text plus page, table and image counts.

        Raises:
            ExtractionError: if the bytes cannot be decoded for any reason.
        """
