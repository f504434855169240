class ExtractionError(Exception):
    """Raised when a document's bytes cannot be turned into text."""


class UnsupportedDocumentError(ExtractionError):
    """Raised when no reader is registered for the document's format."""


class EmptyDocumentError(ExtractionError):
    """Raised when a document decodes but contains no text at all."""
