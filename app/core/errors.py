"""
Extraction errors raised by the raw-text collaborators (PDF, DOCX, OCR, web scrape).

The profile parser itself never raises; these only travel from an extractor to the
route that called it, where they are translated into HTTP responses.
"""


class ExtractionError(Exception):
    """Base class. `message` is safe to show to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ExtractionError):
    """Input rejected before any extraction was attempted (bad URL, disallowed host)."""


class PDFExtractionError(ExtractionError):
    """PDF could not be opened: corrupt, truncated or password-protected."""


class DocumentExtractionError(ExtractionError):
    """DOCX could not be opened."""


class OCRExtractionError(ExtractionError):
    """The OCR engine (Tesseract) is not installed or not reachable."""


class ScrapeError(ExtractionError):
    """Transport failure or non-success HTTP status while fetching a profile page."""


class EmptyExtractionError(ExtractionError):
    """The source was readable but produced no text."""
