class OcrError(Exception):
    """Raised when the OCR engine fails to recognize a page."""


class OcrTimeoutError(OcrError):
    """Raised when recognition of a single page exceeds its time budget."""
