class PdfError(Exception):
    """Base exception for PDF handling errors."""


class PdfExtractionError(PdfError):
    """Raised when the embedded text layer cannot be read."""


class PdfRenderError(PdfError):
    """Raised when PDF pages cannot be rasterized."""
