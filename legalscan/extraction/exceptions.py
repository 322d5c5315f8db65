class ExtractionError(Exception):
    """Raised when the source document cannot be located or read at all."""


class UnsupportedMediaTypeError(ExtractionError):
    """Raised when the declared media type is neither PDF nor a raster image."""
