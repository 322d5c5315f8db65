class ImagingError(Exception):
    """Base exception for image decoding and preprocessing errors."""


class ImageDecodeError(ImagingError):
    """Raised when raw image bytes cannot be decoded."""
