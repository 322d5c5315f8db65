from legalscan.imaging.blur import GaussianBlur, KernelCache
from legalscan.imaging.exceptions import ImageDecodeError
from legalscan.imaging.models import PixelBuffer
from legalscan.imaging.preprocessor import ImagePreprocessor

__all__ = [
    "GaussianBlur",
    "ImageDecodeError",
    "ImagePreprocessor",
    "KernelCache",
    "PixelBuffer",
]
