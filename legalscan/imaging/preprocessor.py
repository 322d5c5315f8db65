import io

import numpy as np
from PIL import Image, ImageFilter, ImageOps

from legalscan.imaging.blur import GaussianBlur
from legalscan.imaging.exceptions import ImageDecodeError
from legalscan.imaging.models import PixelBuffer
from legalscan.logging.logger import Log


class ImagePreprocessor:
    """Normalizes a raw page image into a blurred grayscale buffer for OCR.

    Order is fixed: grayscale -> sharpen -> contrast stretch -> fit-inside
    resize -> blur.
    """

    DEFAULT_MAX_DIMENSION = 1500
    DEFAULT_BLUR_RADIUS = 2.0

    def __init__(
        self,
        blur: GaussianBlur,
        max_dimension: int = DEFAULT_MAX_DIMENSION,
        blur_radius: float = DEFAULT_BLUR_RADIUS,
    ) -> None:
        if max_dimension <= 0:
            raise ValueError(f"max_dimension must be positive, got {max_dimension}")
        self._blur = blur
        self._max_dimension = max_dimension
        self._blur_radius = blur_radius

    def preprocess(self, raw_image: bytes) -> PixelBuffer:
        """Decode and normalize an encoded image.

        Raises:
            ImageDecodeError: if the bytes are not a decodable image.
        """
        image = self._decode(raw_image)
        image = ImageOps.grayscale(image)
        image = image.filter(ImageFilter.SHARPEN)
        image = ImageOps.autocontrast(image)
        image = self._fit_inside(image)

        buffer = PixelBuffer.from_grayscale(np.asarray(image, dtype=np.uint8))
        Log.debug("Preprocessed image", width=buffer.width, height=buffer.height)
        return self._blur.blur(buffer, self._blur_radius)

    def _decode(self, raw_image: bytes) -> Image.Image:
        if not raw_image:
            raise ImageDecodeError("Image payload is empty")
        try:
            image = Image.open(io.BytesIO(raw_image))
            image.load()
            return ImageOps.exif_transpose(image)
        except Exception as exc:
            raise ImageDecodeError(f"Cannot decode image: {exc}") from exc

    def _fit_inside(self, image: Image.Image) -> Image.Image:
        # thumbnail() keeps aspect ratio and never upscales
        bound = (self._max_dimension, self._max_dimension)
        if image.width <= bound[0] and image.height <= bound[1]:
            return image
        resized = image.copy()
        resized.thumbnail(bound, Image.Resampling.LANCZOS)
        return resized
