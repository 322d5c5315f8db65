from dataclasses import dataclass
from typing import Any

import numpy as np
from PIL import Image


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major packed ARGB samples, alpha in the highest byte.

    The sample array is copied on construction and made read-only.
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"PixelBuffer dimensions must be positive, got {self.width}x{self.height}"
            )
        pixels = np.array(self.pixels, dtype=np.uint32).reshape(-1)
        if pixels.size != self.width * self.height:
            raise ValueError(
                f"PixelBuffer expects {self.width * self.height} samples, got {pixels.size}"
            )
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    def __len__(self) -> int:
        return int(self.pixels.size)

    def channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Split into (alpha, red, green, blue) int32 arrays with values 0-255."""
        p = self.pixels
        return (
            ((p >> 24) & 0xFF).astype(np.int32),
            ((p >> 16) & 0xFF).astype(np.int32),
            ((p >> 8) & 0xFF).astype(np.int32),
            (p & 0xFF).astype(np.int32),
        )

    @classmethod
    def from_channels(
        cls,
        alpha: np.ndarray,
        red: np.ndarray,
        green: np.ndarray,
        blue: np.ndarray,
        *,
        width: int,
        height: int,
    ) -> "PixelBuffer":
        packed = (
            (np.asarray(alpha, dtype=np.uint32) << 24)
            | (np.asarray(red, dtype=np.uint32) << 16)
            | (np.asarray(green, dtype=np.uint32) << 8)
            | np.asarray(blue, dtype=np.uint32)
        )
        return cls(width=width, height=height, pixels=packed)

    @classmethod
    def from_grayscale(cls, intensities: Any) -> "PixelBuffer":
        """Build an opaque buffer from a 2-D array of 8-bit intensities."""
        gray = np.asarray(intensities, dtype=np.uint8)
        if gray.ndim != 2:
            raise ValueError(f"Expected a 2-D intensity array, got shape {gray.shape}")
        height, width = gray.shape
        flat = gray.reshape(-1)
        opaque = np.full(flat.shape, 0xFF, dtype=np.uint8)
        return cls.from_channels(opaque, flat, flat, flat, width=width, height=height)


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Convert a buffer into an RGBA Pillow image of the same size."""
    alpha, red, green, blue = buffer.channels()
    stacked = np.stack([red, green, blue, alpha], axis=-1).astype(np.uint8)
    return Image.fromarray(stacked.reshape(buffer.height, buffer.width, 4))
