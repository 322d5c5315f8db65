"""Separable blur over packed ARGB pixel buffers.

Processing flow:
1. Derive the effective radius: floor(radius * 3.5) clamped to [1, 248].
2. Build (or reuse) the kernel: weight (r - |i|)^2 at offset i, plus a
   per-weight table of weight * intensity for every intensity 0-255.
3. Split the buffer into four unpacked channels.
4. Horizontal pass per channel, then vertical pass over its output.
5. Repack the channels.

Edges are handled by omitting kernel taps that fall outside the buffer and
dividing by the sum of the weights actually applied, so border pixels see a
narrower, renormalised kernel rather than replicated padding.
"""

import math
import threading
from dataclasses import dataclass

import numpy as np

from legalscan.imaging.models import PixelBuffer
from legalscan.logging.logger import Log

RADIUS_SCALE = 3.5
MIN_RADIUS = 1
MAX_RADIUS = 248
INTENSITY_LEVELS = 256


def effective_radius(radius: float) -> int:
    """Scale and clamp a requested radius to the integer kernel radius."""
    scaled = math.floor(radius * RADIUS_SCALE)
    return max(MIN_RADIUS, min(MAX_RADIUS, scaled))


@dataclass(frozen=True, eq=False)
class BlurKernel:
    """Triangular-squared weights and their precomputed intensity multiples."""

    radius: int
    weights: np.ndarray
    multiples: np.ndarray

    @property
    def size(self) -> int:
        return int(self.weights.size)


def build_kernel(radius: float) -> BlurKernel:
    r = effective_radius(radius)
    offsets = np.arange(-r, r + 1, dtype=np.int64)
    weights = (r - np.abs(offsets)) ** 2
    multiples = np.outer(weights, np.arange(INTENSITY_LEVELS, dtype=np.int64))
    weights.flags.writeable = False
    multiples.flags.writeable = False
    return BlurKernel(radius=r, weights=weights, multiples=multiples)


class KernelCache:
    """Single-slot kernel cache, rebuilt only when the effective radius changes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._kernel: BlurKernel | None = None

    def get(self, radius: float) -> BlurKernel:
        r = effective_radius(radius)
        with self._lock:
            if self._kernel is None or self._kernel.radius != r:
                Log.debug("Building blur kernel", kernel_radius=r)
                self._kernel = build_kernel(radius)
            return self._kernel


def horizontal_pass(
    channel: np.ndarray,
    width: int,
    height: int,
    kernel: BlurKernel,
) -> np.ndarray:
    """Convolve each row of one channel with the kernel.

    Args:
        channel: Flat row-major intensities (0-255), length width * height.
        width: Row length.
        height: Number of rows.
        kernel: Kernel to apply.

    Returns:
        Flat int32 array of blurred intensities, not packed.
    """
    src = np.asarray(channel, dtype=np.int64).reshape(height, width)
    acc = np.zeros((height, width), dtype=np.int64)
    applied = np.zeros(width, dtype=np.int64)

    for i, weight in enumerate(kernel.weights):
        offset = i - kernel.radius
        # destination columns x whose tap x + offset lies inside [0, width)
        lo = max(0, -offset)
        hi = min(width, width - offset)
        if lo >= hi:
            continue
        acc[:, lo:hi] += kernel.multiples[i][src[:, lo + offset : hi + offset]]
        applied[lo:hi] += weight

    return (acc // applied[np.newaxis, :]).astype(np.int32).reshape(-1)


def vertical_pass(
    channel: np.ndarray,
    width: int,
    height: int,
    kernel: BlurKernel,
) -> np.ndarray:
    """Convolve each column of one channel with the kernel.

    Same tap-omission and normalisation rules as ``horizontal_pass``.
    """
    src = np.asarray(channel, dtype=np.int64).reshape(height, width)
    acc = np.zeros((height, width), dtype=np.int64)
    applied = np.zeros(height, dtype=np.int64)

    for i, weight in enumerate(kernel.weights):
        offset = i - kernel.radius
        lo = max(0, -offset)
        hi = min(height, height - offset)
        if lo >= hi:
            continue
        acc[lo:hi, :] += kernel.multiples[i][src[lo + offset : hi + offset, :]]
        applied[lo:hi] += weight

    return (acc // applied[:, np.newaxis]).astype(np.int32).reshape(-1)


class GaussianBlur:
    """Two-pass separable blur engine."""

    def __init__(self, cache: KernelCache | None = None) -> None:
        self._cache = cache if cache is not None else KernelCache()

    def blur(self, buffer: PixelBuffer, radius: float) -> PixelBuffer:
        kernel = self._cache.get(radius)
        width, height = buffer.width, buffer.height
        blurred = [
            vertical_pass(
                horizontal_pass(channel, width, height, kernel), width, height, kernel
            )
            for channel in buffer.channels()
        ]
        Log.debug(
            "Blurred buffer",
            width=width,
            height=height,
            kernel_radius=kernel.radius,
        )
        return PixelBuffer.from_channels(*blurred, width=width, height=height)
