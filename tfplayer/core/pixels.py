"""Decoded pixel buffers, one variant per pixel layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np
from numpy.typing import NDArray

ByteArray = NDArray[np.uint8]

GREEN_CHANNEL = 1


@dataclass(frozen=True)
class Rgba32Pixels:
    """8-bit RGBA pixels stored row-major as ``(height, width, 4)``."""

    pixels: ByteArray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError("RGBA pixels must have shape (height, width, 4).")
        if self.pixels.dtype != np.uint8:
            raise ValueError("RGBA pixels must be 8-bit.")

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def green(self) -> ByteArray:
        """Green intensities indexed ``[y, x]``."""
        return self.pixels[:, :, GREEN_CHANNEL]


@dataclass(frozen=True)
class UnsupportedPixels:
    """Any decoded layout without an assembly path, kept so callers fail loudly."""

    mode: str
    width: int
    height: int


PixelBuffer = Union[Rgba32Pixels, UnsupportedPixels]
