"""Input tensor construction from decoded pixels."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tfplayer.core.errors import UnsupportedPixelFormatError
from tfplayer.core.pixels import PixelBuffer, Rgba32Pixels

Tensor = NDArray[np.float32]


def assemble_input_tensor(buffer: PixelBuffer) -> Tensor:
    """Copy the green channel into a ``[1, width, height, 1]`` float tensor.

    Pixel ``(x, y)`` lands at ``[0, x, y, 0]``: width is the second axis and
    height the third. Models consuming this tensor were trained against that
    layout, so it must not be swapped back to row-major order.
    """
    if isinstance(buffer, Rgba32Pixels):
        return _assemble_from_rgba32(buffer)
    raise UnsupportedPixelFormatError(buffer.mode)


def _assemble_from_rgba32(buffer: Rgba32Pixels) -> Tensor:
    tensor = np.zeros((1, buffer.width, buffer.height, 1), dtype=np.float32)
    # green is [y, x]; transposing gives [x, y].
    tensor[0, :, :, 0] = buffer.green.T
    return tensor
