"""Pillow-backed image decoding into pixel buffers."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from tfplayer.core.errors import ImageDecodeError
from tfplayer.core.pixels import PixelBuffer, Rgba32Pixels, UnsupportedPixels

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSION = ".png"


def is_supported_image_path(path: str | Path, extension: str = SUPPORTED_EXTENSION) -> bool:
    """Check the file name only; content is never sniffed."""
    return str(path).endswith(extension)


def decode_image(path: str | Path) -> PixelBuffer:
    """Decode ``path`` into a pixel buffer.

    Only 8-bit RGBA images (and palette images, which expand to 8-bit RGBA)
    produce usable pixels. Every other layout, including 16-bit RGBA, comes
    back as ``UnsupportedPixels`` so the caller can refuse it.
    """
    try:
        image = Image.open(path)
    except UnidentifiedImageError as exc:
        raise ImageDecodeError(f"Cannot identify image file {path}.") from exc

    with image:
        # load() clears the tile list, so read the source layout first.
        source_mode = _source_rawmode(image)
        try:
            image.load()
        except (OSError, SyntaxError) as exc:
            raise ImageDecodeError(f"Cannot decode image file {path}: {exc}") from exc
        logger.info("Decoded %s: mode=%s size=%dx%d", path, image.mode, image.width, image.height)
        return _to_pixel_buffer(image, source_mode)


def _source_rawmode(image: Image.Image) -> str:
    """Return the decoder raw mode, e.g. ``RGBA;16B`` for 16-bit PNG samples."""
    if not image.tile:
        return image.mode
    args = image.tile[0][3]
    if isinstance(args, tuple):
        args = args[0] if args else None
    return args if isinstance(args, str) else image.mode


def _to_pixel_buffer(image: Image.Image, source_mode: str) -> PixelBuffer:
    if ";16" in source_mode:
        return UnsupportedPixels(mode=source_mode, width=image.width, height=image.height)
    if image.mode == "P":
        return Rgba32Pixels(np.array(image.convert("RGBA"), dtype=np.uint8))
    if image.mode == "RGBA":
        return Rgba32Pixels(np.array(image, dtype=np.uint8))
    return UnsupportedPixels(mode=image.mode, width=image.width, height=image.height)
