"""Orientation classification and image dimension decoding."""

import logging
from pathlib import Path
from typing import Protocol, Tuple

from PIL import Image, UnidentifiedImageError

from orientation_sorter.core.models import ImageFormat, Orientation

logger = logging.getLogger(__name__)


class ImageDecodeError(Exception):
    """Raised when an image's dimensions cannot be read."""


class ImageDecoder(Protocol):
    """Anything that can report the size of an image file."""

    def dimensions(self, path: Path, image_format: ImageFormat) -> Tuple[int, int]:
        ...


class PillowDecoder:
    """Reads image dimensions with Pillow without decoding pixel data."""

    def __init__(self, strict_format: bool = True):
        """
        Initialize the decoder.

        Args:
            strict_format: Only let Pillow try the detected format's plugin
        """
        self.strict_format = strict_format

    def dimensions(self, path: Path, image_format: ImageFormat) -> Tuple[int, int]:
        """
        Get width and height of an image.

        Args:
            path: Image file
            image_format: Format reported by the detector

        Returns:
            (width, height) in pixels

        Raises:
            ImageDecodeError: If Pillow cannot identify or read the file
        """
        formats = [image_format.pillow_name] if self.strict_format else None

        try:
            with Image.open(path, formats=formats) as img:
                width, height = img.size
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as e:
            raise ImageDecodeError(f"Cannot read dimensions of {path.name}: {e}") from e

        logger.debug(f"{path.name}: {width}x{height}")
        return width, height


def classify_orientation(width: int, height: int) -> Orientation:
    """
    Map image dimensions to an orientation.

    Args:
        width: Width in pixels
        height: Height in pixels

    Returns:
        LANDSCAPE if wider than tall, PORTRAIT if taller than wide, else SQUARE
    """
    if width > height:
        return Orientation.LANDSCAPE
    if width < height:
        return Orientation.PORTRAIT
    return Orientation.SQUARE
