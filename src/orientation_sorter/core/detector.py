"""Image format detection by file extension or header signature."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from orientation_sorter.core.models import ImageFormat

logger = logging.getLogger(__name__)

# Extension (lowercase, no dot) -> format
EXTENSION_FORMATS: Dict[str, ImageFormat] = {
    "jpg": ImageFormat.JPEG,
    "jpeg": ImageFormat.JPEG,
    "png": ImageFormat.PNG,
    "gif": ImageFormat.GIF,
    "webp": ImageFormat.WEBP,
    "ico": ImageFormat.ICO,
    "tiff": ImageFormat.TIFF,
    "tif": ImageFormat.TIFF,
    "bmp": ImageFormat.BMP,
}

# A signature is a sequence of (offset, bytes) parts that must all match.
Signature = Tuple[Tuple[int, bytes], ...]

FORMAT_SIGNATURES: Dict[ImageFormat, List[Signature]] = {
    ImageFormat.JPEG: [((0, b"\xff\xd8\xff"),)],
    ImageFormat.PNG: [((0, b"\x89PNG\r\n\x1a\n"),)],
    ImageFormat.GIF: [((0, b"GIF87a"),), ((0, b"GIF89a"),)],
    ImageFormat.WEBP: [((0, b"RIFF"), (8, b"WEBP"))],
    ImageFormat.ICO: [((0, b"\x00\x00\x01\x00"),)],
    ImageFormat.TIFF: [((0, b"II*\x00"),), ((0, b"MM\x00*"),)],
    ImageFormat.BMP: [((0, b"BM"),)],
}

HEADER_BYTES = max(
    offset + len(magic)
    for signatures in FORMAT_SIGNATURES.values()
    for signature in signatures
    for offset, magic in signature
)


class FormatDetector:
    """Decides whether a path is a supported image."""

    def __init__(self, read_headers: bool = False):
        """
        Initialize the detector.

        Args:
            read_headers: Match magic bytes instead of extensions (slower)
        """
        self.read_headers = read_headers

    def classify(self, path: Path) -> Optional[ImageFormat]:
        """
        Detect the format of a file.

        Args:
            path: File to inspect

        Returns:
            The detected format, or None if the file is not a supported image

        Raises:
            OSError: If header mode is on and the file cannot be read
        """
        if self.read_headers:
            return self._classify_by_header(path)
        return self._classify_by_extension(path)

    def _classify_by_extension(self, path: Path) -> Optional[ImageFormat]:
        return EXTENSION_FORMATS.get(path.suffix.lower().lstrip("."))

    def _classify_by_header(self, path: Path) -> Optional[ImageFormat]:
        with open(path, "rb") as f:
            head = f.read(HEADER_BYTES)

        for image_format, signatures in FORMAT_SIGNATURES.items():
            if any(_matches(head, signature) for signature in signatures):
                logger.debug(f"Header of {path.name} matches {image_format.value}")
                return image_format
        return None


def _matches(head: bytes, signature: Signature) -> bool:
    return all(head[offset : offset + len(magic)] == magic for offset, magic in signature)
