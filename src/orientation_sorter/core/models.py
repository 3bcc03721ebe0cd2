"""Data model shared by the sorting pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class Orientation(Enum):
    """Aspect-ratio class of an image."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"


class ImageFormat(Enum):
    """Supported raster formats, valued by their Pillow format name."""

    JPEG = "JPEG"
    PNG = "PNG"
    GIF = "GIF"
    WEBP = "WEBP"
    ICO = "ICO"
    TIFF = "TIFF"
    BMP = "BMP"

    @property
    def pillow_name(self) -> str:
        return self.value


class CollisionPolicy(Enum):
    """What to do when a destination path is already occupied."""

    RENAME = "rename"
    OVERWRITE = "overwrite"
    SKIP = "skip"


class OperatingMode(Enum):
    """How a classified image is placed."""

    MOVE = "move"
    COPY = "copy"
    RENAME_IN_PLACE = "rename"

    @classmethod
    def from_flags(cls, copy: bool = False, rename: bool = False) -> "OperatingMode":
        """
        Pick the mode from the copy/rename switches.

        Raises:
            ValueError: If both switches are set
        """
        if copy and rename:
            raise ValueError("Rename-in-place cannot be combined with copy mode")
        if rename:
            return cls.RENAME_IN_PLACE
        if copy:
            return cls.COPY
        return cls.MOVE


@dataclass
class ImageCandidate:
    """A file accepted by the format detector, awaiting classification."""

    path: Path
    image_format: ImageFormat
    _dimensions: Optional[Tuple[int, int]] = field(default=None, repr=False)

    def dimensions(self, decoder) -> Tuple[int, int]:
        """
        Width and height of the image, decoded on first access.

        Args:
            decoder: Object implementing ``dimensions(path, image_format)``

        Raises:
            ImageDecodeError: If the decoder cannot read the image
        """
        if self._dimensions is None:
            self._dimensions = decoder.dimensions(self.path, self.image_format)
        return self._dimensions


@dataclass(frozen=True)
class PlacementPlan:
    """A resolved source -> destination placement."""

    source: Path
    destination: Path
    mode: OperatingMode
    orientation: Orientation
    overwrite: bool = False
    dry_run: bool = False

    @property
    def is_noop(self) -> bool:
        """True when the file already sits at its destination."""
        return self.source == self.destination


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of executing a plan."""

    plan: PlacementPlan
    success: bool
    error: Optional[str] = None
