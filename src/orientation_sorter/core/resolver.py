"""Destination path resolution under a collision policy."""

import logging
from pathlib import Path
from typing import Dict, Optional, Set

from orientation_sorter.core.models import (
    CollisionPolicy,
    OperatingMode,
    Orientation,
    PlacementPlan,
)

logger = logging.getLogger(__name__)

# Subdirectory of the output directory for each orientation
ORIENTATION_FOLDERS: Dict[Orientation, str] = {
    Orientation.LANDSCAPE: "wide",
    Orientation.PORTRAIT: "tall",
    Orientation.SQUARE: "sqr",
}

# Filename prefix for each orientation
ORIENTATION_TAGS: Dict[Orientation, str] = {
    Orientation.LANDSCAPE: "wide",
    Orientation.PORTRAIT: "tall",
    Orientation.SQUARE: "sqr",
}


class DestinationResolver:
    """
    Computes where each image goes and resolves name collisions.

    The resolver remembers every destination it hands out and every source
    that has been moved away during the run, so occupancy is judged the same
    way whether or not the filesystem is actually being changed. A dry run
    therefore assigns the same numeric suffixes a real run would.
    """

    def __init__(
        self,
        mode: OperatingMode,
        policy: CollisionPolicy = CollisionPolicy.RENAME,
        output_dir: Optional[Path] = None,
        prefix: bool = False,
        dry_run: bool = False,
    ):
        """
        Initialize the resolver.

        Args:
            mode: Move, copy, or rename in place
            policy: Collision policy
            output_dir: Root of the orientation folders (ignored for rename in place)
            prefix: Prepend the orientation tag to relocated filenames
            dry_run: Mark produced plans as dry-run

        Raises:
            ValueError: If a relocating mode has no output directory, or
                rename in place is combined with prefix
        """
        if mode is OperatingMode.RENAME_IN_PLACE and prefix:
            raise ValueError("Rename-in-place cannot be combined with prefix")
        if mode is not OperatingMode.RENAME_IN_PLACE and output_dir is None:
            raise ValueError(f"An output directory is required in {mode.value} mode")

        self.mode = mode
        self.policy = policy
        self.output_dir = output_dir
        self.prefix = prefix
        self.dry_run = dry_run

        self._claimed: Set[Path] = set()
        self._vacated: Set[Path] = set()

    def target_path(self, source: Path, orientation: Orientation) -> Path:
        """
        Compute the destination before collision handling.

        Args:
            source: Source image
            orientation: Orientation of the image

        Returns:
            Uncollided destination path
        """
        tag = ORIENTATION_TAGS[orientation]

        if self.mode is OperatingMode.RENAME_IN_PLACE:
            return source.parent / f"{tag}_{source.name}"

        filename = f"{tag}_{source.name}" if self.prefix else source.name
        return self.output_dir / ORIENTATION_FOLDERS[orientation] / filename

    def resolve(self, source: Path, orientation: Orientation) -> Optional[PlacementPlan]:
        """
        Resolve the final destination of an image and claim it.

        Args:
            source: Source image
            orientation: Orientation of the image

        Returns:
            Placement plan, or None if the collision policy says to skip
        """
        destination = self.target_path(source, orientation)
        overwrite = False

        if destination == source:
            logger.debug(f"Already in place: {source}")
        elif self.is_occupied(destination):
            if self.policy is CollisionPolicy.SKIP:
                logger.debug(f"Destination exists, skipping: {destination}")
                return None
            if self.policy is CollisionPolicy.OVERWRITE:
                logger.debug(f"Destination exists, will overwrite: {destination}")
                overwrite = True
            else:
                destination = self._next_free_name(destination)
                logger.debug(f"Destination exists, renamed to: {destination.name}")

        self._claimed.add(destination)
        self._vacated.discard(destination)

        return PlacementPlan(
            source=source,
            destination=destination,
            mode=self.mode,
            orientation=orientation,
            overwrite=overwrite,
            dry_run=self.dry_run,
        )

    def release(self, source: Path) -> None:
        """
        Record that a source file has been moved away.

        Args:
            source: Path that no longer holds a file
        """
        if source not in self._claimed:
            self._vacated.add(source)

    def is_claimed(self, path: Path) -> bool:
        """True if an earlier plan in this run placed (or will place) a file here."""
        return path in self._claimed

    def is_occupied(self, path: Path) -> bool:
        """
        Check whether a path is taken on disk or claimed earlier in this run.

        Args:
            path: Candidate destination

        Returns:
            True if placing a file there would collide
        """
        if path in self._claimed:
            return True
        if path in self._vacated:
            return False
        return path.exists() or path.is_symlink()

    def _next_free_name(self, destination: Path) -> Path:
        stem = destination.stem
        suffix = destination.suffix
        counter = 1
        candidate = destination.with_name(f"{stem}_{counter}{suffix}")
        while self.is_occupied(candidate):
            counter += 1
            candidate = destination.with_name(f"{stem}_{counter}{suffix}")
        return candidate
