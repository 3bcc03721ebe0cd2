"""Directory walker that yields candidate files in a deterministic order."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Set, Tuple

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """Walks an input directory, optionally recursively."""

    def __init__(self, recursive: bool = False, skip_hidden: bool = False):
        """
        Initialize the walker.

        Args:
            recursive: Descend into subdirectories
            skip_hidden: Skip hidden files and folders
        """
        self.recursive = recursive
        self.skip_hidden = skip_hidden

    def walk(self, directory: Path) -> Iterator[Path]:
        """
        Yield files under a directory.

        Entries are sorted by name within each directory, and a directory's
        files come before its subdirectories. Directory symlinks are followed,
        but each physical directory is visited only once.

        Args:
            directory: Root directory to walk

        Yields:
            File paths

        Raises:
            FileNotFoundError: If directory doesn't exist
            PermissionError: If the root directory is not readable
        """
        if not directory.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")

        if not directory.is_dir():
            raise ValueError(f"Not a directory: {directory}")

        logger.debug(f"Walking directory: {directory} (recursive={self.recursive})")

        visited: Set[Tuple[int, int]] = set()
        yield from self._walk(directory, visited, is_root=True)

    def _walk(
        self, directory: Path, visited: Set[Tuple[int, int]], is_root: bool = False
    ) -> Iterator[Path]:
        try:
            stat = directory.stat()
        except OSError as e:
            if is_root:
                raise
            logger.warning(f"Cannot access directory {directory}: {e}")
            return

        key = (stat.st_dev, stat.st_ino)
        if key in visited:
            logger.debug(f"Already visited, skipping: {directory}")
            return
        visited.add(key)

        try:
            entries = self._list_entries(directory)
        except PermissionError as e:
            if is_root:
                raise
            logger.warning(f"Permission denied accessing directory: {e}")
            return

        subdirs: List[Path] = []
        for entry in entries:
            path = Path(entry.path)
            if self.skip_hidden and self._is_hidden(path):
                continue

            try:
                if entry.is_dir():
                    subdirs.append(path)
                elif entry.is_file():
                    yield path
            except OSError as e:
                logger.warning(f"Cannot stat {path}: {e}")

        if not self.recursive:
            return

        for subdir in subdirs:
            yield from self._walk(subdir, visited)

    def _list_entries(self, directory: Path) -> List[os.DirEntry]:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _is_hidden(self, path: Path) -> bool:
        """
        Check if a path is hidden (dot-prefixed, or flagged hidden on Windows).

        Args:
            path: Path to check

        Returns:
            True if path is hidden
        """
        if path.name.startswith("."):
            return True

        if os.name != "nt":
            return False

        import ctypes

        FILE_ATTRIBUTE_HIDDEN = 0x02
        attrs = ctypes.windll.kernel32.GetFileAttributesW(str(path))
        return attrs != -1 and bool(attrs & FILE_ATTRIBUTE_HIDDEN)
