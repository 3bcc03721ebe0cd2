"""Performs (or simulates) the filesystem action of a placement plan."""

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path

from orientation_sorter.core.models import OperatingMode, PlacementPlan, PlacementResult

logger = logging.getLogger(__name__)

BUFFER_SIZE = 1024 * 1024


class PlacementExecutor:
    """Moves, copies, or renames files according to resolved plans."""

    def execute(self, plan: PlacementPlan) -> PlacementResult:
        """
        Carry out a placement plan.

        Dry-run plans and plans whose destination is their source change
        nothing. Failures are reported in the result instead of raised.

        Args:
            plan: Resolved placement plan

        Returns:
            Result with success flag and error reason
        """
        if plan.dry_run:
            logger.debug(f"[dry run] {plan.mode.value}: {plan.source} -> {plan.destination}")
            return PlacementResult(plan=plan, success=True)

        if plan.is_noop:
            return PlacementResult(plan=plan, success=True)

        try:
            if not plan.overwrite and (
                plan.destination.exists() or plan.destination.is_symlink()
            ):
                raise FileExistsError(
                    errno.EEXIST, "Destination already exists", str(plan.destination)
                )

            # Created only now so that skipped or previewed runs leave no empty folders
            plan.destination.parent.mkdir(parents=True, exist_ok=True)

            if plan.mode is OperatingMode.COPY:
                atomic_copy(plan.source, plan.destination)
            else:
                self._move(plan.source, plan.destination)

        except (OSError, shutil.Error) as e:
            logger.error(f"Failed to {plan.mode.value} {plan.source}: {e}")
            return PlacementResult(plan=plan, success=False, error=str(e))

        logger.debug(f"{plan.mode.value}: {plan.source} -> {plan.destination}")
        return PlacementResult(plan=plan, success=True)

    def _move(self, source: Path, destination: Path) -> None:
        """
        Move a file, falling back to copy-then-delete across filesystems.

        Args:
            source: File to move
            destination: Final path
        """
        try:
            os.replace(source, destination)
            return
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        logger.debug(f"Cross-device move, copying: {source} -> {destination}")
        atomic_copy(source, destination)
        source.unlink()


def atomic_copy(source: Path, destination: Path) -> None:
    """
    Copy a file byte-for-byte without exposing a partial destination.

    Data is written to a temporary file next to the destination, flushed to
    disk, and renamed over the destination only once complete.

    Args:
        source: File to copy
        destination: Final path

    Raises:
        OSError: If reading, writing, or the final rename fails
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".part"
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as fdst, open(source, "rb") as fsrc:
            shutil.copyfileobj(fsrc, fdst, BUFFER_SIZE)
            fdst.flush()
            os.fsync(fdst.fileno())

        shutil.copystat(source, tmp_path)
        os.replace(tmp_path, destination)

    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
