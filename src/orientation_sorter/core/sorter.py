"""The sorting pipeline: walk, detect, classify, resolve, place, report."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from orientation_sorter.core.classifier import (
    ImageDecodeError,
    ImageDecoder,
    PillowDecoder,
    classify_orientation,
)
from orientation_sorter.core.detector import FormatDetector
from orientation_sorter.core.executor import PlacementExecutor
from orientation_sorter.core.models import (
    CollisionPolicy,
    ImageCandidate,
    OperatingMode,
    PlacementPlan,
)
from orientation_sorter.core.report import (
    DESTINATION_EXISTS,
    UNSUPPORTED_FORMAT,
    RunReport,
)
from orientation_sorter.core.resolver import DestinationResolver
from orientation_sorter.core.scanner import DirectoryWalker

logger = logging.getLogger(__name__)


@dataclass
class SortOptions:
    """Everything that shapes a sorting run."""

    input_dir: Path
    output_dir: Optional[Path] = None
    mode: OperatingMode = OperatingMode.MOVE
    policy: CollisionPolicy = CollisionPolicy.RENAME
    prefix: bool = False
    recursive: bool = False
    read_headers: bool = False
    dry_run: bool = False
    skip_hidden: bool = False

    def __post_init__(self) -> None:
        # Claims and no-op checks compare paths, so each directory gets one spelling
        self.input_dir = Path(self.input_dir).resolve()
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir).resolve()

    def validate(self) -> None:
        """
        Check the options before anything is touched.

        Raises:
            FileNotFoundError: If the input directory doesn't exist
            ValueError: If the input is not a directory, or options conflict
            PermissionError: If the input directory is not readable
        """
        if self.mode is OperatingMode.RENAME_IN_PLACE:
            if self.output_dir is not None:
                raise ValueError("Rename-in-place cannot be combined with an output directory")
            if self.prefix:
                raise ValueError("Rename-in-place cannot be combined with prefix")

        if not self.input_dir.exists():
            raise FileNotFoundError(f"Input directory not found: {self.input_dir}")

        if not self.input_dir.is_dir():
            raise ValueError(f"Not a directory: {self.input_dir}")

        if not os.access(self.input_dir, os.R_OK | os.X_OK):
            raise PermissionError(f"Input directory is not readable: {self.input_dir}")

    @property
    def destination_root(self) -> Optional[Path]:
        """Where orientation folders go; the input directory unless overridden."""
        if self.mode is OperatingMode.RENAME_IN_PLACE:
            return None
        return self.output_dir if self.output_dir is not None else self.input_dir


class OrientationSorter:
    """Sorts the images of a directory by orientation."""

    def __init__(
        self,
        options: SortOptions,
        decoder: Optional[ImageDecoder] = None,
        show_progress: bool = True,
    ):
        """
        Initialize the sorter.

        Args:
            options: Run options
            decoder: Image dimension decoder (default: Pillow)
            show_progress: Show progress bar while sorting
        """
        self.options = options
        self.decoder = decoder or PillowDecoder()
        self.show_progress = show_progress

        self.walker = DirectoryWalker(
            recursive=options.recursive, skip_hidden=options.skip_hidden
        )
        self.detector = FormatDetector(read_headers=options.read_headers)
        self.executor = PlacementExecutor()

    def run(self) -> RunReport:
        """
        Sort every candidate under the input directory.

        Per-file problems are recorded in the report and never stop the run.

        Returns:
            Report of the run

        Raises:
            FileNotFoundError, ValueError, PermissionError: On invalid options
        """
        self.options.validate()

        resolver = DestinationResolver(
            mode=self.options.mode,
            policy=self.options.policy,
            output_dir=self.options.destination_root,
            prefix=self.options.prefix,
            dry_run=self.options.dry_run,
        )
        report = RunReport(dry_run=self.options.dry_run)

        logger.info(
            f"Sorting {self.options.input_dir} ({self.options.mode.value}, "
            f"on collision: {self.options.policy.value})"
        )

        paths = tqdm(
            self.walker.walk(self.options.input_dir),
            desc="Sorting images",
            unit="file",
            disable=not self.show_progress,
        )
        for path in paths:
            self._process(path, resolver, report)

        logger.debug(
            f"Run finished: {report.processed} placed, "
            f"{report.skipped_count} skipped, {report.error_count} errors"
        )
        return report

    def _process(self, path: Path, resolver: DestinationResolver, report: RunReport) -> None:
        # Output folders may live inside a recursively walked input tree
        if resolver.is_claimed(path):
            logger.debug(f"Placed earlier in this run, ignoring: {path}")
            return

        try:
            image_format = self.detector.classify(path)
        except OSError as e:
            logger.warning(f"Cannot read {path}: {e}")
            report.record_error(path, str(e))
            return

        if image_format is None:
            logger.info(f"Skipped {path} ({UNSUPPORTED_FORMAT})")
            report.record_skip(path, UNSUPPORTED_FORMAT)
            return

        candidate = ImageCandidate(path=path, image_format=image_format)
        try:
            width, height = candidate.dimensions(self.decoder)
        except ImageDecodeError as e:
            logger.warning(str(e))
            report.record_error(path, str(e))
            return

        orientation = classify_orientation(width, height)
        plan = resolver.resolve(path, orientation)
        if plan is None:
            logger.info(f"Skipped {path} ({DESTINATION_EXISTS})")
            report.record_skip(path, DESTINATION_EXISTS)
            return

        result = self.executor.execute(plan)
        if not result.success:
            report.record_error(path, result.error or "unknown error")
            return

        if plan.mode is not OperatingMode.COPY and not plan.is_noop:
            resolver.release(plan.source)

        if plan.dry_run:
            report.record_planned(plan)
        else:
            report.record_success(plan)
        _log_placement(plan)


def _log_placement(plan: PlacementPlan) -> None:
    action = "Would " + plan.mode.value if plan.dry_run else plan.mode.value.capitalize()
    logger.info(f"{action} {plan.source} -> {plan.destination}")
