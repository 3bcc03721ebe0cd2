"""Run report accumulating the outcome of a sorting run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from orientation_sorter.core.models import Orientation, PlacementPlan

UNSUPPORTED_FORMAT = "unsupported format"
DESTINATION_EXISTS = "destination exists"


@dataclass
class RunReport:
    """Counts and per-file details for one run."""

    dry_run: bool = False
    successes: Dict[Orientation, int] = field(
        default_factory=lambda: {orientation: 0 for orientation in Orientation}
    )
    placed: List[Tuple[Path, Path]] = field(default_factory=list)
    skipped: List[Tuple[Path, str]] = field(default_factory=list)
    errors: List[Tuple[Path, str]] = field(default_factory=list)

    def record_success(self, plan: PlacementPlan) -> None:
        self.successes[plan.orientation] += 1
        self.placed.append((plan.source, plan.destination))

    def record_planned(self, plan: PlacementPlan) -> None:
        """Record a placement that a dry run would have performed."""
        self.record_success(plan)

    def record_skip(self, path: Path, reason: str) -> None:
        self.skipped.append((path, reason))

    def record_error(self, path: Path, reason: str) -> None:
        self.errors.append((path, reason))

    @property
    def planned(self) -> List[Tuple[Path, Path]]:
        """Source -> destination mappings of a dry run."""
        return list(self.placed) if self.dry_run else []

    @property
    def processed(self) -> int:
        return sum(self.successes.values())

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def summary(self) -> str:
        """
        Human-readable summary of the run.

        Returns:
            Multi-line summary starting with "Processed N files successfully."
        """
        lines = []
        if self.dry_run:
            lines.append("Dry run: no files were changed.")
        lines.append(f"Processed {self.processed} files successfully.")
        lines.append(
            "  "
            + ", ".join(
                f"{orientation.value}: {count}"
                for orientation, count in self.successes.items()
            )
        )
        lines.append(f"  skipped: {self.skipped_count}, errors: {self.error_count}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the report."""
        return {
            "dry_run": self.dry_run,
            "processed": self.processed,
            "successes": {o.value: count for o, count in self.successes.items()},
            "placed": [{"source": str(s), "destination": str(d)} for s, d in self.placed],
            "skipped": [{"path": str(p), "reason": r} for p, r in self.skipped],
            "errors": [{"path": str(p), "reason": r} for p, r in self.errors],
        }
