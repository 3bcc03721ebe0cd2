"""Core functionality for detecting, classifying, and placing images."""

from orientation_sorter.core.classifier import PillowDecoder, classify_orientation
from orientation_sorter.core.detector import FormatDetector
from orientation_sorter.core.executor import PlacementExecutor
from orientation_sorter.core.resolver import DestinationResolver
from orientation_sorter.core.scanner import DirectoryWalker
from orientation_sorter.core.sorter import OrientationSorter, SortOptions

__all__ = [
    "DestinationResolver",
    "DirectoryWalker",
    "FormatDetector",
    "OrientationSorter",
    "PillowDecoder",
    "PlacementExecutor",
    "SortOptions",
    "classify_orientation",
]
