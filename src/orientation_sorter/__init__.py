"""
Image Orientation Sorter - Sort images into folders by orientation.

Classifies raster images as landscape, portrait, or square and moves, copies,
or renames them into wide/tall/sqr folders, never overwriting files unless
asked to.
"""

__version__ = "0.4.0"
__author__ = "Image Orientation Sorter Contributors"

from orientation_sorter.core.models import CollisionPolicy, OperatingMode, Orientation
from orientation_sorter.core.report import RunReport
from orientation_sorter.core.sorter import OrientationSorter, SortOptions

__all__ = [
    "CollisionPolicy",
    "OperatingMode",
    "Orientation",
    "OrientationSorter",
    "RunReport",
    "SortOptions",
    "__version__",
]
