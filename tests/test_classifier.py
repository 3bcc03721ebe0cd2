"""Tests for orientation classification and dimension decoding."""

import pytest

from orientation_sorter.core.classifier import (
    ImageDecodeError,
    PillowDecoder,
    classify_orientation,
)
from orientation_sorter.core.models import ImageCandidate, ImageFormat, Orientation


@pytest.mark.parametrize(
    "width, height, expected",
    [
        (800, 600, Orientation.LANDSCAPE),
        (600, 800, Orientation.PORTRAIT),
        (500, 500, Orientation.SQUARE),
        (1001, 1000, Orientation.LANDSCAPE),
        (1000, 1001, Orientation.PORTRAIT),
        (1, 1, Orientation.SQUARE),
    ],
)
def test_classify_orientation(width, height, expected):
    """Exact comparison, no tolerance for nearly-square images."""
    assert classify_orientation(width, height) == expected


class TestPillowDecoder:
    """Test PillowDecoder class."""

    def test_reads_dimensions(self, tmp_path, image_factory):
        path = image_factory(tmp_path / "photo.png", (640, 480), "PNG")

        assert PillowDecoder().dimensions(path, ImageFormat.PNG) == (640, 480)

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"\xff\xd8\xff\xe0 truncated garbage")

        with pytest.raises(ImageDecodeError):
            PillowDecoder().dimensions(path, ImageFormat.JPEG)

    def test_format_mismatch_raises(self, tmp_path, image_factory):
        """A PNG claiming to be a JPEG is rejected in strict mode."""
        path = image_factory(tmp_path / "really_png.jpg", (10, 20), "PNG")

        with pytest.raises(ImageDecodeError):
            PillowDecoder().dimensions(path, ImageFormat.JPEG)

    def test_format_mismatch_allowed_when_not_strict(self, tmp_path, image_factory):
        path = image_factory(tmp_path / "really_png.jpg", (10, 20), "PNG")

        assert PillowDecoder(strict_format=False).dimensions(path, ImageFormat.JPEG) == (10, 20)


class TestImageCandidate:
    """Test lazy dimension lookup on ImageCandidate."""

    def test_dimensions_decoded_once(self, tmp_path):
        calls = []

        class CountingDecoder:
            def dimensions(self, path, image_format):
                calls.append(path)
                return (3, 4)

        candidate = ImageCandidate(path=tmp_path / "x.png", image_format=ImageFormat.PNG)
        decoder = CountingDecoder()

        assert candidate.dimensions(decoder) == (3, 4)
        assert candidate.dimensions(decoder) == (3, 4)
        assert len(calls) == 1
