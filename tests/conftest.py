"""Shared fixtures for image-orientation-sorter tests."""

from pathlib import Path

import pytest
from PIL import Image


def make_image(path: Path, size=(800, 600), fmt: str = "JPEG") -> Path:
    """Write a solid-color image of the given size."""
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", size, color=(70, 130, 180))
    img.save(path, fmt)
    return path


@pytest.fixture
def image_factory():
    """Factory creating test images."""
    return make_image


@pytest.fixture
def sample_dir(tmp_path):
    """Input directory with one portrait, one landscape, and one square image."""
    input_dir = tmp_path / "input"
    make_image(input_dir / "portrait.jpg", (600, 800))
    make_image(input_dir / "landscape.jpg", (800, 600))
    make_image(input_dir / "square.jpg", (500, 500))
    return input_dir
