"""Test the directory walker module."""

import os
from pathlib import Path

import pytest

from orientation_sorter.core.scanner import DirectoryWalker


@pytest.fixture
def temp_image_dir(tmp_path):
    """Create a temporary directory with test files."""
    (tmp_path / "b_image.png").touch()
    (tmp_path / "a_image.jpg").touch()
    (tmp_path / "document.txt").touch()
    (tmp_path / ".hidden.jpg").touch()

    subdir = tmp_path / "subdir"
    subdir.mkdir()
    (subdir / "image3.jpg").touch()

    hidden_dir = tmp_path / ".cache"
    hidden_dir.mkdir()
    (hidden_dir / "thumb.jpg").touch()

    return tmp_path


def test_walker_non_recursive(temp_image_dir):
    """Only direct children, sorted by name."""
    walker = DirectoryWalker(recursive=False)

    names = [p.name for p in walker.walk(temp_image_dir)]

    assert names == [".hidden.jpg", "a_image.jpg", "b_image.png", "document.txt"]


def test_walker_recursive(temp_image_dir):
    """Files of a directory come before its subdirectories' files."""
    walker = DirectoryWalker(recursive=True)

    paths = list(walker.walk(temp_image_dir))
    relative = [p.relative_to(temp_image_dir).as_posix() for p in paths]

    assert relative == [
        ".hidden.jpg",
        "a_image.jpg",
        "b_image.png",
        "document.txt",
        ".cache/thumb.jpg",
        "subdir/image3.jpg",
    ]


def test_walker_skip_hidden(temp_image_dir):
    walker = DirectoryWalker(recursive=True, skip_hidden=True)

    names = {p.name for p in walker.walk(temp_image_dir)}

    assert names == {"a_image.jpg", "b_image.png", "document.txt", "image3.jpg"}


def test_walker_is_lazy(temp_image_dir):
    """walk() returns a generator that is consumed once."""
    walker = DirectoryWalker()
    walk = walker.walk(temp_image_dir)

    first = next(walk)
    rest = list(walk)

    assert first.name == ".hidden.jpg"
    assert len(rest) == 3
    assert list(walk) == []


def test_walker_order_is_deterministic(temp_image_dir):
    walker = DirectoryWalker(recursive=True)

    assert list(walker.walk(temp_image_dir)) == list(walker.walk(temp_image_dir))


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_walker_survives_symlink_loop(tmp_path):
    """A directory symlink pointing back up is visited only once."""
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "photo.jpg").touch()
    (tmp_path / "a" / "loop").symlink_to(tmp_path, target_is_directory=True)

    walker = DirectoryWalker(recursive=True)
    names = [p.name for p in walker.walk(tmp_path)]

    assert names == ["photo.jpg"]


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_walker_follows_directory_symlink(tmp_path):
    """Symlinked directories outside the root are walked."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "linked.png").touch()
    root = tmp_path / "root"
    root.mkdir()
    (root / "link").symlink_to(outside, target_is_directory=True)

    walker = DirectoryWalker(recursive=True)

    assert [p.name for p in walker.walk(root)] == ["linked.png"]


def test_walker_nonexistent_directory():
    """Test that walker raises error for nonexistent directory."""
    walker = DirectoryWalker()

    with pytest.raises(FileNotFoundError):
        list(walker.walk(Path("/nonexistent/path")))


def test_walker_rejects_file(tmp_path):
    path = tmp_path / "file.jpg"
    path.touch()

    with pytest.raises(ValueError):
        list(DirectoryWalker().walk(path))
