"""Shared fixtures for syncfiles tests."""

import os

import pytest
from click.testing import CliRunner

from syncfiles.events import EventLog

# Fixed mtimes so comparisons never depend on how fast the test runs.
OLD = 1_600_000_000
NEW = OLD + 3600


def write(path, text="", mtime=None):
    """Create *path* (and its parents) with *text*, optionally setting its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def listing(root):
    """Sorted relative paths of everything under *root* (dirs end with '/')."""
    result = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root)
        prefix = "" if rel == "." else rel.replace(os.sep, "/") + "/"
        result.extend(prefix + d + "/" for d in dirnames)
        result.extend(prefix + f for f in filenames)
    return sorted(result)


@pytest.fixture
def log():
    """An EventLog sink."""
    return EventLog()


@pytest.fixture
def src(tmp_path):
    p = tmp_path / "src"
    p.mkdir()
    return p


@pytest.fixture
def dst(tmp_path):
    p = tmp_path / "dst"
    p.mkdir()
    return p


@pytest.fixture
def runner():
    return CliRunner()
