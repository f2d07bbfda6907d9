"""Pytest configuration for epubread tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

# Ensure project root is importable
PROJECT_ROOT = Path(__file__).resolve().parents[2]  # directory holding epubread/
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from epubread.tests.helpers import FileMap, sample_files, write_epub  # noqa: E402


@pytest.fixture()
def make_epub(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a file map into an ``.epub`` under *tmp_path*."""

    def _make(files: FileMap, name: str = "book.epub") -> Path:
        return write_epub(tmp_path / name, files)

    return _make


@pytest.fixture()
def sample_epub(make_epub) -> Path:
    return make_epub(sample_files())
