"""epubread - decode EPUB archives into an immutable document model.

This package provides:
    • read_book – open an archive and return a fully assembled Book.
    • PackageParser / read_navigation – the OPF and navigation document parsers.
    • classify / read_content – MIME-based content classification and loading.
    • CLI utilities under epubread.cli (Click).

Everything is read into memory in one pass; nothing is written to disk.
"""

__all__ = [
    "Book",
    "EpubError",
    "PackageParser",
    "ReaderOptions",
    "classify",
    "read_book",
    "read_content",
    "read_navigation",
]

from .assembler import read_book  # noqa: E402
from .config import ReaderOptions  # noqa: E402
from .content import classify, read_content  # noqa: E402
from .errors import EpubError  # noqa: E402
from .models import Book  # noqa: E402
from .navigation import read_navigation  # noqa: E402
from .parser import PackageParser  # noqa: E402
