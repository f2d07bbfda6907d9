"""Exceptions raised while reading an EPUB archive.

All of them derive from :class:`EpubError`, so a caller that only wants to
know "could the book be read?" catches a single type.  Every failure is
terminal for the ``read_book`` call that raised it.
"""
from __future__ import annotations

__all__ = [
    "EpubError",
    "ArchiveOpenError",
    "ArchiveNotFoundError",
    "CorruptArchiveError",
    "EntryNotFoundError",
    "ArchiveReadError",
    "MalformedXmlError",
    "ContainerMissingError",
    "NavigationMissingError",
    "SpineReferenceError",
]


class EpubError(Exception):
    """Base exception for all epubread errors."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class ArchiveOpenError(EpubError):
    """The archive itself could not be opened."""


class ArchiveNotFoundError(ArchiveOpenError):
    pass


class CorruptArchiveError(ArchiveOpenError):
    """The ZIP central directory is unreadable."""


class EntryNotFoundError(EpubError):
    """A required archive-relative path does not exist."""

    def __init__(self, entry: str, message: str | None = None):
        self.entry = entry
        super().__init__(message or f"file not found in EPUB: {entry}")


class ArchiveReadError(EpubError):
    """Reading an entry failed for a reason other than end of data."""

    def __init__(self, entry: str, message: str):
        self.entry = entry
        super().__init__(f"{entry}: {message}")


class MalformedXmlError(EpubError):
    """A required document does not decode into its expected shape."""

    def __init__(self, entry: str, message: str):
        self.entry = entry
        super().__init__(f"{entry}: {message}")


class ContainerMissingError(EpubError):
    def __init__(self, message: str = "root file not found in META-INF/container.xml"):
        super().__init__(message)


class NavigationMissingError(EpubError):
    def __init__(self, message: str = "navigation file not found"):
        super().__init__(message)


class SpineReferenceError(EpubError):
    """A spine itemref points at no manifest item (strict mode only)."""

    def __init__(self, idref: str):
        self.idref = idref
        super().__init__(f"spine itemref {idref!r} does not match any manifest item")
