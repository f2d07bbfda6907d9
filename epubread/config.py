"""Reader options."""
from __future__ import annotations

import codecs
from dataclasses import dataclass

__all__ = ["ReaderOptions"]


@dataclass(frozen=True)
class ReaderOptions:
    """Knobs for :func:`epubread.read_book`.

    strict
        Fail with :class:`~epubread.errors.SpineReferenceError` when a spine
        itemref names no manifest item, instead of skipping it.
    max_workers
        Threads used to load manifest and spine payloads; ``1`` reads
        sequentially.  Results are folded in document order either way.
    encoding, fallback_encoding
        Used to decode text payloads; the fallback never fails.
    """

    strict: bool = False
    max_workers: int = 1
    encoding: str = "utf-8"
    fallback_encoding: str = "cp1252"

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        for name in (self.encoding, self.fallback_encoding):
            try:
                codecs.lookup(name)
            except LookupError:
                raise ValueError(f"unknown text encoding: {name!r}") from None
