"""
Read-only access to the entries of an EPUB (ZIP) container.

Lookups are by exact, case-sensitive entry name: no normalisation, no
wildcards.  Callers hand in already-joined paths (see :func:`join_path`).

Entries are read fully into memory up to the size declared in the central
directory.  Archives with imprecise size metadata are common enough that a
stream ending early is treated as end of data rather than a failure.
"""
from __future__ import annotations

import contextlib
import logging
import posixpath
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Iterator, List, Tuple
from urllib.parse import unquote, urlsplit

from .errors import (
    ArchiveNotFoundError,
    ArchiveReadError,
    CorruptArchiveError,
    EntryNotFoundError,
)

__all__ = [
    "EpubArchive",
    "open_archive",
    "join_path",
    "is_remote",
]

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class EpubArchive:
    """Thin wrapper around an open :class:`zipfile.ZipFile`.

    The handle is read-only and safe for concurrent reads of distinct
    entries.  It is owned by whoever opened it (normally
    :func:`open_archive`) and must not outlive that scope.
    """

    def __init__(self, zf: zipfile.ZipFile, path: str = "<stream>") -> None:
        self._zf = zf
        self.path = path

    @property
    def names(self) -> List[str]:
        """Entry names in central-directory order."""
        return self._zf.namelist()

    def __contains__(self, name: str) -> bool:
        return name in self._zf.NameToInfo

    @contextlib.contextmanager
    def find(self, name: str) -> Iterator[Tuple[BinaryIO, int]]:
        """Yield ``(stream, declared_size)`` for the entry called *name*.

        The stream is closed when the block exits, whatever happens inside.
        """
        try:
            info = self._zf.getinfo(name)
        except KeyError:
            raise EntryNotFoundError(name) from None

        if info.flag_bits & 0x1:
            raise ArchiveReadError(name, "entry is encrypted")

        try:
            stream = self._zf.open(info)
        except (zipfile.BadZipFile, NotImplementedError, OSError) as exc:
            raise ArchiveReadError(name, str(exc)) from exc

        with stream:
            yield stream, info.file_size

    def read(self, name: str) -> bytes:
        """Return the whole payload of *name*."""
        with self.find(name) as (stream, size):
            try:
                data = read_fully(stream, size)
            except (zipfile.BadZipFile, zlib.error, OSError) as exc:
                raise ArchiveReadError(name, str(exc)) from exc
        logger.debug("read %s (%d of %d bytes)", name, len(data), size)
        return data

    def close(self) -> None:
        self._zf.close()

    def __enter__(self) -> "EpubArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def read_fully(stream: BinaryIO, size: int) -> bytes:
    """Read up to *size* bytes from *stream*.

    A stream that runs dry before *size* bytes (including a compressed
    stream whose end marker is missing) yields what was read so far.
    Any other error propagates.
    """
    buf = bytearray()
    while len(buf) < size:
        try:
            chunk = stream.read(min(_CHUNK_SIZE, size - len(buf)))
        except EOFError:
            break
        if not chunk:
            break
        buf += chunk
    return bytes(buf)


@contextlib.contextmanager
def open_archive(source: Path | str | BinaryIO) -> Iterator[EpubArchive]:
    """Open *source* (a path or a binary file object) as an EPUB archive.

    The archive is closed exactly once when the block exits, including on
    failure inside the block.
    """
    if isinstance(source, (str, Path)):
        source = Path(source).expanduser()
        if not source.is_file():
            raise ArchiveNotFoundError(f"archive not found: {source}")
        label = str(source)
    else:
        label = getattr(source, "name", "<stream>")

    try:
        zf = zipfile.ZipFile(source)
    except zipfile.BadZipFile as exc:
        raise CorruptArchiveError(f"not a readable ZIP archive: {label}") from exc
    except OSError as exc:
        raise ArchiveNotFoundError(f"cannot open archive {label}: {exc}") from exc

    logger.debug("opened %s (%d entries)", label, len(zf.infolist()))
    with EpubArchive(zf, label) as archive:
        yield archive


def is_remote(href: str) -> bool:
    """True when *href* is an absolute URL rather than an archive path."""
    parts = urlsplit(href)
    return bool(parts.scheme and parts.netloc)


def join_path(directory: str, href: str) -> str:
    """Resolve manifest *href* against *directory* into an archive entry name.

    The href is percent-decoded and stripped of its fragment.  Paths that
    climb out of the archive root are rejected as missing entries.
    """
    target = unquote(href.split("#", 1)[0])
    joined = posixpath.normpath(posixpath.join(directory, target))
    if joined.startswith("/") or joined == ".." or joined.startswith("../"):
        raise EntryNotFoundError(joined, f"path escapes archive root: {href}")
    return joined
