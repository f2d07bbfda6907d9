"""Assembly of a complete :class:`~epubread.models.Book` from an EPUB file.

``read_book`` runs the whole pipeline against one archive, in this order:

1. open the archive,
2. locate the package document through ``META-INF/container.xml``,
3. parse the package document,
4. load the cover image straight from the manifest,
5. resolve the spine into the reading order,
6. locate and parse the navigation document,
7. materialise every manifest item into :class:`~epubread.models.Content`.

The archive is held open only for the duration of the call.  Any failure
aborts the call; a partially populated ``Book`` is never returned.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional

from .archive import EpubArchive, is_remote, join_path, open_archive
from .config import ReaderOptions
from .container import find_root_file
from .content import load_text_file, read_content, run_ordered
from .errors import NavigationMissingError, SpineReferenceError
from .models import Book, LocalTextContentFile, ManifestItem, Package
from .navigation import read_navigation
from .parser import PackageParser

__all__ = ["read_book", "read_cover_image", "read_reading_order", "navigation_file_path"]

logger = logging.getLogger(__name__)


def read_cover_image(archive: EpubArchive, package: Package) -> bytes:
    """Bytes of the local manifest item marked ``cover-image`` (last one wins).

    Remote candidates are ignored, matching :func:`~epubread.content.read_content`.
    """
    cover = b""
    for item in package.manifest.find_by_property("cover-image"):
        if is_remote(item.href):
            continue
        cover = archive.read(join_path(package.content_directory, item.href))
    return cover


def read_reading_order(
    archive: EpubArchive, package: Package, options: Optional[ReaderOptions] = None
) -> List[LocalTextContentFile]:
    """Load the spine items, in spine order, as text.

    An itemref naming no manifest item is skipped: stale spine entries are
    common in the wild and not worth failing a whole read over.  With
    ``options.strict`` it raises :class:`SpineReferenceError` instead.
    Spine items that are absolute URLs are never looked up in the archive;
    they are skipped with a warning.
    """
    options = options or ReaderOptions()
    items: List[ManifestItem] = []
    for ref in package.spine.item_refs:
        item = package.manifest.get(ref.idref)
        if item is None:
            if options.strict:
                raise SpineReferenceError(ref.idref)
            logger.warning("skipping spine itemref %r: no such manifest item", ref.idref)
            continue
        if is_remote(item.href):
            logger.warning("skipping spine itemref %r: remote resource %s", ref.idref, item.href)
            continue
        items.append(item)

    return run_ordered(
        lambda item: load_text_file(archive, item, package.content_directory, options),
        items,
        options.max_workers,
    )


def navigation_file_path(package: Package) -> str:
    """Archive path of the first manifest item carrying the ``nav`` property."""
    navs = package.manifest.find_by_property("nav")
    if not navs:
        raise NavigationMissingError()
    return join_path(package.content_directory, navs[0].href)


def read_book(source: Path | str | BinaryIO, options: Optional[ReaderOptions] = None) -> Book:
    """Read the EPUB at *source* (path or binary file object) into a :class:`Book`."""
    options = options or ReaderOptions()
    file_path = str(source) if isinstance(source, (str, Path)) else getattr(source, "name", "")

    with open_archive(source) as archive:
        root_file = find_root_file(archive)
        package = PackageParser().parse(archive, root_file.full_path)

        cover_image = read_cover_image(archive, package)
        reading_order = read_reading_order(archive, package, options)

        navigation_document = read_navigation(archive, navigation_file_path(package))
        content = read_content(archive, package.manifest, package.content_directory, options)

    metadata = package.metadata
    book = Book(
        file_path=file_path,
        title=metadata.titles[0].value if metadata.titles else "",
        author=metadata.creators[0].value if metadata.creators else "",
        authors=metadata.creator_names,
        description=metadata.first_description(),
        cover_image=cover_image,
        reading_order=tuple(reading_order),
        navigation=navigation_document.navigations,
        content=content,
        package=package,
        navigation_document=navigation_document,
    )
    logger.debug(
        "read %s: %r, %d reading-order items, %d nav blocks",
        file_path,
        book.title,
        len(book.reading_order),
        len(book.navigation),
    )
    return book
