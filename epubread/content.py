"""
Content classification and materialisation.

:func:`classify` maps a declared MIME type (never a file extension) onto a
:class:`~epubread.models.ContentType`.  :func:`read_content` then walks the
manifest once, loads every local item as text or bytes depending on its
category, and sorts the results into the buckets of
:class:`~epubread.models.Content`.

Bucket rules follow manifest order exactly:

* the first XHTML item carrying the ``nav`` property is the navigation file;
* every image carrying ``cover-image`` replaces the previous cover, so the
  last one wins.

The asymmetry is kept on purpose for compatibility with existing readers.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from .archive import EpubArchive, is_remote, join_path
from .config import ReaderOptions
from .models import (
    Content,
    ContentFile,
    ContentFileType,
    ContentLocation,
    ContentType,
    LocalByteContentFile,
    LocalContentFile,
    LocalTextContentFile,
    Manifest,
    ManifestItem,
)

__all__ = [
    "classify",
    "decode_text",
    "is_text_type",
    "load_text_file",
    "load_byte_file",
    "read_content",
    "run_ordered",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Matched case-insensitively against the whole declared string.
_MIME_TYPES = {
    "application/xhtml+xml": ContentType.XHTML,
    "application/x-dtbook+xml": ContentType.DTB,
    "application/x-dtbncx+xml": ContentType.DTB_NCX,
    # Some readers file this under OEB1 CSS; both load as text, so buckets agree.
    "text/x-oeb1-document": ContentType.OEB1_DOCUMENT,
    "application/xml": ContentType.XML,
    "text/css": ContentType.CSS,
    "text/x-oeb1-css": ContentType.OEB1_CSS,
    "application/javascript": ContentType.SCRIPT,
    "application/ecmascript": ContentType.SCRIPT,
    "text/javascript": ContentType.SCRIPT,
    "image/gif": ContentType.IMAGE_GIF,
    "image/jpeg": ContentType.IMAGE_JPEG,
    "image/png": ContentType.IMAGE_PNG,
    "image/svg+xml": ContentType.IMAGE_SVG,
    "image/webp": ContentType.IMAGE_WEBP,
    "font/truetype": ContentType.FONT_TRUETYPE,
    "font/ttf": ContentType.FONT_TRUETYPE,
    "application/x-font-truetype": ContentType.FONT_TRUETYPE,
    "font/opentype": ContentType.FONT_OPENTYPE,
    "font/otf": ContentType.FONT_OPENTYPE,
    "application/vnd.ms-opentype": ContentType.FONT_OPENTYPE,
    "font/sfnt": ContentType.FONT_SFNT,
    "application/font-sfnt": ContentType.FONT_SFNT,
    "font/woff": ContentType.FONT_WOFF,
    "application/font-woff": ContentType.FONT_WOFF,
    "font/woff2": ContentType.FONT_WOFF2,
    "application/smil+xml": ContentType.SMIL,
    "audio/mpeg": ContentType.AUDIO_MP3,
    "audio/mp4": ContentType.AUDIO_MP4,
    "audio/ogg": ContentType.AUDIO_OGG,
    "audio/ogg; codecs=opus": ContentType.AUDIO_OGG,
}

TEXT_TYPES = frozenset(
    {
        ContentType.XHTML,
        ContentType.CSS,
        ContentType.OEB1_DOCUMENT,
        ContentType.OEB1_CSS,
        ContentType.XML,
        ContentType.DTB,
        ContentType.DTB_NCX,
        ContentType.SMIL,
        ContentType.SCRIPT,
    }
)
IMAGE_TYPES = frozenset(
    {
        ContentType.IMAGE_GIF,
        ContentType.IMAGE_JPEG,
        ContentType.IMAGE_PNG,
        ContentType.IMAGE_SVG,
        ContentType.IMAGE_WEBP,
    }
)
FONT_TYPES = frozenset(
    {
        ContentType.FONT_TRUETYPE,
        ContentType.FONT_OPENTYPE,
        ContentType.FONT_SFNT,
        ContentType.FONT_WOFF,
        ContentType.FONT_WOFF2,
    }
)
AUDIO_TYPES = frozenset({ContentType.AUDIO_MP3, ContentType.AUDIO_MP4, ContentType.AUDIO_OGG})


def classify(mime_type: str) -> ContentType:
    """Content type for *mime_type*; unknown or empty input gives ``OTHER``."""
    return _MIME_TYPES.get((mime_type or "").lower(), ContentType.OTHER)


def is_text_type(content_type: ContentType) -> bool:
    return content_type in TEXT_TYPES


def decode_text(data: bytes, encoding: str = "utf-8", fallback_encoding: str = "cp1252") -> str:
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError:
        text = data.decode(fallback_encoding, errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


# ---------------------------------------------------------------------------
# loaders
# ---------------------------------------------------------------------------


def load_text_file(
    archive: EpubArchive,
    item: ManifestItem,
    content_directory: str,
    options: Optional[ReaderOptions] = None,
) -> LocalTextContentFile:
    options = options or ReaderOptions()
    data = archive.read(join_path(content_directory, item.href))
    return LocalTextContentFile(
        key=item.href,
        content_type=classify(item.media_type),
        mime_type=item.media_type,
        location=ContentLocation.LOCAL,
        file_type=ContentFileType.TEXT,
        content=decode_text(data, options.encoding, options.fallback_encoding),
    )


def load_byte_file(archive: EpubArchive, item: ManifestItem, content_directory: str) -> LocalByteContentFile:
    return LocalByteContentFile(
        key=item.href,
        content_type=classify(item.media_type),
        mime_type=item.media_type,
        location=ContentLocation.LOCAL,
        file_type=ContentFileType.BINARY,
        content=archive.read(join_path(content_directory, item.href)),
    )


def run_ordered(func: Callable[[T], R], items: Iterable[T], max_workers: int = 1) -> List[R]:
    """``[func(x) for x in items]``, optionally on a thread pool.

    Results keep input order; the first failure propagates and nothing
    partial is returned.
    """
    items = list(items)
    if max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="epubread") as pool:
        return list(pool.map(func, items))


def _load_local(
    archive: EpubArchive, content_directory: str, options: ReaderOptions, item: ManifestItem
) -> Tuple[ManifestItem, LocalContentFile, ContentFile]:
    content_type = classify(item.media_type)
    text = is_text_type(content_type)
    if text:
        record: ContentFile = load_text_file(archive, item, content_directory, options)
    else:
        record = load_byte_file(archive, item, content_directory)
    entry = LocalContentFile(
        key=item.href,
        content_type=content_type,
        mime_type=item.media_type,
        location=ContentLocation.LOCAL,
        file_type=ContentFileType.TEXT if text else ContentFileType.BINARY,
        file_path=join_path(content_directory, item.href),
    )
    return item, entry, record


def _remote_file(item: ManifestItem) -> ContentFile:
    content_type = classify(item.media_type)
    return ContentFile(
        key=item.href,
        content_type=content_type,
        mime_type=item.media_type,
        location=ContentLocation.REMOTE,
        file_type=ContentFileType.TEXT if is_text_type(content_type) else ContentFileType.BINARY,
    )


# ---------------------------------------------------------------------------
# materialisation
# ---------------------------------------------------------------------------


def read_content(
    archive: EpubArchive,
    manifest: Manifest,
    content_directory: str,
    options: Optional[ReaderOptions] = None,
) -> Content:
    """Load every manifest item and sort it into :class:`Content` buckets.

    Any missing or unreadable local entry aborts the whole call.
    """
    options = options or ReaderOptions()

    local_items = [item for item in manifest.items if not is_remote(item.href)]
    remote_files = tuple(_remote_file(item) for item in manifest.items if is_remote(item.href))

    loaded = run_ordered(
        partial(_load_local, archive, content_directory, options),
        local_items,
        options.max_workers,
    )

    cover: Optional[LocalByteContentFile] = None
    navigation_html_file: Optional[LocalTextContentFile] = None
    html: List[LocalTextContentFile] = []
    css: List[LocalTextContentFile] = []
    images: List[LocalByteContentFile] = []
    fonts: List[LocalByteContentFile] = []
    audios: List[LocalByteContentFile] = []
    all_files: List[LocalContentFile] = []

    for item, entry, record in loaded:
        content_type = record.content_type
        if content_type is ContentType.XHTML:
            html.append(record)
            if navigation_html_file is None and item.has_property("nav"):
                navigation_html_file = record
        elif content_type is ContentType.CSS:
            css.append(record)
        elif content_type in IMAGE_TYPES:
            images.append(record)
            if item.has_property("cover-image"):
                cover = record
        elif content_type in FONT_TYPES:
            fonts.append(record)
        elif content_type in AUDIO_TYPES:
            audios.append(record)
        all_files.append(entry)

    logger.debug(
        "content: %d html, %d css, %d images, %d fonts, %d audio, %d remote",
        len(html),
        len(css),
        len(images),
        len(fonts),
        len(audios),
        len(remote_files),
    )
    return Content(
        cover=cover,
        navigation_html_file=navigation_html_file,
        html=tuple(html),
        css=tuple(css),
        images=tuple(images),
        fonts=tuple(fonts),
        audios=tuple(audios),
        all_files=tuple(all_files),
        remote_files=remote_files,
    )
