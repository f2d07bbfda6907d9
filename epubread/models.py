"""Immutable document model produced by :func:`epubread.read_book`.

Every record is a frozen dataclass and every sequence a tuple: a model is
built once during a single pass over one archive and never mutated.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple, Union

__all__ = [
    "RootFile",
    "Identifier",
    "Title",
    "Creator",
    "Meta",
    "Metadata",
    "ManifestItem",
    "Manifest",
    "ItemRef",
    "Spine",
    "Reference",
    "Guide",
    "Link",
    "Collection",
    "Package",
    "ContentType",
    "ContentLocation",
    "ContentFileType",
    "ContentFile",
    "LocalContentFile",
    "LocalTextContentFile",
    "LocalByteContentFile",
    "Content",
    "NavAnchor",
    "NavSpan",
    "NavLi",
    "NavOl",
    "Navigation",
    "NavigationDocument",
    "Book",
]


# ---------------------------------------------------------------------------
# container / package document
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RootFile:
    full_path: str
    media_type: str = ""


@dataclass(frozen=True)
class Identifier:
    id: str
    value: str


@dataclass(frozen=True)
class Title:
    id: str
    value: str


@dataclass(frozen=True)
class Creator:
    id: str
    value: str


@dataclass(frozen=True)
class Meta:
    """A ``<meta>`` element, EPUB 2 (name/content) or EPUB 3 (property) form."""

    name: str = ""
    content: str = ""
    property: str = ""
    refines: str = ""
    id: str = ""
    value: str = ""


@dataclass(frozen=True)
class Metadata:
    """Dublin Core metadata.  The first entry of a sequence is the primary one."""

    identifiers: Tuple[Identifier, ...] = ()
    titles: Tuple[Title, ...] = ()
    creators: Tuple[Creator, ...] = ()
    contributors: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    coverages: Tuple[str, ...] = ()
    dates: Tuple[str, ...] = ()
    descriptions: Tuple[str, ...] = ()
    formats: Tuple[str, ...] = ()
    publishers: Tuple[str, ...] = ()
    relations: Tuple[str, ...] = ()
    rights: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    subjects: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    metas: Tuple[Meta, ...] = ()

    @property
    def creator_names(self) -> Tuple[str, ...]:
        return tuple(c.value for c in self.creators)

    def first_description(self) -> str:
        return self.descriptions[0] if self.descriptions else ""


@dataclass(frozen=True)
class ManifestItem:
    id: str
    href: str
    media_type: str
    media_overlay: str = ""
    fallback: str = ""
    fallback_style: str = ""
    required_namespace: str = ""
    required_modules: str = ""
    properties: str = ""

    @property
    def property_tokens(self) -> FrozenSet[str]:
        return frozenset(self.properties.split())

    def has_property(self, token: str) -> bool:
        return token in self.property_tokens


@dataclass(frozen=True)
class Manifest:
    items: Tuple[ManifestItem, ...] = ()

    def get(self, item_id: str) -> Optional[ManifestItem]:
        """Return the first item declared with *item_id*, or ``None``."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def find_by_property(self, token: str) -> Tuple[ManifestItem, ...]:
        return tuple(item for item in self.items if item.has_property(token))


@dataclass(frozen=True)
class ItemRef:
    idref: str
    linear: bool = True
    id: str = ""
    properties: str = ""


@dataclass(frozen=True)
class Spine:
    item_refs: Tuple[ItemRef, ...] = ()
    toc: str = ""
    page_progression_direction: str = ""


@dataclass(frozen=True)
class Reference:
    type: str
    title: str
    href: str


@dataclass(frozen=True)
class Guide:
    references: Tuple[Reference, ...] = ()


@dataclass(frozen=True)
class Link:
    href: str
    rel: str = ""
    media_type: str = ""
    id: str = ""


@dataclass(frozen=True)
class Collection:
    role: str
    id: str = ""
    language: str = ""
    metadata: Metadata = field(default_factory=Metadata)
    collections: Tuple["Collection", ...] = ()
    links: Tuple[Link, ...] = ()


@dataclass(frozen=True)
class Package:
    metadata: Metadata
    manifest: Manifest
    spine: Spine
    guide: Guide = field(default_factory=Guide)
    collections: Tuple[Collection, ...] = ()
    unique_identifier: str = ""
    version: str = ""
    # directory of the package document; every href resolves against it
    content_directory: str = ""


# ---------------------------------------------------------------------------
# content
# ---------------------------------------------------------------------------


class ContentType(enum.Enum):
    IMAGE_GIF = "image/gif"
    IMAGE_JPEG = "image/jpeg"
    IMAGE_PNG = "image/png"
    IMAGE_SVG = "image/svg"
    IMAGE_WEBP = "image/webp"

    AUDIO_MP3 = "audio/mp3"
    AUDIO_MP4 = "audio/mp4"
    AUDIO_OGG = "audio/ogg"

    CSS = "css"

    FONT_TRUETYPE = "font/truetype"
    FONT_SFNT = "font/sfnt"
    FONT_OPENTYPE = "font/opentype"
    FONT_WOFF = "font/woff"
    FONT_WOFF2 = "font/woff2"

    XHTML = "xhtml"
    XML = "xml"
    SCRIPT = "script"
    DTB = "dtb"
    DTB_NCX = "dtb-ncx"
    SMIL = "smil"

    OEB1_DOCUMENT = "oeb1-document"
    OEB1_CSS = "oeb1-css"

    OTHER = "other"


class ContentLocation(enum.Enum):
    LOCAL = "local"
    REMOTE = "remote"


class ContentFileType(enum.Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class ContentFile:
    """Classification record for one manifest item (no payload)."""

    key: str
    content_type: ContentType
    mime_type: str
    location: ContentLocation = ContentLocation.LOCAL
    file_type: ContentFileType = ContentFileType.TEXT


@dataclass(frozen=True)
class LocalContentFile(ContentFile):
    file_path: str = ""


@dataclass(frozen=True)
class LocalTextContentFile(ContentFile):
    content: str = ""


@dataclass(frozen=True)
class LocalByteContentFile(ContentFile):
    content: bytes = b""


@dataclass(frozen=True)
class Content:
    cover: Optional[LocalByteContentFile] = None
    navigation_html_file: Optional[LocalTextContentFile] = None
    html: Tuple[LocalTextContentFile, ...] = ()
    css: Tuple[LocalTextContentFile, ...] = ()
    images: Tuple[LocalByteContentFile, ...] = ()
    fonts: Tuple[LocalByteContentFile, ...] = ()
    audios: Tuple[LocalByteContentFile, ...] = ()
    all_files: Tuple[LocalContentFile, ...] = ()
    remote_files: Tuple[ContentFile, ...] = ()


# ---------------------------------------------------------------------------
# navigation document
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NavAnchor:
    href: str
    text: str = ""
    title: str = ""
    alt: str = ""
    type: str = ""


@dataclass(frozen=True)
class NavSpan:
    text: str = ""
    title: str = ""
    alt: str = ""


@dataclass(frozen=True)
class NavLi:
    """One outline entry: a link, a plain label, or neither, plus sub-entries."""

    label: Union[NavAnchor, NavSpan, None] = None
    child_ol: Optional["NavOl"] = None

    @property
    def anchor(self) -> Optional[NavAnchor]:
        return self.label if isinstance(self.label, NavAnchor) else None

    @property
    def span(self) -> Optional[NavSpan]:
        return self.label if isinstance(self.label, NavSpan) else None

    @property
    def text(self) -> str:
        return self.label.text if self.label is not None else ""


@dataclass(frozen=True)
class NavOl:
    lis: Tuple[NavLi, ...] = ()
    hidden: bool = False


@dataclass(frozen=True)
class Navigation:
    type: str = ""
    hidden: bool = False
    header: str = ""
    ol: NavOl = field(default_factory=NavOl)


@dataclass(frozen=True)
class NavigationDocument:
    file_path: str
    title: str = ""
    navigations: Tuple[Navigation, ...] = ()

    def by_type(self, nav_type: str) -> Optional[Navigation]:
        for nav in self.navigations:
            if nav_type in nav.type.split():
                return nav
        return None


# ---------------------------------------------------------------------------
# book
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Book:
    file_path: str
    title: str
    author: str
    authors: Tuple[str, ...]
    description: str
    cover_image: bytes
    reading_order: Tuple[LocalTextContentFile, ...]
    navigation: Tuple[Navigation, ...]
    content: Content
    package: Optional[Package] = field(default=None, repr=False)
    navigation_document: Optional[NavigationDocument] = field(default=None, repr=False)
