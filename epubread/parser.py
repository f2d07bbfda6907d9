"""Parser for the OPF package document.

The package document is small, so it is decoded in one go with
:mod:`xml.etree.ElementTree` into :class:`~epubread.models.Package`.
Nothing is cross-validated here: spine idrefs are resolved later by the
assembler, which decides how lenient to be.

Example:
>>> with open_archive("book.epub") as archive:
...     pkg = PackageParser().parse(archive, "OEBPS/content.opf")
...     print(pkg.metadata.titles[0].value, len(pkg.manifest.items))
"""
from __future__ import annotations

import logging
import posixpath
import xml.etree.ElementTree as ET
from typing import List, Tuple

from .archive import EpubArchive
from .errors import MalformedXmlError
from .models import (
    Collection,
    Creator,
    Guide,
    Identifier,
    ItemRef,
    Link,
    Manifest,
    ManifestItem,
    Meta,
    Metadata,
    Package,
    Reference,
    Spine,
    Title,
)
from .xmlutil import XML_NS, attr, children, first_child, local_name, parse_document, text_of

__all__ = ["PackageParser", "content_directory"]

logger = logging.getLogger(__name__)


def content_directory(root_file_path: str) -> str:
    """Directory every manifest href is resolved against (``""`` at the root)."""
    return posixpath.dirname(root_file_path)


class PackageParser:
    """Decode an OPF document into a :class:`Package`."""

    # Dublin Core elements kept as plain string sequences: element -> field
    _PLAIN_DC = {
        "contributor": "contributors",
        "language": "languages",
        "coverage": "coverages",
        "date": "dates",
        "description": "descriptions",
        "format": "formats",
        "publisher": "publishers",
        "relation": "relations",
        "rights": "rights",
        "source": "sources",
        "subject": "subjects",
        "type": "types",
    }

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------

    def parse(self, archive: EpubArchive, root_file_path: str) -> Package:
        """Read *root_file_path* from *archive* and decode it."""
        return self.parse_bytes(archive.read(root_file_path), root_file_path)

    def parse_bytes(self, data: bytes, root_file_path: str) -> Package:
        root = parse_document(data, root_file_path)
        if local_name(root.tag) != "package":
            raise MalformedXmlError(root_file_path, f"unexpected root element <{local_name(root.tag)}>")

        metadata_el = first_child(root, "metadata")
        manifest_el = first_child(root, "manifest")
        spine_el = first_child(root, "spine")
        guide_el = first_child(root, "guide")

        pkg = Package(
            metadata=self._parse_metadata(metadata_el) if metadata_el is not None else Metadata(),
            manifest=self._parse_manifest(manifest_el) if manifest_el is not None else Manifest(),
            spine=self._parse_spine(spine_el) if spine_el is not None else Spine(),
            guide=self._parse_guide(guide_el) if guide_el is not None else Guide(),
            collections=tuple(self._parse_collection(c) for c in children(root, "collection")),
            unique_identifier=attr(root, "unique-identifier"),
            version=attr(root, "version"),
            content_directory=content_directory(root_file_path),
        )
        logger.debug(
            "package %s: %d manifest items, %d spine refs",
            root_file_path,
            len(pkg.manifest.items),
            len(pkg.spine.item_refs),
        )
        return pkg

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _parse_metadata(self, elem: ET.Element) -> Metadata:
        identifiers: List[Identifier] = []
        titles: List[Title] = []
        creators: List[Creator] = []
        metas: List[Meta] = []
        plain: dict[str, List[str]] = {name: [] for name in self._PLAIN_DC.values()}

        for child in elem:
            name = local_name(child.tag)
            if name == "identifier":
                identifiers.append(Identifier(id=attr(child, "id"), value=text_of(child)))
            elif name == "title":
                titles.append(Title(id=attr(child, "id"), value=text_of(child)))
            elif name == "creator":
                creators.append(Creator(id=attr(child, "id"), value=text_of(child)))
            elif name == "meta":
                metas.append(
                    Meta(
                        name=attr(child, "name"),
                        content=attr(child, "content"),
                        property=attr(child, "property"),
                        refines=attr(child, "refines"),
                        id=attr(child, "id"),
                        value=text_of(child),
                    )
                )
            elif name in self._PLAIN_DC:
                plain[self._PLAIN_DC[name]].append(text_of(child))

        return Metadata(
            identifiers=tuple(identifiers),
            titles=tuple(titles),
            creators=tuple(creators),
            metas=tuple(metas),
            **{key: tuple(values) for key, values in plain.items()},
        )

    @staticmethod
    def _parse_manifest(elem: ET.Element) -> Manifest:
        return Manifest(
            items=tuple(
                ManifestItem(
                    id=attr(item, "id"),
                    href=attr(item, "href"),
                    media_type=attr(item, "media-type"),
                    media_overlay=attr(item, "media-overlay"),
                    fallback=attr(item, "fallback"),
                    fallback_style=attr(item, "fallback-style"),
                    required_namespace=attr(item, "required-namespace"),
                    required_modules=attr(item, "required-modules"),
                    properties=attr(item, "properties"),
                )
                for item in children(elem, "item")
            )
        )

    @staticmethod
    def _parse_spine(elem: ET.Element) -> Spine:
        refs: Tuple[ItemRef, ...] = tuple(
            ItemRef(
                idref=attr(ref, "idref"),
                # only an explicit "no" takes an item out of the linear order
                linear=attr(ref, "linear").strip().lower() != "no",
                id=attr(ref, "id"),
                properties=attr(ref, "properties"),
            )
            for ref in children(elem, "itemref")
        )
        return Spine(
            item_refs=refs,
            toc=attr(elem, "toc"),
            page_progression_direction=attr(elem, "page-progression-direction"),
        )

    @staticmethod
    def _parse_guide(elem: ET.Element) -> Guide:
        return Guide(
            references=tuple(
                Reference(type=attr(ref, "type"), title=attr(ref, "title"), href=attr(ref, "href"))
                for ref in children(elem, "reference")
            )
        )

    def _parse_collection(self, elem: ET.Element) -> Collection:
        metadata_el = first_child(elem, "metadata")
        return Collection(
            role=attr(elem, "role"),
            id=attr(elem, "id"),
            language=elem.get(f"{{{XML_NS}}}lang", attr(elem, "lang")),
            metadata=self._parse_metadata(metadata_el) if metadata_el is not None else Metadata(),
            collections=tuple(self._parse_collection(c) for c in children(elem, "collection")),
            links=tuple(
                Link(
                    href=attr(link, "href"),
                    rel=attr(link, "rel"),
                    media_type=attr(link, "media-type"),
                    id=attr(link, "id"),
                )
                for link in children(elem, "link")
            ),
        )
