"""ElementTree helpers shared by the container, package and navigation parsers.

Elements and attributes are matched by local name so that documents using
prefixed (``dc:title``, ``epub:type``) or default namespaces decode the same.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterator, Optional

from .errors import MalformedXmlError

XML_NS = "http://www.w3.org/XML/1998/namespace"


def local_name(tag: str) -> str:
    """``{uri}name`` -> ``name``."""
    if not isinstance(tag, str):  # comments / processing instructions
        return ""
    return tag.rsplit("}", 1)[-1]


def attr(elem: ET.Element, name: str, default: str = "") -> str:
    """Attribute *name* of *elem*, namespace ignored; plain names win."""
    if name in elem.attrib:
        return elem.attrib[name]
    for key, value in elem.attrib.items():
        if local_name(key) == name:
            return value
    return default


def has_attr(elem: ET.Element, name: str) -> bool:
    return any(local_name(key) == name for key in elem.attrib)


def children(elem: ET.Element, name: str) -> Iterator[ET.Element]:
    """Direct children of *elem* whose local name is *name*."""
    for child in elem:
        if local_name(child.tag) == name:
            yield child


def first_child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    return next(children(elem, name), None)


def text_of(elem: Optional[ET.Element]) -> str:
    """All character data below *elem*, whitespace-collapsed."""
    if elem is None:
        return ""
    return " ".join("".join(elem.itertext()).split())


def parse_document(data: bytes, entry: str) -> ET.Element:
    """Parse *data* and return its root element."""
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise MalformedXmlError(entry, f"malformed XML: {exc}") from exc
