"""
Navigation document reader.

The navigation document is ordinary XHTML with one or more ``<nav>``
outlines buried in its body.  Rather than building the whole tree, the
document is walked once with :func:`xml.etree.ElementTree.iterparse`:

* the first ``<title>`` outside any ``<nav>`` becomes the document title;
* every outermost ``<nav>`` is decoded into a :class:`Navigation` as soon as
  its end tag is seen, recursively down its ``ol``/``li`` tree;
* everything else is discarded as soon as it closes.
"""
from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence

from .archive import EpubArchive
from .errors import MalformedXmlError
from .models import NavAnchor, Navigation, NavigationDocument, NavLi, NavOl, NavSpan
from .xmlutil import attr, children, first_child, has_attr, local_name, text_of

__all__ = ["HEADING_LEVELS", "read_navigation", "parse_navigation", "select_header"]

logger = logging.getLogger(__name__)

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


def select_header(headings: Sequence[str]) -> str:
    """First non-empty heading, checked from h1 down to h6."""
    return next((h for h in headings if h), "")


def read_navigation(archive: EpubArchive, file_path: str) -> NavigationDocument:
    return parse_navigation(archive.read(file_path), file_path)


def parse_navigation(data: bytes, file_path: str) -> NavigationDocument:
    navigations: List[Navigation] = []
    title: Optional[str] = None
    nav_depth = 0

    try:
        for event, elem in ET.iterparse(io.BytesIO(data), events=("start", "end")):
            name = local_name(elem.tag)
            if event == "start":
                if name == "nav":
                    nav_depth += 1
                continue

            if name == "nav":
                nav_depth -= 1
                if nav_depth == 0:
                    navigations.append(_decode_nav(elem))
                    elem.clear()
            elif nav_depth == 0:
                if name == "title" and title is None:
                    title = text_of(elem)
                elem.clear()
    except ET.ParseError as exc:
        raise MalformedXmlError(file_path, f"malformed XML: {exc}") from exc

    logger.debug("navigation %s: %d nav block(s)", file_path, len(navigations))
    return NavigationDocument(file_path=file_path, title=title or "", navigations=tuple(navigations))


# ---------------------------------------------------------------------------
# recursive descent over one <nav>
# ---------------------------------------------------------------------------


def _decode_nav(elem: ET.Element) -> Navigation:
    headings = [text_of(first_child(elem, level)) for level in HEADING_LEVELS]
    ol = first_child(elem, "ol")
    return Navigation(
        type=attr(elem, "type"),
        hidden=has_attr(elem, "hidden"),
        header=select_header(headings),
        ol=_decode_ol(ol) if ol is not None else NavOl(),
    )


def _decode_ol(elem: ET.Element) -> NavOl:
    # hidden lists keep their items; hiding is presentation only
    return NavOl(
        lis=tuple(_decode_li(li) for li in children(elem, "li")),
        hidden=has_attr(elem, "hidden"),
    )


def _decode_li(elem: ET.Element) -> NavLi:
    label = None
    anchor = first_child(elem, "a")
    if anchor is not None:
        label = NavAnchor(
            href=attr(anchor, "href"),
            text=text_of(anchor),
            title=attr(anchor, "title"),
            alt=attr(anchor, "alt"),
            type=attr(anchor, "type"),
        )
    else:
        span = first_child(elem, "span")
        if span is not None:
            label = NavSpan(text=text_of(span), title=attr(span, "title"), alt=attr(span, "alt"))

    child_ol = first_child(elem, "ol")
    return NavLi(label=label, child_ol=_decode_ol(child_ol) if child_ol is not None else None)
