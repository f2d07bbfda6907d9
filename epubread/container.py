"""Locate the package document through ``META-INF/container.xml``."""
from __future__ import annotations

import logging

from .archive import EpubArchive
from .errors import ContainerMissingError, MalformedXmlError
from .models import RootFile
from .xmlutil import attr, children, local_name, parse_document

__all__ = ["CONTAINER_PATH", "find_root_file"]

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"


def find_root_file(archive: EpubArchive) -> RootFile:
    """Return the first root file declared by the archive's container.xml.

    The entry is matched by suffix so that vendor path prefixes in front of
    ``META-INF/`` are tolerated.  There is no fallback root path.
    """
    entry = next((name for name in archive.names if name.endswith(CONTAINER_PATH)), None)
    if entry is None:
        raise ContainerMissingError()

    root = parse_document(archive.read(entry), entry)
    if local_name(root.tag) != "container":
        raise MalformedXmlError(entry, f"unexpected root element <{local_name(root.tag)}>")

    for rootfiles in children(root, "rootfiles"):
        for rootfile in children(rootfiles, "rootfile"):
            full_path = attr(rootfile, "full-path")
            if full_path:
                logger.debug("root file %s (from %s)", full_path, entry)
                return RootFile(full_path=full_path, media_type=attr(rootfile, "media-type"))

    raise MalformedXmlError(entry, "no rootfile with a full-path attribute")
