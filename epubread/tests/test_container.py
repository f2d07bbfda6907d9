from pathlib import Path

import pytest

from epubread.archive import open_archive
from epubread.container import find_root_file
from epubread.errors import ContainerMissingError, MalformedXmlError

from .helpers import container_xml


def test_find_root_file(make_epub):
    path = make_epub({"META-INF/container.xml": container_xml("OEBPS/content.opf")})
    with open_archive(path) as archive:
        root = find_root_file(archive)
    assert root.full_path == "OEBPS/content.opf"
    assert root.media_type == "application/oebps-package+xml"


def test_vendor_prefix_is_tolerated(make_epub):
    path = make_epub({"vendor/META-INF/container.xml": container_xml("book/package.opf")})
    with open_archive(path) as archive:
        assert find_root_file(archive).full_path == "book/package.opf"


def test_first_root_file_wins(make_epub):
    xml = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="first.opf" media-type="application/oebps-package+xml"/>
    <rootfile full-path="second.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>"""
    path = make_epub({"META-INF/container.xml": xml})
    with open_archive(path) as archive:
        assert find_root_file(archive).full_path == "first.opf"


def test_missing_container(make_epub):
    path = make_epub({"OEBPS/content.opf": "<package/>"})
    with open_archive(path) as archive:
        with pytest.raises(ContainerMissingError):
            find_root_file(archive)


def test_malformed_container(make_epub):
    path = make_epub({"META-INF/container.xml": "<container><rootfiles>"})
    with open_archive(path) as archive:
        with pytest.raises(MalformedXmlError) as excinfo:
            find_root_file(archive)
    assert excinfo.value.entry == "META-INF/container.xml"


def test_container_without_root_file(make_epub):
    path = make_epub({"META-INF/container.xml": "<container><rootfiles/></container>"})
    with open_archive(path) as archive:
        with pytest.raises(MalformedXmlError):
            find_root_file(archive)
