"""Builders for small EPUB archives used across the test-suite."""
from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Dict, Union

FileMap = Dict[str, Union[str, bytes]]

COVER_BYTES = b"\x89PNG\r\n\x1a\n-cover-image-bytes"
FONT_BYTES = b"wOF2-font-bytes"
AUDIO_BYTES = b"ID3-audio-bytes"
DATA_BYTES = b"\x00\x01\x02opaque"


def container_xml(full_path: str = "OEBPS/content.opf") -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{full_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>"""


DEFAULT_METADATA = """
    <dc:identifier id="uid">urn:uuid:0b8f7a4e-1111-2222-3333-444455556666</dc:identifier>
    <dc:title id="main">Sample Book</dc:title>
    <dc:title id="sub">A Subtitle</dc:title>
    <dc:creator id="author1">Jane Doe</dc:creator>
    <dc:creator id="author2">John Roe</dc:creator>
    <dc:language>en</dc:language>
    <dc:language>fr</dc:language>
    <dc:description>A short book.</dc:description>
    <dc:description>Second description.</dc:description>
    <dc:publisher>Example Press</dc:publisher>
    <dc:subject>Fiction</dc:subject>
    <dc:subject>Testing</dc:subject>
    <dc:date>2020-01-01</dc:date>
    <dc:rights>Public domain</dc:rights>
    <meta property="dcterms:modified">2020-01-02T00:00:00Z</meta>
    <meta name="cover" content="cover-img"/>
"""

DEFAULT_MANIFEST = """
    <item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="ch1" href="Text/ch1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="Text/ch2.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch3" href="Text/ch3.xhtml" media-type="application/xhtml+xml" properties="scripted"/>
    <item id="css" href="Styles/style.css" media-type="text/css"/>
    <item id="cover-img" href="Images/cover.png" media-type="image/png" properties="cover-image"/>
    <item id="font" href="Fonts/serif.woff2" media-type="font/woff2"/>
    <item id="audio" href="Audio/intro.mp3" media-type="audio/mpeg"/>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="blob" href="misc/data.bin" media-type="application/octet-stream"/>
"""

DEFAULT_SPINE = """
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
    <itemref idref="ch3" linear="no"/>
"""

DEFAULT_EXTRA = """
  <guide>
    <reference type="toc" title="Table of Contents" href="nav.xhtml"/>
    <reference type="text" title="Start" href="Text/ch1.xhtml"/>
  </guide>
  <collection role="index" id="idx" xml:lang="en">
    <metadata><dc:title>Index</dc:title></metadata>
    <collection role="index-group">
      <link href="Text/ch3.xhtml" rel="part" media-type="application/xhtml+xml"/>
    </collection>
    <link href="Text/ch2.xhtml"/>
  </collection>
"""


def package_xml(
    manifest: str = DEFAULT_MANIFEST,
    spine: str = DEFAULT_SPINE,
    metadata: str = DEFAULT_METADATA,
    extra: str = DEFAULT_EXTRA,
) -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" xmlns:dc="http://purl.org/dc/elements/1.1/"
         version="3.0" unique-identifier="uid">
  <metadata>{metadata}</metadata>
  <manifest>{manifest}</manifest>
  <spine toc="ncx" page-progression-direction="ltr">{spine}</spine>{extra}
</package>"""


NAV_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<head>
  <title>Sample Navigation</title>
  <link rel="stylesheet" type="text/css" href="Styles/style.css"/>
</head>
<body>
  <section class="frontmatter">
    <p>Some text that is not part of any outline.</p>
    <nav epub:type="toc" id="toc">
      <h1>Contents</h1>
      <ol>
        <li><a href="Text/ch1.xhtml">Chapter 1</a>
          <ol>
            <li><a href="Text/ch1.xhtml#s1" title="First section">Section 1.1</a></li>
            <li><span title="unlinked">Section 1.2</span></li>
          </ol>
        </li>
        <li><a href="Text/ch2.xhtml">Chapter <em>2</em></a></li>
        <li><a href="Text/ch3.xhtml">Chapter 3</a></li>
      </ol>
    </nav>
    <nav epub:type="landmarks" hidden="">
      <h2>Guide</h2>
      <ol>
        <li><a epub:type="bodymatter" href="Text/ch1.xhtml">Start of content</a></li>
      </ol>
    </nav>
  </section>
</body>
</html>"""


def chapter_xhtml(title: str, body: str = "") -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{title}</title></head>
<body><h1>{title}</h1><p>{body or title}</p></body>
</html>"""


NCX_XML = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1"><navMap/></ncx>"""


def sample_files(root: str = "OEBPS") -> FileMap:
    """A complete, valid publication whose package document lives in *root*."""
    prefix = f"{root}/" if root else ""
    return {
        "META-INF/container.xml": container_xml(f"{prefix}content.opf"),
        f"{prefix}content.opf": package_xml(),
        f"{prefix}nav.xhtml": NAV_XHTML,
        f"{prefix}Text/ch1.xhtml": chapter_xhtml("Chapter 1"),
        f"{prefix}Text/ch2.xhtml": chapter_xhtml("Chapter 2"),
        f"{prefix}Text/ch3.xhtml": chapter_xhtml("Chapter 3"),
        f"{prefix}Styles/style.css": "body { margin: 0; }",
        f"{prefix}Images/cover.png": COVER_BYTES,
        f"{prefix}Fonts/serif.woff2": FONT_BYTES,
        f"{prefix}Audio/intro.mp3": AUDIO_BYTES,
        f"{prefix}toc.ncx": NCX_XML,
        f"{prefix}misc/data.bin": DATA_BYTES,
    }


def write_epub(path: Path, files: FileMap, compression: int = zipfile.ZIP_DEFLATED) -> Path:
    with zipfile.ZipFile(path, "w", compression=compression) as zf:
        zf.writestr(zipfile.ZipInfo("mimetype"), "application/epub+zip")
        for name, data in files.items():
            zf.writestr(name, data)
    return path
