import io
import sys
import pathlib
import zipfile

import pytest

# Ensure the repository root is on sys.path for test imports
ROOT_PATH = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(ROOT_PATH))

from epubkit.models import BookMetadata  # noqa: E402
from epubkit.supplier import ContentItemSupplier  # noqa: E402

FIXED_DATE = "2020-01-02T03:04:05+00:00"

NS = {
    "opf": "http://www.idpf.org/2007/opf",
    "dc": "http://purl.org/dc/elements/1.1/",
    "ncx": "http://www.daisy.org/z3986/2005/ncx/",
}


class ListSupplier(ContentItemSupplier):
    """Supplier backed by plain lists"""

    def __init__(self, manifest=(), spine=(), chapters=(), files=(), cover_href=None):
        self._manifest = list(manifest)
        self._spine = list(spine)
        self._chapters = list(chapters)
        self._files = list(files)
        self._cover_href = cover_href

    def manifest_items(self):
        return iter(self._manifest)

    def spine_items(self):
        return iter(self._spine)

    def chapter_info(self):
        return iter(self._chapters)

    def files(self):
        return iter(self._files)

    def cover_page_href(self):
        return self._cover_href


@pytest.fixture
def metadata():
    return BookMetadata(
        uuid="https://example.com/s/1",
        title="Test Book",
        author="A. Writer",
        language="en",
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_DATE


@pytest.fixture
def make_supplier():
    return ListSupplier


@pytest.fixture
def open_epub():
    def _open(data: bytes) -> zipfile.ZipFile:
        return zipfile.ZipFile(io.BytesIO(data))
    return _open
