from lxml import etree

from epubkit.models import ChapterInfo
from epubkit.navigation_document import NavigationDocumentBuilder
from epubkit.xml_builder import XML_NAMESPACE

from conftest import NS


def _build(metadata, supplier):
    text = NavigationDocumentBuilder(metadata).build(supplier)
    return text, etree.fromstring(text.encode("utf-8"))


def _chapters(count):
    return [ChapterInfo(f"Chapter {n}", f"chap{n}.xhtml") for n in range(1, count + 1)]


def test_root_head_and_title(metadata, make_supplier):
    _, root = _build(metadata, make_supplier())

    assert root.tag == f"{{{NS['ncx']}}}ncx"
    assert root.get("version") == "2005-1"
    assert root.get(f"{{{XML_NAMESPACE}}}lang") == "en"

    metas = root.findall("ncx:head/ncx:meta", NS)
    assert [(m.get("name"), m.get("content")) for m in metas] == [
        ("dtb:uid", "https://example.com/s/1"),
        ("dtb:depth", "2"),
        ("dtb:totalPageCount", "0"),
        ("dtb:maxPageNumber", "0"),
    ]
    assert root.find("ncx:docTitle/ncx:text", NS).text == "Test Book"


def test_nav_points_follow_chapter_order(metadata, make_supplier):
    _, root = _build(metadata, make_supplier(chapters=_chapters(12)))
    points = root.findall("ncx:navMap/ncx:navPoint", NS)

    assert len(points) == 12
    assert [p.get("playOrder") for p in points] == [str(n) for n in range(1, 13)]
    assert points[0].get("id") == "0001"
    assert points[11].get("id") == "0012"
    assert points[11].find("ncx:navLabel/ncx:text", NS).text == "Chapter 12"
    assert points[11].find("ncx:content", NS).get("src") == "chap12.xhtml"


def test_ids_sort_like_play_order(metadata, make_supplier):
    _, root = _build(metadata, make_supplier(chapters=_chapters(10000)))
    ids = [p.get("id") for p in root.findall("ncx:navMap/ncx:navPoint", NS)]

    assert len(ids) == 10000
    assert len({len(i) for i in ids}) == 1
    assert sorted(ids) == ids
    assert ids[-1] == "10000"


def test_empty_title_keeps_nav_point(metadata, make_supplier):
    chapters = [ChapterInfo("One", "a.xhtml"), ChapterInfo("", "b.xhtml#part")]
    _, root = _build(metadata, make_supplier(chapters=chapters))
    points = root.findall("ncx:navMap/ncx:navPoint", NS)

    assert len(points) == 2
    assert not points[1].find("ncx:navLabel/ncx:text", NS).text
    assert points[1].find("ncx:content", NS).get("src") == "b.xhtml#part"


def test_empty_book_has_empty_nav_map(metadata, make_supplier):
    _, root = _build(metadata, make_supplier())
    nav_map = root.find("ncx:navMap", NS)
    assert nav_map is not None
    assert len(nav_map) == 0
