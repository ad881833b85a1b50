import json
import sys
import zipfile

import pytest
from lxml import etree

import webtoepub

from conftest import NS

CHAPTER_PAGE = """
<html><body>
<h3>{title}</h3>
<div id="chapter_item"><p>{text}</p></div>
</body></html>
"""


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["webtoepub.py", *map(str, args)])
    webtoepub.main()


def test_packs_fragments(tmp_path, monkeypatch):
    book_dir = tmp_path / "book"
    book_dir.mkdir()
    (book_dir / "c1.html").write_text("<p>Hello</p>", encoding="utf-8")
    (book_dir / "c2.html").write_text("<p>Bye</p>", encoding="utf-8")
    (book_dir / "book.json").write_text(json.dumps({
        "title": "Test Book",
        "chapters": [{"title": "One", "file": "c1.html"}, {"title": "Two", "file": "c2.html"}],
    }), encoding="utf-8")
    output = tmp_path / "out.epub"

    _run(monkeypatch, book_dir, "-o", output)

    with zipfile.ZipFile(output) as zf:
        assert zf.namelist()[:4] == ["mimetype", "META-INF/container.xml", "content.opf", "toc.ncx"]
        ncx = etree.fromstring(zf.read("toc.ncx"))
    labels = [t.text for t in ncx.findall("ncx:navMap/ncx:navPoint/ncx:navLabel/ncx:text", NS)]
    assert labels == ["One", "Two"]


def test_packs_saved_site_pages_with_cover(tmp_path, monkeypatch):
    (tmp_path / "p1.html").write_text(CHAPTER_PAGE.format(title="Chapter 1", text="Dark night."),
                                      encoding="utf-8")
    (tmp_path / "cover.jpg").write_bytes(b"\xff\xd8\xff")
    (tmp_path / "book.json").write_text(json.dumps({
        "uuid": "https://www.pawread.com/manhua/1/",
        "title": "Site Book",
        "site": "pawread.com",
        "cover": "cover.jpg",
        "chapters": [{"file": "p1.html"}],
    }), encoding="utf-8")
    output = tmp_path / "site.epub"

    _run(monkeypatch, tmp_path, "--output", output)

    with zipfile.ZipFile(output) as zf:
        assert zf.read("OEBPS/Images/0001.jpg") == b"\xff\xd8\xff"
        chapter = zf.read("OEBPS/Text/0001.xhtml").decode("utf-8")
        opf = etree.fromstring(zf.read("content.opf"))

    assert "Dark night." in chapter
    assert "<h1>Chapter 1</h1>" in chapter
    assert [r.get("idref") for r in opf.findall("opf:spine/opf:itemref", NS)] == ["cover", "xhtml0001"]


def test_bad_book_exits_with_error(tmp_path, monkeypatch):
    with pytest.raises(SystemExit) as excinfo:
        _run(monkeypatch, tmp_path)
    assert excinfo.value.code == 1


def test_packs_gbk_encoded_site_page(tmp_path, monkeypatch):
    page = CHAPTER_PAGE.format(title="第一章", text="月黑风高。").replace(
        "<html>", '<html><head><meta http-equiv="Content-Type" content="text/html; charset=gbk"></head>')
    (tmp_path / "p1.html").write_bytes(page.encode("gbk"))
    (tmp_path / "book.json").write_text(json.dumps({
        "title": "Site Book",
        "site": "pawread.com",
        "chapters": [{"file": "p1.html"}],
    }), encoding="utf-8")
    output = tmp_path / "gbk.epub"

    _run(monkeypatch, tmp_path, "-o", output)

    with zipfile.ZipFile(output) as zf:
        chapter = zf.read("OEBPS/Text/0001.xhtml").decode("utf-8")
    assert "<h1>第一章</h1>" in chapter
    assert "月黑风高。" in chapter


def test_packs_latin1_fragment_without_site(tmp_path, monkeypatch):
    (tmp_path / "c1.html").write_bytes('<meta charset="iso-8859-1"><p>Café crème</p>'.encode("latin-1"))
    (tmp_path / "book.json").write_text(json.dumps({
        "title": "Test Book",
        "chapters": [{"title": "One", "file": "c1.html"}],
    }), encoding="utf-8")
    output = tmp_path / "latin.epub"

    _run(monkeypatch, tmp_path, "-o", output)

    with zipfile.ZipFile(output) as zf:
        assert "Café crème" in zf.read("OEBPS/Text/0001.xhtml").decode("utf-8")


def test_undecodable_chapter_exits_with_error(tmp_path, monkeypatch):
    (tmp_path / "book.json").write_text(json.dumps({
        "title": "Test Book",
        "chapters": [{"title": "One", "file": "c1.html"}],
    }), encoding="utf-8")

    def fail(config, logger):
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    monkeypatch.setattr(webtoepub, "load_chapters", fail)
    with pytest.raises(SystemExit) as excinfo:
        _run(monkeypatch, tmp_path, "-o", tmp_path / "out.epub")
    assert excinfo.value.code == 1
