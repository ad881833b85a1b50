"""
Content item suppliers: the packer's only view of a book's contents
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from html import escape
from typing import Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup

from .models import Chapter, ChapterInfo, ContentFile, ImageInfo, ManifestItem, SpineItem
from .utils import pad_width, zero_pad
from .xml_builder import strip_invalid_xml_chars

XHTML_MEDIA_TYPE = "application/xhtml+xml"

TEXT_DIR = "OEBPS/Text"
IMAGES_DIR = "OEBPS/Images"
COVER_PAGE_HREF = f"{TEXT_DIR}/Cover.xhtml"

IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/svg+xml": ".svg",
    "image/webp": ".webp",
}


class ContentItemSupplier(ABC):
    """Ordered sequences describing everything that goes into the EPUB"""

    @abstractmethod
    def manifest_items(self) -> Iterable[ManifestItem]:
        ...

    @abstractmethod
    def spine_items(self) -> Iterable[SpineItem]:
        """Reading order"""

    @abstractmethod
    def chapter_info(self) -> Iterable[ChapterInfo]:
        """Table of contents order"""

    @abstractmethod
    def files(self) -> Iterable[ContentFile]:
        ...

    def cover_page_href(self) -> Optional[str]:
        """Href of the cover page for the OPF guide, if the book has one"""
        return None


@dataclass
class _Entry:
    item: ManifestItem
    file: ContentFile
    in_spine: bool = False
    toc_title: Optional[str] = None


class ChapterItemSupplier(ContentItemSupplier):
    """Supplies chapters as XHTML documents in reading order, plus their images.

    Chapters without a title are kept in the reading order but left out of
    the table of contents. Image ``src`` attributes that match an image's
    source URL are rewritten to point at the packed copy.
    """

    def __init__(self, chapters: Sequence[Chapter], images: Sequence[ImageInfo] = (),
                 cover_image: Optional[ImageInfo] = None):
        self.logger = logging.getLogger(__name__)
        self.has_cover = cover_image is not None
        self._entries = self._build_entries(list(chapters), list(images), cover_image)

    def manifest_items(self) -> List[ManifestItem]:
        return [entry.item for entry in self._entries]

    def spine_items(self) -> List[SpineItem]:
        return [SpineItem(entry.item.id) for entry in self._entries if entry.in_spine]

    def chapter_info(self) -> List[ChapterInfo]:
        return [
            ChapterInfo(entry.toc_title, entry.item.href)
            for entry in self._entries
            if entry.toc_title
        ]

    def files(self) -> List[ContentFile]:
        return [entry.file for entry in self._entries]

    def cover_page_href(self) -> Optional[str]:
        return COVER_PAGE_HREF if self.has_cover else None

    def _build_entries(self, chapters: List[Chapter], images: List[ImageInfo],
                       cover_image: Optional[ImageInfo]) -> List[_Entry]:
        cover_index = None
        if cover_image is not None:
            if cover_image not in images:
                images.insert(0, cover_image)
            cover_index = images.index(cover_image)

        entries = []
        image_entries = []
        image_paths = {}

        width = pad_width(len(images))
        for index, image in enumerate(images):
            padded = zero_pad(index + 1, width)
            extension = IMAGE_EXTENSIONS.get(image.media_type, ".bin")
            href = f"{IMAGES_DIR}/{padded}{extension}"
            item_id = "cover-image" if index == cover_index else f"image{padded}"
            image_entries.append(_Entry(ManifestItem(item_id, href, image.media_type),
                                        ContentFile(href, image.data)))
            if image.source_url:
                image_paths[image.source_url] = href

        if cover_index is not None:
            cover_href = image_entries[cover_index].item.href
            entries.append(_Entry(
                ManifestItem("cover", COVER_PAGE_HREF, XHTML_MEDIA_TYPE),
                ContentFile(COVER_PAGE_HREF, self._cover_page(cover_href)),
                in_spine=True,
                toc_title="Cover",
            ))

        width = pad_width(len(chapters))
        for index, chapter in enumerate(chapters, start=1):
            padded = zero_pad(index, width)
            href = f"{TEXT_DIR}/{padded}.xhtml"
            content = self._chapter_page(chapter, image_paths)
            entries.append(_Entry(
                ManifestItem(f"xhtml{padded}", href, XHTML_MEDIA_TYPE),
                ContentFile(href, content),
                in_spine=True,
                toc_title=strip_invalid_xml_chars(chapter.title or "") or None,
            ))
            self.logger.debug(f"Chapter {padded}: {chapter.title!r} -> {href}")

        return entries + image_entries

    def _chapter_page(self, chapter: Chapter, image_paths) -> str:
        body = self._normalize_fragment(chapter.content, image_paths)
        title = strip_invalid_xml_chars(chapter.title or "")
        heading = f'<h1>{escape(title, quote=False)}</h1>' if title else ''
        return _xhtml_document(title, heading + body)

    @staticmethod
    def _normalize_fragment(fragment: str, image_paths) -> str:
        """Re-serialize an HTML fragment as well-formed XHTML body content"""
        soup = BeautifulSoup(fragment, "lxml")
        if soup.body is None:
            return ""

        for img in soup.body.find_all("img"):
            src = img.get("src")
            if src in image_paths:
                img["src"] = "../" + image_paths[src][len("OEBPS/"):]

        return strip_invalid_xml_chars(soup.body.decode_contents(formatter="minimal"))

    @staticmethod
    def _cover_page(image_href: str) -> str:
        src = "../" + image_href[len("OEBPS/"):]
        return _xhtml_document("Cover", f'<div class="cover"><img src="{src}" alt="Cover"/></div>')


def _xhtml_document(title: str, body: str) -> str:
    title = strip_invalid_xml_chars(title)
    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">',
        '<html xmlns="http://www.w3.org/1999/xhtml">',
        '<head>',
        f'    <title>{escape(title, quote=False)}</title>',
        '</head>',
        '<body>',
        body,
        '</body>',
        '</html>',
    ]
    return '\n'.join(lines)
