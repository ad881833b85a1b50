"""
Base class for site parsers

A parser knows where a particular site keeps the chapter list, the chapter
text, the titles and the cover image. Pages are handed in already fetched,
as BeautifulSoup documents.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup

from ..models import Chapter

_BACKGROUND_URL = re.compile(r"""url\(\s*(['"]?)(.*?)\1\s*\)""")


def extract_url_from_background_image(element) -> Optional[str]:
    """Return the url(...) of an inline background-image style, if any"""
    if element is None:
        return None
    match = _BACKGROUND_URL.search(element.get("style", ""))
    return match.group(2) if match else None


class Parser(ABC):
    """Site specific extraction rules"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def make_dom(html: Union[str, bytes]) -> BeautifulSoup:
        """Parse a page; for bytes the charset is taken from the page itself"""
        return BeautifulSoup(html, "lxml")

    @abstractmethod
    def get_chapter_urls(self, dom) -> List[Dict]:
        """Chapters listed on the book's index page, as {"source_url", "title"} dicts"""

    @abstractmethod
    def find_content(self, dom):
        """Element holding the chapter text"""

    @abstractmethod
    def extract_title_impl(self, dom):
        """Element holding the book title"""

    @abstractmethod
    def find_chapter_title(self, dom):
        """Element holding the chapter title"""

    def find_cover_image_url(self, dom) -> Optional[str]:
        content = self.find_content(dom)
        img = content.find("img") if content is not None else None
        return img.get("src") if img is not None else None

    def get_information_nodes(self, dom) -> List:
        """Elements describing the book (synopsis etc.)"""
        return []

    def extract_title(self, dom) -> str:
        title = self.extract_title_impl(dom)
        return title.get_text(strip=True) if title is not None else ""

    def chapter_from_page(self, dom, title: Optional[str] = None,
                          source_url: Optional[str] = None) -> Chapter:
        """Build a Chapter from a fetched chapter page"""
        content = self.find_content(dom)
        if content is None:
            self.logger.warning(f"No chapter content found in {source_url or 'page'}")
            html = ""
        else:
            html = content.decode(formatter="minimal")

        if title is None:
            heading = self.find_chapter_title(dom)
            title = heading.get_text(strip=True) if heading is not None else ""

        return Chapter(title=title, content=html, source_url=source_url)
