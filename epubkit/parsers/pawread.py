"""
Parser for pawread.com
"""

from typing import Dict, List, Optional

from .factory import parser_factory
from .parser import Parser, extract_url_from_background_image

BASE_URL = "https://www.pawread.com"


class PawreadParser(Parser):

    def get_chapter_urls(self, dom) -> List[Dict]:
        items = dom.select("div.filtr-item .item-box")
        chapters = (self._item_to_chapter(item) for item in items)
        return [chapter for chapter in chapters if chapter is not None]

    def _item_to_chapter(self, item) -> Optional[Dict]:
        # onclick looks like: SinMH.chapterUrl('/manhua/1/2.html')
        parts = item.get("onclick", "").split("'")
        if len(parts) < 3 or not parts[1]:
            self.logger.warning(f"Skipping chapter entry without a link: {item}")
            return None
        path = parts[1]
        title = item.select_one(".c_title")
        return {
            "source_url": BASE_URL + path,
            "title": title.get_text(strip=True) if title is not None else "",
        }

    def find_content(self, dom):
        return dom.select_one("#chapter_item")

    def extract_title_impl(self, dom):
        return dom.select_one("h1")

    def find_chapter_title(self, dom):
        return dom.select_one("h3")

    def find_cover_image_url(self, dom):
        div = dom.select_one(".comic-view [style*=background-image]")
        return extract_url_from_background_image(div)

    def get_information_nodes(self, dom) -> List:
        return dom.select("p.txtDesc")


parser_factory.register("pawread.com", PawreadParser)
