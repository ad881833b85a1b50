"""
Builds the NCX navigation document (toc.ncx)
"""

from .models import BookMetadata
from .supplier import ContentItemSupplier
from .utils import pad_width, zero_pad
from .xml_builder import XmlDocument, serialize

NCX_NAMESPACE = "http://www.daisy.org/z3986/2005/ncx/"


class NavigationDocumentBuilder:
    """Creates the table of contents, one navPoint per chapter info entry"""

    def __init__(self, metadata: BookMetadata):
        self.metadata = metadata

    def build(self, supplier: ContentItemSupplier) -> str:
        """Return toc.ncx as UTF-8 XML text"""
        ncx = XmlDocument(NCX_NAMESPACE, "ncx")
        ncx.set_attribute(ncx.root, "version", "2005-1")
        ncx.set_attribute(ncx.root, "xml:lang", self.metadata.language)

        self._build_head(ncx)
        self._build_doc_title(ncx)
        self._build_nav_map(ncx, supplier)

        return serialize(ncx)

    def _build_head(self, ncx: XmlDocument):
        head = ncx.create_and_append_child(ncx.root, "head")
        self._build_head_meta(ncx, head, self.metadata.uuid, "dtb:uid")
        self._build_head_meta(ncx, head, "2", "dtb:depth")
        self._build_head_meta(ncx, head, "0", "dtb:totalPageCount")
        self._build_head_meta(ncx, head, "0", "dtb:maxPageNumber")

    @staticmethod
    def _build_head_meta(ncx: XmlDocument, head, content: str, name: str):
        meta = ncx.create_and_append_child(head, "meta")
        ncx.set_attribute(meta, "content", content)
        ncx.set_attribute(meta, "name", name)

    def _build_doc_title(self, ncx: XmlDocument):
        doc_title = ncx.create_and_append_child(ncx.root, "docTitle")
        ncx.create_and_append_child(doc_title, "text", self.metadata.title)

    def _build_nav_map(self, ncx: XmlDocument, supplier: ContentItemSupplier):
        nav_map = ncx.create_and_append_child(ncx.root, "navMap")
        chapters = list(supplier.chapter_info())
        width = pad_width(len(chapters))
        for play_order, chapter in enumerate(chapters, start=1):
            self._build_nav_point(ncx, nav_map, play_order, width, chapter.title, chapter.src)

    @staticmethod
    def _build_nav_point(ncx: XmlDocument, nav_map, play_order: int, width: int, title: str, src: str):
        nav_point = ncx.create_and_append_child(nav_map, "navPoint")
        ncx.set_attribute(nav_point, "id", zero_pad(play_order, width))
        ncx.set_attribute(nav_point, "playOrder", play_order)
        nav_label = ncx.create_and_append_child(nav_point, "navLabel")
        # an empty title still gets a (blank) label so entries line up with chapters
        ncx.create_and_append_child(nav_label, "text", title or "")
        content = ncx.create_and_append_child(nav_point, "content")
        ncx.set_attribute(content, "src", src)
