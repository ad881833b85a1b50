"""
Builds the OPF package document (content.opf)
"""

import logging
from typing import Callable, Optional

from .models import BookMetadata
from .supplier import ContentItemSupplier
from .utils import utc_now_iso
from .xml_builder import XmlDocument, serialize

OPF_NAMESPACE = "http://www.idpf.org/2007/opf"
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"

NCX_HREF = "toc.ncx"
NCX_ID = "ncx"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"


class PackageDocumentBuilder:
    """Creates the book's master manifest: metadata, manifest, spine and guide"""

    def __init__(self, metadata: BookMetadata, clock: Optional[Callable[[], str]] = None):
        self.metadata = metadata
        self.clock = clock or utc_now_iso
        self.logger = logging.getLogger(__name__)

    def build(self, supplier: ContentItemSupplier) -> str:
        """Return content.opf as UTF-8 XML text"""
        opf = XmlDocument(OPF_NAMESPACE, "package")
        opf.set_attribute(opf.root, "version", "2.0")
        opf.set_attribute(opf.root, "unique-identifier", "BookId")

        self._build_metadata(opf)
        manifest_ids = self._build_manifest(opf, supplier)
        self._build_spine(opf, supplier, manifest_ids)
        self._build_guide(opf, supplier)

        return serialize(opf)

    def _build_metadata(self, opf: XmlDocument):
        metadata = opf.create_and_append_child(
            opf.root, "metadata", nsmap={"dc": DC_NAMESPACE, "opf": OPF_NAMESPACE}
        )
        opf.create_and_append_child(metadata, "dc:title", self.metadata.title)
        opf.create_and_append_child(metadata, "dc:language", self.metadata.language)
        opf.create_and_append_child(metadata, "dc:date", self.clock())

        author = opf.create_and_append_child(metadata, "dc:creator", self.metadata.author)
        opf.set_attribute(author, "opf:file-as", self.metadata.author)
        opf.set_attribute(author, "opf:role", "aut")

        identifier = opf.create_and_append_child(metadata, "dc:identifier", self.metadata.uuid)
        opf.set_attribute(identifier, "id", "BookId")
        opf.set_attribute(identifier, "opf:scheme", "URI")

    def _build_manifest(self, opf: XmlDocument, supplier: ContentItemSupplier) -> set:
        manifest = opf.create_and_append_child(opf.root, "manifest")
        ids = set()
        for item in supplier.manifest_items():
            self._add_manifest_item(opf, manifest, item.href, item.id, item.media_type)
            ids.add(item.id)

        self._add_manifest_item(opf, manifest, NCX_HREF, NCX_ID, NCX_MEDIA_TYPE)
        ids.add(NCX_ID)
        return ids

    @staticmethod
    def _add_manifest_item(opf: XmlDocument, manifest, href: str, item_id: str, media_type: str):
        item = opf.create_and_append_child(manifest, "item")
        opf.set_attribute(item, "href", href)
        opf.set_attribute(item, "id", item_id)
        opf.set_attribute(item, "media-type", media_type)

    def _build_spine(self, opf: XmlDocument, supplier: ContentItemSupplier, manifest_ids: set):
        spine = opf.create_and_append_child(opf.root, "spine")
        opf.set_attribute(spine, "toc", NCX_ID)
        for item in supplier.spine_items():
            if item.id not in manifest_ids:
                self.logger.debug(f"Spine item '{item.id}' has no manifest entry")
            itemref = opf.create_and_append_child(spine, "itemref")
            opf.set_attribute(itemref, "idref", item.id)

    @staticmethod
    def _build_guide(opf: XmlDocument, supplier: ContentItemSupplier):
        guide = opf.create_and_append_child(opf.root, "guide")
        cover_href = supplier.cover_page_href()
        if cover_href:
            reference = opf.create_and_append_child(guide, "reference")
            opf.set_attribute(reference, "type", "cover")
            opf.set_attribute(reference, "title", "Cover")
            opf.set_attribute(reference, "href", cover_href)
