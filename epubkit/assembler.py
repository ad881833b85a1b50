"""
Assembles an EPUB 2 archive from a content item supplier
"""

import logging
import zipfile
from typing import Callable, Optional

from .archive import EpubArchive
from .models import BookMetadata
from .navigation_document import NavigationDocumentBuilder
from .package_document import PackageDocumentBuilder
from .supplier import ContentItemSupplier
from .utils import save_to_file

MIMETYPE = "application/epub+zip"

CONTAINER_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
    <rootfiles>
        <rootfile full-path="content.opf" media-type="application/oebps-package+xml"/>
    </rootfiles>
</container>'''


class EpubPacker:
    """Packs the items from a supplier into a single EPUB file"""

    def __init__(self, metadata: BookMetadata, clock: Optional[Callable[[], str]] = None):
        self.metadata = metadata
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    def assemble(self, supplier: ContentItemSupplier) -> bytes:
        """Build the complete EPUB and return it as bytes"""
        self.logger.info(f"Packing EPUB: {self.metadata.title}")
        archive = EpubArchive()

        # Step 1: mimetype and container.xml
        self._add_required_files(archive)

        # Step 2: package and navigation documents
        opf = PackageDocumentBuilder(self.metadata, clock=self.clock).build(supplier)
        archive.add("content.opf", opf)
        ncx = NavigationDocumentBuilder(self.metadata).build(supplier)
        archive.add("toc.ncx", ncx)

        # Step 3: content files
        file_count = 0
        for content_file in supplier.files():
            archive.add(content_file.href, content_file.content)
            file_count += 1
        self.logger.info(f"Packed {file_count} content files")

        # Step 4: compress
        return archive.to_bytes()

    def assemble_and_save(self, file_name, supplier: ContentItemSupplier,
                          save: Callable = save_to_file):
        """Assemble, then hand the bytes to `save(data, file_name)`"""
        data = self.assemble(supplier)
        return save(data, file_name)

    @staticmethod
    def _add_required_files(archive: EpubArchive):
        # mimetype must come first and must not be compressed
        archive.add("mimetype", MIMETYPE, compress_type=zipfile.ZIP_STORED)
        archive.add("META-INF/container.xml", CONTAINER_XML)
