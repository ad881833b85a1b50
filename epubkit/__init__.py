"""
EPUB 2 packer for web novels
"""

from .assembler import EpubPacker
from .models import BookMetadata, Chapter, ChapterInfo, ContentFile, ImageInfo, ManifestItem, SpineItem
from .supplier import ChapterItemSupplier, ContentItemSupplier

__all__ = [
    "EpubPacker",
    "BookMetadata",
    "Chapter",
    "ChapterInfo",
    "ContentFile",
    "ImageInfo",
    "ManifestItem",
    "SpineItem",
    "ChapterItemSupplier",
    "ContentItemSupplier",
]
