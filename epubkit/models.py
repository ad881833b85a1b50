"""
Data types shared by the EPUB packer and its suppliers
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class BookMetadata:
    """Book-level metadata written into content.opf and toc.ncx"""
    uuid: str
    title: str
    author: str
    language: str


@dataclass(frozen=True)
class ManifestItem:
    id: str
    href: str
    media_type: str


@dataclass(frozen=True)
class SpineItem:
    id: str


@dataclass(frozen=True)
class ChapterInfo:
    """One table of contents entry; src may carry a #fragment"""
    title: str
    src: str


@dataclass(frozen=True)
class ContentFile:
    href: str
    content: Union[str, bytes]


@dataclass
class Chapter:
    """A chapter as extracted from a source site (HTML fragment)"""
    title: str
    content: str
    source_url: Optional[str] = None


@dataclass
class ImageInfo:
    data: bytes
    media_type: str
    source_url: Optional[str] = None
