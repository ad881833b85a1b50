"""
Loads a book directory's book.json description
"""

import json
import logging
import mimetypes
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import BookConfigError
from .models import BookMetadata

BOOK_FILE = "book.json"
DEFAULT_AUTHOR = "Unknown"
DEFAULT_LANGUAGE = "en"

logger = logging.getLogger(__name__)


@dataclass
class BookConfig:
    """Everything needed to turn a book directory into an EPUB"""
    book_dir: Path
    metadata: BookMetadata
    chapters: List[Dict] = field(default_factory=list)
    site: Optional[str] = None
    cover: Optional[str] = None

    def chapter_path(self, chapter: Dict) -> Path:
        return self.book_dir / chapter["file"]

    @property
    def cover_path(self) -> Optional[Path]:
        return self.book_dir / self.cover if self.cover else None

    @property
    def cover_media_type(self) -> str:
        media_type, _ = mimetypes.guess_type(self.cover or "")
        return media_type or "image/jpeg"


def load_book_config(book_dir) -> BookConfig:
    """Read and check BOOK_DIR/book.json"""
    book_dir = Path(book_dir)
    config_path = book_dir / BOOK_FILE

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise BookConfigError(f"{config_path} not found") from e
    except json.JSONDecodeError as e:
        raise BookConfigError(f"{config_path} is not valid JSON: {e}") from e

    if not data.get("title"):
        raise BookConfigError(f"{config_path}: 'title' is required")

    chapters = data.get("chapters")
    if not chapters:
        raise BookConfigError(f"{config_path}: 'chapters' must list at least one chapter")

    site = data.get("site")
    for index, chapter in enumerate(chapters, start=1):
        if not chapter.get("file"):
            raise BookConfigError(f"{config_path}: chapter {index} has no 'file'")
        if not (book_dir / chapter["file"]).is_file():
            raise BookConfigError(f"Chapter file not found: {book_dir / chapter['file']}")
        if "title" not in chapter and not site:
            logger.warning(f"Chapter {index} has no title and will not appear in the table of contents")

    cover = data.get("cover")
    if cover and not (book_dir / cover).is_file():
        raise BookConfigError(f"Cover image not found: {book_dir / cover}")

    metadata = BookMetadata(
        uuid=data.get("uuid") or f"urn:uuid:{uuid.uuid4()}",
        title=data["title"],
        author=data.get("author") or DEFAULT_AUTHOR,
        language=data.get("language") or DEFAULT_LANGUAGE,
    )
    logger.debug(f"Loaded {config_path}: {len(chapters)} chapters")

    return BookConfig(book_dir=book_dir, metadata=metadata, chapters=chapters,
                      site=site, cover=cover)
