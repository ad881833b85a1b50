#!/usr/bin/env python3
"""
WebToEpub - EPUB packer for web novels

Packs chapters saved from a web-novel site into a single EPUB 2 file.
The book directory holds a book.json description plus one saved page
(or HTML fragment) per chapter.
"""

import argparse
import logging
import sys
from pathlib import Path

from bs4 import UnicodeDammit

from epubkit.assembler import EpubPacker
from epubkit.config import load_book_config
from epubkit.exceptions import EpubError
from epubkit.models import Chapter, ImageInfo
from epubkit.parsers import parser_factory
from epubkit.supplier import ChapterItemSupplier
from epubkit.utils import sanitize_filename, setup_logging
from epubkit.validation import validate_epub


def load_chapters(config, logger):
    """Read every chapter file listed in book.json"""
    parser = parser_factory.fetch(config.site) if config.site else None
    if parser:
        logger.info(f"Using {type(parser).__name__} for {config.site}")

    chapters = []
    for entry in config.chapters:
        path = config.chapter_path(entry)
        # saved pages keep the site's own charset; bs4 detects it
        with open(path, 'rb') as f:
            data = f.read()

        if parser:
            chapter = parser.chapter_from_page(parser.make_dom(data), title=entry.get("title"),
                                               source_url=entry.get("source_url"))
        else:
            html = UnicodeDammit(data, is_html=True).unicode_markup
            chapter = Chapter(title=entry.get("title", ""), content=html,
                              source_url=entry.get("source_url"))
        logger.debug(f"Loaded chapter '{chapter.title}' from {path}")
        chapters.append(chapter)

    return chapters


def load_cover(config):
    if not config.cover_path:
        return None
    with open(config.cover_path, 'rb') as f:
        return ImageInfo(data=f.read(), media_type=config.cover_media_type)


def main():
    parser = argparse.ArgumentParser(description="WebToEpub - Pack saved web-novel chapters into an EPUB")
    parser.add_argument("book_dir", help="Directory containing book.json and the chapter files")
    parser.add_argument("-o", "--output", help="Output EPUB filename (default: <title>.epub)")
    parser.add_argument("--epubcheck-jar", help="Path to epubcheck.jar for EPUB validation (optional)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Maximum debug output")

    args = parser.parse_args()

    setup_logging(verbose=args.verbose, debug=args.debug)
    logger = logging.getLogger(__name__)

    try:
        # Step 1: Read book description
        logger.info(f"Step 1: Reading book from {args.book_dir}...")
        config = load_book_config(args.book_dir)
        metadata = config.metadata

        output_path = Path(args.output) if args.output else Path(f"{sanitize_filename(metadata.title) or 'book'}.epub")
        logger.info(f"Title: {metadata.title}")
        logger.info(f"Author: {metadata.author}")
        logger.info(f"Output EPUB: {output_path}")

        # Step 2: Load chapters
        logger.info("Step 2: Loading chapters...")
        chapters = load_chapters(config, logger)
        logger.info(f"Found {len(chapters)} chapters")

        # Step 3: Pack EPUB
        logger.info("Step 3: Packing EPUB...")
        supplier = ChapterItemSupplier(chapters, cover_image=load_cover(config))
        epub_path = EpubPacker(metadata).assemble_and_save(output_path, supplier)
        logger.info(f"EPUB created successfully: {epub_path}")

        # Step 4: Validate EPUB (only if explicitly requested)
        if args.epubcheck_jar:
            logger.info("Step 4: Validating EPUB...")
            epubcheck_jar_path = Path(args.epubcheck_jar)
            if not epubcheck_jar_path.exists():
                logger.warning(f"Specified epubcheck jar not found: {epubcheck_jar_path}")
            else:
                validate_epub(epub_path, epubcheck_jar_path)
        else:
            logger.info("Skipping EPUB validation (use --epubcheck-jar to enable)")

        logger.info("Process completed successfully!")

    except (EpubError, OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        if args.verbose or args.debug:
            logger.exception("Full traceback:")
        sys.exit(1)


if __name__ == "__main__":
    main()
