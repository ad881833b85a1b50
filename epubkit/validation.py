"""
Optional epubcheck validation of a packed EPUB
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from .utils import run_command

logger = logging.getLogger(__name__)


def find_epubcheck_jar(epubcheck_jar_path: Optional[Path] = None) -> Optional[Path]:
    """Return the given jar if it exists, else look in the usual places"""
    if epubcheck_jar_path:
        return epubcheck_jar_path if epubcheck_jar_path.exists() else None

    possible_paths = [
        Path.cwd() / "epubcheck.jar",
        Path.cwd() / "epubcheck" / "epubcheck.jar",
    ]
    for path in possible_paths:
        if path.exists():
            return path
    return None


def validate_epub(epub_path: Path, epubcheck_jar_path: Optional[Path] = None) -> bool:
    """Validate EPUB using epubcheck if available; False when skipped or invalid"""
    jar_path = find_epubcheck_jar(epubcheck_jar_path)
    if not jar_path:
        logger.info("epubcheck not found, skipping validation")
        logger.info("To enable validation, provide --epubcheck-jar path or place epubcheck.jar in current directory")
        return False

    if not shutil.which("java"):
        logger.warning("Java not found, cannot run epubcheck validation")
        return False

    try:
        run_command(["java", "-jar", str(jar_path), str(epub_path)], capture_output=False)
    except subprocess.CalledProcessError as e:
        logger.warning(f"EPUB validation failed: epubcheck exited with status {e.returncode}")
        return False

    logger.info("EPUB validation completed successfully")
    return True
