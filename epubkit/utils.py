"""
Utility functions for the EPUB packer
"""

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path


def setup_logging(verbose=False, debug=False):
    """Setup logging configuration"""
    if debug:
        level = logging.DEBUG
        format_str = '%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s'
    elif verbose:
        level = logging.DEBUG
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    else:
        level = logging.INFO
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt='%H:%M:%S'
    )


def run_command(command, cwd=None, capture_output=True):
    """Run a command and return result"""
    logger = logging.getLogger(__name__)

    cmd_str = ' '.join(str(part) for part in command)
    logger.debug(f"Running command: {cmd_str}")

    try:
        return subprocess.run(
            command,
            cwd=cwd,
            capture_output=capture_output,
            text=True,
            check=True
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"Command failed with exit status {e.returncode}: {cmd_str}")
        if e.stderr:
            logger.error(f"Error: {e.stderr}")
        raise


def sanitize_filename(filename):
    """Sanitize filename for cross-platform compatibility"""
    forbidden_chars = '<>:"/\\|?* '
    for char in forbidden_chars:
        filename = filename.replace(char, '_')

    # Replace multiple underscores with single
    while '__' in filename:
        filename = filename.replace('__', '_')

    filename = filename.strip('._')

    if len(filename) > 200:
        filename = filename[:200]

    return filename


def pad_width(count: int) -> int:
    """Width needed so every index up to `count` pads to the same length (minimum 4)"""
    return max(4, len(str(count)))


def zero_pad(number: int, width: int = 4) -> str:
    return str(number).zfill(width)


def utc_now_iso() -> str:
    """Default clock for the dc:date metadata field"""
    return datetime.now(timezone.utc).isoformat()


def save_to_file(data: bytes, file_name) -> Path:
    """Write an assembled EPUB to disk, creating parent directories"""
    path = Path(file_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(data)
    logging.getLogger(__name__).info(f"Saved {len(data)} bytes to {path}")
    return path
