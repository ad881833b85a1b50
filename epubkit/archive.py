"""
In-memory EPUB archive, serialized to a ZIP file in one go
"""

import io
import logging
import zipfile
from typing import Dict, List, Tuple, Union

from .exceptions import ArchiveError


class EpubArchive:
    """Ordered mapping of archive path -> (content, compression)"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._entries: Dict[str, Tuple[bytes, int]] = {}

    def add(self, path: str, content: Union[str, bytes], compress_type: int = zipfile.ZIP_DEFLATED):
        """Add an entry; paths must be unique"""
        if path in self._entries:
            raise ArchiveError(f"Duplicate archive entry: {path}", path=path)

        if isinstance(content, str):
            content = content.encode("utf-8")

        self._entries[path] = (content, compress_type)
        self.logger.debug(f"Added {path} ({len(content)} bytes)")

    @property
    def paths(self) -> List[str]:
        return list(self._entries)

    def to_bytes(self) -> bytes:
        """Write every entry, in insertion order, into a new ZIP"""
        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, 'w') as zf:
                for path, (content, compress_type) in self._entries.items():
                    zf.writestr(path, content, compress_type=compress_type)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise ArchiveError(f"Could not write archive: {e}") from e

        return buffer.getvalue()
