"""Local directory archive source adapter.

Implements ArchiveSourcePort by reading archives straight off the disk,
for offline runs where the archives sit next to the tests.
"""

import asyncio
import logging
from pathlib import Path

from mountsim.core.models import ArchiveBlob, ArchiveFetchError
from mountsim.core.ports import ArchiveSourcePort

logger = logging.getLogger(__name__)


class DirectoryArchiveSource(ArchiveSourcePort):
    """Archive source reading ``<root>/<archive_name>``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _resolve(self, archive_name: str) -> Path:
        path = (self.root / archive_name).resolve()
        # Names must stay inside the archive directory
        if self.root.resolve() not in path.parents:
            raise ArchiveFetchError("Forbidden", archive_name, 403)
        return path

    async def fetch(self, archive_name: str) -> ArchiveBlob:
        """Read one archive from the directory.

        Raises:
            ValueError: If archive_name is empty.
            ArchiveFetchError: If the file is missing or unreadable.
        """
        if not archive_name:
            raise ValueError("archive_name must be a non-empty string")

        path = self._resolve(archive_name)
        if not path.is_file():
            logger.error(f"Archive not found: {path}")
            raise ArchiveFetchError("Not Found", archive_name, 404)

        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}", exc_info=True)
            raise ArchiveFetchError(e.strerror or str(e), archive_name) from e

        logger.debug(f"Read {archive_name} ({len(data)} bytes)")
        return ArchiveBlob(name=archive_name, data=data)
