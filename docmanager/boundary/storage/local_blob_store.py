"""
Filesystem blob store.

Writes blobs under a single upload directory. Blocking file I/O runs in a
worker thread so the event loop stays responsive.

Dependencies: asyncio, pathlib
System role: Default blob store for development and single-node deployments
"""

import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Blob store backed by a local directory."""

    def __init__(self, root: str | Path) -> None:
        """
        Initialize store rooted at ``root`` (created on first write).

        Args:
            root: Upload directory
        """
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _write_sync(self, name: str, data: bytes) -> str:
        self._root.mkdir(parents=True, exist_ok=True)
        target = self._root / Path(name).name
        target.write_bytes(data)
        return str(target)

    async def write(self, name: str, data: bytes) -> str:
        """
        Write bytes to ``<root>/<name>``.

        Only the final path component of ``name`` is used, so a crafted
        filename cannot escape the upload directory.

        Returns:
            str: Filesystem path of the written blob
        """
        path = await asyncio.to_thread(self._write_sync, name, data)
        logger.debug("Blob written", extra={"path": path, "size": len(data)})
        return path

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).is_file)

    async def read(self, path: str) -> bytes:
        """
        Read a blob's bytes.

        Raises:
            FileNotFoundError: If the blob is missing
        """
        return await asyncio.to_thread(Path(path).read_bytes)

    async def delete(self, path: str) -> None:
        """Delete a blob; a missing file is not an error."""
        await asyncio.to_thread(Path(path).unlink, missing_ok=True)
        logger.debug("Blob deleted", extra={"path": path})
