"""
Blob store interface.

Documents keep a ``file_path`` returned by ``write``; every later call
addresses the blob through that path.

Dependencies: docmanager.configs
System role: Narrow storage contract used by the document service
"""

from typing import Protocol, runtime_checkable

from docmanager.configs.storage import StorageSettings


@runtime_checkable
class BlobStore(Protocol):
    """Async storage for raw document bytes."""

    async def write(self, name: str, data: bytes) -> str:
        """Persist ``data`` under ``name`` and return its storage path."""
        ...

    async def exists(self, path: str) -> bool:
        ...

    async def read(self, path: str) -> bytes:
        ...

    async def delete(self, path: str) -> None:
        ...


def create_blob_store(settings: StorageSettings) -> BlobStore:
    """
    Build the blob store selected by ``settings.backend``.

    Args:
        settings: Storage configuration

    Returns:
        BlobStore: Local or S3 implementation

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.backend.lower()
    if backend == "local":
        from docmanager.boundary.storage.local_blob_store import LocalBlobStore

        return LocalBlobStore(settings.upload_path)
    if backend == "s3":
        from docmanager.boundary.storage.s3_blob_store import S3BlobStore

        return S3BlobStore(bucket=settings.s3_bucket, region=settings.s3_region)
    raise ValueError(f"Unknown storage backend: {settings.backend}")
