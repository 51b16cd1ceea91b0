"""
Blob storage boundary.

Exports:
  - BlobStore: Protocol implemented by every backend
  - LocalBlobStore: Filesystem-backed store (default)
  - S3BlobStore: S3-backed store
  - create_blob_store(): Factory selecting a backend from StorageSettings

Dependencies: boto3 (S3 backend only)
System role: Raw file persistence for uploaded documents
"""

from docmanager.boundary.storage.blob_store import BlobStore, create_blob_store
from docmanager.boundary.storage.local_blob_store import LocalBlobStore
from docmanager.boundary.storage.s3_blob_store import S3BlobStore

__all__ = ["BlobStore", "LocalBlobStore", "S3BlobStore", "create_blob_store"]
