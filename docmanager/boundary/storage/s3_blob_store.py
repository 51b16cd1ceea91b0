"""
S3 blob store.

Stores document bytes as objects in a single bucket under an ``uploads/``
prefix. boto3 is synchronous, so every call runs in a worker thread.

Dependencies: boto3
System role: Blob store for multi-node deployments
"""

import asyncio

import boto3
from botocore.exceptions import ClientError

_KEY_PREFIX = "uploads/"


class S3BlobStore:
    """Blob store backed by an S3 bucket."""

    def __init__(self, bucket: str, region: str = "us-east-1", client=None) -> None:
        """
        Initialize S3 client for the document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            client: Preconfigured boto3 S3 client (tests, custom endpoints)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    async def write(self, name: str, data: bytes) -> str:
        """
        Upload bytes as ``uploads/<name>``.

        Returns:
            str: S3 object key

        Raises:
            ClientError: If the upload fails
        """
        key = f"{_KEY_PREFIX}{name}"
        await asyncio.to_thread(
            self._s3_client.put_object, Bucket=self._bucket, Key=key, Body=data
        )
        return key

    def _exists_sync(self, key: str) -> bool:
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey"):
                return False
            raise

    async def exists(self, path: str) -> bool:
        """
        Check if an object exists in S3.

        Raises:
            ClientError: For errors other than a missing object
        """
        return await asyncio.to_thread(self._exists_sync, path)

    def _read_sync(self, key: str) -> bytes:
        response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
        return response["Body"].read()

    async def read(self, path: str) -> bytes:
        return await asyncio.to_thread(self._read_sync, path)

    async def delete(self, path: str) -> None:
        """Delete an object (S3 treats missing keys as success)."""
        await asyncio.to_thread(
            self._s3_client.delete_object, Bucket=self._bucket, Key=path
        )
