"""
S3 client for the course materials bucket.

Stores uploaded documents under owner-scoped keys. Keys are never reused,
so writes are append-only from the caller's point of view.

Dependencies: boto3
System role: Storage collaborator for the document orchestrator
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageUploadError(Exception):
    """Raised when an object cannot be written to the bucket."""


class S3DocumentClient:
    """S3 client for document bucket uploads."""

    def __init__(self, bucket: str, region: str = "ap-southeast-2", client=None) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            client: Pre-built boto3 S3 client (tests inject a stub here)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """
        Upload one object.

        boto3 is synchronous, so the call runs in a worker thread to keep the
        event loop free for sibling uploads.

        Args:
            key: S3 object key (path in bucket)
            data: Object contents
            content_type: MIME type stored with the object

        Raises:
            StorageUploadError: If S3 rejects the upload or cannot be reached
        """
        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except ClientError as e:
            message = e.response.get("Error", {}).get("Message") or str(e)
            raise StorageUploadError(message) from e
        except BotoCoreError as e:
            raise StorageUploadError(str(e)) from e

        logger.debug(
            "Stored object",
            extra={"bucket": self._bucket, "s3_key": key, "size": len(data)},
        )
