"""AWS adapters."""

from caritas.boundary.aws.s3_client import S3DocumentClient, StorageUploadError

__all__ = ["S3DocumentClient", "StorageUploadError"]
