"""
S3-compatible storage implementation.

A fresh boto3 client is created for every upload from the configured
credentials, region and optional custom endpoint (MinIO, LocalStack, ...).
The returned URL is always the AWS virtual-hosted-style URL, even when a
custom endpoint is configured.
"""
import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from upload_service.exceptions import StorageError
from upload_service.logging_config import setup_logging
from upload_service.policy import S3StorageConfig
from upload_service.storage.base import StorageBackend

logger = setup_logging()


class S3StorageBackend(StorageBackend):
    """Amazon S3 (or S3-compatible) object storage."""

    name = "s3"

    def __init__(self, config: S3StorageConfig):
        self.config = config

    def _create_client(self):
        return boto3.client(
            "s3",
            region_name=self.config.region,
            endpoint_url=self.config.endpoint,
            aws_access_key_id=self.config.access_key_id,
            aws_secret_access_key=self.config.secret_access_key,
        )

    def get_object_url(self, key: str) -> str:
        return f"https://{self.config.bucket}.s3.{self.config.region}.amazonaws.com/{key}"

    def _put_object(self, content: bytes, key: str, mime_type: str) -> None:
        client = self._create_client()
        client.put_object(
            Bucket=self.config.bucket,
            Key=key,
            Body=content,
            ContentType=mime_type,
        )

    async def store(self, content: bytes, key: str, mime_type: str) -> str:
        """Upload bytes with put_object and return the object URL."""
        try:
            await asyncio.to_thread(self._put_object, content, key, mime_type)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading to S3: {str(e)}")
            raise StorageError(self.name, key, str(e)) from e

        logger.info(f"Uploaded {key} to S3 bucket {self.config.bucket}")
        return self.get_object_url(key)
