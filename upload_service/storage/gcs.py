"""
Google Cloud Storage implementation.

Authenticates with a service account key file on every upload. The returned
URL is the public storage.googleapis.com URL of the object.
"""
import asyncio

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from upload_service.exceptions import StorageError
from upload_service.logging_config import setup_logging
from upload_service.policy import GCPStorageConfig
from upload_service.storage.base import StorageBackend

logger = setup_logging()


class GCSStorageBackend(StorageBackend):
    """Google Cloud Storage bucket."""

    name = "gcp"

    def __init__(self, config: GCPStorageConfig):
        self.config = config

    def get_object_url(self, key: str) -> str:
        return f"https://storage.googleapis.com/{self.config.bucket}/{key}"

    def _upload_blob(self, content: bytes, key: str, mime_type: str) -> None:
        client = storage.Client.from_service_account_json(
            self.config.key_filename,
            project=self.config.project_id,
        )
        blob = client.bucket(self.config.bucket).blob(key)
        blob.upload_from_string(content, content_type=mime_type)

    async def store(self, content: bytes, key: str, mime_type: str) -> str:
        """Upload bytes to the bucket and return the public object URL."""
        try:
            await asyncio.to_thread(self._upload_blob, content, key, mime_type)
        except (GoogleAPIError, GoogleAuthError, OSError, ValueError) as e:
            # OSError / ValueError: missing or malformed key file
            logger.error(f"Error uploading to GCS: {str(e)}")
            raise StorageError(self.name, key, str(e)) from e

        logger.info(f"Uploaded {key} to GCS bucket {self.config.bucket}")
        return self.get_object_url(key)
