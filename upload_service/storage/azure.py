"""
Azure Blob storage implementation.

Resolves the container from a connection string on every upload and writes
the file as a block blob, replacing any blob with the same name.
"""
import asyncio

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobServiceClient, ContentSettings

from upload_service.exceptions import StorageError
from upload_service.logging_config import setup_logging
from upload_service.policy import AzureStorageConfig
from upload_service.storage.base import StorageBackend

logger = setup_logging()


class AzureBlobStorageBackend(StorageBackend):
    """Azure Blob storage; the locator is the blob client's URL."""

    name = "azure"

    def __init__(self, config: AzureStorageConfig):
        self.config = config

    def _upload_blob(self, content: bytes, key: str, mime_type: str) -> str:
        service_client = BlobServiceClient.from_connection_string(self.config.connection_string)
        container_client = service_client.get_container_client(self.config.container)
        blob_client = container_client.get_blob_client(key)

        blob_client.upload_blob(
            content,
            length=len(content),
            overwrite=True,
            content_settings=ContentSettings(content_type=mime_type),
        )
        return blob_client.url

    async def store(self, content: bytes, key: str, mime_type: str) -> str:
        """Upload bytes as a block blob and return its URL."""
        try:
            url = await asyncio.to_thread(self._upload_blob, content, key, mime_type)
        except (AzureError, ValueError) as e:
            # ValueError: malformed connection string
            logger.error(f"Error uploading to Azure Blob storage: {str(e)}")
            raise StorageError(self.name, key, str(e)) from e

        logger.info(f"Uploaded {key} to Azure container {self.config.container}")
        return url
