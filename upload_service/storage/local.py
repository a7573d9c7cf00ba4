"""
Local filesystem storage implementation.

Writes files directly under the configured destination directory using the
key as the filename. The directory must already exist; an existing file with
the same name is overwritten.
"""
import os

import aiofiles

from upload_service.exceptions import StorageError
from upload_service.logging_config import setup_logging
from upload_service.policy import LocalStorageConfig
from upload_service.storage.base import StorageBackend

logger = setup_logging()


class LocalStorageBackend(StorageBackend):
    """Local filesystem storage with async writes."""

    name = "local"

    def __init__(self, config: LocalStorageConfig):
        """
        Initialize local storage backend.

        Args:
            config: Local storage settings (destination directory)
        """
        self.destination = config.destination

    def get_file_path(self, key: str) -> str:
        """
        Return the filesystem path for a storage key.

        Leading separators are stripped so absolute keys land under the
        destination directory.

        Raises:
            StorageError: If the key resolves outside the destination directory
        """
        file_path = os.path.join(self.destination, key.lstrip("/\\"))

        root = os.path.abspath(self.destination)
        if os.path.commonpath([root, os.path.abspath(file_path)]) != root:
            raise StorageError(self.name, key, "path escapes the destination directory")

        return file_path

    async def store(self, content: bytes, key: str, mime_type: str) -> str:
        """
        Write file bytes to <destination>/<key>.

        Args:
            content: File bytes
            key: Filename within the destination directory
            mime_type: Unused for the filesystem

        Returns:
            The file path

        Raises:
            StorageError: If the key escapes the destination or the file
                cannot be written
        """
        file_path = self.get_file_path(key)

        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Failed to write {file_path}: {str(e)}")
            raise StorageError(self.name, key, str(e)) from e

        logger.info(f"Stored {len(content)} bytes at {file_path}")
        return file_path
