"""
Abstract base class for storage backends.

This module defines the interface that all storage backends must implement,
so the upload pipeline can persist files without knowing where they go.
"""
from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    All storage implementations (local filesystem, S3, Azure Blob, GCS) must
    implement store() and return a locator for the persisted object.
    """

    #: Backend name used in logs and StorageError messages
    name: str = "unknown"

    @abstractmethod
    async def store(self, content: bytes, key: str, mime_type: str) -> str:
        """
        Persist file bytes under a key.

        Args:
            content: File bytes
            key: Storage key (the original filename)
            mime_type: MIME type recorded as the object's content type

        Returns:
            Locator of the stored object (URL or filesystem path)

        Raises:
            StorageError: If the write fails
        """
        pass
