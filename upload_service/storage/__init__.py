"""
Storage abstraction layer for uploaded files.

This package provides one interface over four interchangeable backends:
local filesystem, S3-compatible, Azure Blob and Google Cloud Storage.
"""

from upload_service.exceptions import StorageError, UnsupportedStorageTypeError
from upload_service.policy import StorageConfig, StorageType
from upload_service.storage.azure import AzureBlobStorageBackend
from upload_service.storage.base import StorageBackend
from upload_service.storage.gcs import GCSStorageBackend
from upload_service.storage.local import LocalStorageBackend
from upload_service.storage.s3 import S3StorageBackend

BACKENDS: dict[str, type[StorageBackend]] = {
    StorageType.LOCAL: LocalStorageBackend,
    StorageType.S3: S3StorageBackend,
    StorageType.AZURE: AzureBlobStorageBackend,
    StorageType.GCP: GCSStorageBackend,
}


def get_storage_backend(storage: StorageConfig) -> StorageBackend:
    """
    Return the storage backend selected by the policy's storage tag.

    Args:
        storage: Storage section of the upload policy

    Returns:
        StorageBackend instance for the configured target

    Raises:
        UnsupportedStorageTypeError: If the tag names no known backend
    """
    try:
        backend_class = BACKENDS[StorageType(storage.type)]
    except ValueError:
        raise UnsupportedStorageTypeError(str(storage.type)) from None

    return backend_class(storage.config)


__all__ = [
    "StorageBackend",
    "LocalStorageBackend",
    "S3StorageBackend",
    "AzureBlobStorageBackend",
    "GCSStorageBackend",
    "get_storage_backend",
    "StorageError",
    "UnsupportedStorageTypeError",
]
