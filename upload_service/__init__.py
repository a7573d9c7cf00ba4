"""
Upload-processing pipeline.

Validates incoming files against a type/size policy, optionally compresses
images and scans for viruses, then stores them in a local, S3-compatible,
Azure Blob or Google Cloud Storage backend.
"""

from upload_service.builder import UploadConfigBuilder, build_upload_config
from upload_service.exceptions import (
    CompressionError,
    ConfigurationError,
    FileTooLargeError,
    FileValidationError,
    InfectedFileError,
    InvalidExtensionError,
    InvalidMimeTypeError,
    ScanFailedError,
    ScannerMisconfiguredError,
    StageTimeoutError,
    StorageError,
    UnsupportedFileTypeError,
    UnsupportedStorageTypeError,
    UploadError,
)
from upload_service.models import IncomingFile, UploadResult
from upload_service.policy import FileTypeConfig, StorageType, UploadConfig
from upload_service.service import UploadService

__all__ = [
    "UploadConfigBuilder",
    "build_upload_config",
    "UploadConfig",
    "FileTypeConfig",
    "StorageType",
    "IncomingFile",
    "UploadResult",
    "UploadService",
    "UploadError",
    "ConfigurationError",
    "ScannerMisconfiguredError",
    "FileValidationError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",
    "InvalidMimeTypeError",
    "InvalidExtensionError",
    "CompressionError",
    "ScanFailedError",
    "InfectedFileError",
    "StageTimeoutError",
    "UnsupportedStorageTypeError",
    "StorageError",
]
