"""
Upload pipeline exceptions.

Every stage of the pipeline raises one of these kinds so that callers
(e.g. the HTTP layer) can map them to transport-level responses.
"""


class UploadError(Exception):
    """Base exception for the upload pipeline."""

    pass


class ConfigurationError(UploadError):
    """Raised when the upload policy is incomplete or inconsistent."""

    pass


class ScannerMisconfiguredError(ConfigurationError):
    """Raised at scan time when virus scanning is enabled without a ClamAV endpoint."""

    def __init__(self):
        super().__init__("ClamAV configuration is missing")


# Validation errors


class FileValidationError(UploadError):
    """Base exception for files rejected by the upload policy."""

    pass


class UnsupportedFileTypeError(FileValidationError):
    """Raised when neither the MIME type nor the extension has a file type entry."""

    def __init__(self, mime_type: str, extension: str):
        self.mime_type = mime_type
        self.extension = extension
        super().__init__(f"Unsupported file type: {mime_type}")


class FileTooLargeError(FileValidationError):
    """Raised when the file exceeds the max size of its file type entry."""

    def __init__(self, file_size: int, max_size: int):
        self.file_size = file_size
        self.max_size = max_size
        limit_mb = max_size / 1024 / 1024
        super().__init__(
            f"File size exceeds the maximum allowed size of {limit_mb:g} MB"
        )


class InvalidMimeTypeError(FileValidationError):
    """Raised when the MIME type is not allowed by the resolved file type entry."""

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(f"Invalid file MIME type: {mime_type}")


class InvalidExtensionError(FileValidationError):
    """Raised when the extension is not allowed by the resolved file type entry."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Invalid file extension: .{extension}")


# Processing errors


class CompressionError(UploadError):
    """Raised when the image codec cannot decode or re-encode the payload."""

    pass


class ScanFailedError(UploadError):
    """Raised when the virus scanner could not produce a verdict."""

    pass


class InfectedFileError(UploadError):
    """Raised when the virus scanner reports the file as infected."""

    def __init__(self, viruses: list[str]):
        self.viruses = list(viruses)
        super().__init__(
            f"File is infected. Viruses found: {', '.join(self.viruses)}"
        )


class StageTimeoutError(UploadError):
    """Raised when a pipeline stage exceeds its time bound."""

    def __init__(self, stage: str, timeout: float):
        self.stage = stage
        self.timeout = timeout
        super().__init__(f"Upload stage '{stage}' timed out after {timeout:g} seconds")


# Storage errors


class UnsupportedStorageTypeError(UploadError):
    """Raised when the policy names a storage backend that does not exist."""

    def __init__(self, storage_type: str):
        self.storage_type = storage_type
        super().__init__(f"Unsupported storage type: {storage_type}")


class StorageError(UploadError):
    """Raised when a storage backend fails to persist a file."""

    def __init__(self, backend: str, key: str, reason: str):
        self.backend = backend
        self.key = key
        super().__init__(f"Failed to store '{key}' in {backend} storage: {reason}")
