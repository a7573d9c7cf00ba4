"""
Fluent builder for the upload policy.

Each setter records one concern and returns the builder so calls can be
chained; build() checks the required fields and freezes the result:

    config = (
        UploadConfigBuilder()
        .use_local_storage("/var/uploads")
        .set_file_type("image/png", FileTypeConfig(1024 * 1024, ["image/png"], ["png"]))
        .enable_compression(quality=80)
        .build()
    )
"""
from collections.abc import Callable

from upload_service.config import Settings
from upload_service.exceptions import ConfigurationError
from upload_service.policy import (
    DEFAULT_MAX_SIZE,
    AzureStorageConfig,
    ChunkedUploadConfig,
    ClamAVConfig,
    CompressionConfig,
    CompressionOptions,
    FileTypeConfig,
    GCPStorageConfig,
    LocalStorageConfig,
    S3StorageConfig,
    StorageConfig,
    StorageType,
    UploadConfig,
    VirusScanConfig,
    VirusScanSettings,
)


class UploadConfigBuilder:
    """Accumulates a partial UploadConfig; last write wins for every setter."""

    def __init__(self):
        self._storage: StorageConfig | None = None
        self._file_types: dict[str, FileTypeConfig] = {}
        self._default_max_size: int | None = None
        self._virus: VirusScanConfig | None = None
        self._compression: CompressionConfig | None = None
        self._chunks: ChunkedUploadConfig | None = None

    @classmethod
    def configure(cls, callback: Callable[["UploadConfigBuilder"], None]) -> UploadConfig:
        """Create a builder, let `callback` populate it, and return the built policy."""
        builder = cls()
        callback(builder)
        return builder.build()

    # Storage

    def use_local_storage(self, destination: str) -> "UploadConfigBuilder":
        self._storage = StorageConfig(
            type=StorageType.LOCAL,
            config=LocalStorageConfig(destination=destination),
        )
        return self

    def use_s3_storage(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        bucket: str,
        endpoint: str | None = None,
    ) -> "UploadConfigBuilder":
        self._storage = StorageConfig(
            type=StorageType.S3,
            config=S3StorageConfig(
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
                region=region,
                bucket=bucket,
                endpoint=endpoint,
            ),
        )
        return self

    def use_azure_storage(self, connection_string: str, container: str) -> "UploadConfigBuilder":
        self._storage = StorageConfig(
            type=StorageType.AZURE,
            config=AzureStorageConfig(
                connection_string=connection_string,
                container=container,
            ),
        )
        return self

    def use_gcp_storage(self, project_id: str, key_filename: str, bucket: str) -> "UploadConfigBuilder":
        self._storage = StorageConfig(
            type=StorageType.GCP,
            config=GCPStorageConfig(
                project_id=project_id,
                key_filename=key_filename,
                bucket=bucket,
            ),
        )
        return self

    # File types

    def set_file_type(self, key: str, config: FileTypeConfig) -> "UploadConfigBuilder":
        """Register the rules for a MIME type or extension key."""
        self._file_types[key] = config
        return self

    def set_default_max_size(self, size: int) -> "UploadConfigBuilder":
        self._default_max_size = size
        return self

    # Optional features

    def enable_virus_scanning(self, host: str, port: int) -> "UploadConfigBuilder":
        self._virus = VirusScanConfig(
            enabled=True,
            config=VirusScanSettings(clamav=ClamAVConfig(host=host, port=port)),
        )
        return self

    def enable_compression(
        self,
        quality: int | None = None,
        max_width: int | None = None,
        max_height: int | None = None,
    ) -> "UploadConfigBuilder":
        self._compression = CompressionConfig(
            enabled=True,
            config=CompressionOptions(
                quality=quality,
                max_width=max_width,
                max_height=max_height,
            ),
        )
        return self

    def enable_chunked_uploads(self, size: int | None = None) -> "UploadConfigBuilder":
        self._chunks = ChunkedUploadConfig(enabled=True, size=size)
        return self

    def build(self) -> UploadConfig:
        """
        Validate the accumulated settings and return an immutable policy.

        Raises:
            ConfigurationError: If no storage backend or no file type was configured
        """
        if self._storage is None:
            raise ConfigurationError("Storage configuration is required")
        if not self._file_types:
            raise ConfigurationError("At least one file type configuration is required")

        return UploadConfig(
            storage=self._storage,
            file_types=self._file_types,
            default_max_size=self._default_max_size or DEFAULT_MAX_SIZE,
            virus=self._virus,
            compression=self._compression,
            chunks=self._chunks,
        )


def build_upload_config(settings: Settings) -> UploadConfig:
    """
    Build the upload policy from environment settings.

    Args:
        settings: Application settings

    Returns:
        Immutable UploadConfig

    Raises:
        ConfigurationError: If the backend name is unknown, a file type entry
            is malformed, or no file type is configured
    """
    builder = UploadConfigBuilder()

    backend = settings.UPLOAD_STORAGE_BACKEND
    if backend == StorageType.LOCAL:
        builder.use_local_storage(settings.UPLOAD_LOCAL_DESTINATION)
    elif backend == StorageType.S3:
        builder.use_s3_storage(
            settings.S3_ACCESS_KEY_ID,
            settings.S3_SECRET_ACCESS_KEY,
            settings.S3_REGION,
            settings.S3_BUCKET,
            settings.S3_ENDPOINT_URL,
        )
    elif backend == StorageType.AZURE:
        builder.use_azure_storage(
            settings.AZURE_STORAGE_CONNECTION_STRING,
            settings.AZURE_STORAGE_CONTAINER,
        )
    elif backend == StorageType.GCP:
        builder.use_gcp_storage(
            settings.GCP_PROJECT_ID,
            settings.GCP_KEY_FILENAME,
            settings.GCP_BUCKET,
        )
    else:
        raise ConfigurationError(f"Unknown storage backend: {backend}")

    for key, entry in settings.UPLOAD_FILE_TYPES.items():
        try:
            file_type = FileTypeConfig(
                max_size=int(entry["max_size"]),
                allowed_mime_types=entry.get("allowed_mime_types", []),
                allowed_extensions=entry.get("allowed_extensions", []),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid file type configuration for '{key}': {e}") from e
        builder.set_file_type(key, file_type)

    if settings.UPLOAD_DEFAULT_MAX_SIZE:
        builder.set_default_max_size(settings.UPLOAD_DEFAULT_MAX_SIZE)

    if settings.VIRUS_SCAN_ENABLED:
        builder.enable_virus_scanning(settings.CLAMAV_HOST, settings.CLAMAV_PORT)

    if settings.COMPRESSION_ENABLED:
        builder.enable_compression(
            quality=settings.COMPRESSION_QUALITY,
            max_width=settings.COMPRESSION_MAX_WIDTH,
            max_height=settings.COMPRESSION_MAX_HEIGHT,
        )

    if settings.CHUNKED_UPLOADS_ENABLED:
        builder.enable_chunked_uploads(settings.CHUNK_SIZE)

    return builder.build()
