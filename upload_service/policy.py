"""
Upload policy model.

The policy describes the storage target, the accepted file types and the
optional pipeline features (virus scanning, compression, chunked uploads).
It is built once by UploadConfigBuilder and shared read-only by every upload.
"""
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

DEFAULT_MAX_SIZE = 5 * 1024 * 1024  # 5MB


class StorageType(str, Enum):
    LOCAL = "local"
    S3 = "s3"
    AZURE = "azure"
    GCP = "gcp"


@dataclass(frozen=True)
class FileTypeConfig:
    """Size and naming rules for one file type entry."""
    max_size: int
    allowed_mime_types: frozenset[str] = field(default_factory=frozenset)
    allowed_extensions: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable (list, tuple, set) and freeze it
        object.__setattr__(self, "allowed_mime_types", _freeze(self.allowed_mime_types))
        object.__setattr__(self, "allowed_extensions", _freeze(self.allowed_extensions))


@dataclass(frozen=True)
class LocalStorageConfig:
    destination: str


@dataclass(frozen=True)
class S3StorageConfig:
    access_key_id: str
    secret_access_key: str
    region: str
    bucket: str
    endpoint: str | None = None


@dataclass(frozen=True)
class AzureStorageConfig:
    connection_string: str
    container: str


@dataclass(frozen=True)
class GCPStorageConfig:
    project_id: str
    key_filename: str
    bucket: str


BackendConfig = LocalStorageConfig | S3StorageConfig | AzureStorageConfig | GCPStorageConfig


@dataclass(frozen=True)
class StorageConfig:
    """Tagged storage target: `type` selects the backend, `config` carries its settings."""
    type: StorageType | str
    config: BackendConfig


@dataclass(frozen=True)
class ClamAVConfig:
    host: str
    port: int


@dataclass(frozen=True)
class VirusScanSettings:
    clamav: ClamAVConfig | None = None


@dataclass(frozen=True)
class VirusScanConfig:
    enabled: bool
    config: VirusScanSettings | None = None


@dataclass(frozen=True)
class CompressionOptions:
    quality: int | None = None
    max_width: int | None = None
    max_height: int | None = None


@dataclass(frozen=True)
class CompressionConfig:
    enabled: bool
    config: CompressionOptions | None = None


@dataclass(frozen=True)
class ChunkedUploadConfig:
    enabled: bool
    size: int | None = None


@dataclass(frozen=True)
class UploadConfig:
    """
    Complete upload policy.

    `file_types` is keyed by MIME type or by extension (without the dot).
    `default_max_size` is kept for configuration compatibility; validation
    only ever uses the max size of the matching file type entry.
    """
    storage: StorageConfig
    file_types: Mapping[str, FileTypeConfig]
    default_max_size: int = DEFAULT_MAX_SIZE
    virus: VirusScanConfig | None = None
    compression: CompressionConfig | None = None
    chunks: ChunkedUploadConfig | None = None

    def __post_init__(self):
        object.__setattr__(self, "file_types", MappingProxyType(dict(self.file_types)))

    def get_file_type(self, key: str) -> FileTypeConfig | None:
        """Return the file type entry for a MIME type or extension key, if any."""
        return self.file_types.get(key)

    @property
    def virus_scan_enabled(self) -> bool:
        return self.virus is not None and self.virus.enabled

    @property
    def compression_enabled(self) -> bool:
        return self.compression is not None and self.compression.enabled


def _freeze(values: Iterable[str]) -> frozenset[str]:
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)
