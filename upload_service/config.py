from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    UPLOAD_STORAGE_BACKEND: str = "local"  # local | s3 | azure | gcp
    UPLOAD_LOCAL_DESTINATION: str = "uploads"

    # S3-compatible storage
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    S3_REGION: str = "us-east-1"
    S3_BUCKET: str = ""
    S3_ENDPOINT_URL: str | None = None

    # Azure Blob storage
    AZURE_STORAGE_CONNECTION_STRING: str = ""
    AZURE_STORAGE_CONTAINER: str = ""

    # Google Cloud Storage
    GCP_PROJECT_ID: str = ""
    GCP_KEY_FILENAME: str = ""
    GCP_BUCKET: str = ""

    # File type policy, keyed by MIME type or extension (without dot).
    # Example: {"image/png": {"max_size": 1048576,
    #                         "allowed_mime_types": ["image/png"],
    #                         "allowed_extensions": ["png"]}}
    UPLOAD_FILE_TYPES: dict[str, dict] = {}
    UPLOAD_DEFAULT_MAX_SIZE: int | None = None

    # Virus scanning (ClamAV daemon)
    VIRUS_SCAN_ENABLED: bool = False
    CLAMAV_HOST: str = "localhost"
    CLAMAV_PORT: int = 3310

    # Image compression
    COMPRESSION_ENABLED: bool = False
    COMPRESSION_QUALITY: int | None = None
    COMPRESSION_MAX_WIDTH: int | None = None
    COMPRESSION_MAX_HEIGHT: int | None = None

    # Chunked uploads (declared in the policy only)
    CHUNKED_UPLOADS_ENABLED: bool = False
    CHUNK_SIZE: int | None = None

    # Per-stage time bound in seconds; unset means unbounded
    UPLOAD_STAGE_TIMEOUT_SECONDS: float | None = None

    # Level of the upload_service logger
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
