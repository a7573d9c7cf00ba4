"""
Upload service dependency injection for FastAPI.

The upload policy is built once from the environment settings and shared by
every request; endpoints receive an UploadService bound to it.
"""
from functools import lru_cache

from upload_service.builder import build_upload_config
from upload_service.config import settings
from upload_service.policy import UploadConfig
from upload_service.service import UploadService


@lru_cache
def get_upload_config() -> UploadConfig:
    """
    Return the process-wide upload policy.

    Raises:
        ConfigurationError: If the environment does not describe a valid policy
    """
    return build_upload_config(settings)


@lru_cache
def get_upload_service() -> UploadService:
    """Return the UploadService bound to the configured policy (one per process)."""
    return UploadService(
        get_upload_config(),
        stage_timeout=settings.UPLOAD_STAGE_TIMEOUT_SECONDS,
    )
