"""
Upload orchestration service.

UploadService.upload_file() runs the fixed pipeline:

    validate -> compress (images, if enabled) -> scan (if enabled) -> store

Every stage fails fast and nothing is caught here; storage is the last stage,
so a failed upload never leaves a partially persisted file behind.
"""
import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from upload_service.exceptions import StageTimeoutError
from upload_service.logging_config import setup_logging
from upload_service.models import IncomingFile, UploadResult
from upload_service.policy import UploadConfig
from upload_service.processing.compression import compress_image
from upload_service.processing.scanning import scan_for_viruses
from upload_service.storage import StorageBackend, get_storage_backend
from upload_service.validation import validate_file

logger = setup_logging()

T = TypeVar("T")


class UploadService:
    """
    Runs incoming files through the upload pipeline defined by a policy.

    The storage backend is resolved once from the policy's storage tag when
    the service is created. The service holds no per-upload state, so one
    instance can serve concurrent uploads.
    """

    def __init__(
        self,
        config: UploadConfig,
        storage: StorageBackend | None = None,
        stage_timeout: float | None = None,
    ):
        """
        Args:
            config: Upload policy
            storage: Backend override; resolved from `config.storage` when omitted
            stage_timeout: Optional time bound (seconds) for each stage

        Raises:
            UnsupportedStorageTypeError: If the policy names an unknown backend
        """
        self.config = config
        self.storage = storage or get_storage_backend(config.storage)
        self.stage_timeout = stage_timeout

    async def upload_file(self, file: IncomingFile) -> UploadResult:
        """
        Validate, process and persist an incoming file.

        Args:
            file: The incoming file; its content is replaced if compressed

        Returns:
            UploadResult with the locator of the stored file

        Raises:
            FileValidationError: If the file violates the policy
            CompressionError: If image compression fails
            ScannerMisconfiguredError: If scanning is enabled without an endpoint
            ScanFailedError: If the virus scan cannot complete
            InfectedFileError: If the file is infected
            StorageError: If the backend write fails
            StageTimeoutError: If a stage exceeds `stage_timeout`
        """
        validate_file(file, self.config)
        logger.info(
            f"Validated upload {file.original_name} ({file.mime_type}, {file.size} bytes)"
        )

        if file.is_image and self.config.compression_enabled:
            file.content = await self._run_stage(
                "compress",
                asyncio.to_thread(compress_image, file.content, self.config.compression),
            )

        if self.config.virus_scan_enabled:
            await self._run_stage(
                "scan",
                asyncio.to_thread(scan_for_viruses, file.content, self.config.virus),
            )

        url = await self._run_stage(
            "store",
            self.storage.store(file.content, file.original_name, file.mime_type),
        )

        logger.info(f"Upload complete: {file.original_name} -> {url}")
        return UploadResult(url=url)

    async def _run_stage(self, stage: str, operation: Awaitable[T]) -> T:
        if self.stage_timeout is None:
            return await operation

        try:
            return await asyncio.wait_for(operation, timeout=self.stage_timeout)
        except asyncio.TimeoutError:
            logger.error(f"Upload stage '{stage}' exceeded {self.stage_timeout}s")
            raise StageTimeoutError(stage, self.stage_timeout) from None
