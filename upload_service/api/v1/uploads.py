"""
Upload API endpoints.

This module exposes the upload pipeline over HTTP and maps pipeline error
kinds to HTTP responses: policy violations are client errors, scanner and
storage failures are gateway errors.
"""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from upload_service.dependencies.upload import get_upload_service
from upload_service.exceptions import (
    CompressionError,
    ConfigurationError,
    FileTooLargeError,
    FileValidationError,
    InfectedFileError,
    ScanFailedError,
    StageTimeoutError,
    StorageError,
    UploadError,
)
from upload_service.logging_config import setup_logging
from upload_service.models import IncomingFile
from upload_service.schemas.common import APIResponse, ErrorResponse
from upload_service.schemas.upload import UploadResponseData
from upload_service.service import UploadService

router = APIRouter(prefix="/uploads", tags=["uploads"])

logger = setup_logging()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _error(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error=error, message=message).model_dump(),
    )


def to_http_exception(exc: UploadError) -> HTTPException:
    """
    Map a pipeline error to an HTTPException.

    Client-side kinds echo the error message; server-side kinds return a
    static message (details are logged).
    """
    if isinstance(exc, FileTooLargeError):
        return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Payload Too Large", str(exc))
    if isinstance(exc, FileValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, "Bad Request", str(exc))
    if isinstance(exc, InfectedFileError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "Unprocessable Entity", "File is infected")
    if isinstance(exc, CompressionError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "Unprocessable Entity", "Image could not be processed")
    if isinstance(exc, StageTimeoutError):
        return _error(status.HTTP_504_GATEWAY_TIMEOUT, "Gateway Timeout", "Upload timed out")
    if isinstance(exc, ScanFailedError):
        return _error(status.HTTP_502_BAD_GATEWAY, "Bad Gateway", "Virus scan failed")
    if isinstance(exc, StorageError):
        return _error(status.HTTP_502_BAD_GATEWAY, "Bad Gateway", "Failed to store file")
    if isinstance(exc, ConfigurationError):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", "Upload service is misconfigured")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", "Upload failed")


@router.post(
    "",
    response_model=APIResponse[UploadResponseData],
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    file: UploadFile = File(...),
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload a single file.

    The file is validated against the configured file types, compressed if it
    is an image and compression is enabled, virus scanned if enabled, and
    stored in the configured backend under its original filename.

    **Request (multipart/form-data):**
    - file: File data

    **Returns:**
    - url: Locator of the stored file
    - filename: Original filename
    - content_type: MIME type
    - size: Stored size in bytes

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/uploads \\
      -F "file=@photo.png;type=image/png"
    ```
    """
    content = await file.read()
    incoming = IncomingFile.from_bytes(
        content,
        mime_type=file.content_type or DEFAULT_CONTENT_TYPE,
        original_name=file.filename or "",
        size=file.size,
    )

    try:
        result = await service.upload_file(incoming)
    except FileValidationError as e:
        logger.info(f"Upload rejected: {str(e)}")
        raise to_http_exception(e)
    except (InfectedFileError, CompressionError) as e:
        logger.warning(f"Upload rejected: {str(e)}")
        raise to_http_exception(e)
    except UploadError as e:
        logger.error(f"Upload failed: {e.__class__.__name__}: {str(e)}", exc_info=True)
        raise to_http_exception(e)

    return APIResponse(
        success=True,
        data=UploadResponseData(
            url=result.url,
            filename=incoming.original_name,
            content_type=incoming.mime_type,
            size=len(incoming.content),
        ),
    )
