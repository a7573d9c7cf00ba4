"""
Schemas for the upload endpoint.
"""
from pydantic import BaseModel


class UploadResponseData(BaseModel):
    """Response data for a stored upload."""

    url: str
    """Locator of the stored file (URL or filesystem path)."""

    filename: str
    """Original filename, also used as the storage key."""

    content_type: str
    """MIME type reported by the client."""

    size: int
    """Stored size in bytes (after compression, if applied)."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://my-bucket.s3.us-east-1.amazonaws.com/a.png",
                    "filename": "a.png",
                    "content_type": "image/png",
                    "size": 512000,
                }
            ]
        }
    }
