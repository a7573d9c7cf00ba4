"""
Per-upload data passed through the pipeline.
"""
from dataclasses import dataclass


@dataclass
class IncomingFile:
    """A file received from a caller; `content` is replaced in place by compression."""
    content: bytes
    mime_type: str
    original_name: str
    size: int  # Size reported by the caller, checked by validation

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        mime_type: str,
        original_name: str,
        size: int | None = None,
    ) -> "IncomingFile":
        """Build a file from its bytes; `size` falls back to the byte length."""
        return cls(
            content=content,
            mime_type=mime_type,
            original_name=original_name,
            size=size if size is not None else len(content),
        )

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class UploadResult:
    """Locator of the stored object (URL or filesystem path)."""
    url: str
