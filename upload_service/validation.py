"""
File validation against the upload policy.

Checks, in order (the first failure wins):
1. File type entry lookup - by MIME type first, then by extension
2. File size limit of the matching entry
3. MIME type allowlist of the matching entry
4. Extension allowlist of the matching entry
"""
from upload_service.exceptions import (
    FileTooLargeError,
    InvalidExtensionError,
    InvalidMimeTypeError,
    UnsupportedFileTypeError,
)
from upload_service.models import IncomingFile
from upload_service.policy import FileTypeConfig, UploadConfig


def get_file_extension(filename: str) -> str:
    """
    Return the substring after the last dot of `filename`.

    A name without a dot has no extension and yields an empty string.
    The case is preserved.
    """
    _, dot, extension = filename.rpartition(".")
    return extension if dot else ""


def resolve_file_type(file: IncomingFile, policy: UploadConfig) -> FileTypeConfig:
    """
    Find the file type entry that governs `file`.

    Raises:
        UnsupportedFileTypeError: If neither the MIME type nor the extension is configured
    """
    extension = get_file_extension(file.original_name)
    file_type = policy.get_file_type(file.mime_type) or policy.get_file_type(extension)
    if file_type is None:
        raise UnsupportedFileTypeError(file.mime_type, extension)
    return file_type


def validate_file(file: IncomingFile, policy: UploadConfig) -> None:
    """
    Validate an incoming file against the upload policy.

    Args:
        file: The incoming file
        policy: The upload policy

    Raises:
        UnsupportedFileTypeError: If no file type entry matches
        FileTooLargeError: If the file exceeds the entry's max size
        InvalidMimeTypeError: If the MIME type is not allowed
        InvalidExtensionError: If the extension is not allowed
    """
    file_type = resolve_file_type(file, policy)

    if file.size > file_type.max_size:
        raise FileTooLargeError(file.size, file_type.max_size)

    if file.mime_type not in file_type.allowed_mime_types:
        raise InvalidMimeTypeError(file.mime_type)

    extension = get_file_extension(file.original_name)
    if extension not in file_type.allowed_extensions:
        raise InvalidExtensionError(extension)
