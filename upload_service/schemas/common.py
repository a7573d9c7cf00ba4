"""
Response envelopes shared by all endpoints.

Successful responses wrap their payload in APIResponse; errors use the
ErrorResponse shape so clients can branch on `success`.
"""
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T | None = None


class ErrorResponse(BaseModel):
    success: bool = False

    error: str
    """Short HTTP reason phrase (e.g. "Bad Request")."""

    message: str
    """Human-readable explanation that is safe to show to clients."""
