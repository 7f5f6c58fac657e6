"""Shared response envelope."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """Outer structure of every API response."""

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None
