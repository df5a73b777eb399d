"""Response envelopes shared by every endpoint."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Successful response: ``{"success": true, "data": ...}``."""

    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    """Failed response: ``{"success": false, "message": ...}``."""

    success: bool = False
    message: str
    errors: list[dict[str, Any]] | None = None
