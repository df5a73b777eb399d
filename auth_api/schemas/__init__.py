"""Pydantic schemas for API requests and responses."""

from auth_api.schemas.auth import LoginResult, TokenClaims, UserLogin, UserRegister, UserResponse
from auth_api.schemas.response import ApiResponse, ErrorResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "LoginResult",
    "TokenClaims",
    "ApiResponse",
    "ErrorResponse",
]
