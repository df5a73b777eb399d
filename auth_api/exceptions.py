"""Failure kinds raised by the authentication core.

Every failure carries a transport status and a message that is safe to show
to clients. Nothing in here may reference hashes, secrets or internal state.
"""

from typing import Any

from fastapi import status


class AuthError(Exception):
    """Base class for failures surfaced across the API boundary."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(AuthError):
    """Malformed input rejected before it reaches the store."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateCredentialError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User with this email already exists"


class InvalidCredentialsError(AuthError):
    """Unknown email and wrong password both map here."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class UnauthenticatedError(AuthError):
    """Missing, malformed, expired or forged token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class StoreFailureError(AuthError):
    """The credential store is unreachable or failed unexpectedly."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"
