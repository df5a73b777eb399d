"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth_api.database import get_db
from auth_api.schemas.auth import TokenClaims
from auth_api.services.auth import AuthService, authenticate_token
from auth_api.services.users import UserRepository

# auto_error is off so a missing header goes through the same 401 path as a bad token
security = HTTPBearer(auto_error=False)


def get_auth_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthService:
    """Get auth service wired to this request's session and the app's signing components."""
    return AuthService(
        store=UserRepository(db),
        hasher=request.app.state.password_hasher,
        tokens=request.app.state.token_service,
    )


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Get the caller's identity from the bearer token, or reject the request.

    Only the token is checked here; no database session is opened.
    """
    token = credentials.credentials if credentials is not None else None
    return authenticate_token(request.app.state.token_service, token)
