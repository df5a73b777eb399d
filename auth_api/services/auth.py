"""Authentication service: registration, login and token checks."""

import logging

from auth_api.exceptions import (
    DuplicateCredentialError,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from auth_api.models.user import User
from auth_api.schemas.auth import LoginResult, TokenClaims, UserResponse
from auth_api.services.passwords import PasswordHasher
from auth_api.services.tokens import TokenService
from auth_api.services.users import UserStore

logger = logging.getLogger(__name__)


def sanitize_user(user: User) -> UserResponse:
    """Project a stored user onto its outward view (drops the password hash)."""
    return UserResponse.model_validate(user)


def authenticate_token(tokens: TokenService, token: str | None) -> TokenClaims:
    """Resolve a presented bearer token to the caller's identity.

    Needs only the token service, so a request can be rejected before any
    store access.
    """
    if not token:
        raise UnauthenticatedError()

    claims = tokens.verify(token)
    if claims is None:
        raise UnauthenticatedError()
    return claims


class AuthService:
    """Orchestrates the credential store, the password hasher and the token service.

    One instance serves one request; nothing is cached between calls.
    """

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, email: str, password: str, name: str) -> UserResponse:
        """Create an account for an unused email."""
        if await self.store.find_by_email(email) is not None:
            logger.info("Registration rejected: email already in use")
            raise DuplicateCredentialError()

        password_hash = await self.hasher.hash(password)
        # Raises DuplicateCredentialError if a concurrent registration won the race
        user = await self.store.create(email, password_hash, name)

        logger.info("Registered user %s", user.id)
        return sanitize_user(user)

    async def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue a session token."""
        user = await self.store.find_by_email(email)
        if user is None:
            # Keep the response time close to the wrong-password path
            await self.hasher.dummy_verify()
            logger.info("Login failed: unknown account")
            raise InvalidCredentialsError()

        if not await self.hasher.verify(password, user.password_hash):
            logger.info("Login failed for user %s: wrong password", user.id)
            raise InvalidCredentialsError()

        token = self.tokens.issue(TokenClaims(user_id=user.id, email=user.email))
        logger.info("User %s logged in", user.id)
        return LoginResult(token=token, user=sanitize_user(user))

    def authenticate(self, token: str | None) -> TokenClaims:
        """Resolve a presented bearer token to the caller's identity."""
        return authenticate_token(self.tokens, token)

    async def get_profile(self, claims: TokenClaims) -> UserResponse:
        """Load the current user's outward view for an authenticated request."""
        user = await self.store.find_by_id(claims.user_id)
        if user is None:
            raise UnauthenticatedError()
        return sanitize_user(user)
