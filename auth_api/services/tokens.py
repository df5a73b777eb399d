"""Session token signing and verification."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from pydantic import ValidationError

from auth_api.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=1)


class TokenService:
    """Issues and verifies signed JWTs carrying :class:`TokenClaims`."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = DEFAULT_TOKEN_TTL,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, claims: TokenClaims, expires_in: timedelta | None = None) -> str:
        """Create a signed token for ``claims`` expiring after ``expires_in``."""
        issued_at = datetime.now(UTC)
        expire = issued_at + (expires_in if expires_in is not None else self.expires_in)
        to_encode = {
            **claims.model_dump(by_alias=True),
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims | None:
        """Decode and validate a token.

        Returns ``None`` for any bad signature, malformed token or expired
        token. Callers are not told which.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.debug("Rejected token: %s", exc.__class__.__name__)
            return None

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            logger.debug("Rejected token with malformed claims")
            return None
