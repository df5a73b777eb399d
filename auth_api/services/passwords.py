"""Password hashing."""

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only reads this many bytes of the secret
BCRYPT_MAX_PASSWORD_BYTES = 72


def exceeds_bcrypt_limit(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor.

    bcrypt is CPU-bound, so every call runs in the threadpool instead of on
    the event loop. Passwords longer than 72 UTF-8 bytes are refused rather
    than silently truncated.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__truncate_error=True,
        )

    async def hash(self, password: str) -> str:
        """Hash a password.

        Raises ``ValueError`` if the password is longer than bcrypt can hash.
        """
        return await run_in_threadpool(self._context.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        A mismatch, an over-long password, or a stored value that isn't a
        recognizable hash is reported as ``False``.
        """
        if exceeds_bcrypt_limit(password):
            # Still spend the verification time
            await self.dummy_verify()
            return False
        try:
            return await run_in_threadpool(self._context.verify, password, password_hash)
        except (ValueError, TypeError):
            return False

    async def dummy_verify(self) -> None:
        """Spend roughly one verification's worth of time without a real hash."""
        await run_in_threadpool(self._context.dummy_verify)
