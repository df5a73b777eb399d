"""Credential store backed by SQLAlchemy."""

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth_api.exceptions import DuplicateCredentialError, StoreFailureError
from auth_api.models.user import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Operations the authentication core needs from persistence."""

    async def find_by_email(self, email: str) -> User | None: ...

    async def find_by_id(self, user_id: int) -> User | None: ...

    async def create(self, email: str, password_hash: str, name: str) -> User: ...


class UserRepository:
    """Reads and writes :class:`User` rows for a single request's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        """Get a user by exact email match."""
        try:
            result = await self.db.execute(select(User).where(User.email == email))
        except SQLAlchemyError as exc:
            logger.exception("User lookup by email failed")
            raise StoreFailureError() from exc
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> User | None:
        """Get a user by primary key."""
        try:
            return await self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.exception("User lookup by id failed")
            raise StoreFailureError() from exc

    async def create(self, email: str, password_hash: str, name: str) -> User:
        """Insert a new user.

        The unique index on ``users.email`` is the final arbiter when two
        registrations for the same email race past the lookup.
        """
        user = User(email=email, password_hash=password_hash, name=name)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise DuplicateCredentialError() from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception("User insert failed")
            raise StoreFailureError() from exc

        # Load server-generated timestamps
        try:
            await self.db.refresh(user)
        except SQLAlchemyError as exc:
            logger.exception("Reloading user %s after insert failed", user.id)
            raise StoreFailureError() from exc
        return user
