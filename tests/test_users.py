"""Tests for the SQLAlchemy credential store."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from auth_api.exceptions import DuplicateCredentialError, StoreFailureError
from auth_api.services.users import UserRepository


@pytest.mark.asyncio
async def test_create_and_find(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        created = await users.create("a@x.com", "hash", "A")

        assert created.id is not None
        assert created.created_at is not None
        assert created.updated_at is not None

    async with session_factory() as session:
        users = UserRepository(session)
        by_email = await users.find_by_email("a@x.com")
        by_id = await users.find_by_id(created.id)

    assert by_email.id == created.id
    assert by_id.email == "a@x.com"
    assert by_email.password_hash == "hash"


@pytest.mark.asyncio
async def test_find_missing_returns_none(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)

        assert await users.find_by_email("nobody@x.com") is None
        assert await users.find_by_id(12345) is None


@pytest.mark.asyncio
async def test_unique_violation_maps_to_duplicate(session_factory):
    """Two inserts for one email that both skipped the lookup: only one wins."""
    async with session_factory() as first, session_factory() as second:
        await UserRepository(first).create("a@x.com", "hash-1", "First")

        with pytest.raises(DuplicateCredentialError):
            await UserRepository(second).create("a@x.com", "hash-2", "Second")

    async with session_factory() as session:
        user = await UserRepository(session).find_by_email("a@x.com")
    assert user.name == "First"


@pytest.mark.asyncio
async def test_lookup_failure_maps_to_store_failure(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        with patch.object(session, "execute", side_effect=error):
            with pytest.raises(StoreFailureError):
                await users.find_by_email("a@x.com")


@pytest.mark.asyncio
async def test_insert_failure_maps_to_store_failure(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        error = OperationalError("INSERT", {}, Exception("disk I/O error"))
        with patch.object(session, "commit", side_effect=error):
            with pytest.raises(StoreFailureError):
                await users.create("a@x.com", "hash", "A")
