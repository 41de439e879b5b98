"""
Unit tests for UserRepository
"""

import pytest

from prono.repositories.errors import DuplicateRecordError
from prono.repositories.user_repository import UserRepository
from tests.factories import make_user


class TestUserRepository:
    """Test suite for UserRepository database operations."""

    @pytest.mark.asyncio
    async def test_create_user(self, test_db):
        """Test creating a new user."""
        repo = UserRepository(test_db)

        # Act
        user = await repo.create(make_user("u1", "Hakimi"))

        # Assert
        stored = await repo.get_by_id("u1")
        assert stored is not None
        assert stored.username == "Hakimi"
        assert stored.total_points == 0
        assert stored.created_at == user.created_at

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, test_db):
        """Test retrieving non-existent user returns None."""
        repo = UserRepository(test_db)

        user = await repo.get_by_id("non_existent_id")

        assert user is None

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected_by_index(self, test_db):
        repo = UserRepository(test_db)
        await repo.create(make_user("u1", "Hakimi"))

        with pytest.raises(DuplicateRecordError):
            await repo.create(make_user("u2", "Hakimi"))

    @pytest.mark.asyncio
    async def test_get_by_username(self, test_db):
        repo = UserRepository(test_db)
        await repo.create(make_user("u1", "Hakimi"))

        user = await repo.get_by_username("Hakimi")

        assert user is not None
        assert user.id == "u1"

    @pytest.mark.asyncio
    async def test_set_total_points_overwrites(self, test_db):
        repo = UserRepository(test_db)
        await repo.create(make_user("u1", "Hakimi", total_points=12))

        updated = await repo.set_total_points("u1", 3)

        assert updated is True
        user = await repo.get_by_id("u1")
        assert user.total_points == 3
        assert user.updated_at is not None

    @pytest.mark.asyncio
    async def test_set_total_points_unknown_user(self, test_db):
        repo = UserRepository(test_db)

        assert await repo.set_total_points("ghost", 3) is False

    @pytest.mark.asyncio
    async def test_get_many(self, test_db):
        repo = UserRepository(test_db)
        await repo.create(make_user("u1", "Hakimi"))
        await repo.create(make_user("u2", "Mané"))

        users = await repo.get_many(["u1", "u2", "u3"])

        assert set(users) == {"u1", "u2"}
        assert users["u2"].username == "Mané"

    @pytest.mark.asyncio
    async def test_exists(self, test_db):
        repo = UserRepository(test_db)
        await repo.create(make_user("u1", "Hakimi"))

        assert await repo.exists("u1") is True
        assert await repo.exists("u2") is False
