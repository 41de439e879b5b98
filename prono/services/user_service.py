"""
UserService - registration and lookups.
"""

import logging
from datetime import datetime

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.models.user import User
from prono.repositories.errors import DuplicateRecordError
from prono.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 30


class UserServiceError(Exception):
    """Base exception for user service errors."""
    pass


class InvalidUsernameError(UserServiceError):
    """Raised when a username is blank or has the wrong length."""
    pass


class UsernameTakenError(UserServiceError):
    """Raised when the username is already registered."""
    pass


class UserNotFoundError(UserServiceError):
    """Raised when user is not found."""
    pass


class UserService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.user_repo = UserRepository(db)

    async def register(self, username: str, now: datetime) -> User:
        """
        Create a user with zero points.

        The username is trimmed and must be 2-30 characters and unique.
        """
        username = (username or "").strip()
        if not username:
            raise InvalidUsernameError("Username is required")
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise InvalidUsernameError(
                f"Username must be between {USERNAME_MIN_LENGTH} "
                f"and {USERNAME_MAX_LENGTH} characters"
            )

        if await self.user_repo.get_by_username(username):
            raise UsernameTakenError(f"Username {username} is already taken")

        user = User(
            _id=str(ObjectId()),
            username=username,
            total_points=0,
            created_at=now,
            updated_at=None
        )

        try:
            await self.user_repo.create(user)
        except DuplicateRecordError:
            # Lost a race with a concurrent registration
            raise UsernameTakenError(f"Username {username} is already taken")

        logger.info("Registered user %s (%s)", user.username, user.id)
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def list_users(self) -> list[User]:
        """All users ordered by total points."""
        return await self.user_repo.list_by_points()
