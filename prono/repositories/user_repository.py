"""
UserRepository - MongoDB access for the users collection.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from prono.models.user import User
from prono.repositories.errors import DuplicateRecordError


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def create(self, user: User) -> User:
        """Insert a user. The unique username index rejects duplicates."""
        try:
            await self.collection.insert_one(user.model_dump(by_alias=True))
        except DuplicateKeyError:
            raise DuplicateRecordError(f"Username {user.username} already exists")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        doc = await self.collection.find_one({"_id": user_id})
        return User(**doc) if doc else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username."""
        doc = await self.collection.find_one({"username": username})
        return User(**doc) if doc else None

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        """Users keyed by ID (missing IDs are simply absent)."""
        if not user_ids:
            return {}
        cursor = self.collection.find({"_id": {"$in": list(user_ids)}})
        docs = await cursor.to_list(length=None)
        return {doc["_id"]: User(**doc) for doc in docs}

    async def list_by_points(self, limit: Optional[int] = None) -> list[User]:
        """All users, best total first; older accounts win ties."""
        cursor = self.collection.find({}).sort([
            ("total_points", -1),
            ("created_at", 1),
        ])
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [User(**doc) for doc in docs]

    async def list_ids(self) -> list[str]:
        cursor = self.collection.find({}, {"_id": 1})
        docs = await cursor.to_list(length=None)
        return [doc["_id"] for doc in docs]

    async def set_total_points(
        self,
        user_id: str,
        total_points: int,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> bool:
        """
        Overwrite the user's aggregate total.

        The value must be a full recomputed sum; nothing increments it.
        """
        result = await self.collection.update_one(
            {"_id": user_id},
            {
                "$set": {
                    "total_points": total_points,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            session=session
        )
        return result.matched_count > 0

    async def exists(self, user_id: str) -> bool:
        """Check if user exists."""
        count = await self.collection.count_documents({"_id": user_id}, limit=1)
        return count > 0
