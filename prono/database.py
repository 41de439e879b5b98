"""
🔌 Database Connection Setup - MongoDB

Central place to connect to MongoDB and create indexes
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from prono.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton holding the MongoDB connection"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Connect to MongoDB"""
        if cls.client is None:
            settings = get_settings()

            if not settings.mongodb_uri:
                raise ValueError("MONGODB_URI not found in environment variables")

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Connection check
            await cls.client.admin.command("ping")
            logger.info("✅ Connected to MongoDB: %s", settings.mongodb_db_name)

    @classmethod
    async def disconnect(cls):
        """Close the connection"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Return the database instance"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY for FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that injects the DB

    Usage:
        @router.get("/matches/{match_id}")
        async def get_match(match_id: str, db: Database):
            service = MatchService(db)
            return await service.get_match(match_id)
    """
    return Database.get_db()


# ============================================
# 🏗️ INDEXES (created at startup)
# ============================================

async def create_indexes(db: Optional[AsyncIOMotorDatabase] = None):
    """
    Create the indexes the app relies on.

    The unique ones back the "one username" and "one prediction per user and
    match" rules. Called from the app lifespan on every startup and by the
    seed script; create_index is a no-op when the index already exists.
    """
    db = db if db is not None else Database.get_db()

    # users
    await db.users.create_index("username", unique=True)
    await db.users.create_index([("total_points", DESCENDING)])

    # predictions
    await db.predictions.create_index(
        [("user_id", ASCENDING), ("match_id", ASCENDING)], unique=True
    )
    await db.predictions.create_index("user_id")
    await db.predictions.create_index("match_id")

    # matches
    await db.matches.create_index("match_date")
    await db.matches.create_index("is_finished")

    logger.info("✅ Indexes created successfully")
