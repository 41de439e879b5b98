"""
🎯 PredictionRepository - CRUD for user predictions

Composite IDs: user_id:match_id
"""

from datetime import datetime, timezone
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from prono.models.prediction import Prediction
from prono.repositories.errors import DuplicateRecordError


def prediction_id(user_id: str, match_id: str) -> str:
    return f"{user_id}:{match_id}"


class PredictionRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["predictions"]

    # ============================================
    # 📌 CREATE
    # ============================================

    async def create(self, prediction: Prediction) -> Prediction:
        """
        Insert a prediction

        The composite _id and the unique (user_id, match_id) index both
        reject a second prediction for the same pair.
        """
        try:
            await self.collection.insert_one(prediction.model_dump(by_alias=True))
        except DuplicateKeyError:
            raise DuplicateRecordError(f"Prediction {prediction.id} already exists")
        return prediction

    # ============================================
    # 📌 READ
    # ============================================

    async def get_predictions_for_match(
        self,
        match_id: str,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> list[Prediction]:
        """All predictions for a match, used by the recalculation"""
        cursor = self.collection.find({"match_id": match_id}, session=session)
        docs = await cursor.to_list(length=None)
        return [Prediction(**doc) for doc in docs]

    async def find(
        self,
        user_id: Optional[str] = None,
        match_id: Optional[str] = None
    ) -> list[Prediction]:
        """Predictions filtered by user and/or match, newest first"""
        query = {}
        if user_id:
            query["user_id"] = user_id
        if match_id:
            query["match_id"] = match_id

        cursor = self.collection.find(query).sort("created_at", -1)
        docs = await cursor.to_list(length=None)
        return [Prediction(**doc) for doc in docs]

    async def exists(self, user_id: str, match_id: str) -> bool:
        """Check whether the user already predicted this match"""
        count = await self.collection.count_documents(
            {"user_id": user_id, "match_id": match_id},
            limit=1
        )
        return count > 0

    # ============================================
    # 📌 UPDATE
    # ============================================

    async def set_points(
        self,
        pred_id: str,
        points: int,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> bool:
        """Overwrite the awarded points of one prediction"""
        result = await self.collection.update_one(
            {"_id": pred_id},
            {
                "$set": {
                    "points": points,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            session=session
        )
        return result.matched_count > 0

    # ============================================
    # 📌 AGGREGATIONS
    # ============================================

    async def sum_points_by_user(
        self,
        user_ids: list[str],
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> dict[str, int]:
        """
        🔥 Total points per user over ALL of their predictions

        Returns: {"user1": 7, "user2": 0, ...}. Every requested user is
        present, users without predictions sum to 0.
        """
        totals = {user_id: 0 for user_id in user_ids}
        if not user_ids:
            return totals

        pipeline = [
            {"$match": {"user_id": {"$in": list(user_ids)}}},
            {
                "$group": {
                    "_id": "$user_id",
                    "total_points": {"$sum": "$points"}
                }
            }
        ]

        cursor = self.collection.aggregate(pipeline, session=session)
        results = await cursor.to_list(length=None)

        for item in results:
            totals[item["_id"]] = int(item["total_points"])

        return totals
