"""
⚽ MatchRepository - CRUD for matches

Result entry writes final_score, winner and is_finished in one update so a
match never has a score without a winner.
"""

from datetime import datetime
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from prono.models.match import FinalScore, Match, Outcome


class MatchRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["matches"]

    # ============================================
    # 📌 CREATE
    # ============================================

    async def create(self, match: Match) -> Match:
        """Insert a scheduled match"""
        await self.collection.insert_one(match.model_dump(by_alias=True))
        return match

    # ============================================
    # 📌 READ
    # ============================================

    async def get_by_id(self, match_id: str) -> Optional[Match]:
        """Get a match by ID"""
        doc = await self.collection.find_one({"_id": match_id})
        return Match(**doc) if doc else None

    async def get_many(self, match_ids: list[str]) -> dict[str, Match]:
        """Matches keyed by ID"""
        if not match_ids:
            return {}
        cursor = self.collection.find({"_id": {"$in": list(match_ids)}})
        docs = await cursor.to_list(length=None)
        return {doc["_id"]: Match(**doc) for doc in docs}

    async def find(
        self,
        is_finished: Optional[bool] = None,
        starts_after: Optional[datetime] = None
    ) -> list[Match]:
        """
        Matches ordered by kickoff (ascending)

        Filters are combined: is_finished=False + starts_after gives the
        "upcoming" list.
        """
        query = {}
        if is_finished is not None:
            query["is_finished"] = is_finished
        if starts_after is not None:
            query["match_date"] = {"$gte": starts_after}

        cursor = self.collection.find(query).sort("match_date", 1)
        docs = await cursor.to_list(length=None)
        return [Match(**doc) for doc in docs]

    async def get_by_teams_and_date(
        self,
        team_a: str,
        team_b: str,
        match_date: datetime
    ) -> Optional[Match]:
        doc = await self.collection.find_one({
            "team_a": team_a,
            "team_b": team_b,
            "match_date": match_date,
        })
        return Match(**doc) if doc else None

    # ============================================
    # 📌 UPDATE
    # ============================================

    async def set_result(
        self,
        match_id: str,
        final_score: FinalScore,
        winner: Outcome,
        updated_at: datetime
    ) -> Optional[Match]:
        """
        Record the final score and mark the match finished

        Also used when an admin corrects a result; the match stays finished.
        """
        doc = await self.collection.find_one_and_update(
            {"_id": match_id},
            {
                "$set": {
                    "final_score": final_score.model_dump(),
                    "winner": winner,
                    "is_finished": True,
                    "updated_at": updated_at,
                }
            },
            return_document=ReturnDocument.AFTER
        )
        return Match(**doc) if doc else None
