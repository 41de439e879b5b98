"""
LeaderboardService - serves the ranking from the stored user totals.

Totals are maintained by PointsService, so reading the leaderboard is a
single sorted query.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.models.leaderboard import LeaderboardEntry
from prono.repositories.user_repository import UserRepository


class LeaderboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.user_repo = UserRepository(db)

    async def get_leaderboard(self, limit: Optional[int] = None) -> list[LeaderboardEntry]:
        """Users ranked by total points; earlier registration breaks ties."""
        users = await self.user_repo.list_by_points(limit=limit)

        return [
            LeaderboardEntry(
                rank=idx + 1,
                user_id=u.id,
                username=u.username,
                total_points=u.total_points
            )
            for idx, u in enumerate(users)
        ]
