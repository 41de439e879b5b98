"""
Leaderboard controller - ranking of users by total points
"""

from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from prono.core.dependencies import Database
from prono.models.leaderboard import LeaderboardEntry
from prono.services.leaderboard_service import LeaderboardService


router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


class LeaderboardResponse(BaseModel):
    """Ranked entries."""
    entries: list[LeaderboardEntry]


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    db: Database,
    limit: Optional[int] = Query(None, ge=1)
):
    """
    Get the global leaderboard, every user unless limit is given.
    """
    leaderboard_service = LeaderboardService(db)
    entries = await leaderboard_service.get_leaderboard(limit)

    return LeaderboardResponse(entries=entries)
