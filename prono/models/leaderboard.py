from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    """Row of the ranking (read from the denormalized user totals)"""

    rank: int
    user_id: str
    username: str
    total_points: int
