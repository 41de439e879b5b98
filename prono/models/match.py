from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from prono.core.clock import as_utc

# A = team A wins, B = team B wins
Outcome = Literal["A", "B", "DRAW"]


class Player(BaseModel):
    """Player declared on a match roster"""

    name: str
    team: Literal["A", "B"]


class FinalScore(BaseModel):
    """Final score entered by an admin once the match is over"""

    team_a: int = Field(..., ge=0)
    team_b: int = Field(..., ge=0)
    best_scorer: Optional[str] = None


class Match(BaseModel):
    id: str = Field(..., alias="_id")

    team_a: str
    team_b: str
    match_date: datetime  # kickoff, UTC

    players: list[Player] = []

    final_score: Optional[FinalScore] = None
    winner: Optional[Outcome] = None  # set together with final_score
    is_finished: bool = False

    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True

    @field_validator("match_date", "created_at", "updated_at")
    @classmethod
    def _aware(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class MatchCreate(BaseModel):
    team_a: str
    team_b: str
    match_date: datetime
    players: list[Player]


class MatchResponse(BaseModel):
    id: str
    team_a: str
    team_b: str
    match_date: datetime
    players: list[Player]
    final_score: Optional[FinalScore] = None
    winner: Optional[Outcome] = None
    is_finished: bool

    @classmethod
    def from_match(cls, match: Match) -> "MatchResponse":
        return cls(
            id=match.id,
            team_a=match.team_a,
            team_b=match.team_b,
            match_date=match.match_date,
            players=match.players,
            final_score=match.final_score,
            winner=match.winner,
            is_finished=match.is_finished,
        )
