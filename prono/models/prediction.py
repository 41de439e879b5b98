from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from prono.core.clock import as_utc
from prono.models.match import Outcome


class PredictedScore(BaseModel):
    team_a: int = Field(..., ge=0)
    team_b: int = Field(..., ge=0)


class Prediction(BaseModel):
    """A user's forecast for one match"""

    id: str = Field(..., alias="_id")  # user_id:match_id

    user_id: str
    match_id: str

    exact_score: PredictedScore
    best_scorer: str  # canonical roster spelling
    result: Outcome  # always derived from exact_score

    points: int = Field(0, ge=0)  # only written by PointsService

    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class PredictionCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    match_id: str = Field(..., min_length=1)
    exact_score: PredictedScore
    best_scorer: str = Field(..., min_length=1)
    # Optional, must agree with exact_score when given
    result: Optional[Outcome] = None


class PredictionMatchSummary(BaseModel):
    id: str
    team_a: str
    team_b: str
    match_date: datetime


class PredictionResponse(BaseModel):
    id: str
    user_id: str
    username: Optional[str] = None
    match_id: str
    match: Optional[PredictionMatchSummary] = None
    exact_score: PredictedScore
    best_scorer: str
    result: Outcome
    points: int
    created_at: datetime
