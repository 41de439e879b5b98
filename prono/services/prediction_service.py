"""
PredictionService - Business logic for predictions.

Handles validation and the cutoff rule. Points are never set here.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.core.clock import as_utc
from prono.core.config import get_settings
from prono.models.match import Match
from prono.models.prediction import (
    Prediction,
    PredictionCreate,
    PredictionMatchSummary,
    PredictionResponse,
    PredictedScore,
)
from prono.repositories.errors import DuplicateRecordError
from prono.repositories.match_repository import MatchRepository
from prono.repositories.prediction_repository import PredictionRepository, prediction_id
from prono.repositories.user_repository import UserRepository
from prono.services.points_service import classify_result, normalize_player_name

logger = logging.getLogger(__name__)


class PredictionServiceError(Exception):
    """Base exception for prediction service errors."""
    pass


class UserNotFoundError(PredictionServiceError):
    """Raised when the submitting user is not found."""
    pass


class MatchNotFoundError(PredictionServiceError):
    """Raised when match is not found."""
    pass


class MatchFinishedError(PredictionServiceError):
    """Raised when predicting a match that already has a result."""
    pass


class PredictionClosedError(PredictionServiceError):
    """Raised when the submission arrives after the cutoff."""
    pass


class InvalidPredictionError(PredictionServiceError):
    """Raised when prediction data is invalid."""
    pass


class DuplicatePredictionError(PredictionServiceError):
    """Raised when the user already predicted this match."""
    pass


def prediction_cutoff(match: Match) -> datetime:
    """Last instant (exclusive) at which the match accepts predictions."""
    minutes = get_settings().prediction_cutoff_minutes
    return as_utc(match.match_date) - timedelta(minutes=minutes)


def find_roster_name(match: Match, name: str) -> Optional[str]:
    """Roster spelling of a player, matched case-insensitively."""
    wanted = normalize_player_name(name)
    for player in match.players:
        if normalize_player_name(player.name) == wanted:
            return player.name
    return None


class PredictionService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.prediction_repo = PredictionRepository(db)
        self.match_repo = MatchRepository(db)
        self.user_repo = UserRepository(db)

    async def submit(self, data: PredictionCreate, now: datetime) -> Prediction:
        """
        Create a prediction.

        Validates:
        - User and match exist
        - Match is not finished and the cutoff (kickoff - N minutes) has not passed
        - Best scorer is on the match roster
        - An explicit result agrees with the predicted score
        - No prediction exists yet for this user and match

        Nothing is written when a check fails.
        """
        if not await self.user_repo.exists(data.user_id):
            raise UserNotFoundError(f"User {data.user_id} not found")

        match = await self.match_repo.get_by_id(data.match_id)
        if not match:
            raise MatchNotFoundError(f"Match {data.match_id} not found")

        if match.is_finished:
            raise MatchFinishedError("This match is already finished")

        if as_utc(now) >= prediction_cutoff(match):
            logger.debug(
                "Rejected late prediction from %s for match %s", data.user_id, match.id
            )
            raise PredictionClosedError(
                "The match has started or starts in less than "
                f"{get_settings().prediction_cutoff_minutes} minutes, predictions are closed"
            )

        best_scorer = find_roster_name(match, data.best_scorer)
        if best_scorer is None:
            raise InvalidPredictionError("The best scorer must be a player of the match")

        result = classify_result(data.exact_score.team_a, data.exact_score.team_b)
        if data.result is not None and data.result != result:
            raise InvalidPredictionError(
                f"Result {data.result} does not match the predicted score "
                f"{data.exact_score.team_a}-{data.exact_score.team_b}"
            )

        if await self.prediction_repo.exists(data.user_id, data.match_id):
            raise DuplicatePredictionError("You already made a prediction for this match")

        prediction = Prediction(
            _id=prediction_id(data.user_id, data.match_id),
            user_id=data.user_id,
            match_id=data.match_id,
            exact_score=PredictedScore(
                team_a=data.exact_score.team_a,
                team_b=data.exact_score.team_b
            ),
            best_scorer=best_scorer,
            result=result,
            points=0,
            created_at=as_utc(now),
            updated_at=None
        )

        try:
            await self.prediction_repo.create(prediction)
        except DuplicateRecordError:
            raise DuplicatePredictionError("You already made a prediction for this match")

        logger.info("Stored prediction %s", prediction.id)
        return prediction

    async def list_predictions(
        self,
        user_id: Optional[str] = None,
        match_id: Optional[str] = None
    ) -> list[PredictionResponse]:
        """
        Predictions (newest first) with the username and match summary joined in.
        """
        predictions = await self.prediction_repo.find(user_id=user_id, match_id=match_id)

        users = await self.user_repo.get_many(sorted({p.user_id for p in predictions}))
        matches = await self.match_repo.get_many(sorted({p.match_id for p in predictions}))

        responses = []
        for p in predictions:
            user = users.get(p.user_id)
            match = matches.get(p.match_id)
            responses.append(
                PredictionResponse(
                    id=p.id,
                    user_id=p.user_id,
                    username=user.username if user else None,
                    match_id=p.match_id,
                    match=PredictionMatchSummary(
                        id=match.id,
                        team_a=match.team_a,
                        team_b=match.team_b,
                        match_date=match.match_date
                    ) if match else None,
                    exact_score=p.exact_score,
                    best_scorer=p.best_scorer,
                    result=p.result,
                    points=p.points,
                    created_at=p.created_at
                )
            )
        return responses
