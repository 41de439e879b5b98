"""
Predictions controller - submit and browse predictions
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from prono.core.dependencies import CurrentClock, Database
from prono.models.prediction import PredictionCreate, PredictionResponse
from prono.services.prediction_service import (
    PredictionService,
    UserNotFoundError,
    MatchNotFoundError,
    MatchFinishedError,
    PredictionClosedError,
    InvalidPredictionError,
    DuplicatePredictionError
)


router = APIRouter(prefix="/predictions", tags=["predictions"])


@router.post("", response_model=PredictionResponse, status_code=status.HTTP_201_CREATED)
async def create_prediction(
    prediction_data: PredictionCreate,
    db: Database,
    clock: CurrentClock
):
    """
    Submit a prediction.

    One per user and match, accepted until 5 minutes before kickoff (see
    PREDICTION_CUTOFF_MINUTES). Points stay at 0 until the result is entered.
    """
    prediction_service = PredictionService(db)

    try:
        prediction = await prediction_service.submit(prediction_data, clock.now())
    except (UserNotFoundError, MatchNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except (MatchFinishedError, PredictionClosedError, InvalidPredictionError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except DuplicatePredictionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return PredictionResponse(
        id=prediction.id,
        user_id=prediction.user_id,
        match_id=prediction.match_id,
        exact_score=prediction.exact_score,
        best_scorer=prediction.best_scorer,
        result=prediction.result,
        points=prediction.points,
        created_at=prediction.created_at
    )


@router.get("", response_model=list[PredictionResponse])
async def list_predictions(
    db: Database,
    user_id: Optional[str] = Query(None, description="Filter by user"),
    match_id: Optional[str] = Query(None, description="Filter by match")
):
    """
    Predictions, newest first, with username and match summary.
    """
    prediction_service = PredictionService(db)
    return await prediction_service.list_predictions(user_id=user_id, match_id=match_id)
