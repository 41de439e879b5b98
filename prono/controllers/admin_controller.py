"""
Admin controller - match management and result entry
"""

from fastapi import APIRouter, HTTPException, status

from prono.core.dependencies import CurrentAdmin, CurrentClock, Database
from prono.models.match import FinalScore, MatchCreate, MatchResponse
from prono.services.match_service import (
    MatchService,
    MatchNotFoundError,
    InvalidMatchError
)
from prono.services.points_service import PointsService


router = APIRouter(prefix="/admin", tags=["admin"])


# ============================================
# MATCH ENDPOINTS
# ============================================

@router.post("/matches", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
async def create_match(
    match_data: MatchCreate,
    admin: CurrentAdmin,
    db: Database,
    clock: CurrentClock
):
    """
    Create a scheduled match with its player roster.
    Admins only.
    """
    match_service = MatchService(db)

    try:
        match = await match_service.create_match(match_data, clock.now())
    except InvalidMatchError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return MatchResponse.from_match(match)


# ============================================
# RESULT ENDPOINTS
# ============================================

@router.put("/matches/{match_id}/result")
async def update_match_result(
    match_id: str,
    final_score: FinalScore,
    admin: CurrentAdmin,
    db: Database,
    clock: CurrentClock
):
    """
    Record (or correct) a match result and rescore predictions.
    Admins only.

    This:
    1. Stores the final score and optional best scorer
    2. Derives the winner and marks the match finished
    3. Rescores every prediction for the match
    4. Recomputes the totals of the users who predicted it
    """
    match_service = MatchService(db)

    try:
        match, points_result = await match_service.record_result(
            match_id, final_score, clock.now()
        )
    except MatchNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return {
        "success": True,
        "message": f"Result for match {match_id} recorded",
        "match": MatchResponse.from_match(match),
        "points_assigned": points_result
    }


# ============================================
# STATS RECALCULATION ENDPOINT
# ============================================

@router.post("/recalculate-all")
async def recalculate_all_totals(
    admin: CurrentAdmin,
    db: Database
):
    """
    Recompute total_points of EVERY user from their predictions.
    Useful when totals are suspected to have drifted.
    Admins only.
    """
    points_service = PointsService(db)
    result = await points_service.recalculate_all_totals()

    return {
        "success": True,
        "message": f"Totals recalculated for {result['users_processed']} users",
        "users_processed": result["users_processed"]
    }
