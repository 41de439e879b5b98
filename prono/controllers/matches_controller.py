"""
Matches controller - public read endpoints for matches
"""

from fastapi import APIRouter, HTTPException, Query, status

from prono.core.dependencies import CurrentClock, Database
from prono.models.match import MatchResponse
from prono.services.match_service import MatchService, MatchNotFoundError


router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=list[MatchResponse])
async def list_matches(
    db: Database,
    clock: CurrentClock,
    upcoming: bool = Query(False, description="Only matches still open or just started"),
    finished: bool = Query(False, description="Only matches with a result")
):
    """
    List matches by kickoff date.
    """
    match_service = MatchService(db)
    matches = await match_service.list_matches(
        clock.now(),
        upcoming=upcoming,
        finished=finished
    )
    return [MatchResponse.from_match(m) for m in matches]


@router.get("/{match_id}", response_model=MatchResponse)
async def get_match(match_id: str, db: Database):
    match_service = MatchService(db)

    try:
        match = await match_service.get_match(match_id)
    except MatchNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return MatchResponse.from_match(match)
