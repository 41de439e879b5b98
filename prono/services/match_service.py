"""
MatchService - match creation, listing and result entry.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.core.clock import as_utc
from prono.models.match import FinalScore, Match, MatchCreate, Player
from prono.repositories.match_repository import MatchRepository
from prono.services.points_service import PointsService, classify_result

logger = logging.getLogger(__name__)

# Matches that kicked off less than this long ago still show as upcoming
UPCOMING_GRACE = timedelta(hours=1)


class MatchServiceError(Exception):
    """Base exception for match service errors."""
    pass


class MatchNotFoundError(MatchServiceError):
    """Raised when match is not found."""
    pass


class InvalidMatchError(MatchServiceError):
    """Raised when match data is invalid."""
    pass


class MatchService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.match_repo = MatchRepository(db)
        self.points_service = PointsService(db)

    async def create_match(self, data: MatchCreate, now: datetime) -> Match:
        """
        Create a scheduled match.

        Validates:
        - Both team names are non-blank
        - The roster has at least one player, each with a name
        """
        team_a = data.team_a.strip()
        team_b = data.team_b.strip()
        if not team_a or not team_b:
            raise InvalidMatchError("team_a and team_b are required")

        if not data.players:
            raise InvalidMatchError("The player list must contain at least one player")

        players = []
        for player in data.players:
            name = player.name.strip()
            if not name:
                raise InvalidMatchError("Every player needs a name and a team (A or B)")
            players.append(Player(name=name, team=player.team))

        match = Match(
            _id=str(ObjectId()),
            team_a=team_a,
            team_b=team_b,
            match_date=as_utc(data.match_date),
            players=players,
            final_score=None,
            winner=None,
            is_finished=False,
            created_at=now,
            updated_at=None
        )
        await self.match_repo.create(match)

        logger.info("Created match %s: %s vs %s", match.id, match.team_a, match.team_b)
        return match

    async def get_match(self, match_id: str) -> Match:
        match = await self.match_repo.get_by_id(match_id)
        if not match:
            raise MatchNotFoundError(f"Match {match_id} not found")
        return match

    async def list_matches(
        self,
        now: datetime,
        upcoming: bool = False,
        finished: bool = False
    ) -> list[Match]:
        """
        Matches by kickoff date.

        upcoming: not finished and kicking off no earlier than an hour ago
        finished: finished matches only
        """
        is_finished: Optional[bool] = None
        starts_after: Optional[datetime] = None

        if upcoming:
            is_finished = False
            starts_after = now - UPCOMING_GRACE
        if finished:
            is_finished = True

        return await self.match_repo.find(is_finished=is_finished, starts_after=starts_after)

    async def record_result(
        self,
        match_id: str,
        final_score: FinalScore,
        now: datetime
    ) -> tuple[Match, dict[str, Any]]:
        """
        Store the final score, derive the winner and rescore predictions.

        Also used to correct a result: the winner is derived again and the
        whole match is recalculated.

        Returns the updated match and the recalculation summary.
        """
        if not await self.match_repo.get_by_id(match_id):
            raise MatchNotFoundError(f"Match {match_id} not found")

        best_scorer = (final_score.best_scorer or "").strip() or None
        score = FinalScore(
            team_a=final_score.team_a,
            team_b=final_score.team_b,
            best_scorer=best_scorer
        )
        winner = classify_result(score.team_a, score.team_b)

        match = await self.match_repo.set_result(match_id, score, winner, updated_at=now)
        if match is None:
            raise MatchNotFoundError(f"Match {match_id} not found")

        logger.info(
            "Result for match %s: %d-%d (%s)",
            match_id, score.team_a, score.team_b, winner
        )

        summary = await self.points_service.recalculate_match(match_id)
        return match, summary
