"""
Points service - scores predictions and keeps user totals in sync
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase

from prono.core.config import get_settings
from prono.models.match import Match, Outcome
from prono.models.prediction import Prediction
from prono.repositories.match_repository import MatchRepository
from prono.repositories.prediction_repository import PredictionRepository
from prono.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

EXACT_SCORE_POINTS = 3
BEST_SCORER_POINTS = 2
RESULT_POINTS = 1


def classify_result(score_a: int, score_b: int) -> Outcome:
    """Outcome of a score line: "A", "B" or "DRAW"."""
    if score_a > score_b:
        return "A"
    if score_b > score_a:
        return "B"
    return "DRAW"


def normalize_player_name(name: Optional[str]) -> str:
    """Case-folded, whitespace-collapsed name used for every player comparison."""
    if not name:
        return ""
    return " ".join(name.split()).casefold()


def calculate_points(prediction: Prediction, match: Match) -> int:
    """
    Points earned by a prediction once the match has a final score.

    Scoring (independent, additive):
    - 3 points: exact score
    - 2 points: best scorer (only when the admin recorded one)
    - 1 point: right outcome (A win, B win or draw)

    Max 6. A match without a final score is worth 0 for everyone.
    """
    final = match.final_score
    if final is None:
        return 0

    points = 0

    predicted = prediction.exact_score
    if predicted.team_a == final.team_a and predicted.team_b == final.team_b:
        points += EXACT_SCORE_POINTS

    recorded_scorer = normalize_player_name(final.best_scorer)
    if recorded_scorer and recorded_scorer == normalize_player_name(prediction.best_scorer):
        points += BEST_SCORER_POINTS

    if prediction.result == classify_result(final.team_a, final.team_b):
        points += RESULT_POINTS

    return points


class PointsService:
    """
    Rescoring of finished matches.

    User totals are a projection of prediction points: they are always
    recomputed as a full sum, never incremented.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.match_repo = MatchRepository(db)
        self.prediction_repo = PredictionRepository(db)
        self.user_repo = UserRepository(db)

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[Optional[AsyncIOMotorClientSession]]:
        """
        Transaction spanning all writes of a recalculation when enabled.

        Without transactions (standalone mongod, tests) yields None and the
        writes run one after another.
        """
        if not get_settings().mongodb_use_transactions:
            yield None
            return

        async with await self.db.client.start_session() as session:
            async with session.start_transaction():
                yield session

    async def recalculate_match(self, match_id: str) -> Dict[str, Any]:
        """
        Rescore every prediction of a match and refresh affected user totals.

        Unknown match or no final score yet: nothing happens. Running it
        twice on the same result gives the same points and totals.

        Returns:
            Dict with predictions_processed, points_distributed, users_affected
        """
        summary = {
            "predictions_processed": 0,
            "points_distributed": 0,
            "users_affected": 0,
        }

        match = await self.match_repo.get_by_id(match_id)
        if match is None or match.final_score is None:
            logger.debug("Skipping recalculation for match %s: no final score", match_id)
            return summary

        try:
            async with self._unit_of_work() as session:
                predictions = await self.prediction_repo.get_predictions_for_match(
                    match_id, session=session
                )

                users_affected = set()
                for prediction in predictions:
                    points = calculate_points(prediction, match)
                    await self.prediction_repo.set_points(prediction.id, points, session=session)

                    summary["predictions_processed"] += 1
                    summary["points_distributed"] += points
                    users_affected.add(prediction.user_id)

                await self._refresh_totals(sorted(users_affected), session=session)
                summary["users_affected"] = len(users_affected)
        except Exception:
            logger.exception("Recalculation failed for match %s", match_id)
            raise

        logger.info(
            "Recalculated match %s: %d predictions, %d points, %d users",
            match_id,
            summary["predictions_processed"],
            summary["points_distributed"],
            summary["users_affected"],
        )
        return summary

    async def recalculate_all_totals(self) -> Dict[str, Any]:
        """
        Recompute total_points for every user from their predictions.

        Maintenance action for when totals are suspected to have drifted
        (e.g. a recalculation interrupted by a storage error).
        """
        user_ids = await self.user_repo.list_ids()

        async with self._unit_of_work() as session:
            await self._refresh_totals(user_ids, session=session)

        logger.info("Recalculated totals for %d users", len(user_ids))
        return {"users_processed": len(user_ids)}

    async def _refresh_totals(
        self,
        user_ids: list[str],
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> None:
        totals = await self.prediction_repo.sum_points_by_user(user_ids, session=session)
        for user_id, total in totals.items():
            await self.user_repo.set_total_points(user_id, total, session=session)
