"""
Unit tests for PointsService and the scoring functions
"""

import pytest

from prono.models.match import FinalScore
from prono.services.points_service import (
    PointsService,
    calculate_points,
    classify_result,
    normalize_player_name
)
from tests.factories import (
    insert_match,
    insert_prediction,
    insert_user,
    make_match,
    make_prediction,
    make_user
)


class TestClassifyResult:
    """Outcome of a score line."""

    @pytest.mark.parametrize("score_a, score_b, expected", [
        (2, 1, "A"),
        (5, 0, "A"),
        (0, 1, "B"),
        (3, 4, "B"),
        (0, 0, "DRAW"),
        (2, 2, "DRAW"),
    ])
    def test_classify(self, score_a, score_b, expected):
        assert classify_result(score_a, score_b) == expected

    def test_classify_matches_comparison(self):
        for a in range(6):
            for b in range(6):
                outcome = classify_result(a, b)
                assert (outcome == "A") == (a > b)
                assert (outcome == "B") == (b > a)
                assert (outcome == "DRAW") == (a == b)


class TestNormalizePlayerName:

    def test_case_and_whitespace_are_ignored(self):
        assert normalize_player_name("  Sadio   MANÉ ") == normalize_player_name("Sadio Mané")

    def test_empty_values(self):
        assert normalize_player_name(None) == ""
        assert normalize_player_name("   ") == ""


class TestCalculatePoints:
    """Test suite for the scoring rules."""

    def test_perfect_prediction(self):
        """Exact score + best scorer + outcome = 6 points."""
        match = make_match(final_score=FinalScore(team_a=2, team_b=1, best_scorer="X"), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 2, 1, best_scorer="X")

        assert calculate_points(prediction, match) == 6

    def test_outcome_only(self):
        """Right winner, wrong score and scorer = 1 point."""
        match = make_match(final_score=FinalScore(team_a=2, team_b=1, best_scorer="X"), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 1, 0, best_scorer="Y")

        assert calculate_points(prediction, match) == 1

    def test_draw_with_different_score(self):
        """Predicted 2-2 for a 1-1 draw = outcome point only."""
        match = make_match(final_score=FinalScore(team_a=1, team_b=1, best_scorer="X"), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 2, 2, best_scorer="Y")

        assert calculate_points(prediction, match) == 1

    def test_match_not_finished(self):
        """No final score = 0 points whatever the prediction."""
        match = make_match(final_score=None)
        prediction = make_prediction("u1", match.id, 2, 1, best_scorer="Achraf Hakimi")

        assert calculate_points(prediction, match) == 0

    def test_exact_score_alone(self):
        """The exact-score award does not depend on the outcome award."""
        match = make_match(final_score=FinalScore(team_a=2, team_b=1, best_scorer="X"), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 2, 1, best_scorer="Y", result="DRAW")

        assert calculate_points(prediction, match) == 3

    def test_best_scorer_alone(self):
        match = make_match(final_score=FinalScore(team_a=2, team_b=1, best_scorer="X"), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 0, 3, best_scorer="X")

        assert calculate_points(prediction, match) == 2

    def test_nothing_right(self):
        match = make_match(final_score=FinalScore(team_a=2, team_b=1, best_scorer="X"), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 0, 0, best_scorer="Y")

        assert calculate_points(prediction, match) == 0

    def test_no_recorded_best_scorer(self):
        """Without a recorded scorer nobody gets the 2 points."""
        match = make_match(final_score=FinalScore(team_a=0, team_b=0, best_scorer=None), players=["X", "Y"])
        prediction = make_prediction("u1", match.id, 0, 0, best_scorer="X")

        assert calculate_points(prediction, match) == 4

    def test_best_scorer_compared_case_insensitively(self):
        match = make_match(
            final_score=FinalScore(team_a=1, team_b=2, best_scorer="sadio mané"),
            players=["Achraf Hakimi", "Sadio Mané"]
        )
        prediction = make_prediction("u1", match.id, 0, 0, best_scorer="Sadio Mané")

        assert calculate_points(prediction, match) == 2


class TestRecalculateMatch:
    """Test suite for the recalculation of a finished match."""

    async def _setup_finished_match(self, test_db):
        match = await insert_match(
            test_db,
            make_match(
                "m1",
                final_score=FinalScore(team_a=2, team_b=1, best_scorer="Achraf Hakimi")
            )
        )
        for user_id in ("u1", "u2", "u3"):
            await insert_user(test_db, make_user(user_id))

        await insert_prediction(test_db, make_prediction("u1", "m1", 2, 1, best_scorer="Achraf Hakimi"))
        await insert_prediction(test_db, make_prediction("u2", "m1", 1, 0, best_scorer="Sadio Mané"))
        await insert_prediction(test_db, make_prediction("u3", "m1", 0, 2, best_scorer="Sadio Mané"))
        return match

    @pytest.mark.asyncio
    async def test_recalculate_assigns_points(self, test_db):
        await self._setup_finished_match(test_db)
        service = PointsService(test_db)

        result = await service.recalculate_match("m1")

        assert result == {
            "predictions_processed": 3,
            "points_distributed": 7,  # 6 + 1 + 0
            "users_affected": 3,
        }

        pick1 = await test_db["predictions"].find_one({"_id": "u1:m1"})
        pick2 = await test_db["predictions"].find_one({"_id": "u2:m1"})
        pick3 = await test_db["predictions"].find_one({"_id": "u3:m1"})
        assert pick1["points"] == 6
        assert pick2["points"] == 1
        assert pick3["points"] == 0

        user1 = await test_db["users"].find_one({"_id": "u1"})
        assert user1["total_points"] == 6

    @pytest.mark.asyncio
    async def test_recalculate_is_idempotent(self, test_db):
        await self._setup_finished_match(test_db)
        service = PointsService(test_db)

        await service.recalculate_match("m1")
        first_predictions = await test_db["predictions"].find({}, {"points": 1}).sort("_id", 1).to_list(length=None)
        first_users = await test_db["users"].find({}, {"total_points": 1}).sort("_id", 1).to_list(length=None)

        await service.recalculate_match("m1")
        second_predictions = await test_db["predictions"].find({}, {"points": 1}).sort("_id", 1).to_list(length=None)
        second_users = await test_db["users"].find({}, {"total_points": 1}).sort("_id", 1).to_list(length=None)

        assert first_predictions == second_predictions
        assert first_users == second_users

    @pytest.mark.asyncio
    async def test_total_is_full_sum_over_all_matches(self, test_db):
        """Totals include predictions on other matches and overwrite stale values."""
        await insert_user(test_db, make_user("u1", total_points=42))
        await insert_match(
            test_db,
            make_match("m1", final_score=FinalScore(team_a=1, team_b=1, best_scorer="Sadio Mané"))
        )
        # 1-1 exact score, wrong scorer, draw: 3 + 1
        await insert_prediction(test_db, make_prediction("u1", "m1", 1, 1, best_scorer="Achraf Hakimi"))
        # Already scored earlier on another match
        await insert_prediction(test_db, make_prediction("u1", "m0", 3, 0, points=2))

        await PointsService(test_db).recalculate_match("m1")

        user = await test_db["users"].find_one({"_id": "u1"})
        assert user["total_points"] == 6

    @pytest.mark.asyncio
    async def test_total_replaces_previous_value(self, test_db):
        """Two predictions worth 3 and 2 give a total of 5, whatever was stored."""
        await insert_user(test_db, make_user("u1", total_points=99))
        await insert_match(
            test_db,
            make_match("m1", final_score=FinalScore(team_a=2, team_b=1, best_scorer="Sadio Mané"))
        )
        # Exact score with a result field that disagrees: 3 points only
        await insert_prediction(
            test_db,
            make_prediction("u1", "m1", 2, 1, best_scorer="Achraf Hakimi", result="B")
        )
        await insert_prediction(test_db, make_prediction("u1", "m2", 0, 0, points=2))

        await PointsService(test_db).recalculate_match("m1")

        user = await test_db["users"].find_one({"_id": "u1"})
        assert user["total_points"] == 5

    @pytest.mark.asyncio
    async def test_recalculate_after_result_correction(self, test_db):
        await self._setup_finished_match(test_db)
        service = PointsService(test_db)
        await service.recalculate_match("m1")

        # Admin fixes the score to 1-0
        await test_db["matches"].update_one(
            {"_id": "m1"},
            {"$set": {"final_score": {"team_a": 1, "team_b": 0, "best_scorer": "Sadio Mané"}}}
        )
        await service.recalculate_match("m1")

        pick1 = await test_db["predictions"].find_one({"_id": "u1:m1"})
        pick2 = await test_db["predictions"].find_one({"_id": "u2:m1"})
        assert pick1["points"] == 1  # outcome only now
        assert pick2["points"] == 6  # 1-0 and Sadio Mané

        user2 = await test_db["users"].find_one({"_id": "u2"})
        assert user2["total_points"] == 6

    @pytest.mark.asyncio
    async def test_recalculate_unknown_match_is_noop(self, test_db):
        result = await PointsService(test_db).recalculate_match("missing")

        assert result["predictions_processed"] == 0
        assert result["users_affected"] == 0

    @pytest.mark.asyncio
    async def test_recalculate_unfinished_match_is_noop(self, test_db):
        await insert_match(test_db, make_match("m1"))
        await insert_user(test_db, make_user("u1", total_points=7))
        await insert_prediction(test_db, make_prediction("u1", "m1", 2, 1, points=0))

        result = await PointsService(test_db).recalculate_match("m1")

        assert result["predictions_processed"] == 0
        user = await test_db["users"].find_one({"_id": "u1"})
        assert user["total_points"] == 7

    @pytest.mark.asyncio
    async def test_totals_equal_sum_of_points(self, test_db):
        await self._setup_finished_match(test_db)
        await PointsService(test_db).recalculate_match("m1")

        users = await test_db["users"].find({}).to_list(length=None)
        for user in users:
            predictions = await test_db["predictions"].find({"user_id": user["_id"]}).to_list(length=None)
            assert user["total_points"] == sum(p["points"] for p in predictions)


class TestRecalculateAllTotals:

    @pytest.mark.asyncio
    async def test_recalculate_all_totals(self, test_db):
        await insert_user(test_db, make_user("u1", total_points=50))
        await insert_user(test_db, make_user("u2", total_points=3))
        await insert_prediction(test_db, make_prediction("u1", "m1", 1, 0, points=4))
        await insert_prediction(test_db, make_prediction("u1", "m2", 1, 0, points=1))

        result = await PointsService(test_db).recalculate_all_totals()

        assert result == {"users_processed": 2}
        user1 = await test_db["users"].find_one({"_id": "u1"})
        user2 = await test_db["users"].find_one({"_id": "u2"})
        assert user1["total_points"] == 5
        assert user2["total_points"] == 0  # no predictions
