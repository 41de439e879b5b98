from .user import User, UserCreate
from .match import Match, MatchCreate, FinalScore, Player, Outcome
from .prediction import Prediction, PredictionCreate, PredictedScore
from .leaderboard import LeaderboardEntry

__all__ = [
    "User",
    "UserCreate",
    "Match",
    "MatchCreate",
    "FinalScore",
    "Player",
    "Outcome",
    "Prediction",
    "PredictionCreate",
    "PredictedScore",
    "LeaderboardEntry",
]
