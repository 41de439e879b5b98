from .errors import DuplicateRecordError
from .match_repository import MatchRepository
from .prediction_repository import PredictionRepository
from .user_repository import UserRepository

__all__ = [
    "DuplicateRecordError",
    "MatchRepository",
    "PredictionRepository",
    "UserRepository",
]
