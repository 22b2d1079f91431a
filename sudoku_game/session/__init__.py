"""Game session state, undo history, settings and score records."""

from .settings import GameSettings
from .history import History
from .records import RecordStore, ScoreRecord
from .game import GameSession, Hint

__all__ = ["GameSettings", "History", "RecordStore", "ScoreRecord", "GameSession", "Hint"]
