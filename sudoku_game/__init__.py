"""Sudoku puzzle engine: generation, constraint checks and game sessions."""

from .core import SudokuBoard, Cell, PuzzleGrid
from .generator import PuzzleGenerator, Difficulty, generate_puzzle
from .session import GameSession, GameSettings, RecordStore, ScoreRecord

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "Cell",
    "PuzzleGrid",
    "PuzzleGenerator",
    "Difficulty",
    "generate_puzzle",
    "GameSession",
    "GameSettings",
    "RecordStore",
    "ScoreRecord",
]
