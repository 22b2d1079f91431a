"""Generator module for creating Sudoku puzzles."""

from .generator import PuzzleGenerator, Difficulty, fisher_yates_shuffle, generate_puzzle

__all__ = ["PuzzleGenerator", "Difficulty", "fisher_yates_shuffle", "generate_puzzle"]
