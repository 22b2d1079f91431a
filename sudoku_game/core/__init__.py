"""Core module for grid representation and constraint checking."""

from .board import SudokuBoard, GRID_SIZE, BOX_SIZE, EMPTY
from .cell import Cell, PuzzleGrid
from .validator import (
    is_valid_placement,
    validate_cell_value,
    is_grid_complete,
    available_digits,
    find_conflicts,
    is_valid_solution,
    matches_solution,
)

__all__ = [
    "SudokuBoard",
    "GRID_SIZE",
    "BOX_SIZE",
    "EMPTY",
    "Cell",
    "PuzzleGrid",
    "is_valid_placement",
    "validate_cell_value",
    "is_grid_complete",
    "available_digits",
    "find_conflicts",
    "is_valid_solution",
    "matches_solution",
]
