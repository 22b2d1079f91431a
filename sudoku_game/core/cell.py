"""Interactive cells and the puzzle grid the player edits."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

import numpy as np

from .board import GRID_SIZE, EMPTY, SudokuBoard, format_grid


@dataclass
class Cell:
    """A single playable cell."""
    value: Optional[int] = None
    editable: bool = True
    is_error: bool = False
    is_hint: bool = False
    candidates: Set[int] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """True if the cell holds no value."""
        return self.value is None

    def copy(self) -> Cell:
        """Copy the cell, including its candidate set."""
        return Cell(
            value=self.value,
            editable=self.editable,
            is_error=self.is_error,
            is_hint=self.is_hint,
            candidates=set(self.candidates),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "value": self.value,
            "editable": self.editable,
            "is_error": self.is_error,
            "is_hint": self.is_hint,
            "candidates": sorted(self.candidates),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Cell:
        """Create a cell from a dictionary; missing flags take defaults."""
        return cls(
            value=data.get("value"),
            editable=data.get("editable", True),
            is_error=data.get("is_error", False),
            is_hint=data.get("is_hint", False),
            candidates=set(data.get("candidates", [])),
        )


class PuzzleGrid:
    """
    A 9x9 matrix of Cells.

    Rows are plain lists, so ``grid[row][col]`` addresses a cell directly.
    """

    def __init__(self, rows: List[List[Cell]]):
        if len(rows) != GRID_SIZE or any(len(r) != GRID_SIZE for r in rows):
            raise ValueError(f"Puzzle grid must be {GRID_SIZE}x{GRID_SIZE}")
        self.rows = rows

    @classmethod
    def empty(cls) -> PuzzleGrid:
        """Create a grid of 81 empty editable cells."""
        return cls([[Cell() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)])

    @classmethod
    def from_board(cls, board: SudokuBoard, editable: bool = True) -> PuzzleGrid:
        """
        Copy a raw board into cells.

        Every cell gets the given editability; empty board cells become None.
        """
        rows = []
        for i in range(GRID_SIZE):
            row = []
            for j in range(GRID_SIZE):
                value = board.get(i, j)
                row.append(Cell(value=value or None, editable=editable))
            rows.append(row)
        return cls(rows)

    @classmethod
    def from_string(cls, s: str) -> PuzzleGrid:
        """Build a grid from a puzzle string; filled cells become givens."""
        grid = cls.from_board(SudokuBoard.from_string(s))
        for _, _, cell in grid.iter_cells():
            cell.editable = cell.is_empty
        return grid

    def __getitem__(self, row: int) -> List[Cell]:
        return self.rows[row]

    def cell(self, row: int, col: int) -> Cell:
        """Get the cell at (row, col)."""
        return self.rows[row][col]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for i, row in enumerate(self.rows):
            for j, cell in enumerate(row):
                yield i, j, cell

    def values(self) -> np.ndarray:
        """Cell values as a (9, 9) int array, 0 for empty."""
        return np.array(
            [[cell.value or EMPTY for cell in row] for row in self.rows],
            dtype=np.int32,
        )

    def to_board(self) -> SudokuBoard:
        """Copy the cell values into a raw board."""
        return SudokuBoard(self.values())

    def count_filled(self) -> int:
        """Count the number of cells holding a value."""
        return sum(1 for _, _, cell in self.iter_cells() if not cell.is_empty)

    def empty_positions(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions."""
        return [(i, j) for i, j, cell in self.iter_cells() if cell.is_empty]

    def givens_are_filled(self) -> bool:
        """True if every non-editable cell carries a value."""
        return all(cell.editable or not cell.is_empty for _, _, cell in self.iter_cells())

    def copy(self) -> PuzzleGrid:
        """Create a deep copy of the grid."""
        return PuzzleGrid([[cell.copy() for cell in row] for row in self.rows])

    def to_dict(self) -> List[List[Dict[str, Any]]]:
        """Convert to nested lists of cell dictionaries."""
        return [[cell.to_dict() for cell in row] for row in self.rows]

    @classmethod
    def from_dict(cls, data: List[List[Dict[str, Any]]]) -> PuzzleGrid:
        """Create a grid from nested lists of cell dictionaries."""
        return cls([[Cell.from_dict(c) for c in row] for row in data])

    def to_string(self) -> str:
        """Compact 81-character form, '0' for empty cells."""
        return ''.join(str(v) for v in self.values().flatten())

    def __str__(self) -> str:
        """Pretty-print the grid."""
        return format_grid(self.values())

    def __repr__(self) -> str:
        return f"PuzzleGrid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleGrid):
            return False
        return self.rows == other.rows
