"""Raw digit grid used for solutions and during generation."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Union

GRID_SIZE = 9
BOX_SIZE = 3
EMPTY = 0

GridLike = Union["SudokuBoard", np.ndarray, List[List[int]]]


class SudokuBoard:
    """
    A 9x9 grid of digits backed by a numpy array.

    0 marks an empty cell, 1-9 are placed digits. Solution grids are
    SudokuBoards that are fully populated and conflict-free.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Args:
            grid: Optional initial (9, 9) grid. If None, creates an empty board.
        """
        self.size = GRID_SIZE
        self.box_size = BOX_SIZE

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (GRID_SIZE, GRID_SIZE):
                raise ValueError(f"Grid shape must be ({GRID_SIZE}, {GRID_SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > GRID_SIZE:
                raise ValueError(f"Grid values must be 0-{GRID_SIZE}")
            self.grid = grid.astype(np.int32)
        else:
            self.grid = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.grid.copy())

    def get(self, row: int, col: int) -> int:
        """Get value at (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at (row, col). Use 0 to clear."""
        if value < 0 or value > GRID_SIZE:
            raise ValueError(f"Value must be 0-{GRID_SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at (row, col)."""
        self.grid[row, col] = EMPTY

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == EMPTY

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                         box_col:box_col + BOX_SIZE].flatten()

    def find_empty_cell(self) -> Optional[Tuple[int, int]]:
        """Return the first empty position in row-major order, or None."""
        empty = np.argwhere(self.grid == EMPTY)
        if len(empty) == 0:
            return None
        return int(empty[0][0]), int(empty[0][1])

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == EMPTY))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != EMPTY))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check that no row, column or box holds a digit twice.

        Empty cells are ignored, so a partially filled board can be valid.
        """
        units = [self.get_row(i) for i in range(GRID_SIZE)]
        units += [self.get_col(j) for j in range(GRID_SIZE)]
        units += [
            self.get_box(r, c)
            for r in range(0, GRID_SIZE, BOX_SIZE)
            for c in range(0, GRID_SIZE, BOX_SIZE)
        ]
        for unit in units:
            filled = unit[unit != EMPTY]
            if len(filled) != len(np.unique(filled)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the board is completely and correctly filled."""
        return self.is_complete() and self.is_valid()

    def to_list(self) -> List[List[int]]:
        """Convert the board to a nested list of ints."""
        return self.grid.tolist()

    def to_string(self) -> str:
        """Compact 81-character form, '0' for empty cells."""
        return ''.join(str(v) for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81-character string.

        '0' or '.' mark empty cells, '1'-'9' are digits.
        """
        s = s.strip()
        if len(s) != GRID_SIZE * GRID_SIZE:
            raise ValueError(f"String length must be {GRID_SIZE * GRID_SIZE}, got {len(s)}")

        values = []
        for c in s:
            if c in '0.':
                values.append(EMPTY)
            elif c.isdigit():
                values.append(int(c))
            else:
                raise ValueError(f"Invalid character in puzzle string: {c!r}")
        return cls(np.array(values, dtype=np.int32).reshape(GRID_SIZE, GRID_SIZE))

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        return cls(np.array(data, dtype=np.int32))

    def __str__(self) -> str:
        """Pretty-print the board."""
        return format_grid(self.grid)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())


def as_array(grid: GridLike) -> np.ndarray:
    """Normalise a board, array or nested list to a (9, 9) int array."""
    if isinstance(grid, SudokuBoard):
        return grid.grid
    return np.asarray(grid, dtype=np.int32)


def format_grid(values: np.ndarray) -> str:
    """Pretty-print a (9, 9) value array with box separators."""
    lines = []
    horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

    for i in range(GRID_SIZE):
        if i % BOX_SIZE == 0:
            lines.append(horizontal_sep)

        row_str = '|'
        for j in range(GRID_SIZE):
            val = values[i][j]
            row_str += ' .' if val == EMPTY else f' {val}'
            if (j + 1) % BOX_SIZE == 0:
                row_str += ' |'
        lines.append(row_str)

    lines.append(horizontal_sep)
    return '\n'.join(lines)
