"""Constraint checks for raw boards and interactive puzzle grids."""

from __future__ import annotations
from typing import Dict, Optional, Set, Tuple

from .board import GRID_SIZE, BOX_SIZE, GridLike, SudokuBoard, as_array
from .cell import PuzzleGrid


def is_valid_placement(grid: GridLike, row: int, col: int, digit: int) -> bool:
    """
    Check if placing a digit at (row, col) is valid.

    The cell at (row, col) itself is not scanned, so the check gives the
    same answer whether or not the digit is already written there.

    Args:
        grid: A SudokuBoard, (9, 9) array or nested list of digits.
        row: Row index.
        col: Column index.
        digit: Digit to check (1-9).

    Returns:
        True if the digit does not clash with its row, column or box.
    """
    if digit < 1 or digit > GRID_SIZE:
        return False

    values = as_array(grid)

    for x in range(GRID_SIZE):
        if x != col and values[row, x] == digit:
            return False

    for x in range(GRID_SIZE):
        if x != row and values[x, col] == digit:
            return False

    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    for i in range(box_row, box_row + BOX_SIZE):
        for j in range(box_col, box_col + BOX_SIZE):
            if (i, j) != (row, col) and values[i, j] == digit:
                return False

    return True


def validate_cell_value(grid: PuzzleGrid, row: int, col: int, value: Optional[int]) -> bool:
    """
    Check a player's value against the other cells of an interactive grid.

    Clearing a cell (None or 0) is always accepted. The box scan only
    compares cells that differ from (row, col) in both coordinates; the
    remaining box cells share a row or column with it and are already
    covered by the row and column scans.
    """
    if not value:
        return True

    for x in range(GRID_SIZE):
        if x != col and grid[row][x].value == value:
            return False

    for x in range(GRID_SIZE):
        if x != row and grid[x][col].value == value:
            return False

    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    for i in range(box_row, box_row + BOX_SIZE):
        for j in range(box_col, box_col + BOX_SIZE):
            if i != row and j != col and grid[i][j].value == value:
                return False

    return True


def is_grid_complete(grid: PuzzleGrid) -> bool:
    """True iff every cell holds a value and none is flagged as an error."""
    for _, _, cell in grid.iter_cells():
        if cell.is_empty or cell.is_error:
            return False
    return True


def available_digits(grid: PuzzleGrid) -> Dict[int, bool]:
    """
    Map each digit 1-9 to whether it is still absent from the grid.

    This is a global count used to gray out the digit palette, not a
    per-unit candidate list.
    """
    available = {digit: True for digit in range(1, GRID_SIZE + 1)}
    for _, _, cell in grid.iter_cells():
        if not cell.is_empty:
            available[cell.value] = False
    return available


def find_conflicts(grid: PuzzleGrid) -> Set[Tuple[int, int]]:
    """Positions of filled cells whose value clashes with another cell."""
    return {
        (i, j)
        for i, j, cell in grid.iter_cells()
        if not cell.is_empty and not validate_cell_value(grid, i, j, cell.value)
    }


def is_valid_solution(board: SudokuBoard) -> bool:
    """Every row, column and box contains each digit exactly once."""
    return board.is_solved()


def matches_solution(puzzle: PuzzleGrid, solution: SudokuBoard) -> bool:
    """
    Check that every filled puzzle cell equals the solution at that position.

    Args:
        puzzle: The interactive grid.
        solution: The complete board it was carved from.
    """
    for i, j, cell in puzzle.iter_cells():
        if not cell.is_empty and cell.value != solution.get(i, j):
            return False
    return True
