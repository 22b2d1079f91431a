"""Unit tests for constraint checks."""

import pytest
from sudoku_game.core.board import SudokuBoard
from sudoku_game.core.cell import PuzzleGrid
from sudoku_game.core.validator import (
    is_valid_placement,
    validate_cell_value,
    is_grid_complete,
    available_digits,
    find_conflicts,
    matches_solution,
)


class TestIsValidPlacement:
    """Tests for checks against raw digit grids."""

    def test_row_column_box_conflicts(self):
        """A digit already in the row, column or box is rejected."""
        board = SudokuBoard()
        board.set(0, 0, 5)

        assert not is_valid_placement(board, 0, 5, 5)
        assert not is_valid_placement(board, 5, 0, 5)
        assert not is_valid_placement(board, 1, 1, 5)
        assert is_valid_placement(board, 0, 5, 7)
        assert is_valid_placement(board, 4, 4, 5)

    def test_cell_itself_is_excluded(self):
        """A digit already written at the tested cell does not clash with itself."""
        board = SudokuBoard()
        board.set(3, 3, 8)
        assert is_valid_placement(board, 3, 3, 8)

    def test_accepts_arrays_and_lists(self):
        """Raw numpy arrays and nested lists work as grids."""
        rows = [[0] * 9 for _ in range(9)]
        rows[8][8] = 2
        assert not is_valid_placement(rows, 8, 0, 2)
        assert not is_valid_placement(SudokuBoard.from_2d_list(rows).grid, 6, 6, 2)
        assert is_valid_placement(rows, 0, 0, 2)

    def test_out_of_range_digit(self):
        """Digits outside 1-9 are never valid."""
        board = SudokuBoard()
        assert not is_valid_placement(board, 0, 0, 0)
        assert not is_valid_placement(board, 0, 0, 10)

    def test_does_not_mutate(self, solved_string):
        """Checking leaves the grid untouched."""
        board = SudokuBoard.from_string(solved_string)
        before = board.to_string()
        is_valid_placement(board, 0, 0, 1)
        assert board.to_string() == before


class TestValidateCellValue:
    """Tests for checks against interactive grids."""

    def test_placement_scenario(self, empty_grid):
        """5 at (0,0) blocks its row and box, not a different digit."""
        assert validate_cell_value(empty_grid, 0, 0, 5)
        empty_grid[0][0].value = 5

        assert not validate_cell_value(empty_grid, 0, 1, 5)
        assert not validate_cell_value(empty_grid, 1, 1, 5)
        assert validate_cell_value(empty_grid, 1, 1, 6)

    def test_column_conflict(self, empty_grid):
        """Same digit in the column is rejected."""
        empty_grid[0][0].value = 1
        assert not validate_cell_value(empty_grid, 1, 0, 1)
        assert not validate_cell_value(empty_grid, 8, 0, 1)

    def test_box_cells_sharing_a_line_are_still_caught(self, empty_grid):
        """Box neighbours on the same row or column are caught by the line scans."""
        empty_grid[1][1].value = 4
        assert not validate_cell_value(empty_grid, 1, 2, 4)
        assert not validate_cell_value(empty_grid, 2, 1, 4)

    def test_clearing_always_valid(self, empty_grid):
        """An empty value never conflicts."""
        empty_grid[0][0].value = 5
        empty_grid[0][1].value = 5
        assert validate_cell_value(empty_grid, 0, 1, None)
        assert validate_cell_value(empty_grid, 0, 1, 0)

    def test_existing_value_does_not_clash_with_itself(self, empty_grid):
        """The cell under test is excluded from every scan."""
        empty_grid[4][4].value = 9
        assert validate_cell_value(empty_grid, 4, 4, 9)

    def test_agrees_with_raw_check(self, solved_string):
        """Both checkers agree on every cell of a partially cleared solution."""
        board = SudokuBoard.from_string(solved_string)
        for i in range(0, 9, 2):
            board.clear(i, (i * 4) % 9)
        grid = PuzzleGrid.from_board(board)

        for row in range(9):
            for col in range(9):
                for digit in range(1, 10):
                    assert validate_cell_value(grid, row, col, digit) == \
                        is_valid_placement(board, row, col, digit)


class TestGridQueries:
    """Tests for completion and digit availability."""

    def test_complete_grid(self, solved_string):
        """A filled error-free grid is complete."""
        grid = PuzzleGrid.from_string(solved_string)
        assert is_grid_complete(grid)

    def test_empty_cell_means_incomplete(self, solved_string):
        """One empty cell is enough to be incomplete."""
        grid = PuzzleGrid.from_string(solved_string)
        grid[8][8].value = None
        assert not is_grid_complete(grid)

    def test_error_cell_means_incomplete(self, solved_string):
        """An error-flagged cell blocks completion."""
        grid = PuzzleGrid.from_string(solved_string)
        grid[2][3].is_error = True
        assert not is_grid_complete(grid)

    def test_completion_only_checks_flags(self, empty_grid):
        """Completion relies on error flags, not on re-validating values."""
        for _, _, cell in empty_grid.iter_cells():
            cell.value = 1
        assert is_grid_complete(empty_grid)

    def test_available_digits_empty_grid(self, empty_grid):
        """Every digit is available on an empty grid."""
        assert available_digits(empty_grid) == {d: True for d in range(1, 10)}

    def test_available_digits_is_global(self, empty_grid):
        """A single occurrence anywhere marks a digit unavailable."""
        empty_grid[7][2].value = 3
        available = available_digits(empty_grid)
        assert available[3] is False
        assert all(available[d] for d in range(1, 10) if d != 3)

    def test_find_conflicts(self, empty_grid):
        """Both cells of a clashing pair are reported."""
        empty_grid[0][0].value = 6
        empty_grid[0][8].value = 6
        empty_grid[5][5].value = 6
        assert find_conflicts(empty_grid) == {(0, 0), (0, 8)}

    def test_matches_solution(self, solved_string):
        """Filled cells must equal the solution."""
        solution = SudokuBoard.from_string(solved_string)
        grid = PuzzleGrid.from_board(solution)
        grid[0][0].value = None
        assert matches_solution(grid, solution)

        grid[0][1].value = 9
        assert not matches_solution(grid, solution)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
