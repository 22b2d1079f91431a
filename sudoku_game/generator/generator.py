"""Sudoku puzzle generator with five difficulty tiers."""

from __future__ import annotations
import random
from enum import Enum
from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from tqdm import tqdm

from ..core.board import SudokuBoard, GRID_SIZE
from ..core.cell import PuzzleGrid
from ..core.validator import is_valid_placement

T = TypeVar("T")

TOTAL_CELLS = GRID_SIZE * GRID_SIZE


class Difficulty(Enum):
    """Difficulty tiers for generated puzzles."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    HARD = "hard"
    EXPERT = "expert"
    ADVANCED = "advanced"

    @property
    def removal_range(self) -> Tuple[int, int]:
        """Inclusive range of cells blanked for this difficulty (min, max)."""
        ranges = {
            Difficulty.BEGINNER: (41, 45),      # 36-40 visible
            Difficulty.INTERMEDIATE: (45, 48),  # 33-36 visible
            Difficulty.HARD: (49, 52),          # 29-32 visible
            Difficulty.EXPERT: (53, 56),        # 25-28 visible
            Difficulty.ADVANCED: (57, 60),      # 21-24 visible
        }
        return ranges[self]

    @property
    def visible_range(self) -> Tuple[int, int]:
        """Inclusive range of cells left filled (min, max)."""
        low, high = self.removal_range
        return TOTAL_CELLS - high, TOTAL_CELLS - low

    @classmethod
    def parse(cls, name: Union[str, Difficulty], strict: bool = False) -> Difficulty:
        """
        Resolve a difficulty name.

        Unknown names fall back to BEGINNER unless strict is set, in which
        case a ValueError is raised.
        """
        if isinstance(name, Difficulty):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            if strict:
                choices = ", ".join(d.value for d in cls)
                raise ValueError(f"Unknown difficulty {name!r} (expected one of: {choices})")
            return cls.BEGINNER


def fisher_yates_shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of items.

    Walks i from the last index down to 1 and swaps it with a random
    index in [0, i].
    """
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


class PuzzleGenerator:
    """
    Generator for playable Sudoku puzzles.

    Algorithm:
    1. Build a complete solution with randomized backtracking
    2. Copy it into interactive cells
    3. Blank a difficulty-dependent number of randomly chosen cells

    The carved puzzle is not checked for a unique solution.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = random.Random(seed)

    def generate_puzzle(self, difficulty: Union[str, Difficulty] = Difficulty.BEGINNER) -> PuzzleGrid:
        puzzle, _ = self.generate_with_solution(difficulty)
        return puzzle

    def generate_with_solution(
        self, difficulty: Union[str, Difficulty] = Difficulty.BEGINNER
    ) -> Tuple[PuzzleGrid, SudokuBoard]:
        """
        Generate a puzzle along with the solution it was carved from.

        The solution is what a session keeps for hint lookups.
        """
        solution = self.generate_solution()
        puzzle = self.create_puzzle(solution, difficulty)
        return puzzle, solution

    def generate_batch(
        self,
        count: int,
        difficulty: Union[str, Difficulty] = Difficulty.BEGINNER,
        show_progress: bool = False,
    ) -> List[Tuple[PuzzleGrid, SudokuBoard]]:
        """Generate several (puzzle, solution) pairs of the same difficulty."""
        label = Difficulty.parse(difficulty).value
        return [
            self.generate_with_solution(difficulty)
            for _ in tqdm(range(count), desc=f"Generating {label}", disable=not show_progress)
        ]

    def generate_solution(self) -> SudokuBoard:
        """Generate a complete valid board using randomized backtracking."""
        board = SudokuBoard()
        self._fill_grid(board)
        return board

    def _fill_grid(self, board: SudokuBoard) -> bool:
        """
        Fill the first empty cell (row-major) and recurse.

        Returns True once no empty cell is left. A failed branch restores
        the cell to empty before the next candidate is tried.
        """
        empty = board.find_empty_cell()
        if empty is None:
            return True

        row, col = empty
        for digit in fisher_yates_shuffle(range(1, GRID_SIZE + 1), self.rng):
            if is_valid_placement(board, row, col, digit):
                board.set(row, col, digit)
                if self._fill_grid(board):
                    return True
                board.clear(row, col)

        return False

    def cells_to_remove(self, difficulty: Union[str, Difficulty]) -> int:
        """Random number of cells to blank, inclusive of both range ends."""
        low, high = Difficulty.parse(difficulty).removal_range
        return self.rng.randint(low, high)

    def create_puzzle(self, solution: SudokuBoard, difficulty: Union[str, Difficulty]) -> PuzzleGrid:
        """
        Carve a playable puzzle out of a complete solution.

        Cells that keep their value become non-editable givens.
        """
        puzzle = PuzzleGrid.from_board(solution, editable=True)

        positions = fisher_yates_shuffle(
            [(i // GRID_SIZE, i % GRID_SIZE) for i in range(TOTAL_CELLS)],
            self.rng,
        )
        for row, col in positions[:self.cells_to_remove(difficulty)]:
            puzzle[row][col].value = None

        for _, _, cell in puzzle.iter_cells():
            cell.editable = cell.is_empty

        return puzzle


def generate_puzzle(difficulty: Union[str, Difficulty] = Difficulty.BEGINNER) -> PuzzleGrid:
    """Generate a puzzle with a fresh unseeded generator."""
    return PuzzleGenerator().generate_puzzle(difficulty)
