"""A single-player game session driving the puzzle engine."""

from __future__ import annotations
import time
from typing import Callable, Dict, NamedTuple, Optional, Tuple, Union

from ..core.board import GRID_SIZE, SudokuBoard
from ..core.cell import PuzzleGrid
from ..core.validator import (
    available_digits,
    find_conflicts,
    is_grid_complete,
    validate_cell_value,
)
from ..generator import Difficulty, PuzzleGenerator
from .history import History
from .records import RecordStore, ScoreRecord
from .settings import GameSettings


class Hint(NamedTuple):
    row: int
    col: int
    value: int


class GameSession:
    """
    Owns the grid, solution, score and history of the game being played.

    The engine functions stay stateless; every player action goes through
    this object, which re-derives error flags, digit availability and the
    completion flag after each change. Actions that are not allowed (editing
    a given, playing a finished or paused game) are ignored and return a
    falsy value.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        generator: Optional[PuzzleGenerator] = None,
        record_store: Optional[RecordStore] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            settings: Scoring and hint configuration.
            generator: Puzzle source; pass a seeded one for reproducible games.
            record_store: Where finished games are saved. None disables saving.
            clock: Returns the current time in seconds.
        """
        self.settings = settings or GameSettings()
        self.generator = generator or PuzzleGenerator()
        self.record_store = record_store
        self.clock = clock

        self.grid: Optional[PuzzleGrid] = None
        self.initial_grid: Optional[PuzzleGrid] = None
        self.solution: Optional[SudokuBoard] = None
        self.difficulty = Difficulty.BEGINNER
        self.score = 0
        self.hints_remaining = 0
        self.start_time = 0.0
        self.end_time: Optional[float] = None
        self.is_complete = False
        self.is_paused = False
        self.available_numbers: Dict[int, bool] = {}
        self.history = History(limit=self.settings.history_limit)
        self.selected_cell: Optional[Tuple[int, int]] = None
        self.last_record: Optional[ScoreRecord] = None

        self._paused_at: Optional[float] = None
        self._paused_total = 0.0

    @property
    def has_game(self) -> bool:
        return self.grid is not None

    @property
    def is_playable(self) -> bool:
        return self.has_game and not self.is_complete and not self.is_paused

    def new_game(self, difficulty: Union[str, Difficulty] = Difficulty.BEGINNER) -> PuzzleGrid:
        """Start a fresh game, discarding the current one."""
        self.difficulty = Difficulty.parse(difficulty)
        self.grid, self.solution = self.generator.generate_with_solution(self.difficulty)
        self.initial_grid = self.grid.copy()

        self.score = self.settings.base_score
        self.hints_remaining = self.settings.max_hints
        self.start_time = self.clock()
        self.end_time = None
        self.is_complete = False
        self.is_paused = False
        self.selected_cell = None
        self.last_record = None
        self._paused_at = None
        self._paused_total = 0.0

        self.available_numbers = available_digits(self.grid)
        self.history.reset(self.grid)
        return self.grid

    def update_cell(self, row: int, col: int, value: Optional[int]) -> bool:
        """
        Write a player's value into a cell. 0 or None clears it.

        Returns:
            True if the grid changed.
        """
        if not self.is_playable or not self.initial_grid[row][col].editable:
            return False
        if value and not 1 <= value <= GRID_SIZE:
            raise ValueError(f"Value must be 1-{GRID_SIZE} or empty, got {value}")

        cell = self.grid[row][col]
        cell.value = value or None
        cell.is_hint = False
        cell.candidates.clear()

        if cell.value is not None and not validate_cell_value(self.grid, row, col, cell.value):
            self.score -= self.settings.error_penalty

        self._refresh()
        self.history.push(self.grid)
        return True

    def toggle_candidate(self, row: int, col: int, digit: int) -> bool:
        """Add or remove a pencil mark on an empty editable cell."""
        if not self.is_playable or not 1 <= digit <= GRID_SIZE:
            return False
        cell = self.grid[row][col]
        if not cell.editable or not cell.is_empty:
            return False

        cell.candidates ^= {digit}
        self.history.push(self.grid)
        return True

    def get_hint(self) -> Optional[Hint]:
        """
        Reveal the solution digit of a random empty cell.

        Returns:
            The revealed position and value, or None when no hints remain
            or the grid has no empty cell.
        """
        if not self.is_playable or self.hints_remaining <= 0:
            return None

        empty = self.grid.empty_positions()
        if not empty:
            return None

        row, col = self.generator.rng.choice(empty)
        self.hints_remaining -= 1
        self.score -= self.settings.hint_penalty

        hint = Hint(row, col, self.solution.get(row, col))
        cell = self.grid[row][col]
        cell.value = hint.value
        cell.is_hint = True
        cell.candidates.clear()

        self._refresh()
        self.history.push(self.grid)
        return hint

    def undo(self) -> bool:
        return self._restore(self.history.undo() if self.is_playable else None)

    def redo(self) -> bool:
        return self._restore(self.history.redo() if self.is_playable else None)

    def select_cell(self, row: int, col: int) -> bool:
        if not self.has_game or not self.grid[row][col].editable:
            return False
        self.selected_cell = (row, col)
        return True

    def clear_selected_cell(self) -> bool:
        if self.selected_cell is None:
            return False
        return self.update_cell(*self.selected_cell, None)

    def check_solution(self) -> bool:
        return self.has_game and is_grid_complete(self.grid)

    def pause(self) -> None:
        if self.has_game and not self.is_complete and not self.is_paused:
            self.is_paused = True
            self._paused_at = self.clock()

    def resume(self) -> None:
        if self.is_paused:
            self._paused_total += self.clock() - self._paused_at
            self._paused_at = None
            self.is_paused = False

    def elapsed_seconds(self) -> int:
        """Whole seconds played, excluding pauses."""
        if not self.has_game:
            return 0
        if self.end_time is not None:
            end = self.end_time
        elif self._paused_at is not None:
            end = self._paused_at
        else:
            end = self.clock()
        return int(end - self.start_time - self._paused_total)

    def final_score(self) -> int:
        return self.score - self.elapsed_seconds()

    def _restore(self, grid: Optional[PuzzleGrid]) -> bool:
        if grid is None:
            return False
        self.grid = grid
        self._refresh()
        return True

    def _refresh(self) -> None:
        """Re-derive error flags, digit availability and completion."""
        conflicts = find_conflicts(self.grid)
        for i, j, cell in self.grid.iter_cells():
            cell.is_error = cell.editable and (i, j) in conflicts

        self.available_numbers = available_digits(self.grid)
        self.is_complete = is_grid_complete(self.grid)
        if self.is_complete:
            self._finish()

    def _finish(self) -> None:
        self.end_time = self.clock()
        self.selected_cell = None
        self.last_record = ScoreRecord.create(
            self.difficulty,
            score=self.final_score(),
            time_spent=self.elapsed_seconds(),
        )
        if self.record_store is not None:
            self.record_store.add_record(self.last_record)
