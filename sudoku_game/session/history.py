"""Linear undo/redo history of grid snapshots."""

from __future__ import annotations
from typing import List, Optional, Tuple

from ..core.board import GRID_SIZE
from ..core.cell import Cell, PuzzleGrid

# A frozen grid: 81 (value, editable, is_error, is_hint, candidates) tuples
Snapshot = Tuple[Tuple[Optional[int], bool, bool, bool, Tuple[int, ...]], ...]


def take_snapshot(grid: PuzzleGrid) -> Snapshot:
    return tuple(
        (cell.value, cell.editable, cell.is_error, cell.is_hint, tuple(sorted(cell.candidates)))
        for _, _, cell in grid.iter_cells()
    )


def restore_snapshot(snapshot: Snapshot) -> PuzzleGrid:
    grid = PuzzleGrid.empty()
    for idx, (value, editable, is_error, is_hint, candidates) in enumerate(snapshot):
        row, col = divmod(idx, GRID_SIZE)
        grid.rows[row][col] = Cell(
            value=value,
            editable=editable,
            is_error=is_error,
            is_hint=is_hint,
            candidates=set(candidates),
        )
    return grid


class History:
    """
    Ordered snapshots with a cursor.

    Pushing after an undo discards the snapshots ahead of the cursor.
    """

    def __init__(self, limit: Optional[int] = None):
        """
        Args:
            limit: Maximum snapshots kept; the oldest are dropped first.
        """
        self.limit = limit
        self._snapshots: List[Snapshot] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def index(self) -> int:
        return self._index

    def reset(self, grid: PuzzleGrid) -> None:
        self._snapshots = [take_snapshot(grid)]
        self._index = 0

    def push(self, grid: PuzzleGrid) -> None:
        del self._snapshots[self._index + 1:]
        self._snapshots.append(take_snapshot(grid))
        if self.limit is not None and len(self._snapshots) > self.limit:
            del self._snapshots[:len(self._snapshots) - self.limit]
        self._index = len(self._snapshots) - 1

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def current(self) -> Optional[PuzzleGrid]:
        if self._index < 0:
            return None
        return restore_snapshot(self._snapshots[self._index])

    def undo(self) -> Optional[PuzzleGrid]:
        if not self.can_undo():
            return None
        self._index -= 1
        return restore_snapshot(self._snapshots[self._index])

    def redo(self) -> Optional[PuzzleGrid]:
        if not self.can_redo():
            return None
        self._index += 1
        return restore_snapshot(self._snapshots[self._index])
