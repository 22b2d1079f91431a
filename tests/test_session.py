"""Tests for game sessions, settings and undo history."""

import json

import pytest
from sudoku_game.core.cell import PuzzleGrid
from sudoku_game.core.validator import available_digits
from sudoku_game.generator import Difficulty, PuzzleGenerator
from sudoku_game.session import GameSession, GameSettings, History


def make_session(clock, record_store=None, **settings):
    return GameSession(
        settings=GameSettings(**settings),
        generator=PuzzleGenerator(seed=5),
        record_store=record_store,
        clock=clock,
    )


def find_given(session):
    for i, j, cell in session.grid.iter_cells():
        if not cell.editable:
            return i, j
    raise AssertionError("no given cell")


def find_row_conflict(session):
    """An empty cell plus a digit given elsewhere in its row."""
    for i, j, cell in session.grid.iter_cells():
        if not cell.is_empty:
            continue
        for other in session.grid[i]:
            if not other.is_empty:
                return i, j, other.value
    raise AssertionError("no conflict candidate")


def solve_all(session):
    for row, col in session.grid.empty_positions():
        session.update_cell(row, col, session.solution.get(row, col))


class TestNewGame:
    """Tests for starting a game."""

    def test_initial_state(self, clock):
        """A new game resets score, hints and derived state."""
        session = make_session(clock)
        grid = session.new_game(Difficulty.HARD)

        assert session.has_game
        assert session.difficulty is Difficulty.HARD
        assert session.score == 1000
        assert session.hints_remaining == 3
        assert not session.is_complete
        assert session.solution.is_solved()
        assert 29 <= grid.count_filled() <= 32
        assert len(session.history) == 1
        assert set(session.available_numbers) == set(range(1, 10))

    def test_string_difficulty(self, clock):
        """Difficulty names are accepted."""
        session = make_session(clock)
        session.new_game("expert")
        assert session.difficulty is Difficulty.EXPERT

    def test_actions_without_game_are_ignored(self, clock):
        """Nothing happens before the first game."""
        session = GameSession(clock=clock)
        assert not session.update_cell(0, 0, 1)
        assert session.get_hint() is None
        assert not session.undo()
        assert not session.check_solution()
        assert session.elapsed_seconds() == 0


class TestUpdateCell:
    """Tests for player edits."""

    def test_givens_cannot_change(self, clock):
        """Editing a pre-filled cell is refused."""
        session = make_session(clock)
        session.new_game()
        row, col = find_given(session)
        value = session.grid[row][col].value

        assert not session.update_cell(row, col, 1)
        assert session.grid[row][col].value == value
        assert len(session.history) == 1

    def test_valid_edit(self, clock):
        """A correct digit is placed without an error flag."""
        session = make_session(clock)
        session.new_game()
        row, col = session.grid.empty_positions()[0]

        assert session.update_cell(row, col, session.solution.get(row, col))
        assert not session.grid[row][col].is_error
        assert len(session.history) == 2

    def test_conflict_flags_error_and_penalises(self, clock):
        """A clashing digit is flagged and costs the error penalty."""
        session = make_session(clock, error_penalty=10)
        session.new_game()
        row, col, value = find_row_conflict(session)

        session.update_cell(row, col, value)
        assert session.grid[row][col].is_error
        assert session.score == 990
        assert not session.check_solution()

    def test_clearing_removes_error(self, clock):
        """Clearing a clashing cell removes its error flag."""
        session = make_session(clock)
        session.new_game()
        row, col, value = find_row_conflict(session)

        session.update_cell(row, col, value)
        session.update_cell(row, col, 0)
        assert session.grid[row][col].value is None
        assert not session.grid[row][col].is_error

    def test_rejects_out_of_range_value(self, clock):
        """Digits above 9 raise."""
        session = make_session(clock)
        session.new_game()
        row, col = session.grid.empty_positions()[0]
        with pytest.raises(ValueError):
            session.update_cell(row, col, 10)

    def test_available_numbers_refresh(self, clock):
        """Availability is recomputed after each edit."""
        session = make_session(clock)
        session.new_game()
        row, col = session.grid.empty_positions()[0]
        digit = session.solution.get(row, col)
        session.update_cell(row, col, digit)
        assert session.available_numbers == available_digits(session.grid)
        assert session.available_numbers[digit] is False

    def test_candidates(self, clock):
        """Pencil marks toggle on empty cells and are cleared by a value."""
        session = make_session(clock)
        session.new_game()
        row, col = session.grid.empty_positions()[0]

        assert session.toggle_candidate(row, col, 4)
        assert session.toggle_candidate(row, col, 7)
        assert session.grid[row][col].candidates == {4, 7}
        assert session.toggle_candidate(row, col, 4)
        assert session.grid[row][col].candidates == {7}

        session.update_cell(row, col, session.solution.get(row, col))
        assert session.grid[row][col].candidates == set()
        assert not session.toggle_candidate(row, col, 3)

    def test_selection(self, clock):
        """Only editable cells can be selected and cleared."""
        session = make_session(clock)
        session.new_game()
        assert not session.select_cell(*find_given(session))

        row, col = session.grid.empty_positions()[0]
        assert session.select_cell(row, col)
        session.update_cell(row, col, 3)
        assert session.clear_selected_cell()
        assert session.grid[row][col].value is None


class TestCompletion:
    """Tests for finishing a game."""

    def test_solving_completes_and_saves(self, clock, record_store):
        """Filling every blank with the solution ends the game and stores a record."""
        session = make_session(clock, record_store=record_store)
        session.new_game(Difficulty.BEGINNER)
        clock.advance(120)

        solve_all(session)

        assert session.is_complete
        assert session.check_solution()
        assert session.end_time == clock.now
        assert session.final_score() == 1000 - 120

        records = record_store.get_scores(Difficulty.BEGINNER)
        assert len(records) == 1
        assert records[0].score == 880
        assert records[0].time_spent == 120
        assert records[0].difficulty == "beginner"

    def test_finished_game_is_frozen(self, clock):
        """No edits, hints or undo after completion."""
        session = make_session(clock)
        session.new_game()
        solve_all(session)

        row, col = next((i, j) for i, j, cell in session.grid.iter_cells() if cell.editable)
        assert not session.update_cell(row, col, None)
        assert session.get_hint() is None
        assert not session.undo()


class TestHints:
    """Tests for hints."""

    def test_hint_reveals_solution_digit(self, clock):
        """A hint fills an empty cell from the solution and costs points."""
        session = make_session(clock)
        session.new_game()
        empty_before = len(session.grid.empty_positions())

        hint = session.get_hint()
        assert hint is not None
        assert hint.value == session.solution.get(hint.row, hint.col)
        assert session.grid[hint.row][hint.col].value == hint.value
        assert session.grid[hint.row][hint.col].is_hint
        assert len(session.grid.empty_positions()) == empty_before - 1
        assert session.hints_remaining == 2
        assert session.score == 950

    def test_hints_run_out(self, clock):
        """After the last hint no more are given."""
        session = make_session(clock)
        session.new_game()
        for _ in range(3):
            assert session.get_hint() is not None
        assert session.get_hint() is None
        assert session.score == 850

    def test_no_hint_without_empty_cells(self, clock):
        """A grid with no blank cell gets no hint."""
        session = make_session(clock, max_hints=100)
        session.new_game()
        for row, col in session.grid.empty_positions():
            session.grid[row][col].value = session.solution.get(row, col)
        assert session.get_hint() is None
        assert session.hints_remaining == 100


class TestUndoRedo:
    """Tests for history navigation."""

    def test_undo_and_redo(self, clock):
        """Undo restores the previous grid, redo reapplies the edit."""
        session = make_session(clock)
        session.new_game()
        row, col = session.grid.empty_positions()[0]
        session.update_cell(row, col, 5)

        assert session.undo()
        assert session.grid[row][col].value is None
        assert not session.undo()

        assert session.redo()
        assert session.grid[row][col].value == 5
        assert not session.redo()

    def test_new_edit_truncates_redo(self, clock):
        """Editing after an undo drops the undone future."""
        session = make_session(clock)
        session.new_game()
        (r1, c1), (r2, c2) = session.grid.empty_positions()[:2]
        session.update_cell(r1, c1, 1)
        session.undo()
        session.update_cell(r2, c2, 2)

        assert not session.redo()
        assert session.grid[r1][c1].value is None
        assert session.grid[r2][c2].value == 2


class TestPause:
    """Tests for the clock."""

    def test_paused_time_not_counted(self, clock):
        """Time spent paused is excluded and edits are refused."""
        session = make_session(clock)
        session.new_game()
        clock.advance(10)
        session.pause()
        clock.advance(100)

        row, col = session.grid.empty_positions()[0]
        assert not session.update_cell(row, col, 1)
        assert session.elapsed_seconds() == 10

        session.resume()
        clock.advance(5)
        assert session.elapsed_seconds() == 15


class TestHistory:
    """Tests for the snapshot history itself."""

    def test_limit_drops_oldest(self):
        """A limited history keeps only the newest snapshots."""
        history = History(limit=3)
        grid = PuzzleGrid.empty()
        history.reset(grid)
        for digit in range(1, 5):
            grid[0][0].value = digit
            history.push(grid)

        assert len(history) == 3
        assert history.current()[0][0].value == 4
        assert history.undo()[0][0].value == 3
        assert history.undo()[0][0].value == 2
        assert history.undo() is None

    def test_snapshots_are_independent(self):
        """Later edits do not leak into stored snapshots."""
        history = History()
        grid = PuzzleGrid.empty()
        history.reset(grid)
        grid[0][0].value = 9
        grid[0][0].candidates.add(1)
        assert history.current()[0][0].value is None
        assert history.current()[0][0].candidates == set()


class TestSettings:
    """Tests for GameSettings."""

    def test_load_ignores_unknown_keys(self, tmp_path):
        """Only known fields are read from JSON."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_hints": 5, "colour": "red"}))
        settings = GameSettings.load(str(path))
        assert settings.max_hints == 5
        assert settings.base_score == 1000

    def test_dict_roundtrip(self):
        """to_dict output loads back into equal settings."""
        settings = GameSettings(max_hints=1, error_penalty=25, history_limit=50)
        data = settings.to_dict()
        assert data["error_penalty"] == 25
        assert GameSettings.from_dict(data) == settings

    def test_custom_settings_apply(self, clock):
        """Base score and hint count come from the settings."""
        session = make_session(clock, base_score=500, max_hints=1, hint_penalty=20)
        session.new_game()
        assert session.score == 500
        session.get_hint()
        assert session.score == 480
        assert session.get_hint() is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
