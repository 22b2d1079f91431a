"""Command-line interface for the Sudoku game engine."""

import argparse
import sys
import json

from .core.cell import PuzzleGrid
from .core.validator import validate_cell_value
from .generator import PuzzleGenerator, Difficulty
from .session import GameSession, GameSettings, RecordStore

DIFFICULTY_CHOICES = [d.value for d in Difficulty]
DEFAULT_STORE = "records.json"

PLAY_HELP = """Commands:
  set R C V    place digit V at row R, column C (1-based)
  clear R C    clear a cell
  note R C V   toggle pencil mark V
  hint         reveal one cell
  undo / redo
  show         print the grid
  quit"""


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku puzzle generator and single-player game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 3 hard puzzles
  sudoku-game generate --count 3 --difficulty hard

  # Check a placement against a puzzle
  sudoku-game check --puzzle "5300700..." --row 0 --col 2 --value 4

  # Stress the generator
  sudoku-game stress --runs 100 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="beginner",
        help="Difficulty level (default: beginner)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--show-solution", action="store_true",
        help="Print the solution under each puzzle"
    )

    check_parser = subparsers.add_parser("check", help="Check a digit placement")
    check_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    check_parser.add_argument("--row", "-r", type=int, required=True, help="Row index (0-8)")
    check_parser.add_argument("--col", "-c", type=int, required=True, help="Column index (0-8)")
    check_parser.add_argument("--value", "-v", type=int, required=True, help="Digit to test (0 clears)")

    stress_parser = subparsers.add_parser("stress", help="Generate many puzzles and check them")
    stress_parser.add_argument(
        "--runs", "-n", type=int, default=100,
        help="Puzzles per difficulty (default: 100)"
    )
    stress_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="all",
        help="Difficulty to exercise (default: all)"
    )
    stress_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    stress_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    stress_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    records_parser = subparsers.add_parser("records", help="Show high scores")
    records_parser.add_argument(
        "--store", type=str, default=DEFAULT_STORE,
        help=f"Records file (default: {DEFAULT_STORE})"
    )
    records_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES, default=None,
        help="Only show one difficulty"
    )
    records_parser.add_argument(
        "--chart", type=str, default=None,
        help="Directory to write a score chart into"
    )

    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES, default="beginner",
        help="Difficulty level (default: beginner)"
    )
    play_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    play_parser.add_argument(
        "--store", type=str, default=DEFAULT_STORE,
        help=f"Records file (default: {DEFAULT_STORE})"
    )
    play_parser.add_argument(
        "--settings", type=str, default=None,
        help="JSON file with game settings"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "stress":
        cmd_stress(args)
    elif args.command == "records":
        cmd_records(args)
    elif args.command == "play":
        cmd_play(args)


def _difficulties(name):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def cmd_generate(args):
    """Handle the generate command."""
    generator = PuzzleGenerator(seed=args.seed)
    all_puzzles = []

    for difficulty in _difficulties(args.difficulty):
        pairs = generator.generate_batch(args.count, difficulty)

        for i, (puzzle, solution) in enumerate(pairs, 1):
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": puzzle.to_string(),
                "solution": solution.to_string(),
                "clues": puzzle.count_filled(),
            })

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} ({puzzle.count_filled()} clues) ---")
            print(puzzle)
            if args.show_solution:
                print("Solution:")
                print(solution)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_check(args):
    """Handle the check command."""
    try:
        grid = PuzzleGrid.from_string(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    if not (0 <= args.row < 9 and 0 <= args.col < 9 and 0 <= args.value <= 9):
        print("Error: row and col must be 0-8, value 0-9")
        sys.exit(1)

    print(grid)
    if validate_cell_value(grid, args.row, args.col, args.value):
        print(f"✓ {args.value} fits at ({args.row}, {args.col})")
    else:
        print(f"✗ {args.value} conflicts at ({args.row}, {args.col})")
        sys.exit(2)


def cmd_stress(args):
    """Handle the stress command."""
    from .analysis import StressRun, Visualizer

    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("GENERATOR STRESS RUN")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.runs}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    stress = StressRun(runs_per_difficulty=args.runs, difficulties=difficulties, seed=args.seed)
    results = stress.run()
    summary = stress.get_summary()

    print("\nBy Difficulty:")
    print("-" * 50)
    for diff, stats in summary["results_by_difficulty"].items():
        low, high = stats["expected_visible"]
        print(f"\n{diff}:")
        print(f"  Passed: {stats['passed']}/{stats['runs']}")
        print(f"  Visible: {stats['min_visible']}-{stats['max_visible']} (expected {low}-{high})")
        print(f"  Avg Time: {stats['avg_time_seconds'] * 1000:.2f}ms")

    stress.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        for chart in charts:
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("All checks passed" if summary["all_passed"] else "Some checks FAILED")
    if not summary["all_passed"]:
        sys.exit(2)


def cmd_records(args):
    """Handle the records command."""
    store = RecordStore(args.store)
    if args.difficulty:
        records = store.get_scores(args.difficulty)
    else:
        records = store.load_all()

    if not records:
        print("No records yet.")
    current = None
    for record in records:
        if record.difficulty != current:
            current = record.difficulty
            print(f"\n{current.capitalize()}:")
        print(f"  {record.score:>6}  {record.time_spent:>5}s  {record.date}")

    if args.chart:
        from .analysis import Visualizer
        path = Visualizer([], args.chart).plot_score_history(records)
        print(f"\nChart saved to {path}")


def cmd_play(args, input_fn=input):
    """Handle the play command."""
    try:
        settings = GameSettings.load(args.settings) if args.settings else GameSettings()
    except (OSError, ValueError, TypeError) as e:
        print(f"Error loading settings: {e}")
        sys.exit(1)

    session = GameSession(
        settings=settings,
        generator=PuzzleGenerator(seed=args.seed),
        record_store=RecordStore(args.store),
    )
    session.new_game(args.difficulty)
    print(session.grid)
    print(PLAY_HELP)

    while not session.is_complete:
        try:
            line = input_fn("> ").strip()
        except EOFError:
            break
        if not line:
            continue

        parts = line.split()
        command, numbers = parts[0].lower(), parts[1:]
        try:
            values = [int(n) for n in numbers]
        except ValueError:
            print("Arguments must be numbers")
            continue

        if command == "quit":
            break
        elif command == "show":
            print(session.grid)
        elif command == "hint":
            hint = session.get_hint()
            if hint is None:
                print("No hint available")
            else:
                print(f"Hint: {hint.value} at row {hint.row + 1}, column {hint.col + 1}")
                print(session.grid)
        elif command in ("undo", "redo"):
            changed = session.undo() if command == "undo" else session.redo()
            print(session.grid if changed else f"Nothing to {command}")
        elif command in ("set", "clear", "note") and _coords_ok(command, values):
            row, col = values[0] - 1, values[1] - 1
            if command == "note":
                changed = session.toggle_candidate(row, col, values[2])
            else:
                changed = session.update_cell(row, col, values[2] if command == "set" else None)
            if not changed:
                print("That cell cannot be changed")
                continue
            cell = session.grid[row][col]
            if cell.is_error:
                print("Conflict!")
            print(session.grid)
        else:
            print(PLAY_HELP)

    if session.is_complete:
        print(f"\nSolved! Final score: {session.last_record.score} "
              f"in {session.last_record.time_spent}s")


def _coords_ok(command, values):
    """Row and column 1-9; `set` takes a digit 0-9, `note` a digit 1-9."""
    if len(values) != (2 if command == "clear" else 3):
        return False
    if not all(1 <= v <= 9 for v in values[:2]):
        return False
    if command == "clear":
        return True
    lowest = 0 if command == "set" else 1
    return lowest <= values[2] <= 9


if __name__ == "__main__":
    main()
