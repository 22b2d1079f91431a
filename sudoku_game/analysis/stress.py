"""Repeated generation runs that check the generator's guarantees."""

from __future__ import annotations
import json
import os
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from ..core.validator import is_valid_solution, matches_solution
from ..generator import Difficulty, PuzzleGenerator


@dataclass
class StressResult:
    """Outcome of generating one puzzle."""
    run_id: int
    difficulty: str
    visible_cells: int
    in_range: bool
    givens_filled: bool
    matches_solution: bool
    solution_valid: bool
    time_seconds: float

    @property
    def passed(self) -> bool:
        return self.in_range and self.givens_filled and self.matches_solution and self.solution_valid

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "passed": self.passed}


class StressRun:
    """
    Generate many puzzles per difficulty and check each one.

    Every puzzle is checked for its visible-cell count, the givens
    invariant, agreement with its solution and validity of the solution.
    """

    def __init__(
        self,
        runs_per_difficulty: int = 100,
        difficulties: Optional[List[Difficulty]] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            runs_per_difficulty: Puzzles generated per difficulty.
            difficulties: Difficulties to exercise (default: all).
            seed: Random seed for reproducibility.
        """
        self.runs_per_difficulty = runs_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.generator = PuzzleGenerator(seed=seed)
        self.results: List[StressResult] = []

    def run(self, show_progress: bool = True) -> List[StressResult]:
        self.results = []
        total = len(self.difficulties) * self.runs_per_difficulty

        pbar = tqdm(total=total, desc="Generating", disable=not show_progress)
        for difficulty in self.difficulties:
            low, high = difficulty.visible_range
            for run_id in range(self.runs_per_difficulty):
                start = time.perf_counter()
                puzzle, solution = self.generator.generate_with_solution(difficulty)
                elapsed = time.perf_counter() - start

                visible = puzzle.count_filled()
                self.results.append(StressResult(
                    run_id=run_id,
                    difficulty=difficulty.value,
                    visible_cells=visible,
                    in_range=low <= visible <= high,
                    givens_filled=puzzle.givens_are_filled(),
                    matches_solution=matches_solution(puzzle, solution),
                    solution_valid=is_valid_solution(solution),
                    time_seconds=elapsed,
                ))
                pbar.update(1)
        pbar.close()

        return self.results

    def get_summary(self) -> Dict[str, Any]:
        """Per-difficulty statistics of the last run."""
        summary = {
            "total_runs": len(self.results),
            "all_passed": all(r.passed for r in self.results),
            "results_by_difficulty": {},
        }

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if not diff_results:
                continue
            visible = np.array([r.visible_cells for r in diff_results])
            times = np.array([r.time_seconds for r in diff_results])
            summary["results_by_difficulty"][difficulty.value] = {
                "runs": len(diff_results),
                "passed": sum(1 for r in diff_results if r.passed),
                "expected_visible": list(difficulty.visible_range),
                "min_visible": int(visible.min()),
                "max_visible": int(visible.max()),
                "mean_visible": float(visible.mean()),
                "avg_time_seconds": float(times.mean()),
                "max_time_seconds": float(times.max()),
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Write raw results and the summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        with open(os.path.join(output_dir, "stress_results.json"), "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        with open(os.path.join(output_dir, "stress_summary.json"), "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        print(f"Results saved to {output_dir}")
