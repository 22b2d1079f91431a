"""Charts for generation stress runs and high-score records."""

from __future__ import annotations
import os
from typing import Dict, List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from ..generator import Difficulty
from ..session.records import ScoreRecord
from .stress import StressResult


class Visualizer:
    """
    Chart generator for stress results.

    Charts are written as PNG files into the output directory.
    """

    COLORS = {
        "beginner": "#2ecc71",      # Green
        "intermediate": "#3498db",  # Blue
        "hard": "#f39c12",          # Orange
        "expert": "#e74c3c",        # Red
        "advanced": "#9b59b6",      # Purple
    }

    def __init__(self, results: List[StressResult], output_dir: str = "results"):
        """
        Args:
            results: Stress results to plot.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _difficulties(self) -> List[str]:
        present = {r.difficulty for r in self.results}
        return [d.value for d in Difficulty if d.value in present]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        return [self.plot_visible_cells(), self.plot_generation_time()]

    def plot_visible_cells(self) -> str:
        """Histogram of visible cells per difficulty with the expected band shaded."""
        fig, ax = plt.subplots(figsize=(12, 6))

        for diff in self._difficulties():
            values = [r.visible_cells for r in self.results if r.difficulty == diff]
            color = self.COLORS.get(diff, "#95a5a6")
            sns.histplot(x=values, discrete=True, ax=ax, color=color, label=diff.capitalize(), alpha=0.6)

            low, high = Difficulty(diff).visible_range
            ax.axvspan(low - 0.5, high + 0.5, color=color, alpha=0.08)

        ax.set_xlabel('Visible Cells', fontsize=12)
        ax.set_ylabel('Puzzles', fontsize=12)
        ax.set_title('Visible Cells by Difficulty', fontsize=14, fontweight='bold')
        ax.legend(title='Difficulty')

        return self._save("visible_cells.png")

    def plot_generation_time(self) -> str:
        """Bar chart of mean generation time per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        avg_times = []
        for diff in difficulties:
            times = [r.time_seconds for r in self.results if r.difficulty == diff]
            avg_times.append(np.mean(times) * 1000)

        bars = ax.bar(
            [d.capitalize() for d in difficulties],
            avg_times,
            color=[self.COLORS.get(d, "#95a5a6") for d in difficulties],
            edgecolor='black',
            linewidth=0.5,
        )
        for bar, avg in zip(bars, avg_times):
            ax.annotate(f'{avg:.2f}ms',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Time (ms)', fontsize=12)
        ax.set_title('Average Generation Time', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("generation_time.png")

    def plot_score_history(self, records: List[ScoreRecord]) -> str:
        """Best-first score curves per difficulty from stored records."""
        fig, ax = plt.subplots(figsize=(10, 6))

        by_difficulty: Dict[str, List[int]] = {}
        for record in records:
            by_difficulty.setdefault(record.difficulty, []).append(record.score)

        for diff in [d.value for d in Difficulty if d.value in by_difficulty]:
            scores = sorted(by_difficulty[diff], reverse=True)
            ax.plot(range(1, len(scores) + 1), scores, marker='o',
                    color=self.COLORS.get(diff, "#95a5a6"), label=diff.capitalize())

        if by_difficulty:
            ax.legend(title='Difficulty')
        else:
            ax.text(0.5, 0.5, 'No records yet', ha='center', va='center', transform=ax.transAxes)

        ax.set_xlabel('Rank', fontsize=12)
        ax.set_ylabel('Score', fontsize=12)
        ax.set_title('High Scores by Difficulty', fontsize=14, fontweight='bold')

        return self._save("score_history.png")

    def generate_summary_table(self) -> str:
        """Write a markdown summary table next to the charts."""
        lines = [
            "# Generation Summary\n",
            "| Difficulty | Runs | Passed | Visible (min-max) | Expected | Avg Time |",
            "|------------|------|--------|-------------------|----------|----------|",
        ]

        for diff in self._difficulties():
            diff_results = [r for r in self.results if r.difficulty == diff]
            visible = [r.visible_cells for r in diff_results]
            passed = sum(1 for r in diff_results if r.passed)
            low, high = Difficulty(diff).visible_range
            avg_time = np.mean([r.time_seconds for r in diff_results]) * 1000
            lines.append(
                f"| {diff} | {len(diff_results)} | {passed} | {min(visible)}-{max(visible)} "
                f"| {low}-{high} | {avg_time:.2f}ms |"
            )

        path = os.path.join(self.output_dir, "stress_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
