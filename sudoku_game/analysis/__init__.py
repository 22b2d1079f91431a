"""Generation stress runs and charts."""

from .stress import StressRun, StressResult
from .visualizer import Visualizer

__all__ = ["StressRun", "StressResult", "Visualizer"]
