"""
Closed-form adaptive schedules and the convergence test.

All functions are pure: they depend only on their arguments, so the
schedule can be checked without running an engine.
"""

from __future__ import annotations

import math
from typing import Sequence

DEFAULT_WINDOW = 10


def progress(generation: int, budget: int) -> float:
    """Fraction of the generation budget consumed, clipped to [0, 1]."""
    if budget <= 0:
        return 1.0
    return min(max(generation / budget, 0.0), 1.0)


def adapted_mutation_rate(progress: float, initial: float, floor: float = 0.01) -> float:
    """Linear decay from ``initial`` (progress 0) to ``floor`` (progress 1)."""
    p = min(max(progress, 0.0), 1.0)
    if initial <= floor:
        return initial
    return initial + (floor - initial) * p


def adapted_tournament_size(progress: float, start: int = 3, end: int = 10) -> int:
    """Linear growth from ``start`` to ``end`` contenders, rounded down."""
    p = min(max(progress, 0.0), 1.0)
    return int(math.floor(start + p * (end - start)))


def fitness_spread(history: Sequence[float], window: int = DEFAULT_WINDOW) -> float:
    """max - min of the last ``window`` best-fitness values (inf until the window is full)."""
    if window <= 0 or len(history) < window:
        return math.inf
    recent = [float(v) for v in history[-window:]]
    if not all(math.isfinite(v) for v in recent):
        return math.inf
    return max(recent) - min(recent)


def has_converged(history: Sequence[float], tolerance: float, window: int = DEFAULT_WINDOW) -> bool:
    return fitness_spread(history, window) < tolerance


__all__ = [
    "DEFAULT_WINDOW",
    "progress",
    "adapted_mutation_rate",
    "adapted_tournament_size",
    "fitness_spread",
    "has_converged",
]
