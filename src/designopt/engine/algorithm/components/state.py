"""
State container shared by the engines.

Owned by a single run: the population and archive are only mutated by the
control coroutine between evaluation batches.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.engine.algorithm.components.stats import StatsHistory


@dataclass
class RunState:
    rng: np.random.Generator
    population: list[Candidate] = field(default_factory=list)
    generation: int = 0
    n_eval: int = 0
    n_failed: int = 0
    history: StatsHistory = field(default_factory=StatsHistory)
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)


__all__ = ["RunState"]
