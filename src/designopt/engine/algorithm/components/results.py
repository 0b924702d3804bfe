"""
Raw run outcome returned by the engines.

Presentation (snapshots, summaries, TOPSIS) lives in ``designopt.ux``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from designopt.engine.algorithm.components.stats import StatsHistory
from designopt.foundation.candidate import Candidate


@dataclass
class EngineResult:
    best: Candidate | None
    front: list[Candidate]
    population: list[Candidate]
    archive: list[Candidate]
    history: StatsHistory
    stop_reason: str
    generations: int
    evaluations: int
    warnings: list[str] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.stop_reason == "cancelled"


__all__ = ["EngineResult"]
