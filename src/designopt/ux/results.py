"""
Result objects handed to the presentation and reporting layers.

``OptimizationResult`` describes one candidate (the single-objective winner,
one Pareto-front member, or the TOPSIS compromise). ``ParetoFrontResult``
wraps a whole multi-objective run.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Mapping, Sequence

import numpy as np

from designopt.engine.algorithm.components.stats import GenerationStats, StatsHistory
from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import GeneValue, ObjectiveSet
from designopt.foundation.metrics.hypervolume import compute_hypervolume, nadir_reference
from designopt.foundation.presets import (
    DEFAULT_PERFORMANCE_FIELDS,
    DEFAULT_RECOMMENDATION_RULES,
    RecommendationRule,
)
from designopt.ux.analysis.mcdm import best_compromise

CORRELATION_THRESHOLD = 0.1


@dataclass(frozen=True)
class SolutionSnapshot:
    genes: dict[str, GeneValue]
    objectives: dict[str, float]
    fitness: float
    feasible: bool
    rank: int = 0
    crowding_distance: float = 0.0


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Headline objective values; objectives that were not evaluated read 0."""

    cost: float = 0.0
    weight: float = 0.0
    sustainability: float = 0.0
    safety: float = 0.0
    constructability: float = 0.0
    values: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_objectives(
        cls, objectives: Mapping[str, float], fields: Mapping[str, str] = DEFAULT_PERFORMANCE_FIELDS
    ) -> "PerformanceSnapshot":
        mapped = {attr: float(objectives.get(name, 0.0)) for attr, name in fields.items()}
        return cls(**mapped, values=dict(objectives))


@dataclass(frozen=True)
class ConvergenceSnapshot:
    generation: int
    best_fitness: float
    average_fitness: float
    diversity: float


@dataclass(frozen=True)
class Tradeoff:
    objective1: str
    objective2: str
    relationship: str  # positive | negative | independent
    strength: float  # |Pearson r|


@dataclass(frozen=True)
class AnalysisSnapshot:
    summary: str
    recommendations: list[str] = field(default_factory=list)
    tradeoffs: list[Tradeoff] = field(default_factory=list)


def pearson_correlation(a: Sequence[float], b: Sequence[float]) -> float:
    """Pearson r; 0 when either series has no variance or the series are empty."""
    x = np.asarray(a, dtype=float)
    y = np.asarray(b, dtype=float)
    if x.size == 0 or x.size != y.size:
        return 0.0
    dx = x - x.mean()
    dy = y - y.mean()
    denom = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
    if denom == 0.0:
        return 0.0
    return float(np.sum(dx * dy) / denom)


def classify_correlation(r: float, threshold: float = CORRELATION_THRESHOLD) -> str:
    if r > threshold:
        return "positive"
    if r < -threshold:
        return "negative"
    return "independent"


def analyze_tradeoffs(candidate: Candidate, population: Iterable[Candidate]) -> list[Tradeoff]:
    """Correlation between every pair of the candidate's objectives across ``population``."""
    names = list(candidate.objectives)
    evaluated = [c for c in population if not c.failed and all(n in c.objectives for n in names)]
    tradeoffs: list[Tradeoff] = []
    for first, second in itertools.combinations(names, 2):
        r = pearson_correlation(
            [c.objectives[first] for c in evaluated],
            [c.objectives[second] for c in evaluated],
        )
        tradeoffs.append(Tradeoff(first, second, classify_correlation(r), abs(r)))
    return tradeoffs


def build_recommendations(
    objectives: Mapping[str, float], rules: Iterable[RecommendationRule] = DEFAULT_RECOMMENDATION_RULES
) -> list[str]:
    return [rule.message for rule in rules if rule.applies(objectives)]


def summarize(candidate: Candidate) -> str:
    return f"Optimized solution with {candidate.describe()}."


@dataclass(frozen=True)
class OptimizationResult:
    solution: SolutionSnapshot
    performance: PerformanceSnapshot
    convergence: ConvergenceSnapshot
    analysis: AnalysisSnapshot
    warnings: list[str] = field(default_factory=list)
    stop_reason: str = "budget"

    @classmethod
    def from_candidate(
        cls,
        candidate: Candidate,
        *,
        history: StatsHistory | Sequence[GenerationStats] = (),
        population: Iterable[Candidate] = (),
        rules: Iterable[RecommendationRule] = DEFAULT_RECOMMENDATION_RULES,
        warnings: Iterable[str] = (),
        stop_reason: str = "budget",
    ) -> "OptimizationResult":
        entries = list(history)
        last = entries[-1] if entries else None
        return cls(
            solution=SolutionSnapshot(
                genes=dict(candidate.genes),
                objectives=dict(candidate.objectives),
                fitness=candidate.fitness,
                feasible=candidate.feasible,
                rank=candidate.rank,
                crowding_distance=candidate.crowding_distance,
            ),
            performance=PerformanceSnapshot.from_objectives(candidate.objectives),
            convergence=ConvergenceSnapshot(
                generation=last.generation if last else 0,
                best_fitness=candidate.fitness,
                average_fitness=last.average_fitness if last else 0.0,
                diversity=last.diversity if last else 0.0,
            ),
            analysis=AnalysisSnapshot(
                summary=summarize(candidate),
                recommendations=build_recommendations(candidate.objectives, rules),
                tradeoffs=analyze_tradeoffs(candidate, population),
            ),
            warnings=list(warnings),
            stop_reason=stop_reason,
        )

    @property
    def genes(self) -> dict[str, GeneValue]:
        return self.solution.genes

    @property
    def objectives(self) -> dict[str, float]:
        return self.solution.objectives

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ParetoFrontResult:
    """
    Outcome of a multi-objective run.

    ``front`` holds the returned non-dominated candidates (archive truncated
    to the configured front size), ``results`` their report objects in the
    same order.
    """

    objectives: ObjectiveSet
    front: list[Candidate]
    results: list[OptimizationResult]
    archive: list[Candidate]
    history: StatsHistory
    stop_reason: str
    warnings: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.front)

    def objective_matrix(self, *, normalized: bool = False) -> np.ndarray:
        if not self.front:
            return np.empty((0, len(self.objectives)), dtype=float)
        raw = np.vstack([c.objective_vector(self.objectives) for c in self.front])
        return self.objectives.normalized(raw) if normalized else raw

    @property
    def hypervolume(self) -> float | None:
        """2-objective hypervolume against a nadir-based reference point (None otherwise)."""
        if len(self.objectives) != 2 or not self.front:
            return None
        F = self.objective_matrix(normalized=True)
        return compute_hypervolume(F, nadir_reference(F))

    def best_compromise(self, rules: Iterable[RecommendationRule] = DEFAULT_RECOMMENDATION_RULES) -> OptimizationResult:
        """TOPSIS best compromise of the front; raises ValueError when the front is empty."""
        chosen = best_compromise(self.front, self.objectives)
        return OptimizationResult.from_candidate(
            chosen,
            history=self.history,
            population=self.front,
            rules=rules,
            warnings=self.warnings,
            stop_reason=self.stop_reason,
        )

    def to_dataframe(self):
        """Front as a pandas DataFrame (genes, objectives, rank, crowding, feasibility)."""
        try:
            import pandas as pd
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImportError("Tabular export requires pandas. Install with 'pip install designopt[analysis]'.") from exc
        rows = []
        for cand in self.front:
            row: dict[str, Any] = dict(cand.genes)
            row.update(cand.objectives)
            row["fitness"] = cand.fitness
            row["crowding_distance"] = cand.crowding_distance
            row["feasible"] = cand.feasible
            rows.append(row)
        return pd.DataFrame(rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stop_reason": self.stop_reason,
            "warnings": list(self.warnings),
            "hypervolume": self.hypervolume,
            "front": [r.to_dict() for r in self.results],
            "history": self.history.to_records(),
        }


__all__ = [
    "SolutionSnapshot",
    "PerformanceSnapshot",
    "ConvergenceSnapshot",
    "Tradeoff",
    "AnalysisSnapshot",
    "OptimizationResult",
    "ParetoFrontResult",
    "pearson_correlation",
    "classify_correlation",
    "analyze_tradeoffs",
    "build_recommendations",
    "summarize",
]
