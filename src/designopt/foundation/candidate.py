"""
Candidate solution record.

A Candidate owns its genes and evaluation data outright: ``clone()`` copies
every container so offspring never alias a parent's genes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from designopt.foundation.catalog import DesignVariable, GeneValue, ObjectiveSet


@dataclass
class Candidate:
    """
    One point of the design space plus its evaluation data.

    Notes:
        ``fitness`` is the optimization criterion of the single-objective engine.
        In multi-objective runs it only holds the weighted-sum report value and
        is never used for dominance or environmental selection.
        ``rank`` and ``crowding_distance`` are only valid right after the sorting
        step of the generation that produced them.
    """

    genes: dict[str, GeneValue] = field(default_factory=dict)
    objectives: dict[str, float] = field(default_factory=dict)
    constraints: dict[str, float] = field(default_factory=dict)
    fitness: float = 0.0
    rank: int = 0
    crowding_distance: float = 0.0
    feasible: bool = True
    age: int = 0
    evaluated: bool = False
    error: str | None = None

    def clone(self) -> "Candidate":
        return Candidate(
            genes=dict(self.genes),
            objectives=dict(self.objectives),
            constraints=dict(self.constraints),
            fitness=self.fitness,
            rank=self.rank,
            crowding_distance=self.crowding_distance,
            feasible=self.feasible,
            age=self.age,
            evaluated=self.evaluated,
            error=self.error,
        )

    def reset_evaluation(self) -> None:
        """Drop evaluation data; used for offspring whose genes changed."""
        self.objectives = {}
        self.constraints = {}
        self.fitness = 0.0
        self.rank = 0
        self.crowding_distance = 0.0
        self.feasible = True
        self.evaluated = False
        self.error = None

    @property
    def failed(self) -> bool:
        """True when the last evaluation raised or returned unusable values."""
        return self.error is not None

    def objective_vector(self, objectives: ObjectiveSet) -> np.ndarray | None:
        """Raw objective values in schema order, or None when any value is missing."""
        if self.failed:
            return None
        try:
            vec = np.array([self.objectives[name] for name in objectives.names], dtype=float)
        except KeyError:
            return None
        if not np.all(np.isfinite(vec)):
            return None
        return vec

    def dominates(self, other: "Candidate", objectives: ObjectiveSet) -> bool:
        """
        Pareto dominance over the active objectives.

        ``self`` dominates ``other`` iff it is no worse in every objective and
        strictly better in at least one, after normalizing every objective to
        "lower is better". Candidates without a complete objective vector never
        dominate and are dominated by any candidate that has one.
        """
        mine = self.objective_vector(objectives)
        if mine is None:
            return False
        theirs = other.objective_vector(objectives)
        if theirs is None:
            return True
        a = objectives.normalized(mine)
        b = objectives.normalized(theirs)
        return bool(np.all(a <= b) and np.any(a < b))

    def gene_vector(self, catalog: Sequence[DesignVariable]) -> np.ndarray:
        """Numeric encoding of the genes in catalog order (categorical as option index)."""
        return np.array([var.encode(self.genes[var.name]) for var in catalog], dtype=float)

    def in_bounds(self, catalog: Sequence[DesignVariable]) -> bool:
        if set(self.genes) != {var.name for var in catalog}:
            return False
        return all(var.contains(self.genes[var.name]) for var in catalog)

    def describe(self) -> str:
        genes = ", ".join(f"{name}: {value}" for name, value in self.genes.items())
        objs = ", ".join(f"{name}: {value:.2f}" for name, value in self.objectives.items())
        fitness = f"{self.fitness:.4f}" if math.isfinite(self.fitness) else str(self.fitness)
        return f"variables [{genes}] objectives [{objs}] fitness {fitness} feasible {self.feasible}"


__all__ = ["Candidate"]
