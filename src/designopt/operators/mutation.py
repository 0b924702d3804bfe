"""Mutation over mixed-type candidates."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import DesignVariable, VariableKind


class PolynomialMutation:
    """
    Polynomial mutation with a step of ``step_fraction`` of the variable range.

    Each gene mutates with probability ``prob_mutation`` (default
    ``1 / n_var``). The perturbation is ``delta * span * step_fraction`` where
    ``delta`` follows the polynomial distribution with index ``eta``; the
    result is clamped and, for discrete genes, snapped to the grid.
    Categorical genes are replaced by a uniformly drawn option.
    """

    def __init__(
        self,
        catalog: Sequence[DesignVariable],
        prob_mutation: float | None = None,
        eta: float = 20.0,
        *,
        step_fraction: float = 0.1,
    ) -> None:
        self.catalog = tuple(catalog)
        if not self.catalog:
            raise ValueError("catalog must not be empty.")
        self.prob = 1.0 / len(self.catalog) if prob_mutation is None else float(prob_mutation)
        if not 0.0 <= self.prob <= 1.0:
            raise ValueError("prob_mutation must be in [0, 1].")
        self.eta = float(eta)
        self.step_fraction = float(step_fraction)

    def delta(self, u: float) -> float:
        inv_eta = 1.0 / (self.eta + 1.0)
        if u < 0.5:
            return (2.0 * u) ** inv_eta - 1.0
        return 1.0 - (2.0 * (1.0 - u)) ** inv_eta

    def __call__(self, candidate: Candidate, rng: np.random.Generator) -> Candidate:
        """Mutate ``candidate`` in place and return it."""
        for var in self.catalog:
            if rng.random() >= self.prob:
                continue
            if var.kind is VariableKind.CATEGORICAL:
                candidate.genes[var.name] = var.options[int(rng.integers(0, len(var.options)))]
                continue
            d = self.delta(float(rng.random()))
            value = float(candidate.genes[var.name]) + d * var.span * self.step_fraction
            candidate.genes[var.name] = var.repair(value)
        return candidate


__all__ = ["PolynomialMutation"]
