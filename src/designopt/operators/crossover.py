"""Crossover over mixed-type candidates."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import DesignVariable, VariableKind


class SBXCrossover:
    """
    Simulated Binary Crossover (SBX) for numeric genes.

    Categorical genes use a pairwise uniform swap: with probability
    ``swap_prob`` the two children exchange the gene value.
    Children are clamped to bounds and discrete genes snapped to their grid.
    """

    def __init__(
        self,
        catalog: Sequence[DesignVariable],
        prob_crossover: float = 0.8,
        eta: float = 20.0,
        *,
        swap_prob: float = 0.5,
    ) -> None:
        if not 0.0 <= prob_crossover <= 1.0:
            raise ValueError("prob_crossover must be in [0, 1].")
        if eta < 0.0:
            raise ValueError("eta must be non-negative.")
        self.catalog = tuple(catalog)
        self.prob = float(prob_crossover)
        self.eta = float(eta)
        self.swap_prob = float(swap_prob)

    def spread_factor(self, u: float) -> float:
        inv_eta = 1.0 / (self.eta + 1.0)
        if u <= 0.5:
            return (2.0 * u) ** inv_eta
        return (1.0 / (2.0 * (1.0 - u))) ** inv_eta

    def recombine(
        self, parent1: Candidate, parent2: Candidate, rng: np.random.Generator
    ) -> tuple[Candidate, Candidate]:
        """Unconditionally recombine two parents into two fresh children."""
        child1 = parent1.clone()
        child2 = parent2.clone()
        eps = 1.0e-14
        for var in self.catalog:
            a = parent1.genes[var.name]
            b = parent2.genes[var.name]
            if var.kind is VariableKind.CATEGORICAL:
                if rng.random() < self.swap_prob:
                    child1.genes[var.name], child2.genes[var.name] = b, a
                continue
            a = float(a)
            b = float(b)
            diff = abs(a - b)
            if diff <= eps:
                continue
            beta = self.spread_factor(float(rng.random()))
            mid = a + b
            child1.genes[var.name] = var.repair(0.5 * (mid - beta * diff))
            child2.genes[var.name] = var.repair(0.5 * (mid + beta * diff))
        return child1, child2

    def __call__(
        self, parent1: Candidate, parent2: Candidate, rng: np.random.Generator
    ) -> tuple[Candidate, Candidate]:
        """Recombine with probability ``prob``; otherwise return clones of the parents."""
        if rng.random() < self.prob:
            return self.recombine(parent1, parent2, rng)
        return parent1.clone(), parent2.clone()


__all__ = ["SBXCrossover"]
