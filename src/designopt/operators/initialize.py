"""Population initializers over a design variable catalog."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import DesignVariable, GeneValue, VariableKind


def _gene_from_unit(var: DesignVariable, u: float) -> GeneValue:
    """Map a unit-interval sample onto the variable's range, grid or options."""
    if var.kind is VariableKind.CONTINUOUS:
        return var.lower + u * var.span
    n_levels = var.n_levels
    index = min(int(np.floor(u * n_levels)), n_levels - 1)
    return var.level_value(index)


class RandomInitializer:
    """Independent uniform sampling: uniform in bounds, uniform grid level, uniform option."""

    def __init__(self, catalog: Sequence[DesignVariable], rng: Optional[np.random.Generator] = None):
        self.catalog = tuple(catalog)
        self.rng = rng or np.random.default_rng()

    def sample_genes(self) -> dict[str, GeneValue]:
        genes: dict[str, GeneValue] = {}
        for var in self.catalog:
            if var.kind is VariableKind.CONTINUOUS:
                genes[var.name] = float(self.rng.uniform(var.lower, var.upper))
            else:
                genes[var.name] = var.level_value(int(self.rng.integers(0, var.n_levels)))
        return genes

    def __call__(self, n_solutions: int) -> list[Candidate]:
        if n_solutions <= 0:
            raise ValueError("n_solutions must be positive.")
        return [Candidate(genes=self.sample_genes()) for _ in range(n_solutions)]


class LatinHypercubeInitializer:
    """
    Latin Hypercube Sampling over the catalog.

    Each variable's unit interval is split into ``n`` strata with one sample
    per stratum, shuffled independently per variable, so every grid level or
    option is represented in proportion to its share of the interval.
    """

    def __init__(self, catalog: Sequence[DesignVariable], rng: Optional[np.random.Generator] = None):
        self.catalog = tuple(catalog)
        self.rng = rng or np.random.default_rng()

    def __call__(self, n_solutions: int) -> list[Candidate]:
        n = int(n_solutions)
        if n <= 0:
            raise ValueError("n_solutions must be positive.")
        samples = np.empty((n, len(self.catalog)), dtype=float)
        for j in range(len(self.catalog)):
            strata = (np.arange(n, dtype=float) + self.rng.random(n)) / n
            self.rng.shuffle(strata)
            samples[:, j] = strata
        return [
            Candidate(genes={var.name: _gene_from_unit(var, samples[i, j]) for j, var in enumerate(self.catalog)})
            for i in range(n)
        ]


def initialize_population(
    pop_size: int,
    catalog: Sequence[DesignVariable],
    rng: np.random.Generator,
    method: str = "lhs",
) -> list[Candidate]:
    if pop_size <= 0:
        raise ValueError("pop_size must be positive.")
    key = (method or "lhs").lower()
    if key == "random":
        return RandomInitializer(catalog, rng=rng)(pop_size)
    if key == "lhs":
        return LatinHypercubeInitializer(catalog, rng=rng)(pop_size)
    raise ValueError(f"Unknown initializer '{method}'. Available: lhs, random")


__all__ = ["RandomInitializer", "LatinHypercubeInitializer", "initialize_population"]
