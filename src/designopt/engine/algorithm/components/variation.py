from __future__ import annotations

from typing import Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.operators.crossover import SBXCrossover
from designopt.operators.mutation import PolynomialMutation
from designopt.operators.selection import TournamentSelection


class VariationPipeline:
    """Tournament selection -> crossover -> per-child mutation."""

    def __init__(self, selection: TournamentSelection, crossover: SBXCrossover, mutation: PolynomialMutation) -> None:
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation

    def produce_offspring(
        self,
        parents: Sequence[Candidate],
        n_offspring: int,
        *,
        mutation_rate: float,
        tournament_size: int,
        rng: np.random.Generator,
    ) -> list[Candidate]:
        """
        Breed ``n_offspring`` fresh, unevaluated children from ``parents``.

        Each child is mutated with probability ``mutation_rate``; the
        tournament uses the current ``tournament_size``.
        """
        if n_offspring <= 0:
            return []
        self.selection.tournament_size = max(1, int(tournament_size))
        offspring: list[Candidate] = []
        while len(offspring) < n_offspring:
            i, j = self.selection(parents, 2)
            children = self.crossover(parents[int(i)], parents[int(j)], rng)
            for child in children:
                if rng.random() < mutation_rate:
                    self.mutation(child, rng)
                child.reset_evaluation()
                child.age = 0
                offspring.append(child)
        return offspring[:n_offspring]


__all__ = ["VariationPipeline"]
