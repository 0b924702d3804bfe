from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from designopt.foundation.candidate import Candidate

Comparator = Callable[[int, int], int]


class TournamentSelection:
    """
    Simple tournament selection using a comparator.
    comparator(a, b) returns <0 if a better than b, >0 if b better, 0 if tie.

    Contenders are drawn uniformly with replacement; on a tie the contender
    drawn first keeps the win.
    """

    def __init__(
        self,
        tournament_size: int,
        comparator: Callable[[Sequence[Candidate]], Comparator],
        rng: np.random.Generator | None = None,
    ) -> None:
        if tournament_size <= 0:
            raise ValueError("tournament_size must be positive.")
        self.tournament_size = int(tournament_size)
        self.comparator = comparator
        self.rng = rng or np.random.default_rng()

    def __call__(self, population: Sequence[Candidate], n_parents: int) -> np.ndarray:
        pop_size = len(population)
        if pop_size == 0:
            raise ValueError("population is empty.")
        compare = self.comparator(population)
        rng = self.rng
        selected = np.empty(n_parents, dtype=int)
        for i in range(n_parents):
            contenders = rng.integers(0, pop_size, size=self.tournament_size)
            best = contenders[0]
            for idx in contenders[1:]:
                if compare(idx, best) < 0:
                    best = idx
            selected[i] = best
        return selected


def rank_crowding_comparator(population: Sequence[Candidate]) -> Comparator:
    """Lower rank wins; then the larger crowding distance; then the higher fitness."""
    ranks = np.array([c.rank for c in population], dtype=int)
    crowding = np.array([c.crowding_distance for c in population], dtype=float)
    fitness = np.array([c.fitness for c in population], dtype=float)

    def compare(a: int, b: int) -> int:
        if ranks[a] != ranks[b]:
            return -1 if ranks[a] < ranks[b] else 1
        if crowding[a] != crowding[b]:
            return -1 if crowding[a] > crowding[b] else 1
        if fitness[a] != fitness[b]:
            return -1 if fitness[a] > fitness[b] else 1
        return 0

    return compare


def fitness_comparator(population: Sequence[Candidate]) -> Comparator:
    """Higher fitness wins."""
    fitness = np.array([c.fitness for c in population], dtype=float)

    def compare(a: int, b: int) -> int:
        if fitness[a] != fitness[b]:
            return -1 if fitness[a] > fitness[b] else 1
        return 0

    return compare


__all__ = ["TournamentSelection", "rank_crowding_comparator", "fitness_comparator"]
