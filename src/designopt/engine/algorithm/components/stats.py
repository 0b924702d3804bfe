from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterator


@dataclass(frozen=True)
class GenerationStats:
    """One entry of the per-generation statistics history."""

    generation: int
    best_fitness: float
    average_fitness: float
    diversity: float
    pareto_front_size: int = 0
    mutation_rate: float = 0.0
    tournament_size: int = 0
    failed_evaluations: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StatsHistory:
    """Append-only statistics history owned by one engine run."""

    def __init__(self) -> None:
        self._entries: list[GenerationStats] = []

    def record(self, entry: GenerationStats) -> None:
        self._entries.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[GenerationStats]:
        return iter(self._entries)

    def __getitem__(self, item: int) -> GenerationStats:
        return self._entries[item]

    @property
    def last(self) -> GenerationStats | None:
        return self._entries[-1] if self._entries else None

    @property
    def best_fitness(self) -> list[float]:
        return [e.best_fitness for e in self._entries]

    @property
    def average_fitness(self) -> list[float]:
        return [e.average_fitness for e in self._entries]

    @property
    def diversity(self) -> list[float]:
        return [e.diversity for e in self._entries]

    def entries(self) -> list[GenerationStats]:
        return list(self._entries)

    def to_records(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._entries]


__all__ = ["GenerationStats", "StatsHistory"]
