"""Run configuration for the genetic and NSGA-II engines."""

from __future__ import annotations

import json
import math
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

from designopt.adaptation.controller import AdaptationSchedule
from designopt.foundation.exceptions import InvalidParameterError, UnsupportedMethodError

SUPPORTED_METHODS = ("nsga2",)
_METHOD_ALIASES = {"nsga2": "nsga2", "nsgaii": "nsga2"}
SUPPORTED_DIVERSITY = ("crowding",)
SUPPORTED_INITIALIZERS = ("lhs", "random")

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None = None):
        """Build from snake_case or camelCase keys; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _snake(str(key))
            if name not in known:
                raise InvalidParameterError(str(key), value, f"one of: {', '.join(sorted(known))}")
            kwargs[name] = value
        return cls(**kwargs)

    def with_updates(self, **changes: Any):
        return replace(self, **changes)


def _check_int(name: str, value: Any, minimum: int) -> int:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or int(value) != value
        or value < minimum
    ):
        raise InvalidParameterError(name, value, f"an integer >= {minimum}")
    return int(value)


def _check_unit(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= float(value) <= 1.0:
        raise InvalidParameterError(name, value, "a number in [0, 1]")
    return float(value)


def _check_non_negative(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise InvalidParameterError(name, value, "a finite number >= 0")
    return float(value)


@dataclass(frozen=True)
class GeneticAlgorithmConfig(_SerializableConfig):
    """
    Settings shared by both engines.

    ``elite_size`` only applies to the single-objective engine and is capped
    at the population size. ``mutation_rate`` is the per-child mutation
    probability and the starting point of the adaptive decay.
    """

    population_size: int = 100
    generations: int = 500
    crossover_rate: float = 0.8
    mutation_rate: float = 0.1
    elite_size: int = 10
    tournament_size: int = 5
    diversity_threshold: float = 0.01
    convergence_tolerance: float = 1e-6
    adaptive_parameters: bool = True
    initializer: str = "lhs"

    def __post_init__(self) -> None:
        object.__setattr__(self, "population_size", _check_int("population_size", self.population_size, 1))
        object.__setattr__(self, "generations", _check_int("generations", self.generations, 1))
        object.__setattr__(self, "crossover_rate", _check_unit("crossover_rate", self.crossover_rate))
        object.__setattr__(self, "mutation_rate", _check_unit("mutation_rate", self.mutation_rate))
        object.__setattr__(self, "elite_size", _check_int("elite_size", self.elite_size, 0))
        object.__setattr__(self, "tournament_size", _check_int("tournament_size", self.tournament_size, 1))
        object.__setattr__(
            self, "diversity_threshold", _check_non_negative("diversity_threshold", self.diversity_threshold)
        )
        object.__setattr__(
            self, "convergence_tolerance", _check_non_negative("convergence_tolerance", self.convergence_tolerance)
        )
        object.__setattr__(self, "adaptive_parameters", bool(self.adaptive_parameters))
        key = str(self.initializer).lower()
        if key not in SUPPORTED_INITIALIZERS:
            raise UnsupportedMethodError("initializer", self.initializer, list(SUPPORTED_INITIALIZERS))
        object.__setattr__(self, "initializer", key)


@dataclass(frozen=True)
class MultiObjectiveConfig(_SerializableConfig):
    method: str = "nsga2"
    pareto_front_size: int = 50
    archive_size: int = 200
    diversity_maintenance: str = "crowding"

    def __post_init__(self) -> None:
        method = _METHOD_ALIASES.get(str(self.method).lower().replace("-", ""), str(self.method))
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError("method", self.method, list(SUPPORTED_METHODS))
        object.__setattr__(self, "method", method)
        diversity = str(self.diversity_maintenance).lower()
        if diversity not in SUPPORTED_DIVERSITY:
            raise UnsupportedMethodError("diversity_maintenance", self.diversity_maintenance, list(SUPPORTED_DIVERSITY))
        object.__setattr__(self, "diversity_maintenance", diversity)
        object.__setattr__(self, "pareto_front_size", _check_int("pareto_front_size", self.pareto_front_size, 1))
        object.__setattr__(self, "archive_size", _check_int("archive_size", self.archive_size, 1))


__all__ = [
    "AdaptationSchedule",
    "GeneticAlgorithmConfig",
    "MultiObjectiveConfig",
    "SUPPORTED_METHODS",
    "SUPPORTED_DIVERSITY",
    "SUPPORTED_INITIALIZERS",
]
