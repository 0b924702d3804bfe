"""
Design variable catalog and objective schema.

A catalog is an ordered, read-only sequence of :class:`DesignVariable`. The
active objectives are wrapped in an :class:`ObjectiveSet` which fixes the
column order of every objective table used by the engines, so evaluator
results are checked against the schema once, at construction of the vector.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Sequence

import numpy as np

from designopt.foundation.exceptions import CatalogError, EvaluationError, ObjectiveError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class VariableKind(str, Enum):
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"
    CATEGORICAL = "categorical"


class Direction(str, Enum):
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


GeneValue = float | str


@dataclass(frozen=True)
class DesignVariable:
    """
    One tunable design parameter.

    Discrete variables take values on the grid ``lower + k * step`` inside
    ``[lower, upper]``; continuous variables take any value in the interval;
    categorical variables take one of ``options`` (their numeric bounds are the
    option indices).
    """

    name: str
    kind: VariableKind
    lower: float = 0.0
    upper: float = 0.0
    step: float = 1.0
    options: tuple[str, ...] = ()
    current: GeneValue | None = None
    description: str = ""
    units: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise CatalogError("Design variables need a non-empty name.")
        try:
            kind = VariableKind(self.kind)
        except ValueError as exc:
            raise CatalogError(f"Unknown variable kind '{self.kind}' for '{self.name}'.", self.name) from exc
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "options", tuple(str(opt) for opt in self.options))

        if kind is VariableKind.CATEGORICAL:
            if not self.options:
                raise CatalogError(f"Categorical variable '{self.name}' has no options.", self.name)
            if len(set(self.options)) != len(self.options):
                raise CatalogError(f"Categorical variable '{self.name}' has duplicate options.", self.name)
            object.__setattr__(self, "lower", 0.0)
            object.__setattr__(self, "upper", float(len(self.options) - 1))
            return

        lower = float(self.lower)
        upper = float(self.upper)
        if not (math.isfinite(lower) and math.isfinite(upper)):
            raise CatalogError(f"Bounds of '{self.name}' must be finite.", self.name)
        if lower > upper:
            raise CatalogError(f"Lower bound exceeds upper bound for '{self.name}'.", self.name)
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)
        if kind is VariableKind.DISCRETE:
            step = float(self.step)
            if not math.isfinite(step) or step <= 0.0:
                raise CatalogError(f"Step of discrete variable '{self.name}' must be positive.", self.name)
            object.__setattr__(self, "step", step)

    @property
    def is_numeric(self) -> bool:
        return self.kind is not VariableKind.CATEGORICAL

    @property
    def span(self) -> float:
        return self.upper - self.lower

    @property
    def n_levels(self) -> int:
        """Number of admissible values for discrete/categorical variables (0 for continuous)."""
        if self.kind is VariableKind.CATEGORICAL:
            return len(self.options)
        if self.kind is VariableKind.DISCRETE:
            return int(math.floor(self.span / self.step + 1e-9)) + 1
        return 0

    def levels(self) -> np.ndarray:
        """Grid values of a discrete variable, anchored at ``lower``."""
        if self.kind is not VariableKind.DISCRETE:
            raise CatalogError(f"'{self.name}' is not a discrete variable.", self.name)
        return self.lower + self.step * np.arange(self.n_levels, dtype=float)

    def level_value(self, index: int) -> GeneValue:
        if self.kind is VariableKind.CATEGORICAL:
            return self.options[index]
        return self.lower + self.step * index

    def contains(self, value: Any, *, tol: float = 1e-9) -> bool:
        if self.kind is VariableKind.CATEGORICAL:
            return value in self.options
        if isinstance(value, str):
            return False
        v = float(value)
        if not math.isfinite(v) or v < self.lower - tol or v > self.upper + tol:
            return False
        if self.kind is VariableKind.DISCRETE:
            k = (v - self.lower) / self.step
            return abs(k - round(k)) <= tol * max(1.0, abs(k))
        return True

    def repair(self, value: float) -> float:
        """Clamp to bounds and, for discrete variables, snap to the nearest grid level."""
        v = min(max(float(value), self.lower), self.upper)
        if self.kind is VariableKind.DISCRETE:
            k = math.floor((v - self.lower) / self.step + 0.5)
            k = min(max(k, 0), self.n_levels - 1)
            v = self.lower + self.step * k
        return v

    def encode(self, value: GeneValue) -> float:
        """Numeric encoding of a gene (option index for categorical variables)."""
        if self.kind is VariableKind.CATEGORICAL:
            return float(self.options.index(value))
        return float(value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DesignVariable":
        """
        Build a variable from a plain mapping.

        Accepts ``kind`` or ``type`` and either ``lower``/``upper`` or a
        ``bounds`` mapping with ``min``/``max``.
        """
        bounds = data.get("bounds") or {}
        step = data.get("step")
        kind = data.get("kind", data.get("type"))
        if kind is None:
            raise CatalogError(f"Variable '{data.get('name')}' has no kind.", data.get("name"))
        return cls(
            name=data.get("name", ""),
            kind=kind,
            lower=data.get("lower", bounds.get("min", 0.0)),
            upper=data.get("upper", bounds.get("max", 0.0)),
            step=1.0 if step is None else step,
            options=tuple(data.get("options") or ()),
            current=data.get("current"),
            description=data.get("description", ""),
            units=data.get("units", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["kind"] = self.kind.value
        out["options"] = list(self.options)
        return out


def validate_catalog(catalog: Iterable[DesignVariable | Mapping[str, Any]]) -> tuple[DesignVariable, ...]:
    """Return the catalog as a tuple after checking it is non-empty with unique names."""
    variables = tuple(v if isinstance(v, DesignVariable) else DesignVariable.from_dict(v) for v in catalog)
    if not variables:
        raise CatalogError("The design variable catalog is empty.")
    seen: set[str] = set()
    for var in variables:
        if var.name in seen:
            raise CatalogError(f"Duplicate design variable '{var.name}'.", var.name)
        seen.add(var.name)
    return variables


@dataclass(frozen=True)
class ObjectiveConstraint:
    min: float | None = None
    max: float | None = None

    def satisfied(self, value: float) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


@dataclass(frozen=True)
class Objective:
    name: str
    direction: Direction = Direction.MINIMIZE
    weight: float = 1.0
    priority: str = "medium"
    constraint: ObjectiveConstraint | None = None
    units: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ObjectiveError("Objectives need a non-empty name.")
        try:
            object.__setattr__(self, "direction", Direction(self.direction))
        except ValueError as exc:
            raise ObjectiveError(f"Unknown direction '{self.direction}' for '{self.name}'.", self.name) from exc
        weight = float(self.weight)
        if not (0.0 <= weight <= 1.0):
            raise ObjectiveError(f"Weight of '{self.name}' must lie in [0, 1].", self.name)
        object.__setattr__(self, "weight", weight)
        if isinstance(self.constraint, Mapping):
            object.__setattr__(
                self,
                "constraint",
                ObjectiveConstraint(min=self.constraint.get("min"), max=self.constraint.get("max")),
            )

    @property
    def maximize(self) -> bool:
        return self.direction is Direction.MAXIMIZE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Objective":
        return cls(
            name=data.get("name", ""),
            direction=data.get("direction", data.get("type", Direction.MINIMIZE)),
            weight=data.get("weight", 1.0),
            priority=data.get("priority", "medium"),
            constraint=data.get("constraint"),
            units=data.get("units", ""),
        )


class ObjectiveSet:
    """
    Fixed-schema view over the active objectives.

    Column ``j`` of every objective table corresponds to ``objectives[j]``.
    """

    def __init__(self, objectives: Iterable[Objective | Mapping[str, Any]]) -> None:
        items = tuple(o if isinstance(o, Objective) else Objective.from_dict(o) for o in objectives)
        if not items:
            raise ObjectiveError("The objective set is empty.")
        index: dict[str, int] = {}
        for j, obj in enumerate(items):
            if obj.name in index:
                raise ObjectiveError(f"Duplicate objective '{obj.name}'.", obj.name)
            index[obj.name] = j
        self._objectives = items
        self._index = index

    def __repr__(self) -> str:
        return f"ObjectiveSet({', '.join(self.names)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectiveSet):
            return NotImplemented
        return self._objectives == other._objectives

    __hash__ = None  # type: ignore[assignment]

    @property
    def objectives(self) -> tuple[Objective, ...]:
        return self._objectives

    def __len__(self) -> int:
        return len(self.objectives)

    def __iter__(self) -> Iterator[Objective]:
        return iter(self.objectives)

    def __getitem__(self, item: int) -> Objective:
        return self.objectives[item]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(o.name for o in self.objectives)

    @property
    def weights(self) -> np.ndarray:
        return np.array([o.weight for o in self.objectives], dtype=float)

    @property
    def maximize(self) -> np.ndarray:
        return np.array([o.maximize for o in self.objectives], dtype=bool)

    @property
    def signs(self) -> np.ndarray:
        """+1 for minimized and -1 for maximized objectives."""
        return np.where(self.maximize, -1.0, 1.0)

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError as exc:
            raise ObjectiveError(f"Unknown objective '{name}'.", name) from exc

    def vector(self, values: Mapping[str, Any]) -> np.ndarray:
        """Raw objective vector in schema order; missing or non-finite values raise EvaluationError."""
        if not isinstance(values, Mapping):
            raise EvaluationError(f"Expected a mapping of objective values, got {type(values).__name__}.")
        out = np.empty(len(self.objectives), dtype=float)
        for j, name in enumerate(self.names):
            if name not in values:
                raise EvaluationError(f"Evaluator result is missing objective '{name}'.", name)
            try:
                v = float(values[name])
            except (TypeError, ValueError) as exc:
                raise EvaluationError(f"Objective '{name}' is not numeric: {values[name]!r}.", name) from exc
            if not math.isfinite(v):
                raise EvaluationError(f"Objective '{name}' is not finite: {v}.", name)
            out[j] = v
        extra = set(values) - set(self._index)
        if extra:
            _logger().debug("Ignoring values for inactive objectives: %s", ", ".join(sorted(map(str, extra))))
        return out

    def normalized(self, raw: np.ndarray) -> np.ndarray:
        """Direction-normalized values (lower is better) for one vector or a (N, M) table."""
        return np.asarray(raw, dtype=float) * self.signs

    def is_feasible(self, raw: np.ndarray) -> bool:
        for obj, value in zip(self.objectives, raw):
            if obj.constraint is not None and not obj.constraint.satisfied(float(value)):
                return False
        return True

    def scalar_fitness(self, raw: np.ndarray) -> float:
        """Weighted sum of direction-normalized values (higher is better)."""
        return float(-np.dot(self.weights, self.normalized(raw)))

    def as_mapping(self, raw: Sequence[float]) -> dict[str, float]:
        return {name: float(v) for name, v in zip(self.names, raw)}

    def constrained_values(self, raw: Sequence[float]) -> dict[str, float]:
        return {o.name: float(v) for o, v in zip(self.objectives, raw) if o.constraint is not None}


__all__ = [
    "VariableKind",
    "Direction",
    "GeneValue",
    "DesignVariable",
    "validate_catalog",
    "ObjectiveConstraint",
    "Objective",
    "ObjectiveSet",
]
