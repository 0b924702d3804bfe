"""
Write-back of evaluator outcomes into candidates.

Outcomes are applied only after the whole batch of a generation has
completed. A failed evaluation leaves the candidate infeasible with the
worst possible fitness instead of a competitive placeholder.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Mapping, Sequence

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import ObjectiveSet
from designopt.foundation.eval import EvaluationBackend, EvaluationOutcome, Evaluator
from designopt.foundation.exceptions import EvaluationError, OptimizationError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def mark_failed(candidate: Candidate, message: str) -> None:
    candidate.objectives = {}
    candidate.constraints = {}
    candidate.fitness = -math.inf
    candidate.rank = 0
    candidate.crowding_distance = 0.0
    candidate.feasible = False
    candidate.evaluated = True
    candidate.error = message


def _describe(error: Exception) -> str:
    return f"{type(error).__name__}: {error}"


def _apply_objective_values(candidate: Candidate, values: Mapping, objectives: ObjectiveSet) -> None:
    raw = objectives.vector(values)
    candidate.objectives = objectives.as_mapping(raw)
    candidate.constraints = objectives.constrained_values(raw)
    candidate.feasible = objectives.is_feasible(raw)
    candidate.fitness = objectives.scalar_fitness(raw)


def apply_scalar_outcome(candidate: Candidate, outcome: EvaluationOutcome, objectives: ObjectiveSet | None) -> bool:
    """
    Store a single-objective result.

    The evaluator may return a real number (the fitness, higher is better) or
    a mapping of objective values, which is scalarized with the objective
    weights. Returns False when the candidate was marked failed.
    """
    if not outcome.ok:
        mark_failed(candidate, _describe(outcome.error))
        return False
    value = outcome.value
    try:
        if isinstance(value, Mapping):
            if objectives is None:
                raise EvaluationError("Evaluator returned objective values but no objective set was given.")
            _apply_objective_values(candidate, value, objectives)
        elif isinstance(value, Real) and not isinstance(value, bool):
            fitness = float(value)
            if not math.isfinite(fitness):
                raise EvaluationError(f"Evaluator returned a non-finite fitness: {fitness}.")
            candidate.objectives = {}
            candidate.constraints = {}
            candidate.fitness = fitness
            candidate.feasible = True
        else:
            raise EvaluationError(f"Evaluator returned {type(value).__name__}; expected a number or a mapping.")
    except EvaluationError as exc:
        mark_failed(candidate, _describe(exc))
        return False
    candidate.evaluated = True
    candidate.error = None
    return True


def apply_objective_outcome(candidate: Candidate, outcome: EvaluationOutcome, objectives: ObjectiveSet) -> bool:
    """Store a multi-objective result; returns False when the candidate was marked failed."""
    if not outcome.ok:
        mark_failed(candidate, _describe(outcome.error))
        return False
    try:
        _apply_objective_values(candidate, outcome.value, objectives)
    except EvaluationError as exc:
        mark_failed(candidate, _describe(exc))
        return False
    candidate.evaluated = True
    candidate.error = None
    return True


async def evaluate_batch(
    candidates: Sequence[Candidate],
    evaluator: Evaluator,
    backend: EvaluationBackend,
    objectives: ObjectiveSet | None,
    *,
    multi_objective: bool,
    generation: int,
) -> list[str]:
    """
    Evaluate one generation and write the outcomes back.

    Returns the error messages of failed candidates; failures are logged once
    per batch at warning level.
    """
    if multi_objective and objectives is None:
        raise OptimizationError("Multi-objective evaluation needs an objective set.")
    if not candidates:
        return []
    outcomes = await backend.evaluate(candidates, evaluator)
    if len(outcomes) != len(candidates):
        raise RuntimeError(f"Evaluation backend returned {len(outcomes)} outcomes for {len(candidates)} candidates.")
    errors: list[str] = []
    for candidate, outcome in zip(candidates, outcomes):
        if multi_objective:
            ok = apply_objective_outcome(candidate, outcome, objectives)  # type: ignore[arg-type]
        else:
            ok = apply_scalar_outcome(candidate, outcome, objectives)
        if not ok:
            errors.append(candidate.error or "")
    if errors:
        _logger().warning(
            "Generation %d: %d of %d evaluations failed (first: %s)",
            generation,
            len(errors),
            len(candidates),
            errors[0],
        )
    return errors


__all__ = ["mark_failed", "apply_scalar_outcome", "apply_objective_outcome", "evaluate_batch"]
