"""
User-facing API surface for designopt.

This module exposes the small set of stable entrypoints most users need:
- Async runs: `optimize_single_objective`, `optimize_multi_objective`,
  `optimize_sustainability`.
- A blocking wrapper: `run_optimization`.

For lower-level control, import from the layered packages:
`designopt.foundation.*`, `designopt.engine.*`, `designopt.ux.*`.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Iterable, Mapping

from designopt.engine.algorithm.components.evaluation import mark_failed
from designopt.engine.algorithm.components.termination import StopSignal
from designopt.engine.algorithm.config import GeneticAlgorithmConfig, MultiObjectiveConfig
from designopt.engine.algorithm.ga import GeneticAlgorithm
from designopt.engine.algorithm.nsgaii import NSGAII
from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import DesignVariable, Objective, ObjectiveSet
from designopt.foundation.eval import EvaluationBackend, Evaluator
from designopt.foundation.exceptions import OptimizationError, UnsupportedMethodError
from designopt.foundation.presets import (
    DEFAULT_RECOMMENDATION_RULES,
    RecommendationRule,
    SustainabilityMetrics,
    sustainability_objectives,
)
from designopt.ux.results import OptimizationResult, ParetoFrontResult


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


Catalog = Iterable[DesignVariable | Mapping[str, Any]]
Objectives = ObjectiveSet | Iterable[Objective | Mapping[str, Any]]


async def optimize_single_objective(
    catalog: Catalog,
    evaluator: Evaluator,
    *,
    objectives: Objectives | None = None,
    config: GeneticAlgorithmConfig | Mapping[str, Any] | None = None,
    seed: int | None = None,
    eval_backend: EvaluationBackend | None = None,
    stop_signal: StopSignal | None = None,
    rules: Iterable[RecommendationRule] = DEFAULT_RECOMMENDATION_RULES,
) -> OptimizationResult:
    """
    Maximize the evaluator's fitness over ``catalog``.

    Args:
        catalog: Design variables (objects or plain mappings).
        evaluator: Sync or async callable ``Candidate -> number``; a mapping of
            objective values is also accepted and scalarized with the
            weights of ``objectives``.
        objectives: Needed only for mapping-returning evaluators.
        config: Engine settings.
        seed: Random seed for reproducible runs.
        eval_backend: How a generation's evaluations are dispatched.
        stop_signal: Cancellation token; a cancelled run returns its best-so-far.
        rules: Recommendation rules for the textual analysis.

    Returns:
        The report of the best candidate of the final population.
    """
    engine = GeneticAlgorithm(catalog, config, objectives=objectives, eval_backend=eval_backend)
    outcome = await engine.run(evaluator, seed=seed, stop_signal=stop_signal)
    if outcome.best is None:
        raise OptimizationError("The genetic algorithm returned no candidate.")
    return OptimizationResult.from_candidate(
        outcome.best,
        history=outcome.history,
        population=outcome.population,
        rules=rules,
        warnings=outcome.warnings,
        stop_reason=outcome.stop_reason,
    )


async def optimize_multi_objective(
    catalog: Catalog,
    objectives: Objectives,
    evaluator: Evaluator,
    *,
    config: GeneticAlgorithmConfig | Mapping[str, Any] | None = None,
    mo_config: MultiObjectiveConfig | Mapping[str, Any] | None = None,
    seed: int | None = None,
    eval_backend: EvaluationBackend | None = None,
    stop_signal: StopSignal | None = None,
    rules: Iterable[RecommendationRule] = DEFAULT_RECOMMENDATION_RULES,
) -> ParetoFrontResult:
    """Approximate the Pareto front with NSGA-II; the evaluator returns objective name -> value."""
    engine = NSGAII(catalog, objectives, config, mo_config, eval_backend=eval_backend)
    outcome = await engine.run(evaluator, seed=seed, stop_signal=stop_signal)
    results = [
        OptimizationResult.from_candidate(
            cand,
            history=outcome.history,
            population=outcome.front,
            rules=rules,
            stop_reason=outcome.stop_reason,
        )
        for cand in outcome.front
    ]
    return ParetoFrontResult(
        objectives=engine.objectives,
        front=outcome.front,
        results=results,
        archive=outcome.archive,
        history=outcome.history,
        stop_reason=outcome.stop_reason,
        warnings=outcome.warnings,
    )


def _as_objective_values(result: Any) -> Any:
    if isinstance(result, SustainabilityMetrics):
        return result.objective_values()
    return result


def _sustainability_evaluator(evaluator: Evaluator) -> Evaluator:
    if not inspect.iscoroutinefunction(evaluator):

        def wrapped_sync(candidate: Candidate) -> Any:
            result = evaluator(candidate)
            if inspect.isawaitable(result):
                return _await_metrics(result)
            return _as_objective_values(result)

        return wrapped_sync

    async def wrapped(candidate: Candidate) -> Any:
        return _as_objective_values(await evaluator(candidate))

    return wrapped


async def _await_metrics(pending: Any) -> Any:
    return _as_objective_values(await pending)


async def optimize_sustainability(
    catalog: Catalog,
    evaluator: Evaluator,
    *,
    config: GeneticAlgorithmConfig | Mapping[str, Any] | None = None,
    mo_config: MultiObjectiveConfig | Mapping[str, Any] | None = None,
    seed: int | None = None,
    eval_backend: EvaluationBackend | None = None,
    stop_signal: StopSignal | None = None,
    objectives: Objectives | None = None,
) -> OptimizationResult:
    """
    Multi-objective run over the sustainability objective set, reduced to its TOPSIS compromise.

    The evaluator returns :class:`SustainabilityMetrics` or a mapping keyed by
    the sustainability objective names. A fresh engine is built for this run;
    no caller-owned objective set is modified.

    When the run leaves no usable front (cancelled before the first
    generation, or every evaluation failed) the result describes an
    infeasible, unevaluated placeholder carrying the run warnings.
    """
    front = await optimize_multi_objective(
        catalog,
        objectives if objectives is not None else sustainability_objectives(),
        _sustainability_evaluator(evaluator),
        config=config,
        mo_config=mo_config,
        seed=seed,
        eval_backend=eval_backend,
        stop_signal=stop_signal,
    )
    if not front.front:
        _logger().warning("Sustainability run ended without a usable Pareto front (%s).", front.stop_reason)
        placeholder = Candidate()
        mark_failed(placeholder, "No successfully evaluated candidate.")
        placeholder.evaluated = False
        return OptimizationResult.from_candidate(
            placeholder,
            history=front.history,
            warnings=front.warnings,
            stop_reason=front.stop_reason,
        )
    return front.best_compromise()


_MODES = {
    "single": optimize_single_objective,
    "multi": optimize_multi_objective,
    "sustainability": optimize_sustainability,
}


def run_optimization(mode: str, *args: Any, **kwargs: Any) -> OptimizationResult | ParetoFrontResult:
    """
    Blocking wrapper around the async entrypoints.

    ``mode`` is ``"single"``, ``"multi"`` or ``"sustainability"``; the remaining
    arguments are forwarded unchanged. Must not be called from a running
    event loop.
    """
    runner = _MODES.get(str(mode).lower())
    if runner is None:
        raise UnsupportedMethodError("mode", mode, list(_MODES))
    _logger().debug("Running %s optimization", mode)
    return asyncio.run(runner(*args, **kwargs))


__all__ = [
    "optimize_single_objective",
    "optimize_multi_objective",
    "optimize_sustainability",
    "run_optimization",
]
