"""
NSGA-II multi-objective engine.

Per generation: evaluate the pending offspring as one concurrent batch,
rank the combined population (fast non-dominated sort + crowding), keep
``population_size`` survivors, merge front 0 into the external archive,
then breed ``population_size`` offspring by (rank, crowding) tournament.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

import numpy as np

from designopt.adaptation.controller import StopReason
from designopt.engine.algorithm.components.archive import CrowdingDistanceArchive
from designopt.engine.algorithm.components.base import EngineBase, as_objective_set
from designopt.engine.algorithm.components.evaluation import evaluate_batch
from designopt.engine.algorithm.components.results import EngineResult
from designopt.engine.algorithm.components.state import RunState
from designopt.engine.algorithm.components.stats import GenerationStats
from designopt.engine.algorithm.components.termination import StopSignal
from designopt.engine.algorithm.config import MultiObjectiveConfig
from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import Objective, ObjectiveSet
from designopt.foundation.eval import Evaluator
from designopt.foundation.metrics.diversity import mean_finite
from designopt.operators.selection import rank_crowding_comparator
from .helpers import rank_population, survival_selection, truncate_by_crowding


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class NSGAII(EngineBase):
    """
    Candidate-based NSGA-II with an external crowding-distance archive.

    ``fitness`` is filled with the weighted sum of direction-normalized
    objectives for reporting only; dominance and survival never read it.
    """

    def __init__(
        self,
        catalog,
        objectives: ObjectiveSet | Iterable[Objective | Mapping[str, Any]],
        config=None,
        mo_config: MultiObjectiveConfig | Mapping[str, Any] | None = None,
        *,
        eval_backend=None,
        schedule=None,
    ) -> None:
        super().__init__(catalog, config, eval_backend=eval_backend, schedule=schedule)
        self.objectives: ObjectiveSet = as_objective_set(objectives)  # type: ignore[assignment]
        if mo_config is None:
            mo_config = MultiObjectiveConfig()
        elif not isinstance(mo_config, MultiObjectiveConfig):
            mo_config = MultiObjectiveConfig.from_dict(mo_config)
        self.mo_config = mo_config

    async def run(
        self,
        evaluator: Evaluator,
        *,
        seed: int | np.random.Generator | None = None,
        stop_signal: StopSignal | None = None,
    ) -> EngineResult:
        cfg = self.config
        state = self._new_state(seed)
        stop = self._stop_signal(stop_signal)
        controller = self._controller(check_convergence=False)
        variation = self._variation(rank_crowding_comparator, state.rng)
        archive = CrowdingDistanceArchive(self.mo_config.archive_size, self.objectives)

        population = self._initial_population(state)
        survivors: list[Candidate] = []
        _logger().info(
            "Starting NSGA-II: %d variables, %d objectives, population %d, %d generations",
            len(self.catalog),
            len(self.objectives),
            cfg.population_size,
            cfg.generations,
        )

        while True:
            if stop.should_stop():
                controller.stop(StopReason.CANCELLED)
                break
            pending = [c for c in population if not c.evaluated]
            errors = await evaluate_batch(
                pending,
                evaluator,
                self.eval_backend,
                self.objectives,
                multi_objective=True,
                generation=state.generation + 1,
            )
            state.generation += 1
            state.n_eval += len(pending)
            state.n_failed += len(errors)

            fronts = rank_population(population, self.objectives)
            survivors = survival_selection(population, fronts, cfg.population_size)
            front0 = [population[i] for i in fronts[0] if not population[i].failed] if fronts else []
            archive.update(front0)
            self._record(state, front0, survivors, controller.mutation_rate, controller.tournament_size, len(errors))

            if stop.should_stop():
                controller.stop(StopReason.CANCELLED)
                break
            if not controller.after_generation(state.generation, state.history.best_fitness):
                break

            offspring = variation.produce_offspring(
                survivors,
                cfg.population_size,
                mutation_rate=controller.mutation_rate,
                tournament_size=controller.tournament_size,
                rng=state.rng,
            )
            for survivor in survivors:
                survivor.age += 1
            population = survivors + offspring
            controller.adapt(state.generation)

        return self._finish(state, archive, survivors, controller.stop_reason)

    def _record(
        self,
        state: RunState,
        front0: list[Candidate],
        survivors: list[Candidate],
        mutation_rate: float,
        tournament_size: int,
        n_failed: int,
    ) -> None:
        fitness = np.array([c.fitness for c in survivors], dtype=float)
        finite = fitness[np.isfinite(fitness)]
        best = float(finite.max()) if finite.size else -math.inf
        average = float(finite.mean()) if finite.size else 0.0
        diversity = mean_finite(np.array([c.crowding_distance for c in front0], dtype=float))
        state.history.record(
            GenerationStats(
                generation=state.generation,
                best_fitness=best,
                average_fitness=average,
                diversity=diversity,
                pareto_front_size=len(front0),
                mutation_rate=mutation_rate,
                tournament_size=tournament_size,
                failed_evaluations=n_failed,
            )
        )
        if len(front0) > 2 and diversity < self.config.diversity_threshold:
            state.warn(
                f"Pareto front crowding fell below {self.config.diversity_threshold:g}; "
                "the front may have collapsed."
            )
        self._log_progress(state.generation, best, average, diversity)

    def _finish(
        self,
        state: RunState,
        archive: CrowdingDistanceArchive,
        survivors: list[Candidate],
        stop_reason: StopReason | None,
    ) -> EngineResult:
        reason = (stop_reason or StopReason.BUDGET).value
        members = archive.contents()
        front = truncate_by_crowding(members, self.objectives, self.mo_config.pareto_front_size)
        if not front:
            state.warn("The run produced no successfully evaluated candidate; the Pareto front is empty.")
        elif not any(c.feasible for c in front):
            state.warn("No Pareto-front candidate satisfies the objective constraints.")
        if state.n_failed:
            state.warn(f"{state.n_failed} evaluation(s) failed; the affected candidates were marked infeasible.")
        if reason == StopReason.CANCELLED.value:
            _logger().info("NSGA-II cancelled after %d generations.", state.generation)
        _logger().info("NSGA-II finished: archive %d, front %d", len(members), len(front))
        best = max(front, key=lambda c: c.fitness) if front else None
        return EngineResult(
            best=best,
            front=front,
            population=[c.clone() for c in survivors],
            archive=members,
            history=state.history,
            stop_reason=reason,
            generations=state.generation,
            evaluations=state.n_eval,
            warnings=list(state.warnings),
        )


__all__ = ["NSGAII"]
