"""
Single-objective generational genetic algorithm.

Per generation: evaluate the whole population as one concurrent batch,
record statistics, let the controller decide on budget/convergence, then
breed the next population (elites + tournament/SBX/mutation offspring) and
apply the adaptive schedule.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

import numpy as np

from designopt.adaptation.controller import StopReason
from designopt.engine.algorithm.components.base import EngineBase, as_objective_set
from designopt.engine.algorithm.components.evaluation import evaluate_batch, mark_failed
from designopt.engine.algorithm.components.results import EngineResult
from designopt.engine.algorithm.components.state import RunState
from designopt.engine.algorithm.components.stats import GenerationStats
from designopt.engine.algorithm.components.termination import StopSignal
from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import Objective, ObjectiveSet
from designopt.foundation.eval import Evaluator
from designopt.foundation.metrics.diversity import mean_pairwise_distance
from designopt.operators.selection import fitness_comparator


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _fitness_array(population: list[Candidate]) -> np.ndarray:
    return np.array([c.fitness for c in population], dtype=float)


def select_winner(population: list[Candidate]) -> tuple[Candidate, str | None]:
    """
    Max-fitness feasible candidate, or the max-fitness candidate with a warning.

    Ties go to the earliest candidate.
    """
    feasible = [c for c in population if c.feasible and not c.failed]
    pool = feasible or population
    best = pool[int(np.argmax(_fitness_array(pool)))]
    if feasible:
        return best, None
    return best, "No feasible candidate in the final population; returning the best infeasible one."


class GeneticAlgorithm(EngineBase):
    """
    Single-objective engine maximizing ``fitness``.

    The evaluator may return a number (the fitness) or a mapping of objective
    values; mappings are scalarized with the weights of ``objectives``.
    """

    def __init__(
        self,
        catalog,
        config=None,
        *,
        objectives: ObjectiveSet | Iterable[Objective | Mapping[str, Any]] | None = None,
        eval_backend=None,
        schedule=None,
    ) -> None:
        super().__init__(catalog, config, eval_backend=eval_backend, schedule=schedule)
        self.objectives = as_objective_set(objectives)

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
        controller = self._controller(check_convergence=True)
        variation = self._variation(fitness_comparator, state.rng)
        n_elite = min(cfg.elite_size, cfg.population_size)

        population = self._initial_population(state)
        evaluated: list[Candidate] = []
        _logger().info(
            "Starting genetic algorithm: %d variables, population %d, %d generations",
            len(self.catalog),
            cfg.population_size,
            cfg.generations,
        )

        while True:
            if stop.should_stop():
                controller.stop(StopReason.CANCELLED)
                break
            errors = await evaluate_batch(
                population,
                evaluator,
                self.eval_backend,
                self.objectives,
                multi_objective=False,
                generation=state.generation + 1,
            )
            state.generation += 1
            state.n_eval += len(population)
            state.n_failed += len(errors)
            evaluated = population
            self._record(state, evaluated, controller.mutation_rate, controller.tournament_size, len(errors))

            if stop.should_stop():
                controller.stop(StopReason.CANCELLED)
                break
            if not controller.after_generation(state.generation, state.history.best_fitness):
                break

            population = self._next_population(evaluated, n_elite, variation, controller, state)
            controller.adapt(state.generation)

        return self._finish(state, evaluated, population, controller.stop_reason)

    def _next_population(self, evaluated, n_elite, variation, controller, state: RunState) -> list[Candidate]:
        order = np.argsort(-_fitness_array(evaluated), kind="mergesort")
        elites: list[Candidate] = []
        for idx in order[:n_elite]:
            elite = evaluated[int(idx)].clone()
            elite.age += 1
            elites.append(elite)
        offspring = variation.produce_offspring(
            evaluated,
            self.config.population_size - len(elites),
            mutation_rate=controller.mutation_rate,
            tournament_size=controller.tournament_size,
            rng=state.rng,
        )
        return elites + offspring

    def _record(self, state: RunState, population, mutation_rate: float, tournament_size: int, n_failed: int) -> None:
        fitness = _fitness_array(population)
        finite = fitness[np.isfinite(fitness)]
        best = float(finite.max()) if finite.size else -math.inf
        average = float(finite.mean()) if finite.size else 0.0
        genes = np.vstack([c.gene_vector(self.catalog) for c in population])
        diversity = mean_pairwise_distance(genes, self.catalog)
        state.history.record(
            GenerationStats(
                generation=state.generation,
                best_fitness=best,
                average_fitness=average,
                diversity=diversity,
                mutation_rate=mutation_rate,
                tournament_size=tournament_size,
                failed_evaluations=n_failed,
            )
        )
        if diversity < self.config.diversity_threshold:
            _logger().debug("Generation %d: diversity %.4g below threshold", state.generation, diversity)
            state.warn(
                f"Population diversity fell below {self.config.diversity_threshold:g}; "
                "the search may have stagnated."
            )
        self._log_progress(state.generation, best, average, diversity)

    def _finish(
        self,
        state: RunState,
        evaluated: list[Candidate],
        population: list[Candidate],
        stop_reason: StopReason | None,
    ) -> EngineResult:
        reason = (stop_reason or StopReason.BUDGET).value
        if evaluated:
            best, warning = select_winner(evaluated)
            if warning:
                _logger().warning(warning)
                state.warn(warning)
        else:
            best = population[0].clone()
            mark_failed(best, "Not evaluated: the run stopped before the first generation.")
            best.evaluated = False
            state.warn("Run stopped before any candidate was evaluated.")
        if state.n_failed:
            state.warn(f"{state.n_failed} evaluation(s) failed; the affected candidates were marked infeasible.")
        if reason == StopReason.CANCELLED.value:
            _logger().info("Genetic algorithm cancelled after %d generations.", state.generation)
        final = evaluated or population
        return EngineResult(
            best=best.clone(),
            front=[best.clone()],
            population=[c.clone() for c in final],
            archive=[],
            history=state.history,
            stop_reason=reason,
            generations=state.generation,
            evaluations=state.n_eval,
            warnings=list(state.warnings),
        )


__all__ = ["GeneticAlgorithm", "select_winner"]
