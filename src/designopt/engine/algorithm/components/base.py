"""
Shared setup for the single- and multi-objective engines.

Both engines read an immutable catalog, objective set and configuration;
changing any of them requires a fresh engine instance.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import numpy as np

from designopt.adaptation.controller import AdaptationSchedule, ConvergenceController
from designopt.engine.algorithm.components.state import RunState
from designopt.engine.algorithm.components.stats import StatsHistory
from designopt.engine.algorithm.components.termination import StopSignal
from designopt.engine.algorithm.components.variation import VariationPipeline
from designopt.engine.algorithm.config import GeneticAlgorithmConfig
from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import DesignVariable, Objective, ObjectiveSet, validate_catalog
from designopt.foundation.eval import EvaluationBackend, GatherEvalBackend
from designopt.operators.crossover import SBXCrossover
from designopt.operators.initialize import initialize_population
from designopt.operators.mutation import PolynomialMutation
from designopt.operators.selection import TournamentSelection

_logger = logging.getLogger(__name__)

SBX_ETA = 20.0
PM_ETA = 20.0
PM_STEP_FRACTION = 0.1


def as_objective_set(objectives: ObjectiveSet | Iterable[Objective | Mapping[str, Any]] | None) -> ObjectiveSet | None:
    if objectives is None or isinstance(objectives, ObjectiveSet):
        return objectives
    return ObjectiveSet(objectives)


class EngineBase:
    def __init__(
        self,
        catalog: Iterable[DesignVariable | Mapping[str, Any]],
        config: GeneticAlgorithmConfig | Mapping[str, Any] | None = None,
        *,
        eval_backend: EvaluationBackend | None = None,
        schedule: AdaptationSchedule | None = None,
    ) -> None:
        self.catalog: tuple[DesignVariable, ...] = validate_catalog(catalog)
        if config is None:
            config = GeneticAlgorithmConfig()
        elif not isinstance(config, GeneticAlgorithmConfig):
            config = GeneticAlgorithmConfig.from_dict(config)
        self.config = config
        self.eval_backend = eval_backend or GatherEvalBackend()
        self.schedule = schedule or AdaptationSchedule()

    def _new_state(self, seed: int | np.random.Generator | None) -> RunState:
        rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
        return RunState(rng=rng, history=StatsHistory())

    def _initial_population(self, state: RunState) -> list[Candidate]:
        return initialize_population(self.config.population_size, self.catalog, state.rng, self.config.initializer)

    def _controller(self, *, check_convergence: bool) -> ConvergenceController:
        cfg = self.config
        return ConvergenceController(
            cfg.generations,
            mutation_rate=cfg.mutation_rate,
            tournament_size=cfg.tournament_size,
            tolerance=cfg.convergence_tolerance,
            adaptive=cfg.adaptive_parameters,
            check_convergence=check_convergence,
            schedule=self.schedule,
        )

    def _variation(self, comparator, rng: np.random.Generator) -> VariationPipeline:
        return VariationPipeline(
            TournamentSelection(self.config.tournament_size, comparator, rng=rng),
            SBXCrossover(self.catalog, prob_crossover=self.config.crossover_rate, eta=SBX_ETA),
            PolynomialMutation(self.catalog, eta=PM_ETA, step_fraction=PM_STEP_FRACTION),
        )

    @staticmethod
    def _stop_signal(stop_signal: StopSignal | None) -> StopSignal:
        return stop_signal if stop_signal is not None else StopSignal()

    def _log_progress(self, generation: int, best: float, average: float, diversity: float) -> None:
        log = _logger.info if generation % 50 == 0 else _logger.debug
        log(
            "%s generation %d/%d: best=%.6g avg=%.6g diversity=%.4g",
            type(self).__name__,
            generation,
            self.config.generations,
            best,
            average,
            diversity,
        )


__all__ = ["EngineBase", "as_objective_set", "SBX_ETA", "PM_ETA", "PM_STEP_FRACTION"]
