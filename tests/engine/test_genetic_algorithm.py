from __future__ import annotations

import asyncio

import numpy as np
import pytest

from designopt.engine.algorithm.config import GeneticAlgorithmConfig
from designopt.engine.algorithm.ga import GeneticAlgorithm, select_winner
from designopt.foundation.candidate import Candidate
from designopt.foundation.exceptions import CatalogError, InvalidParameterError


def _config(**overrides) -> GeneticAlgorithmConfig:
    base = dict(population_size=20, generations=30, elite_size=2, convergence_tolerance=0.0)
    base.update(overrides)
    return GeneticAlgorithmConfig(**base)


@pytest.mark.smoke
def test_converges_to_cheapest_design(beam_catalog, cost_weight_objectives, cost_weight_evaluator):
    engine = GeneticAlgorithm(beam_catalog, _config(), objectives=cost_weight_objectives)
    result = asyncio.run(engine.run(cost_weight_evaluator, seed=42))
    assert result.best.genes == {"beamWidth": 200.0, "concreteGrade": "fc20"}
    assert result.best.objectives == {"cost": 2000.0, "weight": 400.0}
    assert result.stop_reason == "budget"
    assert result.generations == 30
    assert len(result.history) == 30


def test_async_evaluator_returning_fitness(beam_catalog):
    async def evaluator(candidate):
        await asyncio.sleep(0)
        return -float(candidate.genes["beamWidth"])

    engine = GeneticAlgorithm(beam_catalog, _config(generations=15))
    result = asyncio.run(engine.run(evaluator, seed=1))
    assert result.best.genes["beamWidth"] == 200.0
    assert result.best.fitness == -200.0


def test_every_evaluated_candidate_is_in_bounds(mixed_catalog):
    violations: list[dict] = []

    def evaluator(candidate):
        if not candidate.in_bounds(mixed_catalog):
            violations.append(dict(candidate.genes))
        return float(candidate.genes["ratio"]) - float(candidate.genes["beamWidth"]) / 600.0

    for seed in range(3):
        engine = GeneticAlgorithm(mixed_catalog, _config(generations=10, mutation_rate=0.9))
        asyncio.run(engine.run(evaluator, seed=seed))
    assert violations == []


def test_best_fitness_history_never_decreases_with_elitism(beam_catalog, cost_weight_objectives, cost_weight_evaluator):
    engine = GeneticAlgorithm(beam_catalog, _config(generations=20), objectives=cost_weight_objectives)
    result = asyncio.run(engine.run(cost_weight_evaluator, seed=3))
    best = result.history.best_fitness
    assert all(b >= a for a, b in zip(best, best[1:]))


def test_stops_early_on_convergence(beam_catalog):
    engine = GeneticAlgorithm(beam_catalog, _config(generations=200, convergence_tolerance=1e-6))
    result = asyncio.run(engine.run(lambda c: 1.0, seed=0))
    assert result.stop_reason == "converged"
    assert result.generations == 10


def test_same_seed_same_result(beam_catalog, cost_weight_objectives, cost_weight_evaluator):
    def run():
        engine = GeneticAlgorithm(beam_catalog, _config(generations=8), objectives=cost_weight_objectives)
        return asyncio.run(engine.run(cost_weight_evaluator, seed=123))

    a, b = run(), run()
    assert a.history.best_fitness == b.history.best_fitness
    assert [c.genes for c in a.population] == [c.genes for c in b.population]


def test_adaptation_is_recorded_and_config_untouched(beam_catalog):
    cfg = _config(generations=10, mutation_rate=0.2)
    engine = GeneticAlgorithm(beam_catalog, cfg)
    result = asyncio.run(engine.run(lambda c: float(c.genes["beamWidth"]), seed=0))
    rates = [e.mutation_rate for e in result.history]
    sizes = [e.tournament_size for e in result.history]
    assert rates[0] == pytest.approx(0.2)
    assert rates == sorted(rates, reverse=True)
    assert sizes[0] == 5 and sizes[-1] >= 3
    assert cfg.mutation_rate == 0.2
    assert cfg.tournament_size == 5


def test_diversity_is_recorded(beam_catalog):
    engine = GeneticAlgorithm(beam_catalog, _config(generations=5))
    result = asyncio.run(engine.run(lambda c: 0.0, seed=0))
    assert all(e.diversity >= 0.0 for e in result.history)
    assert result.history[0].diversity > 0.0


def test_configuration_errors_fail_before_running():
    with pytest.raises(CatalogError):
        GeneticAlgorithm([], _config())
    with pytest.raises(InvalidParameterError):
        GeneticAlgorithm(
            [{"name": "x", "kind": "continuous", "lower": 0, "upper": 1}],
            {"populationSize": 0},
        )


def test_select_winner_prefers_feasible():
    feasible = Candidate(fitness=1.0, feasible=True, evaluated=True)
    infeasible = Candidate(fitness=5.0, feasible=False, evaluated=True)
    best, warning = select_winner([infeasible, feasible])
    assert best is feasible and warning is None
    best, warning = select_winner([infeasible])
    assert best is infeasible and warning


def test_population_size_is_constant(mixed_catalog):
    seen = 0

    def evaluator(candidate):
        nonlocal seen
        seen += 1
        return 0.0

    engine = GeneticAlgorithm(mixed_catalog, _config(population_size=13, generations=4, elite_size=3))
    result = asyncio.run(engine.run(evaluator, seed=0))
    assert len(result.population) == 13
    assert seen == 13 * 4
    assert result.evaluations == 13 * 4
    assert np.isfinite(result.best.fitness)
