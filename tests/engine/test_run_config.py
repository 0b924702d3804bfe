from __future__ import annotations

import json

import pytest

from designopt.engine.algorithm.config import GeneticAlgorithmConfig, MultiObjectiveConfig
from designopt.foundation.exceptions import ConfigurationError, InvalidParameterError, UnsupportedMethodError


def test_defaults():
    cfg = GeneticAlgorithmConfig()
    assert cfg.population_size == 100
    assert cfg.generations == 500
    assert cfg.crossover_rate == 0.8
    assert cfg.mutation_rate == 0.1
    assert cfg.elite_size == 10
    assert cfg.tournament_size == 5
    assert cfg.diversity_threshold == 0.01
    assert cfg.convergence_tolerance == 1e-6
    assert cfg.adaptive_parameters is True
    mo = MultiObjectiveConfig()
    assert (mo.method, mo.pareto_front_size, mo.archive_size, mo.diversity_maintenance) == (
        "nsga2",
        50,
        200,
        "crowding",
    )


def test_from_dict_accepts_camel_and_snake_case():
    cfg = GeneticAlgorithmConfig.from_dict({"populationSize": 20, "elite_size": 2, "adaptiveParameters": False})
    assert cfg.population_size == 20
    assert cfg.elite_size == 2
    assert cfg.adaptive_parameters is False
    mo = MultiObjectiveConfig.from_dict({"paretoFrontSize": 10, "archiveSize": 30})
    assert (mo.pareto_front_size, mo.archive_size) == (10, 30)


def test_round_trip_through_dict_and_json():
    cfg = GeneticAlgorithmConfig(population_size=30, generations=12)
    assert GeneticAlgorithmConfig.from_dict(cfg.to_dict()) == cfg
    assert json.loads(cfg.to_json())["population_size"] == 30


def test_with_updates_returns_new_object():
    cfg = GeneticAlgorithmConfig()
    updated = cfg.with_updates(generations=10)
    assert updated.generations == 10
    assert cfg.generations == 500


@pytest.mark.parametrize(
    "field, value",
    [
        ("population_size", 0),
        ("population_size", -5),
        ("generations", 0),
        ("generations", 2.5),
        ("crossover_rate", 1.5),
        ("mutation_rate", -0.1),
        ("tournament_size", 0),
        ("elite_size", -1),
        ("convergence_tolerance", float("nan")),
        ("population_size", True),
    ],
)
def test_invalid_values_fail_fast(field, value):
    with pytest.raises(InvalidParameterError):
        GeneticAlgorithmConfig(**{field: value})


def test_unknown_keys_are_rejected():
    with pytest.raises(ConfigurationError):
        GeneticAlgorithmConfig.from_dict({"popSize": 10})


@pytest.mark.parametrize("method", ["spea2", "moead", "weighted_sum"])
def test_only_nsga2_is_supported(method):
    with pytest.raises(UnsupportedMethodError):
        MultiObjectiveConfig(method=method)


def test_method_aliases():
    assert MultiObjectiveConfig(method="NSGA-II").method == "nsga2"


@pytest.mark.parametrize("strategy", ["entropy", "hypervolume"])
def test_only_crowding_diversity_is_supported(strategy):
    with pytest.raises(UnsupportedMethodError):
        MultiObjectiveConfig(diversity_maintenance=strategy)


def test_initializer_choice():
    assert GeneticAlgorithmConfig(initializer="Random").initializer == "random"
    with pytest.raises(UnsupportedMethodError):
        GeneticAlgorithmConfig(initializer="sobol")
