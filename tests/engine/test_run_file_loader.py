from __future__ import annotations

import json

import pytest

from designopt.engine.config.loader import load_raw, load_run_spec, run_spec_from_dict
from designopt.foundation.catalog import VariableKind
from designopt.foundation.exceptions import ConfigurationError, InvalidParameterError, UnsupportedMethodError

RUN_FILE = {
    "seed": 7,
    "mode": "single",
    "variables": [
        {"name": "beamWidth", "type": "discrete", "bounds": {"min": 200, "max": 600}, "step": 50},
        {"name": "concreteGrade", "type": "categorical", "options": ["fc20", "fc25"]},
    ],
    "objectives": [
        {"name": "totalCost", "direction": "minimize", "weight": 0.6},
        {"name": "safetyFactor", "direction": "maximize", "weight": 0.4, "constraint": {"min": 1.5}},
    ],
    "geneticAlgorithm": {"populationSize": 12, "generations": 4, "eliteSize": 1},
    "multiObjective": {"archiveSize": 30, "method": "NSGA-II"},
}


def test_json_run_file(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps(RUN_FILE), encoding="utf-8")

    spec = load_run_spec(path)

    assert spec.seed == 7
    assert spec.mode == "single"
    assert [v.name for v in spec.catalog] == ["beamWidth", "concreteGrade"]
    assert spec.catalog[0].kind is VariableKind.DISCRETE
    assert spec.catalog[0].upper == 600.0
    assert spec.objectives.names == ("totalCost", "safetyFactor")
    assert spec.objectives[1].constraint.min == 1.5
    assert spec.ga.population_size == 12
    assert spec.ga.elite_size == 1
    assert spec.mo.archive_size == 30
    assert spec.mo.method == "nsga2"


def test_yaml_run_file(tmp_path):
    yaml = pytest.importorskip("yaml")
    path = tmp_path / "run.yaml"
    path.write_text(yaml.safe_dump(RUN_FILE), encoding="utf-8")

    assert load_raw(path) == RUN_FILE
    assert load_run_spec(path).ga.generations == 4


def test_defaults_and_presets():
    spec = run_spec_from_dict({})
    assert spec.mode == "multi"
    assert len(spec.catalog) == 6
    assert "totalCost" in spec.objectives.names
    assert spec.seed is None

    sustainable = run_spec_from_dict({"objectives": "Sustainability", "mode": "sustainability"})
    assert sustainable.objectives.names[0] == "carbonFootprint"


@pytest.mark.parametrize(
    "data, error",
    [
        ({"mode": "pareto"}, UnsupportedMethodError),
        ({"objectives": "green"}, UnsupportedMethodError),
        ({"geneticAlgorithm": {"popSize": 5}}, InvalidParameterError),
        ({"multiObjective": {"method": "spea2"}}, UnsupportedMethodError),
        ({"variables": []}, ConfigurationError),
    ],
)
def test_invalid_run_files(data, error):
    with pytest.raises(error):
        run_spec_from_dict(data)


def test_top_level_must_be_mapping():
    with pytest.raises(ConfigurationError):
        run_spec_from_dict(["not", "a", "mapping"])


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw(tmp_path / "absent.json")
