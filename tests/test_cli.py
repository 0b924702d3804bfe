from __future__ import annotations

import json
import textwrap

import pytest

from designopt.cli.main import main
from designopt.cli.parser import load_evaluator, parse_args

EVALUATOR_SOURCE = textwrap.dedent(
    """
    def evaluate(candidate):
        width = float(candidate.genes["beamWidth"])
        return {"totalCost": width * 10.0, "structuralWeight": 1.0e6 / width}
    """
)


@pytest.fixture
def run_files(tmp_path, monkeypatch):
    (tmp_path / "cli_beam_model.py").write_text(EVALUATOR_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    config = {
        "seed": 11,
        "mode": "multi",
        "variables": [{"name": "beamWidth", "type": "discrete", "bounds": {"min": 200, "max": 600}, "step": 50}],
        "objectives": [
            {"name": "totalCost", "direction": "minimize", "weight": 0.5},
            {"name": "structuralWeight", "direction": "minimize", "weight": 0.5},
        ],
        "geneticAlgorithm": {"populationSize": 10, "generations": 5},
    }
    path = tmp_path / "run.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path, tmp_path


def test_cli_multi_objective_report(run_files):
    config, tmp_path = run_files
    out = tmp_path / "report.json"

    code = main(["--config", str(config), "--evaluator", "cli_beam_model:evaluate", "--output", str(out)])

    assert code == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["mode"] == "multi"
    assert report["stop_reason"] == "budget"
    assert len(report["history"]) == 5
    assert report["front"]
    assert "beamWidth" in report["best_compromise"]["solution"]["genes"]


def test_cli_overrides_and_stdout(run_files, capsys):
    config, _ = run_files

    code = main(
        [
            "--config",
            str(config),
            "--evaluator",
            "cli_beam_model:evaluate",
            "--mode",
            "single",
            "--generations",
            "3",
            "--eval-backend",
            "serial",
        ]
    )

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["mode"] == "single"
    assert report["result"]["convergence"]["generation"] == 3


def test_cli_reports_configuration_errors(tmp_path, capsys):
    config = tmp_path / "bad.json"
    config.write_text(json.dumps({"mode": "pareto"}), encoding="utf-8")

    code = main(["--config", str(config), "--evaluator", "json:loads"])

    assert code == 2
    assert "error:" in capsys.readouterr().err


def test_parser_rejects_non_positive_overrides():
    with pytest.raises(SystemExit):
        parse_args(["--config", "x.json", "--evaluator", "m:f", "--generations", "0"])


def test_load_evaluator_validation():
    assert load_evaluator("json:loads") is json.loads
    with pytest.raises(ValueError):
        load_evaluator("json.loads")
    with pytest.raises(TypeError):
        load_evaluator("json:__name__")


@pytest.mark.parametrize(
    "evaluator",
    ["cli_beam_model.evaluate", "no_such_module_for_designopt:evaluate", "cli_beam_model:missing"],
)
def test_cli_reports_bad_evaluator_paths(run_files, capsys, evaluator):
    config, _ = run_files

    code = main(["--config", str(config), "--evaluator", evaluator])

    assert code == 2
    assert "error:" in capsys.readouterr().err


def test_cli_reports_missing_config(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "absent.json"), "--evaluator", "json:loads"])

    assert code == 2
    assert "does not exist" in capsys.readouterr().err


def test_load_evaluator_missing_attribute():
    with pytest.raises(ImportError):
        load_evaluator("json:no_such_function")
