"""
Run-file loading shared by the CLI and programmatic entrypoints.

A run file is a YAML or JSON mapping::

    seed: 7
    mode: multi            # single | multi | sustainability
    variables:             # omitted -> default structural catalog
      - {name: beamWidth, type: discrete, bounds: {min: 200, max: 600}, step: 50}
    objectives:            # list, or "default" / "sustainability"
      - {name: totalCost, direction: minimize, weight: 0.6}
    geneticAlgorithm: {populationSize: 40, generations: 60}
    multiObjective: {archiveSize: 100}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from designopt.engine.algorithm.config import GeneticAlgorithmConfig, MultiObjectiveConfig
from designopt.foundation.catalog import DesignVariable, ObjectiveSet, validate_catalog
from designopt.foundation.exceptions import ConfigurationError, UnsupportedMethodError
from designopt.foundation.presets import default_design_variables, default_objectives, sustainability_objectives

RUN_MODES = ("single", "multi", "sustainability")
_OBJECTIVE_PRESETS = {"default": default_objectives, "sustainability": sustainability_objectives}


@dataclass(frozen=True)
class RunSpec:
    catalog: tuple[DesignVariable, ...]
    objectives: ObjectiveSet
    ga: GeneticAlgorithmConfig = field(default_factory=GeneticAlgorithmConfig)
    mo: MultiObjectiveConfig = field(default_factory=MultiObjectiveConfig)
    seed: int | None = None
    mode: str = "multi"


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def run_spec_from_dict(data: Mapping[str, Any]) -> RunSpec:
    if not isinstance(data, Mapping):
        raise ConfigurationError("Run file must contain a mapping at the top level.")

    variables = _first(data, "variables", "designVariables", "design_variables")
    catalog = validate_catalog(variables) if variables is not None else default_design_variables()

    objectives_data = data.get("objectives")
    if objectives_data is None:
        objectives = default_objectives()
    elif isinstance(objectives_data, str):
        preset = _OBJECTIVE_PRESETS.get(objectives_data.lower())
        if preset is None:
            raise UnsupportedMethodError("objective preset", objectives_data, sorted(_OBJECTIVE_PRESETS))
        objectives = preset()
    else:
        objectives = ObjectiveSet(objectives_data)

    ga = GeneticAlgorithmConfig.from_dict(_first(data, "geneticAlgorithm", "genetic_algorithm", "ga") or {})
    mo = MultiObjectiveConfig.from_dict(_first(data, "multiObjective", "multi_objective", "mo") or {})

    mode = str(data.get("mode", "multi")).lower()
    if mode not in RUN_MODES:
        raise UnsupportedMethodError("mode", mode, list(RUN_MODES))
    seed = data.get("seed")
    return RunSpec(
        catalog=catalog,
        objectives=objectives,
        ga=ga,
        mo=mo,
        seed=int(seed) if seed is not None else None,
        mode=mode,
    )


def load_raw(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON run file as a plain mapping.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Config file '{spec_path}' does not exist.")
    suffix = spec_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImportError("YAML config requested but PyYAML is not installed. Install with 'pip install pyyaml'.") from exc
        with spec_path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}
    with spec_path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_run_spec(path: str | Path) -> RunSpec:
    return run_spec_from_dict(load_raw(path))


__all__ = ["RunSpec", "RUN_MODES", "run_spec_from_dict", "load_raw", "load_run_spec"]
