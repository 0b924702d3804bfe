from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from designopt.api import run_optimization
from designopt.cli.parser import load_evaluator, parse_args
from designopt.engine.algorithm.components.termination import StopSignal
from designopt.engine.config.loader import RunSpec, load_run_spec
from designopt.foundation.eval import resolve_eval_backend
from designopt.foundation.exceptions import DesignOptError
from designopt.foundation.logging import configure_designopt_logging


def _run(spec: RunSpec, mode: str, evaluator, args) -> dict[str, Any]:
    backend = resolve_eval_backend(args.eval_backend, n_workers=args.n_workers)
    stop = StopSignal(timeout=args.timeout)
    common = {
        "config": spec.ga,
        "seed": spec.seed,
        "eval_backend": backend,
        "stop_signal": stop,
    }
    if mode == "single":
        result = run_optimization("single", spec.catalog, evaluator, objectives=spec.objectives, **common)
        return {"mode": mode, "result": result.to_dict()}
    if mode == "sustainability":
        result = run_optimization("sustainability", spec.catalog, evaluator, mo_config=spec.mo, **common)
        return {"mode": mode, "best_compromise": result.to_dict()}
    front = run_optimization("multi", spec.catalog, spec.objectives, evaluator, mo_config=spec.mo, **common)
    report = front.to_dict()
    report["mode"] = mode
    if front.front:
        report["best_compromise"] = front.best_compromise().to_dict()
    return report


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        configure_designopt_logging(level=logging.INFO)
    try:
        spec = load_run_spec(args.config)
        updates = {}
        if args.population_size is not None:
            updates["population_size"] = args.population_size
        if args.generations is not None:
            updates["generations"] = args.generations
        if updates:
            spec = replace(spec, ga=spec.ga.with_updates(**updates))
        if args.seed is not None:
            spec = replace(spec, seed=args.seed)
        evaluator = load_evaluator(args.evaluator)
    except (DesignOptError, OSError, ImportError, ValueError, TypeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    try:
        report = _run(spec, args.mode or spec.mode, evaluator, args)
    except DesignOptError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    text = json.dumps(report, indent=2, default=str)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
