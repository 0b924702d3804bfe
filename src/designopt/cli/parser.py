"""
CLI argument parsing and validation helpers.
"""

from __future__ import annotations

import argparse
import importlib
from typing import Any, Callable, Sequence

from designopt.engine.config.loader import RUN_MODES


def load_evaluator(target: str) -> Callable[..., Any]:
    """Import ``module:attribute`` and return the callable it names."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Evaluator must look like 'package.module:function'; got '{target}'.")
    module = importlib.import_module(module_name)
    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ImportError(f"Cannot find '{attr}' in module '{module_name}'.") from exc
    if not callable(obj):
        raise TypeError(f"'{target}' is not callable.")
    return obj


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw}'") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="designopt",
        description="Evolutionary design optimization over a catalog of design variables.",
    )
    parser.add_argument("--config", required=True, help="Path to a YAML/JSON run file.")
    parser.add_argument(
        "--evaluator",
        required=True,
        help="Evaluator to import, as 'package.module:function'.",
    )
    parser.add_argument("--mode", choices=RUN_MODES, default=None, help="Override the run file's mode.")
    parser.add_argument("--seed", type=int, default=None, help="Override the run file's seed.")
    parser.add_argument("--population-size", type=_positive_int, default=None, help="Override the population size.")
    parser.add_argument("--generations", type=_positive_int, default=None, help="Override the generation budget.")
    parser.add_argument(
        "--eval-backend",
        choices=("gather", "serial", "executor"),
        default="gather",
        help="How each generation's evaluations are dispatched.",
    )
    parser.add_argument("--n-workers", type=_positive_int, default=None, help="Workers for the executor backend.")
    parser.add_argument("--timeout", type=float, default=None, help="Wall-clock limit in seconds.")
    parser.add_argument("--output", default=None, help="Write the JSON report to this file instead of stdout.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to the console.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args", "load_evaluator"]
