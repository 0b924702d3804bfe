from .api import (
    optimize_multi_objective,
    optimize_single_objective,
    optimize_sustainability,
    run_optimization,
)
from .adaptation import ConvergenceController, StopReason
from .engine.algorithm import GeneticAlgorithm, GeneticAlgorithmConfig, MultiObjectiveConfig, NSGAII
from .engine.algorithm.components import StopSignal
from .foundation.candidate import Candidate
from .foundation.catalog import DesignVariable, Direction, Objective, ObjectiveConstraint, ObjectiveSet, VariableKind
from .foundation.exceptions import (
    CatalogError,
    ConfigurationError,
    DesignOptError,
    EvaluationError,
    ObjectiveError,
    OptimizationError,
)
from .foundation.logging import configure_designopt_logging
from .ux.analysis.mcdm import MCDMResult, best_compromise, topsis_scores, weighted_sum_scores
from .ux.results import OptimizationResult, ParetoFrontResult

__version__ = "0.1.0"

__all__ = [
    "optimize_single_objective",
    "optimize_multi_objective",
    "optimize_sustainability",
    "run_optimization",
    "ConvergenceController",
    "StopReason",
    "GeneticAlgorithm",
    "GeneticAlgorithmConfig",
    "MultiObjectiveConfig",
    "NSGAII",
    "StopSignal",
    "Candidate",
    "DesignVariable",
    "Direction",
    "Objective",
    "ObjectiveConstraint",
    "ObjectiveSet",
    "VariableKind",
    "CatalogError",
    "ConfigurationError",
    "DesignOptError",
    "EvaluationError",
    "ObjectiveError",
    "OptimizationError",
    "configure_designopt_logging",
    "MCDMResult",
    "best_compromise",
    "topsis_scores",
    "weighted_sum_scores",
    "OptimizationResult",
    "ParetoFrontResult",
]
