"""Adaptive parameter schedules and run control."""

from designopt.adaptation.controller import AdaptationSchedule, ControllerState, ConvergenceController, StopReason
from designopt.adaptation.schedule import (
    adapted_mutation_rate,
    adapted_tournament_size,
    fitness_spread,
    has_converged,
    progress,
)

__all__ = [
    "AdaptationSchedule",
    "ControllerState",
    "ConvergenceController",
    "StopReason",
    "adapted_mutation_rate",
    "adapted_tournament_size",
    "fitness_spread",
    "has_converged",
    "progress",
]
