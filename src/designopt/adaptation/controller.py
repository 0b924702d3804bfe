from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from designopt.adaptation.schedule import (
    DEFAULT_WINDOW,
    adapted_mutation_rate,
    adapted_tournament_size,
    has_converged,
    progress,
)


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class ControllerState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(str, Enum):
    BUDGET = "budget"
    CONVERGED = "converged"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class AdaptationSchedule:
    """Bounds of the adaptive schedules."""

    mutation_floor: float = 0.01
    tournament_start: int = 3
    tournament_end: int = 10
    window: int = DEFAULT_WINDOW


class ConvergenceController:
    """
    Two-state run controller (RUNNING -> STOPPED).

    Holds the live mutation rate and tournament size so the run
    configuration stays untouched. ``check_convergence`` enables the
    best-fitness spread test (single-objective runs).
    """

    def __init__(
        self,
        budget: int,
        *,
        mutation_rate: float,
        tournament_size: int,
        tolerance: float,
        adaptive: bool = True,
        check_convergence: bool = True,
        schedule: AdaptationSchedule | None = None,
    ) -> None:
        self.budget = int(budget)
        self.initial_mutation_rate = float(mutation_rate)
        self.mutation_rate = float(mutation_rate)
        self.tournament_size = int(tournament_size)
        self.tolerance = float(tolerance)
        self.adaptive = adaptive
        self.check_convergence = check_convergence
        self.schedule = schedule or AdaptationSchedule()
        self.state = ControllerState.RUNNING
        self.stop_reason: StopReason | None = None

    @property
    def running(self) -> bool:
        return self.state is ControllerState.RUNNING

    def stop(self, reason: StopReason) -> None:
        if self.state is ControllerState.STOPPED:
            return
        self.state = ControllerState.STOPPED
        self.stop_reason = reason
        _logger().info("Run stopped: %s", reason.value)

    def after_generation(self, generations_done: int, best_history: Sequence[float]) -> bool:
        """
        Decide whether to continue after ``generations_done`` evaluated generations.

        Returns True while the run keeps going.
        """
        if not self.running:
            return False
        if generations_done >= self.budget:
            self.stop(StopReason.BUDGET)
            return False
        if self.check_convergence and has_converged(best_history, self.tolerance, self.schedule.window):
            _logger().info("Converged after %d generations.", generations_done)
            self.stop(StopReason.CONVERGED)
            return False
        return True

    def adapt(self, generations_done: int) -> None:
        """Update the live mutation rate and tournament size from run progress."""
        if not self.adaptive:
            return
        p = progress(generations_done, self.budget)
        self.mutation_rate = adapted_mutation_rate(p, self.initial_mutation_rate, self.schedule.mutation_floor)
        self.tournament_size = adapted_tournament_size(
            p, self.schedule.tournament_start, self.schedule.tournament_end
        )


__all__ = ["ControllerState", "StopReason", "AdaptationSchedule", "ConvergenceController"]
