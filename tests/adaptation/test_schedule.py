from __future__ import annotations

import math

import pytest

from designopt.adaptation import (
    ConvergenceController,
    ControllerState,
    StopReason,
    adapted_mutation_rate,
    adapted_tournament_size,
    fitness_spread,
    has_converged,
    progress,
)


def test_progress_is_clipped():
    assert progress(0, 100) == 0.0
    assert progress(50, 100) == 0.5
    assert progress(150, 100) == 1.0
    assert progress(3, 0) == 1.0


def test_mutation_rate_decays_linearly_to_floor():
    assert adapted_mutation_rate(0.0, 0.1) == pytest.approx(0.1)
    assert adapted_mutation_rate(0.5, 0.1) == pytest.approx(0.055)
    assert adapted_mutation_rate(1.0, 0.1) == pytest.approx(0.01)
    assert adapted_mutation_rate(0.5, 0.005) == pytest.approx(0.005)


def test_tournament_size_grows_from_three_to_ten():
    assert adapted_tournament_size(0.0) == 3
    assert adapted_tournament_size(0.5) == 6
    assert adapted_tournament_size(0.99) == 9
    assert adapted_tournament_size(1.0) == 10


def test_schedules_are_monotonic():
    points = [i / 20 for i in range(21)]
    rates = [adapted_mutation_rate(p, 0.2) for p in points]
    sizes = [adapted_tournament_size(p) for p in points]
    assert rates == sorted(rates, reverse=True)
    assert sizes == sorted(sizes)


def test_fitness_spread_needs_full_window():
    assert math.isinf(fitness_spread([1.0] * 9))
    assert fitness_spread([5.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.5]) == pytest.approx(0.5)


def test_has_converged():
    flat = [-3.0] * 10
    assert has_converged(flat, 1e-6)
    assert not has_converged(flat[:-1] + [-2.0], 1e-6)
    assert not has_converged([-math.inf] * 10, 1e-6)


class TestConvergenceController:
    def test_stops_on_budget(self):
        ctl = ConvergenceController(5, mutation_rate=0.1, tournament_size=5, tolerance=1e-6)
        assert ctl.after_generation(4, [float(i) for i in range(4)])
        assert not ctl.after_generation(5, [float(i) for i in range(5)])
        assert ctl.state is ControllerState.STOPPED
        assert ctl.stop_reason is StopReason.BUDGET

    def test_stops_on_convergence(self):
        ctl = ConvergenceController(100, mutation_rate=0.1, tournament_size=5, tolerance=1e-6)
        assert not ctl.after_generation(12, [1.0] * 12)
        assert ctl.stop_reason is StopReason.CONVERGED

    def test_convergence_check_can_be_disabled(self):
        ctl = ConvergenceController(
            100, mutation_rate=0.1, tournament_size=5, tolerance=1e-6, check_convergence=False
        )
        assert ctl.after_generation(12, [1.0] * 12)

    def test_adapt_updates_live_values_only(self):
        ctl = ConvergenceController(10, mutation_rate=0.1, tournament_size=5, tolerance=1e-6)
        ctl.adapt(5)
        assert ctl.mutation_rate == pytest.approx(0.055)
        assert ctl.tournament_size == 6
        assert ctl.initial_mutation_rate == 0.1

    def test_non_adaptive_keeps_configured_values(self):
        ctl = ConvergenceController(10, mutation_rate=0.1, tournament_size=5, tolerance=1e-6, adaptive=False)
        ctl.adapt(9)
        assert ctl.mutation_rate == 0.1
        assert ctl.tournament_size == 5

    def test_first_stop_reason_wins(self):
        ctl = ConvergenceController(10, mutation_rate=0.1, tournament_size=5, tolerance=1e-6)
        ctl.stop(StopReason.CANCELLED)
        ctl.stop(StopReason.BUDGET)
        assert ctl.stop_reason is StopReason.CANCELLED
        assert not ctl.after_generation(10, [])
