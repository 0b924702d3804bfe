from __future__ import annotations

import math

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import Direction, Objective, ObjectiveSet


def _objectives() -> ObjectiveSet:
    return ObjectiveSet([Objective("cost", Direction.MINIMIZE), Objective("safety", Direction.MAXIMIZE)])


def _cand(cost: float, safety: float) -> Candidate:
    return Candidate(genes={"x": 1.0}, objectives={"cost": cost, "safety": safety}, evaluated=True)


def test_clone_is_independent():
    original = Candidate(genes={"x": 1.0, "g": "fc20"}, objectives={"cost": 3.0}, constraints={"cost": 3.0})
    copy = original.clone()
    copy.genes["x"] = 5.0
    copy.objectives["cost"] = 9.0
    copy.constraints["cost"] = 9.0
    assert original.genes["x"] == 1.0
    assert original.objectives["cost"] == 3.0
    assert original.constraints["cost"] == 3.0


def test_dominance_uses_directions():
    objs = _objectives()
    better = _cand(1.0, 3.0)
    worse = _cand(2.0, 2.0)
    assert better.dominates(worse, objs)
    assert not worse.dominates(better, objs)


def test_dominance_is_irreflexive_and_needs_strict_improvement():
    objs = _objectives()
    a = _cand(1.0, 2.0)
    twin = _cand(1.0, 2.0)
    assert not a.dominates(a, objs)
    assert not a.dominates(twin, objs)
    assert not twin.dominates(a, objs)


def test_incomparable_candidates():
    objs = _objectives()
    a = _cand(1.0, 1.0)
    b = _cand(2.0, 2.0)
    assert not a.dominates(b, objs)
    assert not b.dominates(a, objs)


def test_dominance_matches_definition_on_random_vectors():
    objs = _objectives()
    rng = np.random.default_rng(3)
    for _ in range(200):
        va = rng.integers(0, 3, size=2).astype(float)
        vb = rng.integers(0, 3, size=2).astype(float)
        a, b = _cand(*va), _cand(*vb)
        na, nb = objs.normalized(va), objs.normalized(vb)
        expected = bool(np.all(na <= nb) and np.any(na < nb))
        assert a.dominates(b, objs) is expected
        if expected:
            assert not b.dominates(a, objs)


def test_failed_candidates_never_dominate():
    objs = _objectives()
    ok = _cand(5.0, 0.0)
    failed = Candidate(genes={"x": 1.0}, fitness=-math.inf, feasible=False, evaluated=True, error="boom")
    assert failed.objective_vector(objs) is None
    assert not failed.dominates(ok, objs)
    assert ok.dominates(failed, objs)


def test_reset_evaluation_clears_results():
    cand = _cand(1.0, 2.0)
    cand.fitness = 3.0
    cand.rank = 2
    cand.reset_evaluation()
    assert cand.objectives == {}
    assert not cand.evaluated
    assert cand.fitness == 0.0
    assert cand.rank == 0
