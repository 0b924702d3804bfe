from __future__ import annotations

import numpy as np

from designopt.engine.algorithm.components import CrowdingDistanceArchive
from designopt.foundation.candidate import Candidate


def _cand(cost: float, weight: float) -> Candidate:
    return Candidate(genes={"w": cost}, objectives={"cost": cost, "weight": weight}, evaluated=True)


def test_archive_keeps_only_non_dominated(cost_weight_objectives):
    archive = CrowdingDistanceArchive(10, cost_weight_objectives)
    archive.update([_cand(1.0, 4.0), _cand(2.0, 2.0), _cand(3.0, 3.0)])
    costs = sorted(c.objectives["cost"] for c in archive.contents())
    assert costs == [1.0, 2.0]
    archive.update([_cand(0.5, 0.5)])
    assert [c.objectives["cost"] for c in archive.contents()] == [0.5]


def test_archive_trims_by_crowding(cost_weight_objectives):
    archive = CrowdingDistanceArchive(2, cost_weight_objectives)
    archive.update([_cand(0.0, 1.0), _cand(1.0, 0.0), _cand(0.5, 0.5)])
    F = archive.objective_matrix()
    assert F.shape[0] == 2
    # middle point has the lowest crowding and is trimmed
    assert not np.any(np.all(F == np.array([0.5, 0.5]), axis=1))


def test_archive_deduplicates_and_skips_failed(cost_weight_objectives):
    archive = CrowdingDistanceArchive(10, cost_weight_objectives)
    failed = Candidate(genes={"w": 0.0}, evaluated=True, feasible=False, error="boom")
    archive.update([_cand(1.0, 1.0), _cand(1.0, 1.0), failed])
    assert len(archive) == 1


def test_archive_returns_independent_copies(cost_weight_objectives):
    archive = CrowdingDistanceArchive(10, cost_weight_objectives)
    source = _cand(1.0, 1.0)
    archive.update([source])
    source.genes["w"] = 99.0
    out = archive.contents()
    out[0].genes["w"] = -1.0
    assert archive.contents()[0].genes["w"] == 1.0
