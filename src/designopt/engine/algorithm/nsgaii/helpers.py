"""Ranking helpers for NSGA-II over candidate lists."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import ObjectiveSet
from designopt.foundation.kernel.numpy_backend import nsga2_ranking, select_nsga2, single_front_crowding


def objective_table(candidates: Sequence[Candidate], objectives: ObjectiveSet) -> tuple[np.ndarray, np.ndarray]:
    """
    Direction-normalized objective matrix of the usable candidates.

    Returns ``(F, ok_idx)`` where ``ok_idx`` maps rows of ``F`` back to
    positions in ``candidates``; failed candidates are left out.
    """
    rows: list[np.ndarray] = []
    ok_idx: list[int] = []
    for i, cand in enumerate(candidates):
        vec = cand.objective_vector(objectives)
        if vec is None:
            continue
        rows.append(vec)
        ok_idx.append(i)
    if not rows:
        return np.empty((0, len(objectives)), dtype=float), np.empty(0, dtype=int)
    return objectives.normalized(np.vstack(rows)), np.asarray(ok_idx, dtype=int)


def rank_population(candidates: Sequence[Candidate], objectives: ObjectiveSet) -> list[list[int]]:
    """
    Assign ``rank`` and ``crowding_distance`` to every candidate in place.

    Returns the fronts as lists of positions in ``candidates``. Candidates
    without a usable objective vector form a trailing front with crowding 0.
    """
    F, ok_idx = objective_table(candidates, objectives)
    fronts: list[list[int]] = []
    if ok_idx.size:
        local_fronts, ranks, crowding = nsga2_ranking(F)
        for local, row in enumerate(ok_idx):
            cand = candidates[int(row)]
            cand.rank = int(ranks[local])
            cand.crowding_distance = float(crowding[local])
        fronts = [[int(ok_idx[i]) for i in front] for front in local_fronts]
    failed = sorted(set(range(len(candidates))) - set(int(i) for i in ok_idx))
    if failed:
        for i in failed:
            candidates[i].rank = len(fronts)
            candidates[i].crowding_distance = 0.0
        fronts.append(failed)
    return fronts


def survival_selection(candidates: Sequence[Candidate], fronts: list[list[int]], pop_size: int) -> list[Candidate]:
    """Fill ``pop_size`` slots front by front; the overflowing front is cut by descending crowding."""
    crowding = np.array([c.crowding_distance for c in candidates], dtype=float)
    selected = select_nsga2(fronts, crowding, pop_size)
    return [candidates[int(i)] for i in selected]


def truncate_by_crowding(front: Sequence[Candidate], objectives: ObjectiveSet, size: int) -> list[Candidate]:
    """Keep the ``size`` most isolated members of a non-dominated set, preserving order."""
    if len(front) <= size:
        return list(front)
    F, _ = objective_table(front, objectives)
    crowding = single_front_crowding(F)
    keep = np.sort(np.argsort(-crowding, kind="mergesort")[:size])
    return [front[int(i)] for i in keep]


__all__ = ["objective_table", "rank_population", "survival_selection", "truncate_by_crowding"]
