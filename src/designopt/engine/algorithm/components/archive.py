from __future__ import annotations

from typing import Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import ObjectiveSet
from designopt.foundation.kernel.numpy_backend import single_front_crowding
from designopt.foundation.metrics.pareto import pareto_filter, unique_rows


class CrowdingDistanceArchive:
    """
    Bounded external archive of non-dominated candidates.

    Update is batch-based: merge existing + incoming, drop failed candidates,
    non-dominated extraction, deduplication on objective vectors, then (if
    needed) truncation by descending crowding distance. Stored candidates are
    clones owned by the archive.
    """

    def __init__(self, capacity: int, objectives: ObjectiveSet, *, objective_tolerance: float = 0.0) -> None:
        self.capacity = int(capacity)
        if self.capacity <= 0:
            raise ValueError("archive capacity must be positive.")
        if objective_tolerance < 0.0:
            raise ValueError("objective_tolerance must be >= 0.")
        self.objectives = objectives
        self._objective_tolerance = float(objective_tolerance)
        self._members: list[Candidate] = []

    def __len__(self) -> int:
        return len(self._members)

    def contents(self) -> list[Candidate]:
        return [c.clone() for c in self._members]

    def objective_matrix(self) -> np.ndarray:
        """Direction-normalized objective table of the stored candidates."""
        if not self._members:
            return np.empty((0, len(self.objectives)), dtype=float)
        raw = np.vstack([c.objective_vector(self.objectives) for c in self._members])
        return self.objectives.normalized(raw)

    def update(self, incoming: Sequence[Candidate]) -> list[Candidate]:
        pool: list[Candidate] = list(self._members)
        rows: list[np.ndarray] = [] if not pool else [c.objective_vector(self.objectives) for c in pool]
        for cand in incoming:
            vec = cand.objective_vector(self.objectives)
            if vec is None:
                continue
            pool.append(cand.clone())
            rows.append(vec)
        if not pool:
            return []

        F = self.objectives.normalized(np.vstack(rows))
        _, nd_idx = pareto_filter(F, return_indices=True)
        nd_idx = np.sort(nd_idx)
        F_nd = F[nd_idx]
        keep = unique_rows(F_nd, tol=self._objective_tolerance)
        nd_idx = nd_idx[keep]
        F_nd = F_nd[keep]

        crowding = single_front_crowding(F_nd)
        if nd_idx.size > self.capacity:
            order = np.argsort(-crowding, kind="mergesort")[: self.capacity]
            order.sort()
            nd_idx = nd_idx[order]
            crowding = single_front_crowding(F_nd[order])

        members: list[Candidate] = []
        for idx, cd in zip(nd_idx, crowding):
            member = pool[int(idx)]
            member.rank = 0
            member.crowding_distance = float(cd)
            members.append(member)
        self._members = members
        return self.contents()


__all__ = ["CrowdingDistanceArchive"]
