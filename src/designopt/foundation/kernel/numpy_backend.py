"""NumPy kernels for NSGA-II ranking.

Performance-sensitive: keep operations vectorized and avoid Python loops where possible.
Assumes F is float64 of shape (N, M), already direction-normalized so that lower is better.
"""

from __future__ import annotations

import numpy as np


def dominance_matrix(F: np.ndarray) -> np.ndarray:
    """
    Boolean matrix D with D[i, j] True iff row i dominates row j.

    Row i dominates row j when it is <= in every column and < in at least one.
    The diagonal is always False.
    """
    F = np.asarray(F, dtype=float)
    less_equal = F[:, None, :] <= F[None, :, :]
    strictly_less = F[:, None, :] < F[None, :, :]
    return np.logical_and(
        np.all(less_equal, axis=2),
        np.any(strictly_less, axis=2),
    )


def fast_non_dominated_sort(F: np.ndarray) -> tuple[list[list[int]], np.ndarray]:
    """
    Classic O(N^2) fast non-dominated sort.
    Args:
        F: objective matrix (N, M), float64.
    Returns:
      - fronts: list of lists with indices per front (0, 1, ...)
      - rank: array with the front rank for each solution
    """
    F = np.asarray(F, dtype=float)
    N = F.shape[0]
    if N == 0:
        return [], np.empty(0, dtype=int)

    dom_matrix = dominance_matrix(F)

    # domination counter per solution; row i of dom_matrix lists the peers i dominates
    dominated_count = dom_matrix.sum(axis=0).astype(np.int64)
    rank = np.empty(N, dtype=int)
    fronts: list[list[int]] = []

    current = np.flatnonzero(dominated_count == 0)
    level = 0
    while current.size > 0:
        fronts.append(current.tolist())
        rank[current] = level
        dom_contrib = dom_matrix[current].sum(axis=0)
        dominated_count -= dom_contrib
        dominated_count[current] = -1
        dom_matrix[current] = False
        level += 1
        current = np.flatnonzero(dominated_count == 0)

    return fronts, rank


def compute_crowding(F: np.ndarray, fronts: list[list[int]]) -> np.ndarray:
    """
    Standard crowding-distance computation, front by front.

    Boundary solutions of every objective get ``inf``; interior solutions add
    the neighbour gap divided by the objective span in that front. A zero span
    contributes nothing.
    """
    F = np.asarray(F, dtype=float)
    N = F.shape[0]
    crowding = np.zeros(N)

    for front in fronts:
        if len(front) == 0:
            continue
        front_arr = np.asarray(front, dtype=int)
        if front_arr.size <= 2:
            crowding[front_arr] = np.inf
            continue

        fvals = F[front_arr]  # shape (k, n_obj)
        n_obj = fvals.shape[1]
        d = np.zeros(front_arr.size, dtype=float)

        for m in range(n_obj):
            order = np.argsort(fvals[:, m], kind="mergesort")
            sorted_vals = fvals[order, m]

            d[order[0]] = np.inf
            d[order[-1]] = np.inf

            span = sorted_vals[-1] - sorted_vals[0]
            if span <= 0.0:
                continue

            contrib = np.zeros_like(sorted_vals)
            contrib[1:-1] = (sorted_vals[2:] - sorted_vals[:-2]) / span
            d[order[1:-1]] += contrib[1:-1]

        crowding[front_arr] = d

    return crowding


def single_front_crowding(F: np.ndarray) -> np.ndarray:
    """Crowding distance for a single front."""
    F = np.asarray(F, dtype=float)
    if F.shape[0] == 0:
        return np.empty(0, dtype=float)
    return compute_crowding(F, [list(range(F.shape[0]))])


def select_nsga2(fronts: list[list[int]], crowding: np.ndarray, pop_size: int) -> np.ndarray:
    """
    NSGA-II elitist selection based on fronts + crowding.

    Whole fronts are taken in rank order while they fit; the first front that
    would overflow is sorted by descending crowding and cut to size.
    """
    selected: list[int] = []
    for front in fronts:
        if len(front) == 0:
            continue
        if len(selected) >= pop_size:
            break
        front_arr = np.asarray(front, dtype=int)
        if len(selected) + front_arr.size <= pop_size:
            selected.extend(front_arr.tolist())
        else:
            rem = pop_size - len(selected)
            order = np.argsort(-crowding[front_arr], kind="mergesort")
            selected.extend(front_arr[order[:rem]].tolist())
            break
    return np.array(selected, dtype=int)


def nsga2_ranking(F: np.ndarray) -> tuple[list[list[int]], np.ndarray, np.ndarray]:
    """Fronts, ranks and crowding distances of an objective table."""
    fronts, ranks = fast_non_dominated_sort(F)
    crowding = compute_crowding(F, fronts)
    return fronts, ranks, crowding


__all__ = [
    "dominance_matrix",
    "fast_non_dominated_sort",
    "compute_crowding",
    "single_front_crowding",
    "select_nsga2",
    "nsga2_ranking",
]
