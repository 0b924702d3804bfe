from __future__ import annotations

from typing import Sequence

import numpy as np


def _is_finite_array(arr: np.ndarray) -> bool:
    return bool(np.isfinite(arr).all())


def compute_hypervolume(F: np.ndarray, ref_point: Sequence[float]) -> float:
    """Compute (exact) hypervolume for 2D minimization fronts.

    Parameters
    - F: array-like shape (n_points, 2) of direction-normalized objective values
    - ref_point: sequence of length 2 with reference point (worst values)

    Returns
    - hypervolume (float)

    Notes
    - This implementation supports 2-objective problems only.
    """
    F = np.asarray(F, dtype=float)
    ref = np.asarray(ref_point, dtype=float)

    if F.ndim != 2 or F.shape[1] != 2:
        raise ValueError("compute_hypervolume currently supports 2D fronts only")

    if not _is_finite_array(F) or not _is_finite_array(ref):
        raise ValueError("F and ref_point must contain finite numbers")

    # Keep only points strictly better than ref in both objectives
    pts = F[np.all(F < ref, axis=1)]
    if pts.size == 0:
        return 0.0

    # For 2D minimization: sort by f1 ascending, then keep those with strictly decreasing f2
    sorted_pts = pts[np.argsort(pts[:, 0], kind="mergesort")]
    pareto = []
    best_f2 = np.inf
    for x, y in sorted_pts:
        if y < best_f2:
            pareto.append((x, y))
            best_f2 = y

    hv = 0.0
    prev_f1 = ref[0]
    # rectangles from the worst f1 to the best
    for x, y in reversed(pareto):
        width = prev_f1 - x
        height = ref[1] - y
        if width > 0 and height > 0:
            hv += width * height
        prev_f1 = x

    return float(max(hv, 0.0))


def nadir_reference(F: np.ndarray, margin: float = 0.1) -> np.ndarray:
    """Reference point just beyond the worst value of each column."""
    F = np.asarray(F, dtype=float)
    worst = F.max(axis=0)
    best = F.min(axis=0)
    span = np.where(worst > best, worst - best, 1.0)
    return worst + margin * span


__all__ = ["compute_hypervolume", "nadir_reference"]
