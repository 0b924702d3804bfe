from __future__ import annotations

from typing import Literal, overload

import numpy as np

from designopt.foundation.kernel.numpy_backend import fast_non_dominated_sort


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[False] = False) -> np.ndarray | None: ...


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...


def pareto_filter(F: np.ndarray | None, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray] | None:
    """
    Return the non-dominated subset of points (first Pareto front).

    Args:
        F: Direction-normalized objective values (n_solutions, n_objectives) or None.
        return_indices: When True, also return indices of the front in F.

    Returns:
        Front array, or (front, indices) when return_indices is True.
    """
    if F is None:
        if return_indices:
            return np.empty((0, 0)), np.array([], dtype=int)
        return None
    F = np.asarray(F)
    if F.size == 0 or F.ndim < 2:
        if return_indices:
            n = int(F.shape[0]) if F.ndim > 0 else 0
            idx = np.arange(n, dtype=int)
            return F, idx
        return F

    fronts, _ = fast_non_dominated_sort(F)
    idx = np.asarray(fronts[0], dtype=int)
    front = F[idx]
    return (front, idx) if return_indices else front


def unique_rows(values: np.ndarray, tol: float = 0.0) -> np.ndarray:
    """Indices of the first occurrence of every row, rows closer than ``tol`` counting as equal."""
    values = np.asarray(values, dtype=float)
    n = int(values.shape[0])
    if n <= 1:
        return np.arange(n, dtype=int)
    if tol <= 0.0:
        _, unique_idx = np.unique(values, axis=0, return_index=True)
        unique_idx.sort()
        return np.asarray(unique_idx, dtype=int)

    keep = np.ones(n, dtype=bool)
    for i in range(n):
        if not keep[i]:
            continue
        diff = np.abs(values[i + 1 :] - values[i])
        if diff.size == 0:
            continue
        dup_mask = np.all(diff <= tol, axis=1)
        if dup_mask.any():
            keep[i + 1 :][dup_mask] = False
    return np.flatnonzero(keep)


__all__ = ["pareto_filter", "unique_rows"]
