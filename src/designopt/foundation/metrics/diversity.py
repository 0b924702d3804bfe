"""Population diversity measures."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from designopt.foundation.catalog import DesignVariable, VariableKind


def normalized_gene_matrix(rows: np.ndarray, catalog: Sequence[DesignVariable]) -> np.ndarray:
    """Scale numeric columns by their span; zero-span columns become 0."""
    X = np.asarray(rows, dtype=float)
    out = np.zeros_like(X)
    for j, var in enumerate(catalog):
        if var.kind is VariableKind.CATEGORICAL:
            out[:, j] = X[:, j]
        elif var.span > 0.0:
            out[:, j] = (X[:, j] - var.lower) / var.span
    return out


def mean_pairwise_distance(rows: np.ndarray, catalog: Sequence[DesignVariable]) -> float:
    """
    Mean Euclidean distance over all pairs of rows.

    Numeric genes contribute their span-normalized difference; categorical
    genes contribute 1 when they differ and 0 otherwise. Fewer than two rows
    give 0.
    """
    X = normalized_gene_matrix(rows, catalog)
    n = X.shape[0]
    if n < 2:
        return 0.0
    cat_mask = np.array([var.kind is VariableKind.CATEGORICAL for var in catalog], dtype=bool)
    diff = X[:, None, :] - X[None, :, :]
    sq = np.where(cat_mask[None, None, :], (diff != 0.0).astype(float), diff * diff)
    dist = np.sqrt(sq.sum(axis=2))
    iu = np.triu_indices(n, k=1)
    return float(dist[iu].mean())


def mean_finite(values: np.ndarray) -> float:
    """Mean of the finite entries, 0 when there are none."""
    arr = np.asarray(values, dtype=float)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return 0.0
    return float(finite.mean())


__all__ = ["normalized_gene_matrix", "mean_pairwise_distance", "mean_finite"]
