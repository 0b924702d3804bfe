from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from designopt.foundation.candidate import Candidate
from designopt.foundation.catalog import ObjectiveSet


@dataclass
class MCDMResult:
    scores: np.ndarray
    best_index: int
    best_point: np.ndarray


def _validate_front(F: np.ndarray) -> np.ndarray:
    F = np.asarray(F, dtype=float)
    if F.ndim != 2 or F.shape[0] == 0 or F.shape[1] == 0:
        raise ValueError("F must be a 2D array with at least one point and one objective.")
    if not np.all(np.isfinite(F)):
        raise ValueError("F must contain finite values only.")
    return F


def _validate_weights(weights: np.ndarray, n_obj: int) -> np.ndarray:
    w = np.asarray(weights, dtype=float)
    if w.ndim != 1 or w.shape[0] != n_obj:
        raise ValueError("weights must be 1D with length equal to number of objectives.")
    if np.any(w < 0):
        raise ValueError("weights must be non-negative.")
    return w


def weighted_sum_scores(F: np.ndarray, weights: np.ndarray) -> MCDMResult:
    """Weighted sum of direction-normalized values (lower is better)."""
    F = _validate_front(F)
    w = _validate_weights(weights, F.shape[1])
    if np.allclose(w.sum(), 0):
        raise ValueError("weights must not sum to zero.")
    scores = F @ (w / w.sum())
    best_idx = int(np.argmin(scores))
    return MCDMResult(scores=scores, best_index=best_idx, best_point=F[best_idx].copy())


def topsis_scores(F: np.ndarray, weights: np.ndarray, maximize: np.ndarray | Sequence[bool] | None = None) -> MCDMResult:
    """
    TOPSIS closeness coefficients over raw objective values.

    Each column is divided by its Euclidean norm (zero-norm columns contribute
    0) and multiplied by its weight. The ideal point takes the best value of
    each column according to ``maximize`` and the anti-ideal the worst.
    Closeness is ``d_anti / (d_ideal + d_anti)``, or 0 when both distances
    vanish. Ties resolve to the lowest index.
    """
    F = _validate_front(F)
    n_obj = F.shape[1]
    w = _validate_weights(weights, n_obj)
    if maximize is None:
        max_mask = np.zeros(n_obj, dtype=bool)
    else:
        max_mask = np.asarray(maximize, dtype=bool)
        if max_mask.shape != (n_obj,):
            raise ValueError("maximize must have one flag per objective.")

    norms = np.sqrt(np.sum(F * F, axis=0))
    safe = np.where(norms > 0.0, norms, 1.0)
    V = np.where(norms > 0.0, F / safe, 0.0) * w

    col_max = V.max(axis=0)
    col_min = V.min(axis=0)
    ideal = np.where(max_mask, col_max, col_min)
    anti = np.where(max_mask, col_min, col_max)

    d_ideal = np.sqrt(np.sum((V - ideal) ** 2, axis=1))
    d_anti = np.sqrt(np.sum((V - anti) ** 2, axis=1))
    total = d_ideal + d_anti
    scores = np.divide(d_anti, total, out=np.zeros_like(total), where=total > 0.0)
    best_idx = int(np.argmax(scores))
    return MCDMResult(scores=scores, best_index=best_idx, best_point=F[best_idx].copy())


def best_compromise(candidates: Sequence[Candidate], objectives: ObjectiveSet) -> Candidate:
    """
    Pick one candidate of a Pareto front with TOPSIS.

    Only candidates with a complete objective vector are considered; an
    empty front raises ValueError.
    """
    rows: list[np.ndarray] = []
    usable: list[Candidate] = []
    for cand in candidates:
        vec = cand.objective_vector(objectives)
        if vec is None:
            continue
        rows.append(vec)
        usable.append(cand)
    if not usable:
        raise ValueError("Cannot pick a best compromise from an empty Pareto front.")
    result = topsis_scores(np.vstack(rows), objectives.weights, objectives.maximize)
    return usable[result.best_index]


__all__ = ["MCDMResult", "weighted_sum_scores", "topsis_scores", "best_compromise"]
