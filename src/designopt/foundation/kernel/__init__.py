"""
Foundation layer: vectorized kernels for NSGA-II ranking.
"""

from .numpy_backend import (
    compute_crowding,
    dominance_matrix,
    fast_non_dominated_sort,
    nsga2_ranking,
    select_nsga2,
    single_front_crowding,
)

__all__ = [
    "compute_crowding",
    "dominance_matrix",
    "fast_non_dominated_sort",
    "nsga2_ranking",
    "select_nsga2",
    "single_front_crowding",
]
