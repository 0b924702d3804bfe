from .diversity import mean_finite, mean_pairwise_distance
from .hypervolume import compute_hypervolume, nadir_reference
from .pareto import pareto_filter, unique_rows

__all__ = [
    "mean_finite",
    "mean_pairwise_distance",
    "compute_hypervolume",
    "nadir_reference",
    "pareto_filter",
    "unique_rows",
]
