from .mcdm import MCDMResult, best_compromise, topsis_scores, weighted_sum_scores

__all__ = ["MCDMResult", "best_compromise", "topsis_scores", "weighted_sum_scores"]
