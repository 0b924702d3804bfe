from designopt.engine.algorithm.components.archive import CrowdingDistanceArchive
from designopt.engine.algorithm.components.evaluation import evaluate_batch, mark_failed
from designopt.engine.algorithm.components.results import EngineResult
from designopt.engine.algorithm.components.state import RunState
from designopt.engine.algorithm.components.stats import GenerationStats, StatsHistory
from designopt.engine.algorithm.components.termination import StopSignal
from designopt.engine.algorithm.components.variation import VariationPipeline

__all__ = [
    "CrowdingDistanceArchive",
    "EngineResult",
    "GenerationStats",
    "RunState",
    "StatsHistory",
    "StopSignal",
    "VariationPipeline",
    "evaluate_batch",
    "mark_failed",
]
