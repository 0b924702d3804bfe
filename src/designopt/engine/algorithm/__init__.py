from designopt.engine.algorithm.config import GeneticAlgorithmConfig, MultiObjectiveConfig
from designopt.engine.algorithm.ga import GeneticAlgorithm
from designopt.engine.algorithm.nsgaii import NSGAII

__all__ = ["GeneticAlgorithmConfig", "MultiObjectiveConfig", "GeneticAlgorithm", "NSGAII"]
