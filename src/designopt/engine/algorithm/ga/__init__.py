from designopt.engine.algorithm.ga.ga import GeneticAlgorithm, select_winner

__all__ = ["GeneticAlgorithm", "select_winner"]
