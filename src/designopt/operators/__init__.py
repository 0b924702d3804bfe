from designopt.operators.crossover import SBXCrossover
from designopt.operators.initialize import LatinHypercubeInitializer, RandomInitializer, initialize_population
from designopt.operators.mutation import PolynomialMutation
from designopt.operators.selection import TournamentSelection, fitness_comparator, rank_crowding_comparator

__all__ = [
    "SBXCrossover",
    "PolynomialMutation",
    "TournamentSelection",
    "fitness_comparator",
    "rank_crowding_comparator",
    "RandomInitializer",
    "LatinHypercubeInitializer",
    "initialize_population",
]
