from designopt.engine.algorithm.nsgaii.nsgaii import NSGAII

__all__ = ["NSGAII"]
