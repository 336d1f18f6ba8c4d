from woodpuzzle.engine.treesearch.solver import DepthFirstSolver, DepthStats, Step, TreeSolution

__all__ = ["DepthFirstSolver", "DepthStats", "Step", "TreeSolution"]
