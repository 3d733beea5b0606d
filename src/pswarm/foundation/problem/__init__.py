from .base import FunctionObjective, Objective, as_objective
from .functions import BENCHMARK_FUNCTIONS, ackley, make_objective, rastrigin, rosenbrock, sphere

__all__ = [
    "Objective",
    "FunctionObjective",
    "as_objective",
    "BENCHMARK_FUNCTIONS",
    "make_objective",
    "sphere",
    "rastrigin",
    "ackley",
    "rosenbrock",
]
