"""
PSWARM: particle swarm optimization for continuous single-objective problems.
"""

from .engine.algorithm.config import PSOConfig, PSOConfigData
from .engine.algorithm.pso import (
    PSO,
    ConstrictionFactor,
    InertiaWeight,
    PSOResult,
    SwarmOptimizer,
    SwarmState,
    VelocityPolicy,
)
from .foundation.eval.backends import (
    JoblibEvalBackend,
    MultiprocessingEvalBackend,
    SerialEvalBackend,
    resolve_eval_backend,
)
from .foundation.exceptions import (
    ConfigurationError,
    EvaluationError,
    InvalidConfigurationError,
    OptimizationError,
    PSwarmError,
    StartingPointError,
)
from .foundation.logging import configure_pswarm_logging
from .foundation.observer import LoggingObserver, NullObserver, Observer, RunContext
from .foundation.problem import FunctionObjective, Objective, make_objective
from .foundation.random import NumpyRandomSource, RandomSource
from .foundation.version import get_version
from .optimize import minimize

__all__ = [
    "minimize",
    "SwarmOptimizer",
    "PSO",
    "SwarmState",
    "PSOResult",
    "VelocityPolicy",
    "InertiaWeight",
    "ConstrictionFactor",
    "PSOConfig",
    "PSOConfigData",
    "Objective",
    "FunctionObjective",
    "make_objective",
    "RandomSource",
    "NumpyRandomSource",
    "SerialEvalBackend",
    "JoblibEvalBackend",
    "MultiprocessingEvalBackend",
    "resolve_eval_backend",
    "Observer",
    "RunContext",
    "NullObserver",
    "LoggingObserver",
    "PSwarmError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "OptimizationError",
    "StartingPointError",
    "EvaluationError",
    "configure_pswarm_logging",
    "get_version",
    "__version__",
]


def __getattr__(name: str):
    if name == "__version__":
        return get_version()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
