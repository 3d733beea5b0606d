"""Classic single-objective benchmark functions.

All functions accept an array of any shape and treat it as a flat vector of
decision variables, so a 1-D or 2-D particle slab works as-is.
Every function has its global minimum value 0.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .base import FunctionObjective


def sphere(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float).reshape(-1)
    return float(np.dot(x, x))


def rastrigin(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float).reshape(-1)
    n = x.size
    return float(10.0 * n + np.sum(x**2 - 10.0 * np.cos(2.0 * np.pi * x)))


def ackley(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float).reshape(-1)
    n = x.size
    a, b, c = 20.0, 0.2, 2.0 * np.pi
    mean_sq = np.dot(x, x) / n
    mean_cos = np.mean(np.cos(c * x))
    # Clamp FP roundoff below zero before the sqrt.
    return float(-a * np.exp(-b * np.sqrt(max(mean_sq, 0.0))) - np.exp(mean_cos) + a + np.e)


def rosenbrock(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float).reshape(-1)
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


BENCHMARK_FUNCTIONS: dict[str, Callable[[np.ndarray], float]] = {
    "sphere": sphere,
    "rastrigin": rastrigin,
    "ackley": ackley,
    "rosenbrock": rosenbrock,
}


def make_objective(name: str) -> FunctionObjective:
    """Build a FunctionObjective for a registered benchmark by name."""
    key = str(name).lower()
    fn = BENCHMARK_FUNCTIONS.get(key)
    if fn is None:
        raise ValueError(f"Unknown benchmark function '{name}'. Choose from {sorted(BENCHMARK_FUNCTIONS)}.")
    return FunctionObjective(fn, name=key)


__all__ = ["sphere", "rastrigin", "ackley", "rosenbrock", "BENCHMARK_FUNCTIONS", "make_objective"]
