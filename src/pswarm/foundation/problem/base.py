"""
Objective capability consumed by the swarm optimizer.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Objective(Protocol):
    """Anything exposing ``evaluate(position) -> float``.

    ``position`` is one particle slab: a 2-D array with the shape of the
    caller's starting point. No smoothness or continuity is assumed.
    """

    def evaluate(self, position: np.ndarray) -> float: ...


class FunctionObjective:
    """Adapt a plain callable ``fn(position) -> float`` to the Objective protocol.

    Example::

        import numpy as np
        from pswarm import FunctionObjective, SwarmOptimizer

        objective = FunctionObjective(lambda x: float(np.sum(x ** 2)), name="sphere")
        value = SwarmOptimizer().optimize(objective, np.ones((3, 1)))
    """

    def __init__(self, fn: Callable[[np.ndarray], Any], name: str | None = None) -> None:
        if not callable(fn):
            raise TypeError(f"FunctionObjective expects a callable, got {type(fn).__name__}.")
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "objective")

    def evaluate(self, position: np.ndarray) -> float:
        return float(self.fn(position))

    def __call__(self, position: np.ndarray) -> float:
        return self.evaluate(position)

    def __repr__(self) -> str:
        return f"FunctionObjective({self.name!r})"


def as_objective(obj: Objective | Callable[[np.ndarray], Any]) -> Objective:
    """Return ``obj`` when it already implements ``evaluate``; wrap bare callables."""
    if isinstance(obj, Objective):
        return obj
    if callable(obj):
        return FunctionObjective(obj)
    raise TypeError(f"Expected an object with evaluate(position) or a callable, got {type(obj).__name__}.")


__all__ = ["Objective", "FunctionObjective", "as_objective"]
