"""Swarm state container and result building."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass
class SwarmState:
    """State of one optimization run.

    Attributes
    ----------
    positions : np.ndarray
        Particle positions, shape (population_size, *point_shape).
    velocities : np.ndarray
        Particle velocities, index-aligned with ``positions``.
    personal_best_X : np.ndarray
        Shared mode: one point_shape slab. Per-particle mode: (population_size, *point_shape).
    personal_best_F : np.ndarray
        Shared mode: 0-d array. Per-particle mode: shape (population_size,).
    global_best_X : np.ndarray
        Best position seen by the swarm, shape point_shape (the starting point's shape).
    global_best_F : float
        Objective value at ``global_best_X``; ``inf`` until a finite value is seen.
    last_objective : float
        Value returned by the last particle evaluated in the latest sweep.
    history : deque
        Global best after each iteration; only the newest ``maxlen`` entries
        are kept when the deque is bounded.
    """

    positions: np.ndarray
    velocities: np.ndarray
    personal_best_X: np.ndarray
    personal_best_F: np.ndarray
    global_best_X: np.ndarray
    global_best_F: float = float("inf")
    last_objective: float = float("inf")
    personal_best_mode: str = "shared"

    iteration: int = 0
    n_eval: int = 0
    history: deque[float] = field(default_factory=deque)

    @property
    def population_size(self) -> int:
        return int(self.positions.shape[0])

    @property
    def slab_shape(self) -> tuple[int, ...]:
        return tuple(self.positions.shape[1:])


@dataclass
class PSOResult:
    """Outcome of ``SwarmOptimizer.run``.

    ``final_objective`` is the value ``optimize`` returns: the last evaluated
    objective when the tolerance stopped the run, the global best otherwise.
    """

    best_position: np.ndarray
    best_objective: float
    final_objective: float
    history: list[float] = field(default_factory=list)
    iterations: int = 0
    n_eval: int = 0
    stopped_early: bool = False
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "best_position": self.best_position.tolist(),
            "best_objective": self.best_objective,
            "final_objective": self.final_objective,
            "history": list(self.history),
            "iterations": self.iterations,
            "n_eval": self.n_eval,
            "stopped_early": self.stopped_early,
            "cancelled": self.cancelled,
        }


def build_pso_result(
    state: SwarmState,
    *,
    stopped_early: bool = False,
    cancelled: bool = False,
    output_shape: tuple[int, ...] | None = None,
) -> PSOResult:
    """Build the final result from swarm state."""
    best_X = state.global_best_X.copy()
    if output_shape is not None:
        best_X = best_X.reshape(output_shape)
    final = state.last_objective if stopped_early else state.global_best_F
    return PSOResult(
        best_position=best_X,
        best_objective=float(state.global_best_F),
        final_objective=float(final),
        history=list(state.history),
        iterations=state.iteration,
        n_eval=state.n_eval,
        stopped_early=stopped_early,
        cancelled=cancelled,
    )


__all__ = ["SwarmState", "PSOResult", "build_pso_result"]
