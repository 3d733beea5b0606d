"""PSO helper functions.

This module contains utility functions for the swarm optimizer:
- Starting point validation and swarm allocation
- Personal best updates (shared slot or one per particle)
- Global best reduction
"""

from __future__ import annotations

import logging
from collections import deque

import numpy as np

from pswarm.foundation.exceptions import StartingPointError
from .state import SwarmState

_logger = logging.getLogger(__name__)


__all__ = [
    "prepare_starting_point",
    "initialize_swarm",
    "update_personal_bests",
    "update_global_best",
]


def prepare_starting_point(starting_point: np.ndarray) -> np.ndarray:
    """Return a float copy of ``starting_point`` in the caller's layout.

    1-D and 2-D points keep their shape, so the objective always receives
    positions laid out like the point it was given.

    Raises
    ------
    StartingPointError
        If the array is empty, has more than two dimensions, is not
        real-valued, or holds non-finite entries.
    """
    try:
        x0 = np.array(starting_point, dtype=float, copy=True)
    except (TypeError, ValueError) as exc:
        raise StartingPointError(f"Starting point is not a real-valued array: {exc}") from exc
    if x0.ndim == 0 or x0.ndim > 2:
        raise StartingPointError(f"Starting point must be 1-D or 2-D, got {x0.ndim}-D.", shape=x0.shape)
    if x0.size == 0:
        raise StartingPointError("Starting point is empty.", shape=x0.shape)
    if not np.all(np.isfinite(x0)):
        raise StartingPointError("Starting point contains non-finite entries.", shape=x0.shape)
    return x0


def initialize_swarm(
    x0: np.ndarray,
    population_size: int,
    personal_best_mode: str,
    history_size: int | None = None,
) -> SwarmState:
    """Allocate the swarm with every position and velocity a copy of ``x0``.

    Both bests start at the first particle with an infinite objective.
    ``history_size`` bounds the convergence history (None keeps everything).
    """
    positions = np.repeat(x0[np.newaxis, ...], population_size, axis=0)
    velocities = positions.copy()
    if personal_best_mode == "per_particle":
        personal_best_X = positions.copy()
        personal_best_F = np.full(population_size, np.inf)
    else:
        personal_best_X = positions[0].copy()
        personal_best_F = np.array(np.inf)
    return SwarmState(
        positions=positions,
        velocities=velocities,
        personal_best_X=personal_best_X,
        personal_best_F=personal_best_F,
        global_best_X=positions[0].copy(),
        personal_best_mode=personal_best_mode,
        history=deque(maxlen=history_size),
    )


def update_personal_bests(state: SwarmState, values: np.ndarray) -> None:
    """Fold one sweep of objective values into the personal bests.

    Shared mode scans the sweep in particle order with a strict ``<``, so the
    slot ends on the first particle holding the sweep minimum when it beats
    the stored value. Per-particle mode updates each particle independently.
    Non-finite values never become a best.
    """
    finite = np.isfinite(values)
    n_bad = int(values.size - np.count_nonzero(finite))
    if n_bad:
        _logger.warning(
            "Excluded %d non-finite objective value(s) from best tracking at iteration %d.",
            n_bad,
            state.iteration + 1,
        )

    if state.personal_best_mode == "per_particle":
        improved = finite & (values < state.personal_best_F)
        if np.any(improved):
            state.personal_best_F[improved] = values[improved]
            state.personal_best_X[improved] = state.positions[improved]
        return

    if not np.any(finite):
        return
    masked = np.where(finite, values, np.inf)
    k = int(np.argmin(masked))
    if masked[k] < state.personal_best_F:
        state.personal_best_F = np.array(masked[k])
        state.personal_best_X = state.positions[k].copy()


def update_global_best(state: SwarmState) -> bool:
    """Promote the best personal best to global best when strictly better.

    Ties between particles go to the lowest index.

    Returns
    -------
    bool
        True if the global best changed.
    """
    if state.personal_best_mode == "per_particle":
        k = int(np.argmin(state.personal_best_F))
        candidate_F = float(state.personal_best_F[k])
        candidate_X = state.personal_best_X[k]
    else:
        candidate_F = float(state.personal_best_F)
        candidate_X = state.personal_best_X

    if candidate_F < state.global_best_F:
        state.global_best_F = candidate_F
        state.global_best_X = candidate_X.copy()
        return True
    return False
