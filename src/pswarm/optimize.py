"""
One-call entry point for swarm optimization.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from pswarm.engine.algorithm.config import PSOConfig, PSOConfigData
from pswarm.engine.algorithm.pso import PSOResult, SwarmOptimizer
from pswarm.foundation.observer import Observer
from pswarm.foundation.problem.base import Objective

_logger = logging.getLogger(__name__)


def minimize(
    objective: Objective | Callable[[np.ndarray], float],
    x0: np.ndarray,
    config: PSOConfigData | dict[str, Any] | None = None,
    *,
    observer: Observer | None = None,
    **overrides: Any,
) -> PSOResult:
    """
    Minimize ``objective`` with a particle swarm started at ``x0``.

    Args:
        objective: Object with ``evaluate(position)`` or a plain callable.
        x0: 1-D or 2-D starting point shared by every particle. Not modified.
        config: ``PSOConfigData``, a plain dict accepted by ``PSOConfig.from_dict``,
            or None for ``PSOConfig.default()``.
        observer: Optional run observer.
        **overrides: Individual configuration fields applied on top of ``config``.

    Returns:
        PSOResult with the best position (same shape as ``x0``) and run statistics.

    Example:
        result = minimize(make_objective("rastrigin"), np.full((4, 1), 2.0), population_size=30, seed=7)
    """
    if config is None:
        merged: dict[str, Any] = PSOConfig.default().to_dict()
    elif isinstance(config, PSOConfigData):
        merged = config.to_dict()
    else:
        merged = PSOConfig.default().to_dict()
        merged.update(config)
    merged.update(overrides)
    cfg = PSOConfig.from_dict(merged)

    optimizer = SwarmOptimizer.from_config(cfg)
    _logger.debug("minimize: %r", optimizer)
    try:
        return optimizer.run(objective, x0, observer=observer)
    finally:
        optimizer.eval_backend.close()


__all__ = ["minimize"]
