from __future__ import annotations

from typing import Any, Protocol

import numpy as np


class EvaluationBackend(Protocol):
    """Protocol for evaluation backends.

    ``evaluate`` receives the stacked particle positions, shape
    ``(population_size, *point_shape)``, and returns one float per particle in
    particle order.
    """

    def evaluate(self, positions: np.ndarray, objective: Any) -> np.ndarray: ...

    def close(self) -> None:  # pragma: no cover - optional for pooled backends
        """Clean up any resources (executors, pools)."""
        return None


__all__ = ["EvaluationBackend"]
