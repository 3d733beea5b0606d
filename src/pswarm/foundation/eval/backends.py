from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Optional

import numpy as np
from joblib import Parallel, delayed  # type: ignore[import-untyped]

from pswarm.foundation.exceptions import EvaluationError, InvalidEvalBackendError
from . import EvaluationBackend

_logger = logging.getLogger(__name__)


def _eval_chunk(objective: Any, positions: np.ndarray) -> np.ndarray:
    """Worker helper to evaluate a chunk; kept at module level for pickling."""
    return np.array([float(objective.evaluate(p)) for p in positions], dtype=float)


def _eval_one(objective: Any, position: np.ndarray) -> tuple[float, BaseException | None]:
    """Evaluate one particle, returning the failure instead of raising it."""
    try:
        return float(objective.evaluate(position)), None
    except Exception as exc:
        return float("nan"), exc


class SerialEvalBackend(EvaluationBackend):
    """Synchronous in-process evaluation, one particle after another (default)."""

    def evaluate(self, positions: np.ndarray, objective: Any) -> np.ndarray:
        values = np.empty(positions.shape[0], dtype=float)
        for k in range(positions.shape[0]):
            try:
                values[k] = float(objective.evaluate(positions[k]))
            except Exception as exc:
                raise EvaluationError(f"Objective evaluation failed for particle {k}: {exc}", particle=k) from exc
        return values

    def close(self) -> None:
        return None


class JoblibEvalBackend(EvaluationBackend):
    """
    Parallel evaluation through ``joblib.Parallel``.

    Notes:
        - joblib returns results in submission order, so values stay index-aligned.
        - The loky default needs a picklable objective; pass ``prefer="threads"``
          for objectives that release the GIL or cannot be pickled.
    """

    def __init__(self, n_jobs: Optional[int] = None, prefer: Optional[str] = None):
        self.n_jobs = n_jobs if n_jobs is not None else -1
        self.prefer = prefer

    def evaluate(self, positions: np.ndarray, objective: Any) -> np.ndarray:
        if positions.shape[0] <= 1 or self.n_jobs == 1:
            return SerialEvalBackend().evaluate(positions, objective)
        try:
            results = Parallel(n_jobs=self.n_jobs, prefer=self.prefer)(
                delayed(_eval_one)(objective, p) for p in positions
            )
        except Exception as exc:
            # Failure outside the objective (e.g. pickling); no particle to blame.
            raise EvaluationError(f"Objective evaluation failed in joblib worker: {exc}") from exc
        for k, (_, error) in enumerate(results):
            if error is not None:
                raise EvaluationError(f"Objective evaluation failed for particle {k}: {error}", particle=k) from error
        return np.array([value for value, _ in results], dtype=float)

    def close(self) -> None:
        return None


class MultiprocessingEvalBackend(EvaluationBackend):
    """
    Parallel evaluation using a process pool.

    Notes:
        - Requires the objective instance to be picklable.
        - Best suited for expensive evaluations; overhead dominates for cheap objectives.
    """

    def __init__(self, n_workers: Optional[int] = None, chunk_size: Optional[int] = None):
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self.chunk_size = chunk_size

    def evaluate(self, positions: np.ndarray, objective: Any) -> np.ndarray:
        if self.n_workers <= 1 or positions.shape[0] <= 1:
            return SerialEvalBackend().evaluate(positions, objective)

        n = positions.shape[0]
        if self.chunk_size is not None and self.chunk_size > 0:
            chunk_size = self.chunk_size
        else:
            chunk_size = max(1, math.ceil(n / self.n_workers))
        slices = [(i, min(i + chunk_size, n)) for i in range(0, n, chunk_size)]
        _logger.debug("Evaluating %d particles in %d chunks on %d workers", n, len(slices), self.n_workers)

        values = np.empty(n, dtype=float)
        with ProcessPoolExecutor(max_workers=self.n_workers) as ex:
            future_map = {ex.submit(_eval_chunk, objective, positions[start:end]): (start, end) for start, end in slices}
            for fut in as_completed(future_map):
                start, end = future_map[fut]
                try:
                    values[start:end] = fut.result()
                except Exception as exc:
                    raise EvaluationError(
                        f"Objective evaluation failed for particles {start}..{end - 1}: {exc}", particle=start
                    ) from exc
        return values

    def close(self) -> None:
        return None


def resolve_eval_backend(
    name: str | EvaluationBackend | None,
    *,
    n_workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> EvaluationBackend:
    if name is not None and not isinstance(name, str):
        return name
    key = (name or "serial").lower()
    if key == "serial":
        return SerialEvalBackend()
    if key == "joblib":
        return JoblibEvalBackend(n_jobs=n_workers)
    if key == "multiprocessing":
        return MultiprocessingEvalBackend(n_workers=n_workers, chunk_size=chunk_size)
    raise InvalidEvalBackendError(str(name))


__all__ = ["SerialEvalBackend", "JoblibEvalBackend", "MultiprocessingEvalBackend", "resolve_eval_backend"]
