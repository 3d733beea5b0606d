from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

_logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """
    Encapsulates the static context of an optimization run.
    Passed to on_start events.
    """

    objective: Any  # Objective instance
    optimizer: Any  # SwarmOptimizer instance
    config: dict[str, Any]  # configuration snapshot for this run
    shape: tuple[int, ...] = ()  # shape of one particle slab


@runtime_checkable
class Observer(Protocol):
    """
    Observer interface for swarm runs.
    Reacts to lifecycle events of the optimization process.
    """

    def on_start(self, ctx: RunContext) -> None:
        """Called once at the beginning of the run, after the swarm is allocated."""
        ...

    def on_iteration(self, iteration: int, state: Any, stats: dict[str, Any] | None = None) -> None:
        """Called after every iteration, once positions have been moved."""
        ...

    def on_end(self, result: Any) -> None:
        """Called once at the end of the run with the final result."""
        ...


class NullObserver:
    """Observer that ignores every event."""

    def on_start(self, ctx: RunContext) -> None:
        return None

    def on_iteration(self, iteration: int, state: Any, stats: dict[str, Any] | None = None) -> None:
        return None

    def on_end(self, result: Any) -> None:
        return None


class LoggingObserver:
    """Log progress to the ``pswarm`` logger every ``every`` iterations."""

    def __init__(self, every: int = 10, level: int = logging.INFO, logger: logging.Logger | None = None) -> None:
        self.every = max(1, int(every))
        self.level = level
        self.logger = logger or _logger

    def on_start(self, ctx: RunContext) -> None:
        self.logger.log(self.level, "PSO start | shape=%s | config=%s", ctx.shape, ctx.config)

    def on_iteration(self, iteration: int, state: Any, stats: dict[str, Any] | None = None) -> None:
        if iteration % self.every != 0:
            return
        stats = stats or {}
        self.logger.log(
            self.level,
            "PSO iteration %d | best=%.6g | last=%.6g",
            iteration,
            stats.get("global_best", float("nan")),
            stats.get("last_objective", float("nan")),
        )

    def on_end(self, result: Any) -> None:
        self.logger.log(
            self.level,
            "PSO end | best=%.6g | iterations=%d | stopped_early=%s",
            result.best_objective,
            result.iterations,
            result.stopped_early,
        )


__all__ = ["RunContext", "Observer", "NullObserver", "LoggingObserver"]
