"""Particle swarm optimizer.

Gradient-free minimizer of a scalar objective. Every particle starts at the
caller's starting point with a velocity equal to that point; each iteration
evaluates the swarm, updates the best-known positions, asks the velocity
policy for new velocities and moves the particles.

Reference:
    Kennedy, J. and Eberhart, R. (1995). Particle swarm optimization.
    Proceedings of ICNN'95, vol. 4, pp. 1942-1948.
"""

from __future__ import annotations

import itertools
import logging
import math
import threading
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from pswarm.engine.algorithm.config import PERSONAL_BEST_MODES, PSOConfigData
from pswarm.foundation.eval.backends import resolve_eval_backend
from pswarm.foundation.exceptions import InvalidConfigurationError
from pswarm.foundation.observer import NullObserver, RunContext
from pswarm.foundation.problem.base import as_objective
from pswarm.foundation.random import NumpyRandomSource, resolve_random_source
from .helpers import initialize_swarm, prepare_starting_point, update_global_best, update_personal_bests
from .state import PSOResult, SwarmState, build_pso_result
from .velocity import resolve_velocity_policy

if TYPE_CHECKING:
    from pswarm.foundation.eval import EvaluationBackend
    from pswarm.foundation.observer import Observer
    from pswarm.foundation.problem.base import Objective
    from pswarm.foundation.random import RandomSource
    from .velocity import VelocityPolicy

_logger = logging.getLogger(__name__)

__all__ = ["SwarmOptimizer", "PSO", "UNBOUNDED_HISTORY_SIZE"]

# Convergence history kept by an unbounded run when no history_size is given.
UNBOUNDED_HISTORY_SIZE = 10_000


class SwarmOptimizer:
    """Particle Swarm Optimization.

    Parameters
    ----------
    population_size : int
        Number of particles.
    inertia_weight : float
        Inertia weight ``w`` (ignored by the constriction factor policy).
    cognitive_acceleration : float
        Pull ``c1`` toward the personal best.
    social_acceleration : float
        Pull ``c2`` toward the global best.
    max_iterations : int
        Iteration budget; 0 means no limit.
    tolerance : float
        Stop as soon as the last objective value of a sweep is below this.
    velocity_policy : VelocityPolicy or str, optional
        ``InertiaWeight`` (default) or ``ConstrictionFactor``, or their names.
    personal_best : str
        ``"shared"``: one personal-best slot updated across the whole sweep.
        ``"per_particle"``: one personal best per particle.
    random_source : RandomSource or int, optional
        Source of the stochastic coefficients; an int is used as a seed.
        Reseeded at the start of every run.
    eval_backend : EvaluationBackend or str, optional
        How the swarm is evaluated each iteration (serial by default).
    history_size : int, optional
        Keep only the newest ``history_size`` global-best entries. By default
        a bounded run keeps one entry per iteration and an unbounded run keeps
        the last ``UNBOUNDED_HISTORY_SIZE``.

    The constructor stores its arguments as given; values are checked when a
    run starts.

    Examples
    --------
    >>> import numpy as np
    >>> from pswarm import SwarmOptimizer, make_objective
    >>> x = np.array([[1.0], [-2.0]])
    >>> opt = SwarmOptimizer(population_size=20, max_iterations=500, random_source=1)
    >>> value = opt.optimize(make_objective("sphere"), x)  # x now holds the best position

    Explicit result object:

    >>> result = opt.run(make_objective("sphere"), np.ones((3, 1)))
    >>> result.best_objective, result.iterations
    """

    def __init__(
        self,
        population_size: int = 10,
        inertia_weight: float = 0.9,
        cognitive_acceleration: float = 0.5,
        social_acceleration: float = 0.3,
        max_iterations: int = 200,
        tolerance: float = 1e-5,
        velocity_policy: "VelocityPolicy | str | None" = None,
        *,
        personal_best: str = "shared",
        random_source: "RandomSource | int | None" = None,
        eval_backend: "EvaluationBackend | str | None" = None,
        history_size: int | None = None,
    ) -> None:
        self._population_size = population_size
        self._inertia_weight = inertia_weight
        self._cognitive_acceleration = cognitive_acceleration
        self._social_acceleration = social_acceleration
        self._max_iterations = max_iterations
        self._tolerance = tolerance
        self._velocity_policy = resolve_velocity_policy(velocity_policy)
        self._personal_best = personal_best
        self._random_source = resolve_random_source(random_source)
        self._eval_backend = resolve_eval_backend(eval_backend)
        self._history_size = history_size
        self._st: SwarmState | None = None
        self._last_result: PSOResult | None = None
        self._stop_event = threading.Event()

    @classmethod
    def from_config(cls, config: PSOConfigData) -> "SwarmOptimizer":
        """Build an optimizer from a ``PSOConfigData``."""
        return cls(
            population_size=config.population_size,
            inertia_weight=config.inertia_weight,
            cognitive_acceleration=config.cognitive_acceleration,
            social_acceleration=config.social_acceleration,
            max_iterations=config.max_iterations,
            tolerance=config.tolerance,
            velocity_policy=config.velocity_policy,
            personal_best=config.personal_best,
            random_source=NumpyRandomSource(config.seed),
            eval_backend=resolve_eval_backend(config.eval_backend, n_workers=config.n_workers),
            history_size=config.history_size,
        )

    # -------------------------------------------------------------------------
    # Configuration accessors
    # -------------------------------------------------------------------------

    @property
    def population_size(self) -> int:
        return self._population_size

    @population_size.setter
    def population_size(self, value: int) -> None:
        self._population_size = value

    @property
    def inertia_weight(self) -> float:
        return self._inertia_weight

    @inertia_weight.setter
    def inertia_weight(self, value: float) -> None:
        self._inertia_weight = value

    @property
    def cognitive_acceleration(self) -> float:
        return self._cognitive_acceleration

    @cognitive_acceleration.setter
    def cognitive_acceleration(self, value: float) -> None:
        self._cognitive_acceleration = value

    @property
    def social_acceleration(self) -> float:
        return self._social_acceleration

    @social_acceleration.setter
    def social_acceleration(self, value: float) -> None:
        self._social_acceleration = value

    @property
    def max_iterations(self) -> int:
        """Iteration budget (0 indicates no limit)."""
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: int) -> None:
        self._max_iterations = value

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        self._tolerance = value

    @property
    def velocity_policy(self) -> "VelocityPolicy":
        return self._velocity_policy

    @velocity_policy.setter
    def velocity_policy(self, value: "VelocityPolicy | str | None") -> None:
        self._velocity_policy = resolve_velocity_policy(value)

    @property
    def personal_best(self) -> str:
        return self._personal_best

    @personal_best.setter
    def personal_best(self, value: str) -> None:
        self._personal_best = value

    @property
    def random_source(self) -> "RandomSource":
        return self._random_source

    @random_source.setter
    def random_source(self, value: "RandomSource | int | None") -> None:
        self._random_source = resolve_random_source(value)

    @property
    def eval_backend(self) -> "EvaluationBackend":
        return self._eval_backend

    @eval_backend.setter
    def eval_backend(self, value: "EvaluationBackend | str | None") -> None:
        self._eval_backend = resolve_eval_backend(value)

    @property
    def history_size(self) -> int | None:
        return self._history_size

    @history_size.setter
    def history_size(self, value: int | None) -> None:
        self._history_size = value

    def config_dict(self) -> dict[str, Any]:
        """Snapshot of the current configuration."""
        return {
            "population_size": self._population_size,
            "inertia_weight": self._inertia_weight,
            "cognitive_acceleration": self._cognitive_acceleration,
            "social_acceleration": self._social_acceleration,
            "max_iterations": self._max_iterations,
            "tolerance": self._tolerance,
            "velocity_policy": self._velocity_policy.name,
            "personal_best": self._personal_best,
            "history_size": self._history_size,
        }

    # -------------------------------------------------------------------------
    # Main run methods
    # -------------------------------------------------------------------------

    def optimize(self, objective: "Objective | Callable[[np.ndarray], float]", starting_point: np.ndarray) -> float:
        """Minimize ``objective`` from ``starting_point``.

        ``starting_point`` is overwritten with the best position found when
        it is a writable floating-point ndarray. Use :meth:`run` to get the
        best position back as part of a result object instead.

        Returns
        -------
        float
            The last evaluated objective value if it fell below the tolerance,
            otherwise the best objective value found.
        """
        result = self.run(objective, starting_point)
        if (
            isinstance(starting_point, np.ndarray)
            and np.issubdtype(starting_point.dtype, np.floating)
            and starting_point.flags.writeable
        ):
            starting_point[...] = result.best_position.reshape(starting_point.shape)
        else:
            _logger.debug("Starting point is not a writable float ndarray; best position left in last_result.")
        return result.final_objective

    def run(
        self,
        objective: "Objective | Callable[[np.ndarray], float]",
        starting_point: np.ndarray,
        observer: "Observer | None" = None,
    ) -> PSOResult:
        """Run the optimization loop and return a :class:`PSOResult`.

        Parameters
        ----------
        objective : Objective or callable
            Object with ``evaluate(position) -> float`` or a plain callable.
        starting_point : np.ndarray
            1-D or 2-D starting point; every particle starts here. Not modified.
        observer : Observer, optional
            Receives start, per-iteration and end events.

        Returns
        -------
        PSOResult
            Best position (in the starting point's shape), objective values,
            convergence history and run counters.

        Raises
        ------
        InvalidConfigurationError
            If a configuration value is out of range.
        StartingPointError
            If the starting point is empty, not 1-D/2-D, or not finite.
        EvaluationError
            If the objective raises.
        """
        self._validate()
        objective = as_objective(objective)
        observer = observer or NullObserver()
        output_shape = tuple(np.shape(starting_point))
        x0 = prepare_starting_point(starting_point)

        n = int(self._population_size)
        c1 = self._cognitive_acceleration
        c2 = self._social_acceleration
        w = self._inertia_weight
        tolerance = self._tolerance
        policy = self._velocity_policy
        rs = self._random_source

        rs.reseed()
        policy.initialize(c1, c2)
        history_size = self._history_size
        if history_size is None and self._max_iterations == 0:
            history_size = UNBOUNDED_HISTORY_SIZE
        self._st = st = initialize_swarm(x0, n, self._personal_best, history_size)

        observer.on_start(
            RunContext(objective=objective, optimizer=self, config=self.config_dict(), shape=st.slab_shape)
        )
        _logger.debug("PSO start | shape=%s | config=%s", st.slab_shape, self.config_dict())

        iterations = itertools.count() if self._max_iterations == 0 else range(self._max_iterations)
        stopped_early = False
        cancelled = False
        try:
            for _ in iterations:
                if self._stop_event.is_set():
                    cancelled = True
                    _logger.info("PSO: stop requested; terminating after %d iterations.", st.iteration)
                    break

                values = self._eval_backend.evaluate(st.positions, objective)
                st.n_eval += n
                st.last_objective = float(values[-1])

                update_personal_bests(st, values)
                update_global_best(st)

                policy.update(
                    st.positions,
                    st.velocities,
                    st.personal_best_X,
                    st.global_best_X,
                    w,
                    c1,
                    c2,
                    n,
                    rs,
                )
                st.positions += st.velocities

                st.iteration += 1
                st.history.append(st.global_best_F)
                observer.on_iteration(
                    st.iteration,
                    st,
                    {"global_best": st.global_best_F, "last_objective": st.last_objective},
                )

                if st.last_objective < tolerance:
                    stopped_early = True
                    _logger.info("PSO: minimized within tolerance %g; terminating optimization.", tolerance)
                    break
        finally:
            # Stop requests never outlive the run that saw them.
            self._stop_event.clear()

        result = build_pso_result(st, stopped_early=stopped_early, cancelled=cancelled, output_shape=output_shape)
        self._last_result = result
        observer.on_end(result)
        _logger.debug(
            "PSO end | best=%g | final=%g | iterations=%d | evaluations=%d",
            result.best_objective,
            result.final_objective,
            result.iterations,
            result.n_eval,
        )
        return result

    def request_stop(self) -> None:
        """Ask :meth:`run` to stop before its next iteration.

        Safe to call from another thread or from an observer callback. A
        request made before a run starts cancels that run at its first check.
        Pending requests are cleared when a run ends.
        """
        self._stop_event.set()

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SwarmState | None:
        """Swarm state of the current or most recent run."""
        return self._st

    @property
    def last_result(self) -> PSOResult | None:
        return self._last_result

    def _validate(self) -> None:
        n = self._population_size
        if not isinstance(n, (int, np.integer)) or isinstance(n, bool) or n < 1:
            raise InvalidConfigurationError("population_size", n, "the swarm needs at least one particle")
        iters = self._max_iterations
        if not isinstance(iters, (int, np.integer)) or isinstance(iters, bool) or iters < 0:
            raise InvalidConfigurationError("max_iterations", iters, "must be a non-negative integer (0 = no limit)")
        tol = self._tolerance
        if math.isnan(float(tol)) or float(tol) < 0.0:
            raise InvalidConfigurationError("tolerance", tol, "must be a non-negative number")
        if self._personal_best not in PERSONAL_BEST_MODES:
            raise InvalidConfigurationError(
                "personal_best", self._personal_best, f"must be one of {', '.join(PERSONAL_BEST_MODES)}"
            )
        size = self._history_size
        if size is not None and (not isinstance(size, (int, np.integer)) or isinstance(size, bool) or size < 0):
            raise InvalidConfigurationError("history_size", size, "must be None or a non-negative integer")

    def __repr__(self) -> str:
        return (
            f"SwarmOptimizer(population_size={self._population_size}, inertia_weight={self._inertia_weight}, "
            f"cognitive_acceleration={self._cognitive_acceleration}, social_acceleration={self._social_acceleration}, "
            f"max_iterations={self._max_iterations}, tolerance={self._tolerance}, "
            f"velocity_policy={self._velocity_policy!r})"
        )


PSO = SwarmOptimizer
