"""Velocity update policies for the swarm optimizer.

Two policies form a closed set, looked up by name through
``VELOCITY_POLICIES``:

- ``InertiaWeight``: ``v = w*v + c1*r1*(pbest - x) + c2*r2*(gbest - x)``
- ``ConstrictionFactor``: ``v = chi*(v + c1*r1*(pbest - x) + c2*r2*(gbest - x))``

Both draw ``r1`` then ``r2`` once per update call, each with the shape of a
single particle, and reuse them for every particle in the swarm.
"""

from __future__ import annotations

import math
from typing import Any, Protocol, runtime_checkable

import numpy as np

from pswarm.foundation.exceptions import InvalidConfigurationError, InvalidVelocityPolicyError
from pswarm.foundation.random import RandomSource


__all__ = [
    "VelocityPolicy",
    "InertiaWeight",
    "ConstrictionFactor",
    "VELOCITY_POLICIES",
    "constriction_coefficient",
    "resolve_velocity_policy",
]


@runtime_checkable
class VelocityPolicy(Protocol):
    """Contract shared by the velocity update policies."""

    name: str

    def initialize(self, cognitive_acceleration: float, social_acceleration: float) -> None: ...

    def update(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        personal_best: np.ndarray,
        global_best: np.ndarray,
        inertia_weight: float,
        cognitive_acceleration: float,
        social_acceleration: float,
        population_size: int,
        random_source: RandomSource,
    ) -> None: ...


def _attraction(
    positions: np.ndarray,
    personal_best: np.ndarray,
    global_best: np.ndarray,
    cognitive_acceleration: float,
    social_acceleration: float,
    population_size: int,
    random_source: RandomSource,
) -> np.ndarray:
    """Cognitive plus social pull for the first ``population_size`` particles.

    ``personal_best`` is either one slab shared by the swarm, shape
    ``point_shape``, or one slab per particle, shape ``(n, *point_shape)``.
    ``global_best`` is always a single slab. Both broadcast against the stack.
    """
    slab_shape = positions.shape[1:]
    r1 = random_source.uniform(slab_shape)
    r2 = random_source.uniform(slab_shape)

    x = positions[:population_size]
    pbest = personal_best if personal_best.ndim == x.ndim - 1 else personal_best[:population_size]
    return cognitive_acceleration * r1 * (pbest - x) + social_acceleration * r2 * (global_best - x)


class InertiaWeight:
    """Classic inertia-weight PSO.

    The inertia weight ``w`` scales the previous velocity of each particle:

        v[k] = w * v[k] + c1 * r1 * (pbest - x[k]) + c2 * r2 * (gbest - x[k])

    ``initialize`` has nothing to precompute.
    """

    name = "inertia_weight"

    def initialize(self, cognitive_acceleration: float, social_acceleration: float) -> None:
        return None

    def update(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        personal_best: np.ndarray,
        global_best: np.ndarray,
        inertia_weight: float,
        cognitive_acceleration: float,
        social_acceleration: float,
        population_size: int,
        random_source: RandomSource,
    ) -> None:
        """Update ``velocities`` in place.

        Parameters
        ----------
        positions : np.ndarray
            Particle positions, shape (n, *point_shape).
        velocities : np.ndarray
            Particle velocities, same shape as ``positions``. Mutated.
        personal_best : np.ndarray
            Shared personal best (point_shape) or per-particle bests (n, *point_shape).
        global_best : np.ndarray
            Swarm best position, shape point_shape.
        inertia_weight, cognitive_acceleration, social_acceleration : float
            PSO coefficients ``w``, ``c1`` and ``c2``.
        population_size : int
            Number of leading particles to update.
        random_source : RandomSource
            Source of the ``r1``/``r2`` coefficient matrices.
        """
        pull = _attraction(
            positions,
            personal_best,
            global_best,
            cognitive_acceleration,
            social_acceleration,
            population_size,
            random_source,
        )
        velocities[:population_size] = inertia_weight * velocities[:population_size] + pull

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InertiaWeight)

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return "InertiaWeight()"


def constriction_coefficient(cognitive_acceleration: float, social_acceleration: float) -> float:
    """Clerc's constriction coefficient ``chi = 2 / |2 - phi - sqrt(phi^2 - 4 phi)|``.

    ``phi = c1 + c2`` must be at least 4; below that the square root is not real.
    """
    phi = float(cognitive_acceleration) + float(social_acceleration)
    if not math.isfinite(phi) or phi < 4.0:
        raise InvalidConfigurationError(
            "cognitive_acceleration + social_acceleration",
            phi,
            "the constriction factor needs c1 + c2 >= 4 (c1 = c2 = 2.05 is the usual choice)",
        )
    return 2.0 / abs(2.0 - phi - math.sqrt(phi * phi - 4.0 * phi))


class ConstrictionFactor:
    """Constriction-factor PSO (Clerc and Kennedy, 2002).

    The constriction coefficient ``chi`` computed in ``initialize`` damps the
    whole velocity, so the inertia weight is ignored:

        v[k] = chi * (v[k] + c1 * r1 * (pbest - x[k]) + c2 * r2 * (gbest - x[k]))
    """

    name = "constriction_factor"

    def __init__(self) -> None:
        self.chi: float | None = None
        self._coefficients: tuple[float, float] | None = None

    def initialize(self, cognitive_acceleration: float, social_acceleration: float) -> None:
        self.chi = constriction_coefficient(cognitive_acceleration, social_acceleration)
        self._coefficients = (float(cognitive_acceleration), float(social_acceleration))

    def update(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        personal_best: np.ndarray,
        global_best: np.ndarray,
        inertia_weight: float,
        cognitive_acceleration: float,
        social_acceleration: float,
        population_size: int,
        random_source: RandomSource,
    ) -> None:
        """Update ``velocities`` in place; ``inertia_weight`` is unused."""
        if self._coefficients != (float(cognitive_acceleration), float(social_acceleration)):
            self.initialize(cognitive_acceleration, social_acceleration)
        pull = _attraction(
            positions,
            personal_best,
            global_best,
            cognitive_acceleration,
            social_acceleration,
            population_size,
            random_source,
        )
        velocities[:population_size] = self.chi * (velocities[:population_size] + pull)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ConstrictionFactor)

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"ConstrictionFactor(chi={self.chi!r})"


VELOCITY_POLICIES: dict[str, type] = {
    "inertia_weight": InertiaWeight,
    "inertia": InertiaWeight,
    "constriction_factor": ConstrictionFactor,
    "constriction": ConstrictionFactor,
}


def resolve_velocity_policy(cfg: Any | None) -> VelocityPolicy:
    """Resolve a velocity policy from configuration.

    Parameters
    ----------
    cfg : Any or None
        ``None`` (inertia weight), a policy name, or a policy instance.

    Returns
    -------
    VelocityPolicy
        A fresh policy instance, or ``cfg`` itself when it already is one.

    Raises
    ------
    InvalidVelocityPolicyError
        If the name is not registered.
    """
    if cfg is None:
        return InertiaWeight()
    if isinstance(cfg, (InertiaWeight, ConstrictionFactor)):
        return cfg
    if isinstance(cfg, str):
        cls = VELOCITY_POLICIES.get(cfg.lower())
        if cls is None:
            raise InvalidVelocityPolicyError(cfg, sorted({"inertia_weight", "constriction_factor"}))
        return cls()
    raise InvalidVelocityPolicyError(type(cfg).__name__)
