"""Particle swarm optimizer package.

Exports:
    SwarmOptimizer, PSO: the optimizer (PSO is an alias).
    SwarmState, PSOResult: run state and result containers.
    InertiaWeight, ConstrictionFactor: velocity update policies.
"""

from .pso import PSO, SwarmOptimizer
from .state import PSOResult, SwarmState, build_pso_result
from .velocity import (
    VELOCITY_POLICIES,
    ConstrictionFactor,
    InertiaWeight,
    VelocityPolicy,
    constriction_coefficient,
    resolve_velocity_policy,
)

__all__ = [
    "SwarmOptimizer",
    "PSO",
    "SwarmState",
    "PSOResult",
    "build_pso_result",
    "VelocityPolicy",
    "InertiaWeight",
    "ConstrictionFactor",
    "VELOCITY_POLICIES",
    "constriction_coefficient",
    "resolve_velocity_policy",
]
