"""PSO configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import _SerializableConfig, _require_fields

PERSONAL_BEST_MODES = ("shared", "per_particle")


@dataclass(frozen=True)
class PSOConfigData(_SerializableConfig):
    population_size: int = 10
    inertia_weight: float = 0.9
    cognitive_acceleration: float = 0.5
    social_acceleration: float = 0.3
    max_iterations: int = 200
    tolerance: float = 1e-5
    velocity_policy: str = "inertia_weight"
    personal_best: str = "shared"
    seed: Optional[int] = None
    eval_backend: str = "serial"
    n_workers: Optional[int] = None
    history_size: Optional[int] = None


class PSOConfig:
    """
    Declarative configuration holder for the swarm optimizer.
    Provides a fluent builder that yields an immutable PSOConfigData.

    Examples:
        # Fluent builder
        cfg = PSOConfig().population_size(30).inertia_weight(0.7).max_iterations(500).fixed()

        # Quick default configuration
        cfg = PSOConfig.default()

        # From dictionary
        cfg = PSOConfig.from_dict({"population_size": 20, "velocity_policy": "constriction_factor"})
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(cls, population_size: int = 10, seed: Optional[int] = None) -> PSOConfigData:
        """Create the default configuration (w=0.9, c1=0.5, c2=0.3, 200 iterations)."""
        return cls().population_size(population_size).seed(seed).fixed()

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> PSOConfigData:
        """Create configuration from a dictionary; unknown keys are rejected."""
        builder = cls()
        for key, value in config.items():
            setter = getattr(builder, key, None)
            if key.startswith("_") or key in {"default", "from_dict", "fixed"} or setter is None:
                raise ValueError(f"Unknown PSO configuration key '{key}'.")
            setter(value)
        return builder.fixed()

    def population_size(self, value: int) -> "PSOConfig":
        self._cfg["population_size"] = int(value)
        return self

    def inertia_weight(self, value: float) -> "PSOConfig":
        self._cfg["inertia_weight"] = float(value)
        return self

    def cognitive_acceleration(self, value: float) -> "PSOConfig":
        self._cfg["cognitive_acceleration"] = float(value)
        return self

    def social_acceleration(self, value: float) -> "PSOConfig":
        self._cfg["social_acceleration"] = float(value)
        return self

    def max_iterations(self, value: int) -> "PSOConfig":
        self._cfg["max_iterations"] = int(value)
        return self

    def tolerance(self, value: float) -> "PSOConfig":
        self._cfg["tolerance"] = float(value)
        return self

    def velocity_policy(self, value: str) -> "PSOConfig":
        self._cfg["velocity_policy"] = str(value).lower()
        return self

    def personal_best(self, value: str) -> "PSOConfig":
        mode = str(value).lower()
        if mode not in PERSONAL_BEST_MODES:
            raise ValueError(f"personal_best must be one of {PERSONAL_BEST_MODES}, got '{value}'.")
        self._cfg["personal_best"] = mode
        return self

    def seed(self, value: Optional[int]) -> "PSOConfig":
        self._cfg["seed"] = None if value is None else int(value)
        return self

    def eval_backend(self, value: str, n_workers: Optional[int] = None) -> "PSOConfig":
        self._cfg["eval_backend"] = str(value).lower()
        if n_workers is not None:
            self._cfg["n_workers"] = int(n_workers)
        return self

    def n_workers(self, value: Optional[int]) -> "PSOConfig":
        self._cfg["n_workers"] = None if value is None else int(value)
        return self

    def history_size(self, value: Optional[int]) -> "PSOConfig":
        self._cfg["history_size"] = None if value is None else int(value)
        return self

    def fixed(self) -> PSOConfigData:
        _require_fields(self._cfg, ("population_size",), "PSO")
        return PSOConfigData(**self._cfg)
