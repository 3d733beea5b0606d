"""
PSWARM exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All PSWARM-specific exceptions inherit from PSwarmError for easy catching.

Example:
    try:
        value = optimizer.optimize(objective, x0)
    except PSwarmError as e:
        print(f"Optimization failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class PSwarmError(Exception):
    """
    Base exception for all PSWARM errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PSwarmError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when a configuration value is outside its valid range."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        message = f"Invalid value {value!r} for '{field}': {reason}."
        suggestion = f"Set '{field}' through its accessor or the PSOConfig builder before optimizing"
        super().__init__(message, suggestion, {"field": field, "value": value})


class InvalidVelocityPolicyError(ConfigurationError):
    """Raised when an unknown velocity update policy is specified."""

    def __init__(self, policy: str, available: list[str] | None = None) -> None:
        available = available or ["inertia_weight", "constriction_factor"]
        message = f"Unknown velocity policy '{policy}'."
        suggestion = f"Available velocity policies: {', '.join(available)}"
        super().__init__(message, suggestion, {"policy": policy, "available": available})


class InvalidEvalBackendError(ConfigurationError):
    """Raised when an unknown evaluation backend is specified."""

    def __init__(self, backend: str, available: list[str] | None = None) -> None:
        available = available or ["serial", "joblib", "multiprocessing"]
        message = f"Unknown evaluation backend '{backend}'."
        suggestion = f"Available evaluation backends: {', '.join(available)}"
        super().__init__(message, suggestion, {"backend": backend, "available": available})


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(PSwarmError):
    """Raised when optimization fails during execution."""

    pass


class StartingPointError(OptimizationError):
    """Raised when the starting point cannot seed a swarm."""

    def __init__(self, message: str, shape: tuple[int, ...] | None = None) -> None:
        suggestion = "Pass a non-empty, finite, real-valued 1-D or 2-D array as the starting point"
        super().__init__(message, suggestion, {"shape": shape})


class EvaluationError(OptimizationError):
    """Raised when objective evaluation fails."""

    def __init__(self, message: str, particle: int | None = None) -> None:
        suggestion = "Check your objective's evaluate() function for errors"
        super().__init__(message, suggestion, {"particle": particle})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "PSwarmError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "InvalidVelocityPolicyError",
    "InvalidEvalBackendError",
    "MissingConfigError",
    # Runtime
    "OptimizationError",
    "StartingPointError",
    "EvaluationError",
]
