"""Uniform random sources used for the stochastic PSO coefficients."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Capability consumed by the optimizer and velocity policies.

    ``reseed()`` is called once at the start of every optimization run;
    ``uniform(shape)`` returns independent samples in ``[0, 1)``.
    """

    def reseed(self) -> None: ...

    def uniform(self, shape: tuple[int, ...]) -> np.ndarray: ...


class NumpyRandomSource:
    """RandomSource backed by ``numpy.random.Generator``.

    With ``seed=None`` every ``reseed()`` draws fresh OS entropy, so repeated
    runs differ. With an integer seed every ``reseed()`` restarts the same
    stream, so repeated runs are bit-identical.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    @seed.setter
    def seed(self, value: int | None) -> None:
        self._seed = value

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def reseed(self) -> None:
        self._rng = np.random.default_rng(self._seed)

    def uniform(self, shape: tuple[int, ...]) -> np.ndarray:
        return self._rng.random(size=shape)

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self._seed!r})"


def resolve_random_source(source: RandomSource | int | None) -> RandomSource:
    """Return ``source`` unchanged or wrap an int/None seed in a NumpyRandomSource."""
    if source is None or isinstance(source, (int, np.integer)):
        return NumpyRandomSource(None if source is None else int(source))
    if not isinstance(source, RandomSource):
        raise TypeError(f"Expected a RandomSource or an int seed, got {type(source).__name__}.")
    return source


__all__ = ["RandomSource", "NumpyRandomSource", "resolve_random_source"]
