"""Installed distribution version lookup."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata as importlib_metadata


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        return importlib_metadata.version("pswarm")
    except importlib_metadata.PackageNotFoundError:  # pragma: no cover - source checkout without metadata
        return "0.0.0+unknown"


__all__ = ["get_version"]
