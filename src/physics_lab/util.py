# MIT License (see LICENSE)
"""
Utility functions for vector math and parameter handling.

Calculation functions receive plain JSON-shaped records: 3-vectors arrive as
``{"x": .., "y": .., "z": ..}`` dicts and must leave the same way. These
helpers convert between that shape and float64 numpy arrays of shape (3,),
and implement the "missing field means default" rule shared by the whole
library.
"""
from __future__ import annotations
from collections.abc import Mapping
from typing import Any

import numpy as np


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array."""
    return np.array(x, dtype=np.float64)


def params_of(params: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """
    Validate a parameter record.

    ``None`` is treated as an empty record so every field takes its default.
    Anything that is not a mapping is a caller bug and raises TypeError.
    """
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise TypeError(f"Parameters must be a mapping, got {type(params).__name__}")
    return params


def get(params: Mapping[str, Any], key: str, default: Any) -> Any:
    """Fetch ``key`` from a record, falling back to ``default`` if missing or None."""
    value = params.get(key)
    return default if value is None else value


def scalar(params: Mapping[str, Any], key: str, default: float) -> float:
    """Fetch a numeric field as a Python float."""
    return float(get(params, key, default))


def vec3(d: Mapping[str, Any] | None, default: tuple[float, float, float] = (0.0, 0.0, 0.0)) -> np.ndarray:
    """
    Convert an ``{x, y, z}`` record to a float64 array.

    Missing components take the matching component of ``default``; a missing
    record yields ``default`` itself.
    """
    if d is None:
        return f64(default)
    return f64([
        float(get(d, "x", default[0])),
        float(get(d, "y", default[1])),
        float(get(d, "z", default[2])),
    ])


def xyz(v: np.ndarray) -> dict[str, float]:
    """Convert a 3-vector to the ``{x, y, z}`` record shape with Python floats."""
    return {"x": float(v[0]), "y": float(v[1]), "z": float(v[2])}


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros_like(v, dtype=np.float64)
    return v / n


def lookup(record: Any, path: str) -> Any:
    """
    Resolve a dotted path (``"energy.total"``) inside nested mappings.

    Raises KeyError naming the full path when a segment is missing.
    """
    value = record
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            raise KeyError(path)
        value = value[part]
    return value
