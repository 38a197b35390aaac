# MIT License (see LICENSE)
"""
Special relativity: Lorentz factor, time dilation, length contraction,
relativistic momentum/energy and the boost along x.

The functions trust their input. For |v| >= c the Lorentz factor is inf or
nan and propagates into the result instead of raising; the pages keep
β <= 0.99 with clamp_velocity() before calling in.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Mapping

import numpy as np

from ..constants import SPEED_OF_LIGHT, MAX_BETA
from ..util import params_of, get, scalar


class Relativity(str, Enum):
    """Operations of the ``relativity`` module."""
    TIME_DILATION = "calculate_time_dilation"
    LENGTH_CONTRACTION = "calculate_lorentz_contraction"
    MOMENTUM = "calculate_relativistic_momentum"
    TRANSFORMATION = "calculate_lorentz_transformation"


def lorentz_factor(velocity: float, c: float = SPEED_OF_LIGHT) -> float:
    """γ = 1 / √(1 - β²). Returns inf at |β| = 1 and nan beyond."""
    beta = np.float64(velocity) / np.float64(c)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(1.0 / np.sqrt(1.0 - beta * beta))


def clamp_velocity(velocity: float, c: float = SPEED_OF_LIGHT, max_beta: float = MAX_BETA) -> float:
    """Limit |v| to max_beta·c, keeping its sign."""
    limit = max_beta * c
    return float(np.clip(velocity, -limit, limit))


def _kinematics(p: Mapping[str, Any]) -> tuple[float, float, float, float]:
    c = scalar(p, "c", SPEED_OF_LIGHT)
    v = scalar(p, "velocity", 0.5 * c)
    return v, c, v / c, lorentz_factor(v, c)


def calculate_time_dilation(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Time measured by a stationary observer for a moving clock, t' = γ t.

    Params:
        proper_time: s (default 1).
        velocity: m/s (default 0.5c).
        c: m/s (default 3e8).
    """
    p = params_of(params)
    proper_time = scalar(p, "proper_time", 1.0)
    v, _, beta, gamma = _kinematics(p)
    return {
        "proper_time": proper_time,
        "dilated_time": gamma * proper_time,
        "gamma": gamma,
        "velocity": v,
        "beta": beta,
    }


def calculate_lorentz_contraction(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Length of a moving rod along its motion, L = L₀ / γ."""
    p = params_of(params)
    proper_length = scalar(p, "proper_length", 1.0)
    v, _, beta, gamma = _kinematics(p)
    return {
        "proper_length": proper_length,
        "contracted_length": proper_length / gamma,
        "gamma": gamma,
        "velocity": v,
        "beta": beta,
    }


def calculate_relativistic_momentum(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    p = γ m v, E = γ m c², E₀ = m c², K = E - E₀.

    Params:
        mass: Rest mass in kg (default 1).
        velocity, c: as above.
    """
    p = params_of(params)
    mass = scalar(p, "mass", 1.0)
    v, c, beta, gamma = _kinematics(p)
    total = gamma * mass * c * c
    rest = mass * c * c
    return {
        "momentum": gamma * mass * v,
        "total_energy": total,
        "rest_energy": rest,
        "kinetic_energy": total - rest,
        "gamma": gamma,
        "velocity": v,
        "beta": beta,
    }


def calculate_lorentz_transformation(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Boost an event along x:
      x' = γ (x - v t),  t' = γ (t - v x / c²),  y' = y,  z' = z

    Params:
        position: Event {x, y, z, t} (default origin).
        velocity, c: as above.
    """
    p = params_of(params)
    event = get(p, "position", {})
    x, y, z, t = (float(get(event, k, 0.0)) for k in ("x", "y", "z", "t"))
    v, c, beta, gamma = _kinematics(p)
    return {
        "position": {
            "x": gamma * (x - v * t),
            "y": y,
            "z": z,
            "t": gamma * (t - v * x / (c * c)),
        },
        "original_position": {"x": x, "y": y, "z": z, "t": t},
        "gamma": gamma,
        "velocity": v,
        "beta": beta,
    }


CALCULATIONS = {
    Relativity.TIME_DILATION: calculate_time_dilation,
    Relativity.LENGTH_CONTRACTION: calculate_lorentz_contraction,
    Relativity.MOMENTUM: calculate_relativistic_momentum,
    Relativity.TRANSFORMATION: calculate_lorentz_transformation,
}
