# MIT License (see LICENSE)
"""
Quantum mechanics visualization aids.

These are NOT solutions of the Schrödinger equation. The wave function is a
free plane wave (constant |ψ|²), tunneling uses the thick-barrier WKB
estimate, and superposition only sums real parts. They exist to drive the
animations and readouts, and should stay that simple.
"""
from __future__ import annotations
import math
from enum import Enum
from typing import Any, Mapping

from ..constants import HBAR
from ..util import params_of, get, scalar


class Quantum(str, Enum):
    """Operations of the ``quantum`` module."""
    WAVE_FUNCTION = "calculate_wave_function"
    TUNNELING = "calculate_tunneling"
    UNCERTAINTY = "calculate_uncertainty"
    SUPERPOSITION = "calculate_superposition"


def calculate_wave_function(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Plane wave ψ(x, t) = exp(i (kx - ωt)).

    k = p/ħ and ω = ħk²/2m (free-particle dispersion).

    Params:
        position: x in m (default 0).
        time: t in s (default 0).
        momentum: p in kg·m/s (default 1).
        mass: kg (default 1).
    """
    p = params_of(params)
    x = scalar(p, "position", 0.0)
    t = scalar(p, "time", 0.0)
    momentum = scalar(p, "momentum", 1.0)
    mass = scalar(p, "mass", 1.0)

    k = momentum / HBAR
    omega = HBAR * k * k / (2.0 * mass)
    phase = k * x - omega * t
    real_part = math.cos(phase)
    imag_part = math.sin(phase)
    amplitude = math.hypot(real_part, imag_part)
    return {
        "amplitude": amplitude,
        "probability": amplitude * amplitude,
        "real_part": real_part,
        "imag_part": imag_part,
        "position": x,
        "time": t,
    }


def calculate_tunneling(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Transmission through a rectangular barrier.

    E >= V passes classically (T = 1). Below the barrier:
      κ = √(2m (V - E)) / ħ,  T ≈ exp(-2 κ a)

    Params:
        energy: E in J (default 1).
        barrier_height: V in J (default 2).
        barrier_width: a in m (default 1).
        mass: kg (default 1).
    """
    p = params_of(params)
    energy = scalar(p, "energy", 1.0)
    height = scalar(p, "barrier_height", 2.0)
    width = scalar(p, "barrier_width", 1.0)
    mass = scalar(p, "mass", 1.0)

    if energy >= height:
        return {
            "transmission_probability": 1.0,
            "reflection_probability": 0.0,
            "tunneling": False,
        }

    kappa = math.sqrt(2.0 * mass * (height - energy)) / HBAR
    transmission = math.exp(-2.0 * kappa * width)
    return {
        "transmission_probability": transmission,
        "reflection_probability": 1.0 - transmission,
        "tunneling": True,
    }


def calculate_uncertainty(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Compare Δx·Δp against the Heisenberg bound ħ/2."""
    p = params_of(params)
    dx = scalar(p, "position_uncertainty", 1e-10)
    dp = scalar(p, "momentum_uncertainty", 1e-24)
    product = dx * dp
    bound = HBAR / 2.0
    return {
        "uncertainty_product": product,
        "minimum_uncertainty": bound,
        "satisfies_principle": product >= bound,
        "position_uncertainty": dx,
        "momentum_uncertainty": dp,
    }


_DEFAULT_STATES = (
    {"amplitude": 0.707, "phase": 0.0, "energy": 1.0},
    {"amplitude": 0.707, "phase": math.pi / 2, "energy": 2.0},
)


def calculate_superposition(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Real part of Σ aₙ exp(i(φₙ - Eₙ t/ħ)) and the norm Σ aₙ².

    Params:
        states: List of {amplitude, phase, energy}.
        time: s (default 0).
    """
    p = params_of(params)
    states = get(p, "states", _DEFAULT_STATES)
    t = scalar(p, "time", 0.0)

    amplitude = 0.0
    probability = 0.0
    for state in states:
        a = float(get(state, "amplitude", 0.0))
        phase = float(get(state, "phase", 0.0)) - float(get(state, "energy", 0.0)) * t / HBAR
        amplitude += a * math.cos(phase)
        probability += a * a
    return {
        "amplitude": amplitude,
        "probability": probability,
        "states": len(states),
        "time": t,
    }


CALCULATIONS = {
    Quantum.WAVE_FUNCTION: calculate_wave_function,
    Quantum.TUNNELING: calculate_tunneling,
    Quantum.UNCERTAINTY: calculate_uncertainty,
    Quantum.SUPERPOSITION: calculate_superposition,
}
