# MIT License (see LICENSE)
"""
Waves and optics: interference, slit diffraction, reflection, refraction.

Ray directions are normalized on entry, so callers may pass any non-zero
vector. Refraction reports total internal reflection as a result variant,
never as an exception.
"""
from __future__ import annotations
import math
from enum import Enum
from typing import Any, Mapping

import numpy as np

from ..util import params_of, get, scalar, vec3, xyz, unit


class Waves(str, Enum):
    """Operations of the ``waves`` module."""
    INTERFERENCE = "calculate_interference"
    DIFFRACTION = "calculate_diffraction"
    REFLECTION = "calculate_reflection"
    REFRACTION = "calculate_refraction"


_DEFAULT_WAVES = (
    {"amplitude": 1.0, "frequency": 1.0, "phase": 0.0, "position": {"x": 0.0, "y": 0.0}},
)


def calculate_interference(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Superposition of circular waves at a point.

    Each source contributes A cos(φ₀ + 2πft - k r), where r is the distance
    from the source. k = 2π/λ when the source carries a ``wavelength``,
    otherwise k = 1 rad/m.

    Params:
        waves: List of {amplitude, frequency, phase, position, wavelength?}.
        point: {x, y} (default origin).
        time: s (default 0).
    """
    p = params_of(params)
    sources = get(p, "waves", _DEFAULT_WAVES)
    point = get(p, "point", {"x": 0.0, "y": 0.0})
    t = scalar(p, "time", 0.0)

    px, py = float(get(point, "x", 0.0)), float(get(point, "y", 0.0))
    total = 0.0
    for wave in sources:
        pos = get(wave, "position", {})
        r = math.hypot(px - float(get(pos, "x", 0.0)), py - float(get(pos, "y", 0.0)))
        wavelength = get(wave, "wavelength", None)
        k = 2.0 * math.pi / float(wavelength) if wavelength else 1.0
        phase = float(get(wave, "phase", 0.0)) + 2.0 * math.pi * float(get(wave, "frequency", 1.0)) * t - k * r
        total += float(get(wave, "amplitude", 1.0)) * math.cos(phase)

    return {
        "amplitude": total,
        "intensity": total * total,
        "point": {"x": px, "y": py},
        "time": t,
    }


def calculate_diffraction(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Fraunhofer intensity for single or double slits.

      β = π a sin(θ) / λ,  envelope (sin β / β)², defined as 1 at β = 0
      α = π d sin(θ) / λ,  double-slit factor cos²(α)

    Params:
        wavelength: λ in m (default 500 nm).
        slit_width: a in m (default 1 µm).
        slit_separation: d in m (default 5 µm).
        distance: screen distance in m (default 1, reported only).
        angle: θ in radians (default 0).
        intensity: I₀ (default 1).
        mode: "single" or "double" (default "single"). Any other value
              yields zero intensity.
    """
    p = params_of(params)
    wavelength = scalar(p, "wavelength", 500e-9)
    a = scalar(p, "slit_width", 1e-6)
    d = scalar(p, "slit_separation", 5e-6)
    distance = scalar(p, "distance", 1.0)
    theta = scalar(p, "angle", 0.0)
    I0 = scalar(p, "intensity", 1.0)
    mode = get(p, "mode", "single")

    sin_theta = math.sin(theta)
    beta = math.pi * a * sin_theta / wavelength
    envelope = (math.sin(beta) / beta) ** 2 if beta != 0 else 1.0

    if mode == "single":
        intensity = I0 * envelope
    elif mode == "double":
        alpha = math.pi * d * sin_theta / wavelength
        intensity = I0 * math.cos(alpha) ** 2 * envelope
    else:
        intensity = 0.0

    return {
        "intensity": intensity,
        "angle": theta,
        "wavelength": wavelength,
        "slit_width": a,
        "slit_separation": d,
        "distance": distance,
        "mode": mode,
    }


def _ray(p: Mapping[str, Any]) -> tuple[Mapping[str, Any], np.ndarray, np.ndarray]:
    ray = get(p, "incident_ray", {})
    incident = unit(vec3(get(ray, "direction", None), default=(1.0, 0.0, 0.0)))
    n = unit(vec3(get(p, "normal", None), default=(0.0, 1.0, 0.0)))
    return ray, incident, n


def calculate_reflection(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Mirror reflection, R = I - 2 (I·N) N.

    Params:
        incident_ray: {direction, position} (default direction +x).
        normal: Surface normal (default +y).
    """
    p = params_of(params)
    ray, incident, n = _ray(p)
    reflected = incident - 2.0 * float(np.dot(incident, n)) * n
    return {
        "direction": xyz(reflected),
        "position": xyz(vec3(get(ray, "position", None))),
    }


def calculate_refraction(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Refraction by the vector form of Snell's law.

    With η = n1/n2, cos i = -I·N and sin r = η sin i:
      T = η I + (η cos i - cos r) N

    Params:
        incident_ray: {direction} (default +x).
        normal: Surface normal facing the incident side (default +y).
        n1: Index of the incident medium (default 1.0, air).
        n2: Index of the transmitting medium (default 1.5, glass).

    Returns:
        {direction, critical_angle}. Past the critical angle (sin r > 1)
        ``direction`` is None and ``critical_angle`` is True.
    """
    p = params_of(params)
    _, incident, n = _ray(p)
    n1 = scalar(p, "n1", 1.0)
    n2 = scalar(p, "n2", 1.5)

    eta = n1 / n2
    cos_i = -float(np.dot(incident, n))
    sin_i = math.sqrt(max(0.0, 1.0 - cos_i * cos_i))
    sin_r = eta * sin_i
    if sin_r > 1.0:
        return {"direction": None, "critical_angle": True}

    cos_r = math.sqrt(1.0 - sin_r * sin_r)
    refracted = eta * incident + (eta * cos_i - cos_r) * n
    return {"direction": xyz(refracted), "critical_angle": False}


CALCULATIONS = {
    Waves.INTERFERENCE: calculate_interference,
    Waves.DIFFRACTION: calculate_diffraction,
    Waves.REFLECTION: calculate_reflection,
    Waves.REFRACTION: calculate_refraction,
}
