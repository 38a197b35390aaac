# MIT License (see LICENSE)
"""
Electromagnetism calculations: point-charge fields, Lorentz force, induction.

Key concepts:
- Electric fields are superposed Coulomb contributions, E = Σ k q r̂ / r².
- The magnetic point-source field is NOT implemented (see
  calculate_magnetic_field); it reports zero and says so.
- Induction covers the generator, transformer and induction-cooktop
  settings of the Faraday demo.
"""
from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Any, Mapping

import numpy as np

from ..constants import K_COULOMB, MU_0, FRAME_DT
from ..util import params_of, get, scalar, vec3, xyz, norm

logger = logging.getLogger(__name__)


class Electromagnetism(str, Enum):
    """Operations of the ``electromagnetism`` module."""
    ELECTRIC_FIELD = "calculate_electric_field"
    MAGNETIC_FIELD = "calculate_magnetic_field"
    LORENTZ_FORCE = "calculate_lorentz_force"
    INDUCTION = "calculate_induction"


_DEFAULT_CHARGES = ({"q": 1.0, "position": {"x": 0.0, "y": 0.0, "z": 0.0}},)


def calculate_electric_field(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Electric field at a point from a set of point charges.

    Implements E = Σ k qᵢ (r - rᵢ) / |r - rᵢ|³.

    Params:
        charges: List of {q, position: {x, y, z}} (default one +1 C charge
                 at the origin).
        point: Field point {x, y, z} (default (1, 0, 0)).
        min_distance: Charges at r <= min_distance are left out of the sum
                      (default 0, i.e. only an exactly coincident charge).

    Returns:
        {x, y, z, magnitude, singular}. ``singular`` is True when at least
        one charge was skipped for being too close; the field then describes
        only the remaining charges. Callers sampling a grid should still keep
        sample points away from sources, since near-singular values are huge.
    """
    p = params_of(params)
    charges = get(p, "charges", _DEFAULT_CHARGES)
    point = vec3(get(p, "point", None), default=(1.0, 0.0, 0.0))
    min_distance = scalar(p, "min_distance", 0.0)

    field = np.zeros(3, dtype=np.float64)
    singular = False
    for charge in charges:
        q = float(get(charge, "q", 1.0))
        d = point - vec3(get(charge, "position", None))
        r = norm(d)
        if r <= min_distance:
            singular = True
            continue
        field += (K_COULOMB * q / (r * r * r)) * d

    out = xyz(field)
    out["magnitude"] = norm(field)
    out["singular"] = singular
    return out


def calculate_magnetic_field(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Magnetic field of a current element. Not implemented.

    Always returns the zero vector with ``implemented: False``. The
    Biot-Savart contribution of the element has never been written, and a
    zero here is not a physical answer.
    """
    params_of(params)
    logger.debug("calculate_magnetic_field is a stub and returns zero")
    return {"x": 0.0, "y": 0.0, "z": 0.0, "magnitude": 0.0, "implemented": False}


def calculate_lorentz_force(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Lorentz force on a moving charge, F = q (E + v × B).

    Params:
        charge: q in C (default 1).
        velocity, electric_field, magnetic_field: {x, y, z} (default zero).
    """
    p = params_of(params)
    q = scalar(p, "charge", 1.0)
    v = vec3(get(p, "velocity", None))
    E = vec3(get(p, "electric_field", None))
    B = vec3(get(p, "magnetic_field", None))

    f_e = q * E
    f_m = q * np.cross(v, B)
    out = xyz(f_e + f_m)
    out["electric"] = xyz(f_e)
    out["magnetic"] = xyz(f_m)
    return out


def _generator(p: Mapping[str, Any], t: float) -> dict[str, Any]:
    B = scalar(p, "field_strength", 0.5)
    turns = scalar(p, "turns", 100.0)
    radius = scalar(p, "coil_radius", 0.1)
    f = scalar(p, "rotation_speed", 1.0)
    R = scalar(p, "resistance", 10.0)

    area = math.pi * radius * radius
    omega = 2.0 * math.pi * f
    emf = turns * B * area * omega * math.sin(omega * t)
    return {
        "flux": B * area * math.cos(omega * t),
        "emf": emf,
        "current": emf / R,
        "peak_emf": turns * B * area * omega,
        "coil_angle": (omega * t) % (2.0 * math.pi),
    }


def _transformer(p: Mapping[str, Any], t: float) -> dict[str, Any]:
    V = scalar(p, "ac_voltage", 120.0)
    f = scalar(p, "ac_frequency", 60.0)
    n1 = scalar(p, "primary_turns", 100.0)
    n2 = scalar(p, "secondary_turns", 50.0)
    R1 = scalar(p, "primary_resistance", 1.0)
    core_length = scalar(p, "core_length", 0.2)
    radius = scalar(p, "coil_radius", 0.1)

    area = math.pi * radius * radius
    omega = 2.0 * math.pi * f
    primary_current = V / R1
    peak_flux = MU_0 * n1 * primary_current * area / core_length
    return {
        "flux": peak_flux * math.sin(omega * t),
        "emf": V,
        "current": primary_current,
        "secondary_voltage": -n2 * peak_flux * omega * math.cos(omega * t),
        "turns_ratio": n2 / n1,
    }


def _cooktop(p: Mapping[str, Any], t: float) -> dict[str, Any]:
    I_coil = scalar(p, "cooktop_current", 5.0)
    f = scalar(p, "cooktop_frequency", 25000.0)
    n = scalar(p, "cooktop_turns", 20.0)
    coil_radius = scalar(p, "cooktop_radius", 0.15)
    pan_radius = scalar(p, "pan_radius", 0.2)
    R_pan = scalar(p, "pan_resistance", 0.1)
    heat_capacity = scalar(p, "heat_capacity", 500.0)
    heat_loss = scalar(p, "heat_loss", 0.1)
    ambient = scalar(p, "ambient_temperature", 20.0)
    max_temperature = scalar(p, "max_temperature", 300.0)
    temperature = scalar(p, "pan_temperature", ambient)
    dt = scalar(p, "dt", FRAME_DT)

    # Field at the centre of a flat coil, B = μ₀ N I / 2r
    B = MU_0 * n * I_coil / (2.0 * coil_radius)
    area = math.pi * pan_radius * pan_radius
    omega = 2.0 * math.pi * f
    peak_emf = B * area * omega
    emf = peak_emf * math.sin(omega * t)
    # A frame spans many AC cycles, so the pan heats at the cycle-mean power
    power = peak_emf * peak_emf / (2.0 * R_pan)
    heated = temperature + (power * dt - heat_loss) / heat_capacity
    return {
        "flux": B * area * math.cos(omega * t),
        "emf": emf,
        "current": emf / R_pan,
        "magnetic_field": B,
        "power": power,
        "pan_temperature": min(max(heated, ambient), max_temperature),
    }


_INDUCTION_MODES = {
    "generator": _generator,
    "transformer": _transformer,
    "induction_cooktop": _cooktop,
}


def calculate_induction(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Faraday's law in three settings, selected by ``mode``.

    generator (default), a coil rotating in a uniform field:
      Φ(t) = B A cos(ωt),  ε(t) = -N dΦ/dt = N B A ω sin(ωt),  I = ε / R
      Params: field_strength (0.5 T), turns (100), coil_radius (0.1 m),
      rotation_speed (1 rev/s), resistance (10 Ω).

    transformer, AC primary driving a shared core:
      I₁ = V / R₁,  Φ(t) = μ₀ N₁ I₁ A / l · sin(ωt),  V₂ = -N₂ dΦ/dt
      Params: ac_voltage (120 V), ac_frequency (60 Hz), primary_turns
      (100), secondary_turns (50), primary_resistance (1 Ω), core_length
      (0.2 m), coil_radius (0.1 m).

    induction_cooktop, eddy currents heating a pan:
      B = μ₀ N I / 2r,  Φ(t) = B A_pan cos(ωt),  I_pan = ε / R_pan
      The pan temperature advances one step of ``dt`` per call from
      ``pan_temperature``, heated at the cycle-mean power ε₀² / 2R_pan,
      minus a fixed ``heat_loss`` per step, over ``heat_capacity``, and
      held within [ambient_temperature, max_temperature]. Callers feed the
      returned ``pan_temperature`` into the next call.
      Params: cooktop_current (5 A), cooktop_frequency (25 kHz),
      cooktop_turns (20), cooktop_radius (0.15 m), pan_radius (0.2 m),
      pan_resistance (0.1 Ω), heat_capacity (500 J/K), heat_loss (0.1),
      ambient_temperature (20 °C), max_temperature (300 °C),
      pan_temperature (ambient), dt (0.016 s).

    Any other mode yields zero flux, EMF and current.
    All modes take ``time`` (default 0) and report it with ``mode``.
    """
    p = params_of(params)
    t = scalar(p, "time", 0.0)
    mode = get(p, "mode", "generator")

    calc = _INDUCTION_MODES.get(mode)
    if calc is None:
        logger.debug("Unknown induction mode %r", mode)
        out = {"flux": 0.0, "emf": 0.0, "current": 0.0}
    else:
        out = calc(p, t)
    out["mode"] = mode
    out["time"] = t
    return out


CALCULATIONS = {
    Electromagnetism.ELECTRIC_FIELD: calculate_electric_field,
    Electromagnetism.MAGNETIC_FIELD: calculate_magnetic_field,
    Electromagnetism.LORENTZ_FORCE: calculate_lorentz_force,
    Electromagnetism.INDUCTION: calculate_induction,
}
