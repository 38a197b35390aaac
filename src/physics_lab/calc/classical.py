# MIT License (see LICENSE)
"""
Classical mechanics calculations: projectile, pendulum, 1-D collision, force.

All functions except step_collision are closed-form evaluations at a single
instant; step_collision advances explicit state by one step. The frame
driver supplies ``time`` and is responsible for stopping a projectile at its
flight time (see ``simulate_projectile``).
"""
from __future__ import annotations
import math
from enum import Enum
from typing import Any, Mapping

import numpy as np

from ..constants import GRAVITY, FRAME_DT
from ..util import params_of, get, scalar, vec3, xyz


class Classical(str, Enum):
    """Operations of the ``classical`` module."""
    PROJECTILE = "simulate_projectile"
    PENDULUM = "simulate_pendulum"
    COLLISION = "calculate_collision"
    COLLISION_STEP = "step_collision"
    FORCE = "calculate_force"


def simulate_projectile(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Projectile motion without drag.

    Implements:
      x(t) = v cos(θ) t
      y(t) = v sin(θ) t - ½ g t²

    Params:
        velocity: Launch speed in m/s (default 20).
        angle: Launch angle in degrees (default 45).
        gravity: g in m/s² (default 9.8).
        mass: kg, only used for energies (default 1).
        time: Evaluation time in s (default 0).

    Note:
        y is not clamped at the ground. Past ``flight_time`` the result is
        below y=0 and has no physical meaning; callers stop sampling there.
    """
    p = params_of(params)
    v = scalar(p, "velocity", 20.0)
    angle = scalar(p, "angle", 45.0)
    g = scalar(p, "gravity", GRAVITY)
    mass = scalar(p, "mass", 1.0)
    t = scalar(p, "time", 0.0)

    theta = math.radians(angle)
    vx = v * math.cos(theta)
    vy0 = v * math.sin(theta)

    x = vx * t
    y = vy0 * t - 0.5 * g * t * t
    vy = vy0 - g * t
    speed = math.hypot(vx, vy)

    kinetic = 0.5 * mass * speed * speed
    potential = mass * g * y

    flight_time = 2.0 * vy0 / g
    return {
        "position": {"x": x, "y": y, "z": 0.0},
        "velocity": {"x": vx, "y": vy, "z": 0.0},
        "speed": speed,
        "energy": {"kinetic": kinetic, "potential": potential, "total": kinetic + potential},
        "flight_time": flight_time,
        "max_height": vy0 * vy0 / (2.0 * g),
        "range": v * v * math.sin(2.0 * theta) / g,
        "landed": t >= flight_time,
        "time": t,
    }


def simulate_pendulum(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Simple pendulum in the small-angle approximation.

    θ(t) = θ₀ cos(ωt),  ω = √(g/L)

    This is the harmonic approximation and drifts from the true motion at
    large amplitudes; the demo accepts that.

    Params:
        length: L in m (default 1).
        angle: Initial angle θ₀ in radians (default π/4).
        gravity: g in m/s² (default 9.8).
        mass: Bob mass in kg (default 1).
        time: Evaluation time in s (default 0).
    """
    p = params_of(params)
    length = scalar(p, "length", 1.0)
    theta0 = scalar(p, "angle", math.pi / 4)
    g = scalar(p, "gravity", GRAVITY)
    mass = scalar(p, "mass", 1.0)
    t = scalar(p, "time", 0.0)

    omega = math.sqrt(g / length)
    theta = theta0 * math.cos(omega * t)
    theta_dot = -theta0 * omega * math.sin(omega * t)

    # Height measured from the lowest point of the swing
    height = length * (1.0 - math.cos(theta))
    kinetic = 0.5 * mass * (length * theta_dot) ** 2
    potential = mass * g * height

    return {
        "angle": theta,
        "angular_velocity": theta_dot,
        "position": {"x": length * math.sin(theta), "y": -length * math.cos(theta), "z": 0.0},
        "length": length,
        "omega": omega,
        "period": 2.0 * math.pi / omega,
        "energy": {"kinetic": kinetic, "potential": potential, "total": kinetic + potential},
        "time": t,
    }


def _body(d: Mapping[str, Any] | None, mass: float, vx: float) -> tuple[float, float, float]:
    d = d or {}
    v = get(d, "velocity", {})
    return float(get(d, "mass", mass)), float(get(v, "x", vx)), float(get(v, "y", 0.0))


def calculate_collision(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Head-on 1-D collision along x with coefficient of restitution e.

    Momentum is conserved for every e; the relative velocity is reversed and
    scaled by e:
      v1' = (m1 v1 + m2 v2 + m2 e (v2 - v1)) / (m1 + m2)
      v2' = (m1 v1 + m2 v2 + m1 e (v1 - v2)) / (m1 + m2)

    e = 1 reduces to the elastic formulas (kinetic energy conserved);
    e = 0 leaves both bodies with the common centre-of-mass velocity.
    The y velocity components pass through untouched.

    Params:
        object1: {mass, velocity: {x, y}} (default m=1, vx=+1).
        object2: {mass, velocity: {x, y}} (default m=1, vx=-1).
        restitution: e in [0, 1] (default 1).
    """
    p = params_of(params)
    m1, v1, v1y = _body(get(p, "object1", None), 1.0, 1.0)
    m2, v2, v2y = _body(get(p, "object2", None), 1.0, -1.0)
    e = scalar(p, "restitution", 1.0)

    total_mass = m1 + m2
    p_total = m1 * v1 + m2 * v2
    v1f = (p_total + m2 * e * (v2 - v1)) / total_mass
    v2f = (p_total + m1 * e * (v1 - v2)) / total_mass

    ke1 = 0.5 * m1 * v1f * v1f
    ke2 = 0.5 * m2 * v2f * v2f
    return {
        "object1": {
            "velocity": {"x": v1f, "y": v1y, "z": 0.0},
            "momentum": {"x": m1 * v1f, "y": m1 * v1y, "z": 0.0},
            "kinetic_energy": ke1,
        },
        "object2": {
            "velocity": {"x": v2f, "y": v2y, "z": 0.0},
            "momentum": {"x": m2 * v2f, "y": m2 * v2y, "z": 0.0},
            "kinetic_energy": ke2,
        },
        "total_momentum": {"initial": p_total, "final": m1 * v1f + m2 * v2f},
        "total_kinetic_energy": {
            "initial": 0.5 * m1 * v1 * v1 + 0.5 * m2 * v2 * v2,
            "final": ke1 + ke2,
        },
        "restitution": e,
    }


def _moving_body(d: Mapping[str, Any] | None, mass: float, vx: float, x: float) -> tuple[float, np.ndarray, np.ndarray]:
    d = d or {}
    velocity = vec3(get(d, "velocity", None), default=(vx, 0.0, 0.0))
    position = vec3(get(d, "position", None), default=(x, 0.0, 0.0))
    velocity[2] = position[2] = 0.0
    return float(get(d, "mass", mass)), position, velocity


def _body_record(mass: float, position: np.ndarray, velocity: np.ndarray) -> dict[str, Any]:
    return {"mass": mass, "position": xyz(position), "velocity": xyz(velocity)}


def step_collision(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Advance two bodies on a line by one step of ``dt`` and collide them once.

    Both bodies move by v·dt. The first time their x separation drops below
    ``contact_distance`` the velocities are replaced by calculate_collision
    and ``collided`` becomes True; later contacts are ignored. The caller
    feeds ``object1``, ``object2`` and ``collided`` back in for the next step.

    Params:
        object1: {mass, position, velocity} (default m=1 at x=-3, vx=+2).
        object2: {mass, position, velocity} (default m=1 at x=+3, vx=-1).
        restitution: e (default 1).
        contact_distance: m (default 0.6).
        collided: Whether the collision already happened (default False).
        dt: Step in s (default 0.016).
        time: Reported only (default 0).

    Returns:
        Updated bodies, ``collided``, ``collision`` (the calculate_collision
        result on the step it fired, else None), and ``total_momentum`` /
        ``kinetic_energy`` along x after the step.
    """
    p = params_of(params)
    m1, x1, v1 = _moving_body(get(p, "object1", None), 1.0, 2.0, -3.0)
    m2, x2, v2 = _moving_body(get(p, "object2", None), 1.0, -1.0, 3.0)
    e = scalar(p, "restitution", 1.0)
    contact = scalar(p, "contact_distance", 0.6)
    collided = bool(get(p, "collided", False))
    dt = scalar(p, "dt", FRAME_DT)
    t = scalar(p, "time", 0.0)

    x1 = x1 + v1 * dt
    x2 = x2 + v2 * dt

    collision = None
    if not collided and abs(x1[0] - x2[0]) < contact:
        collision = calculate_collision({
            "object1": {"mass": m1, "velocity": xyz(v1)},
            "object2": {"mass": m2, "velocity": xyz(v2)},
            "restitution": e,
        })
        v1 = vec3(collision["object1"]["velocity"])
        v2 = vec3(collision["object2"]["velocity"])
        collided = True

    return {
        "object1": _body_record(m1, x1, v1),
        "object2": _body_record(m2, x2, v2),
        "collided": collided,
        "collision": collision,
        "total_momentum": m1 * float(v1[0]) + m2 * float(v2[0]),
        "kinetic_energy": 0.5 * m1 * float(v1[0]) ** 2 + 0.5 * m2 * float(v2[0]) ** 2,
        "time": t,
    }


def calculate_force(params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Newton's second law, F = m a. Default acceleration is (0, -9.8, 0)."""
    p = params_of(params)
    mass = scalar(p, "mass", 1.0)
    a = vec3(get(p, "acceleration", None), default=(0.0, -GRAVITY, 0.0))
    return xyz(mass * a)


CALCULATIONS = {
    Classical.PROJECTILE: simulate_projectile,
    Classical.PENDULUM: simulate_pendulum,
    Classical.COLLISION: calculate_collision,
    Classical.COLLISION_STEP: step_collision,
    Classical.FORCE: calculate_force,
}
