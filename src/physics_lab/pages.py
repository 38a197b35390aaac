# MIT License (see LICENSE)
"""
Presets for the simulation pages.

Each ``*_driver`` function returns a FrameDriver wired the way its page
runs: which calculation, which chart channels, how much history, when the
run ends on its own and whether stopping rewinds time. Pages that draw a
static curve instead of animating use the sweep helpers at the bottom.

Example:
    engine = SimulationEngine()
    driver = projectile_driver(engine, velocity=20, angle=45)
    driver.attach("classical", RecordingScene())
    driver.start()
    driver.scheduler.run(400)
"""
from __future__ import annotations
import math
from typing import Any, Mapping

import numpy as np

from .calc import (
    Classical,
    Electromagnetism,
    Quantum,
    Waves,
    calculate_diffraction,
    calculate_electric_field,
    calculate_lorentz_contraction,
    calculate_time_dilation,
    clamp_velocity,
    simulate_projectile,
)
from .config import DriverConfig
from .constants import GRAVITY, MAX_BETA, SPEED_OF_LIGHT
from .driver import ChartChannel, FrameDriver, FrameScheduler
from .engine import SimulationEngine
from .util import get, vec3


def projectile_flight_time(params: Mapping[str, Any]) -> float:
    """2 v sin(θ) / g with the projectile defaults."""
    v = float(get(params, "velocity", 20.0))
    angle = math.radians(float(get(params, "angle", 45.0)))
    g = float(get(params, "gravity", GRAVITY))
    return 2.0 * v * math.sin(angle) / g


def _landed(t: float, params: Mapping[str, Any]) -> bool:
    return t >= projectile_flight_time(params)


def projectile_driver(
    engine: SimulationEngine,
    scheduler: FrameScheduler | None = None,
    config: DriverConfig | None = None,
    **params: Any,
) -> FrameDriver:
    """Projectile page: stops itself on landing and rewinds on stop."""
    params = {"velocity": 20.0, "angle": 45.0, "gravity": GRAVITY, "mass": 1.0, **params}
    return FrameDriver(
        engine,
        Classical.PROJECTILE,
        params,
        [
            ChartChannel("position", "position.y"),
            ChartChannel("velocity", "speed"),
            ChartChannel("energy", "energy.total"),
        ],
        scheduler=scheduler,
        config=config,
        history=100,
        terminal=_landed,
        name="projectile",
    )


def _pendulum_energy(result: Mapping[str, Any]) -> float:
    # Per unit mass, as plotted on the page
    return 0.5 * result["length"] ** 2 * result["angular_velocity"] ** 2


def pendulum_driver(
    engine: SimulationEngine,
    scheduler: FrameScheduler | None = None,
    config: DriverConfig | None = None,
    **params: Any,
) -> FrameDriver:
    """
    Pendulum page. The page slider is in degrees; the library takes
    radians, so pass ``angle_deg`` to have it converted.
    """
    angle_deg = params.pop("angle_deg", None)
    if angle_deg is not None:
        params["angle"] = math.radians(float(angle_deg))
    params = {"length": 1.0, "angle": math.pi / 4, "gravity": GRAVITY, **params}
    return FrameDriver(
        engine,
        Classical.PENDULUM,
        params,
        [
            ChartChannel("angle", lambda r: math.degrees(r["angle"])),
            ChartChannel("energy", _pendulum_energy),
        ],
        scheduler=scheduler,
        config=config,
        history=100,
        name="pendulum",
    )


def interference_driver(
    engine: SimulationEngine,
    scheduler: FrameScheduler | None = None,
    config: DriverConfig | None = None,
    **params: Any,
) -> FrameDriver:
    """Wave interference page: free-running, keeps its clock on pause."""
    params = {
        "waves": [
            {"amplitude": 1.0, "frequency": 1.0, "phase": 0.0, "position": {"x": -2.0, "y": 0.0}, "wavelength": 2.0},
            {"amplitude": 1.0, "frequency": 1.0, "phase": 0.0, "position": {"x": 2.0, "y": 0.0}, "wavelength": 2.0},
        ],
        "point": {"x": 0.0, "y": 3.0},
        **params,
    }
    return FrameDriver(
        engine,
        Waves.INTERFERENCE,
        params,
        [ChartChannel("amplitude", "amplitude"), ChartChannel("intensity", "intensity")],
        scheduler=scheduler,
        config=config,
        history=100,
        keep_state_on_stop=True,
        name="interference",
    )


def wave_function_driver(
    engine: SimulationEngine,
    scheduler: FrameScheduler | None = None,
    config: DriverConfig | None = None,
    **params: Any,
) -> FrameDriver:
    """Quantum page: plane-wave sampled at one position."""
    params = {"position": 0.0, "momentum": 1e-34, "mass": 1.0, **params}
    return FrameDriver(
        engine,
        Quantum.WAVE_FUNCTION,
        params,
        [ChartChannel("probability", "probability"), ChartChannel("real_part", "real_part")],
        scheduler=scheduler,
        config=config,
        history=100,
        keep_state_on_stop=True,
        name="wave_function",
    )


_INDUCTION_CHANNELS = {
    "generator": [],
    "transformer": [ChartChannel("secondary_voltage", "secondary_voltage")],
    "induction_cooktop": [ChartChannel("temperature", "pan_temperature")],
}


def _carry_pan_temperature(result: Mapping[str, Any]) -> dict[str, Any]:
    return {"pan_temperature": result["pan_temperature"]}


def induction_driver(
    engine: SimulationEngine,
    scheduler: FrameScheduler | None = None,
    config: DriverConfig | None = None,
    mode: str = "generator",
    **params: Any,
) -> FrameDriver:
    """
    Faraday's law page: 200 samples, pause keeps time.

    ``mode`` is "generator", "transformer" or "induction_cooktop" and is
    fixed for the driver's life; switching mode on the page builds a new
    driver. Transformer adds a secondary-voltage chart. The cooktop carries
    the pan temperature from step to step and charts it; start() and
    reset() put the pan back at ambient.
    """
    if mode not in _INDUCTION_CHANNELS:
        raise ValueError(f"Unknown induction mode '{mode}'")
    params = {
        "field_strength": 0.5, "turns": 100, "coil_radius": 0.1, "rotation_speed": 1.0,
        "dt": (config or DriverConfig()).dt,
        **params,
        "mode": mode,
    }
    return FrameDriver(
        engine,
        Electromagnetism.INDUCTION,
        params,
        [
            ChartChannel("flux", "flux"),
            ChartChannel("emf", "emf"),
            ChartChannel("current", "current"),
            *_INDUCTION_CHANNELS[mode],
        ],
        scheduler=scheduler,
        config=config,
        history=200,
        keep_state_on_stop=True,
        carry=_carry_pan_temperature if mode == "induction_cooktop" else None,
        name="induction",
    )


def _carry_bodies(result: Mapping[str, Any]) -> dict[str, Any]:
    return {key: result[key] for key in ("object1", "object2", "collided")}


def collision_driver(
    engine: SimulationEngine,
    scheduler: FrameScheduler | None = None,
    config: DriverConfig | None = None,
    **params: Any,
) -> FrameDriver:
    """
    Collisions page: two bodies close in from x = ∓3 and collide once.

    Body state is carried between steps, so start() puts both bodies back
    at their initial positions. Changing ``object1`` or ``object2`` mid-run
    restarts that body from the given record.
    """
    params = {
        "object1": {"mass": 1.0, "position": {"x": -3.0, "y": 0.0}, "velocity": {"x": 2.0, "y": 0.0}},
        "object2": {"mass": 1.0, "position": {"x": 3.0, "y": 0.0}, "velocity": {"x": -1.0, "y": 0.0}},
        "restitution": 1.0,
        "dt": (config or DriverConfig()).dt,
        **params,
    }
    return FrameDriver(
        engine,
        Classical.COLLISION_STEP,
        params,
        [ChartChannel("momentum", "total_momentum"), ChartChannel("energy", "kinetic_energy")],
        scheduler=scheduler,
        config=config,
        history=100,
        carry=_carry_bodies,
        name="collision",
    )


# =============================================================================
# Sweeps for static charts
# =============================================================================

def projectile_trajectory(step: float = 0.1, **params: Any) -> list[dict[str, float]]:
    """Trajectory points every ``step`` seconds, above ground only."""
    total = projectile_flight_time(params)
    points = []
    for t in np.arange(0.0, total + 1e-9, step):
        position = simulate_projectile({**params, "time": float(t)})["position"]
        if position["y"] >= 0:
            points.append(position)
    return points


def diffraction_pattern(max_angle: float = 0.1, step: float = 0.0005, **params: Any) -> list[dict[str, float]]:
    """Intensity against angle in degrees over [-max_angle, max_angle] radians."""
    n = int(round(2 * max_angle / step)) + 1
    points = []
    for angle in np.linspace(-max_angle, max_angle, n):
        result = calculate_diffraction({**params, "angle": float(angle)})
        points.append({"x": math.degrees(float(angle)), "y": result["intensity"]})
    return points


def relativity_curves(
    proper_time: float = 1.0,
    proper_length: float = 1.0,
    step: float = 0.05,
    max_beta: float = MAX_BETA,
    c: float = SPEED_OF_LIGHT,
) -> dict[str, list[dict[str, float]]]:
    """γ, dilated time and contracted length against β in [0, max_beta]."""
    curves: dict[str, list[dict[str, float]]] = {"gamma": [], "time_dilation": [], "length_contraction": []}
    for beta in np.arange(0.0, max_beta + 1e-9, step):
        v = clamp_velocity(float(beta) * c, c, max_beta)
        dilation = calculate_time_dilation({"proper_time": proper_time, "velocity": v, "c": c})
        contraction = calculate_lorentz_contraction({"proper_length": proper_length, "velocity": v, "c": c})
        x = float(beta)
        curves["gamma"].append({"x": x, "y": dilation["gamma"]})
        curves["time_dilation"].append({"x": x, "y": dilation["dilated_time"]})
        curves["length_contraction"].append({"x": x, "y": contraction["contracted_length"]})
    return curves


_DEFAULT_GRID_CHARGES = (
    {"q": 1.0, "position": {"x": -2.0, "y": 0.0, "z": 0.0}},
    {"q": -1.0, "position": {"x": 2.0, "y": 0.0, "z": 0.0}},
)


def electric_field_grid(
    charges: list[Mapping[str, Any]] | None = None,
    extent: float = 10.0,
    step: float = 0.8,
    exclusion: float = 0.5,
    threshold: float = 0.05,
    stride: int = 2,
) -> list[dict[str, Any]]:
    """
    Field vectors on the z = 0 plane for the field-arrow view.

    Grid points run over [-extent, extent] in both x and y. Points closer
    than ``exclusion`` to a charge are skipped, vectors with magnitude at or
    below ``threshold`` are dropped, and every ``stride``-th survivor is
    kept. Each entry is ``{point, x, y, z, magnitude}``.
    """
    charges = list(charges if charges is not None else _DEFAULT_GRID_CHARGES)
    sources = np.array([vec3(get(c, "position", None))[:2] for c in charges]).reshape(-1, 2)
    axis = np.arange(-extent, extent + 1e-9, step)

    points = []
    for x in axis:
        for y in axis:
            if len(sources) and np.min(np.hypot(sources[:, 0] - x, sources[:, 1] - y)) < exclusion:
                continue
            point = {"x": float(x), "y": float(y), "z": 0.0}
            field = calculate_electric_field({"charges": charges, "point": point})
            if field["magnitude"] > threshold:
                points.append({"point": point, "x": field["x"], "y": field["y"], "z": field["z"],
                               "magnitude": field["magnitude"]})
    return points[::stride]
