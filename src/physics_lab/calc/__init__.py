# MIT License (see LICENSE)
"""
Calculation library: pure physics functions grouped by domain.

Every function has the signature ``fn(params: Mapping | None) -> dict``. It
reads only its parameter record, never mutates it, fills missing fields with
documented defaults and returns a JSON-shaped dict.

Each domain also defines a ``str`` Enum of its operations and a
``CALCULATIONS`` table mapping every member to its function; the registry
checks that table for completeness.

Typical usage:
    from physics_lab.calc import simulate_projectile

    simulate_projectile({"velocity": 20, "angle": 45, "time": 1.0})
"""
from .classical import (
    Classical,
    simulate_projectile,
    simulate_pendulum,
    calculate_collision,
    step_collision,
    calculate_force,
)
from .electromagnetism import (
    Electromagnetism,
    calculate_electric_field,
    calculate_magnetic_field,
    calculate_lorentz_force,
    calculate_induction,
)
from .waves import (
    Waves,
    calculate_interference,
    calculate_diffraction,
    calculate_reflection,
    calculate_refraction,
)
from .quantum import (
    Quantum,
    calculate_wave_function,
    calculate_tunneling,
    calculate_uncertainty,
    calculate_superposition,
)
from .relativity import (
    Relativity,
    lorentz_factor,
    clamp_velocity,
    calculate_time_dilation,
    calculate_lorentz_contraction,
    calculate_relativistic_momentum,
    calculate_lorentz_transformation,
)

__all__ = [
    # Operation enums
    "Classical",
    "Electromagnetism",
    "Waves",
    "Quantum",
    "Relativity",
    # Classical mechanics
    "simulate_projectile",
    "simulate_pendulum",
    "calculate_collision",
    "step_collision",
    "calculate_force",
    # Electromagnetism
    "calculate_electric_field",
    "calculate_magnetic_field",
    "calculate_lorentz_force",
    "calculate_induction",
    # Waves & optics
    "calculate_interference",
    "calculate_diffraction",
    "calculate_reflection",
    "calculate_refraction",
    # Quantum
    "calculate_wave_function",
    "calculate_tunneling",
    "calculate_uncertainty",
    "calculate_superposition",
    # Relativity
    "lorentz_factor",
    "clamp_velocity",
    "calculate_time_dilation",
    "calculate_lorentz_contraction",
    "calculate_relativistic_momentum",
    "calculate_lorentz_transformation",
]
