# MIT License (see LICENSE)
"""
Physical constants used throughout the calculation library.

Rounded SI values, the same figures the simulation pages display
(e.g. "c = 3×10⁸ m/s").
"""
from __future__ import annotations
import math

# Coulomb's constant k = 1/(4πε₀) in N·m²/C²
K_COULOMB: float = 8.99e9

# Permeability of free space μ₀ in T·m/A
MU_0: float = 4 * math.pi * 1e-7

# Reduced Planck constant ħ in J·s
HBAR: float = 1.0545718e-34

# Speed of light used by the relativity pages, m/s
SPEED_OF_LIGHT: float = 3e8

# Standard gravity used as the default for the mechanics pages, m/s²
GRAVITY: float = 9.8

# Fixed simulated-time increment per frame (~60 fps)
FRAME_DT: float = 0.016

# Upper bound the relativity pages clamp β to before calling the library
MAX_BETA: float = 0.99
