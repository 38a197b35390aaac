import math

import numpy as np
import pytest

from physics_lab.calc import (
    calculate_interference,
    calculate_diffraction,
    calculate_reflection,
    calculate_refraction,
)


def test_single_slit_central_maximum():
    r = calculate_diffraction({"angle": 0.0, "intensity": 3.0})
    assert r["intensity"] == 3.0
    assert r["mode"] == "single"


def test_single_slit_envelope_decreases_to_first_zero():
    """
    I(θ) = I₀ (sin β / β)², β = π a sinθ / λ.
    Monotonically non-increasing on [0, θ₁) where sinθ₁ = λ/a.
    """
    wavelength, a = 500e-9, 1e-6
    theta_1 = math.asin(wavelength / a)
    angles = np.linspace(0.0, theta_1 * 0.999, 200)
    I = np.array([
        calculate_diffraction({"wavelength": wavelength, "slit_width": a, "angle": th})["intensity"]
        for th in angles
    ])
    print("I(0)", I[0], "I(θ₁⁻)", I[-1])
    assert np.all(np.diff(I) <= 1e-12)
    assert I[-1] < 1e-5

    zero = calculate_diffraction({"wavelength": wavelength, "slit_width": a, "angle": theta_1})
    assert zero["intensity"] == pytest.approx(0.0, abs=1e-20)


def test_double_slit_fringe_minimum():
    """cos²(α) vanishes at d sinθ = λ/2."""
    wavelength, d = 500e-9, 5e-6
    theta = math.asin(wavelength / (2 * d))
    r = calculate_diffraction({"mode": "double", "wavelength": wavelength, "slit_separation": d, "angle": theta})
    assert r["intensity"] == pytest.approx(0.0, abs=1e-12)

    single = calculate_diffraction({"angle": 0.01})
    double = calculate_diffraction({"angle": 0.01, "mode": "double"})
    assert double["intensity"] <= single["intensity"]


def test_unknown_diffraction_mode_is_dark():
    r = calculate_diffraction({"mode": "triple", "angle": 0.0})
    assert r["intensity"] == 0.0


def test_interference_in_phase_sources_add():
    """Two equal sources equidistant from the point: A = 2 cos(-kr)."""
    waves = [
        {"amplitude": 1.0, "frequency": 0.0, "phase": 0.0, "wavelength": 2.0, "position": {"x": -2.0, "y": 0.0}},
        {"amplitude": 1.0, "frequency": 0.0, "phase": 0.0, "wavelength": 2.0, "position": {"x": 2.0, "y": 0.0}},
    ]
    # r = 2 = one wavelength, so both arrive at phase -2π
    r = calculate_interference({"waves": waves, "point": {"x": 0.0, "y": 0.0}})
    assert r["amplitude"] == pytest.approx(2.0)
    assert r["intensity"] == pytest.approx(4.0)


def test_interference_opposite_phase_cancels():
    waves = [
        {"amplitude": 1.0, "phase": 0.0, "position": {"x": -1.0, "y": 0.0}},
        {"amplitude": 1.0, "phase": math.pi, "position": {"x": 1.0, "y": 0.0}},
    ]
    for t in (0.0, 0.3, 1.7):
        r = calculate_interference({"waves": waves, "point": {"x": 0.0, "y": 5.0}, "time": t})
        assert r["amplitude"] == pytest.approx(0.0, abs=1e-12)


def test_interference_default_wavenumber():
    """Without a wavelength k = 1 rad/m: A = cos(-r)."""
    r = calculate_interference({"point": {"x": 3.0, "y": 4.0}})
    assert r["amplitude"] == pytest.approx(math.cos(5.0))


def test_reflection_off_horizontal_mirror():
    r = calculate_reflection({"incident_ray": {"direction": {"x": 1.0, "y": -1.0, "z": 0.0}}, "normal": {"x": 0, "y": 1, "z": 0}})
    s = 1 / math.sqrt(2)
    assert r["direction"]["x"] == pytest.approx(s)
    assert r["direction"]["y"] == pytest.approx(s)
    assert r["position"] == {"x": 0.0, "y": 0.0, "z": 0.0}


def test_reflection_normalizes_inputs():
    a = calculate_reflection({"incident_ray": {"direction": {"x": 3.0, "y": -4.0}}, "normal": {"y": 10.0}})
    b = calculate_reflection({"incident_ray": {"direction": {"x": 0.6, "y": -0.8}}})
    for k in ("x", "y", "z"):
        assert a["direction"][k] == pytest.approx(b["direction"][k])


def _incident(deg):
    th = math.radians(deg)
    return {"direction": {"x": math.sin(th), "y": -math.cos(th), "z": 0.0}}


def test_refraction_obeys_snell():
    """n1 sin i = n2 sin r; the refracted ray stays unit length."""
    r = calculate_refraction({"incident_ray": _incident(30), "n1": 1.0, "n2": 1.5})
    assert r["critical_angle"] is False
    d = r["direction"]
    sin_r = math.sin(math.radians(30)) / 1.5
    assert d["x"] == pytest.approx(sin_r)
    assert d["y"] == pytest.approx(-math.sqrt(1 - sin_r ** 2))
    assert math.hypot(d["x"], d["y"]) == pytest.approx(1.0)


def test_total_internal_reflection():
    """Glass to air: critical angle asin(1/1.5) ≈ 41.8°."""
    below = calculate_refraction({"incident_ray": _incident(20), "n1": 1.5, "n2": 1.0})
    above = calculate_refraction({"incident_ray": _incident(60), "n1": 1.5, "n2": 1.0})
    assert below["critical_angle"] is False
    assert below["direction"]["x"] == pytest.approx(1.5 * math.sin(math.radians(20)))
    assert above == {"direction": None, "critical_angle": True}


def test_normal_incidence_passes_straight():
    r = calculate_refraction({"incident_ray": {"direction": {"x": 0.0, "y": -1.0}}})
    assert r["direction"]["x"] == pytest.approx(0.0)
    assert r["direction"]["y"] == pytest.approx(-1.0)
