import math

import numpy as np
import pytest

from physics_lab.calc import (
    calculate_electric_field,
    calculate_magnetic_field,
    calculate_lorentz_force,
    calculate_induction,
)
from physics_lab.constants import K_COULOMB, MU_0


def _field_at(x):
    return calculate_electric_field({
        "charges": [{"q": 2e-6, "position": {"x": 0.0, "y": 0.0, "z": 0.0}}],
        "point": {"x": x, "y": 0.0, "z": 0.0},
    })


def test_inverse_square_law():
    """|E(2r)| = |E(r)| / 4 for a single point charge."""
    near = _field_at(0.5)
    far = _field_at(1.0)
    print("E(r)", near["magnitude"], "E(2r)", far["magnitude"])
    assert far["magnitude"] == pytest.approx(near["magnitude"] / 4, rel=1e-12)
    assert near["magnitude"] == pytest.approx(K_COULOMB * 2e-6 / 0.25)


def test_field_direction_follows_sign():
    pos = calculate_electric_field({"charges": [{"q": 1.0, "position": {}}], "point": {"x": 0.0, "y": 2.0}})
    neg = calculate_electric_field({"charges": [{"q": -1.0, "position": {}}], "point": {"x": 0.0, "y": 2.0}})
    assert pos["y"] > 0 and neg["y"] < 0
    assert pos["x"] == 0.0


def test_dipole_superposition():
    """At the midpoint of a ±q dipole both contributions point toward -q."""
    r = calculate_electric_field({
        "charges": [
            {"q": 1e-9, "position": {"x": -1.0, "y": 0.0, "z": 0.0}},
            {"q": -1e-9, "position": {"x": 1.0, "y": 0.0, "z": 0.0}},
        ],
        "point": {"x": 0.0, "y": 0.0, "z": 0.0},
    })
    assert r["x"] == pytest.approx(2 * K_COULOMB * 1e-9)
    assert r["y"] == 0.0


def test_coincident_charge_is_flagged_not_divided():
    r = calculate_electric_field({"point": {"x": 0.0, "y": 0.0, "z": 0.0}})
    assert r["singular"] is True
    assert r["magnitude"] == 0.0
    assert all(math.isfinite(r[k]) for k in ("x", "y", "z"))


def test_min_distance_excludes_near_charges():
    params = {
        "charges": [
            {"q": 1.0, "position": {"x": 0.0}},
            {"q": 1.0, "position": {"x": 10.0}},
        ],
        "point": {"x": 0.2},
    }
    full = calculate_electric_field(params)
    trimmed = calculate_electric_field({**params, "min_distance": 0.5})
    assert not full["singular"]
    assert trimmed["singular"]
    # Only the far charge remains, pushing toward -x
    assert trimmed["x"] == pytest.approx(-K_COULOMB / 9.8 ** 2)


def test_magnetic_field_is_a_flagged_stub():
    r = calculate_magnetic_field({"point": {"x": 3.0, "y": 1.0, "z": 0.0}})
    assert r == {"x": 0.0, "y": 0.0, "z": 0.0, "magnitude": 0.0, "implemented": False}


def test_lorentz_force():
    """F = q(E + v × B); v = x̂, B = ẑ gives v × B = -ŷ."""
    r = calculate_lorentz_force({
        "charge": 2.0,
        "velocity": {"x": 1.0, "y": 0.0, "z": 0.0},
        "electric_field": {"x": 0.0, "y": 0.0, "z": 5.0},
        "magnetic_field": {"x": 0.0, "y": 0.0, "z": 1.0},
    })
    assert r["magnetic"] == {"x": 0.0, "y": -2.0, "z": 0.0}
    assert r["electric"] == {"x": 0.0, "y": 0.0, "z": 10.0}
    assert (r["x"], r["y"], r["z"]) == (0.0, -2.0, 10.0)


def test_induction_emf_is_flux_derivative():
    """ε = -N dΦ/dt, checked with a central difference."""
    params = {"field_strength": 0.4, "turns": 50, "coil_radius": 0.1, "rotation_speed": 2.0}
    t, h = 0.13, 1e-6
    phi = lambda s: calculate_induction({**params, "time": s})["flux"]
    numeric = -50 * (phi(t + h) - phi(t - h)) / (2 * h)
    r = calculate_induction({**params, "time": t})
    assert r["emf"] == pytest.approx(numeric, rel=1e-6)
    assert r["current"] == pytest.approx(r["emf"] / 10.0)


def test_induction_peak():
    params = {"field_strength": 1.0, "turns": 10, "coil_radius": 0.1, "rotation_speed": 1.0}
    quarter = calculate_induction({**params, "time": 0.25})
    assert quarter["emf"] == pytest.approx(quarter["peak_emf"])
    assert quarter["peak_emf"] == pytest.approx(10 * math.pi * 0.01 * 2 * math.pi)
    assert np.isclose(quarter["flux"], 0.0, atol=1e-12)


def test_induction_default_mode_is_generator():
    r = calculate_induction({"time": 0.25})
    assert r["mode"] == "generator"
    assert r["time"] == 0.25
    assert r["peak_emf"] == pytest.approx(100 * 0.5 * math.pi * 0.01 * 2 * math.pi)


def test_transformer_secondary_voltage():
    """V₂ = -N₂ dΦ/dt with Φ = μ₀ N₁ (V/R₁) A / l · sin(ωt)."""
    params = {"mode": "transformer"}
    peak_flux = MU_0 * 100 * 120.0 * math.pi * 0.01 / 0.2
    omega = 2 * math.pi * 60
    r = calculate_induction({**params, "time": 0.0})
    assert r["flux"] == pytest.approx(0.0, abs=1e-15)
    assert r["secondary_voltage"] == pytest.approx(-50 * peak_flux * omega)
    assert r["turns_ratio"] == 0.5
    assert r["emf"] == 120.0
    assert r["current"] == 120.0

    t, h = 0.003, 1e-7
    phi = lambda s: calculate_induction({**params, "time": s})["flux"]
    numeric = -50 * (phi(t + h) - phi(t - h)) / (2 * h)
    assert calculate_induction({**params, "time": t})["secondary_voltage"] == pytest.approx(numeric, rel=1e-5)


def test_cooktop_pan_heats_each_step():
    r = calculate_induction({"mode": "induction_cooktop"})
    B = MU_0 * 20 * 5.0 / 0.3
    peak = B * math.pi * 0.04 * 2 * math.pi * 25000
    power = peak ** 2 / 0.2
    print("cooktop power", power)
    assert r["magnetic_field"] == pytest.approx(B)
    assert r["power"] == pytest.approx(power)
    assert r["pan_temperature"] == pytest.approx(20.0 + (power * 0.016 - 0.1) / 500)

    temperature = 20.0
    for _ in range(5):
        temperature = calculate_induction({"mode": "induction_cooktop", "pan_temperature": temperature})["pan_temperature"]
    assert temperature == pytest.approx(20.0 + 5 * (power * 0.016 - 0.1) / 500)


def test_cooktop_temperature_is_clamped():
    hot = calculate_induction({"mode": "induction_cooktop", "pan_temperature": 299.999})
    assert hot["pan_temperature"] == 300.0
    cold = calculate_induction({"mode": "induction_cooktop", "cooktop_current": 0.0, "pan_temperature": 20.0})
    assert cold["power"] == 0.0
    assert cold["pan_temperature"] == 20.0


def test_unknown_induction_mode_is_zero():
    r = calculate_induction({"mode": "wireless_charger", "time": 1.0})
    assert (r["flux"], r["emf"], r["current"]) == (0.0, 0.0, 0.0)
    assert r["mode"] == "wireless_charger"
