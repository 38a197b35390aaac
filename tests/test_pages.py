import math

import numpy as np
import pytest

from physics_lab import SimulationEngine, NullScene, ManualScheduler, DriverConfig
from physics_lab.pages import (
    projectile_driver,
    pendulum_driver,
    interference_driver,
    wave_function_driver,
    induction_driver,
    collision_driver,
    projectile_flight_time,
    projectile_trajectory,
    diffraction_pattern,
    relativity_curves,
    electric_field_grid,
)


def _run(driver, module_id, frames):
    driver.attach(module_id, NullScene())
    driver.start()
    driver.scheduler.run(frames)
    return driver


def test_pendulum_page_reports_degrees():
    driver = pendulum_driver(SimulationEngine(), angle_deg=30, length=2.0)
    assert driver.params["angle"] == pytest.approx(math.radians(30))
    _run(driver, "classical", 20)
    first = driver.series["angle"].points()[0]
    expected = math.degrees(math.radians(30) * math.cos(math.sqrt(9.8 / 2.0) * first["x"]))
    assert first["y"] == pytest.approx(expected)
    assert driver.last_result["period"] == pytest.approx(2.84, abs=0.01)


def test_pendulum_page_energy_channel():
    """Plotted energy is ½ L² θ̇² (per unit mass)."""
    driver = _run(pendulum_driver(SimulationEngine()), "classical", 5)
    r = driver.last_result
    assert driver.series["energy"].last.y == pytest.approx(0.5 * r["length"] ** 2 * r["angular_velocity"] ** 2)


def test_interference_page_keeps_time_on_pause():
    driver = _run(interference_driver(SimulationEngine()), "waves", 10)
    driver.stop()
    assert driver.time == pytest.approx(10 * 0.016)
    assert set(driver.series) == {"amplitude", "intensity"}
    for a, i in zip(driver.series["amplitude"].ys(), driver.series["intensity"].ys()):
        assert i == pytest.approx(a * a)


def test_wave_function_page_probability_is_flat():
    driver = _run(wave_function_driver(SimulationEngine()), "quantum", 30)
    assert np.allclose(driver.series["probability"].ys(), 1.0)
    driver.stop()
    assert driver.time > 0


def test_induction_page_history_and_channels():
    config = DriverConfig(history=50)
    driver = _run(induction_driver(SimulationEngine(), config=config), "electromagnetism", 250)
    # The page asks for 200 samples regardless of the process default
    assert driver.series["emf"].maxlen == 200
    assert len(driver.series["emf"]) == 200
    assert set(driver.series) == {"flux", "emf", "current"}


def test_projectile_page_custom_scheduler():
    scheduler = ManualScheduler()
    driver = projectile_driver(SimulationEngine(), scheduler, velocity=10, angle=90)
    assert driver.scheduler is scheduler
    _run(driver, "classical", 500)
    assert not driver.is_running
    assert driver.last_result["time"] < projectile_flight_time(driver.params)


def test_projectile_trajectory_stays_above_ground():
    points = projectile_trajectory(velocity=20, angle=45)
    R = 20 ** 2 / 9.8
    assert points[0] == {"x": 0.0, "y": 0.0, "z": 0.0}
    assert all(p["y"] >= 0 for p in points)
    assert max(p["x"] for p in points) <= R + 1e-9
    assert len(points) == 29


def test_diffraction_pattern_is_symmetric_with_central_peak():
    points = diffraction_pattern()
    assert len(points) == 401
    ys = np.array([p["y"] for p in points])
    assert ys.max() == pytest.approx(1.0)
    assert ys[200] == pytest.approx(1.0)
    assert np.allclose(ys, ys[::-1])
    assert points[0]["x"] == pytest.approx(-math.degrees(0.1))


def test_relativity_curves():
    curves = relativity_curves()
    assert set(curves) == {"gamma", "time_dilation", "length_contraction"}
    gamma = [p["y"] for p in curves["gamma"]]
    length = [p["y"] for p in curves["length_contraction"]]
    assert len(gamma) == 20
    assert gamma[0] == 1.0
    assert all(a < b for a, b in zip(gamma, gamma[1:]))
    assert all(a > b for a, b in zip(length, length[1:]))
    assert all(math.isfinite(g) for g in gamma)


def test_collision_page_collides_once():
    """
    Bodies start 6 m apart closing at 3 m/s; with dt = 0.016 the gap first
    drops below 0.6 m after step 113 (6 - 113·0.048 = 0.576).
    """
    driver = _run(collision_driver(SimulationEngine()), "classical", 112)
    assert driver.last_result["collided"] is False
    driver.scheduler.run(1)
    r = driver.last_result
    assert r["collided"] is True
    assert r["collision"] is not None
    assert r["object1"]["velocity"]["x"] == pytest.approx(-1.0)
    assert r["object2"]["velocity"]["x"] == pytest.approx(2.0)

    driver.scheduler.run(50)
    assert driver.last_result["collision"] is None
    assert driver.last_result["object1"]["velocity"]["x"] == pytest.approx(-1.0)
    assert len(driver.series["momentum"]) == 100
    assert np.allclose(driver.series["momentum"].ys(), 1.0)
    assert np.allclose(driver.series["energy"].ys(), 2.5)


def test_collision_page_inelastic_energy_drops():
    driver = _run(collision_driver(SimulationEngine(), restitution=0.0), "classical", 150)
    energy = driver.series["energy"].ys()
    assert energy[0] == pytest.approx(2.5)
    assert energy[-1] == pytest.approx(0.25)
    assert np.allclose(driver.series["momentum"].ys(), 1.0)


def test_collision_page_restart_puts_bodies_back():
    driver = _run(collision_driver(SimulationEngine()), "classical", 20)
    driver.stop()
    driver.start()
    driver.scheduler.run(1)
    assert driver.last_result["object1"]["position"]["x"] == pytest.approx(-3.0 + 2 * 0.016)


def test_cooktop_page_carries_pan_temperature():
    driver = _run(induction_driver(SimulationEngine(), mode="induction_cooktop"), "electromagnetism", 30)
    assert set(driver.series) == {"flux", "emf", "current", "temperature"}
    temperature = driver.series["temperature"].ys()
    assert temperature[0] > 20.0
    assert all(a < b for a, b in zip(temperature, temperature[1:]))
    assert driver.carried["pan_temperature"] == temperature[-1]


def test_transformer_page_charts_secondary_voltage():
    driver = _run(induction_driver(SimulationEngine(), mode="transformer"), "electromagnetism", 5)
    assert "secondary_voltage" in driver.series
    assert driver.carry is None
    assert driver.last_result["mode"] == "transformer"


def test_induction_page_rejects_unknown_mode():
    with pytest.raises(ValueError):
        induction_driver(SimulationEngine(), mode="wireless_charger")


def _distance_to_nearest(p, charges):
    return min(math.hypot(p["x"] - c["position"]["x"], p["y"] - c["position"]["y"]) for c in charges)


def test_electric_field_grid_defaults():
    charges = [
        {"q": 1.0, "position": {"x": -2.0, "y": 0.0, "z": 0.0}},
        {"q": -1.0, "position": {"x": 2.0, "y": 0.0, "z": 0.0}},
    ]
    everything = electric_field_grid(stride=1)
    assert all(_distance_to_nearest(v["point"], charges) >= 0.5 for v in everything)
    assert all(v["magnitude"] > 0.05 for v in everything)
    assert electric_field_grid() == everything[::2]
    assert everything[0]["point"] == {"x": -10.0, "y": -10.0, "z": 0.0}


def test_electric_field_grid_drops_weak_vectors():
    """|E| = k q / r² > 0.05 only within r < sqrt(k q / 0.05) ≈ 1.34 m for q = 1e-11 C."""
    charges = [{"q": 1e-11, "position": {"x": 0.0, "y": 0.0, "z": 0.0}}]
    vectors = electric_field_grid(charges, extent=4.0, stride=1)
    print("kept", len(vectors))
    assert vectors
    for v in vectors:
        r = _distance_to_nearest(v["point"], charges)
        assert 0.5 <= r < 1.35
        assert v["magnitude"] > 0.05
