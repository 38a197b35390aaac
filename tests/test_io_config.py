import json
import logging
import math

import numpy as np
import pytest
import yaml

from physics_lab import SimulationEngine, DriverConfig, load_config, setup_logging
from physics_lab.config import save_config
from physics_lab.io import (
    result_to_json,
    series_to_json,
    series_from_json,
    save_session,
    load_session,
)
from physics_lab.pages import induction_driver
from physics_lab.calc import calculate_time_dilation
from physics_lab.driver import ChartSeries


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

def test_config_defaults():
    config = DriverConfig()
    assert config.dt == 0.016
    assert config.history == 100
    assert config.realtime is False


@pytest.mark.parametrize("bad", [{"dt": 0}, {"history": 0}, {"max_steps_per_frame": 0}, {"frame_interval": -1}])
def test_config_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        DriverConfig(**bad)


def test_load_config_yaml(tmp_path, caplog):
    path = tmp_path / "physics_lab.yaml"
    path.write_text("dt: 0.01\nhistory: '50'\nrealtime: true\ncolour: blue\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        config = load_config(str(path))
    assert config.dt == 0.01
    assert config.history == 50
    assert config.realtime is True
    assert "colour" in caplog.text


def test_load_config_missing_and_empty(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == DriverConfig()
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config(str(empty)) == DriverConfig()


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_save_and_reload_config(tmp_path):
    path = tmp_path / "out.yaml"
    config = DriverConfig(dt=0.02, history=10, log_level="DEBUG")
    save_config(config, str(path))
    assert yaml.safe_load(path.read_text(encoding="utf-8"))["history"] == 10
    assert load_config(str(path)) == config


def test_setup_logging(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging("debug", str(log_file))
    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert "hello from the test" in log_file.read_text(encoding="utf-8")

    # Calling again replaces handlers rather than stacking them
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_config_applies_its_logging_settings(tmp_path):
    log_file = tmp_path / "lab.log"
    config = DriverConfig(log_level="DEBUG", log_file=str(log_file))
    logger = config.apply_logging()
    logger.debug("configured from DriverConfig")
    for handler in logger.handlers:
        handler.flush()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert "configured from DriverConfig" in log_file.read_text(encoding="utf-8")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# -----------------------------------------------------------------------------
# JSON
# -----------------------------------------------------------------------------

def test_result_to_json_converts_numpy():
    out = result_to_json({"a": np.float64(1.5), "b": np.arange(3), "c": [np.int64(2), None], "d": (True,)})
    assert out == {"a": 1.5, "b": [0, 1, 2], "c": [2, None], "d": [True]}
    json.dumps(out)


def test_result_to_json_rejects_foreign_objects():
    with pytest.raises(TypeError):
        result_to_json({"scene": object()})


def test_non_finite_values_round_trip():
    r = calculate_time_dilation({"velocity": 3e8})
    back = json.loads(json.dumps(result_to_json(r)))
    assert math.isinf(back["gamma"])


def test_series_json():
    s = ChartSeries("emf", maxlen=2)
    for i in range(3):
        s.append(i, -i)
    data = series_to_json(s)
    assert data == {"maxlen": 2, "points": [{"x": 1.0, "y": -1.0}, {"x": 2.0, "y": -2.0}]}
    with pytest.raises(ValueError):
        series_from_json("bad", {"points": [{"x": 1.0}]})


def test_session_save_and_load(tmp_path):
    engine = SimulationEngine()
    driver = induction_driver(engine)
    driver.attach("electromagnetism", None)
    driver.start()
    driver.scheduler.run(25)
    driver.stop()

    path = tmp_path / "session.json"
    save_session(driver, str(path))
    data = load_session(str(path))

    assert data["name"] == "induction"
    assert data["time"] == pytest.approx(driver.time)
    assert data["params"]["turns"] == 100
    assert data["last_result"]["emf"] == pytest.approx(driver.last_result["emf"])
    emf = data["series"]["emf"]
    assert isinstance(emf, ChartSeries)
    assert emf.maxlen == 200
    assert np.allclose(emf.ys(), driver.series["emf"].ys())
