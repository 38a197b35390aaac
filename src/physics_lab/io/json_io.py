# MIT License (see LICENSE)
"""
JSON serialization of simulation results and chart series.

Results are already JSON-shaped, but callers may hand in numpy scalars or
arrays (e.g. from their own post-processing); result_to_json normalises
those. Non-finite floats are written as JSON ``NaN``/``Infinity`` tokens,
which Python's json module reads back, so an unguarded relativity result at
v = c survives a round trip.

Session file format:
--------------------
{
  "name": string,                 # driver name
  "time": float,                  # accumulator when saved
  "dt": float,                    # fixed step
  "params": {...},                # parameters in effect
  "last_result": {...} | null,
  "series": {
    "<channel>": {"maxlen": int, "points": [{"x": float, "y": float}, ...]}
  }
}
"""
from __future__ import annotations
import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from ..driver import ChartSeries, FrameDriver


def result_to_json(value: Any) -> Any:
    """
    Convert a result (or any nested value) to plain JSON types.

    Raises:
        TypeError: For values with no JSON form (e.g. a scene handle).
    """
    if value is None or isinstance(value, (bool, str, int, float)):
        return value
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, Mapping):
        return {str(k.value if hasattr(k, "value") else k): result_to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [result_to_json(v) for v in value]
    raise TypeError(f"Value of type {type(value).__name__} is not JSON serializable")


def series_to_json(series: "ChartSeries") -> dict[str, Any]:
    """Serialize one chart series."""
    return {"maxlen": series.maxlen, "points": series.points()}


def series_from_json(name: str, data: Mapping[str, Any]) -> "ChartSeries":
    """
    Rebuild a chart series. Points beyond ``maxlen`` keep only the newest.

    Raises:
        ValueError: If a point lacks ``x`` or ``y``.
    """
    from ..driver import ChartSeries

    series = ChartSeries(name, int(data.get("maxlen", 100)))
    for point in data.get("points", []):
        if "x" not in point or "y" not in point:
            raise ValueError(f"Series '{name}' has a point without x/y: {point!r}")
        series.append(point["x"], point["y"])
    return series


def driver_to_json(driver: "FrameDriver") -> dict[str, Any]:
    """Serialize the visible state of a driver."""
    return {
        "name": driver.name,
        "time": driver.time,
        "dt": driver.dt,
        "params": result_to_json(driver.params),
        "last_result": result_to_json(driver.last_result),
        "series": {name: series_to_json(s) for name, s in driver.series.items()},
    }


def save_session(driver: "FrameDriver", path: str, indent: int = 2) -> None:
    """Write a driver's visible state to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(driver_to_json(driver), f, indent=indent)


def load_session(path: str) -> dict[str, Any]:
    """
    Load a session file. ``series`` entries are returned as ChartSeries.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If a series point is malformed.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    data["series"] = {name: series_from_json(name, s) for name, s in data.get("series", {}).items()}
    return data
