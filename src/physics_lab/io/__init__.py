# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - result_to_json: Normalise results to plain JSON types.
    - Series and session (driver state) save/load.

Typical usage:
    from physics_lab.io import save_session, load_session

    save_session(driver, "projectile.json")
    data = load_session("projectile.json")
    data["series"]["position"].ys()
"""
from .json_io import (
    result_to_json,
    series_to_json,
    series_from_json,
    driver_to_json,
    save_session,
    load_session,
)

__all__ = [
    # Serialization
    "result_to_json",
    "series_to_json",
    "series_from_json",
    "driver_to_json",
    # Files
    "save_session",
    "load_session",
]
