# MIT License (see LICENSE)
"""
Core type definitions shared by the engine, the scene layer and the driver.

Defines:
- Primitive: a named visual element handed to an external scene.
- ChartSample: one (x, y) point of a chart series.
- EngineState: lifecycle of a SimulationEngine.
- SimulationParameters / SimulationResult / Calculation aliases.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple

import numpy as np

from .util import f64

SimulationParameters = Mapping[str, Any]
SimulationResult = dict[str, Any]
Calculation = Callable[[SimulationParameters | None], SimulationResult]


class EngineState(Enum):
    UNINITIALIZED = "uninitialized"
    MODULE_ACTIVE = "module_active"


class ChartSample(NamedTuple):
    """A chart point. ``x`` is simulated time for driver series."""
    x: float
    y: float


@dataclass
class Primitive:
    """
    A visual element built by a scene factory.

    The renderer decides how to draw each ``kind`` ("sphere", "cylinder",
    "box", "plane", "arrow", "lines", "axes", "grid"); the core only moves,
    scales and recolours primitives between frames.

    Attributes:
        kind: Geometry family.
        name: Key under which the SceneObjects exposes this primitive.
        position: World position [x, y, z].
        scale: Per-axis scale [sx, sy, sz].
        direction: Unit direction for arrows and rays.
        length: Arrow length.
        rotation: Rotation about z in radians.
        color: 0xRRGGBB.
        opacity: 0..1.
        data: Free-form per-kind payload (e.g. wave amplitude).
    """
    kind: str
    name: str
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3, dtype=np.float64))
    direction: np.ndarray = field(default_factory=lambda: f64((1.0, 0.0, 0.0)))
    length: float = 1.0
    rotation: float = 0.0
    color: int = 0xFFFFFF
    opacity: float = 1.0
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.scale = f64(self.scale)
        self.direction = f64(self.direction)

    def snapshot(self) -> dict[str, Any]:
        """JSON-friendly copy of the current visual state."""
        return {
            "kind": self.kind,
            "name": self.name,
            "position": self.position.tolist(),
            "scale": self.scale.tolist(),
            "direction": self.direction.tolist(),
            "length": self.length,
            "rotation": self.rotation,
            "color": self.color,
            "opacity": self.opacity,
            "data": dict(self.data),
        }
