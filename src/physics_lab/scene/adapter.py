# MIT License (see LICENSE)
"""
Scene handle adapters and the SceneObjects base class.

The engine never owns a renderer. It borrows a SceneHandle from the view,
lets a module's scene factory add primitives to it, and keeps the returned
SceneObjects so each result can be pushed through ``update``. Concrete
handles here are headless: useful for tests, scripts and recording.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, TextIO
import sys

from ..types import Primitive


class SceneHandle(ABC):
    """
    Abstract interface of the external scene graph.

    Subclasses bridge to a real backend (three.js over a websocket,
    matplotlib, pyvista, ...). Only insertion and removal are required;
    primitives are mutated in place between frames.
    """

    @abstractmethod
    def add(self, primitive: Primitive) -> None:
        """Insert a primitive into the scene."""
        ...

    @abstractmethod
    def remove(self, primitive: Primitive) -> None:
        """Remove a primitive previously added. Unknown primitives are ignored."""
        ...

    def present(self, time: float) -> None:
        """Hook called once per driver frame after all updates. Optional."""


class NullScene(SceneHandle):
    """No-op scene. Useful when only chart series are wanted."""

    def add(self, primitive: Primitive) -> None:
        pass

    def remove(self, primitive: Primitive) -> None:
        pass


class RecordingScene(SceneHandle):
    """
    Scene that keeps live primitives and records a snapshot per frame.

    Example:
        scene = RecordingScene()
        driver.attach("classical", scene)
        ...
        for frame in scene.frames:
            print(frame["time"], frame["primitives"]["projectile"]["position"])
    """

    def __init__(self):
        self.primitives: dict[int, Primitive] = {}
        self.frames: list[dict[str, Any]] = []

    def add(self, primitive: Primitive) -> None:
        self.primitives[id(primitive)] = primitive

    def remove(self, primitive: Primitive) -> None:
        self.primitives.pop(id(primitive), None)

    def present(self, time: float) -> None:
        self.frames.append({
            "time": time,
            "primitives": {p.name: p.snapshot() for p in self.primitives.values()},
        })

    def names(self) -> list[str]:
        """Names of the primitives currently in the scene."""
        return [p.name for p in self.primitives.values()]

    def clear(self) -> None:
        """Clear recorded frames (live primitives are kept)."""
        self.frames.clear()


class DebugScene(SceneHandle):
    """
    Console/text scene for development.

    Output:
        + sphere 'projectile'
        === Frame t=0.0160 ===
        projectile (0.23, 0.22, 0.00)
    """

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout
        self._live: dict[int, Primitive] = {}

    def add(self, primitive: Primitive) -> None:
        self._live[id(primitive)] = primitive
        self.output.write(f"+ {primitive.kind} '{primitive.name}'\n")

    def remove(self, primitive: Primitive) -> None:
        if self._live.pop(id(primitive), None) is not None:
            self.output.write(f"- {primitive.kind} '{primitive.name}'\n")

    def present(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")
        for p in self._live.values():
            x, y, z = p.position
            self.output.write(f"{p.name} ({x:.2f}, {y:.2f}, {z:.2f})\n")
        self.output.flush()


class SceneObjects:
    """
    Handle returned by a scene factory.

    Owns the primitives it added to the borrowed scene. ``update`` maps a
    calculation result onto those primitives; ``dispose`` takes them back
    out. Primitives are reachable by name: ``objects["projectile"]``.
    """

    def __init__(self, scene: SceneHandle):
        self.scene = scene
        self.primitives: dict[str, Primitive] = {}
        self.disposed = False

    def add(self, primitive: Primitive) -> Primitive:
        """Register a primitive with this handle and the scene."""
        self.primitives[primitive.name] = primitive
        self.scene.add(primitive)
        return primitive

    def __getitem__(self, name: str) -> Primitive:
        return self.primitives[name]

    def __contains__(self, name: str) -> bool:
        return name in self.primitives

    def update(self, result: dict[str, Any]) -> None:
        """Apply a simulation result. The base class ignores results."""

    def dispose(self) -> None:
        """Remove every owned primitive from the scene. Safe to call twice."""
        if self.disposed:
            return
        for primitive in self.primitives.values():
            self.scene.remove(primitive)
        self.primitives.clear()
        self.disposed = True
