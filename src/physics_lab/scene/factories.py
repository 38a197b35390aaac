# MIT License (see LICENSE)
"""
Scene factories, one per physics module.

A factory has the signature ``factory(scene, params) -> SceneObjects``: it
adds the module's primitives to the borrowed scene and returns the handle
that maps results onto them. ``params`` may set initial placement (e.g.
charge positions); every key is optional.

Updates are tolerant: a result that lacks the fields a primitive follows
leaves that primitive unchanged, because one module serves several
calculations (the classical scene sees projectile and pendulum results).
"""
from __future__ import annotations
import math
from typing import Any, Mapping

import numpy as np

from ..types import Primitive
from ..util import f64, get, vec3, unit
from .adapter import SceneHandle, SceneObjects


def _axes(objects: SceneObjects, size: float = 5.0) -> None:
    objects.add(Primitive("axes", "axes", scale=(size, size, size)))


class ClassicalSceneObjects(SceneObjects):
    """Projectile ball, pendulum rod + bob and the two collision bodies."""

    def update(self, result: dict[str, Any]) -> None:
        if "position" in result.get("object1", {}):
            self["body1"].position = vec3(result["object1"]["position"])
            self["body2"].position = vec3(result["object2"]["position"])
            return
        position = result.get("position")
        if position is None:
            return
        if "length" in result and "angle" in result:
            # Pendulum result: rod hangs from the pivot, bob at its end
            rod = self["pendulum"]
            rod.rotation = float(result["angle"])
            rod.scale[1] = float(result["length"])
            rod.position = 0.5 * vec3(position)
            self["bob"].position = vec3(position)
        else:
            self["projectile"].position = vec3(position)


def create_classical_scene(scene: SceneHandle, params: Mapping[str, Any] | None = None) -> ClassicalSceneObjects:
    objects = ClassicalSceneObjects(scene)
    _axes(objects)
    objects.add(Primitive("grid", "grid", scale=(20.0, 1.0, 20.0), data={"divisions": 20}))
    objects.add(Primitive("sphere", "projectile", scale=(0.1, 0.1, 0.1), color=0xFF6B6B))
    objects.add(Primitive("cylinder", "pendulum", scale=(0.05, 1.0, 0.05), color=0x4ECDC4))
    objects.add(Primitive("sphere", "bob", position=(0.0, -1.0, 0.0), scale=(0.1, 0.1, 0.1), color=0x4ECDC4))
    objects.add(Primitive("sphere", "body1", position=(-3.0, 0.0, 0.0), scale=(0.3, 0.3, 0.3), color=0xE74C3C))
    objects.add(Primitive("sphere", "body2", position=(3.0, 0.0, 0.0), scale=(0.3, 0.3, 0.3), color=0x3498DB))
    return objects


class ElectromagnetismSceneObjects(SceneObjects):
    """Two charges and a field arrow at the sample point."""

    def update(self, result: dict[str, Any]) -> None:
        magnitude = result.get("magnitude")
        if not magnitude:
            return
        arrow = self["field_arrow"]
        arrow.length = float(magnitude)
        arrow.direction = unit(vec3(result))


def create_electromagnetism_scene(
    scene: SceneHandle, params: Mapping[str, Any] | None = None
) -> ElectromagnetismSceneObjects:
    params = params or {}
    objects = ElectromagnetismSceneObjects(scene)
    _axes(objects)
    objects.add(Primitive(
        "sphere", "positive_charge",
        position=vec3(get(params, "positive_position", None), default=(-1.0, 0.0, 0.0)),
        scale=(0.2, 0.2, 0.2), color=0xFF4444,
    ))
    objects.add(Primitive(
        "sphere", "negative_charge",
        position=vec3(get(params, "negative_position", None), default=(1.0, 0.0, 0.0)),
        scale=(0.2, 0.2, 0.2), color=0x4444FF,
    ))
    objects.add(Primitive("lines", "field_lines", color=0xFFFF00))
    objects.add(Primitive(
        "arrow", "field_arrow",
        position=vec3(get(params, "point", None)),
        color=0xFF0000,
    ))
    return objects


class WavesSceneObjects(SceneObjects):
    """Wave surface, screen pattern and a ray for reflection/refraction."""

    def update(self, result: dict[str, Any]) -> None:
        if "amplitude" in result:
            self["wave_mesh"].data["amplitude"] = float(result["amplitude"])
        if "intensity" in result:
            self["pattern_mesh"].opacity = float(np.clip(result["intensity"], 0.0, 1.0))
        if "direction" in result:
            ray = self["ray"]
            direction = result["direction"]
            # Total internal reflection: hide the transmitted ray
            ray.opacity = 0.0 if direction is None else 1.0
            if direction is not None:
                ray.direction = unit(vec3(direction))


def create_waves_scene(scene: SceneHandle, params: Mapping[str, Any] | None = None) -> WavesSceneObjects:
    objects = WavesSceneObjects(scene)
    _axes(objects)
    objects.add(Primitive("plane", "wave_mesh", scale=(10.0, 10.0, 1.0), color=0x4ECDC4,
                          data={"segments": 50, "wireframe": True, "amplitude": 0.0}))
    objects.add(Primitive("plane", "pattern_mesh", scale=(5.0, 5.0, 1.0), data={"segments": 100}))
    objects.add(Primitive("arrow", "ray", color=0xFFFF00))
    return objects


class QuantumSceneObjects(SceneObjects):
    """Probability surface, particle and barrier."""

    def update(self, result: dict[str, Any]) -> None:
        if "probability" in result:
            self["particle"].opacity = float(np.clip(result["probability"], 0.0, 1.0))
        if "real_part" in result:
            self["probability_wave"].data["real_part"] = float(result["real_part"])
        if "transmission_probability" in result:
            self["barrier"].data["transmission"] = float(result["transmission_probability"])


def create_quantum_scene(scene: SceneHandle, params: Mapping[str, Any] | None = None) -> QuantumSceneObjects:
    params = params or {}
    objects = QuantumSceneObjects(scene)
    _axes(objects)
    objects.add(Primitive("plane", "probability_wave", scale=(10.0, 10.0, 1.0), color=0x9B59B6, opacity=0.7,
                          data={"segments": 100}))
    objects.add(Primitive("sphere", "particle", scale=(0.1, 0.1, 0.1), color=0xFF6B6B))
    width = float(get(params, "barrier_width", 0.5))
    objects.add(Primitive("box", "barrier", scale=(width, 5.0, 5.0), color=0x34495E, opacity=0.5))
    return objects


class RelativitySceneObjects(SceneObjects):
    """Rest and moving frames, a clock and a contracting rod."""

    # Scene units per unit of β for the moving frame offset
    frame_travel: float = 5.0

    def update(self, result: dict[str, Any]) -> None:
        if "contracted_length" in result and result.get("proper_length"):
            self["length_object"].scale[0] = float(result["contracted_length"]) / float(result["proper_length"])
        if "beta" in result:
            self["moving_frame"].position[0] = float(result["beta"]) * self.frame_travel
        if "dilated_time" in result:
            # One full hand revolution per dilated second
            self["clock"].rotation = -2.0 * math.pi * (float(result["dilated_time"]) % 1.0)


def create_relativity_scene(scene: SceneHandle, params: Mapping[str, Any] | None = None) -> RelativitySceneObjects:
    objects = RelativitySceneObjects(scene)
    _axes(objects)
    objects.add(Primitive("box", "rest_frame", scale=(2.0, 2.0, 2.0), color=0x3498DB, data={"wireframe": True}))
    objects.add(Primitive("box", "moving_frame", scale=(2.0, 2.0, 2.0), color=0xE74C3C, data={"wireframe": True}))
    objects.add(Primitive("cylinder", "clock", position=(0.0, 2.0, 0.0), scale=(0.3, 0.1, 0.3), color=0xF39C12))
    objects.add(Primitive("box", "length_object", position=f64((0.0, -2.0, 0.0)), scale=(1.0, 0.2, 0.2),
                          color=0x2ECC71))
    return objects
