# MIT License (see LICENSE)
"""
Scene layer: the contract between the simulation core and a 3D renderer.

This subpackage provides:
    - SceneHandle: Abstract interface of the externally owned scene.
    - NullScene, DebugScene, RecordingScene: Headless handles.
    - SceneObjects: Per-module handle with update() and dispose().
    - create_*_scene: One scene factory per physics module.

The core has no rendering dependency; a real renderer implements
SceneHandle and draws the Primitive objects it receives.
"""
from .adapter import (
    SceneHandle,
    NullScene,
    DebugScene,
    RecordingScene,
    SceneObjects,
)
from .factories import (
    create_classical_scene,
    create_electromagnetism_scene,
    create_waves_scene,
    create_quantum_scene,
    create_relativity_scene,
)

__all__ = [
    # Handles
    "SceneHandle",
    "NullScene",
    "DebugScene",
    "RecordingScene",
    "SceneObjects",
    # Factories
    "create_classical_scene",
    "create_electromagnetism_scene",
    "create_waves_scene",
    "create_quantum_scene",
    "create_relativity_scene",
]
