# MIT License (see LICENSE)
"""
The simulation engine: one active physics module bound to one scene.

An engine is an ordinary value created per visualization instance, so two
views never share module or scene state. Its lifecycle:

    UNINITIALIZED --initialize_module(id)--> MODULE_ACTIVE
    MODULE_ACTIVE --initialize_module(id)--> MODULE_ACTIVE (new module)
    MODULE_ACTIVE --close()--------------> UNINITIALIZED

Configuration errors (unknown module, unknown operation, simulate before
initialize) are logged and answered with None. Callers treat None as
"nothing new to show".
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Mapping

from .profiler import Profiler, maybe_section
from .registry import ModuleRegistry, ModuleEntry, RegistryError, build_default_registry
from .scene.adapter import SceneHandle, SceneObjects
from .types import EngineState, SimulationResult

logger = logging.getLogger(__name__)

_default_registry: ModuleRegistry | None = None


def default_registry() -> ModuleRegistry:
    """The shared built-in registry. Built on first use, read-only afterwards."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry


class SimulationEngine:
    """
    Dispatches calculations for the active module and feeds its scene.

    Attributes:
        registry: Module lookup table (the built-in one by default).
        profiler: Optional Profiler; times "simulate" and "scene_update".
        active_module_id: Id of the active module, or None.
        scene_handle: Scene borrowed from the view. Never disposed here.
        scene_objects: Handle built by the active module's scene factory.
    """

    def __init__(self, registry: ModuleRegistry | None = None, profiler: Profiler | None = None):
        self.registry = registry if registry is not None else default_registry()
        self.profiler = profiler
        self.active_module_id: str | None = None
        self.scene_handle: SceneHandle | None = None
        self.scene_objects: SceneObjects | None = None
        self._module: ModuleEntry | None = None

    @property
    def state(self) -> EngineState:
        return EngineState.UNINITIALIZED if self._module is None else EngineState.MODULE_ACTIVE

    def initialize_module(
        self,
        module_id: str,
        scene_handle: SceneHandle | None,
        params: Mapping[str, Any] | None = None,
    ) -> SceneObjects | None:
        """
        Activate a module and build its scene objects on ``scene_handle``.

        The previous module's scene objects are disposed first. With no
        scene handle the module still activates, but has no scene objects.

        Returns:
            The new SceneObjects, or None if ``module_id`` is unknown (the
            current module then stays active).
        """
        try:
            module = self.registry.module(module_id)
        except RegistryError as exc:
            logger.error("%s", exc)
            return None

        self._dispose_scene_objects()
        self._module = module
        self.active_module_id = module_id
        self.scene_handle = scene_handle
        if scene_handle is not None:
            self.scene_objects = module.scene_factory(scene_handle, params or {})
        logger.debug("Initialized physics module '%s'", module_id)
        return self.scene_objects

    def simulate(self, operation: str | Enum, params: Mapping[str, Any] | None = None) -> SimulationResult | None:
        """
        Run one calculation of the active module.

        The result goes to ``scene_objects.update`` when the scene objects
        have one, and is returned either way so charts work without a scene.

        Returns:
            The calculation result, or None if no module is active or the
            operation is not part of it.
        """
        if self._module is None:
            logger.error("No physics module initialized")
            return None
        try:
            fn = self._module.calculation(operation)
        except RegistryError as exc:
            logger.error("%s", exc)
            return None

        with maybe_section(self.profiler, "simulate"):
            result = fn(params)

        update = getattr(self.scene_objects, "update", None)
        if update is not None:
            with maybe_section(self.profiler, "scene_update"):
                update(result)
        return result

    def available_functions(self) -> list[str]:
        """Operation names of the active module (empty when uninitialized)."""
        if self._module is None:
            return []
        return [op.value for op in self._module.operations]

    def close(self) -> None:
        """Dispose the scene objects and return to UNINITIALIZED."""
        self._dispose_scene_objects()
        self._module = None
        self.active_module_id = None
        self.scene_handle = None

    def _dispose_scene_objects(self) -> None:
        objects, self.scene_objects = self.scene_objects, None
        dispose = getattr(objects, "dispose", None)
        if dispose is not None:
            dispose()

    def __enter__(self) -> "SimulationEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
