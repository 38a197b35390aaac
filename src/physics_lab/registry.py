# MIT License (see LICENSE)
"""
Module registry: maps a domain id to its calculations and scene factory.

The registry is filled once at startup and then frozen. Each module declares
its operations as a ``str`` Enum; registration fails unless the calculation
table covers that enum exactly, so a missing or stray operation is caught
when the registry is built rather than on the first frame that needs it.

Lookups raise the RegistryError family. The engine catches that family and
reports a null result instead of letting it reach the frame loop.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .types import Calculation
from .scene.adapter import SceneHandle, SceneObjects

SceneFactory = Callable[[SceneHandle, Mapping[str, Any] | None], SceneObjects]


class RegistryError(LookupError):
    """Base class for failed registry lookups."""


class UnknownModuleError(RegistryError):
    def __init__(self, module_id: str):
        super().__init__(f"Physics module '{module_id}' not found")
        self.module_id = module_id


class UnknownCalculationError(RegistryError):
    def __init__(self, module_id: str, operation: Any):
        name = operation.value if isinstance(operation, Enum) else operation
        super().__init__(f"Function '{name}' not found in module '{module_id}'")
        self.module_id = module_id
        self.operation = name


@dataclass(frozen=True)
class ModuleEntry:
    """
    One physics domain.

    Attributes:
        id: Domain identifier ("classical", "waves", ...).
        operations: Enum type listing the domain's operations.
        calculations: Read-only map from every operation to its function.
        scene_factory: Builds the domain's SceneObjects on a scene handle.
    """
    id: str
    operations: type[Enum]
    calculations: Mapping[Enum, Calculation]
    scene_factory: SceneFactory

    def operation(self, name: str | Enum) -> Enum:
        """
        Resolve an operation given as enum member or as its string value.

        Raises:
            UnknownCalculationError: If the name is not an operation of this module.
        """
        if isinstance(name, self.operations):
            return name
        try:
            return self.operations(name)
        except ValueError:
            raise UnknownCalculationError(self.id, name) from None

    def calculation(self, name: str | Enum) -> Calculation:
        return self.calculations[self.operation(name)]


class ModuleRegistry:
    """
    Static lookup table of physics modules.

    Usage:
        registry = ModuleRegistry()
        registry.register("classical", Classical, CALCULATIONS, create_classical_scene)
        registry.freeze()
        fn = registry.resolve("classical", "simulate_projectile")
    """

    def __init__(self) -> None:
        self._modules: dict[str, ModuleEntry] = {}
        self._frozen = False

    def register(
        self,
        module_id: str,
        operations: type[Enum],
        calculations: Mapping[Enum, Calculation],
        scene_factory: SceneFactory,
    ) -> ModuleEntry:
        """
        Add a module.

        Raises:
            RuntimeError: If the registry is frozen.
            ValueError: If the id is taken or the calculation table does not
                cover ``operations`` exactly.
        """
        if self._frozen:
            raise RuntimeError("Module registry is frozen")
        if module_id in self._modules:
            raise ValueError(f"Module '{module_id}' is already registered")

        expected = set(operations)
        given = set(calculations)
        missing = sorted(op.value for op in expected - given)
        extra = sorted(str(op) for op in given - expected)
        if missing or extra:
            raise ValueError(
                f"Module '{module_id}' calculations do not match {operations.__name__}: "
                f"missing={missing} unexpected={extra}"
            )

        entry = ModuleEntry(
            id=module_id,
            operations=operations,
            calculations=MappingProxyType(dict(calculations)),
            scene_factory=scene_factory,
        )
        self._modules[module_id] = entry
        return entry

    def freeze(self) -> "ModuleRegistry":
        """Disallow further registration. Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def module(self, module_id: str) -> ModuleEntry:
        """
        Raises:
            UnknownModuleError: If no module has this id.
        """
        try:
            return self._modules[module_id]
        except KeyError:
            raise UnknownModuleError(module_id) from None

    def resolve(self, module_id: str, operation: str | Enum) -> Calculation:
        """Look up a calculation function by module id and operation."""
        return self.module(module_id).calculation(operation)

    def ids(self) -> list[str]:
        return list(self._modules)

    def __contains__(self, module_id: str) -> bool:
        return module_id in self._modules

    def __len__(self) -> int:
        return len(self._modules)


def build_default_registry() -> ModuleRegistry:
    """Frozen registry with the five built-in physics modules."""
    from .calc import classical, electromagnetism, waves, quantum, relativity
    from .scene import factories

    registry = ModuleRegistry()
    registry.register("classical", classical.Classical, classical.CALCULATIONS,
                      factories.create_classical_scene)
    registry.register("electromagnetism", electromagnetism.Electromagnetism, electromagnetism.CALCULATIONS,
                      factories.create_electromagnetism_scene)
    registry.register("waves", waves.Waves, waves.CALCULATIONS,
                      factories.create_waves_scene)
    registry.register("quantum", quantum.Quantum, quantum.CALCULATIONS,
                      factories.create_quantum_scene)
    registry.register("relativity", relativity.Relativity, relativity.CALCULATIONS,
                      factories.create_relativity_scene)
    return registry.freeze()
