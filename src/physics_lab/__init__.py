# MIT License (see LICENSE)
"""
physics_lab - Real-time physics calculations for educational visualizations.

This package provides the computational core behind interactive physics
demos: pure calculation functions, a module registry, a per-view simulation
engine and a frame-stepping driver that streams results into bounded chart
series and a borrowed 3D scene.

Main entry points:
    - SimulationEngine: Active module + scene for one view.
    - FrameDriver: Per-frame loop advancing simulated time.
    - ModuleRegistry / build_default_registry: Domain lookup table.

Submodules:
    - calc: Classical, electromagnetism, waves, quantum, relativity.
    - scene: Scene handle contract, headless scenes and scene factories.
    - pages: Driver presets and parameter sweeps per simulation page.
    - io: JSON export of results, series and sessions.

Example:
    from physics_lab import SimulationEngine, RecordingScene
    from physics_lab.pages import projectile_driver

    engine = SimulationEngine()
    driver = projectile_driver(engine, velocity=20, angle=45)
    driver.attach("classical", RecordingScene())
    driver.start()
    driver.scheduler.run(300)
    print(driver.series["position"].points()[-1])
"""
from .engine import SimulationEngine
from .driver import (
    FrameDriver,
    ChartSeries,
    ChartChannel,
    FrameScheduler,
    ManualScheduler,
    AsyncioScheduler,
)
from .registry import (
    ModuleRegistry,
    ModuleEntry,
    RegistryError,
    UnknownModuleError,
    UnknownCalculationError,
    build_default_registry,
)
from .scene import SceneHandle, SceneObjects, NullScene, DebugScene, RecordingScene
from .config import DriverConfig, load_config
from .logging_config import setup_logging
from .types import EngineState, Primitive

__all__ = [
    # Engine and loop
    "SimulationEngine",
    "EngineState",
    "FrameDriver",
    "ChartSeries",
    "ChartChannel",
    "FrameScheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    # Registry
    "ModuleRegistry",
    "ModuleEntry",
    "RegistryError",
    "UnknownModuleError",
    "UnknownCalculationError",
    "build_default_registry",
    # Scene
    "SceneHandle",
    "SceneObjects",
    "Primitive",
    "NullScene",
    "DebugScene",
    "RecordingScene",
    # Configuration
    "DriverConfig",
    "load_config",
    "setup_logging",
]
