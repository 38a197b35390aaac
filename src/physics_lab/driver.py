# MIT License (see LICENSE)
"""
The frame-stepping driver: a cooperative per-frame simulation loop.

Each visualization instance owns one FrameDriver. While running, every
frame callback:
    1. advances simulated time by the fixed step ``dt``,
    2. calls ``engine.simulate(operation, {**params, **carried, "time": t})``,
    3. evaluates every chart channel, then appends the samples together,
    4. presents the scene and asks the scheduler for the next frame.

A failure anywhere in 1-4 stops that driver and leaves it restartable.

Time is fixed-step, not wall-clock, so a run is reproducible on any
machine. With ``realtime=True`` the driver instead accumulates the measured
frame time and spends it in whole ``dt`` steps (capped per frame), which
keeps the physics identical while letting render cadence vary.

Everything runs on one thread. Stopping cancels the pending frame callback
before returning, so no tick runs after ``is_running`` becomes False.
"""
from __future__ import annotations
import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Mapping

import numpy as np

from .config import DriverConfig
from .engine import SimulationEngine
from .profiler import Profiler, maybe_section
from .scene.adapter import SceneHandle, SceneObjects
from .types import ChartSample, SimulationResult
from .util import lookup

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]
# (next time, params) -> True when the run is over, checked before simulating
TerminalCondition = Callable[[float, Mapping[str, Any]], bool]


# =============================================================================
# Chart series
# =============================================================================

class ChartSeries:
    """
    Sliding window of the most recent ``maxlen`` (x, y) samples.

    Samples keep insertion order and are never deduplicated.
    """

    def __init__(self, name: str, maxlen: int = 100):
        self.name = name
        self._samples: deque[ChartSample] = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._samples.maxlen

    def append(self, x: float, y: float) -> None:
        self._samples.append(ChartSample(float(x), float(y)))

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[ChartSample]:
        return iter(self._samples)

    @property
    def last(self) -> ChartSample | None:
        return self._samples[-1] if self._samples else None

    def points(self) -> list[dict[str, float]]:
        """Samples as ``[{"x": .., "y": ..}, ...]`` for chart widgets."""
        return [{"x": s.x, "y": s.y} for s in self._samples]

    def xs(self) -> np.ndarray:
        return np.fromiter((s.x for s in self._samples), dtype=np.float64, count=len(self._samples))

    def ys(self) -> np.ndarray:
        return np.fromiter((s.y for s in self._samples), dtype=np.float64, count=len(self._samples))


@dataclass(frozen=True)
class ChartChannel:
    """
    Which value of a result feeds which series.

    Attributes:
        name: Series name.
        select: Dotted path into the result ("energy.total") or a callable
                taking the result and returning a number.
    """
    name: str
    select: str | Callable[[SimulationResult], float]

    def __call__(self, result: SimulationResult) -> float:
        if callable(self.select):
            return float(self.select(result))
        return float(lookup(result, self.select))


# =============================================================================
# Schedulers
# =============================================================================

class FrameScheduler(ABC):
    """
    Per-frame callback source, the equivalent of requestAnimationFrame.

    ``request`` arranges for ``callback(frame_dt)`` to run once on the next
    frame and returns a handle; ``cancel`` guarantees the callback will not
    run. ``frame_dt`` is the wall-clock time the frame covered.
    """

    @abstractmethod
    def request(self, callback: FrameCallback) -> Any:
        ...

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        ...


class ManualScheduler(FrameScheduler):
    """
    Deterministic scheduler pumped by the caller.

    Used for tests and headless runs:
        scheduler = ManualScheduler()
        driver = FrameDriver(engine, op, scheduler=scheduler)
        driver.start()
        scheduler.run(60)   # one simulated second at 60 fps
    """

    def __init__(self, frame_interval: float = DriverConfig.frame_interval):
        self.frame_interval = frame_interval
        self.frames = 0
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self, frame_dt: float | None = None) -> int:
        """
        Fire the callbacks pending at the start of this frame.

        Callbacks requested during the frame wait for the next one; callbacks
        cancelled during the frame do not fire.

        Returns:
            Number of callbacks fired.
        """
        frame_dt = self.frame_interval if frame_dt is None else frame_dt
        fired = 0
        for handle in list(self._pending):
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(frame_dt)
            fired += 1
        self.frames += 1
        return fired

    def run(self, frames: int, frame_dt: float | None = None) -> int:
        """Run up to ``frames`` frames, stopping early once nothing is pending."""
        ran = 0
        for _ in range(frames):
            if not self._pending:
                break
            self.run_frame(frame_dt)
            ran += 1
        return ran


class AsyncioScheduler(FrameScheduler):
    """
    Frame callbacks on an asyncio event loop at a fixed wall-clock period.

    ``frame_dt`` is the measured time between the request and the callback.
    """

    def __init__(self, frame_interval: float = DriverConfig.frame_interval,
                 loop: asyncio.AbstractEventLoop | None = None):
        self.frame_interval = frame_interval
        self._loop = loop

    def request(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        requested_at = loop.time()
        return loop.call_later(self.frame_interval, self._fire, loop, requested_at, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()

    @staticmethod
    def _fire(loop: asyncio.AbstractEventLoop, requested_at: float, callback: FrameCallback) -> None:
        callback(loop.time() - requested_at)


# =============================================================================
# Driver
# =============================================================================

class FrameDriver:
    """
    Run loop of one simulation view.

    Attributes:
        engine: The view's SimulationEngine.
        operation: Calculation to run each step.
        params: Current parameters (``time`` is added per step).
        series: Chart series by channel name.
        time: Simulated-time accumulator, s.
        is_running: Whether frames are being scheduled.
        last_result: Most recent result, kept visible after stop.
        error: Exception that stopped the last run, if any.
        keep_state_on_stop: Default for ``stop(keep_state=None)``.
        carried: Values fed forward from one result into the next step's
                 parameters (see ``carry``). Cleared by start() and reset().
    """

    def __init__(
        self,
        engine: SimulationEngine,
        operation: str | Enum,
        params: Mapping[str, Any] | None = None,
        channels: list[ChartChannel] | tuple[ChartChannel, ...] = (),
        *,
        scheduler: FrameScheduler | None = None,
        config: DriverConfig | None = None,
        history: int | None = None,
        keep_state_on_stop: bool = False,
        terminal: TerminalCondition | None = None,
        on_result: Callable[[SimulationResult], None] | None = None,
        carry: Callable[[SimulationResult], Mapping[str, Any]] | None = None,
        profiler: Profiler | None = None,
        name: str | None = None,
    ):
        config = config or DriverConfig()
        self.engine = engine
        self.operation = operation
        self.params: dict[str, Any] = dict(params or {})
        self.channels = list(channels)
        self.scheduler = scheduler or ManualScheduler(config.frame_interval)
        self.dt = config.dt
        self.realtime = config.realtime
        self.max_steps_per_frame = config.max_steps_per_frame
        self.keep_state_on_stop = keep_state_on_stop
        self.terminal = terminal
        self.on_result = on_result
        self.carry = carry
        self.profiler = profiler
        self.name = name or (operation.value if isinstance(operation, Enum) else str(operation))

        maxlen = history if history is not None else config.history
        self.series: dict[str, ChartSeries] = {ch.name: ChartSeries(ch.name, maxlen) for ch in self.channels}

        self.time = 0.0
        self.is_running = False
        self.last_result: SimulationResult | None = None
        self.error: BaseException | None = None
        self.steps = 0
        self.scene_objects: SceneObjects | None = None
        self.carried: dict[str, Any] = {}
        self._handle: Any = None
        self._lag = 0.0

    # -------------------------------------------------------------------------
    # Scene ownership
    # -------------------------------------------------------------------------

    def attach(self, module_id: str, scene: SceneHandle | None,
               init_params: Mapping[str, Any] | None = None) -> SceneObjects | None:
        """
        Initialize ``module_id`` on the engine and take ownership of the
        scene objects it builds. Objects from a previous attach are disposed.
        """
        self._release_scene_objects()
        self.scene_objects = self.engine.initialize_module(module_id, scene, init_params)
        return self.scene_objects

    def close(self) -> None:
        """Stop and dispose owned scene objects (view unmount)."""
        self.stop()
        self._release_scene_objects()

    def _release_scene_objects(self) -> None:
        objects, self.scene_objects = self.scene_objects, None
        if objects is None:
            return
        if self.engine.scene_objects is objects:
            self.engine.close()
        else:
            objects.dispose()

    # -------------------------------------------------------------------------
    # Run control
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh run: time 0, empty series, first frame scheduled."""
        if self.is_running:
            return
        self.time = 0.0
        self._lag = 0.0
        self.error = None
        self.carried.clear()
        for s in self.series.values():
            s.clear()
        self.is_running = True
        self._schedule()
        logger.debug("Driver '%s' started", self.name)

    def stop(self, keep_state: bool | None = None) -> None:
        """
        Stop the loop; the pending frame callback is cancelled first.

        Args:
            keep_state: Keep the time accumulator (True) or reset it to 0
                (False). None applies ``keep_state_on_stop``. Series and
                ``last_result`` stay visible either way.
        """
        if keep_state is None:
            keep_state = self.keep_state_on_stop
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        was_running = self.is_running
        self.is_running = False
        self._lag = 0.0
        if not keep_state:
            self.time = 0.0
        if was_running:
            logger.debug("Driver '%s' stopped at t=%.3f", self.name, self.time)

    def toggle(self) -> bool:
        """Start if stopped, stop if running. Returns the new running state."""
        if self.is_running:
            self.stop()
        else:
            self.start()
        return self.is_running

    def reset(self) -> None:
        """Stop and clear all visible state."""
        self.stop(keep_state=False)
        for s in self.series.values():
            s.clear()
        self.last_result = None
        self.error = None
        self.steps = 0
        self.carried.clear()

    def update_params(self, params: Mapping[str, Any] | None = None, **changes: Any) -> None:
        """
        Merge parameter changes. The next step uses them; nothing restarts.

        A changed key also drops its carried value, so an explicit change
        wins over state fed forward from the previous result.
        """
        changes = {**(params or {}), **changes}
        self.params = {**self.params, **changes}
        for key in changes:
            self.carried.pop(key, None)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def step(self) -> SimulationResult | None:
        """
        Advance one fixed step.

        Returns:
            The result, or None when the run ended: the terminal condition
            fired or the engine reported a configuration error. The driver
            is stopped in both cases.
        """
        t = self.time + self.dt
        if self.terminal is not None and self.terminal(t, self.params):
            self.stop()
            return None

        result = self.engine.simulate(self.operation, {**self.params, **self.carried, "time": t})
        if result is None:
            logger.warning("Driver '%s' got no result; stopping", self.name)
            self.stop(keep_state=True)
            return None

        with maybe_section(self.profiler, "charts"):
            # Every channel is evaluated before anything is committed
            samples = [(channel.name, channel(result)) for channel in self.channels]
            carried = self.carry(result) if self.carry is not None else None
            for name, value in samples:
                self.series[name].append(t, value)

        self.time = t
        self.last_result = result
        self.steps += 1
        if carried is not None:
            self.carried.update(carried)
        if self.on_result is not None:
            self.on_result(result)
        return result

    def _steps_for(self, frame_dt: float) -> int:
        if not self.realtime:
            return 1
        self._lag += max(0.0, frame_dt)
        n = int((self._lag + 1e-12) // self.dt)
        if n >= self.max_steps_per_frame:
            # Drop the backlog rather than spiral
            n = self.max_steps_per_frame
            self._lag = 0.0
        else:
            self._lag -= n * self.dt
        return n

    def _schedule(self) -> None:
        self._handle = self.scheduler.request(self._on_frame)

    def _on_frame(self, frame_dt: float) -> None:
        self._handle = None
        if not self.is_running:
            return
        try:
            for _ in range(self._steps_for(frame_dt)):
                if self.step() is None:
                    break
            present = getattr(self.engine.scene_handle, "present", None)
            if present is not None:
                present(self.time)
        except Exception as exc:
            logger.exception("Driver '%s' failed at t=%.3f; stopping", self.name, self.time)
            self.error = exc
            self.stop(keep_state=True)
            return

        if self.is_running:
            self._schedule()
