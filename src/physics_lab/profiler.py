# MIT License (see LICENSE)
"""
Simple profiling utilities for per-frame cost measurement.

The engine and the frame driver accept an optional Profiler and time their
phases under fixed section names:
    - "simulate":     the calculation function call
    - "scene_update": SceneObjects.update
    - "charts":       appending samples to chart series

Example:
    profiler = Profiler()
    engine = SimulationEngine(profiler=profiler)
    ...
    print(profiler.stats.summary()["simulate"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """
    Accumulates timing samples for named sections.

    Stores raw timing data and provides summary statistics (count, mean, max).
    """
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record a timing sample (in seconds) for a named section."""
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Compute summary statistics for all recorded sections.

        Returns:
            Dict mapping section name to stats dict with keys:
            - 'n': sample count
            - 'mean_ms': average time in milliseconds
            - 'max_ms': maximum time in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based profiler for timing code sections."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under ``name``, even if it raises."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)


@contextmanager
def maybe_section(profiler: Profiler | None, name: str) -> Iterator[None]:
    """``profiler.section(name)`` when a profiler is set, otherwise a no-op."""
    if profiler is None:
        yield
        return
    with profiler.section(name):
        yield
