"""
Microbenchmark: time per frame vs number of concurrent drivers.
Run:
  python benchmarks/bench_frames.py
"""
import time
from physics_lab import SimulationEngine, NullScene, ManualScheduler, DriverConfig
from physics_lab.pages import pendulum_driver, interference_driver, induction_driver, collision_driver
from physics_lab.profiler import Profiler

PAGES = [
    ("classical", pendulum_driver),
    ("waves", interference_driver),
    ("electromagnetism", induction_driver),
    ("classical", collision_driver),
]

def run(n: int, frames: int = 600):
    prof = Profiler()
    scheduler = ManualScheduler()
    config = DriverConfig(history=200)

    # one engine + scene per view, as separate visualizations would have
    drivers = []
    for i in range(n):
        module_id, make = PAGES[i % len(PAGES)]
        engine = SimulationEngine(profiler=prof)
        driver = make(engine, scheduler, config)
        driver.profiler = prof
        driver.attach(module_id, NullScene())
        driver.start()
        drivers.append(driver)

    # warmup
    scheduler.run(30)

    t0 = time.perf_counter()
    scheduler.run(frames)
    t1 = time.perf_counter()

    for d in drivers:
        d.close()

    per_frame = (t1 - t0) / frames
    return per_frame, prof.stats.summary()

if __name__ == "__main__":
    DriverConfig().apply_logging()
    for n in [1, 3, 10, 30, 100]:
        per_frame, summary = run(n)
        print(f"N={n:4d}  frame={1e3*per_frame:8.3f} ms  frames/s={1/per_frame:8.1f}")
        # print top sections
        for k in ["simulate", "scene_update", "charts"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
