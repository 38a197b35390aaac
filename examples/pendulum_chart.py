from physics_lab import SimulationEngine, load_config, NullScene
from physics_lab.pages import pendulum_driver
import numpy as np

config = load_config("physics_lab.yaml")
config.apply_logging()

engine = SimulationEngine()
driver = pendulum_driver(engine, config=config, angle_deg=20, length=2.0)
driver.attach("classical", NullScene())

driver.start()
driver.scheduler.run(240)
driver.stop()

angle = driver.series["angle"]
print("period", driver.last_result["period"], "samples", len(angle))
print("angle range (deg)", float(np.min(angle.ys())), float(np.max(angle.ys())))
print("energy (per unit mass) last", driver.series["energy"].last)
