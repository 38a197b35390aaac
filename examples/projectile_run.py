from physics_lab import SimulationEngine, load_config, RecordingScene
from physics_lab.pages import projectile_driver, projectile_flight_time

config = load_config("physics_lab.yaml")
config.apply_logging()

engine = SimulationEngine()
scene = RecordingScene()
driver = projectile_driver(engine, config=config, velocity=20.0, angle=45.0)
driver.attach("classical", scene)

driver.start()
frames = driver.scheduler.run(1000)

T = projectile_flight_time(driver.params)
print("frames", frames, "steps", driver.steps, "flight time", T)
print("last t", driver.last_result["time"], "range", driver.last_result["range"])
print("last position", driver.series["position"].last)
print("recorded frames", len(scene.frames), "ball at", scene.frames[-1]["primitives"]["projectile"]["position"])

driver.close()
