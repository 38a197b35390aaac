from physics_lab import SimulationEngine, RecordingScene, load_config
from physics_lab.pages import collision_driver

config = load_config("physics_lab.yaml")
config.apply_logging()

for e in [1.0, 0.0]:
    engine = SimulationEngine()
    driver = collision_driver(engine, config=config, restitution=e)
    driver.attach("classical", RecordingScene())
    driver.start()
    driver.scheduler.run(240)
    driver.stop()

    momentum = driver.series["momentum"].ys()
    energy = driver.series["energy"].ys()
    r = driver.last_result
    print(f"e={e:.1f}  collided={r['collided']}  x1={r['object1']['position']['x']:+.3f}  x2={r['object2']['position']['x']:+.3f}")
    print("   momentum min/max", momentum.min(), momentum.max())
    print("   energy first/last", energy[0], energy[-1])
    driver.close()
