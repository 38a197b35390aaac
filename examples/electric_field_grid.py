from physics_lab.pages import electric_field_grid
import numpy as np

# Dipole: +2 µC at x=-2, -2 µC at x=+2
charges = [
    {"q": +2e-6, "position": {"x": -2.0, "y": 0.0, "z": 0.0}},
    {"q": -2e-6, "position": {"x": +2.0, "y": 0.0, "z": 0.0}},
]

vectors = electric_field_grid(charges, extent=4.0, step=0.8, stride=1)
print("vectors", len(vectors))
for v in vectors[:: max(1, len(vectors) // 10)]:
    p = v["point"]
    angle = np.degrees(np.arctan2(v["y"], v["x"]))
    print(f"({p['x']:+.1f}, {p['y']:+.1f})  |E|={v['magnitude']:10.3e}  dir={angle:+7.1f} deg")
