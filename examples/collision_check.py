from physics_lab.calc import calculate_collision

m1, m2 = 1.0, 2.0
for e in [1.0, 0.5, 0.0]:
    r = calculate_collision({
        "object1": {"mass": m1, "velocity": {"x": +3.0, "y": 0.0}},
        "object2": {"mass": m2, "velocity": {"x": -1.0, "y": 0.0}},
        "restitution": e,
    })
    p = r["total_momentum"]
    ke = r["total_kinetic_energy"]
    print(f"e={e:.1f}  v1'={r['object1']['velocity']['x']:+.4f}  v2'={r['object2']['velocity']['x']:+.4f}")
    print("   p0", p["initial"], "p1", p["final"], "dp", p["final"] - p["initial"])
    print("   ke0", ke["initial"], "ke1", ke["final"], "dke", ke["final"] - ke["initial"])
