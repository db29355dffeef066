"""
Microbenchmark: time per step vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from particle_sim import ParticleWorld, Particle, Gravity, Drag
from particle_sim.profiler import Profiler


def run(n: int, steps: int = 300):
    prof = Profiler()
    world = ParticleWorld(dt=1/240, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # One shared generator of each kind; every particle gets both
    gravity = world.add_generator(Gravity((0.0, -9.81, 0.0)))
    drag = world.add_generator(Drag(0.1, 0.01))

    for _ in range(n):
        v = rng.normal(size=3) * 5.0
        h = world.add_particle(Particle.from_mass(1.0, velocity=v, damping=0.99))
        world.register(h, gravity)
        world.register(h, drag)

    # warmup
    for _ in range(30):
        world.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        world.step()
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 100, 1000, 5000]:
        per_step, summary = run(n)
        print(f"N={n:5d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["forces", "integrate"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
