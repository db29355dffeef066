# examples/ballistic.py
"""
Ballistic demo without a window: fire each shot type and print its path.

The shot table and the retirement rule (leave the field or run out of
time) are demo configuration; the particle core knows nothing about them.
Run:
  python examples/ballistic.py [pistol|artillery|fireball|laser] [--legacy]
"""
import logging
import sys
from dataclasses import dataclass

from particle_sim import ParticleWorld, Particle
from particle_sim.logging_config import setup_logging

logger = logging.getLogger("particle_sim.examples.ballistic")

FIELD_WIDTH = 480.0
FIELD_HEIGHT = 740.0
FRAME_DT = 1 / 60
TIME_LIMIT = 5.0


@dataclass(frozen=True)
class ShotType:
    mass: float
    velocity: tuple[float, float, float]
    acceleration: tuple[float, float, float]
    radius: float
    damping: float


# y is up here; a screen-space table would have had y pointing down
SHOTS = {
    "pistol": ShotType(2.0, (35.0, 0.0, 0.0), (0.0, -1.0, 0.0), 5.0, 0.99),
    "artillery": ShotType(200.0, (40.0, 30.0, 0.0), (0.0, -20.0, 0.0), 22.0, 0.99),
    "fireball": ShotType(1.0, (10.0, 0.0, 0.0), (0.0, 0.6, 0.0), 10.0, 0.9),
    "laser": ShotType(0.1, (100.0, 0.0, 0.0), (0.0, 0.0, 0.0), 3.5, 0.99),
}


def fire(world: ParticleWorld, kind: str):
    shot = SHOTS[kind]
    return world.add_particle(Particle.from_mass(
        shot.mass,
        position=(0.0, 1.5, 0.0),
        velocity=shot.velocity,
        acceleration=shot.acceleration,
        damping=shot.damping,
    ))


def out_of_field(x: float, y: float, radius: float) -> bool:
    return x > FIELD_WIDTH + radius or y > FIELD_HEIGHT - radius or y < -radius


def main(argv: list[str]) -> int:
    setup_logging()
    kinds = [a for a in argv if not a.startswith("--")] or list(SHOTS)
    integrator = "legacy" if "--legacy" in argv else "euler"

    for kind in kinds:
        if kind not in SHOTS:
            logger.error("Unknown shot type %r (choose from %s)", kind, ", ".join(SHOTS))
            return 2
        world = ParticleWorld(dt=FRAME_DT, integrator=integrator)
        handle = fire(world, kind)
        radius = SHOTS[kind].radius

        frames = 0
        while world.time < TIME_LIMIT:
            world.step()
            frames += 1
            pos = world.particle(handle).position
            if frames % 30 == 0:
                print(f"{kind:9s} t={world.time:5.2f}s pos=({pos.x:8.2f}, {pos.y:8.2f})")
            if out_of_field(pos.x, pos.y, radius):
                break

        world.remove_particle(handle)
        logger.info("%s retired after %.2fs (%d frames)", kind, world.time, frames)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
