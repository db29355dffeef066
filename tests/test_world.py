import numpy as np
import pytest

from particle_sim import ParticleWorld, Particle, Vector3, Gravity, Drag, CustomForce
from particle_sim.errors import NotFound, StaleHandle
from particle_sim.profiler import Profiler


def test_step_accumulates_then_integrates():
    world = ParticleWorld(dt=0.5)
    h = world.add_particle(Particle.from_mass(2.0, damping=1.0))
    world.register(h, world.add_generator(Gravity((0.0, -10.0, 0.0))))
    world.step()
    p = world.particle(h)
    # F = -20, a = -10, v = -5; position used pre-step v = 0
    assert p.position == Vector3.zero()
    assert tuple(p.velocity) == pytest.approx((0.0, -5.0, 0.0))
    assert p.force_accumulator == Vector3.zero()
    assert world.time == pytest.approx(0.5)


def test_all_forces_accumulated_before_any_integration():
    """A generator reading another particle must see its pre-step state."""
    world = ParticleWorld(dt=1.0)
    a = world.add_particle(Particle.from_mass(1.0, velocity=(1.0, 0.0, 0.0), damping=1.0))
    b = world.add_particle(Particle.from_mass(1.0, damping=1.0))
    seen = []

    def follow_a(particle, duration):
        seen.append(world.particle(a).position)
        return None

    world.register(b, world.add_generator(CustomForce(follow_a)))
    world.step()
    assert seen == [Vector3.zero()]


def test_non_positive_step_is_noop():
    world = ParticleWorld()
    h = world.add_particle(Particle.from_mass(1.0, velocity=(1, 2, 3)))
    world.register(h, world.add_generator(Gravity((0, -9.81, 0))))
    world.step(0.0)
    world.step(-1.0)
    p = world.particle(h)
    assert p.position == Vector3.zero()
    assert p.force_accumulator == Vector3.zero()
    assert world.time == 0.0


def test_remove_particle_deregisters_first():
    world = ParticleWorld()
    h = world.add_particle(Particle.from_mass(1.0))
    g = world.add_generator(Gravity((0, -1, 0)))
    world.register(h, g)
    world.register(h, g)
    removed = world.remove_particle(h)
    assert isinstance(removed, Particle)
    assert len(world.registry) == 0
    with pytest.raises(StaleHandle):
        world.particle(h)
    # The step still runs; nothing dangles
    world.step()


def test_remove_generator_deregisters_first():
    world = ParticleWorld()
    a = world.add_particle(Particle.from_mass(1.0))
    b = world.add_particle(Particle.from_mass(1.0))
    g = world.add_generator(Drag(0.1, 0.01))
    world.register(a, g)
    world.register(b, g)
    world.remove_generator(g)
    assert len(world.registry) == 0
    with pytest.raises(StaleHandle):
        world.generator(g)


def test_deregister_missing_raises():
    world = ParticleWorld()
    h = world.add_particle(Particle.from_mass(1.0))
    g = world.add_generator(Gravity((0, -1, 0)))
    with pytest.raises(NotFound):
        world.deregister(h, g)
    world.register(h, g)
    world.deregister(h, g)
    assert len(world.registry) == 0


def test_start_frame_clears_accumulators():
    world = ParticleWorld()
    h = world.add_particle(Particle.from_mass(1.0))
    world.particle(h).add_force(Vector3(5.0, 0.0, 0.0))
    world.start_frame()
    assert world.particle(h).force_accumulator == Vector3.zero()


def test_positions_snapshot():
    world = ParticleWorld()
    world.add_particle(Particle.from_mass(1.0, position=(1, 2, 3)))
    gone = world.add_particle(Particle.from_mass(1.0, position=(9, 9, 9)))
    world.add_particle(Particle.immovable(position=(-1, 0, 4)))
    world.remove_particle(gone)
    pos = world.positions()
    assert pos.shape == (2, 3)
    assert np.allclose(pos, [[1, 2, 3], [-1, 0, 4]])
    assert len(world) == 2


def test_unknown_integrator_rejected():
    with pytest.raises(ValueError):
        ParticleWorld(integrator="rk4")


def test_legacy_integrator_world():
    world = ParticleWorld(integrator="legacy")
    h = world.add_particle(Particle.from_mass(
        200.0,
        position=(0.0, 1.5, 0.0),
        velocity=(40.0, 30.0, 0.0),
        acceleration=(0.0, -20.0, 0.0),
        damping=0.99,
    ))
    world.step(1.0)
    assert tuple(world.particle(h).velocity) == pytest.approx((39.6, -9.9, 0.0))


def test_integrator_reassignment_takes_effect():
    world = ParticleWorld()
    h = world.add_particle(Particle.from_mass(
        200.0,
        position=(0.0, 1.5, 0.0),
        velocity=(40.0, 30.0, 0.0),
        acceleration=(0.0, -20.0, 0.0),
        damping=0.99,
    ))
    world.integrator = "legacy"
    world.step(1.0)
    assert tuple(world.particle(h).velocity) == pytest.approx((39.6, -9.9, 0.0))


def test_bad_integrator_reassignment_fails_before_forces():
    world = ParticleWorld()
    h = world.add_particle(Particle.from_mass(1.0))
    world.register(h, world.add_generator(Gravity((0, -1, 0))))
    world.integrator = "rk4"
    with pytest.raises(ValueError):
        world.step()
    assert world.particle(h).force_accumulator == Vector3.zero()
    assert world.time == 0.0


def test_stale_registration_leaves_accumulators_clean():
    world = ParticleWorld()
    a = world.add_particle(Particle.from_mass(1.0))
    b = world.add_particle(Particle.from_mass(1.0))
    g = world.add_generator(Gravity((0, -1, 0)))
    world.register(a, g)
    world.register(b, g)
    # Removing through the arena skips deregistration
    world.particles.remove(b)
    with pytest.raises(StaleHandle):
        world.step(0.1)
    assert world.particle(a).force_accumulator == Vector3.zero()


def test_drag_reaches_terminal_velocity():
    """Gravity vs quadratic drag settles at v_t = sqrt(m·g / k2)."""
    m, g, k2 = 1.0, 9.81, 0.5
    world = ParticleWorld(dt=1 / 120)
    h = world.add_particle(Particle.from_mass(m, damping=1.0))
    world.register(h, world.add_generator(Gravity((0.0, -g, 0.0))))
    world.register(h, world.add_generator(Drag(0.0, k2)))
    for _ in range(120 * 10):
        world.step()
    v_t = (m * g / k2) ** 0.5
    assert world.particle(h).velocity.y == pytest.approx(-v_t, rel=1e-3)


def test_profiler_records_phases():
    prof = Profiler()
    world = ParticleWorld(profiler=prof)
    world.add_particle(Particle.from_mass(1.0))
    for _ in range(3):
        world.step()
    summary = prof.stats.summary()
    assert summary["forces"]["n"] == 3
    assert summary["integrate"]["n"] == 3
    assert summary["integrate"]["max_ms"] >= 0.0
