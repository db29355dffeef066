import copy

import pytest

from particle_sim.particle import Particle
from particle_sim.vector import Vector3
from particle_sim.errors import InvalidMass, InvalidOperation


def _artillery() -> Particle:
    return Particle.from_mass(
        200.0,
        position=(0.0, 1.5, 0.0),
        velocity=(40.0, 30.0, 0.0),
        acceleration=(0.0, -20.0, 0.0),
        damping=0.99,
    )


def test_from_mass_defaults_to_origin():
    p = Particle.from_mass(2.0, velocity=(1, 0, 0))
    assert p.position == Vector3.zero()
    assert p.mass == pytest.approx(2.0)
    assert p.inverse_mass == pytest.approx(0.5)
    assert p.force_accumulator == Vector3.zero()


@pytest.mark.parametrize("bad", [0.0, -1.0, 0])
def test_zero_or_negative_mass_rejected(bad):
    with pytest.raises(InvalidMass):
        Particle.from_mass(bad)
    p = Particle.from_mass(1.0)
    with pytest.raises(InvalidMass):
        p.set_mass(bad)
    with pytest.raises(InvalidMass):
        p.mass = bad
    # Failed set leaves the previous mass in place
    assert p.inverse_mass == 1.0


def test_infinite_mass_only_by_intent():
    p = Particle.immovable(position=(1, 2, 3))
    assert not p.has_finite_mass()
    assert p.inverse_mass == 0.0
    with pytest.raises(InvalidOperation):
        _ = p.mass

    q = Particle.from_mass(5.0)
    q.set_infinite_mass()
    assert not q.has_finite_mass()
    q.mass = 4.0
    assert q.has_finite_mass()
    assert q.mass == pytest.approx(4.0)


@pytest.mark.parametrize("bad", [0.0, -0.1, 1.5])
def test_damping_out_of_range_rejected(bad):
    with pytest.raises(ValueError):
        Particle.from_mass(1.0, damping=bad)
    p = Particle.from_mass(1.0, damping=0.9)
    with pytest.raises(ValueError):
        p.set_damping(bad)
    with pytest.raises(ValueError):
        p.damping = bad
    assert p.damping == 0.9


def test_full_damping_allowed():
    p = Particle.from_mass(1.0, damping=1.0)
    p.damping = 0.5
    assert p.damping == 0.5


def test_vector_assignment_is_coerced():
    p = Particle.from_mass(1.0, damping=1.0)
    p.velocity = (1.0, 0.0, 0.0)
    p.position = [0, 2, 0]
    p.acceleration = (0, -10, 0)
    assert isinstance(p.velocity, Vector3)
    p.integrate(0.1)
    assert tuple(p.position) == pytest.approx((0.1, 2.0, 0.0))
    assert tuple(p.velocity) == pytest.approx((1.0, -1.0, 0.0))
    with pytest.raises(ValueError):
        p.velocity = (1.0, 2.0)


def test_negative_inverse_mass_assignment_rejected():
    p = Particle.from_mass(2.0)
    with pytest.raises(InvalidMass):
        p.inverse_mass = -1
    with pytest.raises(InvalidMass):
        Particle(inverse_mass=-0.5)
    assert p.inverse_mass == pytest.approx(0.5)


def test_add_force_accumulates_and_clear_resets():
    p = Particle.from_mass(1.0)
    p.add_force(Vector3(1.0, 0.0, 0.0))
    p.add_force((0.0, 2.0, 0.0))
    p.add_force(Vector3(-0.5, 0.0, 3.0))
    assert p.force_accumulator == Vector3(0.5, 2.0, 3.0)
    p.clear_accumulator()
    assert p.force_accumulator == Vector3.zero()


@pytest.mark.parametrize("duration", [0.0, -0.5])
def test_integrate_non_positive_duration_is_noop(duration):
    p = _artillery()
    p.add_force(Vector3(3.0, 4.0, 5.0))
    before = copy.deepcopy(p)
    p.integrate(duration)
    assert p == before
    assert p.force_accumulator == Vector3(3.0, 4.0, 5.0)


def test_integrate_end_to_end_conventional_rule():
    """
    One 1 s step of the artillery shot with no registry forces.

    Conventional rule: v += (a + F/m)·dt, so with F = 0
        v = ((40, 30, 0) + (0, -20, 0)) · 0.99 = (39.6, 9.9, 0)
    The legacy a·(1+dt) rule gives (39.6, -9.9, 0) instead; see
    test_integrators.py::test_legacy_rule_end_to_end.
    """
    p = _artillery()
    p.integrate(1.0)
    # Position moves with the pre-step velocity
    assert p.position == Vector3(40.0, 31.5, 0.0)
    assert tuple(p.velocity) == pytest.approx((39.6, 9.9, 0.0))
    assert p.force_accumulator == Vector3.zero()


def test_integrate_applies_accumulated_force():
    p = Particle.from_mass(2.0, damping=1.0)
    p.add_force(Vector3(4.0, 0.0, 0.0))
    p.integrate(0.5)
    # a = F/m = 2, v = 2 * 0.5 = 1; x used pre-step v = 0
    assert p.position == Vector3.zero()
    assert tuple(p.velocity) == pytest.approx((1.0, 0.0, 0.0))
    assert p.force_accumulator == Vector3.zero()


def test_infinite_mass_ignores_force():
    p = Particle.immovable(velocity=(1.0, 0.0, 0.0), damping=1.0)
    p.add_force(Vector3(1e6, 1e6, 1e6))
    p.integrate(0.1)
    assert tuple(p.velocity) == pytest.approx((1.0, 0.0, 0.0))
    assert tuple(p.position) == pytest.approx((0.1, 0.0, 0.0))


def test_damping_is_step_subdivision_independent():
    """With no acceleration, damping^dt composes exactly across substeps."""
    a = Particle.from_mass(1.0, velocity=(10.0, 0.0, 0.0), damping=0.5)
    b = Particle.from_mass(1.0, velocity=(10.0, 0.0, 0.0), damping=0.5)
    a.integrate(1.0)
    for _ in range(4):
        b.integrate(0.25)
    assert a.velocity.x == pytest.approx(5.0)
    assert b.velocity.x == pytest.approx(a.velocity.x)
