# MIT License (see LICENSE)
"""
Time-stepping schemes for particles.

Every integrator here shares the same contract as Particle.integrate():
    - duration <= 0 is a no-op (the particle is left untouched);
    - velocity is damped by damping ** duration;
    - the force accumulator is cleared at the end.

Available integrators:
- euler_step: Semi-implicit Euler (Particle.integrate). x uses the
  pre-step v; v picks up a + F/m. The default.
- legacy_step: Reproduces the first ballistic demo, where the working
  acceleration is a·(1 + dt) and accumulated forces are ignored. Kept
  so recorded demo trajectories can be replayed; not physically
  consistent.
- verlet_step: Constant-acceleration position update
  x += v·dt + ½·a·dt², then v += a·dt.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    Velocity Verlet: https://en.wikipedia.org/wiki/Verlet_integration#Velocity_Verlet
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ..particle import Particle


def euler_step(particle: Particle, dt: float) -> None:
    """Advance using Particle.integrate (semi-implicit Euler)."""
    particle.integrate(dt)


def legacy_step(particle: Particle, dt: float) -> None:
    """
    Advance using the ballistic demo's acceleration rule.

    Working acceleration is a + a·dt; the accumulator is cleared but its
    contents never reach the velocity.

    Args:
        particle: Particle to integrate (modified in-place).
        dt: Timestep in seconds.
    """
    dt = float(dt)
    if dt <= 0.0:
        return

    particle.position = particle.position.add_scaled(particle.velocity, dt)

    working_acc = particle.acceleration.add_scaled(particle.acceleration, dt)

    particle.velocity = particle.velocity.add_scaled(working_acc, dt)
    particle.velocity = particle.velocity * (particle.damping ** dt)

    particle.clear_accumulator()


def verlet_step(particle: Particle, dt: float) -> None:
    """
    Advance using a velocity-Verlet style update with constant acceleration.

    The acceleration (a + F/m) is held fixed over the step, so
    a(t+dt) ≈ a(t) and the update reduces to
        x(t+dt) = x(t) + v(t)·dt + ½·a·dt²
        v(t+dt) = v(t) + a·dt
    Exact for constant forces; damping is applied afterwards as usual.

    Args:
        particle: Particle to integrate (modified in-place).
        dt: Timestep in seconds.
    """
    dt = float(dt)
    if dt <= 0.0:
        return

    a0 = particle.acceleration.add_scaled(particle.force_accumulator, particle.inverse_mass)

    particle.position = particle.position.add_scaled(particle.velocity, dt).add_scaled(a0, 0.5 * dt * dt)

    particle.velocity = particle.velocity.add_scaled(a0, dt)
    particle.velocity = particle.velocity * (particle.damping ** dt)

    particle.clear_accumulator()


INTEGRATORS: dict[str, Callable[[Particle, float], None]] = {
    "euler": euler_step,
    "legacy": legacy_step,
    "verlet": verlet_step,
}


def get_integrator(name: str) -> Callable[[Particle, float], None]:
    """
    Look up an integrator by name.

    Raises:
        ValueError: For names not in INTEGRATORS.
    """
    try:
        return INTEGRATORS[name]
    except KeyError:
        raise ValueError(f"Unknown integrator: {name}") from None
