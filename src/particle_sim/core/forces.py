# MIT License (see LICENSE)
"""
Force generators.

A force generator computes a force for one particle and deposits it with
particle.add_force(). Generators only ever add: clearing the accumulator
is the job of Particle.integrate(). The registry calls
update_force(particle, duration) for every registration before any
particle is integrated.

Built-in generators:
    - Gravity: F = m·g, skipped for infinite-mass particles.
    - Drag: F = -(k1·|v| + k2·|v|²) · v̂.
    - AnchoredSpring: Hooke spring to a fixed point.
    - CustomForce: wraps a callable returning a force.

Gravity, Drag and AnchoredSpring are frozen dataclasses holding only
their parameters, so one instance can be shared by any number of
registrations. CustomForce is as shareable as the callable it wraps.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ..vector import Vector3

if TYPE_CHECKING:
    from ..particle import Particle


class ForceGenerator(ABC):
    """
    Interface for anything that contributes force to a particle.

    Subclasses implement update_force(). Stateful subclasses should say in
    their docstring whether one instance may be shared between particles.
    """

    @abstractmethod
    def update_force(self, particle: Particle, duration: float) -> None:
        """
        Deposit this generator's force into particle's accumulator.

        Args:
            particle: Target particle (modified in-place via add_force).
            duration: Length of the step the force applies over, in seconds.
        """
        ...


@dataclass(frozen=True)
class Gravity(ForceGenerator):
    """
    Uniform gravitational field.

    Attributes:
        gravity: Acceleration vector in m/s², e.g. (0, -9.81, 0).
    """
    gravity: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, "gravity", Vector3.of(self.gravity))

    def update_force(self, particle: Particle, duration: float) -> None:
        # Infinite mass would need an infinite force; immovable bodies are skipped.
        if not particle.has_finite_mass():
            return
        particle.add_force(self.gravity * particle.mass)


@dataclass(frozen=True)
class Drag(ForceGenerator):
    """
    Velocity-opposing drag with linear and quadratic terms.

    |F| = k1·|v| + k2·|v|², directed against v. A particle at rest gets
    the zero vector because normalize(0) == 0.

    Attributes:
        k1: Linear coefficient.
        k2: Quadratic coefficient.
    """
    k1: float
    k2: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "k1", float(self.k1))
        object.__setattr__(self, "k2", float(self.k2))

    def update_force(self, particle: Particle, duration: float) -> None:
        v = particle.velocity
        speed = v.magnitude()
        drag_coeff = self.k1 * speed + self.k2 * speed * speed
        particle.add_force(v.normalize() * -drag_coeff)


@dataclass(frozen=True)
class AnchoredSpring(ForceGenerator):
    """
    Hooke spring between the particle and a fixed world-space anchor.

    F = -k·(|d| - rest_length)·d̂  with d = position - anchor.

    Attributes:
        anchor: Fixed end of the spring.
        spring_constant: Stiffness k in N/m.
        rest_length: Length at which the spring exerts no force.
    """
    anchor: Vector3
    spring_constant: float
    rest_length: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor", Vector3.of(self.anchor))
        object.__setattr__(self, "spring_constant", float(self.spring_constant))
        object.__setattr__(self, "rest_length", float(self.rest_length))

    def update_force(self, particle: Particle, duration: float) -> None:
        d = particle.position - self.anchor
        stretch = d.magnitude() - self.rest_length
        particle.add_force(d.normalize() * (-self.spring_constant * stretch))


class CustomForce(ForceGenerator):
    """
    Adapter turning a plain function into a force generator.

    The function receives (particle, duration) and returns the force to
    deposit, or None for no contribution. It must not mutate the particle;
    depositing stays with this adapter.
    """

    def __init__(self, fn: Callable[[Particle, float], Vector3 | None]) -> None:
        self.fn = fn

    def update_force(self, particle: Particle, duration: float) -> None:
        force = self.fn(particle, duration)
        if force is not None:
            particle.add_force(force)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", repr(self.fn))
        return f"CustomForce({name})"
