# MIT License (see LICENSE)
"""
Point-mass particle state and the explicit integration step.

A particle carries its kinematic state plus a force accumulator. Force
generators deposit into the accumulator with add_force(); integrate()
consumes it and clears it. Generators never clear it; apart from
integrate(), only the owner resets it, via an explicit clear_accumulator()
(ParticleWorld.start_frame does this to discard stray forces).

Equations of motion per step of length dt (dt > 0):
    x  ← x + v·dt                       (pre-step velocity)
    a' = a + F·(1/m)
    v  ← (v + a'·dt) · damping^dt
    F  ← 0

Infinite mass is stored as inverse_mass == 0. It is only ever set on
purpose (Particle.immovable / set_infinite_mass); the finite-mass setter
rejects zero and negative masses instead of computing 1/0.
"""
from __future__ import annotations
from dataclasses import dataclass, field

from .constants import DEFAULT_DAMPING
from .errors import InvalidMass, InvalidOperation
from .vector import Vector3


def _check_damping(damping: float) -> float:
    d = float(damping)
    if not 0.0 < d <= 1.0:
        raise ValueError(f"Damping must be in (0, 1], got {damping}")
    return d


def _check_inverse_mass(inverse_mass: float) -> float:
    im = float(inverse_mass)
    if not im >= 0.0:
        raise InvalidMass(f"Inverse mass must be >= 0, got {inverse_mass}")
    return im


_VECTOR_FIELDS = frozenset({"position", "velocity", "acceleration", "force_accumulator"})


@dataclass
class Particle:
    """
    A single point mass.

    Attributes:
        position: World-space position.
        velocity: World-space velocity.
        acceleration: Constant acceleration applied every step, on top of
            any accumulated force (e.g. a cheap stand-in for gravity).
        damping: Fraction of velocity retained per second, in (0, 1].
        inverse_mass: 1/m. Zero means infinite mass (immovable).
        force_accumulator: Sum of forces deposited since the last integrate().

    Prefer the from_mass() / immovable() constructors; the raw dataclass
    constructor takes inverse_mass directly. Every assignment, at
    construction or later, goes through the same checks: vectors are
    coerced with Vector3.of, damping must be in (0, 1] and inverse_mass
    must be >= 0.
    """
    position: Vector3 = field(default_factory=Vector3.zero)
    velocity: Vector3 = field(default_factory=Vector3.zero)
    acceleration: Vector3 = field(default_factory=Vector3.zero)
    damping: float = DEFAULT_DAMPING
    inverse_mass: float = 1.0
    force_accumulator: Vector3 = field(default_factory=Vector3.zero)

    def __setattr__(self, name: str, value) -> None:
        # Runs for the generated __init__ too, so construction and later
        # assignment share one set of checks
        if name in _VECTOR_FIELDS:
            value = Vector3.of(value)
        elif name == "damping":
            value = _check_damping(value)
        elif name == "inverse_mass":
            value = _check_inverse_mass(value)
        object.__setattr__(self, name, value)

    @classmethod
    def from_mass(
        cls,
        mass: float,
        position=(0.0, 0.0, 0.0),
        velocity=(0.0, 0.0, 0.0),
        acceleration=(0.0, 0.0, 0.0),
        damping: float = DEFAULT_DAMPING,
    ) -> Particle:
        """
        Create a finite-mass particle.

        Position defaults to the origin.

        Raises:
            InvalidMass: If mass <= 0.
        """
        p = cls(
            position=position,
            velocity=velocity,
            acceleration=acceleration,
            damping=damping,
        )
        p.set_mass(mass)
        return p

    @classmethod
    def immovable(
        cls,
        position=(0.0, 0.0, 0.0),
        velocity=(0.0, 0.0, 0.0),
        acceleration=(0.0, 0.0, 0.0),
        damping: float = DEFAULT_DAMPING,
    ) -> Particle:
        """Create an infinite-mass particle (finite forces never move it)."""
        return cls(
            position=position,
            velocity=velocity,
            acceleration=acceleration,
            damping=damping,
            inverse_mass=0.0,
        )

    # -------------------------------------------------------------------------
    # Mass
    # -------------------------------------------------------------------------

    @property
    def mass(self) -> float:
        """
        Mass in kg.

        Raises:
            InvalidOperation: For infinite-mass particles; check
                has_finite_mass() first.
        """
        if self.inverse_mass == 0.0:
            raise InvalidOperation("particle has infinite mass")
        return 1.0 / self.inverse_mass

    @mass.setter
    def mass(self, value: float) -> None:
        self.set_mass(value)

    def set_mass(self, mass: float) -> None:
        """
        Set a finite mass.

        Raises:
            InvalidMass: If mass <= 0. Use set_infinite_mass() for
                immovable particles.
        """
        m = float(mass)
        if not m > 0.0:
            raise InvalidMass(f"Mass must be positive, got {mass}")
        self.inverse_mass = 1.0 / m

    def set_infinite_mass(self) -> None:
        self.inverse_mass = 0.0

    def has_finite_mass(self) -> bool:
        return self.inverse_mass != 0.0

    def set_damping(self, damping: float) -> None:
        """Set damping; raises ValueError outside (0, 1]."""
        self.damping = damping

    # -------------------------------------------------------------------------
    # Forces
    # -------------------------------------------------------------------------

    def add_force(self, force: Vector3) -> None:
        """Deposit a force for the next integrate() call. Contributions add up."""
        self.force_accumulator = self.force_accumulator + Vector3.of(force)

    def clear_accumulator(self) -> None:
        """Reset the accumulated force to zero."""
        self.force_accumulator = Vector3.zero()

    # -------------------------------------------------------------------------
    # Integration
    # -------------------------------------------------------------------------

    def integrate(self, duration: float) -> None:
        """
        Advance the particle by duration seconds.

        Uses the semi-implicit order described in the module docstring:
        position moves with the pre-step velocity, then velocity picks up
        the constant acceleration plus F/m and is damped by
        damping ** duration. The accumulator is cleared afterwards.

        A zero or negative duration is a no-op; the particle, including its
        accumulator, is left untouched.
        """
        dt = float(duration)
        if dt <= 0.0:
            return

        self.position = self.position.add_scaled(self.velocity, dt)

        resulting_acc = self.acceleration.add_scaled(self.force_accumulator, self.inverse_mass)

        self.velocity = self.velocity.add_scaled(resulting_acc, dt)
        self.velocity = self.velocity * (self.damping ** dt)

        self.clear_accumulator()
