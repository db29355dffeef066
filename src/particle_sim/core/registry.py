# MIT License (see LICENSE)
"""
Force registry: which generators act on which particles.

The registry stores (particle handle, generator handle) pairs in
insertion order and owns neither side. Particles and generators live in
Arenas owned by the simulation; every update resolves the handles, so a
registration can never reach an object that has been removed.

Per simulation step the caller must:
    1. registry.update_forces(dt)       (all particles)
    2. particle.integrate(dt)           (each particle)
Interleaving the two per particle loses forces: anything deposited after
a particle integrates is wiped by its next clear.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from ..errors import NotFound
from .arena import Arena, Handle

if TYPE_CHECKING:
    from ..particle import Particle
    from .forces import ForceGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """One generator acting on one particle."""
    particle: Handle
    generator: Handle


class ForceRegistry:
    """
    Ordered list of registrations driving the force accumulation phase.

    Registering the same pair twice is allowed; the generator then runs
    twice per step and its contribution doubles.

    Args:
        particles: Arena the particle handles resolve against.
        generators: Arena the generator handles resolve against.
    """

    def __init__(self, particles: Arena[Particle], generators: Arena[ForceGenerator]) -> None:
        self.particles = particles
        self.generators = generators
        self._registrations: list[Registration] = []

    def add(self, particle: Handle, generator: Handle) -> Registration:
        """
        Append a registration.

        Raises:
            StaleHandle: If either handle does not resolve.
        """
        self.particles.get(particle)
        self.generators.get(generator)
        reg = Registration(particle, generator)
        self._registrations.append(reg)
        logger.debug("Registered generator %s on particle %s", generator, particle)
        return reg

    def remove(self, particle: Handle, generator: Handle) -> None:
        """
        Remove the earliest registration of this exact pair.

        Raises:
            NotFound: If the pair is not registered.
        """
        target = Registration(particle, generator)
        for i, reg in enumerate(self._registrations):
            if reg == target:
                del self._registrations[i]
                logger.debug("Removed generator %s from particle %s", generator, particle)
                return
        raise NotFound(f"No registration of generator {generator} on particle {particle}")

    def remove_particle(self, particle: Handle) -> int:
        """Drop every registration naming particle. Returns how many were dropped."""
        return self._remove_where(lambda reg: reg.particle == particle)

    def remove_generator(self, generator: Handle) -> int:
        """Drop every registration naming generator. Returns how many were dropped."""
        return self._remove_where(lambda reg: reg.generator == generator)

    def _remove_where(self, pred) -> int:
        before = len(self._registrations)
        self._registrations = [reg for reg in self._registrations if not pred(reg)]
        return before - len(self._registrations)

    def clear(self) -> None:
        """Drop all registrations. Particles and generators are untouched."""
        self._registrations.clear()

    def registrations_for(self, particle: Handle) -> list[Registration]:
        return [reg for reg in self._registrations if reg.particle == particle]

    def update_forces(self, duration: float) -> None:
        """
        Run every registered generator once, in registration order.

        All handles are resolved before any generator runs, so a stale
        registration fails the whole pass with no force deposited.

        Raises:
            StaleHandle: If a registration outlived its particle or
                generator (only possible when the arenas are edited behind
                the registry's back).
        """
        dt = float(duration)
        resolved = [
            (self.particles.get(reg.particle), self.generators.get(reg.generator))
            for reg in self._registrations
        ]
        for particle, generator in resolved:
            generator.update_force(particle, dt)

    def __iter__(self) -> Iterator[Registration]:
        return iter(list(self._registrations))

    def __len__(self) -> int:
        return len(self._registrations)
