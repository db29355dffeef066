# MIT License (see LICENSE)
"""
The simulation container and step loop.

ParticleWorld owns the particles and force generators (each in an Arena)
plus the ForceRegistry linking them. Callers hold Handles, never raw
references into the registry, and removing a particle or generator
through the world drops its registrations first.

Each step runs two phases, strictly in this order:
    1. Force accumulation: registry.update_forces(dt) for all pairs.
    2. Integration: every particle advances by dt and clears its
       accumulator.

Structure:
    - User creates a ParticleWorld.
    - User adds particles and generators, then registers pairs.
    - User calls world.step(dt) in a loop and reads positions().
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

import numpy as np

from .constants import DEFAULT_DT
from .particle import Particle
from .profiler import Profiler
from .core.arena import Arena, Handle
from .core.forces import ForceGenerator
from .core.integrators import get_integrator
from .core.registry import ForceRegistry, Registration

logger = logging.getLogger(__name__)


@dataclass
class ParticleWorld:
    """
    Particle simulation world.

    Attributes:
        dt: Step length used when step() is called without one (default 1/60).
        integrator: Integration scheme ("euler", "legacy", "verlet").
        profiler: Optional Profiler collecting "forces"/"integrate" timings.
        time: Simulated time elapsed, in seconds.
    """
    dt: float = DEFAULT_DT
    integrator: str = "euler"
    profiler: Profiler | None = None

    # Internal state
    particles: Arena[Particle] = field(default_factory=Arena)
    generators: Arena[ForceGenerator] = field(default_factory=Arena)
    time: float = 0.0

    def __post_init__(self) -> None:
        # Fail on a bad integrator name at construction, not mid-run
        get_integrator(self.integrator)
        self.registry = ForceRegistry(self.particles, self.generators)

    # -------------------------------------------------------------------------
    # Particles and generators
    # -------------------------------------------------------------------------

    def add_particle(self, particle: Particle) -> Handle:
        handle = self.particles.insert(particle)
        logger.debug("Added particle %s", handle)
        return handle

    def particle(self, handle: Handle) -> Particle:
        """Resolve a particle handle (raises StaleHandle if removed)."""
        return self.particles.get(handle)

    def remove_particle(self, handle: Handle) -> Particle:
        """Deregister and remove a particle, returning it."""
        self.particles.get(handle)
        dropped = self.registry.remove_particle(handle)
        particle = self.particles.remove(handle)
        logger.debug("Removed particle %s (%d registrations dropped)", handle, dropped)
        return particle

    def add_generator(self, generator: ForceGenerator) -> Handle:
        handle = self.generators.insert(generator)
        logger.debug("Added generator %s: %r", handle, generator)
        return handle

    def generator(self, handle: Handle) -> ForceGenerator:
        return self.generators.get(handle)

    def remove_generator(self, handle: Handle) -> ForceGenerator:
        """Deregister and remove a generator, returning it."""
        self.generators.get(handle)
        dropped = self.registry.remove_generator(handle)
        generator = self.generators.remove(handle)
        logger.debug("Removed generator %s (%d registrations dropped)", handle, dropped)
        return generator

    def register(self, particle: Handle, generator: Handle) -> Registration:
        """Make generator act on particle every step."""
        return self.registry.add(particle, generator)

    def deregister(self, particle: Handle, generator: Handle) -> None:
        """Undo one register() call (raises NotFound if there is none)."""
        self.registry.remove(particle, generator)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def start_frame(self) -> None:
        """Clear every particle's accumulator, discarding stray forces."""
        for p in self.particles:
            p.clear_accumulator()

    def step(self, dt: float | None = None) -> None:
        """
        Advance the simulation by one step.

        A zero or negative dt does nothing: no forces are accumulated,
        so nothing is left behind in the accumulators for the next step.
        """
        dt = float(self.dt if dt is None else dt)
        if dt <= 0.0:
            logger.debug("Ignoring step with non-positive dt=%r", dt)
            return

        # Looked up per step so reassigning world.integrator takes effect;
        # an unknown name fails here, before any force is deposited
        step_fn = get_integrator(self.integrator)

        with self._section("forces"):
            self.registry.update_forces(dt)

        with self._section("integrate"):
            for p in self.particles:
                step_fn(p, dt)

        self.time += dt

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def positions(self) -> np.ndarray:
        """Positions of all live particles as an (N, 3) float64 array."""
        out = np.zeros((len(self.particles), 3), dtype=np.float64)
        for i, p in enumerate(self.particles):
            out[i] = p.position.to_array()
        return out

    def __len__(self) -> int:
        return len(self.particles)
