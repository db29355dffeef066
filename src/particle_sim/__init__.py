# MIT License (see LICENSE)
"""
particle_sim - A point-mass particle dynamics core.

This package provides 3D vector algebra, particles with an explicit
integration step, and a force registry that lets independent force
generators (gravity, drag, springs, ...) act on particles without the
particles knowing about them.

Main entry points:
    - Vector3: Immutable 3D vector.
    - Particle: Point mass with a force accumulator and integrate().
    - ParticleWorld: Owns particles/generators and runs the step loop.
    - Gravity, Drag: Built-in force generators.

Submodules:
    - core: Force generators, registry, arena handles, integrators.
    - errors: Exception hierarchy.
    - logging_config: Logging setup for applications.

Example:
    from particle_sim import ParticleWorld, Particle, Gravity

    world = ParticleWorld(dt=1/60)
    ball = world.add_particle(Particle.from_mass(1.0, position=(0, 10, 0)))
    world.register(ball, world.add_generator(Gravity((0, -9.81, 0))))
    world.step()
"""
from .vector import Vector3
from .particle import Particle
from .world import ParticleWorld
from .core.arena import Handle
from .core.forces import ForceGenerator, Gravity, Drag, AnchoredSpring, CustomForce
from .core.registry import ForceRegistry
from .errors import ParticleSimError, InvalidOperation, InvalidMass, NotFound, StaleHandle

__all__ = [
    # Core simulation
    "Vector3",
    "Particle",
    "ParticleWorld",
    "Handle",
    # Forces
    "ForceGenerator",
    "Gravity",
    "Drag",
    "AnchoredSpring",
    "CustomForce",
    "ForceRegistry",
    # Errors
    "ParticleSimError",
    "InvalidOperation",
    "InvalidMass",
    "NotFound",
    "StaleHandle",
]
