# MIT License (see LICENSE)
"""
Core particle simulation components.

This subpackage provides:
    - Force generators: Gravity, drag, anchored springs, custom callables.
    - Force registry: Handle-based (particle, generator) registrations.
    - Arena: Index-stable storage with generation-checked handles.
    - Integrators: Semi-implicit Euler, legacy demo rule, Verlet.
    - Invariants: Kinetic energy and linear momentum.

Typical usage:
    from particle_sim.core import Arena, ForceRegistry, Gravity

    particles, generators = Arena(), Arena()
    registry = ForceRegistry(particles, generators)
    registry.add(particles.insert(p), generators.insert(Gravity((0, -9.81, 0))))
    registry.update_forces(1/60)
"""
from .arena import Arena, Handle
from .forces import ForceGenerator, Gravity, Drag, AnchoredSpring, CustomForce
from .registry import ForceRegistry, Registration
from .integrators import euler_step, legacy_step, verlet_step, get_integrator
from .invariants import kinetic_energy, linear_momentum

__all__ = [
    # Storage
    "Arena",
    "Handle",
    # Forces
    "ForceGenerator",
    "Gravity",
    "Drag",
    "AnchoredSpring",
    "CustomForce",
    # Registry
    "ForceRegistry",
    "Registration",
    # Integrators
    "euler_step",
    "legacy_step",
    "verlet_step",
    "get_integrator",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
]
