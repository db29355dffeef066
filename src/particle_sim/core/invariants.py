# MIT License (see LICENSE)
"""
Conserved quantities for checking integrator behaviour.

With no damping, drag or external forces, total kinetic energy and linear
momentum should stay constant from step to step. Infinite-mass particles
carry no finite energy or momentum and are skipped.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..particle import Particle


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total translational kinetic energy.

    T = Σ ½·m·|v|²

    Returns:
        Energy in Joules.
    """
    ke = 0.0
    for p in particles:
        if not p.has_finite_mass():
            continue
        ke += 0.5 * p.mass * p.velocity.square_magnitude()
    return ke


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Total linear momentum P = Σ m·v.

    Returns:
        Momentum vector [Px, Py, Pz] in kg·m/s.
    """
    p_total = np.zeros(3, dtype=np.float64)
    for p in particles:
        if not p.has_finite_mass():
            continue
        p_total += p.mass * p.velocity.to_array()
    return p_total
