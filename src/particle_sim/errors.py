# MIT License (see LICENSE)
"""
Exception hierarchy for the particle core.

Each error also derives from the closest builtin so callers can catch
either the package type or the familiar builtin (ZeroDivisionError,
ValueError, LookupError).
"""
from __future__ import annotations


class ParticleSimError(Exception):
    """Base class for all particle_sim errors."""


class InvalidOperation(ParticleSimError, ZeroDivisionError):
    """Arithmetic that would produce inf/NaN, e.g. dividing a vector by zero."""


class InvalidMass(ParticleSimError, ValueError):
    """A zero or negative mass was given to the finite-mass setter."""


class NotFound(ParticleSimError, LookupError):
    """A registration, particle or generator lookup matched nothing."""


class StaleHandle(NotFound):
    """A handle refers to an arena slot that was freed or reused."""
