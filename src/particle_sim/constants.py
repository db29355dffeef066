# MIT License (see LICENSE)
"""
Default values shared across the simulation.

All quantities are SI. Gravity points along -y, matching a y-up world frame.
Demos that draw in screen space (y down) flip the sign themselves.
"""
from __future__ import annotations

# Fixed frame step used by ParticleWorld when step() is called without dt.
DEFAULT_DT: float = 1 / 60

# Velocity retained per second of simulated time, applied as damping ** dt.
# 1.0 disables damping; values slightly below 1 mop up integration drift.
DEFAULT_DAMPING: float = 0.99

# Standard gravity, https://physics.nist.gov/cgi-bin/cuu/Value?gn
EARTH_GRAVITY: tuple[float, float, float] = (0.0, -9.80665, 0.0)

# Environment variable read by logging_config.setup_logging() when no level is given.
LOG_LEVEL_ENV: str = "PARTICLE_SIM_LOG_LEVEL"
