# MIT License (see LICENSE)
"""
Small numeric helpers used at the public API boundary.
"""
from __future__ import annotations
import logging
import os

import numpy as np

from .constants import LOG_LEVEL_ENV


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples, lists or arrays wherever a vector is expected.
    """
    return np.array(x, dtype=np.float64)


def env_log_level(default: int = logging.INFO) -> int:
    """
    Log level named by the PARTICLE_SIM_LOG_LEVEL environment variable.

    Accepts level names ("DEBUG") or numbers ("10"); anything else falls
    back to default.
    """
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default
