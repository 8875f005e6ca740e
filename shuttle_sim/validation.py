"""
Shuttle Ascent Simulation - Numerical Guards

This module implements the numeric-fault checks shared by the mass, force
and integration code:
- Finite scalar / vector checks
- Replace-and-log helpers for NaN/Infinity values

A numeric fault is never raised to the caller. It is logged as a warning
and the offending value is replaced by a known-safe one so the simulation
can continue from the recovered state.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


def is_finite_scalar(value: float) -> bool:
    """True if value is a real, finite number."""
    try:
        return bool(np.isfinite(value))
    except TypeError:
        return False


def is_finite_vector(vec: np.ndarray) -> bool:
    """True if every component of vec is finite."""
    return bool(np.all(np.isfinite(vec)))


def finite_or_zero(value: float, label: str) -> float:
    """
    Return value, or 0.0 if it is NaN/Infinity.

    Args:
        value: Magnitude to check
        label: Name used in the fault log

    Returns:
        value as float, or 0.0 on a numeric fault
    """
    if not is_finite_scalar(value):
        logger.warning(f"{label} became NaN/Infinity ({value}). Replacing with zero.")
        return 0.0
    return float(value)


def finite_vector_or_zero(vec: np.ndarray, label: str) -> np.ndarray:
    """Return vec, or a zero vector if any component is NaN/Infinity."""
    if not is_finite_vector(vec):
        logger.warning(f"{label} became NaN/Infinity ({vec}). Replacing with zero vector.")
        return np.zeros(3)
    return vec


def clamp_percent(value: float, label: str = "Fuel percentage") -> float:
    """Clamp a percentage to [0, 100]; a non-finite value becomes 0."""
    if not is_finite_scalar(value):
        logger.warning(f"{label} became NaN/Infinity ({value}). Clamping to 0.")
        return 0.0
    return float(min(100.0, max(0.0, value)))
