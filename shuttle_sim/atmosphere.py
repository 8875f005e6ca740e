"""
Shuttle Ascent Simulation - Atmosphere Model

A simplified exponential atmosphere:

    rho(h) = rho_0 * exp(-h * k)

with k the inverse scale height. Density is zero above the configured top
of the atmosphere. For higher fidelity a layered model (US-76) would be
used instead; the exponential model is enough for a point-mass ascent.
"""

import logging

import numpy as np

from .config import SimulationConfig, create_default_config

logger = logging.getLogger(__name__)


def compute_air_density(altitude: float, config: SimulationConfig = None) -> float:
    """
    Air density at a given altitude.

    Args:
        altitude: Altitude above sea level (m). Negative values are
            treated as sea level.
        config: SimulationConfig instance. If None a default is created.

    Returns:
        Density (kg/m^3), always finite and non-negative. Zero above
        ``config.atmosphere_height``.
    """
    if config is None:
        config = create_default_config()

    h = float(altitude)
    if np.isnan(h):
        logger.warning("Altitude for density is NaN. Returning zero density.")
        return 0.0
    if h < 0.0:
        h = 0.0
    if h > config.atmosphere_height:
        return 0.0

    density = config.sea_level_density * np.exp(-h * config.density_decay_rate)

    if not np.isfinite(density) or density < 0.0:
        logger.warning(f"Calculated air density is invalid ({density}). Clamping to 0.")
        return 0.0
    return float(density)
