"""
Shuttle Ascent Simulation - Mass and propellant computations.
"""

import logging

import numpy as np

from .config import SimulationConfig, create_default_config
from .stages import ACTIVE_BURN_STAGES
from .state import VehicleState
from .validation import clamp_percent, is_finite_scalar

logger = logging.getLogger(__name__)


def compute_total_mass(state: VehicleState, config: SimulationConfig = None) -> float:
    """
    Total instantaneous mass of the stack (kg).

    m = m_dry + m_tank * fuel/100 (tank attached)
          + m_booster_a (attached) + m_booster_b (attached)

    An invalid result (NaN, Infinity, <= 0) is replaced by
    ``config.mass_fallback`` so it never reaches the force/acceleration math.
    """
    if config is None:
        config = create_default_config()

    total = config.dry_mass
    if state.fuel_tank_attached:
        total += config.fuel_tank_mass * (state.fuel_percent / 100.0)
    if state.booster_a_attached:
        total += config.booster_a_mass
    if state.booster_b_attached:
        total += config.booster_b_mass

    if not is_finite_scalar(total):
        logger.error(f"Calculated total mass became {total}! Returning fallback mass.")
        return config.mass_fallback
    if total <= 0.0:
        logger.warning(f"Calculated total mass is zero or negative ({total}). "
                       f"Clamping to {config.mass_fallback} kg.")
        return config.mass_fallback
    return float(total)


def propellant_remaining(state: VehicleState, config: SimulationConfig = None) -> float:
    """Propellant mass left in the external tank (kg)."""
    if config is None:
        config = create_default_config()
    if not state.fuel_tank_attached:
        return 0.0
    return max(0.0, config.fuel_tank_mass * state.fuel_percent / 100.0)


def is_propellant_exhausted(state: VehicleState) -> bool:
    """True if the external tank is empty."""
    return state.fuel_percent <= 0.0


def compute_fuel_consumed(state: VehicleState, thrust: np.ndarray, dt: float,
                          config: SimulationConfig = None) -> float:
    """
    Percentage of tank capacity burned during one step.

    Propellant burns at ``config.fuel_burn_rate`` only while fuel remains,
    thrust is non-negligible, the stage is an active-burn stage and thrust
    points up the ascent axis. The burn is capped at the propellant left.
    """
    if config is None:
        config = create_default_config()

    if state.fuel_percent <= 0.0 or dt <= 0.0:
        return 0.0
    if float(np.dot(thrust, thrust)) <= config.thrust_epsilon:
        return 0.0
    if state.stage not in ACTIVE_BURN_STAGES:
        return 0.0
    if float(np.dot(thrust, config.axis)) <= 0.0:
        return 0.0

    fuel_mass_in_tank = config.fuel_tank_mass * (state.fuel_percent / 100.0)
    burned = min(config.fuel_burn_rate * dt, fuel_mass_in_tank)
    return burned / config.fuel_tank_mass * 100.0


def consume_fuel(state: VehicleState, thrust: np.ndarray, dt: float,
                 config: SimulationConfig = None) -> float:
    """
    Decrement ``state.fuel_percent`` for one step, clamped to [0, 100].

    Returns:
        The new fuel percentage.
    """
    consumed = compute_fuel_consumed(state, thrust, dt, config)
    if consumed > 0.0:
        state.fuel_percent = clamp_percent(state.fuel_percent - consumed)
    elif not is_finite_scalar(state.fuel_percent):
        state.fuel_percent = clamp_percent(state.fuel_percent)
    return state.fuel_percent
