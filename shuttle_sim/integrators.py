"""
Shuttle Ascent Simulation - Numerical Integration

This module implements the semi-implicit Euler integrator used once per
frame, together with the stability guards around it:
- time-step clamping to a stability ceiling
- holding the vehicle on the pad while it rests
- snapping a flying vehicle back above the surface
- NaN/Infinity recovery for position, velocity and acceleration
"""

import logging

import numpy as np

from .config import SimulationConfig, create_default_config
from .forces import compute_forces, is_resting
from .mass import consume_fuel
from .stages import FlightStage
from .state import VehicleState
from .types import ForceBreakdown
from .validation import clamp_percent, is_finite_scalar, is_finite_vector

logger = logging.getLogger(__name__)


def clamp_time_step(dt: float, config: SimulationConfig = None) -> float:
    """
    Clamp a frame time increment to the stability ceiling.

    Returns:
        dt limited to ``config.max_time_step``; 0.0 when dt is not positive
        or not finite (the step is then a no-op).
    """
    if config is None:
        config = create_default_config()

    if not is_finite_scalar(dt) or dt <= 0.0:
        return 0.0
    if dt > config.max_time_step:
        logger.debug(f"dt capped from {dt:.4f}s to {config.max_time_step:.4f}s for stability.")
        return config.max_time_step
    return float(dt)


def hold_on_pad(state: VehicleState, config: SimulationConfig = None) -> VehicleState:
    """Pin a resting vehicle to the surface with zero velocity and acceleration."""
    if config is None:
        config = create_default_config()
    if not is_resting(state):
        return state

    new_state = state.copy()
    new_state.position = _surface_point(state.position, config)
    new_state.velocity = np.zeros(3)
    new_state.acceleration = np.zeros(3)
    return new_state


def repair_fuel(state: VehicleState) -> VehicleState:
    """Clamp a NaN/Infinity or out-of-range fuel percentage before it reaches the mass model."""
    fuel = state.fuel_percent
    if is_finite_scalar(fuel) and 0.0 <= fuel <= 100.0:
        return state
    new_state = state.copy()
    new_state.fuel_percent = clamp_percent(fuel)
    return new_state


def _surface_point(position: np.ndarray, config: SimulationConfig) -> np.ndarray:
    """Project a position radially onto the body surface."""
    distance = float(np.linalg.norm(position))
    if not np.isfinite(distance) or distance < config.min_gravity_distance:
        return config.launch_position
    return position * (config.body_radius / distance)


def euler_step(state: VehicleState, forces: ForceBreakdown, dt: float) -> VehicleState:
    """
    Perform a single semi-implicit Euler integration step.

        a = F / m
        v_new = v + a * dt
        r_new = r + v_new * dt

    Args:
        state: Current state
        forces: Force breakdown for the current state
        dt: Time step (s), already clamped

    Returns:
        New state after integration (time is not advanced here)
    """
    new_state = state.copy()
    new_state.net_force = np.array(forces['total'], dtype=np.float64)

    m = forces['mass']
    if m > 0.0 and is_finite_scalar(m):
        new_state.acceleration = new_state.net_force / m
    else:
        logger.error(f"Invalid mass detected ({m}), acceleration set to zero.")
        new_state.acceleration = np.zeros(3)

    new_state.velocity = state.velocity + new_state.acceleration * dt
    new_state.position = state.position + new_state.velocity * dt
    return new_state


def apply_ground_clamp(state: VehicleState, config: SimulationConfig = None) -> VehicleState:
    """
    Snap a flying vehicle that penetrated the surface back onto it.

    A recovery clamp, not a collision response: the position is projected
    to the surface and any inward velocity/acceleration component removed.
    """
    if config is None:
        config = create_default_config()

    if state.stage is FlightStage.IDLE:
        return state
    altitude = state.altitude
    if not altitude < config.ground_tolerance:
        return state

    logger.warning(f"Vehicle significantly below ground ({altitude:.2f}m) "
                   f"during {state.stage.name}! Snapping back.")
    new_state = state.copy()
    new_state.position = _surface_point(state.position, config)
    up = new_state.position / np.linalg.norm(new_state.position)

    v_up = float(np.dot(new_state.velocity, up))
    if v_up < 0.0:
        new_state.velocity = new_state.velocity - v_up * up
    a_up = float(np.dot(new_state.acceleration, up))
    if a_up < 0.0:
        new_state.acceleration = new_state.acceleration - a_up * up
    return new_state


def recover_non_finite(state: VehicleState, config: SimulationConfig = None) -> VehicleState:
    """
    Reset any kinematic vector that became NaN/Infinity.

    Position resets to the launch position, velocity and acceleration to
    zero. Each fault is logged.
    """
    if config is None:
        config = create_default_config()

    new_state = state
    if not is_finite_vector(new_state.position):
        logger.error("Position became NaN/Infinity. Resetting to initial ground position.")
        new_state = new_state.copy()
        new_state.position = config.launch_position
        new_state.velocity = np.zeros(3)
        new_state.acceleration = np.zeros(3)

    if not is_finite_vector(new_state.velocity):
        logger.error("Velocity became NaN/Infinity. Resetting to zero.")
        new_state = new_state.copy()
        new_state.velocity = np.zeros(3)
        new_state.acceleration = np.zeros(3)

    if not is_finite_vector(new_state.acceleration):
        logger.error("Acceleration became NaN/Infinity. Resetting to zero.")
        new_state = new_state.copy()
        new_state.acceleration = np.zeros(3)

    return new_state


def integrate(state: VehicleState, dt: float,
              config: SimulationConfig = None) -> tuple:
    """
    Advance the state by one frame.

    Execution order:
        1. Clamp dt (no-op for dt <= 0)
        2. Repair the fuel percentage and hold on pad while resting
        3. Compute forces for the current state and stage
        4. Semi-implicit Euler step
        5. Ground clamp and NaN/Infinity recovery
        6. Fuel consumption
        7. Advance simulation time

    Args:
        state: Current state (not modified)
        dt: Requested time increment (s)
        config: SimulationConfig instance. If None a default is created.

    Returns:
        (new_state, forces, dt_used) tuple. forces is None when the step
        was a no-op.
    """
    if config is None:
        config = create_default_config()

    dt_used = clamp_time_step(dt, config)
    if dt_used <= 0.0:
        return state, None, 0.0

    current = hold_on_pad(repair_fuel(state), config)
    forces = compute_forces(current, config)

    new_state = euler_step(current, forces, dt_used)
    new_state = apply_ground_clamp(new_state, config)
    new_state = recover_non_finite(new_state, config)

    consume_fuel(new_state, forces['thrust'], dt_used, config)
    new_state.time = current.time + dt_used
    return new_state, forces, dt_used
