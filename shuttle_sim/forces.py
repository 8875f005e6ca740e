"""
Shuttle Ascent Simulation - Force Computations

This module implements all force calculations:
- Central gravity
- Ground reaction (normal) force while resting on the pad
- Atmospheric drag
- Stage-dependent thrust along the ascent axis

Every function is a pure function of the vehicle state (including its
stage) and the configuration. A NaN/Infinity magnitude is replaced by zero
and logged; it never halts the simulation.
"""

import logging

import numpy as np

from .atmosphere import compute_air_density
from .config import SimulationConfig, create_default_config
from .mass import compute_total_mass
from .stages import FlightStage
from .state import VehicleState
from .types import ForceBreakdown
from .validation import finite_or_zero, finite_vector_or_zero

logger = logging.getLogger(__name__)


# =============================================================================
# FORCE MODELS
# =============================================================================

def compute_gravity_force(position: np.ndarray, m: float,
                          config: SimulationConfig = None) -> np.ndarray:
    """
    Compute central gravitational force.

        F = -G * M * m * r_hat / ||r||^2

    Args:
        position: Position from the body centre (m)
        m: Vehicle mass (kg)
        config: SimulationConfig instance. If None a default is created.

    Returns:
        Gravitational force vector (N). Zero if the distance is degenerate
        (below ``config.min_gravity_distance`` or non-finite).
    """
    if config is None:
        config = create_default_config()

    distance = float(np.linalg.norm(position))
    if not np.isfinite(distance) or distance < config.min_gravity_distance:
        logger.warning(f"Invalid distance for gravity calculation ({distance}). Returning zero force.")
        return np.zeros(3)

    magnitude = finite_or_zero(
        config.gravitational_parameter * m / (distance * distance),
        "Gravity magnitude",
    )
    return -magnitude * (position / distance)


def is_resting(state: VehicleState) -> bool:
    """True while the vehicle sits on the pad (idle and not above the surface)."""
    return state.stage is FlightStage.IDLE and state.altitude <= 0.0


def compute_normal_force(state: VehicleState, gravity: np.ndarray) -> np.ndarray:
    """
    Ground reaction force.

    Applied only while resting; it is the exact negation of the gravity
    vector so the net force on a resting vehicle is zero.
    """
    if not is_resting(state):
        return np.zeros(3)
    return -gravity


def compute_drag_force(velocity: np.ndarray, altitude: float,
                       config: SimulationConfig = None) -> np.ndarray:
    """
    Compute atmospheric drag force.

        F_drag = -0.5 * rho(h) * Cd * A * ||v||^2 * v_hat

    Zero above the atmosphere, at zero speed, and on any non-finite
    intermediate value.
    """
    if config is None:
        config = create_default_config()

    if altitude > config.atmosphere_height:
        return np.zeros(3)

    rho = compute_air_density(altitude, config)
    speed_sq = float(np.dot(velocity, velocity))
    if speed_sq == 0.0 or not np.isfinite(speed_sq):
        return np.zeros(3)

    magnitude = finite_or_zero(
        0.5 * rho * config.drag_coefficient * config.reference_area * speed_sq,
        "Drag magnitude",
    )
    if magnitude == 0.0:
        return np.zeros(3)
    return -magnitude * (velocity / np.sqrt(speed_sq))


def drag_applies(state: VehicleState, config: SimulationConfig) -> bool:
    """Drag acts only on a flying vehicle inside the atmosphere."""
    altitude = state.altitude
    return (state.stage is not FlightStage.IDLE
            and 0.0 < altitude < config.atmosphere_height)


def compute_maneuvering_thrust_magnitude(state: VehicleState,
                                         config: SimulationConfig = None) -> float:
    """Thrust the orbital maneuvering engines deliver when commanded (N)."""
    if config is None:
        config = create_default_config()
    if not state.maneuvering_engines_on:
        return 0.0
    return config.main_engine_thrust * config.orbital_maneuvering_throttle


def compute_thrust_magnitude(state: VehicleState, config: SimulationConfig = None) -> float:
    """
    Thrust magnitude for the current stage and attachment/fuel state (N).

    | Stage                 | Thrust                                            |
    |-----------------------|---------------------------------------------------|
    | IDLE                  | 0                                                 |
    | LIFTOFF               | main (fuel > 0) + each attached booster           |
    | ATMOSPHERIC_ASCENT    | main (fuel > 0)                                   |
    | ORBITAL_INSERTION     | main * 0.5 (fuel > 0)                             |
    | ORBITAL_STABILIZATION | 0                                                 |
    | FREE_MOTION           | 0                                                 |
    | ORBITAL_MANEUVERING   | main * 0.001 (maneuvering engines on)             |
    """
    if config is None:
        config = create_default_config()

    stage = state.stage
    has_fuel = state.fuel_percent > 0.0
    thrust = 0.0

    if stage is FlightStage.LIFTOFF:
        if has_fuel:
            thrust += config.main_engine_thrust
        if state.booster_a_attached:
            thrust += config.booster_a_thrust
        if state.booster_b_attached:
            thrust += config.booster_b_thrust
    elif stage is FlightStage.ATMOSPHERIC_ASCENT:
        if has_fuel:
            thrust += config.main_engine_thrust
    elif stage is FlightStage.ORBITAL_INSERTION:
        if has_fuel:
            thrust += config.main_engine_thrust * config.orbital_insertion_throttle
    elif stage is FlightStage.ORBITAL_MANEUVERING:
        thrust += compute_maneuvering_thrust_magnitude(state, config)

    return finite_or_zero(thrust, "Thrust magnitude")


def compute_thrust_force(state: VehicleState, config: SimulationConfig = None) -> np.ndarray:
    """Thrust vector along the ascent axis (N)."""
    if config is None:
        config = create_default_config()
    return compute_thrust_magnitude(state, config) * config.axis


def compute_forces(state: VehicleState, config: SimulationConfig = None) -> ForceBreakdown:
    """
    Compute all forces for the current state and stage.

    F_total = F_grav + F_normal + F_drag + F_thrust

    Ground reaction and drag are mutually exclusive: the former only while
    resting on the pad, the latter only while flying inside the atmosphere.
    """
    if config is None:
        config = create_default_config()

    m = compute_total_mass(state, config)
    altitude = state.altitude

    F_grav = compute_gravity_force(state.position, m, config)
    F_normal = compute_normal_force(state, F_grav)

    if drag_applies(state, config):
        F_drag = compute_drag_force(state.velocity, altitude, config)
        rho = compute_air_density(altitude, config)
    else:
        F_drag = np.zeros(3)
        rho = 0.0

    F_thrust = compute_thrust_force(state, config)
    F_total = finite_vector_or_zero(F_grav + F_normal + F_drag + F_thrust, "Net force")

    return {
        'gravity': F_grav,
        'normal': F_normal,
        'drag': F_drag,
        'thrust': F_thrust,
        'total': F_total,
        'gravity_magnitude': float(np.linalg.norm(F_grav)),
        'normal_magnitude': float(np.linalg.norm(F_normal)),
        'drag_magnitude': float(np.linalg.norm(F_drag)),
        'thrust_magnitude': float(np.linalg.norm(F_thrust)),
        'mass': m,
        'air_density': rho,
    }
