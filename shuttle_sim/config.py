"""
Shuttle Ascent Simulation - Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing different simulation parameters to be passed without modifying
global constants.

Every field defaults to the canonical value in ``constants``. Invalid
configurations are rejected at construction time with ConfigurationError,
since they cannot be recovered safely once the simulation is running.
"""

import math
from dataclasses import dataclass, fields
from typing import Tuple

import numpy as np

from . import constants as C


class ConfigurationError(ValueError):
    """Raised when a SimulationConfig cannot produce a stable simulation."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for simulation parameters.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Planetary body
      2. Atmosphere
      3. Vehicle mass
      4. Aerodynamics
      5. Propulsion
      6. Orbit targets
      7. Staging thresholds
      8. Numerical stability
      9. Misc
    """

    # ── 1. Planetary body ────────────────────────────────────────────────
    body_radius: float = C.R_EARTH
    body_mass: float = C.M_EARTH
    gravitational_constant: float = C.G_CONST
    standard_gravity: float = C.G0

    # ── 2. Atmosphere ────────────────────────────────────────────────────
    atmosphere_height: float = C.ATMOSPHERE_HEIGHT
    sea_level_density: float = C.RHO_0
    density_decay_rate: float = C.DENSITY_DECAY_RATE

    # ── 3. Vehicle mass ──────────────────────────────────────────────────
    dry_mass: float = C.ORBITER_DRY_MASS
    fuel_tank_mass: float = C.FUEL_TANK_MASS
    booster_a_mass: float = C.BOOSTER_MASS
    booster_b_mass: float = C.BOOSTER_MASS

    # ── 4. Aerodynamics ──────────────────────────────────────────────────
    drag_coefficient: float = C.DRAG_COEFFICIENT
    reference_area: float = C.REFERENCE_AREA

    # ── 5. Propulsion ────────────────────────────────────────────────────
    main_engine_thrust: float = C.THRUST_MAIN_ENGINES
    booster_a_thrust: float = C.BOOSTER_THRUST
    booster_b_thrust: float = C.BOOSTER_THRUST
    fuel_burn_rate: float = C.FUEL_BURN_RATE
    orbital_insertion_throttle: float = C.ORBITAL_INSERTION_THROTTLE
    orbital_maneuvering_throttle: float = C.ORBITAL_MANEUVERING_THROTTLE

    # ── 6. Orbit targets ─────────────────────────────────────────────────
    leo_altitude: float = C.LEO_ALTITUDE
    leo_velocity: float = C.LEO_VELOCITY
    leo_velocity_tolerance: float = C.LEO_VELOCITY_TOLERANCE
    leo_altitude_band: float = C.LEO_ALTITUDE_BAND
    free_motion_speed_fraction: float = C.FREE_MOTION_SPEED_FRACTION

    # ── 7. Staging thresholds ────────────────────────────────────────────
    auto_launch_time: float = C.AUTO_LAUNCH_TIME
    booster_detach_time: float = C.BOOSTER_DETACH_TIME
    booster_detach_altitude: float = C.BOOSTER_DETACH_ALTITUDE
    fuel_tank_detach_time: float = C.FUEL_TANK_DETACH_TIME
    fuel_tank_detach_altitude: float = C.FUEL_TANK_DETACH_ALTITUDE
    fuel_tank_detach_fuel_percent: float = C.FUEL_TANK_DETACH_FUEL_PERCENT
    fuel_tank_detach_speed_fraction: float = C.FUEL_TANK_DETACH_SPEED_FRACTION

    # ── 8. Numerical stability ───────────────────────────────────────────
    max_time_step: float = C.MAX_TIME_STEP
    ground_tolerance: float = C.GROUND_TOLERANCE
    thrust_epsilon: float = C.THRUST_EPSILON
    mass_fallback: float = C.MASS_FALLBACK
    min_gravity_distance: float = C.MIN_GRAVITY_DISTANCE

    # ── 9. Misc ──────────────────────────────────────────────────────────
    ascent_axis: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    verbose: bool = True

    def __post_init__(self):
        """Reject configurations that would fail or divide by zero mid-run."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, float) and not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite, got {value}")

        positive = (
            'body_radius', 'body_mass', 'gravitational_constant',
            'atmosphere_height', 'fuel_tank_mass', 'max_time_step',
            'mass_fallback', 'min_gravity_distance',
        )
        for name in positive:
            if getattr(self, name) <= 0.0:
                raise ConfigurationError(
                    f"{name} must be positive, got {getattr(self, name)}"
                )

        non_negative = (
            'standard_gravity', 'sea_level_density', 'density_decay_rate',
            'dry_mass', 'booster_a_mass', 'booster_b_mass',
            'drag_coefficient', 'reference_area',
            'main_engine_thrust', 'booster_a_thrust', 'booster_b_thrust',
            'fuel_burn_rate', 'orbital_insertion_throttle',
            'orbital_maneuvering_throttle', 'leo_altitude', 'leo_velocity',
            'leo_velocity_tolerance', 'leo_altitude_band',
            'auto_launch_time', 'booster_detach_time',
            'booster_detach_altitude', 'fuel_tank_detach_time',
            'fuel_tank_detach_altitude', 'thrust_epsilon',
        )
        for name in non_negative:
            if getattr(self, name) < 0.0:
                raise ConfigurationError(
                    f"{name} must be non-negative, got {getattr(self, name)}"
                )

        if not 0.0 <= self.fuel_tank_detach_fuel_percent <= 100.0:
            raise ConfigurationError(
                "fuel_tank_detach_fuel_percent must lie in [0, 100], "
                f"got {self.fuel_tank_detach_fuel_percent}"
            )

        axis = np.asarray(self.ascent_axis, dtype=np.float64)
        if axis.shape != (3,) or not np.all(np.isfinite(axis)):
            raise ConfigurationError(f"ascent_axis must be a finite 3-vector, got {self.ascent_axis}")
        if np.linalg.norm(axis) < 1e-12:
            raise ConfigurationError("ascent_axis must have non-zero length")

    @property
    def axis(self) -> np.ndarray:
        """Unit vector along the ascent (thrust) axis."""
        axis = np.asarray(self.ascent_axis, dtype=np.float64)
        return axis / np.linalg.norm(axis)

    @property
    def launch_position(self) -> np.ndarray:
        """Launch pad position on the surface along the ascent axis (m)."""
        return self.body_radius * self.axis

    @property
    def gravitational_parameter(self) -> float:
        """mu = G * M of the planetary body (m^3/s^2)."""
        return self.gravitational_constant * self.body_mass


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(**overrides) -> SimulationConfig:
    """Create a quiet config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)


def print_config(config: SimulationConfig = None):
    """Print configuration summary."""
    if config is None:
        config = create_default_config()

    liftoff_mass = (config.dry_mass + config.fuel_tank_mass
                    + config.booster_a_mass + config.booster_b_mass)
    liftoff_thrust = (config.main_engine_thrust
                      + config.booster_a_thrust + config.booster_b_thrust)
    weight = liftoff_mass * config.standard_gravity
    twr = liftoff_thrust / weight if weight > 0.0 else float('inf')

    print("=" * 60)
    print("Shuttle Ascent Configuration")
    print("=" * 60)
    print(f"Liftoff mass: {liftoff_mass:,.0f} kg")
    print(f"Orbiter dry mass: {config.dry_mass:,.0f} kg")
    print(f"External tank: {config.fuel_tank_mass:,.0f} kg")
    print(f"Boosters: {config.booster_a_mass:,.0f} + {config.booster_b_mass:,.0f} kg")
    print(f"Main engine thrust: {config.main_engine_thrust/1e6:.2f} MN")
    print(f"Booster thrust: {config.booster_a_thrust/1e6:.2f} + {config.booster_b_thrust/1e6:.2f} MN")
    print(f"Liftoff thrust-to-weight: {twr:.2f} (g0 = {config.standard_gravity} m/s^2)")
    print(f"Fuel burn rate: {config.fuel_burn_rate:.0f} kg/s")
    print(f"Target LEO: {config.leo_altitude/1000:.0f} km @ {config.leo_velocity:.0f} m/s")
    print("=" * 60)
