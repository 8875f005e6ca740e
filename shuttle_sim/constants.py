"""
Shuttle Ascent Simulation - Physical Constants and Vehicle Parameters

This module defines the canonical set of physical constants, atmosphere
parameters, vehicle specifications and staging thresholds used throughout
the simulation. Every value here is exposed as a field of
``SimulationConfig`` so callers can override it without touching globals.

VALUES FROM: Space Shuttle stack (Orbiter + External Tank + 2 SRBs)
"""

import numpy as np

# =============================================================================
# PLANETARY BODY PARAMETERS
# =============================================================================

# Earth mean radius (m)
R_EARTH = 6.371e6

# Earth mass (kg)
M_EARTH = 5.972e24

# Gravitational constant (m^3/(kg·s^2))
G_CONST = 6.67430e-11

# Standard gravitational acceleration at sea level (m/s^2)
G0 = 9.81

# =============================================================================
# ATMOSPHERE (exponential model)
# =============================================================================

ATMOSPHERE_HEIGHT = 100000.0  # Top of the modelled atmosphere (m)
RHO_0 = 1.225  # Sea level density (kg/m^3)
H_SCALE = 8500.0  # Scale height (m)
DENSITY_DECAY_RATE = 1.0 / H_SCALE  # per metre

# =============================================================================
# VEHICLE PARAMETERS - SHUTTLE STACK
# =============================================================================

# Orbiter dry mass (kg)
ORBITER_DRY_MASS = 110000.0

# External tank initial total mass, including propellant (kg)
FUEL_TANK_MASS = 760000.0

# Solid rocket booster initial total mass, each (kg)
BOOSTER_MASS = 590000.0

# Stack at liftoff: 110 t + 760 t + 2 x 590 t = 2,050 t
INITIAL_MASS = ORBITER_DRY_MASS + FUEL_TANK_MASS + 2.0 * BOOSTER_MASS

# Aerodynamics
DRAG_COEFFICIENT = 0.2
REFERENCE_AREA = 200.0  # Largest cross-section during ascent (m^2)

# Propulsion
# Three main engines at ~1.75 MN each
THRUST_MAIN_ENGINES = 3.0 * 1.75e6  # 5.25 MN
# Two solid boosters at ~14.7 MN each
THRUST_SOLID_BOOSTERS = 2.0 * 14.7e6  # 29.4 MN combined
BOOSTER_THRUST = THRUST_SOLID_BOOSTERS / 2.0  # per booster

# Main engine propellant consumption from the external tank (kg/s)
FUEL_BURN_RATE = 460.0

# Stage thrust multipliers applied to the main engines
ORBITAL_INSERTION_THROTTLE = 0.5
ORBITAL_MANEUVERING_THROTTLE = 0.001

# =============================================================================
# ORBIT TARGETS
# =============================================================================

LEO_ALTITUDE = 200000.0  # m
LEO_VELOCITY = 7800.0  # m/s
LEO_VELOCITY_TOLERANCE = 50.0  # m/s
LEO_ALTITUDE_BAND = 10000.0  # +/- m around LEO_ALTITUDE
FREE_MOTION_SPEED_FRACTION = 0.9  # of LEO_VELOCITY

# =============================================================================
# STAGING THRESHOLDS
# =============================================================================

# Automatic liftoff if no launch command has arrived (s)
AUTO_LAUNCH_TIME = 30.0

# Solid rocket booster separation
BOOSTER_DETACH_TIME = 120.0  # s after simulation start
BOOSTER_DETACH_ALTITUDE = 45000.0  # m

# External tank separation
FUEL_TANK_DETACH_TIME = 510.0  # s after simulation start
FUEL_TANK_DETACH_ALTITUDE = 110000.0  # m
FUEL_TANK_DETACH_FUEL_PERCENT = 5.0  # % remaining at separation
FUEL_TANK_DETACH_SPEED_FRACTION = 0.95  # of LEO_VELOCITY

# =============================================================================
# NUMERICAL STABILITY
# =============================================================================

# Largest integration step accepted per tick (s), ~1/60 s scaled
MAX_TIME_STEP = 0.0266

# Altitude below which a flying vehicle is snapped back to the surface (m)
GROUND_TOLERANCE = -1.0

# Squared-magnitude threshold below which thrust / acceleration is "off"
THRUST_EPSILON = 0.1

# Mass reported when the mass model produces an invalid value (kg)
MASS_FALLBACK = 1.0

# Minimum body-centre distance for the gravity model (m)
MIN_GRAVITY_DISTANCE = 1.0

# =============================================================================
# INITIAL CONDITIONS
# =============================================================================

# Ascent (thrust) axis; the launch site sits on the surface along it
ASCENT_AXIS = np.array([0.0, 1.0, 0.0])

INITIAL_POSITION = R_EARTH * ASCENT_AXIS
INITIAL_VELOCITY = np.zeros(3)
INITIAL_FUEL_PERCENT = 100.0

