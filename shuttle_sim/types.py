"""
Shuttle Ascent Simulation - Type Definitions

This module provides TypedDict definitions for structured return types,
improving type safety and IDE support.
"""

from typing import List, TypedDict

import numpy as np
from numpy.typing import NDArray


class ForceBreakdown(TypedDict):
    """Return type for force computation details (body-centred frame)."""
    gravity: NDArray[np.float64]  # Gravity force vector (N)
    normal: NDArray[np.float64]  # Ground reaction force vector (N)
    drag: NDArray[np.float64]  # Drag force vector (N)
    thrust: NDArray[np.float64]  # Thrust force vector (N)
    total: NDArray[np.float64]  # Net force vector (N)
    gravity_magnitude: float  # Gravity force magnitude (N)
    normal_magnitude: float  # Ground reaction magnitude (N)
    drag_magnitude: float  # Drag force magnitude (N)
    thrust_magnitude: float  # Thrust force magnitude (N)
    mass: float  # Total mass used for the forces (kg)
    air_density: float  # Density at the start-of-step altitude (kg/m^3)


class SnapshotDict(TypedDict):
    """Return type for VehicleSnapshot.to_dict()."""
    time: float  # Simulation time (s)
    position: List[float]  # Body-centred position (m)
    velocity: List[float]  # Velocity (m/s)
    acceleration: List[float]  # Acceleration (m/s^2)
    altitude: float  # Altitude above surface (m)
    speed: float  # Speed (m/s)
    stage: str  # FlightStage name
    stage_label: str  # Human-readable stage label
    fuel_percent: float  # External tank fuel (%)
    total_mass: float  # Stack mass (kg)
    thrust_magnitude: float  # Thrust this tick (N)
    fuel_tank_attached: bool
    booster_a_attached: bool
    booster_b_attached: bool
    events: List[dict]  # Detachment events fired this tick
