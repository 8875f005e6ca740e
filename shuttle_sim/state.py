"""
Shuttle Ascent Simulation - Vehicle State

This module defines the single state dataclass that contains all mutable
simulation state. It is owned and written by the VehicleSimulation
orchestrator only; consumers receive immutable snapshots instead.
"""

import json
import os
from dataclasses import dataclass, field

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .stages import FlightStage


@dataclass
class VehicleState:
    """
    State vector for the shuttle stack.

    Attributes:
        position: Position from the body centre (m) [3]
        velocity: Velocity (m/s) [3]
        acceleration: Acceleration from the last tick (m/s^2) [3]
        net_force: Net force from the last tick (N) [3]
        stage: Current flight stage
        fuel_percent: External tank propellant remaining (0-100 %)
        fuel_tank_attached: External tank still mounted
        booster_a_attached: First solid booster still mounted
        booster_b_attached: Second solid booster still mounted
        boosters_detached: Booster separation latch
        fuel_tank_detached: Tank separation latch
        maneuvering_engines_on: Orbital maneuvering engines commanded on
        time: Simulation time (s)
        body_radius: Radius used for altitude (m)
    """

    position: np.ndarray = field(default_factory=lambda: C.INITIAL_POSITION.copy())
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    net_force: np.ndarray = field(default_factory=lambda: np.zeros(3))

    stage: FlightStage = FlightStage.IDLE
    fuel_percent: float = C.INITIAL_FUEL_PERCENT

    fuel_tank_attached: bool = True
    booster_a_attached: bool = True
    booster_b_attached: bool = True

    boosters_detached: bool = False
    fuel_tank_detached: bool = False

    maneuvering_engines_on: bool = False

    time: float = 0.0
    body_radius: float = C.R_EARTH

    def __post_init__(self):
        """Ensure arrays are numpy arrays with correct dtype."""
        for attr in ['position', 'velocity', 'acceleration', 'net_force']:
            setattr(self, attr, np.array(getattr(self, attr), dtype=np.float64))
        self.fuel_percent = float(self.fuel_percent)
        self.time = float(self.time)

    def copy(self) -> 'VehicleState':
        """Create a deep copy of the state."""
        return VehicleState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            acceleration=self.acceleration.copy(),
            net_force=self.net_force.copy(),
            stage=self.stage,
            fuel_percent=self.fuel_percent,
            fuel_tank_attached=self.fuel_tank_attached,
            booster_a_attached=self.booster_a_attached,
            booster_b_attached=self.booster_b_attached,
            boosters_detached=self.boosters_detached,
            fuel_tank_detached=self.fuel_tank_detached,
            maneuvering_engines_on=self.maneuvering_engines_on,
            time=self.time,
            body_radius=self.body_radius,
        )

    @property
    def altitude(self) -> float:
        """Altitude above the body surface (m)."""
        return float(np.linalg.norm(self.position) - self.body_radius)

    @property
    def speed(self) -> float:
        """Magnitude of velocity (m/s)."""
        return float(np.linalg.norm(self.velocity))

    @property
    def any_booster_attached(self) -> bool:
        return self.booster_a_attached or self.booster_b_attached

    def to_dict(self) -> dict:
        """JSON-ready representation; floats are kept at full precision."""
        return {
            'position': self.position.tolist(),
            'velocity': self.velocity.tolist(),
            'acceleration': self.acceleration.tolist(),
            'net_force': self.net_force.tolist(),
            'stage': self.stage.name,
            'fuel_percent': self.fuel_percent,
            'fuel_tank_attached': self.fuel_tank_attached,
            'booster_a_attached': self.booster_a_attached,
            'booster_b_attached': self.booster_b_attached,
            'boosters_detached': self.boosters_detached,
            'fuel_tank_detached': self.fuel_tank_detached,
            'maneuvering_engines_on': self.maneuvering_engines_on,
            'time': self.time,
            'body_radius': self.body_radius,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VehicleState':
        """
        Rebuild a state from ``to_dict()`` output.

        Raises:
            KeyError: If the stage name is not a FlightStage member
        """
        values = dict(data)
        values['stage'] = FlightStage[values.get('stage', FlightStage.IDLE.name)]
        return cls(**values)

    def __str__(self) -> str:
        """Human-readable state summary."""
        return (
            f"VehicleState(t={self.time:.2f}s, "
            f"stage={self.stage.name}, "
            f"alt={self.altitude/1000:.2f}km, "
            f"v={self.speed:.1f}m/s, "
            f"fuel={self.fuel_percent:.2f}%)"
        )


def create_initial_state(config: SimulationConfig = None) -> VehicleState:
    """
    Create the initial state: resting on the pad, everything attached, full tank.

    Args:
        config: SimulationConfig instance. If None a default is created.

    Returns:
        VehicleState initialized with launch conditions.
    """
    if config is None:
        config = create_default_config()
    return VehicleState(
        position=config.launch_position,
        velocity=np.zeros(3),
        stage=FlightStage.IDLE,
        fuel_percent=C.INITIAL_FUEL_PERCENT,
        time=0.0,
        body_radius=config.body_radius,
    )


def save_state(state: VehicleState, filename: str):
    """Write a state to a JSON file."""
    os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
    with open(filename, 'w') as fh:
        json.dump(state.to_dict(), fh, indent=2)


def load_state(filename: str) -> VehicleState:
    """Read a state written by ``save_state``."""
    with open(filename) as fh:
        return VehicleState.from_dict(json.load(fh))
