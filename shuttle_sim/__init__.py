"""
Shuttle Ascent Simulation Package

A frame-synchronous point-mass simulation of a staged launch vehicle
(orbiter, external tank, two solid boosters) climbing from the surface
into low orbit.

Modules:
    - constants: Physical constants and vehicle parameters
    - config: Frozen simulation configuration
    - stages: Flight stage enumeration
    - state: Vehicle state dataclass and serialization
    - atmosphere: Exponential air density model
    - mass: Mass model and fuel consumption
    - forces: Force computations (gravity, ground reaction, drag, thrust)
    - integrators: Semi-implicit Euler step with stability guards
    - stage_machine: Flight stage transitions
    - detachment: Booster and tank separation
    - commands: External command queue
    - simulation: Per-tick orchestrator and snapshots
    - main: Headless batch runner
"""

from .config import ConfigurationError, SimulationConfig, create_default_config, create_test_config
from .detachment import Component, DetachmentEvent, Separation
from .main import SimulationLog, run_simulation
from .simulation import VehicleSimulation, VehicleSnapshot
from .stages import FlightStage
from .state import VehicleState, create_initial_state, load_state, save_state

__version__ = "1.0.0"
__author__ = "Shuttle Simulation Team"

__all__ = [
    'ConfigurationError',
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
    'Component',
    'DetachmentEvent',
    'Separation',
    'SimulationLog',
    'run_simulation',
    'VehicleSimulation',
    'VehicleSnapshot',
    'FlightStage',
    'VehicleState',
    'create_initial_state',
    'load_state',
    'save_state',
]
