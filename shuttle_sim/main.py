"""
Shuttle Ascent Simulation - Batch Runner

This module drives a VehicleSimulation headlessly with:
- Fixed frame time step
- Launch command at a chosen time (or auto-launch)
- Data logging per tick
- Logging framework for diagnostics

Coordinate Frame:
- Position/Velocity: body-centred, launch pad on the ascent axis
"""

import csv
import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import SimulationConfig, create_default_config
from .detachment import DetachmentEvent
from .simulation import VehicleSimulation, VehicleSnapshot

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_FRAME_DT = 1.0 / 60.0
DEFAULT_DURATION = 130.0


@dataclass
class SimulationLog:
    """Container for logged simulation data."""
    time: List[float] = field(default_factory=list)
    altitude: List[float] = field(default_factory=list)
    velocity: List[float] = field(default_factory=list)
    vertical_velocity: List[float] = field(default_factory=list)
    acceleration: List[float] = field(default_factory=list)
    mass: List[float] = field(default_factory=list)
    fuel_percent: List[float] = field(default_factory=list)
    thrust: List[float] = field(default_factory=list)
    drag: List[float] = field(default_factory=list)
    position_x: List[float] = field(default_factory=list)
    position_y: List[float] = field(default_factory=list)
    position_z: List[float] = field(default_factory=list)
    stage_name: List[str] = field(default_factory=list)

    def append(self, snapshot: VehicleSnapshot):
        """Log data from current timestep."""
        self.time.append(snapshot.time)
        self.altitude.append(snapshot.altitude / 1000)  # km
        self.velocity.append(snapshot.speed)
        self.vertical_velocity.append(snapshot.vertical_velocity)
        self.acceleration.append(float(np.linalg.norm(snapshot.acceleration)))
        self.mass.append(snapshot.total_mass)
        self.fuel_percent.append(snapshot.fuel_percent)
        self.thrust.append(snapshot.thrust_magnitude)
        self.drag.append(snapshot.drag_magnitude)
        self.position_x.append(float(snapshot.position[0]))
        self.position_y.append(float(snapshot.position[1]))
        self.position_z.append(float(snapshot.position[2]))
        self.stage_name.append(snapshot.stage.name)

    def __len__(self) -> int:
        return len(self.time)

    def to_csv(self, filename: str):
        """Write logged telemetry to CSV for offline analysis."""
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        header = [
            'time', 'altitude_km', 'velocity', 'vertical_velocity',
            'acceleration', 'mass', 'fuel_percent', 'thrust_N', 'drag_N',
            'pos_x', 'pos_y', 'pos_z', 'stage',
        ]

        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            for i in range(len(self.time)):
                writer.writerow([
                    self.time[i], self.altitude[i], self.velocity[i], self.vertical_velocity[i],
                    self.acceleration[i], self.mass[i], self.fuel_percent[i],
                    self.thrust[i], self.drag[i],
                    self.position_x[i], self.position_y[i], self.position_z[i],
                    self.stage_name[i],
                ])


def run_simulation(config: SimulationConfig = None, duration: float = None,
                   dt: float = None, launch_time: Optional[float] = 0.0,
                   verbose: bool = None, simulation: VehicleSimulation = None) -> tuple:
    """
    Run the ascent headlessly for a fixed duration.

    Args:
        config: SimulationConfig instance. If None a default is created.
        duration: Simulated seconds to run (default 130 s).
        dt: Frame time step (default 1/60 s).
        launch_time: Simulation time at which the launch command is issued.
            None leaves the launch to the automatic trigger.
        verbose: Print progress updates. Defaults to config.verbose.
        simulation: Existing VehicleSimulation to continue; a new one is
            created from ``config`` if None.

    Returns:
        (final_snapshot, log, events) tuple
    """
    if simulation is None:
        if config is None:
            config = create_default_config()
        simulation = VehicleSimulation(config)
    config = simulation.config

    if duration is None:
        duration = DEFAULT_DURATION
    if dt is None:
        dt = DEFAULT_FRAME_DT
    if verbose is None:
        verbose = config.verbose
    if dt <= 0.0:
        raise ValueError(f"Time step dt must be positive, got {dt}")

    log = SimulationLog()
    events: List[DetachmentEvent] = []
    launched = launch_time is None

    logger.info(f"Starting simulation: dt={dt:.4f}s, duration={duration}s, launch_time={launch_time}")

    if verbose:
        print("\n" + "=" * 80)
        print(f"SHUTTLE ASCENT SIMULATION | dt={dt:.4f}s | T={duration}s")
        print("=" * 80)
        print(f"{'Time (s)':^10} | {'Alt (km)':^10} | {'Vel (m/s)':^10} | "
              f"{'Mass (kg)':^12} | {'Fuel (%)':^8} | {'Stage':<22}")
        print("-" * 80)

    start_time = time.time()
    t_start = simulation.snapshot.time
    t_end = t_start + duration
    last_print_time = -np.inf
    steps = 0

    while simulation.snapshot.time < t_end - 1e-9:
        if not launched and simulation.snapshot.time >= launch_time:
            simulation.begin_ascent()
            launched = True

        snapshot = simulation.tick(dt)
        steps += 1
        log.append(snapshot)
        events.extend(snapshot.events)

        for event in snapshot.events:
            logger.info(f"Detachment event: {event.separation.value} "
                        f"{[c.value for c in event.components]} at t={event.time:.2f}s")

        if verbose and snapshot.time - last_print_time >= 10.0:
            print(f"{snapshot.time:10.1f} | {snapshot.altitude/1000:10.2f} | "
                  f"{snapshot.speed:10.1f} | {snapshot.total_mass:12.0f} | "
                  f"{snapshot.fuel_percent:8.2f} | {snapshot.stage_label:<22}")
            last_print_time = snapshot.time

    final = simulation.snapshot
    elapsed = time.time() - start_time
    logger.info(f"Simulation complete: {steps} steps in {elapsed:.2f}s")
    logger.info(f"Final state: stage={final.stage.name}, alt={final.altitude/1000:.2f}km, "
                f"v={final.speed:.1f}m/s, fuel={final.fuel_percent:.2f}%")

    if verbose:
        print("-" * 80)
        print(f"Final: t={final.time:.1f}s | alt={final.altitude/1000:.2f}km | "
              f"v={final.speed:.1f}m/s | stage={final.stage_label}")

    return final, log, events
