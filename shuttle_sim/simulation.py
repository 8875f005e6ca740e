"""
Shuttle Ascent Simulation - Vehicle Simulation Orchestrator

This module owns the VehicleState and runs the per-tick pipeline in a
fixed order:

    commands -> forces -> integration -> stability checks -> fuel
             -> stage machine -> detachment -> snapshot/events

Consumers (a visual layer, the batch runner, tests) only ever see
immutable VehicleSnapshot objects, replaced atomically once a tick has
completed.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from .commands import (
    BeginAscent, Command, CommandQueue, RequestDetach, SetManeuveringEngines, SetStage,
)
from .config import SimulationConfig, create_default_config
from .detachment import DetachmentController, DetachmentEvent
from .forces import compute_thrust_magnitude
from .integrators import integrate
from .mass import compute_total_mass
from .stage_machine import StageMachine
from .stages import FlightStage
from .state import VehicleState, create_initial_state
from .types import ForceBreakdown, SnapshotDict

logger = logging.getLogger(__name__)


def _frozen(vec: np.ndarray) -> np.ndarray:
    """Read-only float64 copy of a vector."""
    arr = np.array(vec, dtype=np.float64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class VehicleSnapshot:
    """Read-only view of the vehicle after a tick."""
    time: float
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    net_force: np.ndarray
    altitude: float
    speed: float
    stage: FlightStage
    fuel_percent: float
    total_mass: float
    thrust_magnitude: float
    drag_magnitude: float
    fuel_tank_attached: bool
    booster_a_attached: bool
    booster_b_attached: bool
    boosters_detached: bool
    fuel_tank_detached: bool
    events: Tuple[DetachmentEvent, ...] = field(default_factory=tuple)

    @property
    def stage_label(self) -> str:
        return self.stage.label

    @property
    def vertical_velocity(self) -> float:
        """Velocity component along the local vertical (m/s)."""
        r_norm = float(np.linalg.norm(self.position))
        if r_norm <= 0.0:
            return 0.0
        return float(np.dot(self.velocity, self.position) / r_norm)

    def to_dict(self) -> SnapshotDict:
        return {
            'time': self.time,
            'position': self.position.tolist(),
            'velocity': self.velocity.tolist(),
            'acceleration': self.acceleration.tolist(),
            'altitude': self.altitude,
            'speed': self.speed,
            'stage': self.stage.name,
            'stage_label': self.stage_label,
            'fuel_percent': self.fuel_percent,
            'total_mass': self.total_mass,
            'thrust_magnitude': self.thrust_magnitude,
            'fuel_tank_attached': self.fuel_tank_attached,
            'booster_a_attached': self.booster_a_attached,
            'booster_b_attached': self.booster_b_attached,
            'events': [e.to_dict() for e in self.events],
        }


class VehicleSimulation:
    """
    Frame-synchronous shuttle ascent simulation.

    The caller drives it with ``tick(dt)`` once per frame and may queue
    commands between ticks; commands take effect at the start of the next
    tick.
    """

    def __init__(self, config: SimulationConfig = None, state: VehicleState = None):
        self.config = config or create_default_config()
        if state is not None:
            self._state = state.copy()
            if self._state.body_radius != self.config.body_radius:
                logger.warning(f"State body radius {self._state.body_radius} m differs from "
                               f"config ({self.config.body_radius} m). Using config value.")
                self._state.body_radius = self.config.body_radius
        else:
            self._state = create_initial_state(self.config)
        self._commands = CommandQueue()
        self._stage_machine = StageMachine(self.config)
        self._detachment = DetachmentController(self.config)
        self._event_log: List[DetachmentEvent] = []
        self._snapshot = self._build_snapshot((), None)

        logger.info("Shuttle simulation initialized:")
        logger.info(f"  Initial position: {np.round(self._state.position).tolist()} m (from body centre)")
        logger.info(f"  Initial altitude: {self._state.altitude:.0f} m")
        logger.info(f"  Initial total mass: {self._snapshot.total_mass:.2f} kg")

    @classmethod
    def from_state(cls, data: Union[dict, VehicleState],
                   config: SimulationConfig = None) -> 'VehicleSimulation':
        """Resume a simulation from ``export_state()`` output or a VehicleState."""
        state = data if isinstance(data, VehicleState) else VehicleState.from_dict(data)
        return cls(config=config, state=state)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> VehicleSnapshot:
        return self._snapshot

    @property
    def state(self) -> VehicleState:
        """A copy of the current state; the simulation keeps the original."""
        return self._state.copy()

    @property
    def event_log(self) -> Tuple[DetachmentEvent, ...]:
        return tuple(self._event_log)

    @property
    def stage_history(self):
        return self._stage_machine.get_stage_history()

    def export_state(self) -> dict:
        return self._state.to_dict()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit(self, command: Command):
        self._commands.push(command)

    def begin_ascent(self):
        self.submit(BeginAscent())

    def set_stage(self, stage):
        self.submit(SetStage(stage))

    def request_detach(self, component):
        self.submit(RequestDetach(component))

    def set_maneuvering_engines(self, on: bool):
        self.submit(SetManeuveringEngines(bool(on)))

    def _apply_command(self, command) -> Optional[DetachmentEvent]:
        if isinstance(command, BeginAscent):
            self._stage_machine.begin_ascent(self._state)
        elif isinstance(command, SetStage):
            self._stage_machine.override(self._state, command.stage)
        elif isinstance(command, RequestDetach):
            return self._detachment.request_detach(self._state, command.component)
        elif isinstance(command, SetManeuveringEngines):
            self._state.maneuvering_engines_on = command.on
            logger.info(f"Maneuvering engines commanded {'on' if command.on else 'off'} "
                        f"at t={self._state.time:.2f}s")
        else:
            logger.warning(f"Unknown command {command!r}. Ignoring.")
        return None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> VehicleSnapshot:
        """
        Run one frame.

        Args:
            dt: Frame time increment (s). Clamped to the stability ceiling;
                values <= 0 only process queued commands.

        Returns:
            The new snapshot (also available as ``self.snapshot``).
        """
        events = []
        for command in self._commands.drain():
            event = self._apply_command(command)
            if event is not None:
                events.append(event)

        new_state, forces, dt_used = integrate(self._state, dt, self.config)
        if dt_used > 0.0:
            self._state = new_state
            self._stage_machine.update(self._state)
            events.extend(self._detachment.update(self._state))

        self._event_log.extend(events)
        self._snapshot = self._build_snapshot(tuple(events), forces)

        if dt_used > 0.0:
            s = self._snapshot
            logger.debug(f"t={s.time:.2f}s | {s.stage_label} | alt={s.altitude:.2f}m | "
                         f"v={s.speed:.2f}m/s | a={np.linalg.norm(s.acceleration):.2f}m/s^2 | "
                         f"m={s.total_mass:.2f}kg | fuel={s.fuel_percent:.2f}%")
        return self._snapshot

    def run(self, duration: float, dt: float) -> List[VehicleSnapshot]:
        """Tick repeatedly until ``duration`` seconds of simulation time pass."""
        if dt <= 0.0:
            raise ValueError(f"Time step dt must be positive, got {dt}")
        snapshots = []
        t_end = self._state.time + duration
        while self._state.time < t_end - 1e-9:
            snapshots.append(self.tick(dt))
        return snapshots

    def _build_snapshot(self, events: Tuple[DetachmentEvent, ...],
                        forces: Optional[ForceBreakdown]) -> VehicleSnapshot:
        s = self._state
        if forces is not None:
            thrust = forces['thrust_magnitude']
            drag = forces['drag_magnitude']
        else:
            thrust = compute_thrust_magnitude(s, self.config)
            drag = 0.0
        return VehicleSnapshot(
            time=s.time,
            position=_frozen(s.position),
            velocity=_frozen(s.velocity),
            acceleration=_frozen(s.acceleration),
            net_force=_frozen(s.net_force),
            altitude=s.altitude,
            speed=s.speed,
            stage=s.stage,
            fuel_percent=s.fuel_percent,
            total_mass=compute_total_mass(s, self.config),
            thrust_magnitude=thrust,
            drag_magnitude=drag,
            fuel_tank_attached=s.fuel_tank_attached,
            booster_a_attached=s.booster_a_attached,
            booster_b_attached=s.booster_b_attached,
            boosters_detached=s.boosters_detached,
            fuel_tank_detached=s.fuel_tank_detached,
            events=events,
        )
