"""
Shuttle Stage Machine

This module handles the flight-stage state machine of the shuttle stack.
The stage itself lives in VehicleState; the machine holds the transition
table and evaluates it exactly once per tick.

Transitions:
  - IDLE -> LIFTOFF:                     launch command, or auto-launch time reached
  - LIFTOFF -> ATMOSPHERIC_ASCENT:       above booster-separation altitude, boosters gone
  - ATMOSPHERIC_ASCENT -> ORBITAL_INSERTION: above the atmosphere, tank gone
  - ORBITAL_INSERTION -> ORBITAL_STABILIZATION: inside the LEO altitude band at LEO speed
  - ORBITAL_STABILIZATION -> FREE_MOTION: no acceleration, speed above 90 % LEO
  - FREE_MOTION <-> ORBITAL_MANEUVERING: maneuvering engines on / off
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .config import SimulationConfig, create_default_config
from .forces import compute_maneuvering_thrust_magnitude
from .stages import FlightStage, parse_stage
from .state import VehicleState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageTransition:
    """Record of a stage change."""
    time: float
    from_stage: FlightStage
    to_stage: FlightStage
    altitude: float
    speed: float
    forced: bool = False


class StageMachine:
    """
    Evaluates flight-stage transitions for a VehicleState.
    """

    def __init__(self, config: SimulationConfig = None):
        self.config = config or create_default_config()
        self.transitions: List[StageTransition] = []

    def next_stage(self, state: VehicleState) -> Optional[FlightStage]:
        """
        Stage the vehicle should move to, or None to stay put.

        Pure function of the state; the launch command is handled by
        ``begin_ascent`` rather than here.
        """
        cfg = self.config
        stage = state.stage
        altitude = state.altitude
        speed = state.speed

        if stage is FlightStage.IDLE:
            if state.time >= cfg.auto_launch_time:
                return FlightStage.LIFTOFF

        elif stage is FlightStage.LIFTOFF:
            if altitude > cfg.booster_detach_altitude and state.boosters_detached:
                return FlightStage.ATMOSPHERIC_ASCENT

        elif stage is FlightStage.ATMOSPHERIC_ASCENT:
            if altitude > cfg.atmosphere_height and state.fuel_tank_detached:
                return FlightStage.ORBITAL_INSERTION

        elif stage is FlightStage.ORBITAL_INSERTION:
            in_band = abs(altitude - cfg.leo_altitude) <= cfg.leo_altitude_band
            at_speed = abs(speed - cfg.leo_velocity) < cfg.leo_velocity_tolerance
            if in_band and at_speed:
                return FlightStage.ORBITAL_STABILIZATION

        elif stage is FlightStage.ORBITAL_STABILIZATION:
            accel_sq = float(np.dot(state.acceleration, state.acceleration))
            if (accel_sq < cfg.thrust_epsilon and
                    speed > cfg.leo_velocity * cfg.free_motion_speed_fraction):
                return FlightStage.FREE_MOTION

        elif stage is FlightStage.FREE_MOTION:
            if compute_maneuvering_thrust_magnitude(state, cfg) ** 2 > cfg.thrust_epsilon:
                return FlightStage.ORBITAL_MANEUVERING

        elif stage is FlightStage.ORBITAL_MANEUVERING:
            if compute_maneuvering_thrust_magnitude(state, cfg) ** 2 < cfg.thrust_epsilon:
                return FlightStage.FREE_MOTION

        return None

    def update(self, state: VehicleState) -> FlightStage:
        """
        Apply at most one transition to ``state.stage``.

        Returns:
            The (possibly unchanged) stage.
        """
        target = self.next_stage(state)
        if target is not None:
            if state.stage is FlightStage.IDLE:
                logger.info(f"Auto-launch at t={state.time:.2f}s: no launch command received.")
            self._transition(state, target, forced=False)
        return state.stage

    def begin_ascent(self, state: VehicleState) -> bool:
        """
        Launch command: IDLE -> LIFTOFF.

        Returns:
            True if the vehicle lifted off; False if it was not idle.
        """
        if state.stage is not FlightStage.IDLE:
            logger.info(f"Launch command ignored: vehicle already in {state.stage.name}.")
            return False
        self._transition(state, FlightStage.LIFTOFF, forced=False)
        return True

    def override(self, state: VehicleState, stage) -> bool:
        """
        Force-set the stage, bypassing the transition table.

        No other state is reset. Unknown stage values are rejected with a
        warning and leave the state unchanged.
        """
        target = parse_stage(stage)
        if target is None:
            logger.warning(f"Attempted to set unknown stage: {stage!r}. Ignoring.")
            return False
        self._transition(state, target, forced=True)
        return True

    def _transition(self, state: VehicleState, target: FlightStage, forced: bool):
        record = StageTransition(
            time=state.time,
            from_stage=state.stage,
            to_stage=target,
            altitude=state.altitude,
            speed=state.speed,
            forced=forced,
        )
        self.transitions.append(record)
        state.stage = target

        if forced:
            logger.info(f"Stage manually set to: {target.label} at t={record.time:.2f}s")
        else:
            logger.info(f"Stage: {target.label} at t={record.time:.2f}s, "
                        f"Alt={record.altitude:.0f}m, V={record.speed:.0f}m/s")

    def get_stage_history(self) -> List[StageTransition]:
        return list(self.transitions)
