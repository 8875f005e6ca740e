"""
Shuttle Ascent Simulation - Component Detachment

Threshold-triggered, one-shot separation of the solid rocket boosters and
the external tank. Each separation emits a DetachmentEvent that the visual
layer uses to remove the corresponding model.

Boosters separate once both the time and altitude thresholds are passed.
The tank additionally waits for near-orbital speed and an almost empty tank.
Latches in VehicleState keep each event from firing twice.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import SimulationConfig, create_default_config
from .state import VehicleState

logger = logging.getLogger(__name__)


class Component(Enum):
    FUEL_TANK = 'fuel_tank'
    BOOSTER_A = 'booster_a'
    BOOSTER_B = 'booster_b'


class Separation(Enum):
    BOOSTERS = 'boosters'
    FUEL_TANK = 'fuel_tank'


@dataclass(frozen=True)
class DetachmentEvent:
    """A component separation, fired at most once per latch."""
    separation: Separation
    components: Tuple[Component, ...]
    time: float
    altitude: float
    speed: float
    requested: bool = False

    def to_dict(self) -> dict:
        return {
            'separation': self.separation.value,
            'components': [c.value for c in self.components],
            'time': self.time,
            'altitude': self.altitude,
            'speed': self.speed,
            'requested': self.requested,
        }


def parse_component(value) -> Optional[Component]:
    """Resolve a Component from a member or its name/value; None if unknown."""
    if isinstance(value, Component):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace('-', '_').replace(' ', '_')
    # Legacy names used by the keyboard layer
    aliases = {'tank': 'fuel_tank', 'fueltank': 'fuel_tank',
               'rocket1': 'booster_a', 'rocket2': 'booster_b'}
    key = aliases.get(key, key)
    for component in Component:
        if component.value == key:
            return component
    return None


class DetachmentController:
    """
    Monitors staging thresholds and separates components.
    """

    def __init__(self, config: SimulationConfig = None):
        self.config = config or create_default_config()

    def should_detach_boosters(self, state: VehicleState) -> bool:
        cfg = self.config
        return (not state.boosters_detached
                and state.any_booster_attached
                and state.time >= cfg.booster_detach_time
                and state.altitude >= cfg.booster_detach_altitude)

    def should_detach_fuel_tank(self, state: VehicleState) -> bool:
        cfg = self.config
        return (not state.fuel_tank_detached
                and state.fuel_tank_attached
                and state.time >= cfg.fuel_tank_detach_time
                and state.altitude >= cfg.fuel_tank_detach_altitude
                and state.speed >= cfg.leo_velocity * cfg.fuel_tank_detach_speed_fraction
                and state.fuel_percent <= cfg.fuel_tank_detach_fuel_percent)

    def update(self, state: VehicleState) -> List[DetachmentEvent]:
        """
        Evaluate both separations for the current tick.

        Returns:
            Events fired this tick (zero, one or two).
        """
        events = []
        if self.should_detach_boosters(state):
            events.append(self._detach_boosters(state, requested=False))
        if self.should_detach_fuel_tank(state):
            events.append(self._detach_fuel_tank(state, requested=False))
        return events

    def request_detach(self, state: VehicleState, component) -> Optional[DetachmentEvent]:
        """
        Debug command: detach one component now, ignoring thresholds.

        Unknown or already-detached components are warned no-ops.
        """
        target = parse_component(component)
        if target is None:
            logger.warning(f"Attempted to detach unknown component: {component!r}")
            return None

        if target is Component.FUEL_TANK:
            if not state.fuel_tank_attached:
                logger.warning("Fuel tank already detached. Ignoring request.")
                return None
            return self._detach_fuel_tank(state, requested=True)

        attached = (state.booster_a_attached if target is Component.BOOSTER_A
                    else state.booster_b_attached)
        if not attached:
            logger.warning(f"{target.value} already detached. Ignoring request.")
            return None

        if target is Component.BOOSTER_A:
            state.booster_a_attached = False
        else:
            state.booster_b_attached = False
        if not state.any_booster_attached:
            state.boosters_detached = True
        logger.info(f"{target.value} detached on request at {state.time:.2f}s, "
                    f"Altitude: {state.altitude:.0f}m")
        return self._event(state, Separation.BOOSTERS, (target,), requested=True)

    def _detach_boosters(self, state: VehicleState, requested: bool) -> DetachmentEvent:
        detached = []
        if state.booster_a_attached:
            state.booster_a_attached = False
            detached.append(Component.BOOSTER_A)
        if state.booster_b_attached:
            state.booster_b_attached = False
            detached.append(Component.BOOSTER_B)
        state.boosters_detached = True
        logger.info(f"SRBs detached at {state.time:.2f}s, Altitude: {state.altitude:.0f}m")
        return self._event(state, Separation.BOOSTERS, tuple(detached), requested)

    def _detach_fuel_tank(self, state: VehicleState, requested: bool) -> DetachmentEvent:
        state.fuel_tank_attached = False
        state.fuel_percent = 0.0
        state.fuel_tank_detached = True
        logger.info(f"External fuel tank detached at {state.time:.2f}s, "
                    f"Altitude: {state.altitude:.0f}m")
        return self._event(state, Separation.FUEL_TANK, (Component.FUEL_TANK,), requested)

    @staticmethod
    def _event(state: VehicleState, separation: Separation,
               components: Tuple[Component, ...], requested: bool) -> DetachmentEvent:
        return DetachmentEvent(
            separation=separation,
            components=components,
            time=state.time,
            altitude=state.altitude,
            speed=state.speed,
            requested=requested,
        )
