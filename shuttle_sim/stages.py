"""
Shuttle Ascent Simulation - Flight Stages

Discrete flight stages of the shuttle stack and their human-readable labels.
"""

from enum import Enum
from typing import Optional


class FlightStage(Enum):
    IDLE = 'IDLE'
    LIFTOFF = 'LIFTOFF'
    ATMOSPHERIC_ASCENT = 'ATMOSPHERIC_ASCENT'
    ORBITAL_INSERTION = 'ORBITAL_INSERTION'
    ORBITAL_STABILIZATION = 'ORBITAL_STABILIZATION'
    FREE_MOTION = 'FREE_MOTION'
    ORBITAL_MANEUVERING = 'ORBITAL_MANEUVERING'

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


_STAGE_LABELS = {
    FlightStage.IDLE: 'Idle',
    FlightStage.LIFTOFF: 'Liftoff',
    FlightStage.ATMOSPHERIC_ASCENT: 'Atmospheric Ascent',
    FlightStage.ORBITAL_INSERTION: 'Orbital Insertion',
    FlightStage.ORBITAL_STABILIZATION: 'Orbital Stabilization',
    FlightStage.FREE_MOTION: 'Free Space Motion',
    FlightStage.ORBITAL_MANEUVERING: 'Orbital Maneuvering',
}

# Stages in which the main engines draw from the external tank
ACTIVE_BURN_STAGES = frozenset({
    FlightStage.LIFTOFF,
    FlightStage.ATMOSPHERIC_ASCENT,
    FlightStage.ORBITAL_INSERTION,
    FlightStage.ORBITAL_MANEUVERING,
})


def get_stage_label(stage) -> str:
    """Human-readable label for a stage; unknown values fall back to str()."""
    parsed = parse_stage(stage)
    if parsed is None:
        return str(stage) if stage else 'Unknown'
    return parsed.label


def parse_stage(value) -> Optional[FlightStage]:
    """
    Resolve a stage from an enum member, a name or a label.

    Accepts ``FlightStage.LIFTOFF``, ``'LIFTOFF'``, ``'liftoff'`` or
    ``'Liftoff'``. Returns None for anything unrecognised.
    """
    if isinstance(value, FlightStage):
        return value
    if not isinstance(value, str):
        return None

    key = value.strip().upper().replace(' ', '_').replace('-', '_')
    if key in FlightStage.__members__:
        return FlightStage[key]
    for stage, label in _STAGE_LABELS.items():
        if label.upper().replace(' ', '_') == key:
            return stage
    return None
