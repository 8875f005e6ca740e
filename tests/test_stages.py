"""Tests for flight stage parsing and labels."""
import pytest

from shuttle_sim.stages import ACTIVE_BURN_STAGES, FlightStage, get_stage_label, parse_stage


def test_seven_stages():
    assert len(FlightStage) == 7


def test_labels():
    assert FlightStage.IDLE.label == 'Idle'
    assert FlightStage.FREE_MOTION.label == 'Free Space Motion'
    assert get_stage_label(FlightStage.ORBITAL_INSERTION) == 'Orbital Insertion'


@pytest.mark.parametrize("value", [
    FlightStage.LIFTOFF, 'LIFTOFF', 'liftoff', 'Liftoff', ' liftoff ',
])
def test_parse_stage_accepts_members_names_labels(value):
    assert parse_stage(value) is FlightStage.LIFTOFF


def test_parse_stage_label_with_spaces():
    assert parse_stage('Free Space Motion') is FlightStage.FREE_MOTION
    assert parse_stage('atmospheric-ascent') is FlightStage.ATMOSPHERIC_ASCENT


@pytest.mark.parametrize("value", ['WARP_DRIVE', '', 3, None])
def test_parse_stage_rejects_unknown(value):
    assert parse_stage(value) is None


def test_unknown_label_falls_back():
    assert get_stage_label('WARP_DRIVE') == 'WARP_DRIVE'
    assert get_stage_label(None) == 'Unknown'


def test_active_burn_stages():
    assert FlightStage.LIFTOFF in ACTIVE_BURN_STAGES
    assert FlightStage.ORBITAL_MANEUVERING in ACTIVE_BURN_STAGES
    assert FlightStage.IDLE not in ACTIVE_BURN_STAGES
    assert FlightStage.FREE_MOTION not in ACTIVE_BURN_STAGES
    assert FlightStage.ORBITAL_STABILIZATION not in ACTIVE_BURN_STAGES
