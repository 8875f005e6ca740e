import json

import numpy as np
import pytest

from shuttle_sim import constants as C
from shuttle_sim.config import create_test_config
from shuttle_sim.stages import FlightStage
from shuttle_sim.state import VehicleState, create_initial_state, load_state, save_state


def test_initial_state():
    state = create_initial_state(create_test_config())
    assert np.allclose(state.position, C.INITIAL_POSITION)
    assert state.altitude == 0.0
    assert state.speed == 0.0
    assert state.stage is FlightStage.IDLE
    assert state.fuel_percent == 100.0
    assert state.fuel_tank_attached and state.booster_a_attached and state.booster_b_attached
    assert not state.boosters_detached and not state.fuel_tank_detached
    assert not state.maneuvering_engines_on


def test_initial_state_custom_radius():
    cfg = create_test_config(body_radius=1.0e6)
    state = create_initial_state(cfg)
    assert state.body_radius == 1.0e6
    assert state.altitude == pytest.approx(0.0)


def test_arrays_are_float64():
    state = VehicleState(position=[0, 7000000, 0])
    assert state.position.dtype == np.float64


def test_copy_is_deep():
    state = create_initial_state()
    clone = state.copy()
    clone.position[1] += 100.0
    clone.stage = FlightStage.LIFTOFF
    assert state.altitude == 0.0
    assert state.stage is FlightStage.IDLE


def test_dict_round_trip():
    state = create_initial_state()
    state.stage = FlightStage.ATMOSPHERIC_ASCENT
    state.velocity = np.array([1.0 / 3.0, 2500.123456789, 0.0])
    state.fuel_percent = 87.654321
    state.boosters_detached = True
    state.booster_a_attached = state.booster_b_attached = False
    state.time = 131.25

    data = json.loads(json.dumps(state.to_dict()))
    assert data['stage'] == 'ATMOSPHERIC_ASCENT'

    restored = VehicleState.from_dict(data)
    assert np.array_equal(restored.velocity, state.velocity)
    assert np.array_equal(restored.position, state.position)
    assert restored.stage is FlightStage.ATMOSPHERIC_ASCENT
    assert restored.fuel_percent == state.fuel_percent
    assert restored.boosters_detached
    assert restored.time == 131.25


def test_from_dict_unknown_stage():
    data = create_initial_state().to_dict()
    data['stage'] = 'WARP'
    with pytest.raises(KeyError):
        VehicleState.from_dict(data)


def test_save_and_load(tmp_path):
    state = create_initial_state()
    state.fuel_percent = 55.5
    path = tmp_path / "nested" / "state.json"
    save_state(state, str(path))
    loaded = load_state(str(path))
    assert loaded.fuel_percent == 55.5
    assert np.array_equal(loaded.position, state.position)


def test_str():
    text = str(create_initial_state())
    assert "IDLE" in text
    assert "fuel=100.00%" in text
