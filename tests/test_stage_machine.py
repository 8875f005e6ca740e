"""Tests for the flight-stage state machine."""
import numpy as np
import pytest

from shuttle_sim.config import create_test_config
from shuttle_sim.stage_machine import StageMachine
from shuttle_sim.stages import FlightStage
from shuttle_sim.state import create_initial_state


@pytest.fixture
def cfg():
    return create_test_config()


@pytest.fixture
def machine(cfg):
    return StageMachine(cfg)


@pytest.fixture
def state(cfg):
    return create_initial_state(cfg)


def _place(state, cfg, altitude, speed=0.0):
    state.position = cfg.axis * (cfg.body_radius + altitude)
    state.velocity = cfg.axis * speed


def test_idle_stays_idle_before_auto_launch(machine, state):
    state.time = 10.0
    assert machine.update(state) is FlightStage.IDLE
    assert machine.get_stage_history() == []


def test_auto_launch(machine, state, cfg):
    state.time = cfg.auto_launch_time
    assert machine.update(state) is FlightStage.LIFTOFF
    history = machine.get_stage_history()
    assert len(history) == 1
    assert history[0].from_stage is FlightStage.IDLE
    assert not history[0].forced


def test_begin_ascent_only_from_idle(machine, state):
    assert machine.begin_ascent(state)
    assert state.stage is FlightStage.LIFTOFF
    assert not machine.begin_ascent(state)
    assert state.stage is FlightStage.LIFTOFF


def test_liftoff_requires_booster_latch(machine, state, cfg):
    state.stage = FlightStage.LIFTOFF
    _place(state, cfg, cfg.booster_detach_altitude + 1000.0)
    assert machine.update(state) is FlightStage.LIFTOFF

    state.boosters_detached = True
    assert machine.update(state) is FlightStage.ATMOSPHERIC_ASCENT


def test_liftoff_requires_altitude(machine, state, cfg):
    state.stage = FlightStage.LIFTOFF
    state.boosters_detached = True
    _place(state, cfg, cfg.booster_detach_altitude - 1000.0)
    assert machine.update(state) is FlightStage.LIFTOFF


def test_ascent_to_insertion(machine, state, cfg):
    state.stage = FlightStage.ATMOSPHERIC_ASCENT
    _place(state, cfg, cfg.atmosphere_height + 1.0)
    assert machine.update(state) is FlightStage.ATMOSPHERIC_ASCENT
    state.fuel_tank_detached = True
    assert machine.update(state) is FlightStage.ORBITAL_INSERTION


def test_insertion_to_stabilization(machine, state, cfg):
    state.stage = FlightStage.ORBITAL_INSERTION
    _place(state, cfg, cfg.leo_altitude + 5000.0, cfg.leo_velocity - 100.0)
    assert machine.update(state) is FlightStage.ORBITAL_INSERTION

    _place(state, cfg, cfg.leo_altitude + 5000.0, cfg.leo_velocity + 10.0)
    assert machine.update(state) is FlightStage.ORBITAL_STABILIZATION


def test_insertion_outside_altitude_band(machine, state, cfg):
    state.stage = FlightStage.ORBITAL_INSERTION
    _place(state, cfg, cfg.leo_altitude + 20000.0, cfg.leo_velocity)
    assert machine.update(state) is FlightStage.ORBITAL_INSERTION


def test_stabilization_to_free_motion(machine, state, cfg):
    state.stage = FlightStage.ORBITAL_STABILIZATION
    _place(state, cfg, cfg.leo_altitude, cfg.leo_velocity)
    state.acceleration = np.array([0.0, -9.0, 0.0])
    assert machine.update(state) is FlightStage.ORBITAL_STABILIZATION

    state.acceleration = np.zeros(3)
    assert machine.update(state) is FlightStage.FREE_MOTION


def test_stabilization_needs_speed(machine, state, cfg):
    state.stage = FlightStage.ORBITAL_STABILIZATION
    _place(state, cfg, cfg.leo_altitude, 0.5 * cfg.leo_velocity)
    assert machine.update(state) is FlightStage.ORBITAL_STABILIZATION


def test_free_motion_maneuvering_cycle(machine, state):
    state.stage = FlightStage.FREE_MOTION
    assert machine.update(state) is FlightStage.FREE_MOTION

    state.maneuvering_engines_on = True
    assert machine.update(state) is FlightStage.ORBITAL_MANEUVERING
    assert machine.update(state) is FlightStage.ORBITAL_MANEUVERING

    state.maneuvering_engines_on = False
    assert machine.update(state) is FlightStage.FREE_MOTION


def test_at_most_one_transition_per_update(machine, state, cfg):
    state.time = cfg.auto_launch_time
    state.boosters_detached = True
    state.fuel_tank_detached = True
    _place(state, cfg, cfg.atmosphere_height + 1.0)
    assert machine.update(state) is FlightStage.LIFTOFF


def test_override(machine, state):
    state.fuel_percent = 42.0
    assert machine.override(state, 'FREE_MOTION')
    assert state.stage is FlightStage.FREE_MOTION
    assert state.fuel_percent == 42.0
    assert machine.get_stage_history()[-1].forced


def test_override_unknown_stage(machine, state, caplog):
    with caplog.at_level("WARNING"):
        assert not machine.override(state, 'HYPERSPACE')
    assert state.stage is FlightStage.IDLE
    assert "unknown stage" in caplog.text
    assert machine.get_stage_history() == []
