"""Sanity checks on the canonical constant set."""
import numpy as np
import pytest

from shuttle_sim import constants as C


def test_liftoff_mass():
    assert C.INITIAL_MASS == pytest.approx(2.05e6)


def test_booster_thrust_split():
    assert C.BOOSTER_THRUST * 2 == pytest.approx(C.THRUST_SOLID_BOOSTERS)


def test_liftoff_thrust_exceeds_weight():
    thrust = C.THRUST_MAIN_ENGINES + C.THRUST_SOLID_BOOSTERS
    assert thrust > C.INITIAL_MASS * C.G0


def test_initial_position_on_surface():
    assert np.linalg.norm(C.INITIAL_POSITION) == pytest.approx(C.R_EARTH)
    assert np.allclose(C.INITIAL_VELOCITY, 0.0)


def test_staging_thresholds_ordered():
    assert C.BOOSTER_DETACH_TIME < C.FUEL_TANK_DETACH_TIME
    assert C.BOOSTER_DETACH_ALTITUDE < C.ATMOSPHERE_HEIGHT < C.FUEL_TANK_DETACH_ALTITUDE
    assert 0.0 < C.FUEL_TANK_DETACH_SPEED_FRACTION < 1.0



def test_default_tank_staging_waits_for_propellant():
    """At the nominal burn rate the tank is far from empty at the time threshold."""
    fuel_at_threshold = 100.0 * (1.0 - C.FUEL_BURN_RATE * C.FUEL_TANK_DETACH_TIME / C.FUEL_TANK_MASS)
    assert fuel_at_threshold > C.FUEL_TANK_DETACH_FUEL_PERCENT
    burn_to_threshold = (C.FUEL_TANK_MASS * (1.0 - C.FUEL_TANK_DETACH_FUEL_PERCENT / 100.0)
                         / C.FUEL_BURN_RATE)
    assert burn_to_threshold > 1500.0
