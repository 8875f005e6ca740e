"""Tests for the exponential atmosphere model."""
import math
import unittest

from shuttle_sim import constants as C
from shuttle_sim.atmosphere import compute_air_density
from shuttle_sim.config import create_test_config


class TestAirDensity(unittest.TestCase):

    def test_sea_level(self):
        self.assertAlmostEqual(compute_air_density(0.0), C.RHO_0)

    def test_negative_altitude_treated_as_sea_level(self):
        self.assertAlmostEqual(compute_air_density(-500.0), C.RHO_0)

    def test_scale_height(self):
        rho = compute_air_density(C.H_SCALE)
        self.assertAlmostEqual(rho, C.RHO_0 / math.e, places=9)

    def test_monotonic_decrease(self):
        previous = compute_air_density(0.0)
        for h in range(1000, 100001, 1000):
            rho = compute_air_density(float(h))
            self.assertLess(rho, previous)
            previous = rho

    def test_zero_above_atmosphere(self):
        self.assertEqual(compute_air_density(C.ATMOSPHERE_HEIGHT + 1.0), 0.0)
        self.assertEqual(compute_air_density(400000.0), 0.0)

    def test_nan_altitude(self):
        with self.assertLogs('shuttle_sim.atmosphere', level='WARNING'):
            self.assertEqual(compute_air_density(math.nan), 0.0)

    def test_custom_config(self):
        cfg = create_test_config(sea_level_density=2.0, atmosphere_height=1000.0)
        self.assertAlmostEqual(compute_air_density(0.0, cfg), 2.0)
        self.assertEqual(compute_air_density(1500.0, cfg), 0.0)


if __name__ == '__main__':
    unittest.main()
