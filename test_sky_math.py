import math
import unittest

import numpy as np

from config import config
from sky_math import (
    RaDec,
    angular_separation_deg,
    ecliptic_to_equatorial,
    julian_centuries_from_ms,
    julian_date_from_ms,
    ms_from_julian_date,
    normalize_degrees,
    normalize_vector,
    ra_dec_from_cartesian,
    vector_from_ra_dec,
)

J2000_MS = 946728000000  # 2000-01-01T12:00:00Z

class TestTimeConversion(unittest.TestCase):

    def test_unix_epoch_julian_date(self):
        self.assertAlmostEqual(julian_date_from_ms(0), 2440587.5)

    def test_j2000(self):
        self.assertAlmostEqual(julian_date_from_ms(J2000_MS), config.Time.J2000_JULIAN_DATE)
        self.assertEqual(ms_from_julian_date(config.Time.J2000_JULIAN_DATE), J2000_MS)
        self.assertAlmostEqual(julian_centuries_from_ms(J2000_MS), 0.0)

    def test_one_century(self):
        century_ms = J2000_MS + int(36525 * 86400000)
        self.assertAlmostEqual(julian_centuries_from_ms(century_ms), 1.0)

    def test_conversions_follow_configured_epochs(self):
        original_unix, original_j2000 = config.Time.UNIX_EPOCH_JULIAN_DATE, config.Time.J2000_JULIAN_DATE
        try:
            config.Time.UNIX_EPOCH_JULIAN_DATE = 2440000.0
            config.Time.J2000_JULIAN_DATE = 2440001.0
            self.assertAlmostEqual(julian_date_from_ms(0), 2440000.0)
            self.assertEqual(ms_from_julian_date(2440000.5), 43200000)
            self.assertAlmostEqual(julian_centuries_from_ms(86400000), 0.0)
        finally:
            config.Time.UNIX_EPOCH_JULIAN_DATE = original_unix
            config.Time.J2000_JULIAN_DATE = original_j2000
        self.assertAlmostEqual(julian_date_from_ms(0), 2440587.5)

class TestAngles(unittest.TestCase):

    def test_normalize_degrees(self):
        self.assertAlmostEqual(normalize_degrees(370.0), 10.0)
        self.assertAlmostEqual(normalize_degrees(-10.0), 350.0)
        self.assertAlmostEqual(normalize_degrees(0.0), 0.0)
        self.assertAlmostEqual(normalize_degrees(-720.0), 0.0)
        self.assertLess(normalize_degrees(359.9999), 360.0)

    def test_angular_separation(self):
        self.assertAlmostEqual(angular_separation_deg(np.array([1.0, 0, 0]), np.array([0, 2.0, 0])), 90.0)
        self.assertAlmostEqual(angular_separation_deg(np.array([1.0, 0, 0]), np.array([1.0, 0, 0])), 0.0)
        self.assertAlmostEqual(angular_separation_deg(np.array([1.0, 0, 0]), np.array([-1.0, 0, 0])), 180.0)

class TestRaDecConversion(unittest.TestCase):

    def test_origin_maps_to_x_axis(self):
        np.testing.assert_array_almost_equal(vector_from_ra_dec(RaDec(0.0, 0.0)), [1.0, 0.0, 0.0])

    def test_right_ascension_increases_toward_y(self):
        np.testing.assert_array_almost_equal(vector_from_ra_dec(RaDec(90.0, 0.0)), [0.0, 1.0, 0.0])

    def test_pole_maps_to_z_axis(self):
        np.testing.assert_array_almost_equal(vector_from_ra_dec(RaDec(0.0, 90.0)), [0.0, 0.0, 1.0])
        np.testing.assert_array_almost_equal(vector_from_ra_dec(RaDec(45.0, -90.0)), [0.0, 0.0, -1.0])

    def test_vector_is_unit_length(self):
        for ra, dec in ((12.5, 33.0), (200.0, -71.2), (359.0, 0.5)):
            self.assertAlmostEqual(np.linalg.norm(vector_from_ra_dec(RaDec(ra, dec))), 1.0)

    def test_ra_dec_from_scaled_vector(self):
        ra_dec = ra_dec_from_cartesian(np.array([0.0, -5.0, 0.0]))
        self.assertAlmostEqual(ra_dec.ra_deg, 270.0)
        self.assertAlmostEqual(ra_dec.dec_deg, 0.0)

    def test_inverse_of_vector_from_ra_dec(self):
        ra_dec = ra_dec_from_cartesian(vector_from_ra_dec(RaDec(123.4, -45.6)))
        self.assertAlmostEqual(ra_dec.ra_deg, 123.4)
        self.assertAlmostEqual(ra_dec.dec_deg, -45.6)

class TestEclipticToEquatorial(unittest.TestCase):

    def test_x_axis_unchanged(self):
        np.testing.assert_array_almost_equal(ecliptic_to_equatorial(np.array([1.0, 0.0, 0.0]), 23.44), [1.0, 0.0, 0.0])

    def test_ecliptic_y_axis_tilts_north(self):
        eps = math.radians(23.44)
        result = ecliptic_to_equatorial(np.array([0.0, 1.0, 0.0]), 23.44)
        np.testing.assert_array_almost_equal(result, [0.0, math.cos(eps), math.sin(eps)])

    def test_zero_obliquity_is_identity(self):
        vector = np.array([0.3, -0.4, 0.5])
        np.testing.assert_array_almost_equal(ecliptic_to_equatorial(vector, 0.0), vector)

class TestNormalizeVector(unittest.TestCase):

    def test_normalize_typical_vector(self):
        vector = np.array([3.0, 4.0, 0.0])
        expected = np.array([0.6, 0.8, 0.0])
        np.testing.assert_array_almost_equal(normalize_vector(vector), expected)

        vector = np.array([1.0, 1.0, 1.0])
        norm = np.sqrt(3)
        expected = np.array([1/norm, 1/norm, 1/norm])
        np.testing.assert_array_almost_equal(normalize_vector(vector), expected)

    def test_normalize_zero_vector(self):
        vector = np.array([0.0, 0.0, 0.0])
        expected = np.array([0.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(normalize_vector(vector), expected)

    def test_normalize_small_magnitude_vector(self):
        vector = np.array([1e-15, 1e-15, 0.0]) # Smaller than default epsilon for norm
        np.testing.assert_array_almost_equal(normalize_vector(vector), np.zeros(3))

    def test_normalize_list_input(self):
        np.testing.assert_array_almost_equal(normalize_vector([0, 3, 4]), np.array([0.0, 0.6, 0.8]))

if __name__ == '__main__':
    unittest.main()
