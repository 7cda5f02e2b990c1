import unittest

from config import config
from ephemeris import BodyIdentity, ElementRates, OrbitalElementsProvider
from sky_math import UnknownBodyError, normalize_degrees

J2000_MS = 946728000000  # 2000-01-01T12:00:00Z
DAY_MS = 86400000

class TestBodyIdentity(unittest.TestCase):

    def test_closed_set(self):
        self.assertEqual(len(BodyIdentity), 9)
        self.assertEqual(BodyIdentity('Moon'), BodyIdentity.MOON)

    def test_from_name_is_case_insensitive(self):
        self.assertIs(BodyIdentity.from_name('jupiter'), BodyIdentity.JUPITER)
        self.assertIs(BodyIdentity.from_name(' NEPTUNE '), BodyIdentity.NEPTUNE)

    def test_from_name_unknown(self):
        with self.assertRaises(UnknownBodyError):
            BodyIdentity.from_name('Pluto')

class TestOrbitalElementsProvider(unittest.TestCase):

    def setUp(self):
        self.provider = OrbitalElementsProvider.from_config(config)

    def test_every_body_has_elements(self):
        for body in BodyIdentity:
            self.assertTrue(self.provider.has_body(body), body)

    def test_mercury_at_j2000(self):
        elements = self.provider.elements_at(BodyIdentity.MERCURY, J2000_MS)
        self.assertAlmostEqual(elements.a_au, 0.38709927)
        self.assertAlmostEqual(elements.e, 0.20563593)
        self.assertAlmostEqual(elements.i_deg, 7.00497902)
        self.assertAlmostEqual(elements.omega_deg, 48.33076593)
        self.assertAlmostEqual(elements.w_deg, 77.45779628 - 48.33076593)
        self.assertAlmostEqual(elements.m_deg, 252.25032350 - 77.45779628)
        self.assertEqual(elements.central_body, 'Sun')

    def test_angles_are_wrapped(self):
        # Mars has negative L and w_bar in the table
        elements = self.provider.elements_at(BodyIdentity.MARS, J2000_MS)
        for angle in (elements.omega_deg, elements.w_deg, elements.m_deg):
            self.assertGreaterEqual(angle, 0.0)
            self.assertLess(angle, 360.0)

    def test_sun_orbit_is_earth_orbit_turned_half_way(self):
        sun = self.provider.elements_at(BodyIdentity.SUN, J2000_MS)
        self.assertEqual(sun.central_body, 'Earth')
        # Earth-Moon barycentre: L = 100.46457166, w_bar = 102.93768193
        self.assertAlmostEqual(sun.m_deg, normalize_degrees(100.46457166 - 102.93768193))
        self.assertAlmostEqual(sun.w_deg, 102.93768193 + 180.0)

    def test_moon_mean_longitude_rate(self):
        before = self.provider.elements_at(BodyIdentity.MOON, J2000_MS)
        after = self.provider.elements_at(BodyIdentity.MOON, J2000_MS + DAY_MS)
        longitude_before = before.m_deg + before.w_deg + before.omega_deg
        longitude_after = after.m_deg + after.w_deg + after.omega_deg
        advance = normalize_degrees(longitude_after - longitude_before)
        self.assertAlmostEqual(advance, 481267.8808 / 36525.0, places=4)
        self.assertEqual(before.central_body, 'Earth')

    def test_elements_are_fresh_per_query(self):
        first = self.provider.elements_at(BodyIdentity.VENUS, J2000_MS)
        second = self.provider.elements_at(BodyIdentity.VENUS, J2000_MS)
        self.assertEqual(first, second)
        self.assertNotEqual(first, self.provider.elements_at(BodyIdentity.VENUS, J2000_MS + DAY_MS))

    def test_unknown_body_raises(self):
        table = {name: data for name, data in config.Ephemeris.ORBITAL_ELEMENTS.items() if name != 'Neptune'}
        provider = OrbitalElementsProvider(table)
        self.assertFalse(provider.has_body(BodyIdentity.NEPTUNE))
        with self.assertRaises(UnknownBodyError):
            provider.elements_at(BodyIdentity.NEPTUNE, J2000_MS)

    def test_table_is_copied(self):
        table = {name: dict(data) for name, data in config.Ephemeris.ORBITAL_ELEMENTS.items()}
        provider = OrbitalElementsProvider(table)
        table['Venus']['a'] = 99.0
        self.assertAlmostEqual(provider.elements_at(BodyIdentity.VENUS, J2000_MS).a_au, 0.72333566)

class TestElementRates(unittest.TestCase):

    def test_rates_apply_per_century(self):
        rates = ElementRates(a=1.0, a_dot=0.5, e=0.1, e_dot=0.01, i=2.0, i_dot=1.0,
                             L=10.0, L_dot=360.0, w_bar=5.0, w_bar_dot=0.0,
                             omega=1.0, omega_dot=0.0, central_body='Sun')
        elements = rates.at(2.0)
        self.assertAlmostEqual(elements.a_au, 2.0)
        self.assertAlmostEqual(elements.e, 0.12)
        self.assertAlmostEqual(elements.i_deg, 4.0)
        self.assertAlmostEqual(elements.w_deg, 4.0)
        self.assertAlmostEqual(elements.m_deg, 5.0)

if __name__ == '__main__':
    unittest.main()
