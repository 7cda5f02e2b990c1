import unittest

from config import config, ConfigurationError, SkyConfig

class TestSkyConfig(unittest.TestCase):

    def test_default_config_is_valid(self):
        config.validate()
        self.assertIsInstance(SkyConfig(), SkyConfig)

    def test_element_and_descriptor_tables_agree(self):
        self.assertEqual(set(config.Ephemeris.ORBITAL_ELEMENTS), set(config.Bodies.DESCRIPTORS))

    def test_non_positive_interval_rejected(self):
        class BadIntervalConfig(SkyConfig):
            class Bodies(SkyConfig.Bodies):
                DESCRIPTORS = {name: dict(data) for name, data in SkyConfig.Bodies.DESCRIPTORS.items()}
        BadIntervalConfig.Bodies.DESCRIPTORS['Mars']['update_interval_ms'] = 0
        with self.assertRaises(ConfigurationError):
            BadIntervalConfig()

    def test_missing_elements_rejected(self):
        class MissingBodyConfig(SkyConfig):
            class Ephemeris(SkyConfig.Ephemeris):
                ORBITAL_ELEMENTS = {name: data for name, data in SkyConfig.Ephemeris.ORBITAL_ELEMENTS.items()
                                    if name != 'Neptune'}
        with self.assertRaises(ConfigurationError):
            MissingBodyConfig()

    def test_bad_eccentricity_rejected(self):
        class HyperbolicConfig(SkyConfig):
            class Ephemeris(SkyConfig.Ephemeris):
                ORBITAL_ELEMENTS = {name: dict(data) for name, data in SkyConfig.Ephemeris.ORBITAL_ELEMENTS.items()}
        HyperbolicConfig.Ephemeris.ORBITAL_ELEMENTS['Mercury']['e'] = 1.2
        with self.assertRaises(ConfigurationError):
            HyperbolicConfig()

    def test_color_channel_out_of_range_rejected(self):
        class BadColorConfig(SkyConfig):
            class Display(SkyConfig.Display):
                PLANET_LABEL_COLOR = (300, 0, 0)
        with self.assertRaises(ConfigurationError):
            BadColorConfig()

    def test_zero_point_size_rejected(self):
        class BadPointConfig(SkyConfig):
            class Display(SkyConfig.Display):
                PLANET_POINT_SIZE = 0
        with self.assertRaises(ConfigurationError):
            BadPointConfig()

    def test_missing_image_rejected(self):
        class NoImageConfig(SkyConfig):
            class Bodies(SkyConfig.Bodies):
                DESCRIPTORS = {name: dict(data) for name, data in SkyConfig.Bodies.DESCRIPTORS.items()}
        del NoImageConfig.Bodies.DESCRIPTORS['Saturn']['image']
        with self.assertRaises(ConfigurationError):
            NoImageConfig()

    def test_moon_descriptor_has_no_fixed_image(self):
        self.assertNotIn('image', config.Bodies.DESCRIPTORS['Moon'])
        for name, data in config.Bodies.DESCRIPTORS.items():
            if name != 'Moon':
                self.assertTrue(data['image'])

if __name__ == '__main__':
    unittest.main()
