# config.py
import logging

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(module)s - %(message)s')

# Fundamental time constants (used across different config sections)
MILLISECONDS_PER_MINUTE = 60 * 1000
MILLISECONDS_PER_HOUR = 60 * MILLISECONDS_PER_MINUTE
MILLISECONDS_PER_DAY = 24 * MILLISECONDS_PER_HOUR

# Earth equatorial radius expressed in AU, for the lunar orbit
EARTH_RADIUS_AU = 6378.14 / 149597870.7

class ConfigurationError(Exception):
    """Custom exception for sky configuration errors.

    Raised by `SkyConfig.validate()` when settings are invalid, inconsistent,
    or missing, which would prevent planet sources from computing positions or
    choosing representations correctly.

    Attributes:
        message (str): A human-readable explanation of the configuration error.
                       This is the first argument passed to the exception constructor.
    """
    pass

class SkyConfig:
    """Centralized, hierarchical configuration for solar-system sky sources.

    Parameters are grouped into nested static classes (`SkyConfig.Ephemeris`,
    `SkyConfig.Display`, `SkyConfig.Bodies`, ...). An instance named `config`
    is created at the end of this module and is importable via
    `from config import config`.

    The tables here are plain data. `ephemeris.OrbitalElementsProvider` and
    `descriptors.BodyDescriptorRegistry` turn them into immutable registries
    once at start-up, and those registries are handed to each planet source
    explicitly.

    Example Usage:
        >>> from config import config
        >>> print(config.Ephemeris.OBLIQUITY_J2000_DEG)
        >>> print(config.Bodies.DESCRIPTORS['Moon']['update_interval_ms'])
    """

    # --- Time Configuration ---
    class Time:
        """Time reference constants.

        Attributes:
            J2000_JULIAN_DATE (float): Julian Date of the J2000.0 epoch, the reference
                                       time for all element tables.
            UNIX_EPOCH_JULIAN_DATE (float): Julian Date of 1970-01-01T00:00:00Z. Instants
                                            are passed around as integer milliseconds
                                            since this epoch.
        """
        J2000_JULIAN_DATE = 2451545.0
        UNIX_EPOCH_JULIAN_DATE = 2440587.5

    # --- Ephemeris Configuration ---
    class Ephemeris:
        """Orbital element tables and solver settings.

        Attributes:
            OBLIQUITY_J2000_DEG (float): Obliquity of the ecliptic at J2000, used to
                                         rotate ecliptic positions into the equatorial frame.
            KEPLER_TOLERANCE_RAD (float): Convergence tolerance for the eccentric anomaly.
            KEPLER_MAX_ITERATIONS (int): Iteration cap for Kepler's equation before
                                         `NumericalDivergenceError` is raised.
            ORBITAL_ELEMENTS (Dict[str, Dict]): Keyed by body name. Each entry holds the
                J2000 value and rate per Julian century of the semi-major axis `a` (AU),
                eccentricity `e`, inclination `i` (deg), mean longitude `L` (deg),
                longitude of perihelion `w_bar` (deg) and longitude of ascending node
                `omega` (deg), plus `central_body`.
                Planets use the JPL approximate Keplerian elements (1800-2050).
                'Sun' is the Earth-Moon barycentre orbit turned through 180 degrees,
                i.e. the Sun's apparent orbit around the Earth.
                'Moon' is the mean geocentric lunar orbit.
        """
        OBLIQUITY_J2000_DEG = 23.439281
        KEPLER_TOLERANCE_RAD = 1e-6
        KEPLER_MAX_ITERATIONS = 50

        ORBITAL_ELEMENTS = {
            'Sun': {
                'a': 1.00000261, 'a_dot': 0.00000562,
                'e': 0.01671123, 'e_dot': -0.00004392,
                'i': -0.00001531, 'i_dot': -0.01294668,
                'L': 280.46457166, 'L_dot': 35999.37244981,
                'w_bar': 282.93768193, 'w_bar_dot': 0.32327364,
                'omega': 0.0, 'omega_dot': 0.0,
                'central_body': 'Earth'
            },
            'Moon': {
                'a': 60.2666 * EARTH_RADIUS_AU, 'a_dot': 0.0,
                'e': 0.054900, 'e_dot': 0.0,
                'i': 5.1454, 'i_dot': 0.0,
                'L': 218.3162, 'L_dot': 481267.8808,
                'w_bar': 83.3533, 'w_bar_dot': 4069.0133,
                'omega': 125.0434, 'omega_dot': -1934.1379,
                'central_body': 'Earth'
            },
            'Mercury': {
                'a': 0.38709927, 'a_dot': 0.00000037,
                'e': 0.20563593, 'e_dot': 0.00001906,
                'i': 7.00497902, 'i_dot': -0.00594749,
                'L': 252.25032350, 'L_dot': 149472.67411175,
                'w_bar': 77.45779628, 'w_bar_dot': 0.16047689,
                'omega': 48.33076593, 'omega_dot': -0.12534081,
                'central_body': 'Sun'
            },
            'Venus': {
                'a': 0.72333566, 'a_dot': 0.00000390,
                'e': 0.00677672, 'e_dot': -0.00004107,
                'i': 3.39467605, 'i_dot': -0.00078890,
                'L': 181.97909950, 'L_dot': 58517.81538729,
                'w_bar': 131.60246718, 'w_bar_dot': 0.00268329,
                'omega': 76.67984255, 'omega_dot': -0.27769418,
                'central_body': 'Sun'
            },
            'Mars': {
                'a': 1.52371034, 'a_dot': 0.00001847,
                'e': 0.09339410, 'e_dot': 0.00007882,
                'i': 1.84969142, 'i_dot': -0.00813131,
                'L': -4.55343205, 'L_dot': 19140.30268499,
                'w_bar': -23.94362959, 'w_bar_dot': 0.44441088,
                'omega': 49.55953891, 'omega_dot': -0.29257343,
                'central_body': 'Sun'
            },
            'Jupiter': {
                'a': 5.20288700, 'a_dot': -0.00011607,
                'e': 0.04838624, 'e_dot': -0.00013253,
                'i': 1.30439695, 'i_dot': -0.00183714,
                'L': 34.39644051, 'L_dot': 3034.74612775,
                'w_bar': 14.72847983, 'w_bar_dot': 0.21252668,
                'omega': 100.47390909, 'omega_dot': 0.20469106,
                'central_body': 'Sun'
            },
            'Saturn': {
                'a': 9.53667594, 'a_dot': -0.00125060,
                'e': 0.05386179, 'e_dot': -0.00050991,
                'i': 2.48599187, 'i_dot': 0.00193609,
                'L': 49.95424423, 'L_dot': 1222.49362201,
                'w_bar': 92.59887831, 'w_bar_dot': -0.41897216,
                'omega': 113.66242448, 'omega_dot': -0.28867794,
                'central_body': 'Sun'
            },
            'Uranus': {
                'a': 19.18916464, 'a_dot': -0.00196176,
                'e': 0.04725744, 'e_dot': -0.00004397,
                'i': 0.77263783, 'i_dot': -0.00242939,
                'L': 313.23810451, 'L_dot': 428.48202785,
                'w_bar': 170.95427630, 'w_bar_dot': 0.40805281,
                'omega': 74.01692503, 'omega_dot': 0.04240589,
                'central_body': 'Sun'
            },
            'Neptune': {
                'a': 30.06992276, 'a_dot': 0.00026291,
                'e': 0.00859048, 'e_dot': 0.00005105,
                'i': 1.77004347, 'i_dot': 0.00035372,
                'L': -55.12002969, 'L_dot': 218.45945325,
                'w_bar': 44.96476227, 'w_bar_dot': -0.32241464,
                'omega': 131.78422574, 'omega_dot': -0.00508664,
                'central_body': 'Sun'
            }
        }

    # --- Display Configuration ---
    class Display:
        """Representation settings shared by all bodies.

        Attributes:
            SHOW_PLANETARY_IMAGES_KEY (str): Preference key for the image/point toggle.
            SHOW_PLANETARY_IMAGES_DEFAULT (bool): Value used when the preference is unset.
            PLANET_POINT_SIZE (int): Size of the point marker drawn when images are off.
            PLANET_MARKER_COLOR (Tuple[int, int, int, int]): RGBA colour of that marker.
            PLANET_LABEL_COLOR (Tuple[int, int, int]): RGB colour of body labels.
            UP_VECTOR (Tuple[float, float, float]): Fixed up vector for every image
                                                    except the Moon's.
        """
        SHOW_PLANETARY_IMAGES_KEY = "show_planetary_images"
        SHOW_PLANETARY_IMAGES_DEFAULT = True
        PLANET_POINT_SIZE = 3
        PLANET_MARKER_COLOR = (129, 126, 246, 20)
        PLANET_LABEL_COLOR = (246, 126, 129)
        UP_VECTOR = (0.0, 1.0, 0.0)

    # --- Moon Configuration ---
    class Moon:
        """Moon phase image selection.

        Attributes:
            SYNODIC_MONTH_DAYS (float): Mean length of the lunar phase cycle.
            REFERENCE_NEW_MOON_JD (float): A known new moon (2000-01-06 18:14 UTC).
            PHASE_IMAGE_COUNT (int): Number of phase images ('moon0' .. 'moon7');
                                     'moon0' is new, 'moon4' is full.
        """
        SYNODIC_MONTH_DAYS = 29.530588853
        REFERENCE_NEW_MOON_JD = 2451550.25972
        PHASE_IMAGE_COUNT = 8
        PHASE_IMAGE_PREFIX = "moon"

    # --- Per-body Descriptor Configuration ---
    class Bodies:
        """Per-body display constants.

        Attributes:
            DESCRIPTORS (Dict[str, Dict]): Keyed by body name.
                `name_key` is the string resource key for the display name.
                `update_interval_ms` is the minimum time between position refreshes,
                tuned to the body's apparent angular speed.
                `image` is the image id. The Moon has none; it picks a phase image
                (see `Moon`).
                `image_size` is the angular display size of the image.
        """
        DESCRIPTORS = {
            'Sun': {
                'name_key': 'sun', 'image': 'sun', 'image_size': 0.02,
                'update_interval_ms': 6 * MILLISECONDS_PER_HOUR
            },
            'Moon': {
                'name_key': 'moon', 'image_size': 0.02,
                'update_interval_ms': MILLISECONDS_PER_HOUR
            },
            'Mercury': {
                'name_key': 'mercury', 'image': 'mercury', 'image_size': 0.01,
                'update_interval_ms': 3 * MILLISECONDS_PER_HOUR
            },
            'Venus': {
                'name_key': 'venus', 'image': 'venus', 'image_size': 0.01,
                'update_interval_ms': 6 * MILLISECONDS_PER_HOUR
            },
            'Mars': {
                'name_key': 'mars', 'image': 'mars', 'image_size': 0.01,
                'update_interval_ms': 12 * MILLISECONDS_PER_HOUR
            },
            'Jupiter': {
                'name_key': 'jupiter', 'image': 'jupiter', 'image_size': 0.01,
                'update_interval_ms': MILLISECONDS_PER_DAY
            },
            'Saturn': {
                'name_key': 'saturn', 'image': 'saturn', 'image_size': 0.02,
                'update_interval_ms': 2 * MILLISECONDS_PER_DAY
            },
            'Uranus': {
                'name_key': 'uranus', 'image': 'uranus', 'image_size': 0.01,
                'update_interval_ms': 4 * MILLISECONDS_PER_DAY
            },
            'Neptune': {
                'name_key': 'neptune', 'image': 'neptune', 'image_size': 0.01,
                'update_interval_ms': 7 * MILLISECONDS_PER_DAY
            }
        }

    # --- Debug Configuration ---
    class Debug:
        """Configuration for debugging features and logging verbosity.

        Attributes:
            ORBITAL_MECHANICS (bool): Toggle for verbose logging from coordinate calculations.
            KEPLER_SOLVER (bool): Toggle for logging iteration counts from Kepler's equation solver.
            CONFIG_VALIDATION (bool): If True, logs a summary line after validation.
        """
        ORBITAL_MECHANICS = False
        KEPLER_SOLVER = False
        CONFIG_VALIDATION = True

    def __init__(self):
        """Initializes the `SkyConfig` instance and validates it.

        Raises:
            ConfigurationError: If `self.validate()` detects any issues with the
                                configuration values.
        """
        self.validate()

    def validate(self):
        """Checks the element tables, descriptors and display settings for consistency.

        -   **Ephemeris**: obliquity within (0, 90), positive solver tolerance and
            iteration cap, every element entry complete with a > 0, 0 <= e < 1,
            |i| <= 180 and a known `central_body`.
        -   **Bodies**: every body with elements has a descriptor and vice versa;
            positive update intervals and image sizes; non-empty name keys; an
            `image` id for every body except the Moon.
        -   **Display**: colour channels within 0-255, positive point size,
            non-zero up vector.
        -   **Moon**: positive synodic month and image count.

        Raises:
            ConfigurationError: If any configuration setting is found to be invalid.
        """
        if not (0.0 < self.Ephemeris.OBLIQUITY_J2000_DEG < 90.0):
            raise ConfigurationError(
                f"Ephemeris.OBLIQUITY_J2000_DEG ({self.Ephemeris.OBLIQUITY_J2000_DEG}) must be between 0 and 90 degrees."
            )
        if self.Ephemeris.KEPLER_TOLERANCE_RAD <= 0:
            raise ConfigurationError("Ephemeris.KEPLER_TOLERANCE_RAD must be positive.")
        if self.Ephemeris.KEPLER_MAX_ITERATIONS <= 0:
            raise ConfigurationError("Ephemeris.KEPLER_MAX_ITERATIONS must be positive.")

        required_keys = ('a', 'a_dot', 'e', 'e_dot', 'i', 'i_dot', 'L', 'L_dot',
                         'w_bar', 'w_bar_dot', 'omega', 'omega_dot', 'central_body')
        for name, data in self.Ephemeris.ORBITAL_ELEMENTS.items():
            missing = [key for key in required_keys if key not in data]
            if missing:
                raise ConfigurationError(f"Orbital elements for '{name}' are missing keys: {missing}.")
            if data['a'] <= 0:
                raise ConfigurationError(f"Semi-major axis of '{name}' must be positive.")
            if not (0.0 <= data['e'] < 1.0):
                raise ConfigurationError(f"Eccentricity of '{name}' ({data['e']}) must be >= 0 and < 1.")
            if abs(data['i']) > 180.0:
                raise ConfigurationError(f"Inclination of '{name}' ({data['i']}) must be within +/-180 degrees.")
            if data['central_body'] not in ('Sun', 'Earth'):
                raise ConfigurationError(
                    f"Central body '{data['central_body']}' for '{name}' must be 'Sun' or 'Earth'."
                )

        element_names = set(self.Ephemeris.ORBITAL_ELEMENTS)
        descriptor_names = set(self.Bodies.DESCRIPTORS)
        if element_names != descriptor_names:
            raise ConfigurationError(
                f"Bodies with elements {sorted(element_names)} do not match bodies with "
                f"descriptors {sorted(descriptor_names)}."
            )

        for name, data in self.Bodies.DESCRIPTORS.items():
            if not data.get('name_key'):
                raise ConfigurationError(f"Descriptor for '{name}' needs a non-empty 'name_key'.")
            if data.get('update_interval_ms', 0) <= 0:
                raise ConfigurationError(f"Update interval of '{name}' must be positive.")
            if data.get('image_size', 0.0) <= 0:
                raise ConfigurationError(f"Image size of '{name}' must be positive.")
            if name != 'Moon' and not data.get('image'):
                raise ConfigurationError(f"Descriptor for '{name}' needs a non-empty 'image'.")

        for label, color in (("PLANET_MARKER_COLOR", self.Display.PLANET_MARKER_COLOR),
                             ("PLANET_LABEL_COLOR", self.Display.PLANET_LABEL_COLOR)):
            if not all(0 <= channel <= 255 for channel in color):
                raise ConfigurationError(f"Display.{label} {color} has a channel outside 0-255.")
        if self.Display.PLANET_POINT_SIZE <= 0:
            raise ConfigurationError("Display.PLANET_POINT_SIZE must be positive.")
        if not any(self.Display.UP_VECTOR):
            raise ConfigurationError("Display.UP_VECTOR must be non-zero.")

        if self.Moon.SYNODIC_MONTH_DAYS <= 0:
            raise ConfigurationError("Moon.SYNODIC_MONTH_DAYS must be positive.")
        if self.Moon.PHASE_IMAGE_COUNT <= 0:
            raise ConfigurationError("Moon.PHASE_IMAGE_COUNT must be positive.")

        if self.Debug.CONFIG_VALIDATION:
            logging.info(f"Configuration validated successfully ({len(element_names)} bodies).")


# --- Instantiate the configuration ---
# e.g., from config import config
try:
    config = SkyConfig()
except ConfigurationError as e:
    logging.error(f"FATAL CONFIGURATION ERROR: {e}", exc_info=True)
    raise
