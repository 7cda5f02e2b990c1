# coordinates.py
import logging
import math
from typing import Optional, Tuple

import numpy as np

from config import config, ConfigurationError # Import the global config instance
from ephemeris import BodyIdentity, OrbitalElements, OrbitalElementsProvider
from sky_math import (
    EphemerisError,
    NumericalDivergenceError,
    RaDec,
    ecliptic_to_equatorial,
    ra_dec_from_cartesian,
    vector_from_ra_dec,
)


class CoordinateTransform:
    """Turns orbital elements into sky positions.

    Pipeline per query: elements at the instant -> Cartesian position relative
    to the elements' central body -> geocentric ecliptic vector -> equatorial
    RA/Dec -> unit render-space vector. Everything is recomputed from scratch
    on each call and new arrays are returned, so identical inputs give
    bit-identical outputs.
    """

    def __init__(self, elements_provider: OrbitalElementsProvider,
                 obliquity_deg: float = config.Ephemeris.OBLIQUITY_J2000_DEG,
                 kepler_tolerance_rad: float = config.Ephemeris.KEPLER_TOLERANCE_RAD,
                 kepler_max_iterations: int = config.Ephemeris.KEPLER_MAX_ITERATIONS):
        if kepler_max_iterations <= 0:
            raise ConfigurationError(f"kepler_max_iterations must be positive, got {kepler_max_iterations}.")
        self.elements_provider = elements_provider
        self.obliquity_deg = obliquity_deg
        self.kepler_tolerance_rad = kepler_tolerance_rad
        self.kepler_max_iterations = kepler_max_iterations

    @classmethod
    def from_config(cls, sky_config) -> 'CoordinateTransform':
        return cls(
            OrbitalElementsProvider.from_config(sky_config),
            obliquity_deg=sky_config.Ephemeris.OBLIQUITY_J2000_DEG,
            kepler_tolerance_rad=sky_config.Ephemeris.KEPLER_TOLERANCE_RAD,
            kepler_max_iterations=sky_config.Ephemeris.KEPLER_MAX_ITERATIONS,
        )

    def solve_kepler_equation(self, m_rad: float, e: float) -> float:
        """
        Solves Kepler's Equation M = E - e * sin(E) for eccentric anomaly E using Newton-Raphson.

        Args:
            m_rad: Mean anomaly in radians.
            e: Eccentricity (0 <= e < 1).

        Returns:
            Eccentric anomaly E in radians.

        Raises:
            EphemerisError: If eccentricity is out of bounds.
            NumericalDivergenceError: If the iteration does not converge within
                                      `kepler_max_iterations` steps.
        """
        if not (0 <= e < 1):
            raise EphemerisError(f"Eccentricity e={e} is out of bounds [0, 1) for Kepler's equation solver.")

        # Work with M in [-pi, pi] so the first guess is close for every orbit
        m_rad = math.remainder(m_rad, 2.0 * math.pi)
        tolerance = self.kepler_tolerance_rad

        E_rad = m_rad + e * math.sin(m_rad) * (1.0 + e * math.cos(m_rad))
        if e > 0.8:
            E_rad = math.pi if m_rad > math.pi / 2 else m_rad

        for iteration in range(self.kepler_max_iterations):
            f_E = E_rad - e * math.sin(E_rad) - m_rad
            f_prime_E = 1 - e * math.cos(E_rad) # >= 1 - e > 0 for an ellipse

            if abs(f_E) < tolerance:
                return E_rad

            E_next = E_rad - f_E / f_prime_E

            if abs(E_next - E_rad) < tolerance:
                if config.Debug.KEPLER_SOLVER:
                    logging.debug(f"Kepler solver converged in {iteration + 1} iterations for M={m_rad}, e={e}.")
                return E_next

            E_rad = E_next

        raise NumericalDivergenceError(
            f"Kepler's equation did not converge after {self.kepler_max_iterations} iterations "
            f"for M={m_rad}, e={e}. Last E={E_rad}, f(E)={f_E}"
        )

    def heliocentric_coordinates(self, elements: OrbitalElements) -> np.ndarray:
        """
        Ecliptic Cartesian position (AU) relative to the elements' central body.

        For the Sun's elements this is the Sun seen from the Earth, which is the
        negative of the Earth's heliocentric position.
        """
        e = elements.e
        E_rad = self.solve_kepler_equation(math.radians(elements.m_deg), e)

        # Position in the orbital plane (perifocal coordinates)
        x_orb = elements.a_au * (math.cos(E_rad) - e)
        y_orb = elements.a_au * math.sqrt(1.0 - e * e) * math.sin(E_rad)

        w_rad = math.radians(elements.w_deg)
        omega_rad = math.radians(elements.omega_deg)
        i_rad = math.radians(elements.i_deg)
        cos_w, sin_w = math.cos(w_rad), math.sin(w_rad)
        cos_o, sin_o = math.cos(omega_rad), math.sin(omega_rad)
        cos_i, sin_i = math.cos(i_rad), math.sin(i_rad)

        x = (cos_o * cos_w - sin_o * sin_w * cos_i) * x_orb + (-cos_o * sin_w - sin_o * cos_w * cos_i) * y_orb
        y = (sin_o * cos_w + cos_o * sin_w * cos_i) * x_orb + (-sin_o * sin_w + cos_o * cos_w * cos_i) * y_orb
        z = (sin_w * sin_i) * x_orb + (cos_w * sin_i) * y_orb
        return np.array([x, y, z], dtype=np.float64)

    def sun_coordinates(self, time_ms: int) -> np.ndarray:
        return self.heliocentric_coordinates(self.elements_provider.elements_at(BodyIdentity.SUN, time_ms))

    def geocentric_ra_dec(self, body: BodyIdentity, time_ms: int,
                          sun_coords: Optional[np.ndarray] = None) -> RaDec:
        """Right ascension and declination of `body` as seen from the Earth's centre."""
        if sun_coords is None:
            sun_coords = self.sun_coordinates(time_ms)

        if body is BodyIdentity.SUN:
            geocentric = sun_coords
        else:
            elements = self.elements_provider.elements_at(body, time_ms)
            geocentric = self.heliocentric_coordinates(elements)
            if elements.central_body == 'Sun':
                # planet - earth, and earth = -sun
                geocentric = geocentric + sun_coords

        ra_dec = ra_dec_from_cartesian(ecliptic_to_equatorial(geocentric, self.obliquity_deg))
        if config.Debug.ORBITAL_MECHANICS:
            logging.debug(f"{body.value} at {time_ms} ms: RA={ra_dec.ra_deg:.4f} deg, Dec={ra_dec.dec_deg:.4f} deg")
        return ra_dec

    def compute_position(self, body: BodyIdentity, time_ms: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns:
            (render_vector, sun_coords): the unit render-space vector of `body`
            and the Sun's Cartesian position, both new arrays.

        Raises:
            UnknownBodyError: If `body` or the Sun has no orbital elements.
            NumericalDivergenceError: If Kepler's equation fails to converge.
        """
        sun_coords = self.sun_coordinates(time_ms)
        render_vector = vector_from_ra_dec(self.geocentric_ra_dec(body, time_ms, sun_coords))
        return render_vector, sun_coords
