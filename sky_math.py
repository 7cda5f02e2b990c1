# sky_math.py

import math
from typing import NamedTuple

import numpy as np

from config import config # Epochs live in config.Time

MILLISECONDS_PER_DAY = 86400000.0
DAYS_PER_JULIAN_CENTURY = 36525.0


class EphemerisError(Exception):
    """Base exception for ephemeris errors, including numerical issues."""
    pass

class UnknownBodyError(EphemerisError):
    """Raised when a body has no entry in an elements table or descriptor registry.

    The body enumeration is closed, so this always means a table was not
    updated alongside the enumeration. It is never recovered from.
    """
    pass

class NumericalDivergenceError(EphemerisError):
    """Raised when an iterative solver fails to converge within its iteration cap."""
    pass

class SourceStateError(EphemerisError):
    """Raised when a planet source is driven out of order (update before initialize, or initialize twice)."""
    pass


class RaDec(NamedTuple):
    ra_deg: float
    dec_deg: float


def normalize_vector(vector, epsilon=1e-12):
    """
    Normalizes a vector to unit length.

    Args:
        vector (np.ndarray): The vector to normalize.
        epsilon (float): Threshold below which the vector's magnitude is considered zero.

    Returns:
        np.ndarray: The normalized vector, or a zero vector of the same shape
                    if its magnitude is close to zero.
    """
    if not isinstance(vector, np.ndarray):
        vector = np.array(vector, dtype=float)

    norm = np.linalg.norm(vector)
    if norm < epsilon:
        return np.zeros_like(vector)
    return vector / norm

def normalize_degrees(angle_deg: float) -> float:
    """Wraps an angle into [0, 360)."""
    wrapped = math.fmod(angle_deg, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    return wrapped

def julian_date_from_ms(time_ms: int) -> float:
    """Converts milliseconds since the Unix epoch (UTC) to a Julian date."""
    return config.Time.UNIX_EPOCH_JULIAN_DATE + time_ms / MILLISECONDS_PER_DAY

def ms_from_julian_date(julian_date: float) -> int:
    return int(round((julian_date - config.Time.UNIX_EPOCH_JULIAN_DATE) * MILLISECONDS_PER_DAY))

def julian_centuries_from_ms(time_ms: int) -> float:
    """Julian centuries elapsed since J2000.0 for a Unix timestamp in milliseconds."""
    return (julian_date_from_ms(time_ms) - config.Time.J2000_JULIAN_DATE) / DAYS_PER_JULIAN_CENTURY

def ecliptic_to_equatorial(vector: np.ndarray, obliquity_deg: float) -> np.ndarray:
    """Rotates an ecliptic Cartesian vector about the x axis into the equatorial frame."""
    eps = math.radians(obliquity_deg)
    cos_e, sin_e = math.cos(eps), math.sin(eps)
    x, y, z = vector
    return np.array([x, cos_e * y - sin_e * z, sin_e * y + cos_e * z], dtype=np.float64)

def ra_dec_from_cartesian(vector: np.ndarray) -> RaDec:
    """Equatorial Cartesian vector (any length) to right ascension and declination in degrees."""
    x, y, z = (float(c) for c in vector)
    ra_deg = normalize_degrees(math.degrees(math.atan2(y, x)))
    dec_deg = math.degrees(math.atan2(z, math.hypot(x, y)))
    return RaDec(ra_deg, dec_deg)

def vector_from_ra_dec(ra_dec: RaDec) -> np.ndarray:
    """
    Unit render-space vector for a right ascension / declination pair.

    RA = Dec = 0 maps to +x, the celestial pole to +z, and right ascension
    increases from +x toward +y.
    """
    ra = math.radians(ra_dec.ra_deg)
    dec = math.radians(ra_dec.dec_deg)
    cos_dec = math.cos(dec)
    return np.array([math.cos(ra) * cos_dec, math.sin(ra) * cos_dec, math.sin(dec)], dtype=np.float64)

def angular_separation_deg(a: np.ndarray, b: np.ndarray) -> float:
    """Angle between two direction vectors, in degrees."""
    cos_angle = float(np.dot(normalize_vector(a), normalize_vector(b)))
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_angle))))

if __name__ == '__main__':
    print("--- Testing time conversion ---")
    print(f"JD at Unix epoch = {julian_date_from_ms(0)}")
    print(f"Centuries at J2000 = {julian_centuries_from_ms(ms_from_julian_date(config.Time.J2000_JULIAN_DATE))}")

    print("\n--- Testing RA/Dec conversion ---")
    print(f"RA/Dec (0, 0) -> {vector_from_ra_dec(RaDec(0.0, 0.0))}")
    print(f"RA/Dec (90, 0) -> {vector_from_ra_dec(RaDec(90.0, 0.0))}")
    print(f"RA/Dec (0, 90) -> {vector_from_ra_dec(RaDec(0.0, 90.0))}")
    print(f"Round trip (123.4, -45.6) -> {ra_dec_from_cartesian(vector_from_ra_dec(RaDec(123.4, -45.6)))}")

    print("\n--- Testing normalize_vector ---")
    print(f"Normalize [3, 4, 0]: {normalize_vector(np.array([3.0, 4.0, 0.0]))}")
    print(f"Normalize [0, 0, 0]: {normalize_vector(np.array([0.0, 0.0, 0.0]))}")
