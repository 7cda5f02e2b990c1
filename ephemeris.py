# ephemeris.py
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping

from sky_math import UnknownBodyError, julian_centuries_from_ms, normalize_degrees


class BodyIdentity(Enum):
    """The closed set of bodies a planet source can represent."""
    SUN = 'Sun'
    MOON = 'Moon'
    MERCURY = 'Mercury'
    VENUS = 'Venus'
    MARS = 'Mars'
    JUPITER = 'Jupiter'
    SATURN = 'Saturn'
    URANUS = 'Uranus'
    NEPTUNE = 'Neptune'

    @classmethod
    def from_name(cls, name: str) -> 'BodyIdentity':
        """Case-insensitive lookup by body name, e.g. 'jupiter'."""
        for body in cls:
            if body.value.lower() == name.strip().lower():
                return body
        raise UnknownBodyError(f"No body named '{name}'.")


@dataclass(frozen=True)
class OrbitalElements:
    """Classical orbital elements of one body at one instant.

    Angles are in degrees. `central_body` names what the resulting Cartesian
    position is relative to ('Sun' or 'Earth').
    """
    a_au: float  # Semi-major axis in AU
    e: float  # Eccentricity
    i_deg: float  # Inclination
    omega_deg: float  # Longitude of ascending node (Ω)
    w_deg: float  # Argument of perihelion (ω)
    m_deg: float  # Mean anomaly (M)
    central_body: str = 'Sun'


@dataclass(frozen=True)
class ElementRates:
    """J2000 values and per-century rates of one table entry."""
    a: float
    a_dot: float
    e: float
    e_dot: float
    i: float
    i_dot: float
    L: float
    L_dot: float
    w_bar: float
    w_bar_dot: float
    omega: float
    omega_dot: float
    central_body: str

    def at(self, centuries: float) -> OrbitalElements:
        """Evaluates the elements `centuries` Julian centuries after J2000."""
        mean_longitude = self.L + self.L_dot * centuries
        perihelion_longitude = self.w_bar + self.w_bar_dot * centuries
        node = self.omega + self.omega_dot * centuries
        return OrbitalElements(
            a_au=self.a + self.a_dot * centuries,
            e=self.e + self.e_dot * centuries,
            i_deg=self.i + self.i_dot * centuries,
            omega_deg=normalize_degrees(node),
            w_deg=normalize_degrees(perihelion_longitude - node),
            m_deg=normalize_degrees(mean_longitude - perihelion_longitude),
            central_body=self.central_body,
        )


class OrbitalElementsProvider:
    """Returns the orbital elements of a body at a given instant.

    Built once from a table shaped like `config.Ephemeris.ORBITAL_ELEMENTS`; the
    table is copied into frozen records so later edits to the source dict do
    not leak in.
    """

    def __init__(self, element_table: Mapping[str, Mapping[str, object]]):
        rates: Dict[BodyIdentity, ElementRates] = {}
        for body in BodyIdentity:
            if body.value in element_table:
                rates[body] = ElementRates(**element_table[body.value])
        self._rates = MappingProxyType(rates)
        logging.debug(f"OrbitalElementsProvider built for {len(rates)} bodies.")

    @classmethod
    def from_config(cls, sky_config) -> 'OrbitalElementsProvider':
        return cls(sky_config.Ephemeris.ORBITAL_ELEMENTS)

    def has_body(self, body: BodyIdentity) -> bool:
        return body in self._rates

    def elements_at(self, body: BodyIdentity, time_ms: int) -> OrbitalElements:
        """
        Args:
            body: The body to look up.
            time_ms: Milliseconds since the Unix epoch (UTC).

        Raises:
            UnknownBodyError: If the table has no entry for `body`.
        """
        try:
            rates = self._rates[body]
        except KeyError:
            raise UnknownBodyError(f"No orbital elements for {body!r}.") from None
        return rates.at(julian_centuries_from_ms(time_ms))
