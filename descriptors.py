# descriptors.py
import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Tuple

from ephemeris import BodyIdentity
from sky_math import MILLISECONDS_PER_DAY, UnknownBodyError, julian_date_from_ms


@dataclass(frozen=True)
class ConstantImageSelector:
    """Image selector for bodies whose image never changes."""
    image_id: str

    def __call__(self, time_ms: int) -> str:
        return self.image_id


@dataclass(frozen=True)
class MoonPhaseImageSelector:
    """Picks one of `image_count` phase images from the mean synodic phase.

    Phase 0 is new moon, 0.5 full moon. Image k covers the phase interval
    centred on k / image_count, so 'moon0' spans new moon on both sides.
    """
    synodic_month_days: float
    reference_new_moon_jd: float
    image_count: int = 8
    prefix: str = "moon"

    def phase(self, time_ms: int) -> float:
        """Fraction of the synodic cycle elapsed since new moon, in [0, 1)."""
        days = julian_date_from_ms(time_ms) - self.reference_new_moon_jd
        return (days / self.synodic_month_days) % 1.0

    def image_index(self, time_ms: int) -> int:
        return int(math.floor(self.phase(time_ms) * self.image_count + 0.5)) % self.image_count

    def period_ms(self) -> float:
        return self.synodic_month_days * MILLISECONDS_PER_DAY

    def __call__(self, time_ms: int) -> str:
        return f"{self.prefix}{self.image_index(time_ms)}"


@dataclass(frozen=True)
class BodyDescriptor:
    body: BodyIdentity
    name_key: str
    update_interval_ms: int
    image_selector: Callable[[int], str]
    image_size: float
    marker_color: Tuple[int, int, int, int]
    label_color: Tuple[int, int, int]

    def image_id_at(self, time_ms: int) -> str:
        return self.image_selector(time_ms)


class BodyDescriptorRegistry:
    """Immutable per-body metadata, built once at start-up.

    Owned by whoever creates planet sources and passed to each of them; there
    is no module-level registry.
    """

    def __init__(self, descriptors: Mapping[BodyIdentity, BodyDescriptor]):
        self._descriptors = MappingProxyType(dict(descriptors))

    @classmethod
    def from_config(cls, sky_config) -> 'BodyDescriptorRegistry':
        moon_selector = MoonPhaseImageSelector(
            synodic_month_days=sky_config.Moon.SYNODIC_MONTH_DAYS,
            reference_new_moon_jd=sky_config.Moon.REFERENCE_NEW_MOON_JD,
            image_count=sky_config.Moon.PHASE_IMAGE_COUNT,
            prefix=sky_config.Moon.PHASE_IMAGE_PREFIX,
        )
        descriptors: Dict[BodyIdentity, BodyDescriptor] = {}
        for body in BodyIdentity:
            data = sky_config.Bodies.DESCRIPTORS.get(body.value)
            if data is None:
                continue
            if body is BodyIdentity.MOON:
                selector = moon_selector
            else:
                selector = ConstantImageSelector(data['image'])
            descriptors[body] = BodyDescriptor(
                body=body,
                name_key=data['name_key'],
                update_interval_ms=int(data['update_interval_ms']),
                image_selector=selector,
                image_size=float(data['image_size']),
                marker_color=tuple(sky_config.Display.PLANET_MARKER_COLOR),
                label_color=tuple(sky_config.Display.PLANET_LABEL_COLOR),
            )
        logging.info(f"BodyDescriptorRegistry built for {len(descriptors)} bodies.")
        return cls(descriptors)

    def __contains__(self, body: BodyIdentity) -> bool:
        return body in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def descriptor_for(self, body: BodyIdentity) -> BodyDescriptor:
        try:
            return self._descriptors[body]
        except KeyError:
            raise UnknownBodyError(f"No descriptor registered for {body!r}.") from None
