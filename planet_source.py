# planet_source.py
import logging
from typing import List, Optional, Set, Tuple

import numpy as np

from config import config # Import the global config instance
from coordinates import CoordinateTransform
from descriptors import BodyDescriptor, BodyDescriptorRegistry
from ephemeris import BodyIdentity
from preferences import PreferenceStore
from resources import StringResources
from sky_math import EphemerisError, SourceStateError
from sources import (
    ChangeSignal,
    ImageSource,
    PointSource,
    Representation,
    SourceCollection,
    TextSource,
)


class UpdateScheduler:
    """Decides when a body's position is stale.

    Each body has its own interval because apparent angular speeds differ by
    orders of magnitude (the Moon moves ~13 deg/day, Neptune ~0.006 deg/day).
    """

    def __init__(self, update_interval_ms: int):
        self.update_interval_ms = update_interval_ms
        self.last_update_time_ms = 0 # 0 means never updated

    def should_recompute(self, time_ms: int) -> bool:
        # Absolute difference so that rewinding time also refreshes
        return abs(time_ms - self.last_update_time_ms) > self.update_interval_ms

    def mark_updated(self, time_ms: int):
        self.last_update_time_ms = time_ms


class RepresentationSelector:
    """Chooses which representations a body gets. Runs once per planet source, at initialization.

    Moon: one image, up vector follows the Sun.
    Sun: one image with the fixed up vector, whatever the preference says.
    Others: one image with the fixed up vector if images are enabled, else one point.
    Every body also gets one label.
    """

    def __init__(self,
                 point_size: int = config.Display.PLANET_POINT_SIZE,
                 up_vector: Tuple[float, float, float] = config.Display.UP_VECTOR):
        self.point_size = point_size
        self.up_vector = np.array(up_vector, dtype=np.float64)

    def select(self, descriptor: BodyDescriptor, position: np.ndarray, sun_coords: np.ndarray,
               image_id: str, show_images: bool, name: str) -> List[Representation]:
        representations: List[Representation] = []
        body = descriptor.body
        if body is BodyIdentity.MOON:
            representations.append(
                ImageSource(position, image_id, np.array(sun_coords, dtype=np.float64), descriptor.image_size))
        elif show_images or body is BodyIdentity.SUN:
            representations.append(
                ImageSource(position, image_id, self.up_vector.copy(), descriptor.image_size))
        else:
            representations.append(PointSource(position, descriptor.marker_color, self.point_size))
        representations.append(TextSource(position, name, descriptor.label_color))
        return representations


class PlanetSource:
    """Sky source for one solar-system body.

    Lifecycle: construct, call `initialize(time_ms)` once, then call
    `update(time_ms)` as often as the caller likes. `update` only recomputes
    when the body's update interval has elapsed and reports what changed, so
    the caller knows whether to push new state to the renderer.

    All representations share `current_coords`; it is written in place and
    never replaced.

    Attributes:
        body (BodyIdentity): The body this source represents.
        descriptor (BodyDescriptor): Its display constants.
        name (str): Localised display name, resolved at construction.
        current_coords (np.ndarray): Current unit render-space position.
        sun_coords (np.ndarray): Sun position (the negative of the Earth's
            heliocentric position) at the last evaluation.
        image_id (Optional[str]): Image id at the last evaluation.
    """

    def __init__(self, body: BodyIdentity, registry: BodyDescriptorRegistry,
                 transform: CoordinateTransform, resources: StringResources,
                 preferences: PreferenceStore,
                 selector: Optional[RepresentationSelector] = None,
                 show_images_key: str = config.Display.SHOW_PLANETARY_IMAGES_KEY,
                 show_images_default: bool = config.Display.SHOW_PLANETARY_IMAGES_DEFAULT):
        self.body = body
        self.descriptor = registry.descriptor_for(body)
        self.transform = transform
        self.preferences = preferences
        self.selector = selector or RepresentationSelector()
        self.show_images_key = show_images_key
        self.show_images_default = show_images_default
        self.name = resources.get_display_name(self.descriptor)

        self.scheduler = UpdateScheduler(self.descriptor.update_interval_ms)
        self.sources = SourceCollection()
        self.current_coords = np.zeros(3, dtype=np.float64)
        self.sun_coords = np.zeros(3, dtype=np.float64)
        self.image_id: Optional[str] = None
        self._initialized = False

    @property
    def last_update_time_ms(self) -> int:
        return self.scheduler.last_update_time_ms

    def get_names(self) -> List[str]:
        return [self.name]

    def get_search_location(self) -> np.ndarray:
        return self.current_coords

    def _update_coords(self, time_ms: int):
        # Compute into temporaries first so a failure leaves the old state intact
        render_vector, sun_coords = self.transform.compute_position(self.body, time_ms)
        self.current_coords[:] = render_vector
        self.sun_coords[:] = sun_coords
        self.scheduler.mark_updated(time_ms)

    def initialize(self, time_ms: int) -> SourceCollection:
        """
        Computes the initial position and creates the representations.

        Raises:
            SourceStateError: If called a second time.
            EphemerisError: If the position cannot be computed; nothing is created.
        """
        if self._initialized:
            raise SourceStateError(f"{self.body.value} source is already initialized.")

        self._update_coords(time_ms)
        self.image_id = self.descriptor.image_id_at(time_ms)

        show_images = self.preferences.get_boolean(self.show_images_key, self.show_images_default)
        self.sources.add_all(self.selector.select(
            self.descriptor, self.current_coords, self.sun_coords, self.image_id, show_images, self.name))
        self._initialized = True
        logging.debug(f"Initialized {self.body.value} source at {time_ms} ms with {self.sources!r}.")
        return self.sources

    def update(self, time_ms: int) -> Set[ChangeSignal]:
        """
        Refreshes the position if the body's update interval has elapsed.

        Returns:
            The subset of {POSITIONS_CHANGED, IMAGES_CHANGED} that applies; empty
            when nothing was due.

        Raises:
            SourceStateError: If called before `initialize`.
            EphemerisError: If the position cannot be computed. The previous
                            position and update time are kept, so the next call
                            retries from the old baseline.
        """
        if not self._initialized:
            raise SourceStateError(f"{self.body.value} source must be initialized before update.")

        updates: Set[ChangeSignal] = set()
        if not self.scheduler.should_recompute(time_ms):
            return updates

        try:
            self._update_coords(time_ms)
        except EphemerisError as e:
            logging.error(f"Position update for {self.body.value} at {time_ms} ms failed: {e}", exc_info=True)
            raise
        updates.add(ChangeSignal.POSITIONS_CHANGED)

        images = self.sources.get_images()
        if self.body is BodyIdentity.MOON and images:
            moon_image = images[0]
            moon_image.set_up_vector(self.sun_coords)

            new_image_id = self.descriptor.image_id_at(time_ms)
            if new_image_id != self.image_id:
                self.image_id = new_image_id
                moon_image.set_image_id(new_image_id)
                updates.add(ChangeSignal.IMAGES_CHANGED)
        return updates

    def get_images(self) -> Tuple[ImageSource, ...]:
        return self.sources.get_images()

    def get_labels(self) -> Tuple[TextSource, ...]:
        return self.sources.get_labels()

    def get_points(self) -> Tuple[PointSource, ...]:
        return self.sources.get_points()
