# sources.py
"""Representation records handed to the renderer, and the per-body collection that owns them.

The three kinds are plain dataclasses kept in three separate ordered lists;
there is no shared base class. Their `position` fields all reference the
owning planet source's position array, so writing into that array in place
moves every representation at once.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

import numpy as np


class ChangeSignal(Enum):
    POSITIONS_CHANGED = 'positions_changed'
    IMAGES_CHANGED = 'images_changed'


@dataclass(eq=False)
class PointSource:
    position: np.ndarray
    color: Tuple[int, int, int, int]
    size: int


@dataclass(eq=False)
class ImageSource:
    position: np.ndarray
    image_id: str
    up_vector: np.ndarray
    size: float

    def set_up_vector(self, up_vector: np.ndarray):
        # Copy in place; the caller keeps ownership of its own array
        self.up_vector[:] = up_vector

    def set_image_id(self, image_id: str):
        self.image_id = image_id


@dataclass(eq=False)
class TextSource:
    position: np.ndarray
    text: str
    color: Tuple[int, int, int]


Representation = Union[PointSource, ImageSource, TextSource]


class SourceCollection:
    """The representations owned by one planet source, one ordered list per kind."""

    def __init__(self):
        self._points: List[PointSource] = []
        self._images: List[ImageSource] = []
        self._labels: List[TextSource] = []

    def add(self, representation: Representation):
        if isinstance(representation, ImageSource):
            self._images.append(representation)
        elif isinstance(representation, PointSource):
            self._points.append(representation)
        elif isinstance(representation, TextSource):
            self._labels.append(representation)
        else:
            raise TypeError(f"Unsupported representation type: {type(representation).__name__}")

    def add_all(self, representations):
        for representation in representations:
            self.add(representation)

    def get_points(self) -> Tuple[PointSource, ...]:
        return tuple(self._points)

    def get_images(self) -> Tuple[ImageSource, ...]:
        return tuple(self._images)

    def get_labels(self) -> Tuple[TextSource, ...]:
        return tuple(self._labels)

    def __len__(self) -> int:
        return len(self._points) + len(self._images) + len(self._labels)

    def __repr__(self) -> str:
        return (f"SourceCollection(points={len(self._points)}, images={len(self._images)}, "
                f"labels={len(self._labels)})")
