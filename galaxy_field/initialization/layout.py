"""Placement of catalog galaxies on the display ring."""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..catalog import GalaxyDescriptor, validate_catalog
from ..config import (
    EDGE_ON_GALAXY_ID,
    LAYOUT_RADIUS,
    LAYOUT_VERTICAL_AMPLITUDE,
    ROTATION_SPEED_DEFAULT,
    ROTATION_SPEED_EDGE_ON,
    ROTATION_SPEED_ELLIPTICAL,
)
from .morphology import Morphology, classify


@dataclass(frozen=True)
class GalaxyInstance:
    """A catalog galaxy together with its static scene geometry."""

    descriptor: GalaxyDescriptor
    index: int
    position: Tuple[float, float, float]
    base_tilt: Tuple[float, float, float]  # Euler angles (x, y, z) in radians
    rotation_speed: float

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def type(self) -> str:
        return self.descriptor.type

    @property
    def size_light_years(self) -> float:
        return self.descriptor.size_light_years

    @property
    def morphology(self) -> Morphology:
        return classify(self.descriptor.type)

    @property
    def is_edge_on(self) -> bool:
        return self.descriptor.id == EDGE_ON_GALAXY_ID

    @property
    def seed_phase(self) -> float:
        """Per-instance phase offset for the twinkle animation."""
        return self.index * 123.456 + 42

    def position_array(self) -> np.ndarray:
        return np.array(self.position, dtype=np.float64)


def _degrees(x: float, y: float, z: float) -> Tuple[float, float, float]:
    return (math.radians(x), math.radians(y), math.radians(z))


def compute_base_tilt(descriptor: GalaxyDescriptor, index: int) -> Tuple[float, float, float]:
    """
    Resting orientation of a galaxy.

    The edge-on entry is matched by id, not by any computed property: it
    stands for a real galaxy's known viewing angle.
    """
    if descriptor.id == EDGE_ON_GALAXY_ID:
        return _degrees(84, -12, 4)
    if classify(descriptor.type) is Morphology.IRREGULAR:
        return _degrees(18, index * 12, -8)
    return _degrees(32, index * 8, 6)


def compute_rotation_speed(descriptor: GalaxyDescriptor) -> float:
    if descriptor.id == EDGE_ON_GALAXY_ID:
        return ROTATION_SPEED_EDGE_ON
    if classify(descriptor.type) is Morphology.ELLIPTICAL:
        return ROTATION_SPEED_ELLIPTICAL
    return ROTATION_SPEED_DEFAULT


def compute_position(index: int, total: int) -> Tuple[float, float, float]:
    angle = (index / total) * math.pi * 2
    x = math.cos(angle) * LAYOUT_RADIUS
    z = math.sin(angle) * LAYOUT_RADIUS
    y = math.sin(angle * 2) * LAYOUT_VERTICAL_AMPLITUDE
    return (x, y, z)


def layout_galaxies(catalog: Sequence[GalaxyDescriptor]) -> List[GalaxyInstance]:
    """
    Create one instance per catalog entry, evenly spaced on the layout ring.

    Args:
        catalog: Ordered galaxy descriptors (validated here)

    Returns:
        Instances in catalog order
    """
    catalog = validate_catalog(catalog)
    total = len(catalog)
    return [
        GalaxyInstance(
            descriptor=descriptor,
            index=index,
            position=compute_position(index, total),
            base_tilt=compute_base_tilt(descriptor, index),
            rotation_speed=compute_rotation_speed(descriptor),
        )
        for index, descriptor in enumerate(catalog)
    ]
