"""Registry of render layers drawn for every galaxy.

The viewer receives a registry instead of reaching for module-level
visuals. Each layer names the buffer it draws (if any), a factory that
creates its vispy visual and a style function mapping the galaxy's
current VisualState to marker size and opacity.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Tuple

import numpy as np

from ..animation.visual_state import VisualState
from ..config import POINT_SIZE_SCALE
from .colors import with_alpha

# style(state, radius) -> (marker size in pixels, opacity)
LayerStyle = Callable[[VisualState, float], Tuple[float, float]]


@dataclass(frozen=True)
class LayerSpec:
    name: str
    buffer: Optional[str]  # Attribute of GalaxyBuffers, or None for the halo
    style: LayerStyle
    factory: Callable[[object], object]


def markers_factory(parent):
    """Create an additive-blended Markers visual under ``parent``."""
    from vispy.scene import visuals

    markers = visuals.Markers(parent=parent)
    markers.set_gl_state('additive', depth_test=False)
    return markers


def primary_style(state: VisualState, radius: float) -> Tuple[float, float]:
    return state.point_size * POINT_SIZE_SCALE, state.point_opacity


def bulge_style(state: VisualState, radius: float) -> Tuple[float, float]:
    return state.bulge_point_size * POINT_SIZE_SCALE, state.bulge_point_opacity


def dust_style(state: VisualState, radius: float) -> Tuple[float, float]:
    return 0.34 * POINT_SIZE_SCALE, 0.32


def halo_style(state: VisualState, radius: float) -> Tuple[float, float]:
    # Single soft marker at the core: grows with glow, fades with halo opacity
    size = radius * state.glow_strength * POINT_SIZE_SCALE
    opacity = min(1.0, 0.15 * state.halo_opacity + 0.1 * state.bulge_emissive)
    return size, opacity


class LayerRegistry:
    """Ordered collection of layers; earlier layers are drawn first."""

    def __init__(self):
        self._layers: "OrderedDict[str, LayerSpec]" = OrderedDict()

    def register(self, spec: LayerSpec) -> None:
        if spec.name in self._layers:
            raise ValueError(f"Layer already registered: {spec.name}")
        self._layers[spec.name] = spec

    def get(self, name: str) -> LayerSpec:
        return self._layers[name]

    def names(self) -> List[str]:
        return list(self._layers)

    def __iter__(self):
        return iter(self._layers.values())

    def __len__(self) -> int:
        return len(self._layers)


class FaceColorCache:
    """
    Display RGBA arrays per (galaxy, layer).

    The clamped RGB part is built once from the layer's raw colors; later
    lookups only rewrite the alpha column, in place.
    """

    def __init__(self):
        self._arrays: Dict[Hashable, np.ndarray] = {}

    def get(self, key: Hashable, colors: np.ndarray, opacity: float) -> np.ndarray:
        rgba = self._arrays.get(key)
        if rgba is None:
            rgba = with_alpha(colors, opacity)
            self._arrays[key] = rgba
        else:
            rgba[:, 3] = min(1.0, max(0.0, opacity))
        return rgba

    def clear(self) -> None:
        self._arrays.clear()

    def __len__(self) -> int:
        return len(self._arrays)


def default_registry() -> LayerRegistry:
    """Halo, dust, bulge and primary stars, back to front."""
    registry = LayerRegistry()
    registry.register(LayerSpec('halo', None, halo_style, markers_factory))
    registry.register(LayerSpec('dust', 'dust', dust_style, markers_factory))
    registry.register(LayerSpec('bulge', 'bulge', bulge_style, markers_factory))
    registry.register(LayerSpec('primary', 'primary', primary_style, markers_factory))
    return registry
