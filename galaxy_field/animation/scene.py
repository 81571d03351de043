"""Tick-driven scene: layout, cached buffers, interaction and animation."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..catalog import DEFAULT_CATALOG, GalaxyDescriptor
from ..initialization.generators import GalaxyBuffers
from ..initialization.layout import GalaxyInstance, layout_galaxies
from ..state.cache import ParticleCache
from ..state.interaction import InteractionState
from .camera import CameraFollower, CameraState
from .visual_state import (
    VisualState,
    initial_visual_state,
    interaction_mode,
    perturb_tilt,
    step,
    targets_for,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a renderer needs for one frame."""

    elapsed: float
    selected_id: str
    hovered_id: Optional[str]
    visual_states: Dict[str, VisualState]
    camera: CameraState


class GalaxyScene:
    """
    Owns the galaxy instances and advances their animation once per frame.

    Interaction calls (select, hover, next, previous) only change the
    interaction state; their effect shows up on the next :meth:`advance`.
    """

    def __init__(
        self,
        catalog: Sequence[GalaxyDescriptor] = DEFAULT_CATALOG,
        selected: Optional[str] = None,
        cache: Optional[ParticleCache] = None,
    ):
        """
        Initialize the scene.

        Args:
            catalog: Ordered galaxy descriptors (validated during layout)
            selected: Initially selected id (defaults to the first entry)
            cache: Particle cache to use (a new one if None)
        """
        self.instances: List[GalaxyInstance] = layout_galaxies(catalog)
        self._by_id = {instance.id: instance for instance in self.instances}
        self.interaction = InteractionState(
            [instance.id for instance in self.instances], selected
        )
        self.cache = cache if cache is not None else ParticleCache()
        self.camera = CameraFollower()
        self.camera.follow(self.selected_instance)
        self.elapsed = 0.0
        self._states: Dict[str, VisualState] = {
            instance.id: initial_visual_state(instance) for instance in self.instances
        }

    # --- Lookup ---------------------------------------------------------

    def instance(self, galaxy_id: str) -> GalaxyInstance:
        return self._by_id[galaxy_id]

    @property
    def selected_instance(self) -> GalaxyInstance:
        return self._by_id[self.interaction.selected]

    def visual_state(self, galaxy_id: str) -> VisualState:
        return self._states[galaxy_id]

    def buffers(self, galaxy_id: str) -> GalaxyBuffers:
        """Generated layers for a galaxy (generated on first use, then cached)."""
        return self.cache.get(self._by_id[galaxy_id])

    def all_buffers(self) -> Dict[str, GalaxyBuffers]:
        return {instance.id: self.cache.get(instance) for instance in self.instances}

    # --- Interaction ----------------------------------------------------

    def select(self, galaxy_id: str) -> str:
        return self.interaction.select(galaxy_id)

    def hover(self, galaxy_id: Optional[str]) -> Optional[str]:
        return self.interaction.hover(galaxy_id)

    def next(self) -> str:
        return self.interaction.next()

    def previous(self) -> str:
        return self.interaction.previous()

    def nudge_tilt(self, galaxy_id: str, d_pitch: float, d_roll: float) -> None:
        """Apply a transient tilt that decays back to the base tilt."""
        self._states[galaxy_id] = perturb_tilt(self._states[galaxy_id], d_pitch, d_roll)

    # --- Tick -----------------------------------------------------------

    def advance(self, dt: float) -> FrameSnapshot:
        """
        Advance every galaxy and the camera by one frame.

        All new states are computed from the previous tick's states and
        swapped in together, so instances never see each other's updates
        mid-tick.

        Args:
            dt: Seconds since the previous frame

        Returns:
            FrameSnapshot for the renderer
        """
        self.elapsed += dt
        interaction = self.interaction
        selected_id = interaction.selected
        hovered_id = interaction.hovered

        previous = self._states
        self._states = {
            instance.id: step(
                previous[instance.id],
                targets_for(
                    interaction_mode(
                        interaction.is_selected(instance.id),
                        interaction.is_hovered(instance.id),
                    )
                ),
                instance,
                dt,
                self.elapsed,
            )
            for instance in self.instances
        }

        camera_state = self.camera.update(self._by_id[selected_id])

        return FrameSnapshot(
            elapsed=self.elapsed,
            selected_id=selected_id,
            hovered_id=hovered_id,
            visual_states=dict(self._states),
            camera=camera_state.copy(),
        )
