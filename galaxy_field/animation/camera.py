"""Camera that travels to, and aims at, the selected galaxy."""

from dataclasses import dataclass

import numpy as np

from ..config import (
    CAMERA_OFFSET_BASE,
    CAMERA_OFFSET_SLOPE,
    CAMERA_POSITION_SMOOTHING,
    CAMERA_SIZE_SCALE,
    CAMERA_START_POSITION,
    CAMERA_TARGET_SMOOTHING,
)
from ..initialization.layout import GalaxyInstance


def camera_offset(size_light_years: float) -> np.ndarray:
    """
    Offset from a galaxy to the viewing position.

    Every component grows with cbrt(size), so larger galaxies are viewed
    from further away.
    """
    size_scalar = float(np.cbrt(size_light_years)) * CAMERA_SIZE_SCALE
    return np.array(CAMERA_OFFSET_SLOPE) * size_scalar + np.array(CAMERA_OFFSET_BASE)


@dataclass
class CameraState:
    position: np.ndarray  # Where the camera is
    aim: np.ndarray  # Where it wants to look (snaps on selection change)
    look_at: np.ndarray  # Where it currently looks (smoothed toward aim)

    def copy(self) -> "CameraState":
        return CameraState(
            position=self.position.copy(),
            aim=self.aim.copy(),
            look_at=self.look_at.copy(),
        )


class CameraFollower:
    """
    Smoothly follows the selected galaxy.

    On a selection change the aim point jumps to the new galaxy at once,
    while the camera position and the look-at point keep gliding toward it.
    """

    def __init__(
        self,
        position_smoothing: float = CAMERA_POSITION_SMOOTHING,
        target_smoothing: float = CAMERA_TARGET_SMOOTHING,
    ):
        self.position_smoothing = position_smoothing
        self.target_smoothing = target_smoothing
        self._state = CameraState(
            position=np.array(CAMERA_START_POSITION, dtype=float),
            aim=np.zeros(3, dtype=float),
            look_at=np.zeros(3, dtype=float),
        )
        self._following = None

    @property
    def state(self) -> CameraState:
        return self._state

    @property
    def position(self) -> np.ndarray:
        return self._state.position

    @property
    def look_at(self) -> np.ndarray:
        return self._state.look_at

    @property
    def aim(self) -> np.ndarray:
        return self._state.aim

    def desired_position(self, instance: GalaxyInstance) -> np.ndarray:
        return instance.position_array() + camera_offset(instance.size_light_years)

    def follow(self, instance: GalaxyInstance) -> None:
        """Re-aim at a galaxy; the camera body travels there over later ticks."""
        if self._following != instance.id:
            self._following = instance.id
            self._state.aim[:] = instance.position

    def update(self, instance: GalaxyInstance) -> CameraState:
        """Advance one tick toward the selected galaxy."""
        self.follow(instance)
        state = self._state
        desired = self.desired_position(instance)
        state.position += (desired - state.position) * self.position_smoothing
        state.look_at += (state.aim - state.look_at) * self.target_smoothing
        return state
