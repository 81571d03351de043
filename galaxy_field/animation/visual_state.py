"""Per-galaxy animated material state and its smoothing step."""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from ..config import (
    RING_SPIN_SPEED,
    SMOOTH_BULGE_EMISSIVE,
    SMOOTH_BULGE_POINTS,
    SMOOTH_GLOW,
    SMOOTH_HALO,
    SMOOTH_OUTER_HALO,
    SMOOTH_RING,
    SMOOTH_SCALE,
    SMOOTH_TILT,
    TWINKLE_OPACITY_AMPLITUDE,
    TWINKLE_OPACITY_BASE,
    TWINKLE_OPACITY_FREQUENCY,
    TWINKLE_SIZE_FREQUENCY,
    TWINKLE_SIZE_RANGE,
)
from ..initialization.layout import GalaxyInstance


class InteractionMode(Enum):
    IDLE = "idle"
    HOVERED = "hovered"
    SELECTED = "selected"


def interaction_mode(is_selected: bool, is_hovered: bool) -> InteractionMode:
    """Resolve the two flags; selection always wins over hover."""
    if is_selected:
        return InteractionMode.SELECTED
    if is_hovered:
        return InteractionMode.HOVERED
    return InteractionMode.IDLE


@dataclass(frozen=True)
class VisualTargets:
    """Values the animated parameters converge to in one interaction mode."""

    scale: float
    ring_opacity: float
    glow_strength: float
    halo_opacity: float
    outer_halo_opacity: float
    bulge_emissive: float
    bulge_point_size: float
    bulge_point_opacity: float


TARGETS = {
    InteractionMode.IDLE: VisualTargets(
        scale=1.0,
        ring_opacity=0.16,
        glow_strength=0.75,
        halo_opacity=0.72,
        outer_halo_opacity=0.24,
        bulge_emissive=0.68,
        bulge_point_size=0.85,
        bulge_point_opacity=0.82,
    ),
    InteractionMode.HOVERED: VisualTargets(
        scale=1.07,
        ring_opacity=0.22,
        glow_strength=1.08,
        halo_opacity=0.95,
        outer_halo_opacity=0.34,
        bulge_emissive=0.98,
        bulge_point_size=1.05,
        bulge_point_opacity=0.82,
    ),
    InteractionMode.SELECTED: VisualTargets(
        scale=1.16,
        ring_opacity=0.32,
        glow_strength=1.5,
        halo_opacity=1.35,
        outer_halo_opacity=0.5,
        bulge_emissive=1.22,
        bulge_point_size=1.3,
        bulge_point_opacity=1.0,
    ),
}


def targets_for(mode: InteractionMode) -> VisualTargets:
    return TARGETS[mode]


@dataclass(frozen=True)
class VisualState:
    """
    Animated parameters of one galaxy, read by the renderer every frame.

    Owned by the animator; a new instance is produced on every tick.
    """

    scale: float = 1.0
    ring_opacity: float = 0.18
    ring_spin: float = 0.0
    glow_strength: float = 0.85
    halo_opacity: float = 0.8
    outer_halo_opacity: float = 0.24
    bulge_emissive: float = 0.7
    bulge_point_size: float = 0.95
    bulge_point_opacity: float = 0.86
    point_size: float = 0.48
    point_opacity: float = 0.88
    rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)  # pitch, yaw, roll


def smooth(current: float, target: float, factor: float) -> float:
    """One exponential smoothing step toward ``target``."""
    return current + (target - current) * factor


def initial_visual_state(instance: GalaxyInstance) -> VisualState:
    return VisualState(rotation=instance.base_tilt)


def twinkle(elapsed: float, phase: float) -> Tuple[float, float]:
    """
    Point size and opacity of the primary field at a moment in time.

    Independent of smoothing: a pure function of elapsed time and the
    instance phase.
    """
    low, high = TWINKLE_SIZE_RANGE
    wave = (math.sin(elapsed * TWINKLE_SIZE_FREQUENCY + phase) + 1) / 2
    size = low + (high - low) * wave
    opacity = TWINKLE_OPACITY_BASE + TWINKLE_OPACITY_AMPLITUDE * math.sin(
        elapsed * TWINKLE_OPACITY_FREQUENCY + phase
    )
    return size, opacity


def step(
    state: VisualState,
    targets: VisualTargets,
    instance: GalaxyInstance,
    dt: float,
    elapsed: float,
) -> VisualState:
    """
    Advance one galaxy's visual state by one tick.

    Smoothing factors are applied once per call rather than scaled by
    ``dt``, so convergence speed follows the frame rate. Yaw and ring spin
    do scale with ``dt``.

    Args:
        state: State from the previous tick
        targets: Targets for the galaxy's current interaction mode
        instance: Galaxy being animated (rotation speed, base tilt, phase)
        dt: Seconds since the previous tick
        elapsed: Seconds since the animation started

    Returns:
        New VisualState; ``state`` is not modified
    """
    pitch, yaw, roll = state.rotation
    base_pitch, _, base_roll = instance.base_tilt
    point_size, point_opacity = twinkle(elapsed, instance.seed_phase)

    return replace(
        state,
        scale=smooth(state.scale, targets.scale, SMOOTH_SCALE),
        ring_opacity=smooth(state.ring_opacity, targets.ring_opacity, SMOOTH_RING),
        ring_spin=state.ring_spin + dt * RING_SPIN_SPEED,
        glow_strength=smooth(state.glow_strength, targets.glow_strength, SMOOTH_GLOW),
        halo_opacity=smooth(state.halo_opacity, targets.halo_opacity, SMOOTH_HALO),
        outer_halo_opacity=smooth(
            state.outer_halo_opacity, targets.outer_halo_opacity, SMOOTH_OUTER_HALO
        ),
        bulge_emissive=smooth(
            state.bulge_emissive, targets.bulge_emissive, SMOOTH_BULGE_EMISSIVE
        ),
        bulge_point_size=smooth(
            state.bulge_point_size, targets.bulge_point_size, SMOOTH_BULGE_POINTS
        ),
        bulge_point_opacity=smooth(
            state.bulge_point_opacity, targets.bulge_point_opacity, SMOOTH_BULGE_POINTS
        ),
        point_size=point_size,
        point_opacity=point_opacity,
        rotation=(
            smooth(pitch, base_pitch, SMOOTH_TILT),
            yaw + instance.rotation_speed * dt,
            smooth(roll, base_roll, SMOOTH_TILT),
        ),
    )


def perturb_tilt(state: VisualState, d_pitch: float, d_roll: float) -> VisualState:
    """Knock the tilt off its resting angle; :func:`step` lets it settle back."""
    pitch, yaw, roll = state.rotation
    return replace(state, rotation=(pitch + d_pitch, yaw, roll + d_roll))
