"""
Tests for the per-galaxy visual state animator.

Smoothed parameters must approach their targets monotonically without
overshoot, and the tick must not mutate its input.
"""

import dataclasses
import math

import pytest

from galaxy_field.catalog import DEFAULT_CATALOG
from galaxy_field.config import RING_SPIN_SPEED, TWINKLE_SIZE_RANGE
from galaxy_field.initialization.layout import layout_galaxies
from galaxy_field.animation.visual_state import (
    InteractionMode,
    VisualState,
    initial_visual_state,
    interaction_mode,
    perturb_tilt,
    smooth,
    step,
    targets_for,
    twinkle,
)

DT = 1 / 60


@pytest.fixture(scope="module")
def instance():
    return layout_galaxies(DEFAULT_CATALOG)[0]


def run(state, targets, instance, ticks):
    history = [state]
    elapsed = 0.0
    for _ in range(ticks):
        elapsed += DT
        state = step(state, targets, instance, DT, elapsed)
        history.append(state)
    return history


class TestInteractionMode:

    def test_selected_wins_over_hover(self):
        assert interaction_mode(True, True) is InteractionMode.SELECTED

    def test_hovered(self):
        assert interaction_mode(False, True) is InteractionMode.HOVERED

    def test_idle(self):
        assert interaction_mode(False, False) is InteractionMode.IDLE

    def test_selected_targets_are_largest(self):
        idle = targets_for(InteractionMode.IDLE)
        hovered = targets_for(InteractionMode.HOVERED)
        selected = targets_for(InteractionMode.SELECTED)
        assert idle.scale < hovered.scale < selected.scale
        assert idle.glow_strength < hovered.glow_strength < selected.glow_strength


class TestSmoothing:

    def test_smooth_step(self):
        assert smooth(0.0, 1.0, 0.08) == pytest.approx(0.08)

    def test_rising_convergence_without_overshoot(self, instance):
        targets = targets_for(InteractionMode.SELECTED)
        history = run(initial_visual_state(instance), targets, instance, 400)
        for field in ('scale', 'glow_strength', 'halo_opacity', 'outer_halo_opacity'):
            values = [getattr(s, field) for s in history]
            target = getattr(targets, field)
            assert all(a <= b for a, b in zip(values, values[1:]))
            assert all(v <= target for v in values)
            assert values[-1] == pytest.approx(target, abs=1e-5)

    def test_falling_convergence_without_overshoot(self, instance):
        targets = targets_for(InteractionMode.IDLE)
        start = dataclasses.replace(
            initial_visual_state(instance), scale=1.16, bulge_emissive=1.22
        )
        history = run(start, targets, instance, 300)
        for field in ('scale', 'bulge_emissive'):
            values = [getattr(s, field) for s in history]
            target = getattr(targets, field)
            assert all(a >= b for a, b in zip(values, values[1:]))
            assert all(v >= target for v in values)
            assert values[-1] == pytest.approx(target, abs=1e-6)

    def test_step_does_not_mutate(self, instance):
        state = initial_visual_state(instance)
        new = step(state, targets_for(InteractionMode.SELECTED), instance, DT, DT)
        assert state == initial_visual_state(instance)
        assert new is not state
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.scale = 2.0


class TestRotation:

    def test_initial_rotation_is_base_tilt(self, instance):
        assert initial_visual_state(instance).rotation == instance.base_tilt

    def test_yaw_advances_with_dt(self, instance):
        state = initial_visual_state(instance)
        new = step(state, targets_for(InteractionMode.IDLE), instance, 0.5, 0.5)
        assert new.rotation[1] == pytest.approx(
            state.rotation[1] + instance.rotation_speed * 0.5
        )

    def test_ring_spin_advances_with_dt(self, instance):
        state = VisualState()
        new = step(state, targets_for(InteractionMode.IDLE), instance, 2.0, 2.0)
        assert new.ring_spin == pytest.approx(RING_SPIN_SPEED * 2.0)

    def test_perturbed_tilt_decays(self, instance):
        state = perturb_tilt(initial_visual_state(instance), 0.3, -0.2)
        base_pitch, _, base_roll = instance.base_tilt
        assert state.rotation[0] == pytest.approx(base_pitch + 0.3)

        history = run(state, targets_for(InteractionMode.IDLE), instance, 250)
        pitch_errors = [abs(s.rotation[0] - base_pitch) for s in history]
        assert all(a >= b for a, b in zip(pitch_errors, pitch_errors[1:]))
        assert history[-1].rotation[0] == pytest.approx(base_pitch, abs=1e-6)
        assert history[-1].rotation[2] == pytest.approx(base_roll, abs=1e-6)


class TestTwinkle:

    def test_ranges(self):
        low, high = TWINKLE_SIZE_RANGE
        for i in range(200):
            size, opacity = twinkle(i * 0.05, 42.0)
            assert low - 1e-12 <= size <= high + 1e-12
            assert 0.64 - 1e-12 <= opacity <= 0.92 + 1e-12

    def test_pure_function_of_time(self):
        assert twinkle(3.2, 165.456) == twinkle(3.2, 165.456)

    def test_step_uses_twinkle(self, instance):
        new = step(VisualState(), targets_for(InteractionMode.IDLE), instance, DT, 1.5)
        assert (new.point_size, new.point_opacity) == twinkle(1.5, instance.seed_phase)

    def test_phase_shifts_wave(self):
        assert twinkle(0.0, 0.0)[0] != twinkle(0.0, math.pi / 2)[0]
