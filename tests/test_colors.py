"""Tests for color parsing and display helpers."""

import numpy as np
import pytest

from galaxy_field.visualization.colors import (
    clamp_colors,
    hex_to_rgb,
    lerp_rgb,
    with_alpha,
)


class TestHex:

    def test_long_form(self):
        assert hex_to_rgb('#ff0000') == (1.0, 0.0, 0.0)

    def test_without_hash(self):
        assert hex_to_rgb('00ff00') == (0.0, 1.0, 0.0)

    def test_short_form(self):
        assert hex_to_rgb('#fff') == (1.0, 1.0, 1.0)

    @pytest.mark.parametrize("value", ['', '#12', '#1234567', 'blue'])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            hex_to_rgb(value)


class TestBlending:

    def test_lerp(self):
        a = np.array([0.0, 0.0, 0.0])
        b = np.array([1.0, 0.5, 0.0])
        np.testing.assert_allclose(lerp_rgb(a, b, 0.5), [0.5, 0.25, 0.0])

    def test_lerp_per_row(self):
        a = np.zeros((2, 3))
        b = np.array([1.0, 1.0, 1.0])
        t = np.array([[0.25], [1.0]])
        np.testing.assert_allclose(lerp_rgb(a, b, t), [[0.25] * 3, [1.0] * 3])

    def test_clamp(self):
        clamped = clamp_colors(np.array([[1.5, -0.1, 0.5]]))
        np.testing.assert_allclose(clamped, [[1.0, 0.0, 0.5]])
        assert clamped.dtype == np.float32

    def test_with_alpha(self):
        rgba = with_alpha(np.array([[2.0, 0.5, 0.0], [0.1, 0.2, 0.3]]), 0.4)
        assert rgba.shape == (2, 4)
        np.testing.assert_allclose(rgba[:, 3], 0.4)
        assert rgba[0, 0] == 1.0
