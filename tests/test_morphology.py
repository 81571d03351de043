"""Tests for galaxy type classification and the particle-count table."""

import pytest

from galaxy_field.initialization.morphology import (
    Morphology,
    arm_count,
    classify,
    particle_count,
)


class TestClassify:

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Ring Galaxy", Morphology.RING),
            ("Irregular Galaxy", Morphology.IRREGULAR),
            ("Peculiar Galaxy", Morphology.PECULIAR),
            ("Elliptical Galaxy", Morphology.ELLIPTICAL),
            ("Spiral Galaxy", Morphology.SPIRAL),
            ("Grand-Design Spiral Galaxy", Morphology.SPIRAL),
            ("Unbarred Spiral Galaxy", Morphology.SPIRAL),
            ("", Morphology.SPIRAL),
        ],
    )
    def test_labels(self, label, expected):
        assert classify(label) is expected

    def test_ring_beats_irregular(self):
        assert classify("Irregular Ring Galaxy") is Morphology.RING
        assert classify("Ring Irregular Galaxy") is Morphology.RING

    def test_peculiar_beats_elliptical(self):
        assert classify("Peculiar Elliptical Galaxy") is Morphology.PECULIAR

    def test_matching_is_case_sensitive(self):
        assert classify("ring galaxy") is Morphology.SPIRAL


class TestCounts:

    def test_ring_count(self):
        assert particle_count("Ring Galaxy") == 1400

    def test_irregular_count(self):
        assert particle_count("Irregular Galaxy") == 1200

    def test_peculiar_count(self):
        assert particle_count("Peculiar Galaxy") == 1500

    def test_default_counts(self):
        assert particle_count("Unbarred Spiral Galaxy") == 1600
        assert particle_count("Elliptical Galaxy") == 1600


class TestArms:

    def test_grand_design_has_two_arms(self):
        assert arm_count("Grand-Design Spiral Galaxy") == 2

    def test_other_spirals_have_three_arms(self):
        assert arm_count("Spiral Galaxy") == 3
        assert arm_count("Unbarred Spiral Galaxy") == 3
