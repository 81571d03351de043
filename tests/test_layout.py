"""Tests for placing catalog galaxies on the layout ring."""

import math
from dataclasses import replace

import pytest

from galaxy_field.catalog import DEFAULT_CATALOG, CatalogError
from galaxy_field.config import (
    LAYOUT_RADIUS,
    ROTATION_SPEED_DEFAULT,
    ROTATION_SPEED_EDGE_ON,
    ROTATION_SPEED_ELLIPTICAL,
)
from galaxy_field.initialization.layout import layout_galaxies


@pytest.fixture
def instances():
    return layout_galaxies(DEFAULT_CATALOG)


class TestPositions:

    def test_one_instance_per_entry_in_order(self, instances):
        assert [i.id for i in instances] == [d.id for d in DEFAULT_CATALOG]
        assert [i.index for i in instances] == list(range(len(DEFAULT_CATALOG)))

    def test_on_layout_circle(self, instances):
        for instance in instances:
            x, _, z = instance.position
            assert math.hypot(x, z) == pytest.approx(LAYOUT_RADIUS)

    def test_evenly_spaced_angles(self, instances):
        n = len(instances)
        for instance in instances:
            x, _, z = instance.position
            angle = math.atan2(z, x) % (2 * math.pi)
            expected = 2 * math.pi * instance.index / n
            assert angle == pytest.approx(expected, abs=1e-9)

    def test_vertical_offset(self, instances):
        n = len(instances)
        for instance in instances:
            angle = 2 * math.pi * instance.index / n
            assert instance.position[1] == pytest.approx(math.sin(2 * angle) * 2)

    def test_empty_catalog_rejected(self):
        with pytest.raises(CatalogError):
            layout_galaxies([])


class TestTiltAndSpeed:

    def test_edge_on_tilt_by_id(self, instances):
        sombrero = next(i for i in instances if i.id == 'sombrero')
        assert sombrero.base_tilt == pytest.approx(
            (math.radians(84), math.radians(-12), math.radians(4))
        )
        assert sombrero.rotation_speed == ROTATION_SPEED_EDGE_ON
        assert sombrero.is_edge_on

    def test_irregular_tilt(self, instances):
        lmc = next(i for i in instances if i.id == 'large-magellanic-cloud')
        assert lmc.base_tilt == pytest.approx(
            (math.radians(18), math.radians(12 * lmc.index), math.radians(-8))
        )

    def test_generic_tilt(self, instances):
        andromeda = instances[0]
        assert andromeda.base_tilt == pytest.approx(
            (math.radians(32), 0.0, math.radians(6))
        )
        assert andromeda.rotation_speed == ROTATION_SPEED_DEFAULT

    def test_elliptical_rotates_slower(self):
        catalog = [replace(DEFAULT_CATALOG[0], type='Elliptical Galaxy')]
        (instance,) = layout_galaxies(catalog)
        assert instance.rotation_speed == ROTATION_SPEED_ELLIPTICAL

    def test_edge_on_identity_not_type(self):
        # Same label as the edge-on entry but a different id gets the generic tilt
        catalog = [replace(DEFAULT_CATALOG[1], id='not-sombrero')]
        (instance,) = layout_galaxies(catalog)
        assert not instance.is_edge_on
        assert instance.base_tilt[0] == pytest.approx(math.radians(32))

    def test_seed_phase(self, instances):
        assert instances[2].seed_phase == pytest.approx(2 * 123.456 + 42)
