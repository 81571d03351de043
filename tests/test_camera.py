"""Tests for the camera follower."""

import numpy as np
import pytest

from galaxy_field.catalog import DEFAULT_CATALOG
from galaxy_field.config import CAMERA_START_POSITION
from galaxy_field.initialization.layout import layout_galaxies
from galaxy_field.animation.camera import CameraFollower, camera_offset


@pytest.fixture(scope="module")
def instances():
    return layout_galaxies(DEFAULT_CATALOG)


class TestOffset:

    def test_grows_with_size(self):
        sizes = [1.0, 14000, 50000, 76000, 150000, 220000, 1e7]
        magnitudes = [np.linalg.norm(camera_offset(s)) for s in sizes]
        assert all(a <= b for a, b in zip(magnitudes, magnitudes[1:]))

    def test_components(self):
        s = np.cbrt(64000.0) * 0.05
        np.testing.assert_allclose(
            camera_offset(64000.0), [0.6 * s + 4, 0.5 * s + 12, 1.8 * s + 25]
        )


class TestFollower:

    def test_starts_at_fixed_position(self):
        camera = CameraFollower()
        np.testing.assert_array_equal(camera.position, CAMERA_START_POSITION)
        np.testing.assert_array_equal(camera.look_at, np.zeros(3))

    def test_aim_snaps_on_selection(self, instances):
        camera = CameraFollower()
        camera.update(instances[0])
        camera.update(instances[3])
        np.testing.assert_allclose(camera.aim, instances[3].position)
        assert not np.allclose(camera.look_at, instances[3].position)

    def test_position_glides(self, instances):
        camera = CameraFollower()
        target = instances[2]
        desired = camera.desired_position(target)
        start = camera.position.copy()
        camera.update(target)
        np.testing.assert_allclose(camera.position, start + (desired - start) * 0.08)

    def test_converges(self, instances):
        camera = CameraFollower()
        target = instances[4]
        for _ in range(400):
            camera.update(target)
        np.testing.assert_allclose(
            camera.position, camera.desired_position(target), atol=1e-6
        )
        np.testing.assert_allclose(camera.look_at, target.position, atol=1e-6)

    def test_distance_to_target_shrinks(self, instances):
        camera = CameraFollower()
        target = instances[1]
        desired = camera.desired_position(target)
        distances = []
        for _ in range(50):
            camera.update(target)
            distances.append(np.linalg.norm(camera.position - desired))
        assert all(a > b for a, b in zip(distances, distances[1:]))
