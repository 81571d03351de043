"""Vispy-based real-time 3D viewer for the galaxy field."""

import math
import time
import numpy as np

# Set Vispy backend
# Use glfw on macOS for better OpenGL compatibility, pyglet elsewhere
import platform
import vispy

if platform.system() == 'Darwin':
    vispy.use('glfw', gl='gl2')
    import glfw

    _USE_GLFW = True
else:
    vispy.use('pyglet')
    glfw = None
    _USE_GLFW = False

from vispy import app, scene
from vispy.visuals.transforms import MatrixTransform
from typing import Dict, Optional

from ..animation.scene import FrameSnapshot, GalaxyScene
from ..config import BACKGROUND_COLOR, CAMERA_FOV, HELP_CONTENT
from ..state.persistence import export_scene_buffers
from .colors import hex_to_rgb
from .layers import FaceColorCache, LayerRegistry, default_registry

# Pixel distance within which the pointer counts as over a galaxy
HOVER_RADIUS_PIXELS = 60


class GalaxyFieldVisualizer:
    """Real-time 3D view of the galaxy field using Vispy."""

    def __init__(
        self,
        galaxy_scene: GalaxyScene,
        registry: Optional[LayerRegistry] = None,
        point_size_scale: float = 1.0,
    ):
        """
        Initialize the visualizer.

        Args:
            galaxy_scene: Scene to draw and drive each frame
            registry: Render layers per galaxy (default halo/dust/bulge/primary)
            point_size_scale: Multiplier on all marker sizes
        """
        self.galaxy_scene = galaxy_scene
        self.registry = registry if registry is not None else default_registry()
        self.point_size_scale = point_size_scale

        # Determine initial window size (half of primary screen dimensions)
        try:
            screens = app.screens()
            if screens:
                screen = screens[0]
                screen_w = screen['geometry']['width']
                screen_h = screen['geometry']['height']
                window_size = (screen_w // 2, screen_h // 2)
            else:
                window_size = (1200, 800)
        except Exception:
            window_size = (1200, 800)

        self.canvas = scene.SceneCanvas(
            keys='interactive',
            title='Galaxy Field',
            size=window_size,
            show=True,
            bgcolor=BACKGROUND_COLOR,
            vsync=True,
        )

        # The camera is driven by CameraFollower, so user input must not fight it
        self.view = self.canvas.central_widget.add_view()
        self.view.camera = scene.TurntableCamera(fov=CAMERA_FOV, interactive=False)
        self._zoom = 1.0

        # Galaxy coordinates are y-up; vispy's turntable is z-up
        self._world = scene.Node(parent=self.view.scene)
        self._world.transform = MatrixTransform(
            np.array(
                [
                    [1, 0, 0, 0],
                    [0, 0, 1, 0],
                    [0, -1, 0, 0],
                    [0, 0, 0, 1],
                ],
                dtype=np.float32,
            )
        )

        # One node per galaxy carrying its position/rotation/scale transform
        self._nodes: Dict[str, scene.Node] = {}
        self._visuals: Dict[str, Dict[str, object]] = {}
        self._last_style: Dict[tuple, tuple] = {}
        self._face_colors = FaceColorCache()
        for instance in self.galaxy_scene.instances:
            node = scene.Node(parent=self._world)
            node.transform = MatrixTransform()
            self._nodes[instance.id] = node
            self._visuals[instance.id] = {
                spec.name: spec.factory(node) for spec in self.registry
            }

        self.info_text = scene.visuals.Text(
            text='',
            color='white',
            anchor_x='left',
            anchor_y='bottom',
            font_size=12,
            parent=self.canvas.scene,
        )
        self.info_text.pos = (10, 10)

        dpi_scale = self.canvas.dpi / 96.0
        canvas_center_x = self.canvas.size[0] / 2
        canvas_center_y = self.canvas.size[1] / 2
        self.help_bg = scene.visuals.Rectangle(
            center=(canvas_center_x, canvas_center_y),
            width=int(360 * dpi_scale),
            height=int(320 * dpi_scale),
            color=(0, 0, 0, 0.9),
            parent=self.canvas.scene,
        )
        self.help_bg.visible = False
        self.help_text = scene.visuals.Text(
            text=HELP_CONTENT,
            color='white',
            anchor_x='left',
            anchor_y='center',
            font_size=14,
            parent=self.canvas.scene,
        )
        self.help_text.pos = (canvas_center_x - int(130 * dpi_scale), canvas_center_y)
        self.help_text.visible = False
        self._help_visible = False

        self._is_fullscreen = False
        self._last_mouse_pos = None
        self._last_tick = time.perf_counter()

        # Initial frame
        self._apply_snapshot(self.galaxy_scene.advance(0.0))

        # interval=0 runs as fast as vsync allows
        self.timer = app.Timer(interval=0, connect=self._on_timer, start=True)

        self.canvas.events.key_press.connect(self._on_key_press)
        self.canvas.events.mouse_move.connect(self._on_mouse_move)
        self.canvas.events.mouse_press.connect(self._on_mouse_press)
        self.canvas.events.mouse_wheel.connect(self._on_mouse_wheel)

    def _update_layers(self, galaxy_id: str, snapshot: FrameSnapshot):
        """Push marker sizes and opacities for one galaxy if they changed."""
        state = snapshot.visual_states[galaxy_id]
        buffers = self.galaxy_scene.buffers(galaxy_id)
        instance = self.galaxy_scene.instance(galaxy_id)

        for spec in self.registry:
            size, opacity = spec.style(state, buffers.primary.radius)
            size = round(size * self.point_size_scale, 1)
            opacity = round(opacity, 2)
            key = (galaxy_id, spec.name)
            if self._last_style.get(key) == (size, opacity):
                continue
            self._last_style[key] = (size, opacity)

            markers = self._visuals[galaxy_id][spec.name]
            if spec.buffer is None:
                secondary = instance.descriptor.color_pair[1]
                color = (*hex_to_rgb(secondary), min(1.0, max(0.0, opacity)))
                markers.set_data(
                    pos=np.zeros((1, 3), dtype=np.float32),
                    size=size,
                    edge_width=0,
                    face_color=color,
                )
                continue

            buffer = getattr(buffers, spec.buffer)
            markers.set_data(
                pos=buffer.positions,
                size=size,
                edge_width=0,
                face_color=self._face_colors.get(key, buffer.colors, opacity),
            )

    def _update_transform(self, galaxy_id: str, snapshot: FrameSnapshot):
        state = snapshot.visual_states[galaxy_id]
        instance = self.galaxy_scene.instance(galaxy_id)
        pitch, yaw, roll = state.rotation

        # Y-X-Z Euler order: roll applied first, yaw last
        transform = self._nodes[galaxy_id].transform
        transform.reset()
        transform.scale((state.scale, state.scale, state.scale))
        transform.rotate(math.degrees(roll), (0, 0, 1))
        transform.rotate(math.degrees(pitch), (1, 0, 0))
        transform.rotate(math.degrees(yaw), (0, 1, 0))
        transform.translate(instance.position)

    def _update_camera(self, snapshot: FrameSnapshot):
        """Convert the follower's position/look-at into turntable angles."""
        camera = snapshot.camera
        offset = camera.position - camera.look_at
        distance = float(np.linalg.norm(offset))
        if distance < 1e-9:
            return

        # Same axis swap as the world node: (x, y, z) -> (x, -z, y)
        ox, oy, oz = offset[0], -offset[2], offset[1]
        center = camera.look_at
        self.view.camera.center = (center[0], -center[2], center[1])
        self.view.camera.distance = distance * self._zoom
        self.view.camera.elevation = math.degrees(math.asin(oz / distance))
        self.view.camera.azimuth = math.degrees(math.atan2(ox, -oy))

    def _update_info(self, snapshot: FrameSnapshot):
        descriptor = self.galaxy_scene.instance(snapshot.selected_id).descriptor
        index = self.galaxy_scene.interaction.selected_index + 1
        total = len(self.galaxy_scene.instances)
        self.info_text.text = (
            f"{descriptor.name}  ({index}/{total})\n"
            f"{descriptor.type}\n"
            f"Distance: {descriptor.distance_light_years:,.0f} ly  |  "
            f"Size: {descriptor.size_light_years:,.0f} ly"
        )

    def _apply_snapshot(self, snapshot: FrameSnapshot):
        for instance in self.galaxy_scene.instances:
            self._update_layers(instance.id, snapshot)
            self._update_transform(instance.id, snapshot)
        self._update_camera(snapshot)
        self._update_info(snapshot)

    def _galaxy_under_pointer(self, mouse_pos) -> Optional[str]:
        """Id of the galaxy whose center projects closest to the pointer."""
        centers = np.array(
            [instance.position for instance in self.galaxy_scene.instances]
        )
        try:
            tr = self._world.node_transform(self.canvas.scene)
            screen = tr.map(centers)
            screen = screen[:, :2] / screen[:, 3:4]
        except Exception:
            return None

        distances = np.hypot(screen[:, 0] - mouse_pos[0], screen[:, 1] - mouse_pos[1])
        closest = int(np.argmin(distances))
        if distances[closest] < HOVER_RADIUS_PIXELS:
            return self.galaxy_scene.instances[closest].id
        return None

    def _on_mouse_move(self, event):
        if event.pos is not None:
            self._last_mouse_pos = event.pos

    def _on_mouse_press(self, event):
        """Left-click selects the galaxy under the pointer."""
        if event.button == 1 and event.pos is not None:
            galaxy_id = self._galaxy_under_pointer(event.pos)
            if galaxy_id is not None:
                self.galaxy_scene.select(galaxy_id)
                print(f"Selected {galaxy_id}")

    def _on_mouse_wheel(self, event):
        self._zoom = min(2.5, max(0.5, self._zoom * (0.9 ** event.delta[1])))

    def _on_timer(self, event):
        """Timer callback: hover, advance the scene one frame, redraw."""
        now = time.perf_counter()
        dt = now - self._last_tick
        self._last_tick = now

        if self._last_mouse_pos is not None:
            self.galaxy_scene.hover(self._galaxy_under_pointer(self._last_mouse_pos))

        self._apply_snapshot(self.galaxy_scene.advance(dt))
        self.canvas.update()

    def _on_key_press(self, event):
        """Handle keyboard input."""
        if event.key == 'Q':
            print("Quit requested...")
            self.close()

        elif event.key in ('N', 'Right'):
            print(f"Selected {self.galaxy_scene.next()}")

        elif event.key in ('B', 'Left'):
            print(f"Selected {self.galaxy_scene.previous()}")

        elif event.key == 'S':
            print("Exporting particle buffers...")
            try:
                filepath = export_scene_buffers(self.galaxy_scene)
                print(f"Saved to: {filepath}")
            except Exception as e:
                print(f"Export failed: {e}")

        elif event.key == 'F':
            self._is_fullscreen = not self._is_fullscreen
            if _USE_GLFW:
                # glfw backend (macOS) - use maximize/restore instead of fullscreen
                window = self.canvas.native._id
                if self._is_fullscreen:
                    glfw.maximize_window(window)
                else:
                    glfw.restore_window(window)
            else:
                self.canvas.fullscreen = self._is_fullscreen

        elif event.key == 'H':
            self._help_visible = not self._help_visible
            self.help_bg.visible = self._help_visible
            self.help_text.visible = self._help_visible

    def close(self):
        """Close the visualizer."""
        self.timer.stop()
        self.canvas.close()
        app.quit()

    def run(self):
        """Run the visualization event loop."""
        app.run()


def run_visualization(
    galaxy_scene: GalaxyScene,
    registry: Optional[LayerRegistry] = None,
    point_size_scale: float = 1.0,
):
    """
    Run the visualization (main entry point).

    Args:
        galaxy_scene: Scene to draw
        registry: Render layers per galaxy
        point_size_scale: Multiplier on all marker sizes
    """
    visualizer = GalaxyFieldVisualizer(galaxy_scene, registry, point_size_scale)
    visualizer.run()
