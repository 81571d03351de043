"""Procedural particle fields for galaxies: primary stars, bulge and dust."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from ..config import (
    ARM_HIGHLIGHT_TINT,
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    BULGE_CORE_COLOR,
    BULGE_CORE_HIGHLIGHT,
    BULGE_FRACTION,
    BULGE_MIN_COUNT,
    BULGE_SEED,
    BULGE_TINT,
    DUST_FRACTION,
    DUST_MAX_COUNT,
    DUST_SEED,
    PECULIAR_TIDAL_CHANCE,
    PRIMARY_SEED,
    RADIUS_OFFSET,
    RADIUS_SCALE,
    SPIRAL_ARM_GAP_CHANCE,
)
from ..visualization.colors import clamp_colors, hex_to_rgb, lerp_rgb
from .layout import GalaxyInstance
from .morphology import (
    Morphology,
    arm_count,
    classify,
    is_grand_design,
    particle_count,
)
from .random import SeededRandom

log = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi

# A sampler draws one particle: returns (x, y, z, arm density)
Sampler = Callable[[SeededRandom], Tuple[float, float, float, float]]


@dataclass(frozen=True)
class ParticleBuffer:
    """
    Immutable point cloud for one render layer.

    Colors are raw blend output: channels may exceed 1 until passed
    through :meth:`display_colors`.

    ``radius`` is the radius the layer was sampled against: the galaxy's
    generation radius for the primary and bulge layers, and the dust base
    radius (1.18 or, edge-on, 1.45 times the generation radius) for dust.
    """

    positions: np.ndarray  # (N, 3) float32
    colors: np.ndarray  # (N, 3) float32
    radius: float

    def __post_init__(self):
        if self.positions.shape != self.colors.shape:
            raise ValueError(
                f"positions {self.positions.shape} and colors "
                f"{self.colors.shape} must have the same shape"
            )
        self.positions.setflags(write=False)
        self.colors.setflags(write=False)

    @property
    def count(self) -> int:
        return len(self.positions)

    def flat_positions(self) -> np.ndarray:
        """Positions as a flat sequence of length 3N (x0, y0, z0, x1, ...)."""
        return self.positions.reshape(-1)

    def flat_colors(self) -> np.ndarray:
        return self.colors.reshape(-1)

    def display_colors(self) -> np.ndarray:
        """Colors clamped to [0, 1] for display."""
        return clamp_colors(self.colors)


@dataclass(frozen=True)
class GalaxyBuffers:
    """All generated layers for one galaxy."""

    primary: ParticleBuffer
    bulge: ParticleBuffer
    dust: ParticleBuffer


def layer_seed(index: int, seed_spec: Tuple[int, int]) -> int:
    multiplier, offset = seed_spec
    return index * multiplier + offset


def galaxy_radius(size_light_years: float) -> float:
    """Generation radius; a tuning curve, not a physical scale."""
    return float(np.cbrt(size_light_years)) * RADIUS_SCALE + RADIUS_OFFSET


def _make_buffer(positions: np.ndarray, colors: np.ndarray, radius: float) -> ParticleBuffer:
    return ParticleBuffer(
        positions=np.ascontiguousarray(positions, dtype=np.float32),
        colors=np.ascontiguousarray(colors, dtype=np.float32),
        radius=float(radius),
    )


# ---------------------------------------------------------------------------
# Primary field samplers, one per morphology
# ---------------------------------------------------------------------------


def ring_sampler(radius: float) -> Sampler:
    """Stars in a band from 0.8 to 1.2 of the radius, thin vertically."""

    def sample(rand):
        angle = rand() * TWO_PI
        radial = radius * (0.8 + rand() * 0.4)
        x = math.cos(angle) * radial
        z = math.sin(angle) * radial
        y = rand.centered() * radius * 0.14
        return x, y, z, 0.45

    return sample


def irregular_sampler(radius: float) -> Sampler:
    """Uniform box with no radial symmetry."""

    def sample(rand):
        x = rand.centered() * radius * 1.6
        y = rand.centered() * radius * 0.9
        z = rand.centered() * radius * 1.6
        return x, y, z, 0.2 + rand() * 0.25

    return sample


def peculiar_sampler(radius: float) -> Sampler:
    """Warped spiral-like disk with a fraction of tidally lifted stars."""

    def sample(rand):
        angle = rand() * TWO_PI
        spiral_radius = radius * (0.35 + rand() ** 0.8 * 1.2)
        warp = rand.centered() * 0.5
        x = math.cos(angle + warp * 0.4) * spiral_radius
        z = math.sin(angle + warp * 0.4) * spiral_radius
        y = rand.centered() * radius * 0.32 + warp * radius * 0.25
        density = 0.35 + rand() * 0.35
        if rand() < PECULIAR_TIDAL_CHANCE:
            y += rand.centered() * radius * 0.6
        return x, y, z, density

    return sample


def elliptical_sampler(radius: float) -> Sampler:
    """Centrally concentrated spheroid, flattened vertically."""

    def sample(rand):
        radial = rand() ** 0.7 * radius * 0.9
        theta = rand() * TWO_PI
        phi = math.acos(1 - 2 * rand())
        sin_phi = math.sin(phi)
        x = radial * sin_phi * math.cos(theta)
        y = radial * math.cos(phi) * 0.6
        z = radial * sin_phi * math.sin(theta)
        return x, y, z, 0.25 + rand() * 0.2

    return sample


def spiral_sampler(radius: float, arms: int, twist: float) -> Sampler:
    """
    Logarithmic-style spiral arms.

    Progress along an arm is t = U^0.72, which favors the outskirts. Arm
    width and disk thickness both shrink as t grows. A minority of stars
    are displaced into the gap between arms so arms are not solid bands.
    """
    arm_spacing = TWO_PI / arms

    def sample(rand):
        t = rand() ** 0.72
        radial = radius * (0.16 + t * 0.9)
        base_angle = math.floor(rand() * arms) * arm_spacing
        theta = base_angle + t * twist + rand.centered() * 0.22
        width = radius * (0.02 + (1 - t) * 0.12)
        offset = rand.centered() * width
        perpendicular = theta + math.pi / 2
        x = math.cos(theta) * radial + math.cos(perpendicular) * offset
        z = math.sin(theta) * radial + math.sin(perpendicular) * offset
        thickness = radius * (0.02 + (1 - t) * 0.08)
        y = rand.centered() * thickness
        density = math.exp(-(abs(offset) / (width * 0.85)))

        if rand() < SPIRAL_ARM_GAP_CHANCE:
            gap_theta = theta + math.pi / arms + rand.centered() * 0.28
            gap_radius = radial * (0.85 + rand() * 0.25)
            x = math.cos(gap_theta) * gap_radius
            z = math.sin(gap_theta) * gap_radius
            y *= 0.35
            density *= 0.4

        return x, y, z, density

    return sample


def sampler_for(label: str, radius: float) -> Sampler:
    """Pick the position sampler for a galaxy type label."""
    morphology = classify(label)
    if morphology is Morphology.RING:
        return ring_sampler(radius)
    if morphology is Morphology.IRREGULAR:
        return irregular_sampler(radius)
    if morphology is Morphology.PECULIAR:
        return peculiar_sampler(radius)
    if morphology is Morphology.ELLIPTICAL:
        return elliptical_sampler(radius)
    twist = 5.8 if is_grand_design(label) else 4.6
    return spiral_sampler(radius, arm_count(label), twist)


def compute_field_colors(
    positions: np.ndarray,
    density: np.ndarray,
    radius: float,
    primary: str,
    secondary: str,
) -> np.ndarray:
    """
    Per-particle colors for the primary field.

    The center trends toward a warm bulge tint, dense arm particles toward
    a cool highlight, and the outskirts toward the secondary color. A
    brightness multiplier from density and bulge proximity is applied last,
    so raw channels can exceed 1.

    Args:
        positions: Particle positions (N, 3)
        density: Arm density per particle (N,)
        radius: Generation radius
        primary: Primary hex color
        secondary: Secondary hex color

    Returns:
        Array of shape (N, 3) with raw RGB values
    """
    color_a = np.array(hex_to_rgb(primary))
    color_b = np.array(hex_to_rgb(secondary))
    warm = np.array(hex_to_rgb(BULGE_TINT))
    cool = np.array(hex_to_rgb(ARM_HIGHLIGHT_TINT))

    planar = np.hypot(positions[:, 0], positions[:, 2])
    radial_mix = np.minimum(1.0, planar / (radius * 1.05))
    bulge_weight = np.power(1.0 - radial_mix, 1.5)

    blend = (radial_mix * 0.85 + density * 0.1)[:, np.newaxis]
    colors = lerp_rgb(color_a, color_b, blend)
    colors = lerp_rgb(colors, warm, (bulge_weight * 0.85)[:, np.newaxis])

    arm_mask = density > 0.55
    if np.any(arm_mask):
        arm_blend = (0.5 * (density[arm_mask] - 0.4))[:, np.newaxis]
        colors[arm_mask] = lerp_rgb(colors[arm_mask], cool, arm_blend)

    brightness = np.clip(
        0.6 + density * 0.6 + bulge_weight * 0.5, BRIGHTNESS_MIN, BRIGHTNESS_MAX
    )
    return colors * brightness[:, np.newaxis]


def generate_particle_field(
    instance: GalaxyInstance,
    primary: Optional[str] = None,
    secondary: Optional[str] = None,
) -> ParticleBuffer:
    """
    Generate the primary star field for a galaxy.

    Args:
        instance: Laid-out galaxy (its index fixes the seed)
        primary: Primary hex color (defaults to the descriptor's)
        secondary: Secondary hex color (defaults to the descriptor's)

    Returns:
        ParticleBuffer with particle_count(type) points
    """
    default_primary, default_secondary = instance.descriptor.color_pair
    primary = primary or default_primary
    secondary = secondary or default_secondary

    count = particle_count(instance.type)
    radius = galaxy_radius(instance.size_light_years)
    rand = SeededRandom(layer_seed(instance.index, PRIMARY_SEED))
    sample = sampler_for(instance.type, radius)

    positions = np.empty((count, 3), dtype=np.float64)
    density = np.empty(count, dtype=np.float64)
    for i in range(count):
        x, y, z, d = sample(rand)
        positions[i] = (x, y, z)
        density[i] = d

    colors = compute_field_colors(positions, density, radius, primary, secondary)
    log.debug(
        "Generated %d %s particles for %s (radius %.2f)",
        count,
        instance.morphology.value,
        instance.id,
        radius,
    )
    return _make_buffer(positions, colors, radius)


def generate_bulge(instance: GalaxyInstance) -> ParticleBuffer:
    """
    Generate the dense central cluster of a galaxy.

    Radii follow U^0.55, so points crowd the center. The edge-on galaxy
    gets a larger, more vertically stretched bulge.
    """
    radius = galaxy_radius(instance.size_light_years)
    count = max(BULGE_MIN_COUNT, int(particle_count(instance.type) * BULGE_FRACTION))
    rand = SeededRandom(layer_seed(instance.index, BULGE_SEED))
    edge_on = instance.is_edge_on

    # Four draws per particle, in stream order: radius, theta, phi, tint
    draws = rand.take(count * 4).reshape(count, 4)
    r = np.power(draws[:, 0], 0.55) * radius * (0.42 if edge_on else 0.32)
    theta = draws[:, 1] * TWO_PI
    phi = np.arccos(1 - 2 * draws[:, 2])
    sin_phi = np.sin(phi)

    positions = np.empty((count, 3), dtype=np.float64)
    positions[:, 0] = r * sin_phi * np.cos(theta)
    positions[:, 1] = r * np.cos(phi) * (1.9 if edge_on else 1.4)
    positions[:, 2] = r * sin_phi * np.sin(theta)

    core = np.array(hex_to_rgb(BULGE_CORE_COLOR))
    highlight_color = np.array(hex_to_rgb(BULGE_CORE_HIGHLIGHT))
    colors = lerp_rgb(core, highlight_color, (draws[:, 3] * 0.35)[:, np.newaxis])
    highlight = np.clip(1 - r / (radius * 0.42), 0.0, 1.0)
    colors *= (0.8 + highlight * 0.7)[:, np.newaxis]

    log.debug("Generated %d bulge particles for %s", count, instance.id)
    return _make_buffer(positions, colors, radius)


def generate_dust(
    instance: GalaxyInstance, secondary: Optional[str] = None
) -> ParticleBuffer:
    """
    Generate the dim, disk-aligned dust cloud around a galaxy.

    The cloud sits outside the primary radius and is tinted toward the
    secondary color. An asymmetry term skews x and z differently so the
    ring is never perfectly circular.
    """
    secondary = secondary or instance.descriptor.color_pair[1]
    primary_count = particle_count(instance.type)
    count = min(DUST_MAX_COUNT, int(primary_count * DUST_FRACTION))
    base_radius = galaxy_radius(instance.size_light_years) * (
        1.45 if instance.is_edge_on else 1.18
    )
    rand = SeededRandom(layer_seed(instance.index, DUST_SEED))

    # Four draws per particle: angle, swirl, height, asymmetry
    draws = rand.take(count * 4).reshape(count, 4)
    angle = draws[:, 0] * TWO_PI
    swirl = np.power(draws[:, 1], 0.6)
    radial = base_radius * (0.6 + swirl * 0.9)
    height = (draws[:, 2] - 0.5) * base_radius * (0.12 if instance.is_edge_on else 0.2)
    asymmetry = (draws[:, 3] - 0.5) * 0.4

    positions = np.empty((count, 3), dtype=np.float64)
    positions[:, 0] = np.cos(angle) * radial * (1 + asymmetry * 0.12)
    positions[:, 1] = height + asymmetry * base_radius * 0.04
    positions[:, 2] = np.sin(angle) * radial * (1 - asymmetry * 0.08)

    tail = np.array(hex_to_rgb(secondary))
    dim = 0.25 + swirl * 0.4
    colors = np.empty((count, 3), dtype=np.float64)
    colors[:, 0] = tail[0] * dim
    colors[:, 1] = tail[1] * dim
    colors[:, 2] = tail[2] * (0.8 + swirl * 0.2)

    log.debug("Generated %d dust particles for %s", count, instance.id)
    return _make_buffer(positions, colors, base_radius)


def generate_galaxy_buffers(instance: GalaxyInstance) -> GalaxyBuffers:
    """Generate the primary, bulge and dust layers for one galaxy."""
    primary, secondary = instance.descriptor.color_pair
    return GalaxyBuffers(
        primary=generate_particle_field(instance, primary, secondary),
        bulge=generate_bulge(instance),
        dust=generate_dust(instance, secondary),
    )
