"""Color parsing and blending for galaxy particle colors."""

import numpy as np
from typing import Tuple


def hex_to_rgb(color: str) -> Tuple[float, float, float]:
    """
    Convert a CSS hex color to RGB.

    Accepts "#RRGGBB", "RRGGBB" and the short "#RGB" form.

    Args:
        color: Hex color string

    Returns:
        Tuple of (R, G, B) values in 0-1 range
    """
    value = color.strip().lstrip('#')
    if len(value) == 3:
        value = ''.join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")

    r = int(value[0:2], 16)
    g = int(value[2:4], 16)
    b = int(value[4:6], 16)
    return (r / 255.0, g / 255.0, b / 255.0)


def lerp_rgb(a: np.ndarray, b: np.ndarray, t) -> np.ndarray:
    """
    Linear blend from color ``a`` toward ``b`` by fraction ``t``.

    ``t`` may be a scalar or an (N, 1) column of per-particle fractions,
    in which case ``a`` and ``b`` broadcast against it.
    """
    return a + (b - a) * t


def clamp_colors(colors: np.ndarray) -> np.ndarray:
    """
    Clamp color channels to the displayable [0, 1] range.

    Generated colors carry a brightness multiplier that can push channels
    above 1. Renderers must pass colors through this before upload.

    Args:
        colors: Array of shape (N, 3) or (N, 4)

    Returns:
        New float32 array with every channel in [0, 1]
    """
    return np.clip(colors, 0.0, 1.0).astype(np.float32)


def with_alpha(colors: np.ndarray, alpha: float) -> np.ndarray:
    """
    Build display RGBA colors from raw RGB colors.

    Args:
        colors: Array of shape (N, 3) with raw RGB values
        alpha: Opacity applied to every point (clamped to [0, 1])

    Returns:
        Array of shape (N, 4) with RGBA values in 0-1 range
    """
    rgba = np.ones((len(colors), 4), dtype=np.float32)
    rgba[:, :3] = clamp_colors(colors)
    rgba[:, 3] = min(1.0, max(0.0, alpha))
    return rgba
