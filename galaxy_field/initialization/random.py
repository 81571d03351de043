"""Deterministic Park-Miller pseudo-random stream used by the generators."""

import numpy as np
from typing import Tuple

MODULUS = 2147483647  # 2^31 - 1
MULTIPLIER = 16807


def normalize_seed(seed: int) -> int:
    """
    Bring a raw integer seed into the positive state range.

    The remainder is truncated toward zero (a negative seed keeps its
    sign), then non-positive values are shifted up by 2^31 - 2.
    """
    seed = int(seed)
    state = seed % MODULUS if seed >= 0 else -((-seed) % MODULUS)
    if state <= 0:
        state += MODULUS - 1
    return state


def next_random(state: int) -> Tuple[float, int]:
    """
    Advance the generator by one step.

    Uses the Lehmer recurrence state' = state * 16807 mod (2^31 - 1).
    Python integers keep the arithmetic exact, so a given seed produces the
    same sequence on every platform.

    Args:
        state: Current generator state (already normalized)

    Returns:
        Tuple of (value in [0, 1), new state)
    """
    state = (state * MULTIPLIER) % MODULUS
    return (state - 1) / (MODULUS - 1), state


class SeededRandom:
    """Callable wrapper around :func:`next_random` holding its own state."""

    def __init__(self, seed: int):
        self.seed = seed
        self.state = normalize_seed(seed)

    def __call__(self) -> float:
        value, self.state = next_random(self.state)
        return value

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self()

    def centered(self) -> float:
        """Value in [-0.5, 0.5)."""
        return self() - 0.5

    def take(self, count: int) -> np.ndarray:
        """Draw the next ``count`` values, in stream order, as a float64 array."""
        return np.fromiter((self() for _ in range(count)), dtype=np.float64, count=count)
