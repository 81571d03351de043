"""Classification of free-text galaxy type labels into generation strategies."""

from enum import Enum

from ..config import PARTICLE_COUNTS


class Morphology(Enum):
    RING = "ring"
    IRREGULAR = "irregular"
    PECULIAR = "peculiar"
    ELLIPTICAL = "elliptical"
    SPIRAL = "spiral"


# Substring tested for each morphology, in priority order (first match wins)
_KEYWORDS = (
    ("Ring", Morphology.RING),
    ("Irregular", Morphology.IRREGULAR),
    ("Peculiar", Morphology.PECULIAR),
    ("Elliptical", Morphology.ELLIPTICAL),
)

GRAND_DESIGN_KEYWORD = "Grand-Design"


def classify(label: str) -> Morphology:
    """
    Map a galaxy type label to a morphology.

    Matching is case-sensitive substring containment, tested Ring, Irregular,
    Peculiar, Elliptical in that order. Labels matching none of them
    ("Spiral Galaxy", "Unbarred Spiral Galaxy", ...) are spirals.
    """
    for keyword, morphology in _KEYWORDS:
        if keyword in label:
            return morphology
    return Morphology.SPIRAL


def particle_count(label: str) -> int:
    """Number of particles in the primary field for a type label."""
    return PARTICLE_COUNTS[classify(label).value]


def is_grand_design(label: str) -> bool:
    return GRAND_DESIGN_KEYWORD in label


def arm_count(label: str) -> int:
    """Spiral arm count: two for grand-design spirals, three otherwise."""
    return 2 if is_grand_design(label) else 3
