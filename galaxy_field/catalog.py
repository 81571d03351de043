"""Galaxy catalog records, validation and loading."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .config import FALLBACK_SECONDARY_COLOR
from .visualization.colors import hex_to_rgb

log = logging.getLogger(__name__)


class CatalogError(ValueError):
    """The catalog as a whole cannot be used (empty, duplicated ids, unreadable)."""


class DescriptorValidationError(ValueError):
    """A single descriptor has an invalid field."""

    def __init__(self, galaxy_id: str, field: str, message: str):
        super().__init__(f"Galaxy {galaxy_id!r}: invalid {field}: {message}")
        self.galaxy_id = galaxy_id
        self.field = field


@dataclass(frozen=True)
class GalaxyDescriptor:
    """Static description of one galaxy as supplied by the catalog."""

    id: str
    name: str
    type: str
    distance_light_years: float
    size_light_years: float
    description: str
    color_scheme: str

    @property
    def color_pair(self) -> Tuple[str, str]:
        """Primary and secondary hex colors from ``color_scheme``.

        A scheme with no comma is a degraded form: the whole string becomes
        the primary color and the secondary falls back to white.
        """
        parts = [part.strip() for part in self.color_scheme.split(',')]
        if len(parts) >= 2:
            return parts[0], parts[1]
        return self.color_scheme.strip(), FALLBACK_SECONDARY_COLOR


def validate_descriptor(descriptor: GalaxyDescriptor) -> GalaxyDescriptor:
    """
    Check the fields the generator relies on.

    Args:
        descriptor: Descriptor to check

    Returns:
        The same descriptor, for chaining

    Raises:
        DescriptorValidationError: naming the first offending field
    """
    if not descriptor.id or not descriptor.id.strip():
        raise DescriptorValidationError(descriptor.id, 'id', "must not be empty")
    if '/' in descriptor.id:
        # Ids name HDF5 groups on export
        raise DescriptorValidationError(descriptor.id, 'id', "must not contain '/'")
    if not descriptor.color_scheme or not descriptor.color_scheme.strip():
        raise DescriptorValidationError(
            descriptor.id, 'color_scheme', "must not be empty"
        )
    for color in descriptor.color_pair:
        try:
            hex_to_rgb(color)
        except ValueError:
            raise DescriptorValidationError(
                descriptor.id, 'color_scheme', f"not a hex color: {color!r}"
            ) from None
    if not descriptor.size_light_years > 0:
        raise DescriptorValidationError(
            descriptor.id,
            'size_light_years',
            f"must be positive, got {descriptor.size_light_years}",
        )
    if not descriptor.distance_light_years > 0:
        raise DescriptorValidationError(
            descriptor.id,
            'distance_light_years',
            f"must be positive, got {descriptor.distance_light_years}",
        )
    return descriptor


def validate_catalog(
    descriptors: Iterable[GalaxyDescriptor],
) -> List[GalaxyDescriptor]:
    """
    Validate every descriptor and the catalog as a whole.

    Raises:
        CatalogError: if the catalog is empty or an id appears twice
        DescriptorValidationError: if any descriptor is invalid
    """
    catalog = [validate_descriptor(d) for d in descriptors]
    if not catalog:
        raise CatalogError("Catalog must contain at least one galaxy")

    seen = set()
    for descriptor in catalog:
        if descriptor.id in seen:
            raise CatalogError(f"Duplicate galaxy id: {descriptor.id!r}")
        seen.add(descriptor.id)

    return catalog


# Accepted record keys, mapped to descriptor field names
_RECORD_KEYS = {
    'id': 'id',
    'name': 'name',
    'type': 'type',
    'distanceLightYears': 'distance_light_years',
    'distance_light_years': 'distance_light_years',
    'sizeLightYears': 'size_light_years',
    'size_light_years': 'size_light_years',
    'description': 'description',
    'colorScheme': 'color_scheme',
    'color_scheme': 'color_scheme',
}


def descriptor_from_record(record: Dict[str, Any]) -> GalaxyDescriptor:
    """Build a descriptor from a dict using camelCase or snake_case keys."""
    values = {
        'id': '',
        'name': '',
        'type': '',
        'distance_light_years': 0.0,
        'size_light_years': 0.0,
        'description': '',
        'color_scheme': '',
    }
    for key, value in record.items():
        field = _RECORD_KEYS.get(key)
        if field is None:
            log.debug("Ignoring unknown catalog key %r", key)
            continue
        values[field] = value

    galaxy_id = str(values['id'])
    for field in ('distance_light_years', 'size_light_years'):
        try:
            values[field] = float(values[field])
        except (TypeError, ValueError):
            raise DescriptorValidationError(
                galaxy_id, field, f"not a number: {values[field]!r}"
            ) from None

    return GalaxyDescriptor(
        id=galaxy_id,
        name=str(values['name']),
        type=str(values['type']),
        distance_light_years=values['distance_light_years'],
        size_light_years=values['size_light_years'],
        description=str(values['description']),
        color_scheme=str(values['color_scheme']),
    )


def catalog_from_records(records: Sequence[Dict[str, Any]]) -> List[GalaxyDescriptor]:
    """Convert and validate a sequence of raw catalog records."""
    return validate_catalog(descriptor_from_record(r) for r in records)


def load_catalog(filepath: Path) -> List[GalaxyDescriptor]:
    """
    Load a catalog from a JSON file holding a list of records.

    Args:
        filepath: Path to the JSON file

    Returns:
        Validated list of descriptors in file order
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read catalog {filepath}: {e}") from e

    if not isinstance(records, list):
        raise CatalogError(f"Catalog {filepath} must hold a JSON list of records")

    return catalog_from_records(records)


DEFAULT_CATALOG = validate_catalog(
    [
        GalaxyDescriptor(
            id='andromeda',
            name='Andromeda',
            type='Spiral Galaxy',
            distance_light_years=2537000,
            size_light_years=220000,
            description=(
                'The closest spiral galaxy to the Milky Way, Andromeda is on a '
                'slow-motion collision course with us and contains an estimated '
                'one trillion stars.'
            ),
            color_scheme='#6dd5ed,#2193b0',
        ),
        GalaxyDescriptor(
            id='sombrero',
            name='Sombrero Galaxy',
            type='Unbarred Spiral Galaxy',
            distance_light_years=32000000,
            size_light_years=50000,
            description=(
                'Named for its resemblance to a wide-brimmed hat, the Sombrero '
                'Galaxy features a bright nucleus and a prominent dust lane '
                'outlining its spiral structure.'
            ),
            color_scheme='#fceabb,#f8b500',
        ),
        GalaxyDescriptor(
            id='triangulum',
            name='Triangulum Galaxy',
            type='Spiral Galaxy',
            distance_light_years=3000000,
            size_light_years=60000,
            description=(
                'A graceful spiral with loosely wound arms, Triangulum is a '
                'vigorous star-forming galaxy within our Local Group.'
            ),
            color_scheme='#a18cd1,#fbc2eb',
        ),
        GalaxyDescriptor(
            id='centaurus-a',
            name='Centaurus A',
            type='Peculiar Galaxy',
            distance_light_years=12000000,
            size_light_years=60000,
            description=(
                'A dramatic merger remnant with a supermassive black hole '
                'launching immense radio jets, Centaurus A glows with turbulent '
                'energy.'
            ),
            color_scheme='#ff9a9e,#fad0c4',
        ),
        GalaxyDescriptor(
            id='whirlpool',
            name='Whirlpool Galaxy',
            type='Grand-Design Spiral Galaxy',
            distance_light_years=23000000,
            size_light_years=76000,
            description=(
                'Famous for its sweeping spiral arms and interaction with a '
                'companion galaxy, the Whirlpool showcases textbook spiral '
                'structure.'
            ),
            color_scheme='#00c6ff,#0072ff',
        ),
        GalaxyDescriptor(
            id='cartwheel',
            name='Cartwheel Galaxy',
            type='Ring Galaxy',
            distance_light_years=500000000,
            size_light_years=150000,
            description=(
                'The Cartwheel was likely shaped by a dramatic collision that '
                'sent ripples through its disk, igniting a wave of star '
                'formation in a bright outer ring.'
            ),
            color_scheme='#fc5c7d,#6a82fb',
        ),
        GalaxyDescriptor(
            id='large-magellanic-cloud',
            name='Large Magellanic Cloud',
            type='Irregular Galaxy',
            distance_light_years=163000,
            size_light_years=14000,
            description=(
                'A satellite of the Milky Way, the Large Magellanic Cloud is '
                'rich with nebulae and star-forming regions like the Tarantula '
                'Nebula.'
            ),
            color_scheme='#43cea2,#185a9d',
        ),
    ]
)
