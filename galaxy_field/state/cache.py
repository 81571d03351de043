"""Per-galaxy cache of generated particle buffers."""

import logging
from typing import Callable, Dict, Tuple

from ..catalog import GalaxyDescriptor
from ..initialization.generators import GalaxyBuffers, generate_galaxy_buffers
from ..initialization.layout import GalaxyInstance

log = logging.getLogger(__name__)


class ParticleCache:
    """
    Explicit map from galaxy id to its generated buffers.

    An entry is reused as long as the descriptor stored for the id and the
    instance index (which fixes the seeds) are unchanged. Replacing either
    regenerates the buffers on the next lookup.
    """

    def __init__(
        self,
        generator: Callable[[GalaxyInstance], GalaxyBuffers] = generate_galaxy_buffers,
    ):
        self._generator = generator
        self._entries: Dict[str, Tuple[GalaxyDescriptor, int, GalaxyBuffers]] = {}

    def get(self, instance: GalaxyInstance) -> GalaxyBuffers:
        """Return cached buffers for an instance, generating them on a miss."""
        entry = self._entries.get(instance.id)
        if entry is not None:
            descriptor, index, buffers = entry
            if descriptor == instance.descriptor and index == instance.index:
                return buffers
            log.debug("Descriptor for %s replaced, regenerating", instance.id)

        buffers = self._generator(instance)
        self._entries[instance.id] = (instance.descriptor, instance.index, buffers)
        log.debug(
            "Cached buffers for %s (%d/%d/%d particles)",
            instance.id,
            buffers.primary.count,
            buffers.bulge.count,
            buffers.dust.count,
        )
        return buffers

    def invalidate(self, galaxy_id: str) -> None:
        self._entries.pop(galaxy_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, galaxy_id: str) -> bool:
        return galaxy_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
