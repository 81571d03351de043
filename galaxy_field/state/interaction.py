"""Selection and hover state driven by pointer and navigation events."""

import logging
from typing import List, Optional, Sequence

from ..catalog import CatalogError

log = logging.getLogger(__name__)


class InteractionState:
    """
    Which galaxy is selected and which (if any) is hovered.

    Exactly one galaxy is selected at all times; it defaults to the first
    catalog entry. The event handler is the only writer, animators only
    read, so updates are plain attribute assignments made between ticks.
    """

    def __init__(self, galaxy_ids: Sequence[str], selected: Optional[str] = None):
        """
        Initialize interaction state.

        Args:
            galaxy_ids: Galaxy ids in catalog order
            selected: Initial selection (falls back to the first id)
        """
        self._ids: List[str] = list(galaxy_ids)
        if not self._ids:
            raise CatalogError("Interaction state needs at least one galaxy")
        self._selected = self._ids[0]
        self._hovered: Optional[str] = None
        if selected is not None:
            self.select(selected)

    @property
    def galaxy_ids(self) -> List[str]:
        return list(self._ids)

    @property
    def selected(self) -> str:
        """Currently selected galaxy id."""
        return self._selected

    @property
    def hovered(self) -> Optional[str]:
        """Currently hovered galaxy id, or None."""
        return self._hovered

    @property
    def selected_index(self) -> int:
        return self._ids.index(self._selected)

    def select(self, galaxy_id: str) -> str:
        """
        Select a galaxy by id.

        An id that is not in the catalog resolves to the first catalog
        entry instead of failing.

        Returns:
            The id that ended up selected
        """
        if galaxy_id not in self._ids:
            log.warning(
                "Unknown galaxy id %r, selecting %r instead", galaxy_id, self._ids[0]
            )
            galaxy_id = self._ids[0]
        self._selected = galaxy_id
        return galaxy_id

    def hover(self, galaxy_id: Optional[str]) -> Optional[str]:
        """Set (or clear, with None) the hovered galaxy. Unknown ids clear it."""
        if galaxy_id is not None and galaxy_id not in self._ids:
            log.debug("Ignoring hover on unknown galaxy id %r", galaxy_id)
            galaxy_id = None
        self._hovered = galaxy_id
        return galaxy_id

    def step(self, direction: int) -> str:
        """Move the selection by ``direction`` places, wrapping around."""
        index = (self.selected_index + direction) % len(self._ids)
        self._selected = self._ids[index]
        return self._selected

    def next(self) -> str:
        return self.step(1)

    def previous(self) -> str:
        return self.step(-1)

    def is_selected(self, galaxy_id: str) -> bool:
        return galaxy_id == self._selected

    def is_hovered(self, galaxy_id: str) -> bool:
        return galaxy_id == self._hovered
