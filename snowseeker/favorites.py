"""Favorite resorts for the current session (in memory only)."""

from __future__ import annotations
from typing import Dict, Iterable, Iterator
import logging

from .models import Resort

logger = logging.getLogger(__name__)

class Favorites:
    """Set of favorite resort ids.

    The list view only calls `contains`; `add`/`remove`/`toggle` are used by
    the favorite button on the detail view.
    """

    def __init__(self, resort_ids: Iterable[str] = ()) -> None:
        # dict keeps insertion order for listing
        self._ids: Dict[str, None] = dict.fromkeys(resort_ids)

    def contains(self, resort: Resort) -> bool:
        return resort.id in self._ids

    def __contains__(self, resort: Resort) -> bool:
        return self.contains(resort)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def add(self, resort: Resort) -> None:
        self._ids[resort.id] = None
        logger.debug("Added favorite %s", resort.id)

    def remove(self, resort: Resort) -> None:
        self._ids.pop(resort.id, None)
        logger.debug("Removed favorite %s", resort.id)

    def toggle(self, resort: Resort) -> bool:
        """Flip the favorite state and return the new one."""
        if self.contains(resort):
            self.remove(resort)
            return False
        self.add(resort)
        return True
