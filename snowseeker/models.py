"""
Data model (Resort, SortMode, MatchMode)
========================================

Each entry of the bundled resort dataset becomes a `Resort` object.
Records are immutable (`frozen=True`) so that:
- the catalog cannot be accidentally modified after loading, and
- sorting/searching only ever builds new sequences of the same records.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import logging

logger = logging.getLogger(__name__)

SIZE_LABELS = {1: "Small", 2: "Average", 3: "Large"}

@dataclass(frozen=True)
class Resort:
    """One ski resort.

    Only `id`, `name`, `country` and `runs` take part in ordering and
    searching; the rest is descriptive and shown on the detail view.
    """
    id: str
    name: str
    country: str
    runs: int
    description: str = ""
    image_credit: str = ""
    price: int = 0
    size: int = 0
    snow_depth: int = 0
    elevation: int = 0
    facilities: Tuple[str, ...] = ()

    @property
    def flag_key(self) -> str:
        """Image lookup key for the country flag."""
        return self.country

    @property
    def size_label(self) -> str:
        return SIZE_LABELS.get(self.size, "Unknown")

    @property
    def price_label(self) -> str:
        return "$" * max(self.price, 0)


class SortMode(Enum):
    DEFAULT = "default"
    ALPHABETICAL = "alphabetical"
    BY_COUNTRY = "country"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]

    @classmethod
    def parse(cls, value) -> "SortMode":
        """Map user input to a sort mode.

        Unknown values fall back to DEFAULT instead of failing.
        """
        if isinstance(value, SortMode):
            return value
        key = str(value or "").strip().lower()
        mode = _SORT_ALIASES.get(key)
        if mode is None:
            logger.warning("Unknown sort mode %r, using default order", value)
            return cls.DEFAULT
        return mode


_SORT_LABELS = {
    SortMode.DEFAULT: "Default Order",
    SortMode.ALPHABETICAL: "Alphabetical Order",
    SortMode.BY_COUNTRY: "Country Order",
}

# "apphabetical" is the label older builds stored for alphabetical order
_SORT_ALIASES = {
    "default": SortMode.DEFAULT,
    "alphabetical": SortMode.ALPHABETICAL,
    "apphabetical": SortMode.ALPHABETICAL,
    "name": SortMode.ALPHABETICAL,
    "country": SortMode.BY_COUNTRY,
    "by_country": SortMode.BY_COUNTRY,
}


class MatchMode(Enum):
    """How search text is compared against resort names."""
    CASE_INSENSITIVE = "case"
    ACCENT_INSENSITIVE = "accent"
