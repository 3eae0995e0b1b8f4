"""
Resort catalog (loaded once, read-only)
=======================================

`ResortCatalog` wraps the loaded resort list together with simple indices
(maps from value -> position/record):

- `by_id["whistler"]` gives the Resort with that id.
- `by_country["France"]` gives the load positions of French resorts.

The record tuple is never reordered or edited; every view is built from it.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple
from .models import Resort
from .loader import DEFAULT_DATASET, load_resorts

@dataclass(frozen=True)
class ResortCatalog:
    """Immutable resort list plus read-only lookup tables."""
    resorts: Tuple[Resort, ...]
    by_id: Mapping[str, Resort]
    by_country: Mapping[str, Tuple[int, ...]]

    def __len__(self) -> int:
        return len(self.resorts)

    def __iter__(self) -> Iterator[Resort]:
        return iter(self.resorts)

    def get(self, resort_id: str) -> Resort:
        """Return the resort with this id (KeyError if unknown)."""
        try:
            return self.by_id[resort_id]
        except KeyError:
            raise KeyError(f"No resort with id {resort_id!r}") from None

    def countries(self) -> List[str]:
        return sorted(self.by_country, key=str.lower)

def build_catalog(resorts: Sequence[Resort]) -> ResortCatalog:
    """Build the catalog and its indices from records in load order."""
    by_id: Dict[str, Resort] = {}
    by_country: Dict[str, List[int]] = {}

    for pos, r in enumerate(resorts):
        if r.id in by_id:
            raise ValueError(f"Duplicate resort id: {r.id!r}")
        by_id[r.id] = r
        by_country.setdefault(r.country, []).append(pos)

    return ResortCatalog(
        resorts=tuple(resorts),
        by_id=MappingProxyType(by_id),
        by_country=MappingProxyType({c: tuple(ids) for c, ids in by_country.items()}),
    )

def load_catalog(path=DEFAULT_DATASET) -> ResortCatalog:
    return build_catalog(load_resorts(path))
