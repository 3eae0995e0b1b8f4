"""
Resort list view
================

`ResortListView` is the state behind the home list:

1) Catalog -> immutable ResortCatalog
2) ViewState -> current sort mode, search text and match mode
3) displayed() -> sort, then filter, recomputed on every call
4) rows() / select() -> what the renderer shows and where a tap navigates

The catalog is never changed; only the ViewState is.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Union
import csv
import json
import logging

from .catalog import ResortCatalog
from .favorites import Favorites
from .models import MatchMode, Resort, SortMode
from .pipeline import filter_resorts, sort_resorts

logger = logging.getLogger(__name__)

@dataclass
class ViewState:
    """User-controlled inputs of the list."""
    sort_mode: SortMode = SortMode.DEFAULT
    search_text: str = ""
    match_mode: MatchMode = MatchMode.CASE_INSENSITIVE

@dataclass(frozen=True)
class ResortRow:
    resort: Resort
    is_favorite: bool

    def label(self) -> str:
        text = f"{self.resort.name} ({self.resort.country}) | {self.resort.runs} runs"
        return f"{text}  ♥" if self.is_favorite else text

@dataclass(frozen=True)
class NavigationRequest:
    """Request to open the detail view for one resort."""
    resort: Resort

@dataclass
class ResortListView:
    """Derives the displayed resort list from the catalog and ViewState.

    `favorites` is read-only from the list's point of view.
    """
    catalog: ResortCatalog
    favorites: Favorites = field(default_factory=Favorites)
    state: ViewState = field(default_factory=ViewState)
    # Commands that changed the view (shown in reports)
    command_log: List[str] = field(default_factory=list)

    # ---------------- Inputs ----------------
    def set_sort(self, mode: Union[SortMode, str]) -> SortMode:
        self.state.sort_mode = SortMode.parse(mode)
        return self.state.sort_mode

    def set_search(self, text: str) -> None:
        self.state.search_text = text

    def clear_search(self) -> None:
        self.state.search_text = ""

    def set_match_mode(self, match: MatchMode) -> None:
        self.state.match_mode = match

    # ---------------- Derivation ----------------
    def sorted_resorts(self) -> List[Resort]:
        return sort_resorts(self.catalog.resorts, self.state.sort_mode)

    def displayed(self) -> List[Resort]:
        """Resorts in display order: sorted first, then searched."""
        return filter_resorts(self.sorted_resorts(), self.state.search_text, self.state.match_mode)

    def rows(self) -> List[ResortRow]:
        return [ResortRow(resort=r, is_favorite=self.favorites.contains(r)) for r in self.displayed()]

    def select(self, key: str) -> NavigationRequest:
        """Activate a row by resort id or by 1-based position in the list."""
        resort = self._lookup(key)
        if resort is None:
            raise KeyError(f"No resort matching {key!r}")
        logger.debug("Navigating to %s", resort.id)
        return NavigationRequest(resort=resort)

    def _lookup(self, key: str) -> Optional[Resort]:
        if key in self.catalog.by_id:
            return self.catalog.by_id[key]
        if key.isdigit():
            shown = self.displayed()
            n = int(key)
            if 1 <= n <= len(shown):
                return shown[n - 1]
        return None

    # ---------------- Output operations ----------------
    def export_csv(self, path: str) -> int:
        rows = self.rows()
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["id", "name", "country", "runs", "price", "size",
                        "snow_depth", "elevation", "facilities", "favorite"])
            for row in rows:
                r = row.resort
                w.writerow([r.id, r.name, r.country, r.runs, r.price, r.size,
                            r.snow_depth, r.elevation, ", ".join(r.facilities), row.is_favorite])
        return len(rows)

    def export_json(self, path: str) -> int:
        """Export the displayed list to a JSON file (dataset key names)."""
        rows = self.rows()
        payload = [
            {
                "id": row.resort.id,
                "name": row.resort.name,
                "country": row.resort.country,
                "description": row.resort.description,
                "imageCredit": row.resort.image_credit,
                "price": row.resort.price,
                "size": row.resort.size,
                "snowDepth": row.resort.snow_depth,
                "elevation": row.resort.elevation,
                "runs": row.resort.runs,
                "facilities": list(row.resort.facilities),
                "favorite": row.is_favorite,
            }
            for row in rows
        ]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        return len(rows)
