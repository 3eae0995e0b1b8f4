"""
Detail view and layout
======================

Text rendering of a single resort, plus the choice between the two
presentation variants:

- STACKED (phones): the list and the detail view are shown one at a time.
- SPLIT (tablets and larger): the list and the detail view are shown side
  by side; with no resort selected the detail pane shows a welcome message.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional
import itertools
import textwrap

from .models import Resort

WELCOME_TITLE = "Welcome to SnowSeeker!"
WELCOME_HINT = "Please select a resort from the left-hand menu; swipe from the left edge to show it."

PHONE_DEVICES = ("phone",)

class Presentation(Enum):
    STACKED = "stacked"
    SPLIT = "split"

def presentation_for(device: str) -> Presentation:
    """Phones get the stacked layout, every larger device the split one."""
    return Presentation.STACKED if device.lower() in PHONE_DEVICES else Presentation.SPLIT


def render_detail(resort: Resort, is_favorite: bool = False, width: int = 60) -> List[str]:
    lines = [resort.name, "=" * min(len(resort.name), width), f"Country: {resort.country}"]
    if resort.image_credit:
        lines.append(f"Photo: {resort.image_credit}")
    lines.append("")
    lines.append(f"Size: {resort.size_label}    Price: {resort.price_label or '-'}")
    lines.append(f"Elevation: {resort.elevation}m    Snow: {resort.snow_depth}cm    Runs: {resort.runs}")
    if resort.description:
        lines.append("")
        lines.extend(textwrap.wrap(resort.description, width=width))
    if resort.facilities:
        lines.append("")
        lines.append("Facilities: " + ", ".join(resort.facilities))
    lines.append("")
    lines.append("♥ Favorite (use 'fav' to remove)" if is_favorite else "Not a favorite (use 'fav' to add)")
    return lines

def render_welcome(width: int = 60) -> List[str]:
    return [WELCOME_TITLE, ""] + textwrap.wrap(WELCOME_HINT, width=width)


def render_split(list_lines: List[str], detail_lines: Optional[List[str]], list_width: int = 44) -> List[str]:
    """Lay the list and the detail pane out side by side."""
    right = detail_lines if detail_lines is not None else render_welcome()
    out: List[str] = []
    for left, r in itertools.zip_longest(list_lines, right, fillvalue=""):
        out.append(f"{left[:list_width]:<{list_width}} | {r}".rstrip())
    return out
