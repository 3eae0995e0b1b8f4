"""
Sort and search pipeline
========================

The list on screen is derived in two pure stages:

1) sort   -> `sort_resorts(resorts, mode)`
2) filter -> `filter_resorts(sorted_resorts, query, match)`

Filtering always runs on the sorted sequence, so search results keep the
chosen sort order. Neither stage touches its input sequence.

Sorting uses an explicit merge sort because ties must keep load order
(merge sort is stable).
"""

from __future__ import annotations
from typing import Callable, List, Sequence, TypeVar
import unicodedata

from .models import MatchMode, Resort, SortMode

T = TypeVar("T")

def merge_sort(arr: Sequence[T], key: Callable[[T], object] = lambda x: x) -> List[T]:
    """Stable merge sort (ascending). Returns a new list."""
    if len(arr) <= 1:
        return list(arr)
    mid = len(arr) // 2
    left = merge_sort(arr[:mid], key=key)
    right = merge_sort(arr[mid:], key=key)
    return _merge(left, right, key=key)

def _merge(left: List[T], right: List[T], key: Callable[[T], object]) -> List[T]:
    out: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # <= takes from the left run on ties (stability)
        if key(left[i]) <= key(right[j]):
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out


def _name_key(r: Resort) -> str:
    return r.name.lower()

def _country_key(r: Resort) -> str:
    return r.country.lower()

_SORT_KEYS = {
    SortMode.ALPHABETICAL: _name_key,
    SortMode.BY_COUNTRY: _country_key,
}

def sort_resorts(resorts: Sequence[Resort], mode=SortMode.DEFAULT) -> List[Resort]:
    """Order resorts for display.

    DEFAULT keeps load order. ALPHABETICAL and BY_COUNTRY compare the
    lower-cased name/country. Anything unrecognized behaves like DEFAULT.
    """
    key = _SORT_KEYS.get(SortMode.parse(mode))
    if key is None:
        return list(resorts)
    return merge_sort(resorts, key=key)


def fold(text: str, match: MatchMode = MatchMode.CASE_INSENSITIVE) -> str:
    """Normalize text for searching under the given match mode.

    Canonically equivalent spellings (a precomposed "å" and "a" plus a
    combining ring) fold to the same text.
    """
    folded = unicodedata.normalize("NFC", unicodedata.normalize("NFC", text).casefold())
    if match is MatchMode.ACCENT_INSENSITIVE:
        decomposed = unicodedata.normalize("NFKD", folded)
        folded = "".join(c for c in decomposed if not unicodedata.combining(c))
    return folded

def name_matches(resort: Resort, query: str, match: MatchMode = MatchMode.CASE_INSENSITIVE) -> bool:
    return fold(query, match) in fold(resort.name, match)

def filter_resorts(resorts: Sequence[Resort], query: str,
                   match: MatchMode = MatchMode.CASE_INSENSITIVE) -> List[Resort]:
    """Keep resorts whose name contains `query`.

    An empty query returns the input unchanged (as a new list). No trimming
    is done, so " " only matches names containing a space.
    """
    if query == "":
        return list(resorts)
    return [r for r in resorts if name_matches(r, query, match)]
