"""
Dataset loader (JSON / Excel -> Resort list)
============================================

This module reads the resort dataset and converts each entry into a
`Resort` object.

Key ideas:
- The bundled dataset is a JSON array of resort objects (camelCase keys).
  An Excel export with the same columns is accepted too.
- Column lookup is tolerant (`imageCredit`, `image_credit` and
  `Image Credit` all match).
- Any decoding problem is fatal: the loader raises `DatasetError` and never
  returns a partial catalog.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple
import logging
import math
import re

import pandas as pd

from .models import Resort

logger = logging.getLogger(__name__)

DEFAULT_DATASET = Path(__file__).parent / "data" / "resorts.json"


class DatasetError(ValueError):
    """The resort dataset could not be decoded."""


def _is_missing(x) -> bool:
    return pd.api.types.is_scalar(x) and pd.isna(x)

def _to_int(x) -> Optional[int]:
    """Convert a cell to int, returning None if missing/invalid.

    Only whole numbers convert: 3.0 gives 3, but 3.7, "inf" and lists do not.
    """
    if not pd.api.types.is_scalar(x) or isinstance(x, bool):
        return None
    if pd.isna(x): return None
    try: f = float(x)
    except (TypeError, ValueError): return None
    if not math.isfinite(f) or not f.is_integer():
        return None
    return int(f)

def _to_str(x) -> str:
    if _is_missing(x): return ""
    return str(x).strip()

def _to_facilities(x) -> Tuple[str, ...]:
    # JSON gives a list; spreadsheets give "Family, Nightlife"
    if isinstance(x, (list, tuple)):
        return tuple(str(f).strip() for f in x if str(f).strip())
    s = _to_str(x)
    if not s:
        return ()
    return tuple(part.strip() for part in s.split(",") if part.strip())

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise DatasetError(f"Missing required column. Tried={names}. Available={cols}")

def _optional_col(df: pd.DataFrame, *names: str) -> Optional[str]:
    try:
        return _col(df, *names)
    except DatasetError:
        return None


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
        elif suffix in (".xlsx", ".xlsm"):
            df = pd.read_excel(path, engine="openpyxl")
        else:
            raise DatasetError(f"Unsupported dataset format: {path.name} (expected .json or .xlsx)")
    except DatasetError:
        raise
    except (ValueError, OSError) as e:
        raise DatasetError(f"Could not decode {path}: {e}") from e
    if not isinstance(df, pd.DataFrame):
        raise DatasetError(f"Dataset {path} is not a list of resort records")
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df


def load_resorts(path=DEFAULT_DATASET) -> List[Resort]:
    """
    Load the resort dataset in file order.

    Raises:
        DatasetError: the file is missing, malformed, lacks a required
        column, holds an invalid value or repeats an id.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetError(f"Resort dataset not found: {path}")

    df = _read_frame(path)
    if df.empty:
        logger.info("Dataset %s contains no resorts", path)
        return []

    id_col = _col(df, "id", "Resort ID", "resort_id")
    name_col = _col(df, "name", "Resort", "Resort Name")
    country_col = _col(df, "country", "Country/Area")
    runs_col = _col(df, "runs", "Runs", "Number of Runs")

    desc_col = _optional_col(df, "description")
    credit_col = _optional_col(df, "imageCredit", "image_credit")
    price_col = _optional_col(df, "price")
    size_col = _optional_col(df, "size")
    depth_col = _optional_col(df, "snowDepth", "snow_depth")
    elev_col = _optional_col(df, "elevation")
    fac_col = _optional_col(df, "facilities")

    def _opt_int(row, col, rid: str) -> int:
        if not col or _is_missing(row[col]):
            return 0
        v = _to_int(row[col])
        if v is None:
            raise DatasetError(f"Resort {rid!r} has invalid {col} value: {row[col]!r}")
        return v

    resorts: List[Resort] = []
    seen = set()
    for i, row in df.iterrows():
        rid = _to_str(row[id_col])
        if not rid:
            raise DatasetError(f"Record {i} has no id")
        if rid in seen:
            raise DatasetError(f"Duplicate resort id: {rid!r}")
        seen.add(rid)

        runs = _to_int(row[runs_col])
        if runs is None or runs < 0:
            raise DatasetError(f"Resort {rid!r} has invalid runs value: {row[runs_col]!r}")

        resorts.append(Resort(
            id=rid,
            name=_to_str(row[name_col]),
            country=_to_str(row[country_col]),
            runs=runs,
            description=_to_str(row[desc_col]) if desc_col else "",
            image_credit=_to_str(row[credit_col]) if credit_col else "",
            price=_opt_int(row, price_col, rid),
            size=_opt_int(row, size_col, rid),
            snow_depth=_opt_int(row, depth_col, rid),
            elevation=_opt_int(row, elev_col, rid),
            facilities=_to_facilities(row[fac_col]) if fac_col else (),
        ))

    logger.info("Loaded %d resorts from %s", len(resorts), path)
    return resorts
