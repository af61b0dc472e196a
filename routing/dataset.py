"""
Purpose: Load worker pickup locations from tabular data.
What it does:
- Converts a pandas DataFrame (or a CSV on disk) into Location objects
  the optimizers understand.
- Accepts either lat/lon or latitude/longitude column names.
- Drops rows whose coordinates are missing or not numeric.

Used by the simulation scripts and tests; the optimization engine itself never reads files.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from .models import Location

ID_COLUMNS = ("worker_id", "user_id", "id")
LAT_COLUMNS = ("latitude", "lat")
LON_COLUMNS = ("longitude", "lon", "lng")


def _pick_column(df: pd.DataFrame, options) -> str:
    for name in options:
        if name in df.columns:
            return name
    raise KeyError(f"None of the columns {list(options)} found in dataset (has {list(df.columns)})")


def locations_from_dataframe(df: pd.DataFrame) -> List[Location]:
    """
    Build Location objects from a DataFrame, one per row, preserving row order.
    """
    if df.empty:
        return []

    id_col = _pick_column(df, ID_COLUMNS)
    lat_col = _pick_column(df, LAT_COLUMNS)
    lon_col = _pick_column(df, LON_COLUMNS)

    frame = df[[id_col, lat_col, lon_col]].copy()
    frame[lat_col] = pd.to_numeric(frame[lat_col], errors="coerce")
    frame[lon_col] = pd.to_numeric(frame[lon_col], errors="coerce")
    frame = frame.dropna(subset=[lat_col, lon_col])

    return [
        Location.new(location_id, lat, lon)
        for location_id, lat, lon in zip(frame[id_col], frame[lat_col], frame[lon_col])
    ]


def load_locations_csv(path: Union[str, Path], limit: Optional[int] = None) -> List[Location]:
    """
    Read a CSV of worker locations. `limit` keeps only the first N usable rows.
    """
    df = pd.read_csv(path)
    locations = locations_from_dataframe(df)
    if limit is not None:
        locations = locations[:limit]
    return locations
