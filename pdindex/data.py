# Filename: pdindex/data.py
"""
Loads daily closing-price tables from CSV.

Key points
----------
* One date column plus one column per asset, any row order
* Common "no price" markers (null, N/A, #N/A, ".") are read as missing
* No cleaning happens here: filtering and column drops belong to pdindex.returns
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

import pandas as pd

from pdindex.config import RETURNS_CONFIG

LOG = logging.getLogger(__name__)

MISSING_MARKERS = ["", "null", "NULL", "NA", "N/A", "#N/A", "nan", "NaN", "."]


def load_price_csv(
    path: Union[str, "os.PathLike[str]"],
    date_column: Optional[str] = None,
) -> pd.DataFrame:
    """
    Read a price table from ``path``.

    Args:
        path: CSV file with a header row.
        date_column: Name of the date column. Defaults to
            ``RETURNS_CONFIG["date_column"]``.

    Returns:
        pd.DataFrame: The raw table, date column parsed to datetimes and
        every other column coerced to float (unparseable cells become NaN).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the date column is not in the header.
    """
    if date_column is None:
        date_column = RETURNS_CONFIG["date_column"]

    if not os.path.exists(path):
        raise FileNotFoundError(f"Price file not found: {path}")

    df = pd.read_csv(path, na_values=MISSING_MARKERS, keep_default_na=True)
    if date_column not in df.columns:
        raise ValueError(
            f"Date column {date_column!r} not found in {path}; columns: {list(df.columns)}"
        )

    df[date_column] = pd.to_datetime(df[date_column], errors="coerce")
    asset_cols = [c for c in df.columns if c != date_column]
    df[asset_cols] = df[asset_cols].apply(pd.to_numeric, errors="coerce")

    LOG.info("Loaded %d rows x %d assets from %s", len(df), len(asset_cols), path)
    return df
