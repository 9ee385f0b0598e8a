"""
Turns a table of daily closing prices into a dense, mean-centred table of
simple returns.

Rows are put in ascending date order before anything is differenced, so a
return is always ``(p_t - p_{t-1}) / p_{t-1}`` regardless of how the input
file was ordered.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pandas as pd

from pdindex.config import RETURNS_CONFIG
from pdindex.exceptions import InsufficientDataError

LOG = logging.getLogger(__name__)


def simple_returns(prices: pd.DataFrame) -> pd.DataFrame:
    """
    Per-column simple returns between adjacent rows.

    ``prices`` must already be in ascending time order. The first row has no
    predecessor and is dropped; every other row is labelled with its own date.
    A zero previous price yields an infinite (or NaN) return, left as is.
    """
    previous = prices.shift(1)
    return ((prices - previous) / previous).iloc[1:]


def center_returns(returns: pd.DataFrame) -> pd.DataFrame:
    """Subtract each column's mean from that column."""
    return returns - returns.mean(axis=0)


def transform_prices(
    prices: pd.DataFrame,
    date_column: Optional[str] = None,
    reference_column: Optional[str] = None,
) -> pd.DataFrame:
    """
    Converts a price table into a mean-centred return table.

    Steps:
        1. Sort rows by date (ascending).
        2. Drop non-trading rows, i.e. rows where ``reference_column`` (or
           the date itself) is missing or unparseable.
        3. Compute simple returns between adjacent rows.
        4. Drop every asset column holding a missing or non-finite return.
        5. Subtract each remaining column's mean.

    Args:
        prices (pd.DataFrame): One date column plus one price column per asset.
        date_column (str | None): Column holding the dates. Defaults to
                                  ``RETURNS_CONFIG["date_column"]``. When the
                                  table has no such column but its index
                                  carries that name (or the configured name
                                  is None), the dates come from the index.
        reference_column (str | None): Asset whose missing prices mark
                                       non-trading days. Defaults to
                                       ``RETURNS_CONFIG["reference_column"]``,
                                       then to the first asset column.

    Returns:
        pd.DataFrame: Returns indexed by date (``"date"``), ascending, with no
        missing values and every column mean-centred. Has
        ``len(prices) - filtered_rows - 1`` rows.

    Raises:
        ValueError: If ``date_column`` or ``reference_column`` does not exist.
        InsufficientDataError: If there are no asset columns, fewer than two
            valid rows, or every asset column gets dropped.
    """
    if date_column is None:
        date_column = RETURNS_CONFIG["date_column"]
    if reference_column is None:
        reference_column = RETURNS_CONFIG["reference_column"]

    if date_column is None or (date_column not in prices.columns and prices.index.name == date_column):
        dates = pd.to_datetime(pd.Series(prices.index), errors="coerce")
        table = prices
    else:
        if date_column not in prices.columns:
            raise ValueError(f"Date column {date_column!r} not found; columns: {list(prices.columns)}")
        dates = pd.to_datetime(prices[date_column], errors="coerce")
        table = prices.drop(columns=[date_column])

    if table.shape[1] == 0:
        raise InsufficientDataError("Price table has no asset columns.")

    table = table.apply(pd.to_numeric, errors="coerce")
    table.index = pd.DatetimeIndex(dates.to_numpy(), name="date")

    if reference_column is None:
        reference_column = table.columns[0]
    elif reference_column not in table.columns:
        raise ValueError(f"Reference column {reference_column!r} not found among assets.")

    # Non-trading days: no date or no reference price
    valid = table.index.notna() & table[reference_column].notna().to_numpy()
    n_filtered = int((~valid).sum())
    table = table.loc[valid].sort_index(kind="mergesort")

    if len(table) < 2:
        raise InsufficientDataError(
            f"Need at least 2 valid price rows, got {len(table)} after filtering {n_filtered} non-trading rows."
        )

    returns = simple_returns(table).replace([np.inf, -np.inf], np.nan)

    has_gaps = returns.isna().any(axis=0)
    dropped = list(returns.columns[has_gaps])
    returns = returns.loc[:, ~has_gaps]

    if returns.shape[1] == 0:
        raise InsufficientDataError(
            f"All {len(dropped)} asset columns contain missing returns; nothing left to analyse."
        )

    LOG.info(
        "Returns: %d rows x %d assets (filtered %d non-trading rows, dropped %d assets)",
        len(returns), returns.shape[1], n_filtered, len(dropped),
    )
    if dropped:
        LOG.debug("Dropped assets with missing returns: %s", dropped)

    return center_returns(returns)
