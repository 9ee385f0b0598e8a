"""
PDI through time over a sliding window of returns.
"""
from __future__ import annotations

import logging
from typing import Optional

import pandas as pd
from joblib import Parallel, delayed

from pdindex.config import ROLLING_CONFIG
from pdindex.exceptions import InsufficientDataError, PDIError
from pdindex.pca import compute_pdi

LOG = logging.getLogger(__name__)


def _window_pdi(window: pd.DataFrame) -> float:
    try:
        return compute_pdi(window)
    except PDIError as e:
        raise type(e)(f"Window ending {window.index[-1]}: {e}") from e


def rolling_pdi(
    returns: pd.DataFrame,
    window_size: Optional[int] = None,
    n_jobs: Optional[int] = None,
) -> pd.Series:
    """
    Calculates the PDI over every run of ``window_size + 1`` consecutive rows.

    The window advances one row at a time, giving ``len(returns) - window_size``
    values. Every asset column is used in every window.

    Args:
        returns (pd.DataFrame): Dense return table in ascending date order,
                                as produced by ``transform_prices``.
        window_size (int): Rows of look-back before each window's last row.
        n_jobs (int): joblib worker count.

    Returns:
        pd.Series: ``pdi`` indexed by the date of each window's last row.

    Raises:
        ValueError: If ``window_size < 1``.
        InsufficientDataError: If the table has no more rows than ``window_size``.
    """
    if window_size is None:
        window_size = ROLLING_CONFIG["window_size"]
    if n_jobs is None:
        n_jobs = ROLLING_CONFIG["n_jobs"]
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}.")

    n_rows = len(returns)
    if n_rows <= window_size:
        raise InsufficientDataError(
            f"Need more than {window_size} rows for a rolling window, got {n_rows}."
        )

    span = window_size + 1
    LOG.info("Rolling PDI: %d windows of %d rows over %d assets", n_rows - window_size, span, returns.shape[1])

    scores = Parallel(n_jobs=n_jobs)(
        delayed(_window_pdi)(returns.iloc[end - span:end]) for end in range(span, n_rows + 1)
    )

    return pd.Series(scores, index=returns.index[window_size:], name="pdi")
