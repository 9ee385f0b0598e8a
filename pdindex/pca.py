"""
Portfolio Diversification Index (PDI) via principal components analysis.

The PDI weights each component's share of total variance by its rank:

    PDI = 2 * sum_k k * s_k - 1

where ``s_k`` is the relative strength of the k-th largest component. One
dominant component gives 1 (no diversification); N equally strong components
give N.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from pdindex.config import PDI_CONFIG
from pdindex.exceptions import DegenerateInputError

LOG = logging.getLogger(__name__)


def _as_matrix(returns) -> Tuple[np.ndarray, List]:
    """Return ``(float matrix, column labels)`` after basic shape/finiteness checks."""
    if isinstance(returns, pd.DataFrame):
        labels = list(returns.columns)
        data = returns.to_numpy()
    else:
        data = returns
        labels = None

    try:
        matrix = np.asarray(data, dtype=float)
    except (TypeError, ValueError) as e:
        raise DegenerateInputError(f"Returns are not numeric: {e}") from e

    if matrix.ndim != 2:
        raise DegenerateInputError(f"Expected a 2-D returns matrix, got {matrix.ndim} dimension(s).")
    if matrix.shape[1] == 0:
        raise DegenerateInputError("Returns matrix has no asset columns.")
    if labels is None:
        labels = list(range(matrix.shape[1]))

    bad = ~np.isfinite(matrix).all(axis=0)
    if bad.any():
        raise DegenerateInputError(
            f"Missing or non-finite values in columns: {[labels[i] for i in np.flatnonzero(bad)]}"
        )
    return matrix, labels


def _strengths_from_matrix(matrix: np.ndarray, labels: List, zero_variance_tol: float) -> np.ndarray:
    n_obs, n_assets = matrix.shape
    if n_assets == 1:
        return np.array([1.0])
    if n_obs < 2:
        raise DegenerateInputError(f"Need at least 2 observations to standardise, got {n_obs}.")

    std = matrix.std(axis=0, ddof=1)
    flat = std <= zero_variance_tol
    if flat.any():
        raise DegenerateInputError(
            f"Zero-variance columns cannot be standardised: {[labels[i] for i in np.flatnonzero(flat)]}"
        )

    scaled = StandardScaler().fit_transform(matrix)
    pca = PCA(svd_solver="full").fit(scaled)

    variances = pca.explained_variance_
    variances = variances[np.argsort(-variances, kind="stable")]
    total = variances.sum()
    if not np.isfinite(total) or total <= 0:
        raise DegenerateInputError(f"PCA produced no usable variance (total={total}).")
    return variances / total


def relative_strengths(returns, zero_variance_tol: Optional[float] = None) -> np.ndarray:
    """
    Share of total variance carried by each principal component.

    Each column is scaled to unit variance before the decomposition so that
    volatile assets do not dominate.

    Args:
        returns (pd.DataFrame | array-like): Observations x assets, no missing values.
        zero_variance_tol (float): A column whose standard deviation is at or
                                   below this is treated as constant.

    Returns:
        np.ndarray: Non-negative weights summing to 1, largest component first.

    Raises:
        DegenerateInputError: On NaN/Inf, fewer than two observations, a
            constant column, or a non-2-D input.
    """
    if zero_variance_tol is None:
        zero_variance_tol = PDI_CONFIG["zero_variance_tol"]
    matrix, labels = _as_matrix(returns)
    return _strengths_from_matrix(matrix, labels, zero_variance_tol)


def pdi_from_strengths(strengths) -> float:
    """Apply the PDI formula to a relative-strength vector (sorted and normalised first)."""
    weights = np.asarray(strengths, dtype=float).ravel()
    if weights.size == 0:
        raise DegenerateInputError("Relative-strength vector is empty.")
    if not np.isfinite(weights).all() or (weights < 0).any() or weights.sum() <= 0:
        raise DegenerateInputError(f"Relative strengths must be finite, non-negative and not all zero: {weights}")

    weights = weights[np.argsort(-weights, kind="stable")]
    weights = weights / weights.sum()
    ranks = np.arange(1, weights.size + 1)
    return float(2.0 * np.dot(ranks, weights) - 1.0)


def compute_pdi(
    returns,
    zero_variance_tol: Optional[float] = None,
    bounds_tol: Optional[float] = None,
) -> float:
    """
    Calculates the Portfolio Diversification Index of a returns table.

    Args:
        returns (pd.DataFrame | array-like): Mean-centred returns, rows are
                                             dates and columns are assets.
        zero_variance_tol (float): See ``relative_strengths``.
        bounds_tol (float): Slack allowed outside ``[1, N]`` before a warning
                            is logged. The score is returned either way.

    Returns:
        float: The PDI, 1.0 exactly for a single asset.
    """
    if zero_variance_tol is None:
        zero_variance_tol = PDI_CONFIG["zero_variance_tol"]
    if bounds_tol is None:
        bounds_tol = PDI_CONFIG["bounds_tol"]

    matrix, labels = _as_matrix(returns)
    strengths = _strengths_from_matrix(matrix, labels, zero_variance_tol)
    pdi = pdi_from_strengths(strengths)

    n_assets = matrix.shape[1]
    if pdi < 1.0 - bounds_tol or pdi > n_assets + bounds_tol:
        LOG.warning("PDI %.6f outside [1, %d]; input may be degenerate (%d rows)", pdi, n_assets, matrix.shape[0])
    LOG.debug("PDI %.4f over %d assets x %d rows", pdi, n_assets, matrix.shape[0])
    return pdi
