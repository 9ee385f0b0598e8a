"""
PDI as a function of portfolio size.

For each pool size the sampler draws random asset subsets and averages their
PDI, giving the curve of expected diversification versus number of holdings.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from pdindex.config import SAMPLING_CONFIG
from pdindex.exceptions import SamplingConfigError
from pdindex.pca import compute_pdi

LOG = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.Generator]


def _resolve_rng(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        rng = SAMPLING_CONFIG["random_seed"]
    return np.random.default_rng(rng)


def sample_pool_trials(
    returns: pd.DataFrame,
    max_pool_size: Optional[int] = None,
    trials_per_size: Optional[int] = None,
    rng: RandomSource = None,
    n_jobs: Optional[int] = None,
) -> pd.DataFrame:
    """
    Computes the PDI of random asset subsets for every pool size up to ``max_pool_size``.

    Each trial picks ``pool_size`` distinct columns uniformly at random; trials
    are independent, so the same combination may come up more than once.
    All subsets are drawn from ``rng`` before any PDI is computed, so the
    output does not depend on ``n_jobs``.

    Args:
        returns (pd.DataFrame): Dense return table, one column per asset.
        max_pool_size (int | None): Largest pool size. ``None`` uses every asset.
        trials_per_size (int): Subsets drawn per pool size.
        rng (None | int | np.random.Generator): Random source. ``None`` falls
            back to ``SAMPLING_CONFIG["random_seed"]`` (fresh entropy if unset).
        n_jobs (int): joblib worker count for the PDI evaluations.

    Returns:
        pd.DataFrame: Columns ``pool_size``, ``trial``, ``pdi``, ``assets``
        (tuple of column labels), one row per trial, ordered by pool size.

    Raises:
        SamplingConfigError: If ``trials_per_size <= 0`` or ``max_pool_size``
            is below 1 or above the number of assets.
    """
    if trials_per_size is None:
        trials_per_size = SAMPLING_CONFIG["trials_per_size"]
    if n_jobs is None:
        n_jobs = SAMPLING_CONFIG["n_jobs"]
    if not isinstance(returns, pd.DataFrame):
        returns = pd.DataFrame(returns)

    n_assets = returns.shape[1]
    if max_pool_size is None:
        max_pool_size = n_assets
    if trials_per_size <= 0:
        raise SamplingConfigError(f"trials_per_size must be positive, got {trials_per_size}.")
    if max_pool_size < 1 or max_pool_size > n_assets:
        raise SamplingConfigError(
            f"max_pool_size must be between 1 and the number of assets ({n_assets}), got {max_pool_size}."
        )

    generator = _resolve_rng(rng)
    draws = [
        (size, trial, np.sort(generator.choice(n_assets, size=size, replace=False)))
        for size in range(1, max_pool_size + 1)
        for trial in range(trials_per_size)
    ]

    LOG.info(
        "Sampling %d pool sizes x %d trials over %d assets (n_jobs=%d)",
        max_pool_size, trials_per_size, n_assets, n_jobs,
    )
    pdis = Parallel(n_jobs=n_jobs)(
        delayed(compute_pdi)(returns.iloc[:, idx]) for _, _, idx in draws
    )

    return pd.DataFrame(
        {
            "pool_size": [size for size, _, _ in draws],
            "trial": [trial for _, trial, _ in draws],
            "pdi": pdis,
            "assets": [tuple(returns.columns[idx]) for _, _, idx in draws],
        }
    )


def sample_pool_sizes(
    returns: pd.DataFrame,
    max_pool_size: Optional[int] = None,
    trials_per_size: Optional[int] = None,
    rng: RandomSource = None,
    n_jobs: Optional[int] = None,
) -> pd.Series:
    """
    Mean PDI per pool size, for plotting diversification against portfolio size.

    Arguments are those of ``sample_pool_trials``.

    Returns:
        pd.Series: ``mean_pdi`` indexed by ``pool_size`` (1..max_pool_size).
    """
    trials = sample_pool_trials(
        returns,
        max_pool_size=max_pool_size,
        trials_per_size=trials_per_size,
        rng=rng,
        n_jobs=n_jobs,
    )
    curve = trials.groupby("pool_size")["pdi"].mean().rename("mean_pdi")
    for size, value in curve.items():
        LOG.debug("Pool size %d: mean PDI %.4f", size, value)
    return curve
