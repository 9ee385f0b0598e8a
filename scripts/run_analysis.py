#!/usr/bin/env python
"""
Runs the full PDI analysis on a CSV of daily closing prices:
the PDI of the whole universe, the pool-size sweep, and the rolling PDI.
"""
# --- Standard Library Imports ---
import argparse
import logging
import os

# --- Third-Party Imports ---
import pandas as pd

# --- Local Application Imports ---
from pdindex.config import LOGGING_CONFIG, RETURNS_CONFIG, SAMPLING_CONFIG, ROLLING_CONFIG
from pdindex.data import load_price_csv
from pdindex.returns import transform_prices
from pdindex.pca import compute_pdi
from pdindex.sampling import sample_pool_sizes
from pdindex.rolling import rolling_pdi

LOG = logging.getLogger("pdindex.run_analysis")


def run_analysis(
    prices_path: str,
    date_column: str,
    reference_column: str | None,
    max_pool_size: int | None,
    trials_per_size: int,
    window_size: int,
    seed: int | None,
    n_jobs: int,
) -> tuple[float, pd.Series, pd.Series | None]:
    """
    Runs the three computations and returns (pdi, pool_sweep, rolling_series).

    The rolling series is None when the history has no more rows than
    ``window_size``; the other two results are still returned.
    """
    # 1. Prices -> centred returns
    prices = load_price_csv(prices_path, date_column=date_column)
    returns = transform_prices(prices, date_column=date_column, reference_column=reference_column)

    # 2. Whole universe
    pdi = compute_pdi(returns)
    LOG.info("PDI of all %d assets: %.4f", returns.shape[1], pdi)

    # 3. PDI vs pool size
    pool_sweep = sample_pool_sizes(
        returns,
        max_pool_size=max_pool_size,
        trials_per_size=trials_per_size,
        rng=seed,
        n_jobs=n_jobs,
    )

    # 4. PDI vs time
    rolling = None
    if len(returns) > window_size:
        rolling = rolling_pdi(returns, window_size=window_size, n_jobs=n_jobs)
    else:
        LOG.warning(
            "Skipping rolling PDI: %d return rows, window needs more than %d", len(returns), window_size
        )

    return pdi, pool_sweep, rolling


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Portfolio Diversification Index analysis")
    parser.add_argument("prices", type=str, help="CSV file with a date column and one price column per asset")
    parser.add_argument("--date-column", type=str, default=RETURNS_CONFIG["date_column"], help="Name of the date column")
    parser.add_argument("--reference-column", type=str, default=RETURNS_CONFIG["reference_column"], help="Asset whose gaps mark non-trading days (default: first asset)")
    parser.add_argument("--max-pool-size", type=int, default=None, help="Largest pool size to sample (default: all assets)")
    parser.add_argument("--trials", type=int, default=SAMPLING_CONFIG["trials_per_size"], help="Random subsets per pool size")
    parser.add_argument("--window", type=int, default=ROLLING_CONFIG["window_size"], help="Rolling window look-back in rows")
    parser.add_argument("--seed", type=int, default=SAMPLING_CONFIG["random_seed"], help="Random seed for the pool-size sweep")
    parser.add_argument("--n-jobs", type=int, default=SAMPLING_CONFIG["n_jobs"], help="Parallel workers (joblib)")
    parser.add_argument("--output-dir", type=str, default=None, help="Write pool_sweep.csv and rolling_pdi.csv here")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOGGING_CONFIG["log_level"], logging.INFO),
        format=LOGGING_CONFIG["format"],
    )

    try:
        pdi, pool_sweep, rolling = run_analysis(
            args.prices,
            date_column=args.date_column,
            reference_column=args.reference_column,
            max_pool_size=args.max_pool_size,
            trials_per_size=args.trials,
            window_size=args.window,
            seed=args.seed,
            n_jobs=args.n_jobs,
        )
    except (ValueError, FileNotFoundError) as e:
        LOG.error("Analysis failed: %s", e)
        raise SystemExit(1)

    print(f"PDI (all assets): {pdi:.4f}")
    print(pool_sweep.to_string())

    if args.output_dir:
        os.makedirs(args.output_dir, exist_ok=True)
        pool_sweep.to_csv(os.path.join(args.output_dir, "pool_sweep.csv"))
        if rolling is not None:
            rolling.to_csv(os.path.join(args.output_dir, "rolling_pdi.csv"))
        LOG.info("Results written to %s", args.output_dir)


if __name__ == "__main__":
    main()
