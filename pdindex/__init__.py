"""
PDIndex: Portfolio Diversification Index from asset price histories.
"""
from pdindex.exceptions import (
    DegenerateInputError,
    InsufficientDataError,
    PDIError,
    SamplingConfigError,
)
from pdindex.data import load_price_csv
from pdindex.returns import transform_prices
from pdindex.pca import compute_pdi, pdi_from_strengths, relative_strengths
from pdindex.sampling import sample_pool_sizes, sample_pool_trials
from pdindex.rolling import rolling_pdi

__version__ = "1.0.0"

__all__ = [
    "PDIError",
    "InsufficientDataError",
    "DegenerateInputError",
    "SamplingConfigError",
    "load_price_csv",
    "transform_prices",
    "compute_pdi",
    "relative_strengths",
    "pdi_from_strengths",
    "sample_pool_sizes",
    "sample_pool_trials",
    "rolling_pdi",
]
