# Filename: pdindex/config.py
"""
Centralised configuration for PDIndex.

Highlights
----------
* Defaults for every knob the library reads (date column, tolerances, trials, window)
* Optional ``.env`` overrides for log level and the sampling seed
* Explicit function arguments always win over these values
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────
def _env_int(name: str) -> Optional[int]:
    """Return the integer value of env var ``name`` or None when unset/blank."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e


# ──────────────────────────────────────────────────────────────────────────────
# Environment variables
# ──────────────────────────────────────────────────────────────────────────────
load_dotenv()  # read “.env” if present

PDI_LOG_LEVEL: str = os.getenv("PDI_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Unset means a fresh, non-deterministic generator for every sweep
PDI_RANDOM_SEED: Optional[int] = _env_int("PDI_RANDOM_SEED")

# ──────────────────────────────────────────────────────────────────────────────
# Return calculation
# ──────────────────────────────────────────────────────────────────────────────
RETURNS_CONFIG = {
    "date_column":        "Date",
    "reference_column":   None,    # None -> first asset column marks trading days
}

# ──────────────────────────────────────────────────────────────────────────────
# PDI calculation
# ──────────────────────────────────────────────────────────────────────────────
PDI_CONFIG = {
    "zero_variance_tol":  1e-12,   # column std at or below this cannot be standardised
    "bounds_tol":         1e-9,    # slack before a PDI outside [1, N] is reported
}

# ──────────────────────────────────────────────────────────────────────────────
# Pool-size sweep
# ──────────────────────────────────────────────────────────────────────────────
SAMPLING_CONFIG = {
    "trials_per_size":    100,
    "random_seed":        PDI_RANDOM_SEED,
    "n_jobs":             1,
}

# ──────────────────────────────────────────────────────────────────────────────
# Rolling windows
# ──────────────────────────────────────────────────────────────────────────────
ROLLING_CONFIG = {
    "window_size":        90,      # each window spans window_size + 1 rows
    "n_jobs":             1,
}

# ──────────────────────────────────────────────────────────────────────────────
# Logging (applied by the scripts, never by the library)
# ──────────────────────────────────────────────────────────────────────────────
LOGGING_CONFIG = {
    "log_level":          PDI_LOG_LEVEL,   # DEBUG / INFO / WARNING / ERROR
    "format":             "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
}
