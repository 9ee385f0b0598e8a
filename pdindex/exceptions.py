"""
Error types raised by the PDI pipeline.

All of them derive from ``ValueError`` so callers that only guard against bad
input values keep working.
"""


class PDIError(ValueError):
    """Base class for every failure raised by pdindex."""


class InsufficientDataError(PDIError):
    """Not enough valid rows or asset columns left to compute anything."""


class DegenerateInputError(PDIError):
    """The PCA step cannot run on the given matrix (zero variance, NaN/Inf, too few rows)."""


class SamplingConfigError(PDIError):
    """Invalid pool-size sweep parameters."""
