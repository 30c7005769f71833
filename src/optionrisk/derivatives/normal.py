"""Standard normal distribution helpers."""

from __future__ import annotations

from scipy.stats import norm


def normal_pdf(x: float) -> float:
    """Standard normal probability density at x. NaN in, NaN out."""
    return float(norm.pdf(x))


def normal_cdf(x: float) -> float:
    """Standard normal cumulative probability at x. Saturates to 0/1 at -inf/+inf."""
    return float(norm.cdf(x))
