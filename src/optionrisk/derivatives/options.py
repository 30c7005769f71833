"""
Black-Scholes pricing, Greeks and implied volatility for European options.

This module provides:
- d1/d2 terms (variance-only numerator, see below)
- Put and call pricing
- Delta, Gamma, Vega and Rho
- Implied volatility via bounded Newton-Raphson
- Put-call parity and intrinsic value helpers

d1 here is [ln(S/K) + 0.5*sigma^2*T] / (sigma*sqrt(T)); the r*T drift of the
textbook formula is deliberately absent and every function below builds on it.

The formula functions take raw floats and follow IEEE-754 semantics: a zero
volatility or expiry gives inf/NaN rather than raising. Validation happens at
the contract boundary (see contract.py).
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from optionrisk.config import get_logger, get_settings
from optionrisk.core.models import ImpliedVolResult, OptionKind

from .normal import normal_cdf, normal_pdf

logger = get_logger("derivatives.options")


def d1(spot: float, strike: float, time_to_expiry: float, volatility: float) -> float:
    """Calculate d1 (no rate drift in the numerator)."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        S = np.float64(spot)
        T = np.float64(time_to_expiry)
        sigma = np.float64(volatility)
        return float((np.log(S / strike) + 0.5 * sigma**2 * T) / (sigma * np.sqrt(T)))


def d2(spot: float, strike: float, time_to_expiry: float, volatility: float) -> float:
    """Calculate d2 = d1 - sigma*sqrt(T)."""
    with np.errstate(invalid="ignore", over="ignore"):
        return float(
            d1(spot, strike, time_to_expiry, volatility)
            - np.float64(volatility) * np.sqrt(np.float64(time_to_expiry))
        )


def _discounted_strike(strike: float, time_to_expiry: float, rate: float) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        return float(strike * np.exp(-np.float64(rate) * time_to_expiry))


def price(
    kind: OptionKind | str,
    spot: float,
    strike: float,
    time_to_expiry: float,
    volatility: float,
    rate: float,
) -> float:
    """
    Black-Scholes price of a European option.

    Put:  K*e^(-rT)*N(-d2) - S*N(-d1)
    Call: S*N(d1) - K*e^(-rT)*N(d2)

    Args:
        kind: OptionKind.PUT or OptionKind.CALL ("put"/"call" accepted)
        spot: Current spot price of underlying
        strike: Strike price
        time_to_expiry: Time to expiration in years
        volatility: Volatility (annualized, decimal)
        rate: Risk-free rate (annualized, decimal)

    Returns:
        Option price
    """
    kind = OptionKind(kind)
    d_1 = d1(spot, strike, time_to_expiry, volatility)
    d_2 = d2(spot, strike, time_to_expiry, volatility)
    discounted = _discounted_strike(strike, time_to_expiry, rate)

    if kind is OptionKind.CALL:
        return spot * normal_cdf(d_1) - discounted * normal_cdf(d_2)
    return discounted * normal_cdf(-d_2) - spot * normal_cdf(-d_1)


def delta(
    kind: OptionKind | str,
    spot: float,
    strike: float,
    time_to_expiry: float,
    volatility: float,
) -> float:
    """Delta: N(d1) for a call, -N(-d1) for a put."""
    kind = OptionKind(kind)
    d_1 = d1(spot, strike, time_to_expiry, volatility)
    if kind is OptionKind.CALL:
        return normal_cdf(d_1)
    return -normal_cdf(-d_1)


def gamma(spot: float, strike: float, time_to_expiry: float, volatility: float) -> float:
    """Gamma: n(d1) / (S*sigma*sqrt(T)). Same for calls and puts."""
    d_1 = d1(spot, strike, time_to_expiry, volatility)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(
            normal_pdf(d_1) / (np.float64(spot) * volatility * np.sqrt(np.float64(time_to_expiry)))
        )


def vega(spot: float, strike: float, time_to_expiry: float, volatility: float) -> float:
    """Vega: S*n(d1)*sqrt(T) per unit of volatility. Same for calls and puts."""
    d_1 = d1(spot, strike, time_to_expiry, volatility)
    with np.errstate(invalid="ignore"):
        return float(spot * normal_pdf(d_1) * np.sqrt(np.float64(time_to_expiry)))


def rho(
    kind: OptionKind | str,
    spot: float,
    strike: float,
    time_to_expiry: float,
    volatility: float,
    rate: float,
) -> float:
    """Rho per unit of rate: K*T*e^(-rT)*N(d2) for a call, -K*T*e^(-rT)*N(-d2) for a put."""
    kind = OptionKind(kind)
    d_2 = d2(spot, strike, time_to_expiry, volatility)
    scaled = time_to_expiry * _discounted_strike(strike, time_to_expiry, rate)
    if kind is OptionKind.CALL:
        return scaled * normal_cdf(d_2)
    return -scaled * normal_cdf(-d_2)


def intrinsic_value(kind: OptionKind | str, spot: float, strike: float) -> float:
    """Exercise value today: max(S - K, 0) for a call, max(K - S, 0) for a put."""
    kind = OptionKind(kind)
    if kind is OptionKind.CALL:
        return max(0.0, spot - strike)
    return max(0.0, strike - spot)


def put_call_parity_gap(
    spot: float,
    strike: float,
    time_to_expiry: float,
    volatility: float,
    rate: float,
) -> float:
    """
    Deviation from put-call parity: (C - P) - (S - K*e^(-rT)).

    Zero up to rounding for the prices this module produces.
    """
    call_price = price(OptionKind.CALL, spot, strike, time_to_expiry, volatility, rate)
    put_price = price(OptionKind.PUT, spot, strike, time_to_expiry, volatility, rate)
    expected_diff = spot - _discounted_strike(strike, time_to_expiry, rate)
    return (call_price - put_price) - expected_diff


def implied_volatility(
    kind: OptionKind | str,
    option_price: float,
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    initial_guess: Optional[float] = None,
    tolerance: Optional[float] = None,
    max_iterations: Optional[int] = None,
    min_volatility: Optional[float] = None,
    max_volatility: Optional[float] = None,
) -> ImpliedVolResult:
    """
    Invert the pricing formula for volatility using Newton-Raphson on vega.

    The search stops when |price - option_price| <= tolerance, after
    max_iterations updates, or when vega vanishes. Each iterate is clamped
    to [min_volatility, max_volatility]. Unset arguments fall back to the
    IV_* settings.

    Args:
        kind: OptionKind.PUT or OptionKind.CALL ("put"/"call" accepted)
        option_price: Observed market price of the option
        spot: Current spot price
        strike: Strike price
        time_to_expiry: Time to expiration in years
        rate: Risk-free rate
        initial_guess: Starting volatility
        tolerance: Price tolerance for convergence
        max_iterations: Maximum Newton updates
        min_volatility: Lower clamp on iterates
        max_volatility: Upper clamp on iterates

    Returns:
        ImpliedVolResult; check `converged` before trusting `volatility`
    """
    kind = OptionKind(kind)
    settings = get_settings()
    volatility = settings.IV_INITIAL_GUESS if initial_guess is None else initial_guess
    tolerance = settings.IV_TOLERANCE if tolerance is None else tolerance
    max_iterations = settings.IV_MAX_ITERATIONS if max_iterations is None else max_iterations
    lower = settings.IV_MIN_VOLATILITY if min_volatility is None else min_volatility
    upper = settings.IV_MAX_VOLATILITY if max_volatility is None else max_volatility

    iterations = 0
    while True:
        diff = price(kind, spot, strike, time_to_expiry, volatility, rate) - option_price
        if abs(diff) <= tolerance:
            logger.debug(
                f"{kind.value} implied vol converged to {volatility:.6f} after {iterations} iterations"
            )
            return ImpliedVolResult(
                volatility=volatility, converged=True, iterations=iterations, residual=diff
            )

        if iterations >= max_iterations or not math.isfinite(diff):
            break

        v = vega(spot, strike, time_to_expiry, volatility)
        if v == 0.0 or not math.isfinite(v):
            logger.debug(f"Vega vanished at volatility {volatility:.6f}")
            break

        volatility = min(max(volatility - diff / v, lower), upper)
        iterations += 1

    logger.warning(
        f"{kind.value} implied vol did not converge for price {option_price} "
        f"(last volatility {volatility:.6f}, residual {diff:.3e}, {iterations} iterations)"
    )
    return ImpliedVolResult(
        volatility=volatility, converged=False, iterations=iterations, residual=diff
    )
