"""Closed-form Black-Scholes pricing, Greeks and implied volatility."""

from .core import ImpliedVolResult, MarketState, OptionKind, RiskSnapshot
from .derivatives import (
    CallOption,
    ImpliedVolatilityError,
    OptionContract,
    PutOption,
    Straddle,
    price_and_risk,
)

__version__ = "0.1.0"

__all__ = [
    "OptionKind",
    "MarketState",
    "RiskSnapshot",
    "ImpliedVolResult",
    "OptionContract",
    "PutOption",
    "CallOption",
    "Straddle",
    "ImpliedVolatilityError",
    "price_and_risk",
]
