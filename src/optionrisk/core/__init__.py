"""Core module exports."""

from .models import (
    ImpliedVolResult,
    MarketState,
    OptionKind,
    RiskSnapshot,
)

__all__ = [
    "OptionKind",
    "MarketState",
    "RiskSnapshot",
    "ImpliedVolResult",
]
