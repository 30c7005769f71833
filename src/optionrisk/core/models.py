"""Core domain models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OptionKind(str, Enum):
    """European option payoff direction."""
    PUT = "put"
    CALL = "call"


# =============================================================================
# Market inputs
# =============================================================================


class MarketState(BaseModel):
    """Flat market state an option is evaluated against."""

    model_config = ConfigDict(frozen=True)

    spot: float = Field(..., gt=0, allow_inf_nan=False, description="Underlying spot price")
    volatility: float = Field(..., gt=0, allow_inf_nan=False, description="Annualized volatility (decimal)")
    rate: float = Field(..., allow_inf_nan=False, description="Continuously compounded risk-free rate")


# =============================================================================
# Results
# =============================================================================


class RiskSnapshot(BaseModel):
    """Price and Greeks for one contract at one market state."""

    model_config = ConfigDict(frozen=True)

    price: float
    delta: float      # dV/dS
    gamma: float      # d2V/dS2
    vega: float       # dV/dsigma, per unit of volatility
    rho: float        # dV/dr, per unit of rate

    spot: float
    volatility: float
    rate: float


class ImpliedVolResult(BaseModel):
    """Outcome of an implied volatility search."""

    model_config = ConfigDict(frozen=True)

    volatility: float     # Last iterate, the answer when converged
    converged: bool
    iterations: int       # Newton updates performed
    residual: float       # model price minus target at the last iterate
