"""
Derivatives pricing module.

Provides:
- Black-Scholes option pricing (puts and calls)
- Greeks (Delta, Gamma, Vega, Rho)
- Implied volatility via Newton-Raphson
- Put-call parity check
- Straddle helper
"""

from .contract import (
    CallOption,
    ImpliedVolatilityError,
    OptionContract,
    PutOption,
    Straddle,
    price_and_risk,
)
from .normal import normal_cdf, normal_pdf
from .options import (
    d1,
    d2,
    delta,
    gamma,
    implied_volatility,
    intrinsic_value,
    price,
    put_call_parity_gap,
    rho,
    vega,
)

__all__ = [
    # Contracts
    "OptionContract",
    "PutOption",
    "CallOption",
    "Straddle",
    "ImpliedVolatilityError",
    "price_and_risk",
    # Formulas
    "normal_pdf",
    "normal_cdf",
    "d1",
    "d2",
    "price",
    "delta",
    "gamma",
    "vega",
    "rho",
    "implied_volatility",
    "intrinsic_value",
    "put_call_parity_gap",
]
