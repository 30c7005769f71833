"""
Option contracts with fixed terms, evaluated against per-call market inputs.

Example:
    put = PutOption(strike=105, time_to_expiry=1.0)
    vol = put.implied_volatility(spot=100, observed_price=20.0, rate=0.05)
    risk = put.price_and_risk(spot=100, volatility=vol, rate=0.05)
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from optionrisk.config import get_settings
from optionrisk.core.models import ImpliedVolResult, MarketState, OptionKind, RiskSnapshot

from . import options


class ImpliedVolatilityError(ValueError):
    """Raised when the implied volatility search does not converge."""

    def __init__(self, kind: OptionKind, observed_price: float, result: ImpliedVolResult):
        self.kind = kind
        self.observed_price = observed_price
        self.result = result
        super().__init__(
            f"Implied volatility for {kind.value} at price {observed_price} did not converge "
            f"after {result.iterations} iterations (last volatility {result.volatility}, "
            f"residual {result.residual})"
        )


class OptionContract(BaseModel):
    """European option with fixed strike and expiry."""

    model_config = ConfigDict(frozen=True)

    kind: OptionKind
    strike: float = Field(..., gt=0, allow_inf_nan=False, description="Strike price")
    time_to_expiry: float = Field(..., gt=0, allow_inf_nan=False, description="Time to expiration in years")

    def _market(self, spot: float, volatility: float, rate: float) -> MarketState:
        return MarketState(spot=spot, volatility=volatility, rate=rate)

    def price(self, spot: float, volatility: float, rate: float) -> float:
        m = self._market(spot, volatility, rate)
        return options.price(self.kind, m.spot, self.strike, self.time_to_expiry, m.volatility, m.rate)

    def delta(self, spot: float, volatility: float) -> float:
        m = self._market(spot, volatility, 0.0)
        return options.delta(self.kind, m.spot, self.strike, self.time_to_expiry, m.volatility)

    def gamma(self, spot: float, volatility: float) -> float:
        m = self._market(spot, volatility, 0.0)
        return options.gamma(m.spot, self.strike, self.time_to_expiry, m.volatility)

    def vega(self, spot: float, volatility: float) -> float:
        m = self._market(spot, volatility, 0.0)
        return options.vega(m.spot, self.strike, self.time_to_expiry, m.volatility)

    def rho(self, spot: float, volatility: float, rate: float) -> float:
        m = self._market(spot, volatility, rate)
        return options.rho(self.kind, m.spot, self.strike, self.time_to_expiry, m.volatility, m.rate)

    def intrinsic_value(self, spot: float) -> float:
        return options.intrinsic_value(self.kind, spot, self.strike)

    def price_and_risk(self, spot: float, volatility: float, rate: float) -> RiskSnapshot:
        """Price and Greeks at the given market state."""
        return price_and_risk(self, self._market(spot, volatility, rate))

    def solve_implied_volatility(
        self,
        spot: float,
        observed_price: float,
        rate: float,
        initial_guess: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> ImpliedVolResult:
        """
        Search for the volatility that reproduces observed_price.

        Never raises for non-convergence; inspect the returned result.
        Solver defaults come from settings (IV_* variables).
        """
        if initial_guess is None:
            initial_guess = get_settings().IV_INITIAL_GUESS
        start = self._market(spot, initial_guess, rate)
        return options.implied_volatility(
            self.kind,
            observed_price,
            start.spot,
            self.strike,
            self.time_to_expiry,
            start.rate,
            initial_guess=start.volatility,
            max_iterations=max_iterations,
        )

    def implied_volatility(self, spot: float, observed_price: float, rate: float) -> float:
        """
        Implied volatility for observed_price.

        Raises:
            ImpliedVolatilityError: If the search does not converge
        """
        result = self.solve_implied_volatility(spot, observed_price, rate)
        if not result.converged:
            raise ImpliedVolatilityError(self.kind, observed_price, result)
        return result.volatility


class PutOption(OptionContract):
    """European put; PutOption(strike, time_to_expiry)."""
    kind: Literal[OptionKind.PUT] = OptionKind.PUT

    def __init__(self, strike: float, time_to_expiry: float, **data):
        super().__init__(strike=strike, time_to_expiry=time_to_expiry, **data)


class CallOption(OptionContract):
    """European call; CallOption(strike, time_to_expiry)."""
    kind: Literal[OptionKind.CALL] = OptionKind.CALL

    def __init__(self, strike: float, time_to_expiry: float, **data):
        super().__init__(strike=strike, time_to_expiry=time_to_expiry, **data)


def price_and_risk(contract: OptionContract, market: MarketState) -> RiskSnapshot:
    """
    Compute price, delta, gamma, rho and vega for a contract.

    Returns a new snapshot each call; nothing is cached on the contract.
    """
    S, K, T = market.spot, contract.strike, contract.time_to_expiry
    sigma, r = market.volatility, market.rate

    option_price = options.price(contract.kind, S, K, T, sigma, r)
    option_delta = options.delta(contract.kind, S, K, T, sigma)
    option_gamma = options.gamma(S, K, T, sigma)
    option_rho = options.rho(contract.kind, S, K, T, sigma, r)
    option_vega = options.vega(S, K, T, sigma)

    return RiskSnapshot(
        price=option_price,
        delta=option_delta,
        gamma=option_gamma,
        vega=option_vega,
        rho=option_rho,
        spot=S,
        volatility=sigma,
        rate=r,
    )


class Straddle:
    """
    A put and a call sharing strike and expiry.

    Example:
        straddle = Straddle(strike=105, time_to_expiry=1.0)
        put_vol, call_vol = straddle.implied_volatilities(spot=100, straddle_price=20.0, rate=0.05)
    """

    def __init__(self, strike: float, time_to_expiry: float):
        self.put = PutOption(strike=strike, time_to_expiry=time_to_expiry)
        self.call = CallOption(strike=strike, time_to_expiry=time_to_expiry)

    @property
    def strike(self) -> float:
        return self.put.strike

    @property
    def time_to_expiry(self) -> float:
        return self.put.time_to_expiry

    def price(self, spot: float, volatility: float, rate: float) -> float:
        """Combined put + call price."""
        return self.put.price(spot, volatility, rate) + self.call.price(spot, volatility, rate)

    def implied_volatilities(
        self,
        spot: float,
        straddle_price: float,
        rate: float,
    ) -> tuple[float, float]:
        """
        Solve each leg against the full straddle price.

        Returns (put_vol, call_vol). Raises ImpliedVolatilityError if either
        leg does not converge.
        """
        put_vol = self.put.implied_volatility(spot, straddle_price, rate)
        call_vol = self.call.implied_volatility(spot, straddle_price, rate)
        return put_vol, call_vol

    def price_and_risk(
        self,
        spot: float,
        volatility: float,
        rate: float,
    ) -> tuple[RiskSnapshot, RiskSnapshot]:
        """Returns (put_snapshot, call_snapshot) at a shared volatility."""
        return (
            self.put.price_and_risk(spot, volatility, rate),
            self.call.price_and_risk(spot, volatility, rate),
        )
