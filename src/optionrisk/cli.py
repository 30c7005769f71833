"""Price a straddle from its market price and print each leg's risk.

Usage:
    optionrisk-straddle
    optionrisk-straddle --spot 100 --strike 105 --expiry 1.0 --rate 0.05 --straddle-price 20
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from pydantic import ValidationError

from optionrisk.config import get_logger, setup_logging
from optionrisk.core.models import RiskSnapshot
from optionrisk.derivatives import ImpliedVolatilityError, OptionContract, Straddle

logger = get_logger("cli")


def _report(label: str, volatility: float, risk: RiskSnapshot) -> None:
    print(f"{label} Vol: {volatility}")
    print(f"{label} Price: {risk.price}")
    print(f"{label} Delta: {risk.delta}")
    print(f"{label} Vega: {risk.vega}")
    print(f"{label} Gamma: {risk.gamma}")
    print(f"{label} Rho: {risk.rho}")


def _solve_and_report(label: str, leg: OptionContract, args: argparse.Namespace) -> None:
    volatility = leg.implied_volatility(args.spot, args.straddle_price, args.rate)
    _report(label, volatility, leg.price_and_risk(args.spot, volatility, args.rate))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Straddle implied volatility and Greeks")
    parser.add_argument("--spot", type=float, default=100.0, help="Underlying spot price")
    parser.add_argument("--strike", type=float, default=105.0, help="Shared strike")
    parser.add_argument("--expiry", type=float, default=1.0, help="Time to expiry in years")
    parser.add_argument("--rate", type=float, default=0.05, help="Risk-free rate (decimal)")
    parser.add_argument(
        "--straddle-price", type=float, default=20.0,
        help="Observed straddle price used as each leg's target"
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        straddle = Straddle(strike=args.strike, time_to_expiry=args.expiry)
        _solve_and_report("Put", straddle.put, args)
        _solve_and_report("Call", straddle.call, args)
    except ValidationError as e:
        logger.error(f"Invalid inputs: {e}")
        return 1
    except ImpliedVolatilityError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
