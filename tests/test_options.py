"""Unit tests for Black-Scholes pricing and Greeks."""

import math

import numpy as np
import pytest

from optionrisk.core import OptionKind
from optionrisk.derivatives import options
from optionrisk.derivatives.normal import normal_cdf, normal_pdf

PUT = OptionKind.PUT
CALL = OptionKind.CALL


class TestD1D2:
    """d1 omits the r*T drift term: r never enters d1 or d2."""

    def test_matches_variance_only_formula(self):
        S, K, T, sigma = 100.0, 105.0, 1.0, 0.2
        expected = (math.log(S / K) + 0.5 * sigma**2 * T) / (sigma * math.sqrt(T))
        assert options.d1(S, K, T, sigma) == pytest.approx(expected, rel=1e-14)

    def test_not_textbook_formula(self):
        S, K, T, sigma, r = 100.0, 105.0, 1.0, 0.2, 0.05
        textbook = (math.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * math.sqrt(T))
        assert options.d1(S, K, T, sigma) != pytest.approx(textbook)

    def test_d2_offset(self):
        S, K, T, sigma = 95.0, 100.0, 0.5, 0.3
        assert options.d2(S, K, T, sigma) == pytest.approx(
            options.d1(S, K, T, sigma) - sigma * math.sqrt(T)
        )

    def test_zero_volatility_gives_infinity(self):
        assert options.d1(100.0, 105.0, 1.0, 0.0) == -math.inf
        assert options.d1(110.0, 105.0, 1.0, 0.0) == math.inf

    def test_zero_volatility_at_the_money_is_nan(self):
        assert math.isnan(options.d1(100.0, 100.0, 1.0, 0.0))

    def test_negative_spot_is_nan(self):
        assert math.isnan(options.d1(-1.0, 100.0, 1.0, 0.2))


class TestPricing:
    def test_call_formula(self):
        S, K, T, sigma, r = 100.0, 105.0, 1.0, 0.25, 0.05
        d_1 = options.d1(S, K, T, sigma)
        d_2 = d_1 - sigma * math.sqrt(T)
        expected = S * normal_cdf(d_1) - K * math.exp(-r * T) * normal_cdf(d_2)
        assert options.price(CALL, S, K, T, sigma, r) == pytest.approx(expected, rel=1e-12)

    def test_put_formula(self):
        S, K, T, sigma, r = 100.0, 105.0, 1.0, 0.25, 0.05
        d_1 = options.d1(S, K, T, sigma)
        d_2 = d_1 - sigma * math.sqrt(T)
        expected = K * math.exp(-r * T) * normal_cdf(-d_2) - S * normal_cdf(-d_1)
        assert options.price(PUT, S, K, T, sigma, r) == pytest.approx(expected, rel=1e-12)

    def test_prices_non_negative(self):
        # Deep in-the-money legs cancel to within rounding of zero on the other side
        for S in (60.0, 100.0, 140.0):
            for sigma in (0.05, 0.3, 1.5):
                assert options.price(CALL, S, 100.0, 0.5, sigma, 0.03) >= -1e-12
                assert options.price(PUT, S, 100.0, 0.5, sigma, 0.03) >= -1e-12

    def test_deep_out_of_the_money_put_is_zero(self):
        assert options.price(PUT, 140.0, 100.0, 0.5, 0.05, 0.03) == pytest.approx(0.0, abs=1e-12)

    def test_call_increases_with_volatility(self):
        low = options.price(CALL, 100.0, 105.0, 1.0, 0.1, 0.05)
        high = options.price(CALL, 100.0, 105.0, 1.0, 0.4, 0.05)
        assert high > low

    @pytest.mark.parametrize("S", [80.0, 100.0, 125.0])
    @pytest.mark.parametrize("sigma", [0.1, 0.35, 0.9])
    @pytest.mark.parametrize("r", [-0.01, 0.0, 0.05])
    def test_put_call_parity(self, S, sigma, r):
        K, T = 105.0, 1.5
        put_price = options.price(PUT, S, K, T, sigma, r)
        call_price = options.price(CALL, S, K, T, sigma, r)
        assert put_price + S == pytest.approx(call_price + K * math.exp(-r * T), rel=1e-12)
        assert options.put_call_parity_gap(S, K, T, sigma, r) == pytest.approx(0.0, abs=1e-10)

    @pytest.mark.parametrize("kind, S, K, expected", [
        (PUT, 100.0, 105.0, 5.0),
        (CALL, 100.0, 105.0, 0.0),
        (PUT, 110.0, 105.0, 0.0),
        (CALL, 110.0, 105.0, 5.0),
    ])
    def test_converges_to_intrinsic_near_expiry(self, kind, S, K, expected):
        value = options.price(kind, S, K, 1e-8, 0.2, 0.05)
        assert value == pytest.approx(expected, abs=1e-6)
        assert options.intrinsic_value(kind, S, K) == expected

    def test_zero_volatility_does_not_raise(self):
        value = options.price(CALL, 110.0, 105.0, 1.0, 0.0, 0.05)
        assert value == pytest.approx(110.0 - 105.0 * math.exp(-0.05))


class TestGreeks:
    def test_delta_formulas(self):
        S, K, T, sigma = 100.0, 105.0, 1.0, 0.25
        d_1 = options.d1(S, K, T, sigma)
        assert options.delta(CALL, S, K, T, sigma) == pytest.approx(normal_cdf(d_1))
        assert options.delta(PUT, S, K, T, sigma) == pytest.approx(-normal_cdf(-d_1))

    @pytest.mark.parametrize("sigma", [0.01, 0.2, 0.8, 3.0])
    @pytest.mark.parametrize("T", [0.01, 0.5, 5.0])
    @pytest.mark.parametrize("S", [50.0, 105.0, 200.0])
    def test_delta_bounds(self, sigma, T, S):
        call_delta = options.delta(CALL, S, 105.0, T, sigma)
        put_delta = options.delta(PUT, S, 105.0, T, sigma)
        assert 0.0 <= call_delta <= 1.0
        assert -1.0 <= put_delta <= 0.0
        assert call_delta - put_delta == pytest.approx(1.0)

    def test_gamma_formula(self):
        S, K, T, sigma = 100.0, 105.0, 2.0, 0.3
        d_1 = options.d1(S, K, T, sigma)
        expected = normal_pdf(d_1) / (S * sigma * math.sqrt(T))
        assert options.gamma(S, K, T, sigma) == pytest.approx(expected)

    def test_vega_formula(self):
        S, K, T, sigma = 100.0, 105.0, 2.0, 0.3
        d_1 = options.d1(S, K, T, sigma)
        assert options.vega(S, K, T, sigma) == pytest.approx(S * normal_pdf(d_1) * math.sqrt(T))

    def test_rho_formulas(self):
        S, K, T, sigma, r = 100.0, 105.0, 1.0, 0.25, 0.05
        d_2 = options.d2(S, K, T, sigma)
        scaled = K * T * math.exp(-r * T)
        assert options.rho(CALL, S, K, T, sigma, r) == pytest.approx(scaled * normal_cdf(d_2))
        assert options.rho(PUT, S, K, T, sigma, r) == pytest.approx(-scaled * normal_cdf(-d_2))

    def test_rho_signs(self):
        assert options.rho(CALL, 100.0, 105.0, 1.0, 0.25, 0.05) > 0.0
        assert options.rho(PUT, 100.0, 105.0, 1.0, 0.25, 0.05) < 0.0

    def test_vega_matches_finite_difference(self):
        # Analytic vega and delta are exact derivatives only at r = 0 with the drift-free d1.
        S, K, T, r, sigma, h = 100.0, 105.0, 1.0, 0.0, 0.3, 1e-5
        bumped = (
            options.price(CALL, S, K, T, sigma + h, r) - options.price(CALL, S, K, T, sigma - h, r)
        ) / (2 * h)
        np.testing.assert_allclose(options.vega(S, K, T, sigma), bumped, rtol=1e-6)

    def test_delta_matches_finite_difference(self):
        S, K, T, r, sigma, h = 100.0, 105.0, 1.0, 0.0, 0.3, 1e-4
        for kind in (PUT, CALL):
            bumped = (
                options.price(kind, S + h, K, T, sigma, r) - options.price(kind, S - h, K, T, sigma, r)
            ) / (2 * h)
            np.testing.assert_allclose(options.delta(kind, S, K, T, sigma), bumped, rtol=1e-5)


class TestStringKinds:
    """Plain "put"/"call" strings select the same branch as OptionKind members."""

    def test_price(self):
        assert options.price("call", 100.0, 105.0, 1.0, 0.3, 0.05) == options.price(
            CALL, 100.0, 105.0, 1.0, 0.3, 0.05
        )
        assert options.price("put", 100.0, 105.0, 1.0, 0.3, 0.05) == options.price(
            PUT, 100.0, 105.0, 1.0, 0.3, 0.05
        )

    def test_greeks(self):
        assert options.delta("call", 100.0, 105.0, 1.0, 0.3) > 0.0
        assert options.delta("put", 100.0, 105.0, 1.0, 0.3) < 0.0
        assert options.rho("call", 100.0, 105.0, 1.0, 0.3, 0.05) > 0.0
        assert options.rho("put", 100.0, 105.0, 1.0, 0.3, 0.05) < 0.0

    def test_intrinsic_value(self):
        assert options.intrinsic_value("call", 110.0, 105.0) == 5.0
        assert options.intrinsic_value("put", 110.0, 105.0) == 0.0

    def test_implied_volatility(self):
        target = options.price(CALL, 100.0, 105.0, 1.0, 0.3, 0.05)
        result = options.implied_volatility("call", target, 100.0, 105.0, 1.0, 0.05)
        assert result.converged
        assert result.volatility == pytest.approx(0.3, abs=1e-6)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            options.price("straddle", 100.0, 105.0, 1.0, 0.3, 0.05)
