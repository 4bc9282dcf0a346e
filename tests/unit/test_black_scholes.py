"""
Unit tests for Black-Scholes pricing and Greeks.

This module validates:
1. Known reference values
2. Put-call parity across a parameter grid
3. Expiry (T <= 0) behavior
4. Greek bounds and finite-difference agreement
5. Monotonicity in spot, strike and volatility
"""

import math

import pytest

from options_analytics.core.black_scholes import (
    bs_price,
    calculate_greeks,
    call_price,
    d1_d2,
    delta,
    gamma,
    option_price,
    put_price,
    raw_vega,
    rho,
    theta,
    vega,
)
from options_analytics.utils.types import PricingParams


# ===========================
# Known Values
# ===========================


def test_reference_prices_one_year(standard_params):
    """S=K=100, T=1, r=5%, σ=20%: the textbook example."""
    result = bs_price(standard_params)

    assert abs(result.call_price - 10.4506) < 1e-3
    assert abs(result.put_price - 5.5735) < 1e-3
    assert result.d1 == pytest.approx(0.35)
    assert result.d2 == pytest.approx(0.15)


def test_reference_prices_half_year(half_year_params):
    result = bs_price(half_year_params)

    assert abs(result.call_price - 6.8887) < 1e-3
    assert abs(result.put_price - 4.4197) < 1e-3


def test_reference_greeks(standard_params):
    greeks = calculate_greeks(standard_params, "call")

    assert abs(greeks.delta - 0.6368) < 1e-4
    assert abs(greeks.gamma - 0.01876) < 1e-5
    assert abs(greeks.vega - 0.3752) < 1e-4
    assert abs(greeks.theta - (-0.017573)) < 1e-5
    assert abs(greeks.rho - 0.5323) < 1e-4


def test_price_helpers_agree(standard_params):
    result = bs_price(standard_params)

    assert call_price(standard_params) == result.call_price
    assert put_price(standard_params) == result.put_price
    assert option_price(standard_params, "call") == result.call_price
    assert option_price(standard_params, "put") == result.put_price


def test_d1_d2_relationship(itm_call_params):
    d1, d2 = d1_d2(itm_call_params)
    assert d1 - d2 == pytest.approx(itm_call_params.sigma * math.sqrt(itm_call_params.T))


def test_invalid_option_type_raises(standard_params):
    with pytest.raises(ValueError, match="option_type"):
        option_price(standard_params, "straddle")


# ===========================
# Put-Call Parity
# ===========================


@pytest.mark.parametrize("S", [60.0, 95.0, 100.0, 140.0])
@pytest.mark.parametrize("K", [80.0, 100.0, 125.0])
@pytest.mark.parametrize("T", [0.01, 0.5, 2.0])
@pytest.mark.parametrize("sigma", [0.05, 0.3, 1.2])
def test_put_call_parity(S, K, T, sigma):
    """C - P = S - K·e^(-rT) holds to 1e-6 for every T > 0."""
    r = 0.04
    result = bs_price(PricingParams(S=S, K=K, T=T, r=r, sigma=sigma))
    assert abs((result.call_price - result.put_price) - (S - K * math.exp(-r * T))) < 1e-6


# ===========================
# Expiry Behavior
# ===========================


@pytest.mark.parametrize("T", [0.0, -0.25])
@pytest.mark.parametrize("S,K", [(110.0, 100.0), (90.0, 100.0), (100.0, 100.0)])
def test_expiry_prices_are_intrinsic(S, K, T):
    result = bs_price(PricingParams(S=S, K=K, T=T, r=0.05, sigma=0.2))

    assert result.call_price == max(S - K, 0.0)
    assert result.put_price == max(K - S, 0.0)
    assert result.d1 == 0.0
    assert result.d2 == 0.0


def test_expiry_greeks():
    itm_call = PricingParams(S=110.0, K=100.0, T=0.0, r=0.05, sigma=0.2)
    itm_put = PricingParams(S=90.0, K=100.0, T=0.0, r=0.05, sigma=0.2)
    at_money = PricingParams(S=100.0, K=100.0, T=0.0, r=0.05, sigma=0.2)

    assert delta(itm_call, "call") == 1.0
    assert delta(itm_call, "put") == 0.0
    assert delta(itm_put, "call") == 0.0
    assert delta(itm_put, "put") == -1.0
    assert delta(at_money, "call") == 0.0
    assert delta(at_money, "put") == 0.0

    for option_type in ("call", "put"):
        greeks = calculate_greeks(itm_call, option_type)
        assert greeks.gamma == 0.0
        assert greeks.theta == 0.0
        assert greeks.vega == 0.0
        assert greeks.rho == 0.0


def test_expiry_ignores_zero_volatility():
    result = bs_price(PricingParams(S=105.0, K=100.0, T=0.0, r=0.05, sigma=0.0))
    assert result.call_price == 5.0


def test_zero_volatility_before_expiry_is_out_of_contract():
    with pytest.raises(ZeroDivisionError):
        bs_price(PricingParams(S=100.0, K=100.0, T=1.0, r=0.05, sigma=0.0))


def test_deep_tails_are_exact():
    """Beyond ±8 standard deviations the CDF short-circuits, so far OTM is exactly worthless."""
    params = PricingParams(S=1000.0, K=100.0, T=1.0, r=0.05, sigma=0.2)
    result = bs_price(params)

    assert result.put_price == 0.0
    assert result.call_price == pytest.approx(1000.0 - 100.0 * math.exp(-0.05))
    assert delta(params, "call") == 1.0


# ===========================
# Greek Bounds
# ===========================


@pytest.mark.parametrize("S", [50.0, 90.0, 100.0, 110.0, 200.0])
@pytest.mark.parametrize("T", [0.02, 1.0, 3.0])
def test_greek_bounds(S, T):
    params = PricingParams(S=S, K=100.0, T=T, r=0.05, sigma=0.35)

    assert 0.0 <= delta(params, "call") <= 1.0
    assert -1.0 <= delta(params, "put") <= 0.0
    assert gamma(params) >= 0.0
    assert vega(params) >= 0.0
    assert rho(params, "call") >= 0.0
    assert rho(params, "put") <= 0.0


def test_call_put_delta_differ_by_one(standard_params):
    assert delta(standard_params, "call") - delta(standard_params, "put") == pytest.approx(1.0)


def test_vega_is_raw_vega_per_percent(standard_params):
    assert vega(standard_params) == pytest.approx(raw_vega(standard_params) / 100.0)


# ===========================
# Finite Differences
# ===========================


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_delta_matches_finite_difference(itm_call_params, option_type):
    h = 0.01
    up = option_price(itm_call_params.replace(S=itm_call_params.S + h), option_type)
    down = option_price(itm_call_params.replace(S=itm_call_params.S - h), option_type)
    assert abs(delta(itm_call_params, option_type) - (up - down) / (2 * h)) < 1e-4


def test_gamma_matches_finite_difference(standard_params):
    h = 0.5
    S = standard_params.S
    up = call_price(standard_params.replace(S=S + h))
    mid = call_price(standard_params)
    down = call_price(standard_params.replace(S=S - h))
    assert abs(gamma(standard_params) - (up - 2 * mid + down) / (h * h)) < 1e-4


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_vega_matches_finite_difference(standard_params, option_type):
    h = 0.001
    sigma = standard_params.sigma
    up = option_price(standard_params.replace(sigma=sigma + h), option_type)
    down = option_price(standard_params.replace(sigma=sigma - h), option_type)
    assert abs(vega(standard_params) - (up - down) / (2 * h) / 100.0) < 1e-4


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_theta_matches_finite_difference(standard_params, option_type):
    h = 0.001
    T = standard_params.T
    shorter = option_price(standard_params.replace(T=T - h), option_type)
    longer = option_price(standard_params.replace(T=T + h), option_type)
    per_day = (shorter - longer) / (2 * h) / 365.0
    assert abs(theta(standard_params, option_type) - per_day) < 1e-5


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_rho_matches_finite_difference(standard_params, option_type):
    h = 0.0001
    r = standard_params.r
    up = option_price(standard_params.replace(r=r + h), option_type)
    down = option_price(standard_params.replace(r=r - h), option_type)
    assert abs(rho(standard_params, option_type) - (up - down) / (2 * h) / 100.0) < 1e-4


# ===========================
# Monotonicity
# ===========================


def test_call_increases_with_spot(standard_params):
    prices = [call_price(standard_params.replace(S=s)) for s in (80.0, 90.0, 100.0, 110.0, 120.0)]
    assert prices == sorted(prices)


def test_call_decreases_with_strike(standard_params):
    prices = [call_price(standard_params.replace(K=k)) for k in (80.0, 90.0, 100.0, 110.0, 120.0)]
    assert prices == sorted(prices, reverse=True)


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_price_increases_with_volatility(standard_params, option_type):
    prices = [
        option_price(standard_params.replace(sigma=s), option_type)
        for s in (0.05, 0.1, 0.2, 0.4, 0.8)
    ]
    assert prices == sorted(prices)


def test_prices_within_static_bounds(itm_call_params):
    p = itm_call_params
    result = bs_price(p)
    discount_strike = p.K * math.exp(-p.r * p.T)

    assert max(p.S - discount_strike, 0.0) <= result.call_price <= p.S
    assert max(discount_strike - p.S, 0.0) <= result.put_price <= discount_strike
