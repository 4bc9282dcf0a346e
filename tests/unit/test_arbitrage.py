"""Unit tests for arbitrage diagnostics."""

import math

import pytest

from options_analytics.core.black_scholes import bs_price
from options_analytics.diagnostics.arbitrage import (
    bounds_violation,
    check_price_bounds,
    check_put_call_parity,
    price_bounds,
)
from options_analytics.utils.types import MarketParams

MARKET = MarketParams(S=100.0, K=100.0, T=1.0, r=0.05)


def test_price_bounds():
    discount_strike = 100.0 * math.exp(-0.05)

    assert price_bounds(MARKET, "call") == pytest.approx((100.0 - discount_strike, 100.0))
    assert price_bounds(MARKET, "put") == pytest.approx((0.0, discount_strike))


def test_price_bounds_valid():
    """Valid prices should pass bounds check."""
    result = check_price_bounds(call_price=10.0, put_price=5.0, market=MARKET)

    assert result.is_valid
    assert result.violations == []
    assert result.details == {"call_bounds": True, "put_bounds": True}


def test_call_below_lower_bound():
    result = check_price_bounds(call_price=1.0, put_price=5.0, market=MARKET)

    assert not result.is_valid
    assert result.details["call_bounds"] is False
    assert "below lower bound" in result.violations[0]


def test_bounds_violation_messages():
    assert bounds_violation(10.0, MARKET, "call") is None
    assert "above upper bound" in bounds_violation(150.0, MARKET, "call")
    assert "above upper bound" in bounds_violation(99.0, MARKET, "put")


def test_bounds_at_expiry_use_undiscounted_strike():
    market = MarketParams(S=90.0, K=100.0, T=0.0, r=0.05)

    assert price_bounds(market, "put") == (10.0, 100.0)
    assert bounds_violation(10.0, market, "put") is None


def test_put_call_parity_valid():
    """Model prices satisfy put-call parity."""
    result = bs_price(MARKET.with_sigma(0.2))

    check = check_put_call_parity(result.call_price, result.put_price, MARKET)

    assert check.is_valid
    assert check.details["difference"] < 1e-6


def test_put_call_parity_violated():
    check = check_put_call_parity(call_price=12.0, put_price=5.0, market=MARKET)

    assert not check.is_valid
    assert "Put-call parity violated" in check.violations[0]
    assert check.details["parity_lhs"] == pytest.approx(12.0 + 100.0 * math.exp(-0.05))
    assert check.details["parity_rhs"] == pytest.approx(105.0)
