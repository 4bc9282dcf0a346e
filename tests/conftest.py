"""
Pytest configuration and shared fixtures.
"""

import pytest

from options_analytics.utils.types import MarketParams, PricingParams, SimulationRequest


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters, one year to expiry."""
    return PricingParams(S=100.0, K=100.0, T=1.0, r=0.05, sigma=0.20)


@pytest.fixture
def half_year_params():
    """At-the-money option parameters, six months to expiry."""
    return PricingParams(S=100.0, K=100.0, T=0.5, r=0.05, sigma=0.20)


@pytest.fixture
def itm_call_params():
    """In-the-money call (out-of-the-money put) parameters."""
    return PricingParams(S=110.0, K=100.0, T=1.0, r=0.05, sigma=0.20)


@pytest.fixture
def atm_market():
    """Volatility-free ATM inputs for the implied vol solver."""
    return MarketParams(S=100.0, K=100.0, T=0.5, r=0.05)


@pytest.fixture
def small_request(half_year_params):
    """Cheap seeded Monte Carlo request."""
    return SimulationRequest(half_year_params, "call", n_paths=1000, steps=10, seed=7)
