"""Unit tests for caller-side validation, presets and logging helpers."""

import logging
import math

import pytest

from options_analytics.utils.exceptions import OptionsAnalyticsError, ResourceLimitError, ValidationError
from options_analytics.utils.presets import DEFAULT_PARAMS, PRESETS, get_preset
from options_analytics.utils.timing import log_timing
from options_analytics.utils.types import MarketParams, PricingParams, SimulationRequest
from options_analytics.utils.validation import (
    validate_market,
    validate_option_type,
    validate_params,
    validate_simulation_request,
)


def test_valid_params_pass(standard_params):
    validate_params(standard_params)
    validate_market(standard_params.market)


def test_expiry_is_valid():
    validate_market(MarketParams(S=100.0, K=100.0, T=0.0, r=0.05))


def test_negative_rate_is_valid():
    validate_params(PricingParams(S=100.0, K=100.0, T=1.0, r=-0.01, sigma=0.2))


@pytest.mark.parametrize(
    "field,value,match",
    [
        ("S", 0.0, "Spot"),
        ("S", -5.0, "Spot"),
        ("S", math.nan, "Spot"),
        ("K", 0.0, "Strike"),
        ("K", math.inf, "Strike"),
        ("T", -0.1, "Time"),
        ("r", math.inf, "rate"),
        ("sigma", 0.0, "Volatility"),
        ("sigma", -0.2, "Volatility"),
        ("sigma", math.nan, "Volatility"),
    ],
)
def test_invalid_params(standard_params, field, value, match):
    with pytest.raises(ValidationError, match=match):
        validate_params(standard_params.replace(**{field: value}))


def test_validation_error_hierarchy():
    assert issubclass(ValidationError, OptionsAnalyticsError)
    assert issubclass(ValidationError, ValueError)
    assert issubclass(ResourceLimitError, OptionsAnalyticsError)


def test_option_type():
    validate_option_type("call")
    validate_option_type("put")
    with pytest.raises(ValidationError):
        validate_option_type("Call")


def test_simulation_ceilings_are_configurable(half_year_params):
    request = SimulationRequest(half_year_params, "call", n_paths=100, steps=10)

    validate_simulation_request(request)
    with pytest.raises(ResourceLimitError):
        validate_simulation_request(request, max_paths=50)
    with pytest.raises(ResourceLimitError):
        validate_simulation_request(request, max_work=999)


def test_params_replace_and_market(standard_params):
    changed = standard_params.replace(S=120.0)

    assert changed.S == 120.0
    assert changed.K == standard_params.K
    assert standard_params.S == 100.0
    assert changed.market == MarketParams(S=120.0, K=100.0, T=1.0, r=0.05)
    assert changed.market.with_sigma(0.2) == changed


# ===========================
# Presets
# ===========================


def test_presets_are_valid():
    ids = [preset.id for preset in PRESETS]

    assert len(ids) == len(set(ids))
    for preset in PRESETS:
        validate_params(preset.params())
    validate_params(DEFAULT_PARAMS)


def test_get_preset():
    preset = get_preset("leap")

    assert preset.params() == PricingParams(S=150, K=100, T=2.0, r=0.053, sigma=0.22)


def test_unknown_preset():
    with pytest.raises(ValidationError, match="Unknown preset"):
        get_preset("nope")


# ===========================
# Timing
# ===========================


def test_log_timing(caplog):
    logger = logging.getLogger("options_analytics.test")

    with caplog.at_level(logging.DEBUG, logger="options_analytics.test"):
        with log_timing(logger, "block"):
            pass
        with log_timing(logger, "silent", enabled=False):
            pass

    assert "Timing block" in caplog.text
    assert "silent" not in caplog.text
