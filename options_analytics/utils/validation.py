"""
Caller-side input validation.

The pricing, greeks and solver functions do not validate their inputs:
out-of-contract values produce whatever the arithmetic produces. Callers
that accept user input (the CLI, the web app, the simulation runner) check
parameters here first and get a :class:`ValidationError` or
:class:`ResourceLimitError` instead.
"""

import math

from options_analytics.utils.constants import MAX_PATHS, MAX_SIMULATION_WORK
from options_analytics.utils.exceptions import ResourceLimitError, ValidationError
from options_analytics.utils.types import (
    OPTION_TYPES,
    MarketParams,
    PricingParams,
    SimulationRequest,
)


def validate_option_type(option_type: str) -> None:
    if option_type not in OPTION_TYPES:
        raise ValidationError(f"Option type must be 'call' or 'put', got {option_type}")


def validate_market(market: MarketParams) -> None:
    """
    Validate the volatility-free option inputs.

    Raises:
        ValidationError: If S or K is not positive, T is negative, or r is not finite
    """
    if not (math.isfinite(market.S) and market.S > 0):
        raise ValidationError(f"Spot price must be positive, got S={market.S}")
    if not (math.isfinite(market.K) and market.K > 0):
        raise ValidationError(f"Strike price must be positive, got K={market.K}")
    if not (math.isfinite(market.T) and market.T >= 0):
        raise ValidationError(f"Time to expiration must be non-negative, got T={market.T}")
    if not math.isfinite(market.r):
        raise ValidationError(f"Risk-free rate must be finite, got r={market.r}")


def validate_params(params: PricingParams) -> None:
    """
    Validate full Black-Scholes inputs.

    Raises:
        ValidationError: If any input is outside the model's domain
    """
    validate_market(params.market)
    if not (math.isfinite(params.sigma) and params.sigma > 0):
        raise ValidationError(f"Volatility must be positive, got sigma={params.sigma}")


def validate_simulation_request(
    request: SimulationRequest,
    max_paths: int = MAX_PATHS,
    max_work: int = MAX_SIMULATION_WORK,
) -> None:
    """
    Validate a Monte Carlo request and apply the resource ceiling.

    Raises:
        ValidationError: If parameters, option type, path or step counts are invalid
        ResourceLimitError: If n_paths exceeds max_paths or n_paths * steps exceeds max_work
    """
    validate_params(request.params)
    validate_option_type(request.option_type)
    if request.n_paths < 2:
        raise ValidationError(
            f"At least 2 paths are needed for a confidence interval, got N={request.n_paths}"
        )
    if request.steps < 1:
        raise ValidationError(f"Steps per path must be at least 1, got steps={request.steps}")

    if request.n_paths > max_paths:
        raise ResourceLimitError(f"N={request.n_paths} exceeds the path ceiling of {max_paths}")
    work = request.n_paths * request.steps
    if work > max_work:
        raise ResourceLimitError(
            f"N*steps={work} exceeds the simulation ceiling of {max_work}"
        )
