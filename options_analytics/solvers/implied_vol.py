"""
Implied volatility entry points.

This module provides a high-level interface for solving implied volatility
with a choice of solver, and a helper that solves across strikes to build a
volatility smile.
"""

import logging

from options_analytics.solvers.brent import brent_iv
from options_analytics.solvers.newton_raphson import newton_raphson_iv
from options_analytics.utils.constants import IV_MAX_ITERATIONS, IV_PRICE_TOLERANCE
from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.timing import log_timing
from options_analytics.utils.types import IVResult, MarketParams, OptionType

logger = logging.getLogger(__name__)

METHODS = ("newton", "brent")


def implied_volatility(
    observed_price: float,
    market: MarketParams,
    option_type: OptionType = "call",
    method: str = "newton",
    max_iterations: int = IV_MAX_ITERATIONS,
    tolerance: float = IV_PRICE_TOLERANCE,
) -> IVResult:
    """
    Solve for implied volatility.

    Args:
        observed_price: Observed market price
        market: S, K, T, r
        option_type: "call" or "put"
        method: "newton" (default, Newton-Raphson from σ=0.2 with halving
            fallback) or "brent" (bracketing cross-check)
        max_iterations: Iteration limit passed to the solver
        tolerance: Price tolerance for Newton-Raphson, sigma tolerance for Brent

    Returns:
        IVResult containing:
            - implied_vol: Solved (or last reached) implied volatility
            - converged: True if the tolerance was met
            - trace: Ordered (sigma, model_price, error) evaluations
            - method: Solver used ("newton-raphson" or "brent")
            - message: Detailed information about convergence

    Raises:
        ValidationError: If method is not "newton" or "brent"

    Examples:
        >>> result = implied_volatility(10.4506, MarketParams(S=100, K=100, T=1.0, r=0.05))
        >>> print(f"IV: {result.implied_vol:.2%}, converged: {result.converged}")
        IV: 20.00%, converged: True
    """
    if method not in METHODS:
        raise ValidationError(f"method must be one of {METHODS}, got '{method}'")

    with log_timing(logger, f"implied vol ({method})"):
        if method == "newton":
            result = newton_raphson_iv(
                observed_price,
                market,
                option_type,
                max_iterations=max_iterations,
                tolerance=tolerance,
            )
        else:
            result = brent_iv(
                observed_price,
                market,
                option_type,
                tolerance=tolerance,
                max_iterations=max_iterations,
            )

    logger.debug(
        "IV %s: observed=%.6f sigma=%.6f converged=%s iterations=%d",
        result.method,
        observed_price,
        result.implied_vol,
        result.converged,
        result.iterations,
    )
    return result


def implied_volatility_smile(
    observed_prices: list[float],
    S: float,
    strikes: list[float],
    T: float,
    r: float,
    option_type: OptionType = "call",
    method: str = "newton",
) -> list[IVResult]:
    """
    Solve for implied volatilities across strikes (volatility smile).

    Args:
        observed_prices: List of observed option prices
        S: Current spot price (same for all)
        strikes: List of strike prices (must match length of observed_prices)
        T: Time to expiration (same for all)
        r: Risk-free rate (same for all)
        option_type: "call" or "put" (same for all)
        method: Solver passed to :func:`implied_volatility`

    Returns:
        List of IVResult objects, one per strike

    Raises:
        ValidationError: If observed_prices and strikes have different lengths
    """
    if len(observed_prices) != len(strikes):
        raise ValidationError(
            f"observed_prices ({len(observed_prices)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    return [
        implied_volatility(price, MarketParams(S=S, K=strike, T=T, r=r), option_type, method)
        for price, strike in zip(observed_prices, strikes)
    ]
