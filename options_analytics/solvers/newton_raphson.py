"""
Newton-Raphson method for implied volatility calculation.

This module implements the Newton-Raphson algorithm for solving the
Black-Scholes equation for volatility given an observed price. The method
uses unscaled vega (∂V/∂σ) as the derivative. Every iteration is recorded
in the returned trace.

Plain Newton-Raphson can step to a non-positive volatility for deep
ITM/OTM options or near expiry. Steps that would land at or below the
volatility floor halve the previous volatility instead, and the search is
capped at the maximum volatility.
"""

import logging

from options_analytics.core.black_scholes import bs_price, raw_vega
from options_analytics.utils.constants import (
    IV_INITIAL_GUESS,
    IV_MAX_ITERATIONS,
    IV_MAX_VOL,
    IV_MIN_VEGA,
    IV_MIN_VOL,
    IV_PRICE_TOLERANCE,
)
from options_analytics.utils.types import IVResult, IVTraceStep, MarketParams, OptionType

logger = logging.getLogger(__name__)


def newton_raphson_iv(
    observed_price: float,
    market: MarketParams,
    option_type: OptionType,
    max_iterations: int = IV_MAX_ITERATIONS,
    tolerance: float = IV_PRICE_TOLERANCE,
    initial_sigma: float = IV_INITIAL_GUESS,
    min_vol: float = IV_MIN_VOL,
    max_vol: float = IV_MAX_VOL,
) -> IVResult:
    """
    Solve for implied volatility using Newton-Raphson.

    The update is:
        σ_{n+1} = σ_n - (BS(σ_n) - observed_price) / vega(σ_n)

    Args:
        observed_price: Observed market price of the option
        market: S, K, T, r
        option_type: "call" or "put"
        max_iterations: Maximum number of iterations
        tolerance: Convergence tolerance on |model price - observed price|
        initial_sigma: Starting volatility
        min_vol: Updates at or below this halve the previous sigma instead
        max_vol: Volatility cap; exceeding it stops the solve

    Returns:
        IVResult with the last sigma, convergence flag and full trace

    Notes:
        - converged=True as soon as the price error is within tolerance
        - converged=False if vega drops below IV_MIN_VEGA (degenerate slope)
        - converged=False if sigma exceeds max_vol (clamped to max_vol)
        - converged=False after max_iterations
        Non-convergence is an expected outcome, never an exception.
    """
    sigma = initial_sigma
    trace: list[IVTraceStep] = []

    for _ in range(max_iterations):
        params = market.with_sigma(sigma)
        model_price = bs_price(params).price(option_type)
        vega_value = raw_vega(params)
        error = model_price - observed_price

        trace.append(IVTraceStep(sigma=sigma, model_price=model_price, error=error))

        if abs(error) < tolerance:
            logger.debug("IV converged: sigma=%.8f after %d iterations", sigma, len(trace))
            return IVResult(
                implied_vol=sigma,
                converged=True,
                trace=tuple(trace),
                method="newton-raphson",
                message=f"Converged in {len(trace)} iterations",
            )

        if abs(vega_value) < IV_MIN_VEGA:
            return _not_converged(
                sigma,
                trace,
                f"Vega too small ({vega_value:.2e}) at iteration {len(trace)}",
            )

        sigma_new = sigma - error / vega_value
        sigma = sigma / 2.0 if sigma_new <= min_vol else sigma_new

        if sigma > max_vol:
            return _not_converged(
                max_vol,
                trace,
                f"Volatility exceeded {max_vol:g} at iteration {len(trace)}",
            )

    return _not_converged(
        sigma,
        trace,
        f"Max iterations ({max_iterations}) reached without convergence",
    )


def _not_converged(sigma: float, trace: list[IVTraceStep], message: str) -> IVResult:
    logger.warning("IV solve did not converge: %s (last sigma=%.6f)", message, sigma)
    return IVResult(
        implied_vol=sigma,
        converged=False,
        trace=tuple(trace),
        method="newton-raphson",
        message=message,
    )
