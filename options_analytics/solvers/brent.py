"""
Brent's method for implied volatility calculation.

This module implements Brent's method (a hybrid bisection/inverse quadratic
interpolation algorithm) as a bracketing cross-check for the Newton-Raphson
solver. It converges whenever the price error changes sign over the
volatility bounds, at the cost of more evaluations.
"""

import logging

from scipy.optimize import brentq

from options_analytics.core.black_scholes import bs_price
from options_analytics.utils.constants import (
    IV_MAX_ITERATIONS,
    IV_MAX_VOL,
    IV_MIN_VOL,
    IV_PRICE_TOLERANCE,
)
from options_analytics.utils.types import IVResult, IVTraceStep, MarketParams, OptionType

logger = logging.getLogger(__name__)


def brent_iv(
    observed_price: float,
    market: MarketParams,
    option_type: OptionType,
    vol_lower: float = IV_MIN_VOL,
    vol_upper: float = IV_MAX_VOL,
    tolerance: float = IV_PRICE_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> IVResult:
    """
    Solve for implied volatility using Brent's method.

    Brent's method is a root-finding algorithm that combines:
    - Bisection (reliable but slow)
    - Inverse quadratic interpolation (fast when applicable)
    - Secant method (intermediate speed/reliability)

    Args:
        observed_price: Observed market price of the option
        market: S, K, T, r
        option_type: "call" or "put"
        vol_lower: Lower bound for volatility search
        vol_upper: Upper bound for volatility search
        tolerance: Convergence tolerance on sigma
        max_iterations: Maximum Brent iterations

    Returns:
        IVResult whose trace lists every objective evaluation. If the bounds
        don't bracket a root (price outside the attainable range), the result
        has converged=False and implied_vol=0.0.
    """
    trace: list[IVTraceStep] = []

    def objective(sigma: float) -> float:
        """BS(σ) - observed_price, recorded in the trace."""
        model_price = bs_price(market.with_sigma(sigma)).price(option_type)
        error = model_price - observed_price
        trace.append(IVTraceStep(sigma=sigma, model_price=model_price, error=error))
        return error

    try:
        implied_vol, info = brentq(
            objective,
            vol_lower,
            vol_upper,
            xtol=tolerance,
            rtol=1e-12,
            maxiter=max_iterations,
            full_output=True,
            disp=False,
        )
    except ValueError:
        # Raised when objective(a) and objective(b) have the same sign
        obj_lower = trace[0].error if trace else float("nan")
        obj_upper = trace[1].error if len(trace) > 1 else float("nan")
        message = (
            f"Brent method failed: objective function doesn't bracket a root. "
            f"obj({vol_lower:.4f}) = {obj_lower:.4f}, "
            f"obj({vol_upper:.4f}) = {obj_upper:.4f}. "
            f"Observed price {observed_price} may violate arbitrage bounds."
        )
        logger.warning(message)
        return IVResult(
            implied_vol=0.0,
            converged=False,
            trace=tuple(trace),
            method="brent",
            message=message,
        )

    return IVResult(
        implied_vol=float(implied_vol),
        converged=bool(info.converged),
        trace=tuple(trace),
        method="brent",
        message=f"{info.flag} after {info.iterations} iterations",
    )
