"""
Arbitrage diagnostics for option price validation.

This module implements no-arbitrage checks on observed or model prices:
- Price bounds for a single option
- Put-call parity for a call/put pair

Prices outside the bounds have no implied volatility, so the implied vol
solver reports non-convergence for them; these checks let callers explain
why before or after solving.
"""

import math
from typing import Optional

from options_analytics.utils.constants import ARBITRAGE_TOLERANCE, PARITY_TOLERANCE
from options_analytics.utils.types import ArbitrageCheck, MarketParams, OptionType


def price_bounds(market: MarketParams, option_type: OptionType) -> tuple[float, float]:
    """
    No-arbitrage (lower, upper) bounds for a European option price.

    Call: max(S - K·e^(-rT), 0) <= C <= S
    Put:  max(K·e^(-rT) - S, 0) <= P <= K·e^(-rT)
    """
    discount_strike = market.K * math.exp(-market.r * max(market.T, 0.0))
    if option_type == "call":
        return max(market.S - discount_strike, 0.0), market.S
    else:  # put
        return max(discount_strike - market.S, 0.0), discount_strike


def bounds_violation(
    observed_price: float,
    market: MarketParams,
    option_type: OptionType,
    tolerance: float = ARBITRAGE_TOLERANCE,
) -> Optional[str]:
    """
    Check if a price violates no-arbitrage bounds.

    Returns:
        None if valid, error message string if arbitrage violation detected
    """
    lower, upper = price_bounds(market, option_type)
    label = option_type.capitalize()

    if observed_price < lower - tolerance:
        return f"{label} price {observed_price:.4f} below lower bound {lower:.4f}"
    if observed_price > upper + tolerance:
        return f"{label} price {observed_price:.4f} above upper bound {upper:.4f}"
    return None


def check_price_bounds(
    call_price: float,
    put_price: float,
    market: MarketParams,
    tolerance: float = ARBITRAGE_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate a call/put pair against no-arbitrage bounds.

    Args:
        call_price, put_price: Observed option prices
        market: S, K, T, r
        tolerance: Tolerance for floating point comparisons

    Returns:
        ArbitrageCheck with one detail flag per side
    """
    violations = []
    details = {}

    for option_type, price in (("call", call_price), ("put", put_price)):
        violation = bounds_violation(price, market, option_type, tolerance)
        details[f"{option_type}_bounds"] = violation is None
        if violation:
            violations.append(violation)

    return ArbitrageCheck(is_valid=not violations, violations=violations, details=details)


def check_put_call_parity(
    call_price: float,
    put_price: float,
    market: MarketParams,
    tolerance: float = PARITY_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate put-call parity.

    Put-call parity:
        C + K·e^(-rT) = P + S

    Returns:
        ArbitrageCheck with both sides and their difference in details
    """
    lhs = call_price + market.K * math.exp(-market.r * market.T)
    rhs = put_price + market.S

    diff = abs(lhs - rhs)
    is_valid = diff < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"Put-call parity violated: C + K·e^(-rT) = {lhs:.6f}, "
            f"P + S = {rhs:.6f}, diff = {diff:.6f}"
        )

    details = {"parity_lhs": lhs, "parity_rhs": rhs, "difference": diff}

    return ArbitrageCheck(is_valid=is_valid, violations=violations, details=details)
