"""
Profit and loss at expiry for single options and multi-leg strategies.

A strategy is an unordered collection of :class:`StrategyLeg` values; its
payoff at each spot is the sum of the leg payoffs. Breakevens are the grid
intervals where the aggregated payoff changes sign.
"""

import math
from typing import Iterable, Optional, Sequence

import numpy as np

from options_analytics.core.black_scholes import bs_price, calculate_greeks
from options_analytics.utils.constants import (
    PAYOFF_GRID_POINTS,
    PAYOFF_SPOT_RANGE,
    STRATEGY_SPOT_RANGE,
)
from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.types import (
    Breakeven,
    Direction,
    Greeks,
    OptionType,
    PayoffPoint,
    PricingParams,
    StrategyLeg,
    StrategySummary,
)


def leg_payoff(leg: StrategyLeg, spot_at_expiry: float) -> float:
    """
    Profit or loss of one leg at expiry.

    Formula:
        intrinsic = max(S_T - K, 0) for calls, max(K - S_T, 0) for puts
        payoff = (+1 long / -1 short) × (intrinsic - premium) × quantity
    """
    if leg.option_type == "call":
        intrinsic = max(spot_at_expiry - leg.strike, 0.0)
    else:  # put
        intrinsic = max(leg.strike - spot_at_expiry, 0.0)
    return leg.sign * (intrinsic - leg.premium) * leg.quantity


def strategy_payoff(
    legs: Sequence[StrategyLeg], spot_grid: Iterable[float]
) -> tuple[PayoffPoint, ...]:
    """Aggregate payoff of all legs at each spot in the grid."""
    return tuple(
        PayoffPoint(spot=float(spot), total=sum(leg_payoff(leg, spot) for leg in legs))
        for spot in spot_grid
    )


def find_breakevens(points: Sequence[PayoffPoint]) -> tuple[Breakeven, ...]:
    """
    Find sign changes of the aggregated payoff between adjacent grid points.

    A run of points exactly on zero counts once, at the transition into it,
    and only when the next non-zero total has the opposite sign to the one
    before the run. A payoff that touches zero and turns back is not a
    breakeven. The estimate is a linear interpolation inside the interval;
    the interval itself is the grid-resolution answer.
    """
    breakevens = []
    for i in range(1, len(points)):
        prev, cur = points[i - 1], points[i]
        if prev.total * cur.total < 0:
            fraction = -prev.total / (cur.total - prev.total)
            estimate = prev.spot + fraction * (cur.spot - prev.spot)
        elif cur.total == 0 and prev.total != 0:
            following = next((p.total for p in points[i + 1:] if p.total != 0), 0.0)
            if prev.total * following >= 0:
                continue
            estimate = cur.spot
        else:
            continue
        breakevens.append(Breakeven(lower_spot=prev.spot, upper_spot=cur.spot, estimate=estimate))
    return tuple(breakevens)


def default_spot_grid(
    strike: float,
    points: int = PAYOFF_GRID_POINTS,
    spot_range: tuple[float, float] = PAYOFF_SPOT_RANGE,
) -> np.ndarray:
    """Linear spot grid over [0.4K, 1.6K] for single-leg diagrams."""
    return np.linspace(spot_range[0] * strike, spot_range[1] * strike, points)


def strategy_spot_grid(
    legs: Sequence[StrategyLeg],
    points: int = PAYOFF_GRID_POINTS,
    spot_range: tuple[float, float] = STRATEGY_SPOT_RANGE,
) -> np.ndarray:
    """
    Linear spot grid over [0.6 × lowest strike, 1.4 × highest strike].

    Raises:
        ValidationError: If legs is empty
    """
    if not legs:
        raise ValidationError("A strategy needs at least one leg")
    strikes = [leg.strike for leg in legs]
    return np.linspace(spot_range[0] * min(strikes), spot_range[1] * max(strikes), points)


def single_leg_payoff(
    option_type: OptionType,
    strike: float,
    premium: float,
    direction: Direction = "long",
    quantity: int = 1,
    spots: Optional[Iterable[float]] = None,
) -> tuple[PayoffPoint, ...]:
    """Payoff diagram of one option, the one-leg case of :func:`strategy_payoff`."""
    leg = StrategyLeg(
        option_type=option_type,
        direction=direction,
        strike=strike,
        premium=premium,
        quantity=quantity,
    )
    if spots is None:
        spots = default_spot_grid(strike)
    return strategy_payoff([leg], spots)


def make_leg(
    option_type: OptionType,
    direction: Direction,
    strike: float,
    params: PricingParams,
    quantity: int = 1,
    premium: Optional[float] = None,
) -> StrategyLeg:
    """
    Create a leg whose premium defaults to the Black-Scholes price at its strike.

    Args:
        option_type: "call" or "put"
        direction: "long" or "short"
        strike: Leg strike
        params: Market inputs; params.K is replaced by the leg strike
        quantity: Number of contracts
        premium: Explicit premium, overrides the model price
    """
    if premium is None:
        premium = bs_price(params.replace(K=strike)).price(option_type)
    return StrategyLeg(
        option_type=option_type,
        direction=direction,
        strike=strike,
        premium=premium,
        quantity=quantity,
    )


def net_premium(legs: Sequence[StrategyLeg]) -> float:
    """Premium paid for long legs minus premium received for short legs."""
    return sum(leg.sign * leg.premium * leg.quantity for leg in legs)


def summarize_strategy(
    legs: Sequence[StrategyLeg], points: Optional[Sequence[PayoffPoint]] = None
) -> StrategySummary:
    """
    Headline figures for a strategy.

    Max profit/loss are taken over the payoff grid, except that a net long
    call position has unbounded profit (+inf) and a net short call position
    has unbounded loss (-inf) as spot rises. When any leg is a put the
    payoff at S = 0 is included as well.

    Args:
        legs: Strategy legs
        points: Precomputed payoff; defaults to the strategy spot grid
    """
    if points is None:
        points = strategy_payoff(legs, strategy_spot_grid(legs))

    totals = [point.total for point in points]
    # Put payoffs peak at S = 0, below any strategy grid
    if any(leg.option_type == "put" for leg in legs):
        totals.append(sum(leg_payoff(leg, 0.0) for leg in legs))
    net_calls = sum(leg.sign * leg.quantity for leg in legs if leg.option_type == "call")

    max_profit = float("inf") if net_calls > 0 else max(totals)
    max_loss = float("-inf") if net_calls < 0 else min(totals)

    return StrategySummary(
        net_premium=net_premium(legs),
        max_profit=max_profit,
        max_loss=max_loss,
        breakevens=find_breakevens(points),
    )


def strategy_greeks(legs: Sequence[StrategyLeg], params: PricingParams) -> Greeks:
    """
    Position Greeks: signed, quantity-weighted sum of each leg's Greeks.

    Each leg is evaluated at params with K replaced by the leg strike.
    """
    totals = {"delta": 0.0, "gamma": 0.0, "theta": 0.0, "vega": 0.0, "rho": 0.0}
    for leg in legs:
        greeks = calculate_greeks(params.replace(K=leg.strike), leg.option_type)
        weight = leg.sign * leg.quantity
        for name in totals:
            totals[name] += weight * getattr(greeks, name)
    return Greeks(**totals)


def format_extreme(value: float, precision: int = 4) -> str:
    """Display label for a max profit/loss figure: "+∞" / "-∞" when unbounded."""
    if math.isinf(value):
        return "+∞" if value > 0 else "-∞"
    return f"${value:.{precision}f}"
