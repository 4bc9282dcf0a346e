"""
Named multi-leg option strategies.

Each template builds its legs around the strike of the given parameters,
pricing every premium with Black-Scholes at the leg strike.
"""

from typing import Callable

from options_analytics.payoff.strategy import make_leg
from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.types import PricingParams, StrategyLeg

StrategyBuilder = Callable[[PricingParams], list[StrategyLeg]]


def _long_call(p: PricingParams) -> list[StrategyLeg]:
    return [make_leg("call", "long", p.K, p)]


def _long_put(p: PricingParams) -> list[StrategyLeg]:
    return [make_leg("put", "long", p.K, p)]


def _straddle(p: PricingParams) -> list[StrategyLeg]:
    return [make_leg("call", "long", p.K, p), make_leg("put", "long", p.K, p)]


def _strangle(p: PricingParams) -> list[StrategyLeg]:
    return [
        make_leg("call", "long", p.K * 1.05, p),
        make_leg("put", "long", p.K * 0.95, p),
    ]


def _bull_call_spread(p: PricingParams) -> list[StrategyLeg]:
    return [
        make_leg("call", "long", p.K, p),
        make_leg("call", "short", p.K * 1.1, p),
    ]


def _bear_put_spread(p: PricingParams) -> list[StrategyLeg]:
    return [
        make_leg("put", "long", p.K, p),
        make_leg("put", "short", p.K * 0.9, p),
    ]


def _iron_condor(p: PricingParams) -> list[StrategyLeg]:
    return [
        make_leg("put", "short", p.K * 0.95, p),
        make_leg("put", "long", p.K * 0.90, p),
        make_leg("call", "short", p.K * 1.05, p),
        make_leg("call", "long", p.K * 1.10, p),
    ]


def _butterfly(p: PricingParams) -> list[StrategyLeg]:
    return [
        make_leg("call", "long", p.K * 0.95, p),
        make_leg("call", "short", p.K, p, quantity=2),
        make_leg("call", "long", p.K * 1.05, p),
    ]


# name -> (description, builder)
STRATEGY_TEMPLATES: dict[str, tuple[str, StrategyBuilder]] = {
    "long-call": ("Bullish, unlimited upside", _long_call),
    "long-put": ("Bearish, limited downside", _long_put),
    "straddle": ("Long vol, profits from big moves", _straddle),
    "strangle": ("Long vol, cheaper than a straddle", _strangle),
    "bull-call-spread": ("Capped upside, lower cost", _bull_call_spread),
    "bear-put-spread": ("Capped downside, lower cost", _bear_put_spread),
    "iron-condor": ("Short vol, profits inside a range", _iron_condor),
    "butterfly": ("Low vol, profits near the strike", _butterfly),
}


def build_strategy(name: str, params: PricingParams) -> list[StrategyLeg]:
    """
    Build the legs of a named strategy.

    Raises:
        ValidationError: If the name is not a known template
    """
    try:
        _, builder = STRATEGY_TEMPLATES[name]
    except KeyError:
        known = ", ".join(STRATEGY_TEMPLATES)
        raise ValidationError(f"Unknown strategy '{name}'. Known strategies: {known}") from None
    return builder(params)
