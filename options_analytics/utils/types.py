"""
Data types and structures for options analytics.

This module defines the immutable value types passed into and returned by
the pricing, greeks, solver, surface, payoff and simulation functions. Every
type is produced by a pure computation from explicit inputs and is never
mutated after construction.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

import numpy as np
import pandas as pd

from options_analytics.utils.exceptions import ValidationError

OptionType = Literal["call", "put"]
Direction = Literal["long", "short"]

OPTION_TYPES = ("call", "put")
DIRECTIONS = ("long", "short")


@dataclass(frozen=True)
class MarketParams:
    """
    Option inputs without volatility, as consumed by the implied vol solver.

    Attributes:
        S: Current spot price of the underlying asset
        K: Strike price
        T: Time to expiration in years
        r: Risk-free interest rate (annualized, continuous compounding)
    """
    S: float
    K: float
    T: float
    r: float

    def with_sigma(self, sigma: float) -> "PricingParams":
        """Return full pricing parameters at the given volatility."""
        return PricingParams(S=self.S, K=self.K, T=self.T, r=self.r, sigma=sigma)


@dataclass(frozen=True)
class PricingParams:
    """
    Immutable container for Black-Scholes inputs.

    No validation happens here: the pricing core accepts any floats and
    callers validate with :func:`options_analytics.utils.validation.validate_params`.

    Attributes:
        S: Current spot price of the underlying asset
        K: Strike price
        T: Time to expiration in years
        r: Risk-free interest rate (annualized, continuous compounding)
        sigma: Volatility (annualized standard deviation)
    """
    S: float
    K: float
    T: float
    r: float
    sigma: float

    @property
    def market(self) -> MarketParams:
        return MarketParams(S=self.S, K=self.K, T=self.T, r=self.r)

    def replace(self, **changes: float) -> "PricingParams":
        """Return a copy with some fields changed."""
        values = {"S": self.S, "K": self.K, "T": self.T, "r": self.r, "sigma": self.sigma}
        values.update(changes)
        return PricingParams(**values)


@dataclass(frozen=True)
class PricingResult:
    """
    Black-Scholes call and put values with the intermediate d1/d2 terms.

    Attributes:
        call_price: European call present value
        put_price: European put present value
        d1: d1 term (0 at or past expiry)
        d2: d2 term (0 at or past expiry)
    """
    call_price: float
    put_price: float
    d1: float
    d2: float

    def price(self, option_type: OptionType) -> float:
        if option_type == "call":
            return self.call_price
        if option_type == "put":
            return self.put_price
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")


@dataclass(frozen=True)
class Greeks:
    """
    Container for option Greeks.

    Attributes:
        delta: Rate of change of option price with respect to spot price (∂V/∂S)
        gamma: Rate of change of delta with respect to spot price (∂²V/∂S²)
        theta: Rate of change of option price with respect to time, per day
        vega: Rate of change of option price with respect to volatility, per 1% vol
        rho: Rate of change of option price with respect to interest rate, per 1% rate
    """
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float


@dataclass(frozen=True)
class IVTraceStep:
    """One solver evaluation: the volatility tried, its model price and the price error."""
    sigma: float
    model_price: float
    error: float


@dataclass(frozen=True)
class IVResult:
    """
    Result from an implied volatility solve.

    Attributes:
        implied_vol: Last volatility reached (the solution when converged)
        converged: Whether the price tolerance was met
        trace: Ordered evaluations made during the solve
        method: Solver used ('newton-raphson' or 'brent')
        message: Additional information about convergence
    """
    implied_vol: float
    converged: bool
    trace: tuple[IVTraceStep, ...] = ()
    method: Literal["newton-raphson", "brent"] = "newton-raphson"
    message: str = ""

    @property
    def iterations(self) -> int:
        return len(self.trace)


@dataclass(frozen=True)
class SimulationRequest:
    """
    Monte Carlo pricing request.

    Attributes:
        params: Pricing inputs shared with the analytic pricer
        option_type: Either "call" or "put"
        n_paths: Number of simulated paths (N)
        steps: Time steps per path
        seed: Optional seed for the uniform source; None draws fresh entropy
    """
    params: PricingParams
    option_type: OptionType
    n_paths: int
    steps: int
    seed: Optional[int] = None

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> "SimulationRequest":
        """Build a request from wire fields {S, K, T, r, sigma, optionType, N, steps}."""
        params = PricingParams(
            S=float(message["S"]),
            K=float(message["K"]),
            T=float(message["T"]),
            r=float(message["r"]),
            sigma=float(message["sigma"]),
        )
        return cls(
            params=params,
            option_type=message["optionType"],
            n_paths=int(message["N"]),
            steps=int(message["steps"]),
            seed=message.get("seed"),
        )

    def to_message(self) -> dict[str, Any]:
        message = {
            "S": self.params.S,
            "K": self.params.K,
            "T": self.params.T,
            "r": self.params.r,
            "sigma": self.params.sigma,
            "optionType": self.option_type,
            "N": self.n_paths,
            "steps": self.steps,
        }
        if self.seed is not None:
            message["seed"] = self.seed
        return message


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """
    Monte Carlo estimate with its 95% confidence interval.

    Array fields are read-only numpy arrays.

    Attributes:
        terminal_prices: Terminal spot of every path, shape (N,)
        sampled_paths: Full trajectories of the first min(300, N) paths,
            shape (min(300, N), steps + 1), starting at S
        estimated_price: Mean discounted payoff
        confidence_low: estimated_price - 1.96 * standard_error
        confidence_high: estimated_price + 1.96 * standard_error
        reference_analytic_price: Black-Scholes price for the same inputs
        standard_error: sqrt(sample variance / N)
    """
    terminal_prices: np.ndarray
    sampled_paths: np.ndarray
    estimated_price: float
    confidence_low: float
    confidence_high: float
    reference_analytic_price: float
    standard_error: float = 0.0

    def to_message(self) -> dict[str, Any]:
        """Return the wire representation with plain Python lists."""
        return {
            "sampledPaths": self.sampled_paths.tolist(),
            "terminalPrices": self.terminal_prices.tolist(),
            "estimatedPrice": self.estimated_price,
            "confidenceLow": self.confidence_low,
            "confidenceHigh": self.confidence_high,
            "referenceAnalyticPrice": self.reference_analytic_price,
        }


@dataclass(frozen=True)
class HistogramBin:
    """One bar of the terminal price distribution."""
    center: float
    count: int
    in_the_money: bool


@dataclass(frozen=True)
class StrategyLeg:
    """
    One option position within a strategy.

    Attributes:
        option_type: Either "call" or "put"
        direction: Either "long" or "short"
        strike: Strike price
        premium: Price paid (long) or received (short) per unit
        quantity: Number of contracts, at least 1
    """
    option_type: OptionType
    direction: Direction
    strike: float
    premium: float
    quantity: int = 1

    def __post_init__(self) -> None:
        """Validate leg fields."""
        if self.option_type not in OPTION_TYPES:
            raise ValidationError(f"Option type must be 'call' or 'put', got {self.option_type}")
        if self.direction not in DIRECTIONS:
            raise ValidationError(f"Direction must be 'long' or 'short', got {self.direction}")
        if not self.strike > 0:
            raise ValidationError(f"Strike price must be positive, got strike={self.strike}")
        if self.quantity < 1:
            raise ValidationError(f"Quantity must be at least 1, got quantity={self.quantity}")

    @property
    def sign(self) -> int:
        return 1 if self.direction == "long" else -1


@dataclass(frozen=True)
class PayoffPoint:
    """Aggregated profit/loss at one spot price at expiry."""
    spot: float
    total: float

    @property
    def profit(self) -> float:
        return max(self.total, 0.0)

    @property
    def loss(self) -> float:
        return min(self.total, 0.0)


@dataclass(frozen=True)
class Breakeven:
    """
    A sign change of the aggregated payoff between two adjacent grid points.

    Attributes:
        lower_spot: Grid spot before the crossing
        upper_spot: Grid spot at which the new sign is observed
        estimate: Linear interpolation of the zero crossing within the interval
    """
    lower_spot: float
    upper_spot: float
    estimate: float


@dataclass(frozen=True)
class StrategySummary:
    """
    Headline figures for a strategy at expiry.

    Attributes:
        net_premium: Premium paid minus premium received (negative for a credit)
        max_profit: Largest P&L over the grid, or +inf when upside is unbounded
        max_loss: Smallest P&L over the grid, or -inf when downside is unbounded
        breakevens: Sign changes of the aggregated payoff
    """
    net_premium: float
    max_profit: float
    max_loss: float
    breakevens: tuple[Breakeven, ...] = ()

    @property
    def unbounded_profit(self) -> bool:
        return math.isinf(self.max_profit)

    @property
    def unbounded_loss(self) -> bool:
        return math.isinf(self.max_loss)


@dataclass(frozen=True, eq=False)
class SurfaceGrid:
    """
    Option prices over a spot/maturity grid.

    Attributes:
        s_axis: Spot values, ascending
        t_axis: Maturities in years, ascending
        matrix: Prices indexed [spot][maturity]
    """
    s_axis: np.ndarray
    t_axis: np.ndarray
    matrix: np.ndarray

    def to_frame(self):
        """Return the grid as a DataFrame indexed by spot with maturity columns."""
        return pd.DataFrame(
            self.matrix,
            index=pd.Index(self.s_axis, name="spot"),
            columns=pd.Index(self.t_axis, name="maturity"),
        )


@dataclass
class ArbitrageCheck:
    """
    Result from arbitrage validation.

    Attributes:
        is_valid: Whether the price satisfies no-arbitrage conditions
        violations: List of specific violations detected
        details: Dictionary with detailed check results
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResidualSummary:
    """
    Model-vs-market residual statistics (market minus model).

    Attributes:
        mean: Mean residual
        rmse: Root mean squared residual
        max_over: Largest residual (market most above model)
        max_under: Smallest residual (market most below model)
        overpriced: Count of residuals above the threshold
        underpriced: Count of residuals below minus the threshold
        total: Number of observations
    """
    mean: float
    rmse: float
    max_over: float
    max_under: float
    overpriced: int
    underpriced: int
    total: int
