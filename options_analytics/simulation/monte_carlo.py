"""
Monte Carlo valuation of European options under geometric Brownian motion.

Paths evolve with the exact log-normal step

    S_{t+Δt} = S_t · exp((r - σ²/2)Δt + σ√Δt · Z)

where Z comes from a Box-Muller transform of uniform samples. The price is
the mean discounted payoff with a 95% normal-approximation confidence
interval; the Black-Scholes price is reported alongside for comparison.
"""

import logging
import math
from typing import Union

import numpy as np

from options_analytics.core.black_scholes import bs_price
from options_analytics.utils.constants import (
    MC_CONFIDENCE_Z,
    MC_DISPLAY_PATHS,
    MC_HISTOGRAM_BINS,
)
from options_analytics.utils.timing import log_timing
from options_analytics.utils.types import (
    HistogramBin,
    OptionType,
    SimulationRequest,
    SimulationResult,
)
from options_analytics.utils.validation import validate_simulation_request

logger = logging.getLogger(__name__)


def box_muller(rng: np.random.Generator, size: int) -> np.ndarray:
    """
    Draw standard normal samples with the Box-Muller transform.

    Z = √(-2 ln U1) · cos(2π U2), with U1 in (0, 1] so the log is finite.
    """
    u1 = 1.0 - rng.random(size)
    u2 = rng.random(size)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def simulate(request: SimulationRequest) -> SimulationResult:
    """
    Run a Monte Carlo simulation.

    Args:
        request: Pricing inputs, option type, path count N, steps per path
            and an optional seed

    Returns:
        SimulationResult with all N terminal prices, the first min(300, N)
        full paths, the estimate, its 95% interval and the analytic price

    Raises:
        ValidationError: If the request is outside the model's domain
        ResourceLimitError: If N or N * steps exceeds the configured ceiling

    Notes:
        The interval width shrinks as O(1/√N); as N grows the estimate
        converges in probability to the analytic price.
    """
    validate_simulation_request(request)

    params = request.params
    S, K, T, r, sigma = params.S, params.K, params.T, params.r, params.sigma
    n_paths, steps = request.n_paths, request.steps

    dt = T / steps
    drift = (r - 0.5 * sigma * sigma) * dt
    diffusion = sigma * math.sqrt(dt)

    rng = np.random.default_rng(request.seed)
    display_count = min(MC_DISPLAY_PATHS, n_paths)
    sampled_paths = np.empty((display_count, steps + 1))
    sampled_paths[:, 0] = S

    logger.info(
        "Simulating %d %s paths x %d steps (S=%.4f K=%.4f T=%.4f)",
        n_paths,
        request.option_type,
        steps,
        S,
        K,
        T,
    )

    with log_timing(logger, "Monte Carlo paths"):
        spots = np.full(n_paths, float(S))
        for step in range(1, steps + 1):
            spots = spots * np.exp(drift + diffusion * box_muller(rng, n_paths))
            sampled_paths[:, step] = spots[:display_count]

    if request.option_type == "call":
        payoffs = np.maximum(spots - K, 0.0)
    else:  # put
        payoffs = np.maximum(K - spots, 0.0)

    discounted = payoffs * math.exp(-r * T)
    estimated_price = float(discounted.mean())
    variance = float(discounted.var(ddof=1))
    standard_error = math.sqrt(variance / n_paths)
    half_width = MC_CONFIDENCE_Z * standard_error

    reference = bs_price(params).price(request.option_type)

    logger.debug(
        "MC estimate=%.6f se=%.6g reference=%.6f",
        estimated_price,
        standard_error,
        reference,
    )

    for array in (spots, sampled_paths):
        array.flags.writeable = False
    return SimulationResult(
        terminal_prices=spots,
        sampled_paths=sampled_paths,
        estimated_price=estimated_price,
        confidence_low=estimated_price - half_width,
        confidence_high=estimated_price + half_width,
        reference_analytic_price=reference,
        standard_error=standard_error,
    )


def terminal_histogram(
    terminal_prices: Union[SimulationResult, np.ndarray],
    strike: float,
    option_type: OptionType = "call",
    bins: int = MC_HISTOGRAM_BINS,
) -> list[HistogramBin]:
    """
    Bin terminal prices for a distribution chart.

    Args:
        terminal_prices: A SimulationResult or an array of terminal prices
        strike: Strike used to flag in-the-money bins
        option_type: "call" or "put"
        bins: Number of equal-width bins between the min and max price

    Returns:
        Bins in ascending order of their centre
    """
    if isinstance(terminal_prices, SimulationResult):
        terminal_prices = terminal_prices.terminal_prices
    prices = np.asarray(terminal_prices, dtype=float)
    if prices.size == 0:
        return []

    counts, edges = np.histogram(prices, bins=bins)
    centers = 0.5 * (edges[:-1] + edges[1:])

    histogram = []
    for center, count in zip(centers, counts):
        in_the_money = center > strike if option_type == "call" else center < strike
        histogram.append(HistogramBin(center=float(center), count=int(count), in_the_money=in_the_money))
    return histogram
