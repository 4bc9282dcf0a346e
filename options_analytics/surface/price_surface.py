"""
Option price surface over spot and maturity.

Evaluates the Black-Scholes pricer on a linear grid of spot prices
(multiples of strike) and maturities for a fixed strike, rate and
volatility.
"""

import logging

import numpy as np

from options_analytics.core.black_scholes import bs_price
from options_analytics.utils.constants import (
    SURFACE_RESOLUTION,
    SURFACE_SPOT_RANGE,
    SURFACE_TIME_RANGE,
)
from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.types import OptionType, PricingParams, SurfaceGrid

logger = logging.getLogger(__name__)


def build_surface(
    K: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
    s_resolution: int = SURFACE_RESOLUTION,
    t_resolution: int = SURFACE_RESOLUTION,
    s_range: tuple[float, float] = SURFACE_SPOT_RANGE,
    t_range: tuple[float, float] = SURFACE_TIME_RANGE,
) -> SurfaceGrid:
    """
    Build a price surface indexed [spot][maturity].

    Args:
        K: Strike price
        r: Risk-free rate
        sigma: Volatility
        option_type: "call" or "put"
        s_resolution: Number of spot points
        t_resolution: Number of maturity points
        s_range: Spot axis bounds as multiples of K, default [0.5K, 1.5K]
        t_range: Maturity axis bounds in years, default [0.02, 3.0]

    Returns:
        SurfaceGrid with read-only s_axis, t_axis and matrix arrays

    Raises:
        ValidationError: If either resolution is below 2
    """
    if s_resolution < 2 or t_resolution < 2:
        raise ValidationError(
            f"Surface resolution must be at least 2 per axis, "
            f"got s_resolution={s_resolution}, t_resolution={t_resolution}"
        )

    s_axis = np.linspace(s_range[0] * K, s_range[1] * K, s_resolution)
    t_axis = np.linspace(t_range[0], t_range[1], t_resolution)

    matrix = np.empty((s_resolution, t_resolution))
    for i, spot in enumerate(s_axis):
        for j, maturity in enumerate(t_axis):
            params = PricingParams(S=float(spot), K=K, T=float(maturity), r=r, sigma=sigma)
            matrix[i, j] = bs_price(params).price(option_type)

    logger.debug(
        "Built %s surface %dx%d for K=%.4f sigma=%.4f",
        option_type,
        s_resolution,
        t_resolution,
        K,
        sigma,
    )

    for array in (s_axis, t_axis, matrix):
        array.flags.writeable = False
    return SurfaceGrid(s_axis=s_axis, t_axis=t_axis, matrix=matrix)
