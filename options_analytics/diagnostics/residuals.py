"""Model-vs-market residual statistics."""

from typing import Sequence

import numpy as np

from options_analytics.utils.constants import RESIDUAL_THRESHOLD
from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.types import ResidualSummary


def summarize_residuals(
    model_prices: Sequence[float],
    market_prices: Sequence[float],
    threshold: float = RESIDUAL_THRESHOLD,
) -> ResidualSummary:
    """
    Summarize market-minus-model residuals.

    A residual above ``threshold`` marks the market as overpriced relative to
    the model; below ``-threshold`` as underpriced.

    Raises:
        ValidationError: If the sequences are empty or differ in length
    """
    if len(model_prices) != len(market_prices):
        raise ValidationError(
            f"model_prices ({len(model_prices)}) and market_prices ({len(market_prices)}) "
            f"must have same length"
        )
    if len(model_prices) == 0:
        raise ValidationError("At least one price pair is required")

    residuals = np.asarray(market_prices, dtype=float) - np.asarray(model_prices, dtype=float)

    return ResidualSummary(
        mean=float(residuals.mean()),
        rmse=float(np.sqrt(np.mean(residuals**2))),
        max_over=float(residuals.max()),
        max_under=float(residuals.min()),
        overpriced=int(np.sum(residuals > threshold)),
        underpriced=int(np.sum(residuals < -threshold)),
        total=int(residuals.size),
    )
