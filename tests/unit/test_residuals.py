"""Unit tests for model-vs-market residual statistics."""

import math

import pytest

from options_analytics.diagnostics.residuals import summarize_residuals
from options_analytics.utils.exceptions import ValidationError


def test_summary_statistics():
    model = [10.0, 5.0, 2.0, 1.0]
    market = [10.5, 5.0, 1.8, 1.005]

    summary = summarize_residuals(model, market)

    assert summary.total == 4
    assert summary.mean == pytest.approx((0.5 + 0.0 - 0.2 + 0.005) / 4)
    assert summary.rmse == pytest.approx(math.sqrt((0.25 + 0.04 + 0.000025) / 4))
    assert summary.max_over == pytest.approx(0.5)
    assert summary.max_under == pytest.approx(-0.2)
    assert summary.overpriced == 1
    assert summary.underpriced == 1


def test_custom_threshold():
    summary = summarize_residuals([1.0, 1.0], [1.3, 0.9], threshold=0.2)

    assert summary.overpriced == 1
    assert summary.underpriced == 0


def test_perfect_fit():
    summary = summarize_residuals([3.0, 4.0], [3.0, 4.0])

    assert summary.mean == 0.0
    assert summary.rmse == 0.0


def test_length_mismatch_raises():
    with pytest.raises(ValidationError, match="must have same length"):
        summarize_residuals([1.0, 2.0], [1.0])


def test_empty_raises():
    with pytest.raises(ValidationError):
        summarize_residuals([], [])
