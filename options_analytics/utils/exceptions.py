"""
Exception hierarchy for options analytics.

All library-specific exceptions inherit from :class:`OptionsAnalyticsError`,
so callers can catch any library error with a single ``except`` clause.
Solver non-convergence is reported in the result, not raised.
"""


class OptionsAnalyticsError(Exception):
    """Base exception for all library errors."""


class ValidationError(OptionsAnalyticsError, ValueError):
    """Invalid input values (non-positive spot, unknown option type, etc.)."""


class ResourceLimitError(OptionsAnalyticsError):
    """A requested computation exceeds the configured resource ceiling."""
