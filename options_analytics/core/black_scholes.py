"""
Black-Scholes option pricing model and analytic Greeks.

This module implements the Black-Scholes-Merton formula for European
options on a non-dividend-paying underlying, together with the standard
Greeks. All functions are pure: they take a :class:`PricingParams` value
and return floats or value types, with no shared state.

Inputs are not validated. At or past expiry (T <= 0) prices collapse to
intrinsic value; for T > 0 a non-positive S, K or sigma is out of contract
and produces whatever the arithmetic produces.

Mathematical Background:
    The Black-Scholes formula prices European options under assumptions:
    - Log-normal asset price distribution
    - Constant volatility and interest rate
    - No transaction costs or taxes
    - Continuous trading possible

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import math

from options_analytics.core.distributions import normal_cdf, normal_pdf
from options_analytics.utils.constants import DAYS_PER_YEAR, PERCENT_SCALE
from options_analytics.utils.types import Greeks, OptionType, PricingParams, PricingResult


def d1_d2(params: PricingParams) -> tuple[float, float]:
    """
    Calculate the d1 and d2 terms of the Black-Scholes formula.

    Args:
        params: Pricing inputs with T > 0

    Returns:
        (d1, d2)

    Formula:
        d1 = [ln(S/K) + (r + σ²/2)T] / (σ√T)
        d2 = d1 - σ√T

    Notes:
        For a call, N(d2) is the risk-neutral probability of exercise.
    """
    S, K, T, r, sigma = params.S, params.K, params.T, params.r, params.sigma
    sqrt_T = math.sqrt(T)
    diffusion = sigma * sqrt_T

    d1 = (math.log(S / K) + (r + 0.5 * sigma * sigma) * T) / diffusion
    return d1, d1 - diffusion


def bs_price(params: PricingParams) -> PricingResult:
    """
    Price a European call and put in one pass.

    Args:
        params: Pricing inputs

    Returns:
        PricingResult with call_price, put_price, d1, d2

    Formulas:
        C = S·N(d1) - K·e^(-rT)·N(d2)
        P = K·e^(-rT)·N(-d2) - S·N(-d1)

    Edge Cases:
        T <= 0: call = max(S - K, 0), put = max(K - S, 0), d1 = d2 = 0

    Examples:
        >>> result = bs_price(PricingParams(S=100, K=100, T=1.0, r=0.05, sigma=0.20))
        >>> abs(result.call_price - 10.4506) < 0.001
        True
    """
    S, K, T, r = params.S, params.K, params.T, params.r

    if T <= 0:
        return PricingResult(
            call_price=max(S - K, 0.0),
            put_price=max(K - S, 0.0),
            d1=0.0,
            d2=0.0,
        )

    d1, d2 = d1_d2(params)
    discount_strike = K * math.exp(-r * T)

    return PricingResult(
        call_price=S * normal_cdf(d1) - discount_strike * normal_cdf(d2),
        put_price=discount_strike * normal_cdf(-d2) - S * normal_cdf(-d1),
        d1=d1,
        d2=d2,
    )


def call_price(params: PricingParams) -> float:
    return bs_price(params).call_price


def put_price(params: PricingParams) -> float:
    return bs_price(params).put_price


def option_price(params: PricingParams, option_type: OptionType = "call") -> float:
    """
    Calculate European option price (call or put).

    Raises:
        ValueError: If option_type is not "call" or "put"
    """
    return bs_price(params).price(option_type)


# ===========================
# Greeks Calculations
# ===========================


def delta(params: PricingParams, option_type: OptionType = "call") -> float:
    """
    Calculate option delta (∂V/∂S).

    For a call, delta ∈ [0, 1]; for a put, delta ∈ [-1, 0].

    Formulas:
        Call delta: Δ_c = N(d1)
        Put delta:  Δ_p = N(d1) - 1

    Edge Cases:
        T <= 0: call 1 if S > K else 0; put -1 if S < K else 0
    """
    if params.T <= 0:
        if option_type == "call":
            return 1.0 if params.S > params.K else 0.0
        else:
            return -1.0 if params.S < params.K else 0.0

    d1, _ = d1_d2(params)
    if option_type == "call":
        return normal_cdf(d1)
    else:  # put
        return normal_cdf(d1) - 1.0


def gamma(params: PricingParams) -> float:
    """
    Calculate option gamma (∂²V/∂S²), identical for calls and puts.

    Formula:
        Γ = φ(d1) / (S · σ · √T)
    """
    if params.T <= 0:
        return 0.0

    d1, _ = d1_d2(params)
    return normal_pdf(d1) / (params.S * params.sigma * math.sqrt(params.T))


def raw_vega(params: PricingParams) -> float:
    """
    Calculate unscaled vega ∂V/∂σ = S · φ(d1) · √T.

    This is the Newton-Raphson derivative used by the implied vol solver.
    Returns 0 at or past expiry.
    """
    if params.T <= 0:
        return 0.0

    d1, _ = d1_d2(params)
    return params.S * normal_pdf(d1) * math.sqrt(params.T)


def vega(params: PricingParams) -> float:
    """
    Calculate option vega, reported per 1% change in volatility.

    Formula:
        ν = S · φ(d1) · √T / 100

    Interpretation:
        Vega of 0.35 means: for 1% increase in volatility (e.g., 20% → 21%),
        option price increases by $0.35.
    """
    return raw_vega(params) / PERCENT_SCALE


def theta(params: PricingParams, option_type: OptionType = "call") -> float:
    """
    Calculate option theta, reported per calendar day.

    Formulas:
        Call: Θ_c = [-(S·φ(d1)·σ)/(2√T) - r·K·e^(-rT)·N(d2)] / 365
        Put:  Θ_p = [-(S·φ(d1)·σ)/(2√T) + r·K·e^(-rT)·N(-d2)] / 365
    """
    if params.T <= 0:
        return 0.0

    S, K, T, r, sigma = params.S, params.K, params.T, params.r, params.sigma
    d1, d2 = d1_d2(params)
    discount_strike = K * math.exp(-r * T)

    # Diffusion contribution, same for call and put
    common = -(S * normal_pdf(d1) * sigma) / (2.0 * math.sqrt(T))

    if option_type == "call":
        theta_annual = common - r * discount_strike * normal_cdf(d2)
    else:  # put
        theta_annual = common + r * discount_strike * normal_cdf(-d2)

    return theta_annual / DAYS_PER_YEAR


def rho(params: PricingParams, option_type: OptionType = "call") -> float:
    """
    Calculate option rho, reported per 1% change in interest rate.

    Formulas:
        Call rho: ρ_c = K·T·e^(-rT)·N(d2) / 100
        Put rho:  ρ_p = -K·T·e^(-rT)·N(-d2) / 100
    """
    if params.T <= 0:
        return 0.0

    _, d2 = d1_d2(params)
    discount_strike = params.K * params.T * math.exp(-params.r * params.T)

    if option_type == "call":
        return discount_strike * normal_cdf(d2) / PERCENT_SCALE
    else:  # put
        return -discount_strike * normal_cdf(-d2) / PERCENT_SCALE


def calculate_greeks(params: PricingParams, option_type: OptionType = "call") -> Greeks:
    """
    Calculate all Greeks for one option side.

    Example:
        >>> greeks = calculate_greeks(PricingParams(100, 100, 1.0, 0.05, 0.20))
        >>> print(f"Delta: {greeks.delta:.4f}")
        Delta: 0.6368
    """
    return Greeks(
        delta=delta(params, option_type),
        gamma=gamma(params),
        theta=theta(params, option_type),
        vega=vega(params),
        rho=rho(params, option_type),
    )
