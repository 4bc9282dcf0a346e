"""
Command-line interface for options analytics.

This CLI provides access to:
- Option pricing and Greeks (Black-Scholes)
- Implied volatility solving with the iteration trace
- Price surfaces
- Payoff diagrams for single options and named strategies
- Monte Carlo simulation
"""

import logging
import math

import click
import numpy as np

from options_analytics.core.black_scholes import bs_price, calculate_greeks
from options_analytics.diagnostics.arbitrage import bounds_violation
from options_analytics.payoff.strategy import (
    single_leg_payoff,
    strategy_greeks,
    strategy_payoff,
    strategy_spot_grid,
    summarize_strategy,
)
from options_analytics.payoff.templates import STRATEGY_TEMPLATES, build_strategy
from options_analytics.simulation.monte_carlo import simulate
from options_analytics.solvers.implied_vol import implied_volatility
from options_analytics.surface.price_surface import build_surface
from options_analytics.utils.exceptions import OptionsAnalyticsError
from options_analytics.utils.presets import DEFAULT_PARAMS, PRESETS, get_preset
from options_analytics.utils.types import PricingParams, SimulationRequest, StrategyLeg
from options_analytics.utils.validation import validate_market, validate_params


def market_options(func):
    """Shared spot/strike/time/rate/preset options."""
    options = [
        click.option("--preset", "-p", "preset_id", default=None, help="Start from a named preset"),
        click.option("--spot", "-S", type=float, default=None, help="Spot price"),
        click.option("--strike", "-K", type=float, default=None, help="Strike price"),
        click.option("--time", "-T", type=float, default=None, help="Time to expiry (years)"),
        click.option("--rate", "-r", type=float, default=None, help="Risk-free rate"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def vol_option(func):
    return click.option("--vol", "-v", type=float, default=None, help="Volatility (annualized)")(func)


def type_option(func):
    return click.option("--type", "-t", "option_type", type=click.Choice(["call", "put"]), default="call")(func)


def resolve_params(preset_id, spot, strike, time, rate, vol=None) -> PricingParams:
    """Overlay explicit options on a preset (or the defaults)."""
    base = get_preset(preset_id).params() if preset_id else DEFAULT_PARAMS
    overrides = {"S": spot, "K": strike, "T": time, "r": rate, "sigma": vol}
    return base.replace(**{k: v for k, v in overrides.items() if v is not None})


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-V", count=True, help="Increase log verbosity (-V info, -VV debug)")
def cli(verbose):
    """Options Analytics - Black-Scholes pricing, Greeks, IV, surfaces, payoffs, Monte Carlo."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


@cli.command()
@market_options
@vol_option
def price(preset_id, spot, strike, time, rate, vol):
    """Calculate call and put prices using Black-Scholes."""
    try:
        params = resolve_params(preset_id, spot, strike, time, rate, vol)
        validate_params(params)
    except OptionsAnalyticsError as e:
        raise click.ClickException(str(e))

    result = bs_price(params)
    click.echo(f"\nCall Option Price: ${result.call_price:.4f}")
    click.echo(f"Put Option Price:  ${result.put_price:.4f}")
    click.echo(f"d1: {result.d1:.6f}  d2: {result.d2:.6f}")


@cli.command()
@market_options
@vol_option
@type_option
def greeks(preset_id, spot, strike, time, rate, vol, option_type):
    """Calculate all option Greeks."""
    try:
        params = resolve_params(preset_id, spot, strike, time, rate, vol)
        validate_params(params)
    except OptionsAnalyticsError as e:
        raise click.ClickException(str(e))

    greeks_values = calculate_greeks(params, option_type)

    click.echo(f"\nGreeks for {option_type.capitalize()} Option:")
    click.echo(f"  Delta:  {greeks_values.delta:>10.6f}")
    click.echo(f"  Gamma:  {greeks_values.gamma:>10.6f}")
    click.echo(f"  Theta:  {greeks_values.theta:>10.6f} (per day)")
    click.echo(f"  Vega:   {greeks_values.vega:>10.6f} (per 1% vol)")
    click.echo(f"  Rho:    {greeks_values.rho:>10.6f} (per 1% rate)")


@cli.command()
@click.option("--market-price", "-m", type=float, required=True, help="Observed option price")
@market_options
@type_option
@click.option("--method", type=click.Choice(["newton", "brent"]), default="newton")
@click.option("--trace/--no-trace", default=False, help="Print every solver iteration")
def iv(market_price, preset_id, spot, strike, time, rate, option_type, method, trace):
    """Solve for implied volatility."""
    try:
        market = resolve_params(preset_id, spot, strike, time, rate).market
        validate_market(market)
    except OptionsAnalyticsError as e:
        raise click.ClickException(str(e))

    result = implied_volatility(market_price, market, option_type, method=method)

    if trace:
        click.echo(f"\n{'iter':>4}  {'sigma':>12}  {'model price':>12}  {'error':>12}")
        for i, step in enumerate(result.trace, start=1):
            click.echo(f"{i:>4}  {step.sigma:>12.8f}  {step.model_price:>12.6f}  {step.error:>12.2e}")

    if result.converged:
        click.echo(f"\nImplied Volatility: {result.implied_vol:.6f} ({result.implied_vol*100:.2f}%)")
        click.echo(f"Method: {result.method}")
        click.echo(f"Iterations: {result.iterations}")
    else:
        click.echo(f"\nSolver did not converge: {result.message}", err=True)
        violation = bounds_violation(market_price, market, option_type)
        if violation:
            click.echo(f"Arbitrage bounds: {violation}", err=True)


@cli.command()
@market_options
@vol_option
@type_option
@click.option("--s-points", type=int, default=9, help="Spot axis resolution")
@click.option("--t-points", type=int, default=6, help="Maturity axis resolution")
def surface(preset_id, spot, strike, time, rate, vol, option_type, s_points, t_points):
    """Print a price surface over spot (rows) and maturity (columns)."""
    try:
        params = resolve_params(preset_id, spot, strike, time, rate, vol)
        validate_params(params)
        grid = build_surface(params.K, params.r, params.sigma, option_type, s_points, t_points)
    except OptionsAnalyticsError as e:
        raise click.ClickException(str(e))

    click.echo(grid.to_frame().round(4).to_string())


@cli.command()
@market_options
@vol_option
@type_option
@click.option(
    "--strategy",
    type=click.Choice(sorted(STRATEGY_TEMPLATES)),
    default=None,
    help="Named multi-leg strategy built around the strike",
)
@click.option("--premium", type=float, default=None, help="Single-leg premium (defaults to BS price)")
@click.option("--points", type=int, default=13, help="Rows to print")
def payoff(preset_id, spot, strike, time, rate, vol, option_type, strategy, premium, points):
    """Show P&L at expiry for one option or a named strategy."""
    try:
        params = resolve_params(preset_id, spot, strike, time, rate, vol)
        validate_params(params)
    except OptionsAnalyticsError as e:
        raise click.ClickException(str(e))

    if strategy:
        legs = build_strategy(strategy, params)
        curve = strategy_payoff(legs, strategy_spot_grid(legs))
        click.echo(f"\nP&L at expiry: {strategy} ({len(legs)} legs)")
    else:
        if premium is None:
            premium = bs_price(params).price(option_type)
        legs = [StrategyLeg(option_type=option_type, direction="long", strike=params.K, premium=premium)]
        curve = single_leg_payoff(option_type, params.K, premium)
        click.echo(f"\nP&L at expiry: long {option_type}")

    for leg in legs:
        click.echo(
            f"  {leg.direction:<5} {leg.quantity} x {leg.option_type:<4} "
            f"K={leg.strike:>9.4f} premium={leg.premium:.4f}"
        )

    # Evenly spaced sample of the grid, endpoints included
    rows = np.unique(np.linspace(0, len(curve) - 1, max(points, 2)).round().astype(int))
    for i in rows:
        click.echo(f"  S={curve[i].spot:>10.4f}  P&L={curve[i].total:>+12.4f}")

    summary = summarize_strategy(legs, curve)
    click.echo(f"\nNet premium: {summary.net_premium:+.4f}")
    click.echo(f"Max profit:  {_format_extreme(summary.max_profit)}")
    click.echo(f"Max loss:    {_format_extreme(summary.max_loss)}")
    if summary.breakevens:
        estimates = ", ".join(f"${b.estimate:.2f}" for b in summary.breakevens)
        click.echo(f"Breakeven(s): {estimates}")
    else:
        click.echo("Breakeven(s): None")

    position = strategy_greeks(legs, params)
    click.echo(
        f"Position Greeks: delta={position.delta:.4f} gamma={position.gamma:.4f} "
        f"theta={position.theta:.4f} vega={position.vega:.4f}"
    )


@cli.command(name="simulate")
@market_options
@vol_option
@type_option
@click.option("--paths", "-N", type=int, default=10_000, help="Number of paths")
@click.option("--steps", type=int, default=100, help="Time steps per path")
@click.option("--seed", type=int, default=None, help="Random seed")
def simulate_command(preset_id, spot, strike, time, rate, vol, option_type, paths, steps, seed):
    """Estimate the option price by Monte Carlo."""
    try:
        params = resolve_params(preset_id, spot, strike, time, rate, vol)
        request = SimulationRequest(params, option_type, n_paths=paths, steps=steps, seed=seed)
        result = simulate(request)
    except OptionsAnalyticsError as e:
        raise click.ClickException(str(e))

    click.echo(f"\nMonte Carlo {option_type} price: {result.estimated_price:.4f}")
    click.echo(f"95% CI: [{result.confidence_low:.4f}, {result.confidence_high:.4f}]")
    click.echo(f"Standard error: {result.standard_error:.6f}")
    click.echo(f"Black-Scholes price: {result.reference_analytic_price:.4f}")


@cli.command()
def presets():
    """List the named parameter presets."""
    for preset in PRESETS:
        click.echo(
            f"{preset.id:<11} {preset.name:<28} S={preset.S:<7g} K={preset.K:<7g} "
            f"T={preset.T:<6g} r={preset.r:<6g} sigma={preset.sigma:g}"
        )


def _format_extreme(value: float) -> str:
    if math.isinf(value):
        return "unlimited"
    return f"{value:+.4f}"


if __name__ == "__main__":
    cli()
