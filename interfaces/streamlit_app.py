"""
Streamlit web interface for options analytics.

Interactive UI with tabs for:
- Option pricing calculator and Greeks
- Greeks sensitivity across spot
- Implied volatility solver with iteration trace
- Price surface
- Strategy payoff builder
- Monte Carlo simulation
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from options_analytics.core.black_scholes import bs_price, calculate_greeks, delta, gamma
from options_analytics.payoff.strategy import (
    format_extreme,
    strategy_greeks,
    strategy_payoff,
    strategy_spot_grid,
    summarize_strategy,
)
from options_analytics.payoff.templates import STRATEGY_TEMPLATES, build_strategy
from options_analytics.simulation.monte_carlo import terminal_histogram
from options_analytics.simulation.runner import SimulationRunner
from options_analytics.solvers.implied_vol import implied_volatility
from options_analytics.surface.price_surface import build_surface
from options_analytics.utils.exceptions import OptionsAnalyticsError
from options_analytics.utils.presets import DEFAULT_PARAMS, PRESETS
from options_analytics.utils.types import PricingParams, SimulationRequest
from options_analytics.utils.validation import validate_params

st.set_page_config(page_title="Options Analytics", layout="wide")

st.title("Options Analytics")
st.markdown("Black-Scholes pricing, Greeks, implied volatility, payoffs and Monte Carlo")

# Sidebar parameters
st.sidebar.header("Option Parameters")
preset_names = ["Custom"] + [p.name for p in PRESETS]
preset_name = st.sidebar.selectbox("Preset", preset_names)
base = DEFAULT_PARAMS
for preset in PRESETS:
    if preset.name == preset_name:
        base = preset.params()

S = st.sidebar.number_input("Spot Price (S)", value=float(base.S), min_value=0.01)
K = st.sidebar.number_input("Strike Price (K)", value=float(base.K), min_value=0.01)
T = st.sidebar.slider("Time to Expiry (years)", 0.0, 5.0, float(base.T))
r = st.sidebar.slider("Risk-Free Rate (%)", 0.0, 30.0, float(base.r * 100)) / 100
sigma = st.sidebar.slider("Volatility (%)", 1.0, 200.0, float(base.sigma * 100)) / 100
option_type = st.sidebar.selectbox("Option Type", ["call", "put"])

params = PricingParams(S=S, K=K, T=T, r=r, sigma=sigma)
try:
    validate_params(params)
except OptionsAnalyticsError as e:
    st.error(f"Error: {e}")
    st.stop()

tabs = st.tabs(
    [
        "Pricing & Greeks",
        "Greeks Sensitivity",
        "Implied Volatility",
        "Price Surface",
        "Strategy Builder",
        "Monte Carlo",
    ]
)

with tabs[0]:
    st.header("Option Valuation")

    result = bs_price(params)
    price = result.price(option_type)

    col1, col2 = st.columns(2)
    with col1:
        st.metric(label="Call Price", value=f"${result.call_price:.4f}")
        st.metric(label="Put Price", value=f"${result.put_price:.4f}")
        st.caption(f"d1 = {result.d1:.6f}, d2 = {result.d2:.6f}")

    with col2:
        greeks_vals = calculate_greeks(params, option_type)
        st.subheader(f"Greeks ({option_type})")
        greeks_df = pd.DataFrame({
            "Greek": ["Delta", "Gamma", "Theta", "Vega", "Rho"],
            "Value": [
                f"{greeks_vals.delta:.6f}",
                f"{greeks_vals.gamma:.6f}",
                f"{greeks_vals.theta:.6f}",
                f"{greeks_vals.vega:.6f}",
                f"{greeks_vals.rho:.6f}",
            ],
            "Description": [
                "Price change per $1 spot move",
                "Delta change per $1 spot move",
                "Price change per day",
                "Price change per 1% vol move",
                "Price change per 1% rate move",
            ],
        })
        st.table(greeks_df)

with tabs[1]:
    st.header("Greeks Sensitivity Analysis")

    spot_range = np.linspace(S * 0.7, S * 1.3, 50)
    delta_values = [delta(params.replace(S=float(s)), option_type) for s in spot_range]
    gamma_values = [gamma(params.replace(S=float(s))) for s in spot_range]

    fig_delta = go.Figure()
    fig_delta.add_trace(go.Scatter(x=spot_range, y=delta_values, name="Delta"))
    fig_delta.update_layout(title="Delta vs Spot Price", xaxis_title="Spot Price", yaxis_title="Delta")
    st.plotly_chart(fig_delta, use_container_width=True)

    fig_gamma = go.Figure()
    fig_gamma.add_trace(go.Scatter(x=spot_range, y=gamma_values, name="Gamma", line=dict(color="orange")))
    fig_gamma.update_layout(title="Gamma vs Spot Price", xaxis_title="Spot Price", yaxis_title="Gamma")
    st.plotly_chart(fig_gamma, use_container_width=True)

with tabs[2]:
    st.header("Implied Volatility Solver")

    market_price = st.number_input("Market Price", value=float(price), min_value=0.0, format="%.4f")
    method = st.radio("Method", ["newton", "brent"], horizontal=True)

    if st.button("Solve for Implied Volatility"):
        iv_result = implied_volatility(market_price, params.market, option_type, method=method)

        if iv_result.converged:
            st.success(f"Implied Volatility: {iv_result.implied_vol:.4f} ({iv_result.implied_vol*100:.2f}%)")
        else:
            st.error(f"Solver did not converge: {iv_result.message}")
        st.info(f"Method: {iv_result.method} | Iterations: {iv_result.iterations}")

        trace_df = pd.DataFrame(
            [(s.sigma, s.model_price, s.error) for s in iv_result.trace],
            columns=["sigma", "model price", "error"],
        )
        trace_df.index = trace_df.index + 1
        st.dataframe(trace_df)

        fig_trace = go.Figure()
        fig_trace.add_trace(go.Scatter(x=trace_df.index, y=trace_df["sigma"], mode="lines+markers"))
        fig_trace.update_layout(title="Sigma per Iteration", xaxis_title="Iteration", yaxis_title="Sigma")
        st.plotly_chart(fig_trace, use_container_width=True)

with tabs[3]:
    st.header("Price Surface")

    resolution = st.slider("Grid resolution", 5, 50, 25)
    grid = build_surface(K, r, sigma, option_type, resolution, resolution)

    fig_surface = go.Figure(data=[go.Surface(x=grid.t_axis, y=grid.s_axis, z=grid.matrix)])
    fig_surface.update_layout(
        title=f"{option_type.capitalize()} Price over Spot and Maturity",
        scene=dict(xaxis_title="Maturity (years)", yaxis_title="Spot", zaxis_title="Price"),
        height=600,
    )
    st.plotly_chart(fig_surface, use_container_width=True)

with tabs[4]:
    st.header("Strategy Builder")

    template = st.selectbox(
        "Strategy",
        list(STRATEGY_TEMPLATES),
        format_func=lambda name: f"{name}: {STRATEGY_TEMPLATES[name][0]}",
    )
    legs = build_strategy(template, params)
    st.table(pd.DataFrame([
        {
            "Type": leg.option_type,
            "Position": leg.direction,
            "Strike": round(leg.strike, 4),
            "Premium": round(leg.premium, 4),
            "Qty": leg.quantity,
        }
        for leg in legs
    ]))

    curve = strategy_payoff(legs, strategy_spot_grid(legs))
    summary = summarize_strategy(legs, curve)
    position = strategy_greeks(legs, params)

    cols = st.columns(4)
    cols[0].metric("Net Premium", f"${summary.net_premium:.4f}")
    cols[1].metric("Max Profit", format_extreme(summary.max_profit))
    cols[2].metric("Max Loss", format_extreme(summary.max_loss))
    cols[3].metric(
        "Breakeven(s)",
        ", ".join(f"${b.estimate:.1f}" for b in summary.breakevens) or "None",
    )
    st.caption(f"Position delta {position.delta:.4f} | gamma {position.gamma:.4f} | vega {position.vega:.4f}")

    fig_payoff = go.Figure()
    fig_payoff.add_trace(go.Scatter(
        x=[p.spot for p in curve], y=[p.profit for p in curve],
        fill="tozeroy", name="Profit", line=dict(color="green"),
    ))
    fig_payoff.add_trace(go.Scatter(
        x=[p.spot for p in curve], y=[p.loss for p in curve],
        fill="tozeroy", name="Loss", line=dict(color="red"),
    ))
    for b in summary.breakevens:
        fig_payoff.add_vline(x=b.estimate, line_dash="dash", line_color="orange")
    fig_payoff.update_layout(title="P&L at Expiration", xaxis_title="Spot at Expiry", yaxis_title="P&L")
    st.plotly_chart(fig_payoff, use_container_width=True)

with tabs[5]:
    st.header("Monte Carlo Simulation")

    if "mc_runner" not in st.session_state:
        st.session_state.mc_runner = SimulationRunner(policy="latest")

    n_paths = st.select_slider("Paths (N)", options=[100, 500, 1000, 5000, 10000, 50000], value=1000)
    steps = st.slider("Steps per path", 10, 250, 100)

    if st.button("Run Simulation"):
        request = SimulationRequest(params, option_type, n_paths=n_paths, steps=steps)
        with st.spinner("Simulating..."):
            try:
                mc = st.session_state.mc_runner.submit(request).result()
            except OptionsAnalyticsError as e:
                st.error(f"Error: {e}")
                st.stop()

        cols = st.columns(3)
        cols[0].metric("MC Price", f"${mc.estimated_price:.4f}")
        cols[1].metric("95% CI", f"[{mc.confidence_low:.4f}, {mc.confidence_high:.4f}]")
        cols[2].metric("BS Price", f"${mc.reference_analytic_price:.4f}")

        times = np.linspace(0.0, T, mc.sampled_paths.shape[1])
        fig_paths = go.Figure()
        for path in mc.sampled_paths[:100]:
            fig_paths.add_trace(go.Scatter(x=times, y=path, mode="lines", line=dict(width=1), showlegend=False))
        fig_paths.add_hline(y=K, line_dash="dash", line_color="orange")
        fig_paths.update_layout(title="Sample Paths", xaxis_title="Time (years)", yaxis_title="Spot")
        st.plotly_chart(fig_paths, use_container_width=True)

        bins = terminal_histogram(mc, K, option_type)
        fig_hist = go.Figure(go.Bar(
            x=[b.center for b in bins],
            y=[b.count for b in bins],
            marker_color=["green" if b.in_the_money else "gray" for b in bins],
        ))
        fig_hist.update_layout(title="Terminal Price Distribution", xaxis_title="S_T", yaxis_title="Paths")
        st.plotly_chart(fig_hist, use_container_width=True)
