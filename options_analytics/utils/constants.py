"""
Numerical constants, tolerances and default tunables for options analytics.

This module defines thresholds for edge case detection, solver convergence
criteria, grid defaults and simulation resource ceilings. The solver and
surface values are empirically chosen defaults; callers may override them
through keyword arguments.
"""

# Normal distribution bounds
MAX_STANDARD_DEVIATIONS = 8.0  # Beyond ±8σ, CDF is exactly 0 or 1

# Abramowitz & Stegun 7.1.26 coefficients (|error| <= 1.5e-7)
AS_A1 = 0.254829592
AS_A2 = -0.284496736
AS_A3 = 1.421413741
AS_A4 = -1.453152027
AS_A5 = 1.061405429
AS_P = 0.3275911

# Greek scalings
DAYS_PER_YEAR = 365.0  # Theta reported per calendar day
PERCENT_SCALE = 100.0  # Vega and rho reported per 1-point move

# Implied volatility solver parameters
IV_INITIAL_GUESS = 0.2  # Starting volatility for Newton-Raphson
IV_PRICE_TOLERANCE = 1e-8  # |model - observed| below this means converged
IV_MAX_ITERATIONS = 100
IV_MIN_VEGA = 1e-12  # Below this, the Newton step is undefined
IV_MIN_VOL = 0.001  # Updates at or below this halve the previous sigma
IV_MAX_VOL = 10.0  # 1000% cap; reaching it stops the solve

# Price surface grid
SURFACE_SPOT_RANGE = (0.5, 1.5)  # Multiples of strike
SURFACE_TIME_RANGE = (0.02, 3.0)  # Years
SURFACE_RESOLUTION = 25

# Payoff grids
PAYOFF_GRID_POINTS = 200
PAYOFF_SPOT_RANGE = (0.4, 1.6)  # Single-leg diagram, multiples of strike
STRATEGY_SPOT_RANGE = (0.6, 1.4)  # Multi-leg, multiples of min/max strike

# Monte Carlo
MC_DISPLAY_PATHS = 300  # Full trajectories retained for display
MC_CONFIDENCE_Z = 1.96  # 95% normal-approximation interval
MC_HISTOGRAM_BINS = 40
MAX_PATHS = 5_000_000
MAX_SIMULATION_WORK = 50_000_000  # Ceiling on paths * steps

# Arbitrage diagnostics tolerances
ARBITRAGE_TOLERANCE = 1e-4  # $0.0001 tolerance for bounds checks
PARITY_TOLERANCE = 1e-6  # Put-call parity tolerance

# Residual classification threshold for model-vs-market comparisons
RESIDUAL_THRESHOLD = 0.01
