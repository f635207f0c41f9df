"""
Core math modules для IRR engine

Математические примитивы и замкнутые формулы доходности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf checks
    all_valid_floats,
    is_valid_float,
    # Rounding
    round_half_up,
    # Epsilon comparisons
    is_close,
)

# Rate Solver
from src.core.math.returns import (
    MONTHS_PER_YEAR,
    PERCENT,
    RATE_PERCENT_MAX,
    RATE_PERCENT_MIN,
    ensure_finite,
    fraction_to_percent,
    growth_base,
    percent_to_fraction,
    project_future_value,
    project_present_value,
    safe_power,
    solve_rate,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards: NaN/Inf checks
    "all_valid_floats",
    "is_valid_float",
    # Numerical Safeguards: Rounding
    "round_half_up",
    # Numerical Safeguards: Epsilon comparisons
    "is_close",
    # Rate Solver: Constants
    "MONTHS_PER_YEAR",
    "PERCENT",
    "RATE_PERCENT_MAX",
    "RATE_PERCENT_MIN",
    # Rate Solver: Functions
    "ensure_finite",
    "fraction_to_percent",
    "growth_base",
    "percent_to_fraction",
    "project_future_value",
    "project_present_value",
    "safe_power",
    "solve_rate",
]
