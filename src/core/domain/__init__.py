"""
Domain models and value objects.

Contains fundamental domain entities like FollowOnInvestment, GrowthPoint,
PortfolioParameters and the calendar arithmetic they rely on.
"""

from src.core.domain.follow_on import (
    ComputedValuation,
    CustomValuation,
    FollowOnInvestment,
    InvestmentKind,
    SpecifiedValuation,
    TagAlongValuation,
)
from src.core.domain.growth import (
    GrowthPoint,
    growth_points_from_json,
    growth_points_to_json,
)
from src.core.domain.portfolio import (
    PERCENTAGE_MAX,
    PERCENTAGE_MIN,
    PortfolioBatch,
    PortfolioDefaults,
    PortfolioParameters,
)
from src.core.domain.timing import (
    AbsoluteTiming,
    RelativeTiming,
    TimeUnit,
    add_months,
    horizon_months,
    months_between,
)

__all__ = [
    # Timing
    "AbsoluteTiming",
    "RelativeTiming",
    "TimeUnit",
    "add_months",
    "horizon_months",
    "months_between",
    # Follow-on model
    "FollowOnInvestment",
    "InvestmentKind",
    "TagAlongValuation",
    "CustomValuation",
    "ComputedValuation",
    "SpecifiedValuation",
    # Growth point model
    "GrowthPoint",
    "growth_points_to_json",
    "growth_points_from_json",
    # Portfolio model
    "PERCENTAGE_MIN",
    "PERCENTAGE_MAX",
    "PortfolioBatch",
    "PortfolioDefaults",
    "PortfolioParameters",
]
