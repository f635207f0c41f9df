"""Engine — расчёт доходности поверх core.

- Blended IRR с follow-on инвестициями
- Growth trajectory для charting
- Portfolio fee waterfall
- Calculator: единая точка входа по режимам
"""

from .blended_irr import HORIZON_YEARS_MAX, BlendedIRRMetrics, blended_irr, blended_irr_metrics
from .calculator import (
    CalculationMode,
    CalculationResult,
    calculate_blended,
    calculate_initial,
    calculate_irr,
    calculate_outcome,
    calculate_portfolio,
)
from .fee_waterfall import (
    FeeWaterfall,
    PortfolioResult,
    apply_fee_waterfall,
    portfolio_growth_trajectory,
    portfolio_irr,
)
from .trajectory import GrowthTrajectory, growth_trajectory, simple_growth_points

__all__ = [
    "HORIZON_YEARS_MAX",
    "BlendedIRRMetrics",
    "blended_irr",
    "blended_irr_metrics",
    "GrowthTrajectory",
    "growth_trajectory",
    "simple_growth_points",
    "FeeWaterfall",
    "PortfolioResult",
    "apply_fee_waterfall",
    "portfolio_irr",
    "portfolio_growth_trajectory",
    "CalculationMode",
    "CalculationResult",
    "calculate_irr",
    "calculate_outcome",
    "calculate_initial",
    "calculate_blended",
    "calculate_portfolio",
]
