"""Calculator — единая точка входа по режимам расчёта

Режимы:
- CALCULATE_IRR: ставка по initial / outcome / горизонту
- CALCULATE_OUTCOME: будущая стоимость по initial / ставке / горизонту
- CALCULATE_INITIAL: приведённая стоимость по outcome / ставке / горизонту
- CALCULATE_BLENDED: blended IRR с follow-on инвестициями
- PORTFOLIO_UNIT_INVESTMENT: fee waterfall + blended IRR

Каждая функция возвращает CalculationResult (скаляр + траектория),
готовый для persistence и charting. Ошибки domain логируются и
пробрасываются вызывающему коду без изменений.
"""

import logging
from datetime import date
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field

from src.core.domain.follow_on import FollowOnInvestment
from src.core.domain.growth import GrowthPoint
from src.core.domain.portfolio import PortfolioParameters
from src.core.errors import ReturnsDomainError
from src.core.math.returns import project_future_value, project_present_value, solve_rate
from src.engine.blended_irr import blended_irr
from src.engine.fee_waterfall import FeeWaterfall, portfolio_growth_trajectory, portfolio_irr
from src.engine.trajectory import GrowthTrajectory, simple_growth_points

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class CalculationMode(str, Enum):
    """Режим расчёта"""

    CALCULATE_IRR = "calculate_irr"
    CALCULATE_OUTCOME = "calculate_outcome"
    CALCULATE_INITIAL = "calculate_initial"
    CALCULATE_BLENDED = "calculate_blended"
    PORTFOLIO_UNIT_INVESTMENT = "portfolio_unit_investment"


# =============================================================================
# RESULT
# =============================================================================


class CalculationResult(BaseModel):
    """
    Результат расчёта для persistence / charting / export.

    result — ставка в процентах (IRR-режимы) или сумма (outcome / initial).
    """

    mode: CalculationMode
    result: float = Field(..., allow_inf_nan=False)
    growth_points: tuple[GrowthPoint, ...] = Field(default=())
    waterfall: FeeWaterfall | None = None

    model_config = {"frozen": True}


def _aborted(mode: CalculationMode, error: ReturnsDomainError) -> None:
    logger.warning(
        "%s aborted: %s (field=%s, batch_index=%s)",
        mode.value,
        error,
        error.field,
        error.batch_index,
    )


# =============================================================================
# MODES
# =============================================================================


def calculate_irr(initial: float, outcome: float, horizon_years: float) -> CalculationResult:
    mode = CalculationMode.CALCULATE_IRR
    try:
        rate_percent = solve_rate(initial, outcome, horizon_years)
        points = simple_growth_points(initial, rate_percent, horizon_years)
    except ReturnsDomainError as e:
        _aborted(mode, e)
        raise
    return CalculationResult(mode=mode, result=rate_percent, growth_points=tuple(points))


def calculate_outcome(
    initial: float, rate_percent: float, horizon_years: float
) -> CalculationResult:
    mode = CalculationMode.CALCULATE_OUTCOME
    try:
        outcome = project_future_value(initial, rate_percent, horizon_years)
        points = simple_growth_points(initial, rate_percent, horizon_years)
    except ReturnsDomainError as e:
        _aborted(mode, e)
        raise
    return CalculationResult(mode=mode, result=outcome, growth_points=tuple(points))


def calculate_initial(
    outcome: float, rate_percent: float, horizon_years: float
) -> CalculationResult:
    """Приведённая стоимость; траектория растёт от неё до outcome."""
    mode = CalculationMode.CALCULATE_INITIAL
    try:
        initial = project_present_value(outcome, rate_percent, horizon_years)
        points = simple_growth_points(initial, rate_percent, horizon_years)
    except ReturnsDomainError as e:
        _aborted(mode, e)
        raise
    return CalculationResult(mode=mode, result=initial, growth_points=tuple(points))


def calculate_blended(
    initial: float,
    final_valuation: float,
    horizon_years: float,
    follow_ons: Sequence[FollowOnInvestment] = (),
    initial_date: date | None = None,
    valuation_date: date | None = None,
) -> CalculationResult:
    """Blended IRR; траектория по blended ставке с учётом всех batches."""
    mode = CalculationMode.CALCULATE_BLENDED
    try:
        rate_percent = blended_irr(
            initial, final_valuation, horizon_years, follow_ons, initial_date, valuation_date
        )
        trajectory = GrowthTrajectory.build(
            initial, rate_percent, horizon_years, follow_ons, initial_date, valuation_date
        )
        points = trajectory.points()
    except ReturnsDomainError as e:
        _aborted(mode, e)
        raise
    return CalculationResult(mode=mode, result=rate_percent, growth_points=tuple(points))


def calculate_portfolio(
    params: PortfolioParameters, initial_date: date | None = None
) -> CalculationResult:
    """Портфельный расчёт; результат включает разбивку fee waterfall."""
    mode = CalculationMode.PORTFOLIO_UNIT_INVESTMENT
    try:
        portfolio = portfolio_irr(params, initial_date)
        trajectory = portfolio_growth_trajectory(
            params, initial_date, rate_percent=portfolio.rate_percent
        )
        points = trajectory.points()
    except ReturnsDomainError as e:
        _aborted(mode, e)
        raise
    return CalculationResult(
        mode=mode,
        result=portfolio.rate_percent,
        growth_points=tuple(points),
        waterfall=portfolio.waterfall,
    )
