"""Portfolio Fee Waterfall — unit-based портфель с многоступенчатыми fees

Переводит unit-based, скорректированные на success rate валовые поступления
в чистые поступления инвестора и делегирует годовую ставку Blended IRR.

Порядок (перестановки запрещены):
    0. Проценты проверяются на [0, 100]
    1. units_i = amount_i / unit_price_i (initial + каждый follow-on batch)
    2. total_units = Σ units_i
    3. successful_units = total_units × success_rate / 100
    4. gross = successful_units × outcome_per_unit
    5. after_top_line = gross × (1 - top_line_fee / 100)
    6. after_management = after_top_line × (1 - management_fee / 100)
    7. net = after_management × investor_share / 100
    8. rate = blended_irr(initial, net, horizon, batches как TagAlong buy)
"""

import logging
from datetime import date

from pydantic import BaseModel, Field

from src.core.domain.portfolio import PERCENTAGE_MAX, PERCENTAGE_MIN, PortfolioParameters
from src.core.errors import NonPositiveAmount, PercentageOutOfRange
from src.core.math.numerical_safeguards import is_valid_float
from src.core.math.returns import PERCENT, ensure_finite
from src.engine.blended_irr import blended_irr, validate_horizon
from src.engine.trajectory import GrowthTrajectory

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


class FeeWaterfall(BaseModel):
    """Промежуточные суммы fee waterfall."""

    units_per_batch: tuple[float, ...] = Field(
        ..., description="Единицы по batch: [initial, follow-on #0, ...]"
    )
    total_units: float
    successful_units: float
    gross_proceeds: float
    after_top_line: float
    after_management: float
    net_investor_proceeds: float

    model_config = {"frozen": True}


class PortfolioResult(BaseModel):
    """Результат портфельного расчёта."""

    waterfall: FeeWaterfall
    rate_percent: float = Field(..., description="Blended IRR (%)")
    total_invested: float = Field(..., description="Initial + Σ follow-on amounts")

    model_config = {"frozen": True}


# =============================================================================
# VALIDATION
# =============================================================================


def validate_percentages(params: PortfolioParameters) -> None:
    """
    Raises:
        PercentageOutOfRange: первое процентное поле вне [0, 100]
    """
    for field, value in params.percentage_fields().items():
        if not is_valid_float(value) or not PERCENTAGE_MIN <= value <= PERCENTAGE_MAX:
            raise PercentageOutOfRange(
                f"{field} must be within [{PERCENTAGE_MIN:g}, {PERCENTAGE_MAX:g}], got {value}",
                field=field,
            )


def _units(amount: float, unit_price: float, batch_index: int | None) -> float:
    if not is_valid_float(amount) or amount <= 0:
        raise NonPositiveAmount(
            f"amount must be positive, got {amount}",
            field="initial_investment" if batch_index is None else "amount",
            batch_index=batch_index,
        )
    if not is_valid_float(unit_price) or unit_price <= 0:
        raise NonPositiveAmount(
            f"unit_price must be positive, got {unit_price}",
            field="unit_price",
            batch_index=batch_index,
        )
    return amount / unit_price


# =============================================================================
# FEE WATERFALL
# =============================================================================


def apply_fee_waterfall(params: PortfolioParameters) -> FeeWaterfall:
    """
    Шаги 0-7: от единиц портфеля до чистых поступлений инвестора.

    Raises:
        PercentageOutOfRange: процентное поле вне [0, 100]
        NonPositiveAmount: сумма или цена единицы ≤ 0, outcome_per_unit < 0
        ResultOutOfRange: число единиц или gross proceeds переполняет float
    """
    validate_percentages(params)

    if not is_valid_float(params.outcome_per_unit) or params.outcome_per_unit < 0:
        raise NonPositiveAmount(
            f"outcome_per_unit must be non-negative, got {params.outcome_per_unit}",
            field="outcome_per_unit",
        )

    units_per_batch = [_units(params.initial_investment, params.unit_price, None)]
    for index, batch in enumerate(params.follow_on_batches):
        units_per_batch.append(_units(batch.amount, batch.unit_price, index))

    total_units = ensure_finite(sum(units_per_batch), field="total_units")
    successful_units = total_units * (params.success_rate_percent / PERCENT)
    gross_proceeds = ensure_finite(
        successful_units * params.outcome_per_unit, field="gross_proceeds"
    )
    after_top_line = gross_proceeds * (1.0 - params.top_line_fee_percent / PERCENT)
    after_management = after_top_line * (1.0 - params.management_fee_percent / PERCENT)
    net_investor_proceeds = after_management * (params.investor_share_percent / PERCENT)

    logger.debug(
        "Fee waterfall: units=%.6f successful=%.6f gross=%.2f top_line=%.2f "
        "management=%.2f net=%.2f",
        total_units,
        successful_units,
        gross_proceeds,
        after_top_line,
        after_management,
        net_investor_proceeds,
    )

    return FeeWaterfall(
        units_per_batch=tuple(units_per_batch),
        total_units=total_units,
        successful_units=successful_units,
        gross_proceeds=gross_proceeds,
        after_top_line=after_top_line,
        after_management=after_management,
        net_investor_proceeds=net_investor_proceeds,
    )


def portfolio_irr(
    params: PortfolioParameters, initial_date: date | None = None
) -> PortfolioResult:
    """
    Полный портфельный расчёт: fee waterfall + blended IRR.

    Args:
        params: Параметры портфеля
        initial_date: Дата основной инвестиции (обязательна при наличии batches)

    Returns:
        PortfolioResult

    Raises:
        ReturnsDomainError: любое нарушение domain (см. apply_fee_waterfall, blended_irr)
    """
    waterfall = apply_fee_waterfall(params)
    validate_horizon(params.horizon_years)

    follow_ons = [batch.as_follow_on() for batch in params.follow_on_batches]
    rate_percent = blended_irr(
        params.initial_investment,
        waterfall.net_investor_proceeds,
        params.horizon_years,
        follow_ons,
        initial_date,
    )

    return PortfolioResult(
        waterfall=waterfall,
        rate_percent=rate_percent,
        total_invested=params.initial_investment
        + sum(batch.amount for batch in params.follow_on_batches),
    )


def portfolio_growth_trajectory(
    params: PortfolioParameters,
    initial_date: date | None = None,
    rate_percent: float | None = None,
) -> GrowthTrajectory:
    """
    Траектория портфеля: initial и каждый batch растут по портфельной ставке.

    Args:
        params: Параметры портфеля
        initial_date: Дата основной инвестиции
        rate_percent: Уже вычисленная ставка (иначе считается portfolio_irr)
    """
    if rate_percent is None:
        rate_percent = portfolio_irr(params, initial_date).rate_percent

    return GrowthTrajectory.build(
        params.initial_investment,
        rate_percent,
        params.horizon_years,
        [batch.as_follow_on() for batch in params.follow_on_batches],
        initial_date,
    )
