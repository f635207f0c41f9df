"""Blended IRR — time-weighted IRR с follow-on инвестициями

Агрегирует основную инвестицию и follow-on batches в одну годовую ставку:
- Follow-on batches сортируются по разрешённой дате (stable)
- Вложенный капитал взвешивается по времени до горизонта
- Custom buy добавляют свою valuation к итоговой стоимости
- Sell-ноги вычитают свою valuation из итоговой стоимости

ВАЖНО: это приближение (time-weighted average capital), а не XIRR.
Никакого итеративного поиска корня по нерегулярным денежным потокам.

ФОРМУЛЫ:
    horizon_date = initial_date + round_half_up(horizon_years × 12) месяцев
    years_remaining_i = months_between(date_i, horizon_date) / 12
    time_weighted_invested = initial × horizon_years + Σ amount_i × years_remaining_i  (buy-ноги)
    aggregate_terminal = final_valuation + Σ valuation_i (custom buy) - Σ valuation_i (sell-ноги)
    rate = solve_rate(time_weighted_invested / horizon_years, aggregate_terminal, horizon_years)

Без follow-on batches результат в точности равен
solve_rate(initial, final_valuation, horizon_years).
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Final, NamedTuple, Sequence

from src.core.domain.follow_on import FollowOnInvestment, InvestmentKind
from src.core.domain.timing import add_months, horizon_months, months_between
from src.core.errors import (
    NonPositiveAmount,
    NonPositiveHorizon,
    ReturnsDomainError,
    UnresolvableTiming,
)
from src.core.math.numerical_safeguards import is_valid_float
from src.core.math.returns import MONTHS_PER_YEAR, solve_rate

logger = logging.getLogger(__name__)

# Максимальный горизонт: траектория ограничена HORIZON_YEARS_MAX × 12 + 1 точками
HORIZON_YEARS_MAX: Final[float] = 1000.0


# =============================================================================
# RESOLVED FOLLOW-ON
# =============================================================================


@dataclass(frozen=True)
class ResolvedFollowOn:
    """Follow-on batch с разрешённым timing и valuation."""

    index: int  # Позиция во входной последовательности (для сообщений об ошибках)
    investment: FollowOnInvestment
    investment_date: date
    activation_month: int  # Месяцев от initial_date
    years_remaining: float  # Лет до horizon_date
    valuation: float


def validate_horizon(horizon_years: float) -> None:
    """
    Raises:
        NonPositiveHorizon: если horizon_years ≤ 0 или NaN/Inf
        UnresolvableTiming: если horizon_years > HORIZON_YEARS_MAX
    """
    if not is_valid_float(horizon_years) or horizon_years <= 0:
        raise NonPositiveHorizon(
            f"horizon_years must be positive, got {horizon_years}", field="horizon_years"
        )

    if horizon_years > HORIZON_YEARS_MAX:
        raise UnresolvableTiming(
            f"horizon_years must not exceed {HORIZON_YEARS_MAX:g}, got {horizon_years}",
            field="horizon_years",
        )


def resolve_follow_ons(
    follow_ons: Sequence[FollowOnInvestment],
    horizon_years: float,
    initial_date: date | None,
    valuation_date: date | None = None,
) -> list[ResolvedFollowOn]:
    """
    Разрешение timing и valuation всех follow-on batches.

    Args:
        follow_ons: Follow-on инвестиции в порядке ввода
        horizon_years: Горизонт основной инвестиции (> 0)
        initial_date: Дата основной инвестиции (обязательна при наличии batches)
        valuation_date: Reference date для Computed valuation (default: initial_date)

    Returns:
        Batches, отсортированные по дате инвестиции (stable)

    Raises:
        UnresolvableTiming: нет initial_date, дата раньше initial_date
            или позже horizon_date
        NonPositiveAmount: сумма batch ≤ 0
        NegativeBase: Computed valuation с (1 + rate) < 0
    """
    validate_horizon(horizon_years)

    if not follow_ons:
        return []

    if initial_date is None:
        raise UnresolvableTiming(
            "follow-on investments require the initial investment date",
            field="initial_date",
        )

    total_months = horizon_months(horizon_years)
    try:
        horizon_date = add_months(initial_date, total_months)
    except ValueError as e:
        raise UnresolvableTiming(
            f"horizon of {total_months} months from {initial_date.isoformat()} "
            f"is outside the calendar",
            field="horizon_years",
        ) from e

    reference_date = valuation_date if valuation_date is not None else initial_date

    resolved: list[ResolvedFollowOn] = []
    for index, investment in enumerate(follow_ons):
        try:
            if not is_valid_float(investment.amount) or investment.amount <= 0:
                raise NonPositiveAmount(
                    f"amount must be positive, got {investment.amount}", field="amount"
                )

            investment_date = investment.resolve_date(initial_date)
            if investment_date < initial_date:
                raise UnresolvableTiming(
                    f"date {investment_date.isoformat()} precedes the initial "
                    f"investment date {initial_date.isoformat()}",
                    field="timing",
                )
            if investment_date > horizon_date:
                raise UnresolvableTiming(
                    f"date {investment_date.isoformat()} falls after the horizon "
                    f"date {horizon_date.isoformat()}",
                    field="timing",
                )

            valuation = investment.valuation_amount(investment_date, reference_date)
        except ReturnsDomainError as e:
            raise e.with_batch(index) from e

        resolved.append(
            ResolvedFollowOn(
                index=index,
                investment=investment,
                investment_date=investment_date,
                activation_month=months_between(initial_date, investment_date),
                years_remaining=months_between(investment_date, horizon_date) / MONTHS_PER_YEAR,
                valuation=valuation,
            )
        )

    resolved.sort(key=lambda r: r.investment_date)

    logger.debug(
        "Resolved %d follow-on batches against %s (horizon %s)",
        len(resolved),
        initial_date.isoformat(),
        horizon_date.isoformat(),
    )
    return resolved


# =============================================================================
# BLENDED IRR
# =============================================================================


class BlendedIRRMetrics(NamedTuple):
    """Промежуточные величины blended IRR (для аудита и тестов)."""

    time_weighted_invested: float  # initial × horizon + Σ amount × years_remaining
    average_invested_capital: float  # time_weighted_invested / horizon
    aggregate_terminal_value: float  # final_valuation ± valuations
    rate_percent: float  # Blended IRR (%)
    follow_on_count: int


def blended_irr_metrics(
    initial_investment: float,
    final_valuation: float,
    horizon_years: float,
    follow_ons: Sequence[FollowOnInvestment] = (),
    initial_date: date | None = None,
    valuation_date: date | None = None,
) -> BlendedIRRMetrics:
    """
    Вычисление blended IRR с промежуточными величинами.

    Args:
        initial_investment: Основная инвестиция (> 0)
        final_valuation: Итоговая стоимость основной позиции (≥ 0)
        horizon_years: Горизонт в годах (> 0)
        follow_ons: Follow-on инвестиции
        initial_date: Дата основной инвестиции
        valuation_date: Reference date для Computed valuation

    Returns:
        BlendedIRRMetrics

    Raises:
        NonPositiveAmount: initial ≤ 0, final_valuation < 0 или итоговая
            стоимость после sell-ног ≤ 0
        NonPositiveHorizon: horizon_years ≤ 0
        UnresolvableTiming: horizon_years > HORIZON_YEARS_MAX
        ResultOutOfRange: ставка или valuation переполняет float
        UnresolvableTiming, NegativeBase: ошибки follow-on batch (с batch_index)
    """
    if not is_valid_float(initial_investment) or initial_investment <= 0:
        raise NonPositiveAmount(
            f"initial_investment must be positive, got {initial_investment}",
            field="initial_investment",
        )

    if not is_valid_float(final_valuation) or final_valuation < 0:
        raise NonPositiveAmount(
            f"final_valuation must be non-negative, got {final_valuation}",
            field="final_valuation",
        )

    resolved = resolve_follow_ons(follow_ons, horizon_years, initial_date, valuation_date)

    # Follow-on вклад держим отдельно от principal: при пустом списке
    # average_capital == initial_investment бит в бит
    follow_on_weighted = 0.0
    aggregate_terminal = final_valuation

    for batch in resolved:
        investment = batch.investment

        if investment.adds_capital:
            follow_on_weighted += investment.amount * batch.years_remaining

        if investment.kind == InvestmentKind.BUY and not investment.is_tag_along:
            aggregate_terminal += batch.valuation

        if investment.removes_value:
            aggregate_terminal -= batch.valuation

    average_capital = initial_investment + follow_on_weighted / horizon_years

    if aggregate_terminal <= 0:
        raise NonPositiveAmount(
            f"aggregate terminal value must be positive after follow-on "
            f"adjustments, got {aggregate_terminal}",
            field="aggregate_terminal_value",
        )

    rate_percent = solve_rate(average_capital, aggregate_terminal, horizon_years)

    logger.debug(
        "Blended IRR: capital=%.6f terminal=%.6f horizon=%.4f batches=%d -> %.6f%%",
        average_capital,
        aggregate_terminal,
        horizon_years,
        len(resolved),
        rate_percent,
    )

    return BlendedIRRMetrics(
        time_weighted_invested=initial_investment * horizon_years + follow_on_weighted,
        average_invested_capital=average_capital,
        aggregate_terminal_value=aggregate_terminal,
        rate_percent=rate_percent,
        follow_on_count=len(resolved),
    )


def blended_irr(
    initial_investment: float,
    final_valuation: float,
    horizon_years: float,
    follow_ons: Sequence[FollowOnInvestment] = (),
    initial_date: date | None = None,
    valuation_date: date | None = None,
) -> float:
    """
    Blended (time-weighted) IRR в процентах.

    Examples:
        >>> blended_irr(100.0, 150.0, 2.0) == solve_rate(100.0, 150.0, 2.0)
        True
    """
    return blended_irr_metrics(
        initial_investment,
        final_valuation,
        horizon_years,
        follow_ons,
        initial_date,
        valuation_date,
    ).rate_percent
