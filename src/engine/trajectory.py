"""Growth Trajectory — помесячная траектория стоимости для charting

Восстанавливает стоимость позиции на каждый месяц 0..total_months:
    base(m) = initial × (1 + rate)^(m / 12)
    + TagAlong buy / любой buy_sell:  amount × (1 + rate)^((m - a) / 12)
    + Custom buy:                     valuation (без дальнейшего роста)
    - sell / sell-нога buy_sell:      valuation (без дальнейшего роста)
где a — месяц активации batch (a ≤ m).

Траектория конечна (total_months + 1 точек), отсортирована по month без
пропусков и restartable: каждая итерация пересчитывает точки заново.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterator, Sequence

from src.core.domain.follow_on import FollowOnInvestment, InvestmentKind
from src.core.domain.growth import GrowthPoint
from src.core.domain.timing import horizon_months
from src.core.errors import NonPositiveAmount
from src.core.math.numerical_safeguards import is_valid_float
from src.core.math.returns import MONTHS_PER_YEAR, ensure_finite, growth_base, safe_power
from src.engine.blended_irr import ResolvedFollowOn, blended_irr, resolve_follow_ons


@dataclass(frozen=True)
class GrowthTrajectory:
    """Restartable последовательность GrowthPoint.

    Создаётся через GrowthTrajectory.build (или growth_trajectory), которые
    проверяют входы и разрешают timing follow-on batches. Итерация бросает
    ResultOutOfRange, если стоимость переполняет float.
    """

    initial_investment: float
    rate_percent: float
    total_months: int
    follow_ons: tuple[ResolvedFollowOn, ...] = ()

    @classmethod
    def build(
        cls,
        initial_investment: float,
        rate_percent: float,
        horizon_years: float,
        follow_ons: Sequence[FollowOnInvestment] = (),
        initial_date: date | None = None,
        valuation_date: date | None = None,
    ) -> "GrowthTrajectory":
        """
        Траектория для заданной ставки.

        Raises:
            NonPositiveAmount: initial_investment ≤ 0
            NonPositiveHorizon: horizon_years ≤ 0
            NegativeBase: (1 + rate) < 0
            UnresolvableTiming: ошибки timing follow-on batch или
                horizon_years > HORIZON_YEARS_MAX
        """
        if not is_valid_float(initial_investment) or initial_investment <= 0:
            raise NonPositiveAmount(
                f"initial_investment must be positive, got {initial_investment}",
                field="initial_investment",
            )

        growth_base(rate_percent)
        resolved = resolve_follow_ons(follow_ons, horizon_years, initial_date, valuation_date)

        return cls(
            initial_investment=initial_investment,
            rate_percent=rate_percent,
            total_months=horizon_months(horizon_years),
            follow_ons=tuple(resolved),
        )

    def __len__(self) -> int:
        return self.total_months + 1

    def __iter__(self) -> Iterator[GrowthPoint]:
        base = growth_base(self.rate_percent)

        for month in range(self.total_months + 1):
            value = self.initial_investment * safe_power(
                base, month / MONTHS_PER_YEAR, field="growth_point"
            )

            for batch in self.follow_ons:
                if batch.activation_month > month:
                    continue

                investment = batch.investment
                elapsed = (month - batch.activation_month) / MONTHS_PER_YEAR

                if investment.kind == InvestmentKind.BUY_SELL or (
                    investment.kind == InvestmentKind.BUY and investment.is_tag_along
                ):
                    value += investment.amount * safe_power(base, elapsed, field="growth_point")
                elif investment.kind == InvestmentKind.BUY:
                    value += batch.valuation

                if investment.removes_value:
                    value -= batch.valuation

            yield GrowthPoint(month=month, value=ensure_finite(value, field="growth_point"))

    def points(self) -> list[GrowthPoint]:
        return list(self)

    def terminal_value(self) -> float:
        """Стоимость в последнем месяце горизонта."""
        return self.points()[-1].value


def growth_trajectory(
    initial_investment: float,
    final_valuation: float,
    horizon_years: float,
    follow_ons: Sequence[FollowOnInvestment] = (),
    initial_date: date | None = None,
    valuation_date: date | None = None,
) -> GrowthTrajectory:
    """
    Траектория по blended IRR полного расписания follow-on batches.

    Returns:
        GrowthTrajectory со ставкой blended_irr(...)
    """
    rate_percent = blended_irr(
        initial_investment,
        final_valuation,
        horizon_years,
        follow_ons,
        initial_date,
        valuation_date,
    )
    return GrowthTrajectory.build(
        initial_investment,
        rate_percent,
        horizon_years,
        follow_ons,
        initial_date,
        valuation_date,
    )


def simple_growth_points(
    initial_investment: float, rate_percent: float, horizon_years: float
) -> list[GrowthPoint]:
    """
    Траектория одной инвестиции без follow-on batches.

    Examples:
        >>> [p.value for p in simple_growth_points(100.0, 0.0, 0.25)]
        [100.0, 100.0, 100.0, 100.0]
    """
    return GrowthTrajectory.build(initial_investment, rate_percent, horizon_years).points()
