"""
PortfolioParameters — Параметры unit-based портфельной инвестиции

Immutable Pydantic модели для Portfolio Fee-Waterfall Model.

Модель проверяет только типы и конечность чисел. Domain-диапазоны
(суммы > 0, проценты в [0, 100]) проверяет сам fee waterfall, чтобы
ошибки приходили в таксономии ReturnsDomainError с именем поля.
"""

from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel, Field

from src.core.domain.follow_on import FollowOnInvestment, InvestmentKind, TagAlongValuation
from src.core.domain.timing import Timing


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

PERCENTAGE_MIN: Final[float] = 0.0
PERCENTAGE_MAX: Final[float] = 100.0


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PortfolioDefaults:
    """Значения по умолчанию для формы портфельной инвестиции.

    - top-line fees (например, MDL committee): 0%
    - management fees (например, plaintiff counsel): 40%
    - investor share: 42.5%
    """
    top_line_fee_percent: float = 0.0
    management_fee_percent: float = 40.0
    investor_share_percent: float = 42.5


# =============================================================================
# MODELS
# =============================================================================


class PortfolioBatch(BaseModel):
    """
    Follow-on batch портфеля: сумма, цена единицы batch и timing.

    Цена единицы занимает слот valuation follow-on инвестиции; для
    time-weighting batch переводится в TagAlong buy на свою сумму.
    """

    amount: float = Field(..., allow_inf_nan=False, description="Сумма batch")
    unit_price: float = Field(..., allow_inf_nan=False, description="Цена единицы batch")
    timing: Timing = Field(..., description="Абсолютная дата или смещение")

    model_config = {"frozen": True}

    def as_follow_on(self) -> FollowOnInvestment:
        """Batch как денежная TagAlong buy-инвестиция."""
        return FollowOnInvestment(
            amount=self.amount,
            kind=InvestmentKind.BUY,
            timing=self.timing,
            valuation=TagAlongValuation(),
        )


class PortfolioParameters(BaseModel):
    """Параметры unit-based портфеля (лиды, патенты, иски и т.п.)."""

    initial_investment: float = Field(..., allow_inf_nan=False, description="Начальная сумма")
    unit_price: float = Field(..., allow_inf_nan=False, description="Цена единицы")
    success_rate_percent: float = Field(
        ..., allow_inf_nan=False, description="Доля успешных единиц (%)"
    )
    outcome_per_unit: float = Field(
        ..., allow_inf_nan=False, description="Outcome на успешную единицу"
    )
    top_line_fee_percent: float = Field(
        PortfolioDefaults.top_line_fee_percent,
        allow_inf_nan=False,
        description="Top-line fees (%)",
    )
    management_fee_percent: float = Field(
        PortfolioDefaults.management_fee_percent,
        allow_inf_nan=False,
        description="Management fees (%)",
    )
    investor_share_percent: float = Field(
        PortfolioDefaults.investor_share_percent,
        allow_inf_nan=False,
        description="Доля инвестора (%)",
    )
    horizon_years: float = Field(..., allow_inf_nan=False, description="Горизонт (годы)")
    follow_on_batches: tuple[PortfolioBatch, ...] = Field(
        default=(), description="Follow-on batches"
    )

    model_config = {"frozen": True}

    def percentage_fields(self) -> dict[str, float]:
        """Процентные поля в порядке проверки."""
        return {
            "success_rate_percent": self.success_rate_percent,
            "top_line_fee_percent": self.top_line_fee_percent,
            "management_fee_percent": self.management_fee_percent,
            "investor_share_percent": self.investor_share_percent,
        }
