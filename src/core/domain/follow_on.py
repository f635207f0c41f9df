"""
FollowOnInvestment — Модель follow-on инвестиции

Immutable Pydantic модель дополнительного денежного события (buy / sell /
buy-sell) после основной инвестиции. Создаётся вызывающим кодом из
провалидированного ввода и никогда не изменяется engine.

Valuation policy:
- TagAlong: batch растёт по той же ставке, что и основная инвестиция;
  его valuation — сумма batch по номиналу
- Custom/Specified: valuation задана явно
- Custom/Computed: valuation = amount × (1 + rate)^(месяцы от valuation date / 12)
"""

from datetime import date
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from src.core.domain.timing import Timing, months_between
from src.core.math.returns import (
    MONTHS_PER_YEAR,
    RATE_PERCENT_MAX,
    RATE_PERCENT_MIN,
    ensure_finite,
    growth_base,
    safe_power,
)


# =============================================================================
# ENUMS
# =============================================================================


class InvestmentKind(str, Enum):
    """Тип follow-on события"""

    BUY = "buy"
    SELL = "sell"
    BUY_SELL = "buy_sell"


# =============================================================================
# VALUATION POLICY
# =============================================================================


class ComputedValuation(BaseModel):
    """Valuation, вычисленная по собственной ставке batch."""

    method: Literal["computed"] = "computed"
    rate_percent: float = Field(
        ...,
        gt=RATE_PERCENT_MIN,
        lt=RATE_PERCENT_MAX,
        allow_inf_nan=False,
        description="Ставка для вычисления valuation (%)",
    )

    model_config = {"frozen": True}


class SpecifiedValuation(BaseModel):
    """Valuation, заданная пользователем явно."""

    method: Literal["specified"] = "specified"
    value: float = Field(..., gt=0, allow_inf_nan=False, description="Valuation (валюта)")

    model_config = {"frozen": True}


class TagAlongValuation(BaseModel):
    """Batch следует траектории основной инвестиции."""

    policy: Literal["tag_along"] = "tag_along"

    model_config = {"frozen": True}


class CustomValuation(BaseModel):
    """Batch с независимой valuation."""

    policy: Literal["custom"] = "custom"
    method: Annotated[
        Union[ComputedValuation, SpecifiedValuation], Field(discriminator="method")
    ]

    model_config = {"frozen": True}


ValuationPolicy = Annotated[
    Union[TagAlongValuation, CustomValuation], Field(discriminator="policy")
]


# =============================================================================
# FOLLOW-ON INVESTMENT MODEL
# =============================================================================


class FollowOnInvestment(BaseModel):
    """
    Модель follow-on инвестиции.

    Immutable модель (frozen=True): engine сортирует и разрешает timing,
    но никогда не изменяет сам объект.
    """

    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Сумма инвестиции")
    kind: InvestmentKind = Field(InvestmentKind.BUY, description="buy / sell / buy_sell")
    timing: Timing = Field(..., description="Абсолютная дата или смещение")
    valuation: ValuationPolicy = Field(
        default_factory=TagAlongValuation, description="Valuation policy"
    )

    model_config = {"frozen": True}

    @property
    def is_tag_along(self) -> bool:
        return isinstance(self.valuation, TagAlongValuation)

    @property
    def adds_capital(self) -> bool:
        """Buy-нога: batch увеличивает вложенный капитал."""
        return self.kind in (InvestmentKind.BUY, InvestmentKind.BUY_SELL)

    @property
    def removes_value(self) -> bool:
        """Sell-нога: batch уменьшает итоговую стоимость."""
        return self.kind in (InvestmentKind.SELL, InvestmentKind.BUY_SELL)

    def resolve_date(self, initial_date: date) -> date:
        return self.timing.resolve(initial_date)

    def valuation_amount(self, investment_date: date, valuation_date: date) -> float:
        """
        Valuation batch (валюта).

        Args:
            investment_date: Разрешённая дата batch
            valuation_date: Reference date для Computed valuation

        Returns:
            TagAlong → amount; Specified → value;
            Computed → amount × (1 + rate)^(months_between(valuation_date, investment_date) / 12)

        Raises:
            NegativeBase: если (1 + rate) < 0 (возможно только в обход валидации модели)
            ResultOutOfRange: если valuation переполняет float
        """
        if isinstance(self.valuation, TagAlongValuation):
            return self.amount

        method = self.valuation.method
        if isinstance(method, SpecifiedValuation):
            return method.value

        years = months_between(valuation_date, investment_date) / MONTHS_PER_YEAR
        base = growth_base(method.rate_percent, field="valuation")
        value = self.amount * safe_power(base, years, field="valuation")
        return ensure_finite(value, field="valuation")
