"""
Timing — Календарная арифметика и timing follow-on инвестиций

Единственный допустимый способ:
- сдвигать дату на N календарных месяцев (add_months)
- считать полные календарные месяцы между датами (months_between)
- переводить горизонт в годах в месяцы (horizon_months)
- разрешать AbsoluteTiming / RelativeTiming в конкретную дату

Никаких обращений к wall clock: reference date всегда передаётся явно.
"""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from src.core.errors import UnresolvableTiming
from src.core.math.numerical_safeguards import is_valid_float, round_half_up
from src.core.math.returns import MONTHS_PER_YEAR


# =============================================================================
# ENUMS
# =============================================================================


class TimeUnit(str, Enum):
    """Единица относительного смещения"""

    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"


# =============================================================================
# КАЛЕНДАРНАЯ АРИФМЕТИКА
# =============================================================================


def add_months(start: date, months: int) -> date:
    """
    Сдвиг даты на целое число календарных месяцев.

    День месяца ограничивается последним днём целевого месяца
    (31 января + 1 месяц → 28/29 февраля).

    Raises:
        ValueError: если результат вне диапазона datetime.date

    Examples:
        >>> add_months(date(2024, 1, 31), 1)
        datetime.date(2024, 2, 29)
        >>> add_months(date(2024, 3, 15), -3)
        datetime.date(2023, 12, 15)
    """
    years, month_index = divmod(start.month - 1 + months, MONTHS_PER_YEAR)
    year = start.year + years
    month = month_index + 1
    if not date.min.year <= year <= date.max.year:
        raise ValueError(f"year {year} is out of range")
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """
    Число полных календарных месяцев от start до end (со знаком).

    Согласовано с add_months: наибольшее n, при котором
    add_months(start, n) ≤ end (для end ≥ start), симметрично для end < start.

    Examples:
        >>> months_between(date(2024, 1, 15), date(2024, 3, 14))
        1
        >>> months_between(date(2024, 1, 31), date(2024, 2, 29))
        1
        >>> months_between(date(2024, 3, 15), date(2024, 1, 15))
        -2
    """
    months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
    if months > 0 and add_months(start, months) > end:
        months -= 1
    elif months < 0 and add_months(start, months) < end:
        months += 1
    return months


def horizon_months(years: float) -> int:
    """
    Горизонт в годах → целое число месяцев (half-up).

    Examples:
        >>> horizon_months(5.0)
        60
        >>> horizon_months(2.5)
        30
        >>> horizon_months(0.125)
        2
    """
    return round_half_up(years * MONTHS_PER_YEAR)


# =============================================================================
# TIMING MODELS
# =============================================================================


class AbsoluteTiming(BaseModel):
    """Follow-on инвестиция в конкретную дату."""

    type: Literal["absolute"] = "absolute"
    on: date = Field(..., description="Дата инвестиции")

    model_config = {"frozen": True}

    def resolve(self, reference_date: date) -> date:
        return self.on


class RelativeTiming(BaseModel):
    """
    Follow-on инвестиция через N дней/месяцев/лет после reference date.

    Дробные значения округляются half-up: дни до целых дней,
    месяцы до целых месяцев, годы до целых месяцев.
    """

    type: Literal["relative"] = "relative"
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Величина смещения")
    unit: TimeUnit = Field(TimeUnit.YEARS, description="Единица смещения")

    model_config = {"frozen": True}

    def resolve(self, reference_date: date) -> date:
        """
        Разрешение смещения относительно reference date.

        Raises:
            UnresolvableTiming: если смещение отрицательное, NaN/Inf
                или выходит за границы календаря
        """
        if not is_valid_float(self.amount) or self.amount < 0:
            raise UnresolvableTiming(
                f"relative offset must be a finite non-negative number, got {self.amount}",
                field="timing",
            )

        try:
            if self.unit == TimeUnit.DAYS:
                return reference_date + timedelta(days=round_half_up(self.amount))
            if self.unit == TimeUnit.MONTHS:
                return add_months(reference_date, round_half_up(self.amount))
            return add_months(reference_date, horizon_months(self.amount))
        except (OverflowError, ValueError) as e:
            raise UnresolvableTiming(
                f"offset {self.amount} {self.unit.value} from {reference_date.isoformat()} "
                f"is outside the calendar: {e}",
                field="timing",
            ) from e


Timing = Annotated[Union[AbsoluteTiming, RelativeTiming], Field(discriminator="type")]
