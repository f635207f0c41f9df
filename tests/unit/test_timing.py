"""
Тесты для Timing — календарная арифметика follow-on инвестиций

Проверяемые инварианты:
1. add_months ограничивает день концом месяца
2. months_between согласован с add_months (со знаком)
3. horizon_months округляет half-up
4. Relative timing разрешается только относительно явной reference date
"""

from datetime import date

import pytest
from pydantic import TypeAdapter, ValidationError

from src.core.domain.timing import (
    AbsoluteTiming,
    RelativeTiming,
    TimeUnit,
    Timing,
    add_months,
    horizon_months,
    months_between,
)
from src.core.errors import UnresolvableTiming


# =============================================================================
# ТЕСТЫ: Календарная арифметика
# =============================================================================


class TestAddMonths:
    """Тесты add_months."""

    def test_simple_shift(self):
        assert add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)
        assert add_months(date(2024, 1, 15), 12) == date(2025, 1, 15)

    def test_month_end_clamp(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)

    def test_negative_shift(self):
        assert add_months(date(2024, 3, 15), -3) == date(2023, 12, 15)

    def test_zero_shift(self):
        assert add_months(date(2024, 5, 20), 0) == date(2024, 5, 20)

    def test_out_of_calendar(self):
        with pytest.raises(ValueError, match="out of range"):
            add_months(date(9999, 12, 1), 1)


class TestMonthsBetween:
    """Тесты months_between."""

    def test_whole_months(self):
        assert months_between(date(2024, 1, 1), date(2025, 1, 1)) == 12
        assert months_between(date(2024, 1, 15), date(2024, 2, 15)) == 1

    def test_partial_month_truncated(self):
        assert months_between(date(2024, 1, 15), date(2024, 3, 14)) == 1

    def test_clamped_month_end(self):
        """31 января + 1 месяц = 29 февраля → ровно 1 месяц."""
        assert months_between(date(2024, 1, 31), date(2024, 2, 29)) == 1

    def test_negative(self):
        assert months_between(date(2024, 3, 15), date(2024, 1, 15)) == -2
        assert months_between(date(2024, 3, 15), date(2024, 1, 16)) == -1

    def test_same_date(self):
        assert months_between(date(2024, 6, 1), date(2024, 6, 1)) == 0

    @pytest.mark.parametrize("months", [0, 1, 6, 13, 59, 60])
    def test_consistent_with_add_months(self, months):
        start = date(2024, 1, 31)
        assert months_between(start, add_months(start, months)) == months


class TestHorizonMonths:
    """Тесты horizon_months."""

    def test_whole_years(self):
        assert horizon_months(5.0) == 60
        assert horizon_months(1.0) == 12

    def test_fractional_years(self):
        assert horizon_months(2.5) == 30
        assert horizon_months(0.25) == 3

    def test_half_month_rounds_up(self):
        # 0.125 × 12 = 1.5 → 2
        assert horizon_months(0.125) == 2


# =============================================================================
# ТЕСТЫ: Timing models
# =============================================================================


class TestTimingModels:
    """Тесты AbsoluteTiming / RelativeTiming."""

    def test_absolute_ignores_reference(self):
        timing = AbsoluteTiming(on=date(2025, 3, 1))
        assert timing.resolve(date(2024, 1, 1)) == date(2025, 3, 1)

    def test_relative_years(self):
        timing = RelativeTiming(amount=1.5, unit=TimeUnit.YEARS)
        assert timing.resolve(date(2024, 1, 1)) == date(2025, 7, 1)

    def test_relative_default_unit_is_years(self):
        assert RelativeTiming(amount=1).unit == TimeUnit.YEARS

    def test_relative_months(self):
        timing = RelativeTiming(amount=6, unit=TimeUnit.MONTHS)
        assert timing.resolve(date(2024, 1, 31)) == date(2024, 7, 31)

    def test_relative_fractional_months_round_half_up(self):
        timing = RelativeTiming(amount=2.5, unit=TimeUnit.MONTHS)
        assert timing.resolve(date(2024, 1, 1)) == date(2024, 4, 1)

    def test_relative_days(self):
        timing = RelativeTiming(amount=30, unit=TimeUnit.DAYS)
        assert timing.resolve(date(2024, 1, 1)) == date(2024, 1, 31)

    def test_relative_outside_calendar(self):
        timing = RelativeTiming(amount=5, unit=TimeUnit.YEARS)
        with pytest.raises(UnresolvableTiming) as exc_info:
            timing.resolve(date(9998, 1, 1))
        assert exc_info.value.field == "timing"

    def test_relative_days_overflow(self):
        timing = RelativeTiming(amount=10_000, unit=TimeUnit.DAYS)
        with pytest.raises(UnresolvableTiming):
            timing.resolve(date(9999, 1, 1))

    def test_negative_offset_rejected_by_model(self):
        with pytest.raises(ValidationError):
            RelativeTiming(amount=-1, unit=TimeUnit.MONTHS)

    def test_nan_offset_rejected_by_model(self):
        with pytest.raises(ValidationError):
            RelativeTiming(amount=float("nan"))

    def test_immutability(self):
        timing = RelativeTiming(amount=1)
        with pytest.raises(ValidationError):
            timing.amount = 2

    def test_discriminated_union(self):
        adapter = TypeAdapter(Timing)

        absolute = adapter.validate_python({"type": "absolute", "on": "2025-01-01"})
        assert isinstance(absolute, AbsoluteTiming)
        assert absolute.on == date(2025, 1, 1)

        relative = adapter.validate_python({"type": "relative", "amount": 3, "unit": "months"})
        assert isinstance(relative, RelativeTiming)
        assert relative.unit == TimeUnit.MONTHS

        with pytest.raises(ValidationError):
            adapter.validate_python({"type": "sometime"})
