"""
Тесты для Numerical Safeguards

Проверяемые инварианты:
1. NaN/Inf детектируются до вычислений
2. Округление half-up детерминировано (не banker's rounding)
3. Float сравнения учитывают машинную точность
"""

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    all_valid_floats,
    is_close,
    is_valid_float,
    round_half_up,
)


class TestIsValidFloat:
    """Тесты is_valid_float / all_valid_floats."""

    def test_finite_values(self):
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)
        assert is_valid_float(1e-300)

    def test_nan_inf(self):
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    def test_all_valid_floats(self):
        assert all_valid_floats(1.0, 2.0, 3.0)
        assert all_valid_floats()
        assert not all_valid_floats(1.0, float("inf"))


class TestRoundHalfUp:
    """Тесты round_half_up: .5 всегда вверх."""

    def test_half_rounds_up(self):
        """В отличие от round(): 0.5 → 1, 2.5 → 3."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round(2.5) == 2  # banker's rounding встроенного round

    def test_below_half(self):
        assert round_half_up(1.4999) == 1
        assert round_half_up(0.0) == 0

    def test_integers_unchanged(self):
        assert round_half_up(60.0) == 60
        assert isinstance(round_half_up(60.0), int)

    def test_nan_inf_rejected(self):
        with pytest.raises(ValueError, match="NaN/Inf"):
            round_half_up(float("nan"))

        with pytest.raises(ValueError, match="NaN/Inf"):
            round_half_up(float("inf"))


class TestIsClose:
    """Тесты is_close."""

    def test_close_values(self):
        assert is_close(1.0, 1.0 + 1e-12)
        assert is_close(0.0, EPS_FLOAT_COMPARE_ABS / 2)

    def test_distant_values(self):
        assert not is_close(1.0, 1.001)

    def test_nan_never_close(self):
        assert not is_close(float("nan"), float("nan"))
        assert not is_close(float("inf"), float("inf"))
