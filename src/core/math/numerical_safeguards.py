"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость расчётов доходности:
- Проверка float на NaN/Inf до вычислений
- Детерминированное округление half-up (месяцы горизонта)
- Epsilon-сравнения float с учётом машинной точности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют (проверяются на входе каждой операции)
2. Float сравнения всегда учитывают машинную точность
3. Все операции детерминированы и воспроизводимы на любой платформе
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def all_valid_floats(*values: float) -> bool:
    """
    Проверка набора значений на NaN/Inf.

    Examples:
        >>> all_valid_floats(1.0, 2.0)
        True
        >>> all_valid_floats(1.0, float('nan'))
        False
    """
    return all(is_valid_float(v) for v in values)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_half_up(value: float) -> int:
    """
    Округление к ближайшему целому, .5 — вверх.

    Встроенный round() использует banker's rounding (round(2.5) == 2),
    что даёт расхождение с клиентскими платформами.

    Args:
        value: Конечное неотрицательное значение

    Returns:
        Ближайшее целое

    Raises:
        ValueError: если value содержит NaN/Inf

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(2.4999)
        2
        >>> round_half_up(60.0)
        60
    """
    if not is_valid_float(value):
        raise ValueError(f"Cannot round NaN/Inf: {value}")
    return int(math.floor(value + 0.5))


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с относительной и абсолютной толерантностью.

    Examples:
        >>> is_close(1.0, 1.0 + 1e-12)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    if not (is_valid_float(a) and is_valid_float(b)):
        return False
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
