"""
Returns — Closed-form Rate Solver (IRR / Future Value / Present Value)

Модуль обеспечивает замкнутые формулы доходности для одной инвестиции:
- IRR по начальной сумме, итоговой сумме и горизонту
- Будущая стоимость по ставке и горизонту
- Приведённая стоимость по ставке и горизонту

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ставки на входе и выходе — в процентах (15.0 означает 15%)
2. Нарушение domain → ReturnsDomainError, никогда не NaN/0/complex
3. (1 + r) ≤ 0 при дробной степени → NegativeBase
4. Переполнение float → ResultOutOfRange, никогда не OverflowError/inf
5. Все функции чистые и детерминированные (без состояния, без I/O)

ФОРМУЛЫ:
    rate = (outcome / initial)^(1 / years) - 1
    FV   = initial × (1 + rate)^years
    PV   = outcome / (1 + rate)^years
"""

from typing import Final

from src.core.errors import (
    NegativeBase,
    NonPositiveAmount,
    NonPositiveHorizon,
    ResultOutOfRange,
)
from src.core.math.numerical_safeguards import is_valid_float

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Множитель для перевода доли в проценты
PERCENT: Final[float] = 100.0

# Месяцев в году (горизонт и timing follow-on считаются в месяцах)
MONTHS_PER_YEAR: Final[int] = 12

# Допустимый диапазон RatePercent (границы исключены)
RATE_PERCENT_MIN: Final[float] = -100.0
RATE_PERCENT_MAX: Final[float] = 1000.0


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def percent_to_fraction(rate_percent: float) -> float:
    """
    Конверсия: ставка в процентах → доля.

    Examples:
        >>> percent_to_fraction(15.0)
        0.15
    """
    return rate_percent / PERCENT


def fraction_to_percent(rate: float) -> float:
    """
    Конверсия: доля → ставка в процентах.

    Examples:
        >>> fraction_to_percent(0.25)
        25.0
    """
    return rate * PERCENT


def growth_base(rate_percent: float, field: str = "rate") -> float:
    """
    Основание степени (1 + r) с проверкой domain.

    Args:
        rate_percent: Ставка в процентах
        field: Имя поля для сообщения об ошибке

    Returns:
        1 + rate_percent / 100

    Raises:
        NegativeBase: если rate содержит NaN/Inf или (1 + r) < 0
    """
    if not is_valid_float(rate_percent):
        raise NegativeBase(f"{field} contains NaN/Inf: {rate_percent}", field=field)

    base = 1.0 + percent_to_fraction(rate_percent)
    if base < 0.0:
        raise NegativeBase(
            f"{field}={rate_percent:.6f}% gives negative growth base {base:.6f}; "
            f"fractional compounding is undefined",
            field=field,
        )
    return base


def ensure_finite(value: float, field: str = "result") -> float:
    """
    Raises:
        ResultOutOfRange: если value — NaN/Inf (переполнение float)
    """
    if not is_valid_float(value):
        raise ResultOutOfRange(
            f"{field} is not representable as a finite float: {value}", field=field
        )
    return value


def safe_power(base: float, exponent: float, field: str = "result") -> float:
    """
    base ** exponent с переполнением в таксономии ошибок.

    Float ** при переполнении бросает OverflowError, а не возвращает inf.

    Raises:
        ResultOutOfRange: если результат не представим конечным float

    Examples:
        >>> safe_power(1.1, 2.0) == 1.1 ** 2.0
        True
    """
    try:
        value = base**exponent
    except OverflowError as e:
        raise ResultOutOfRange(
            f"{field}: {base} ** {exponent} overflows float", field=field
        ) from e
    return ensure_finite(value, field)


# =============================================================================
# RATE SOLVER
# =============================================================================


def solve_rate(initial: float, outcome: float, years: float) -> float:
    """
    Годовая ставка доходности (IRR) одной инвестиции.

    rate = (outcome / initial)^(1 / years) - 1, в процентах.

    Args:
        initial: Начальная сумма (> 0)
        outcome: Итоговая сумма (> 0)
        years: Горизонт в годах (> 0)

    Returns:
        Ставка в процентах

    Raises:
        NonPositiveAmount: если initial ≤ 0 или outcome ≤ 0 (или NaN/Inf)
        NonPositiveHorizon: если years ≤ 0 (или NaN/Inf)
        ResultOutOfRange: если ставка переполняет float

    Examples:
        >>> abs(solve_rate(100.0, 150.0, 2.0) - 22.4744871) < 1e-6
        True
        >>> solve_rate(100.0, 100.0, 3.0)
        0.0
    """
    if not is_valid_float(initial) or initial <= 0:
        raise NonPositiveAmount(f"initial must be positive, got {initial}", field="initial")

    if not is_valid_float(outcome) or outcome <= 0:
        raise NonPositiveAmount(f"outcome must be positive, got {outcome}", field="outcome")

    if not is_valid_float(years) or years <= 0:
        raise NonPositiveHorizon(f"years must be positive, got {years}", field="years")

    ratio = outcome / initial
    growth = safe_power(ratio, 1.0 / years, field="rate")
    return ensure_finite(fraction_to_percent(growth - 1.0), field="rate")


def project_future_value(initial: float, rate_percent: float, years: float) -> float:
    """
    Будущая стоимость инвестиции при заданной ставке.

    FV = initial × (1 + rate)^years

    Args:
        initial: Начальная сумма (> 0)
        rate_percent: Ставка в процентах
        years: Горизонт в годах (≥ 0)

    Returns:
        Будущая стоимость

    Raises:
        NonPositiveAmount: если initial ≤ 0
        NonPositiveHorizon: если years < 0
        NegativeBase: если (1 + rate) < 0
        ResultOutOfRange: если FV переполняет float

    Examples:
        >>> abs(project_future_value(100.0, 15.0, 3.0) - 152.0875) < 1e-9
        True
        >>> project_future_value(100.0, 10.0, 0.0)
        100.0
    """
    if not is_valid_float(initial) or initial <= 0:
        raise NonPositiveAmount(f"initial must be positive, got {initial}", field="initial")

    if not is_valid_float(years) or years < 0:
        raise NonPositiveHorizon(f"years must be non-negative, got {years}", field="years")

    base = growth_base(rate_percent)
    return ensure_finite(initial * safe_power(base, years, field="outcome"), field="outcome")


def project_present_value(outcome: float, rate_percent: float, years: float) -> float:
    """
    Приведённая (начальная) стоимость для заданного outcome.

    PV = outcome / (1 + rate)^years

    Args:
        outcome: Итоговая сумма (> 0)
        rate_percent: Ставка в процентах
        years: Горизонт в годах (≥ 0)

    Returns:
        Приведённая стоимость

    Raises:
        NonPositiveAmount: если outcome ≤ 0
        NonPositiveHorizon: если years < 0
        NegativeBase: если (1 + rate) ≤ 0 (деление на ноль или complex)
        ResultOutOfRange: если (1 + rate)^years переполняет float или уходит в 0

    Examples:
        >>> abs(project_present_value(200.0, 10.0, 5.0) - 124.1842646) < 1e-6
        True
    """
    if not is_valid_float(outcome) or outcome <= 0:
        raise NonPositiveAmount(f"outcome must be positive, got {outcome}", field="outcome")

    if not is_valid_float(years) or years < 0:
        raise NonPositiveHorizon(f"years must be non-negative, got {years}", field="years")

    base = growth_base(rate_percent)
    if base == 0.0:
        raise NegativeBase(
            f"rate={rate_percent:.6f}% is a total loss; present value is undefined",
            field="rate",
        )
    discount = safe_power(base, years, field="initial")
    if discount == 0.0:
        raise ResultOutOfRange(
            f"discount factor (1 + {rate_percent}%)^{years} underflows to zero",
            field="initial",
        )
    return ensure_finite(outcome / discount, field="initial")
