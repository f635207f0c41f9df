"""
Domain Errors — таксономия ошибок расчёта доходности

Все ошибки engine наследуются от ReturnsDomainError (подкласс ValueError),
поэтому вызывающий код может перехватить их одним except.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакой подстановки NaN/0 вместо ошибки: невалидный вход → exception
2. Ошибка в любом follow-on batch прерывает весь расчёт (без частичных результатов)
3. Каждая ошибка несёт field и batch_index для точного сообщения пользователю
4. Engine ничего не ретраит: повторы — ответственность вызывающего workflow
"""


class ReturnsDomainError(ValueError):
    """
    Базовая ошибка нарушения domain preconditions.

    Attributes:
        field: Имя поля, нарушившего precondition (например, 'initial')
        batch_index: Индекс follow-on batch (None для основной инвестиции)
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        batch_index: int | None = None,
    ):
        self.field = field
        self.batch_index = batch_index
        if batch_index is not None:
            message = f"follow-on batch #{batch_index}: {message}"
        super().__init__(message)

    def with_batch(self, batch_index: int) -> "ReturnsDomainError":
        """Копия ошибки с привязкой к follow-on batch."""
        return type(self)(str(self), field=self.field, batch_index=batch_index)


class NonPositiveAmount(ReturnsDomainError):
    """Сумма (principal, outcome, unit price) ≤ 0 или не является конечным числом."""


class NonPositiveHorizon(ReturnsDomainError):
    """Горизонт инвестиции ≤ 0 (или < 0 там, где допустим нулевой горизонт)."""


class NegativeBase(ReturnsDomainError):
    """
    Основание (1 + rate) ≤ 0 при дробной степени.

    Потеря ≥ 100% при дробном compounding даёт неопределённый вещественный
    результат (в Python — complex), поэтому это явная ошибка, а не NaN.
    """


class PercentageOutOfRange(ReturnsDomainError):
    """Процентное поле вне диапазона [0, 100]."""


class UnresolvableTiming(ReturnsDomainError):
    """Timing follow-on batch не разрешается относительно reference date."""


class ResultOutOfRange(ReturnsDomainError):
    """
    Результат не представим конечным float.

    Входы в domain, но (1 + r)^years или накопленная стоимость
    переполняет float (например, 999% на 300 лет).
    """
