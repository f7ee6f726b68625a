"""
Math Exceptions — ошибки arbitrary-precision слоя

Иерархия:
- MathError: базовый класс всех ошибок числового слоя
- NumberFormatError: текст не соответствует числовой грамматике
- DivisionByZeroError: деление на ноль / нулевой знаменатель дроби
- RoundingNecessaryError: точное преобразование невозможно без округления

Все ошибки поднимаются синхронно и никогда не подавляются внутри слоя.
"""


class MathError(Exception):
    """Базовая ошибка arbitrary-precision арифметики."""
    pass


class NumberFormatError(MathError):
    """
    Строка не является валидным числом.

    Поднимается BigNumber.of() при несовпадении с грамматикой
    (sign)(digits)(.fraction | e-exponent | /denominator).
    """
    pass


class DivisionByZeroError(MathError):
    """Деление на ноль или рациональное число с нулевым знаменателем."""

    @classmethod
    def division_by_zero(cls) -> "DivisionByZeroError":
        return cls("Division by zero.")

    @classmethod
    def denominator_must_not_be_zero(cls) -> "DivisionByZeroError":
        return cls("The denominator of a rational number cannot be zero.")


class RoundingNecessaryError(MathError):
    """
    Результат не представим точно на целевой точности.

    Поднимается при RoundingMode.UNNECESSARY и при точных конверсиях
    (например, 1/3 → BigInteger).
    """

    @classmethod
    def rounding_necessary(cls) -> "RoundingNecessaryError":
        return cls(
            "Rounding is necessary to represent the result of the operation at this scale."
        )
