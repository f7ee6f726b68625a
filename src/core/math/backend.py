"""
NumberBackend — арифметика над digit-string числами

Базовый контракт для всех backend-реализаций. Операнды и результаты —
нормализованные digit-string числа:
- непустая строка десятичных цифр
- без ведущих нулей (кроме литерала "0")
- опциональный единственный "-" только для ненулевых значений

Нарушение инварианта на входе — undefined behavior для backend
(публичный API BigNumber нормализует значения при создании).

Деление усекающее: частное округляется к нулю, остаток имеет знак делимого
(-7 / 2 → q=-3, r=-1).

Конкретные реализации:
- SchoolbookBackend: чистые алгоритмы длинной арифметики (всегда доступен)
- BuiltinIntBackend: делегирует в int интерпретатора
- GmpBackend: делегирует в gmpy2 (если установлен)
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Final

from src.core.math.exceptions import RoundingNecessaryError
from src.core.math.rounding import RoundingMode


# =============================================================================
# CONSTANTS
# =============================================================================

# Максимальный показатель степени для pow()
# Защищает от патологических выражений (например, 9^9^9)
MAX_POWER: Final[int] = 1_000_000

# Длина куска при конверсии digit-string ↔ int
# Меньше минимально допустимого sys.set_int_max_str_digits() (640)
CONVERSION_CHUNK_DIGITS: Final[int] = 512


# =============================================================================
# INT CONVERSION
# =============================================================================


def digits_to_int(value: str) -> int:
    """
    digit-string → int без ограничения длины.

    int(str) отказывает на строках длиннее sys.get_int_max_str_digits(),
    поэтому длинная строка делится пополам рекурсивно.

    Examples:
        >>> digits_to_int("-1" + "0" * 5000) == -(10 ** 5000)
        True
    """
    if len(value) <= CONVERSION_CHUNK_DIGITS:
        return int(value)

    if value[0] == "-":
        return -digits_to_int(value[1:])

    split = len(value) // 2
    low_length = len(value) - split
    return digits_to_int(value[:split]) * 10**low_length + digits_to_int(value[split:])


def int_to_digits(value: int) -> str:
    """
    int → digit-string без ограничения длины (обратная к digits_to_int).

    Examples:
        >>> len(int_to_digits(10 ** 5000))
        5001
    """
    if value < 0:
        return "-" + int_to_digits(-value)

    if value.bit_length() <= CONVERSION_CHUNK_DIGITS * 3:
        # 3 бита на цифру: не больше CONVERSION_CHUNK_DIGITS цифр
        return str(value)

    # Оценка снизу числа цифр: bit_length * log10(2)
    low_length = int(value.bit_length() * 0.30102) // 2
    high, low = divmod(value, 10**low_length)
    return int_to_digits(high) + int_to_digits(low).zfill(low_length)


# =============================================================================
# BASE BACKEND
# =============================================================================


class NumberBackend(ABC):
    """
    Абстрактный digit-string калькулятор.

    Все методы — чистые функции от строковых аргументов, без внутреннего
    изменяемого состояния, поэтому один экземпляр безопасно разделяется
    между потоками.
    """

    # Имя backend для конфигурации и диагностики
    name: ClassVar[str] = "abstract"

    @classmethod
    def probe(cls) -> bool:
        """Проверка доступности backend в текущем окружении."""
        return True

    # -------------------------------------------------------------------------
    # Sign helpers
    # -------------------------------------------------------------------------

    def abs(self, n: str) -> str:
        """Абсолютное значение."""
        return n[1:] if n[0] == "-" else n

    def neg(self, n: str) -> str:
        """Смена знака (ноль остаётся нулём)."""
        if n == "0":
            return "0"
        if n[0] == "-":
            return n[1:]
        return "-" + n

    def cmp(self, a: str, b: str) -> int:
        """
        Сравнение двух чисел.

        Returns:
            -1 если a < b, 0 если a == b, 1 если a > b
        """
        a_neg = a[0] == "-"
        b_neg = b[0] == "-"

        if a_neg and not b_neg:
            return -1
        if b_neg and not a_neg:
            return 1

        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) < len(b_dig):
            result = -1
        elif len(a_dig) > len(b_dig):
            result = 1
        elif a_dig == b_dig:
            result = 0
        elif a_dig < b_dig:
            # Равная длина без ведущих нулей: лексикографический порядок = числовой
            result = -1
        else:
            result = 1

        return -result if a_neg else result

    # -------------------------------------------------------------------------
    # Arithmetic primitives
    # -------------------------------------------------------------------------

    @abstractmethod
    def add(self, a: str, b: str) -> str:
        """a + b"""

    @abstractmethod
    def sub(self, a: str, b: str) -> str:
        """a - b"""

    @abstractmethod
    def mul(self, a: str, b: str) -> str:
        """a * b"""

    @abstractmethod
    def div_q(self, a: str, b: str) -> str:
        """Частное a / b, усечённое к нулю. b не должно быть нулём."""

    @abstractmethod
    def div_r(self, a: str, b: str) -> str:
        """Остаток a / b со знаком делимого. b не должно быть нулём."""

    @abstractmethod
    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        """Частное и остаток за одну операцию."""

    @abstractmethod
    def pow(self, a: str, e: int) -> str:
        """a ** e, где 0 <= e <= MAX_POWER."""

    def gcd(self, a: str, b: str) -> str:
        """
        Наибольший общий делитель (алгоритм Евклида через div_r).

        Результат всегда неотрицателен; gcd(0, 0) = 0.
        """
        while b != "0":
            a, b = b, self.div_r(a, b)
        return self.abs(a)

    # -------------------------------------------------------------------------
    # Rounded division
    # -------------------------------------------------------------------------

    def div_round(self, a: str, b: str, rounding_mode: RoundingMode) -> str:
        """
        Деление с округлением частного по заданной политике.

        Args:
            a: Делимое
            b: Делитель (не ноль)
            rounding_mode: Политика округления

        Returns:
            Округлённое частное

        Raises:
            RoundingNecessaryError: при UNNECESSARY и неточном делении
            ValueError: неизвестный rounding_mode
        """
        quotient, remainder = self.div_q_r(a, b)

        has_discarded_fraction = remainder != "0"
        is_positive_or_zero = (a[0] == "-") == (b[0] == "-")

        def discarded_fraction_sign() -> int:
            # Сравнение |2r| с |b|: <0 меньше половины, 0 ровно половина, >0 больше
            r = self.abs(self.mul(remainder, "2"))
            return self.cmp(r, self.abs(b))

        if rounding_mode == RoundingMode.UNNECESSARY:
            if has_discarded_fraction:
                raise RoundingNecessaryError.rounding_necessary()
            increment = False
        elif rounding_mode == RoundingMode.UP:
            increment = has_discarded_fraction
        elif rounding_mode == RoundingMode.DOWN:
            increment = False
        elif rounding_mode == RoundingMode.CEILING:
            increment = has_discarded_fraction and is_positive_or_zero
        elif rounding_mode == RoundingMode.FLOOR:
            increment = has_discarded_fraction and not is_positive_or_zero
        elif rounding_mode == RoundingMode.HALF_UP:
            increment = discarded_fraction_sign() >= 0
        elif rounding_mode == RoundingMode.HALF_DOWN:
            increment = discarded_fraction_sign() > 0
        elif rounding_mode == RoundingMode.HALF_CEILING:
            if is_positive_or_zero:
                increment = discarded_fraction_sign() >= 0
            else:
                increment = discarded_fraction_sign() > 0
        elif rounding_mode == RoundingMode.HALF_FLOOR:
            if is_positive_or_zero:
                increment = discarded_fraction_sign() > 0
            else:
                increment = discarded_fraction_sign() >= 0
        elif rounding_mode == RoundingMode.HALF_EVEN:
            last_digit_is_even = int(quotient[-1]) % 2 == 0
            if last_digit_is_even:
                increment = discarded_fraction_sign() > 0
            else:
                increment = discarded_fraction_sign() >= 0
        else:
            raise ValueError(f"Invalid rounding mode: {rounding_mode!r}")

        if increment:
            return self.add(quotient, "1" if is_positive_or_zero else "-1")

        return quotient

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def check_exponent(e: int) -> None:
        """Проверка показателя степени: 0 <= e <= MAX_POWER."""
        if e < 0 or e > MAX_POWER:
            raise ValueError(
                f"The exponent {e} is not in the range 0 to {MAX_POWER}."
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
