"""
Big Numbers — immutable arbitrary-precision числа

Иерархия:
- BigNumber: общий абстрактный контракт (парсинг, сравнение, конверсии)
- BigInteger: целое (одно digit-string число)
- BigDecimal: unscaled BigInteger × 10^-scale, scale >= 0
- BigRational: numerator / denominator, denominator > 0

Вся арифметика выполняется через NumberBackend текущего контекста
(current_backend()), значения никогда не проходят через float.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значения нормализуются при создании через of(): без ведущих нулей, без "+",
   без "-0"
2. BigDecimal сохраняет scale: 1.0 и 1.00 численно равны, но различимы
   (str, scale); strip_trailing_zeros() убирает лишние нули явно
3. BigRational хранит знак только в числителе; сокращение только через
   simplified()
4. Арифметика BigRational точная — округление возможно только при явной
   конверсии в BigDecimal / native типы

Грамматика текста (одна на все типы):
    (sign)(digits)( .fraction [e exponent] | e exponent | /denominator )?
- есть denominator → BigRational
- есть fraction или exponent → BigDecimal
- иначе → BigInteger
"""

import math
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from fractions import Fraction
from typing import Final, Union

from src.core.math.backend import MAX_POWER, NumberBackend, digits_to_int, int_to_digits
from src.core.math.backend_selection import current_backend
from src.core.math.exceptions import (
    DivisionByZeroError,
    NumberFormatError,
    RoundingNecessaryError,
)
from src.core.math.rounding import RoundingMode


# =============================================================================
# PARSING
# =============================================================================

PARSE_REGEXP: Final[re.Pattern] = re.compile(
    r"(?P<integral>[-+]?[0-9]+)"
    r"(?:"
    r"(?:(?:\.(?P<fractional>[0-9]+))?(?:[eE](?P<exponent>[-+]?[0-9]+))?)"
    r"|(?:/(?P<denominator>[0-9]+))?"
    r")?"
)

NumberLike = Union["BigNumber", int, float, str, Decimal, Fraction]


def _clean_up(number: str) -> str:
    """Удаление "+" и ведущих нулей; "-0" → "0"."""
    first_char = number[0]

    if first_char in "+-":
        number = number[1:]

    number = number.lstrip("0")

    if number == "":
        return "0"

    if first_char == "-":
        return "-" + number

    return number


def _append_zeros(value: str, count: int) -> str:
    """value × 10^count с сохранением нормализации нуля."""
    if value == "0" or count == 0:
        return value
    return value + "0" * count


def _backend() -> NumberBackend:
    return current_backend()


# =============================================================================
# BIG NUMBER (abstract)
# =============================================================================


class BigNumber(ABC):
    """
    Общий контракт arbitrary-precision чисел.

    Сравнения (==, <, ...) и hash согласованы с численным равенством,
    включая int: BigDecimal.of("5.0") == 5 и hash(BigDecimal.of("5.0")) == hash(5).
    float сравнивается по точному двоичному значению (как Decimal и Fraction):
    BigDecimal.of("0.5") == 0.5, но BigDecimal.of("0.1") != 0.1.
    """

    __slots__ = ()

    @classmethod
    def of(cls, value: NumberLike) -> "BigNumber":
        """
        Создание числа из значения.

        Конкретный тип зависит от значения:
        - BigNumber возвращается как есть
        - int (и bool) → BigInteger
        - float → BigDecimal/BigInteger по кратчайшему repr()
        - Decimal → по str()
        - Fraction → BigRational
        - str → по грамматике (см. модуль)

        Raises:
            NumberFormatError: значение не является валидным конечным числом
            DivisionByZeroError: дробь с нулевым знаменателем
            TypeError: неподдерживаемый тип
        """
        if isinstance(value, BigNumber):
            return value

        if isinstance(value, int):
            return BigInteger(int_to_digits(int(value)))

        if isinstance(value, float):
            if not math.isfinite(value):
                raise NumberFormatError(
                    f'The given value "{value}" does not represent a valid number.'
                )
            return _parse(repr(value))

        if isinstance(value, Decimal):
            if not value.is_finite():
                raise NumberFormatError(
                    f'The given value "{value}" does not represent a valid number.'
                )
            return _parse(str(value))

        if isinstance(value, Fraction):
            return BigRational.nd(value.numerator, value.denominator)

        if isinstance(value, str):
            return _parse(value)

        raise TypeError(f"Cannot convert {type(value).__name__} to a BigNumber")

    @classmethod
    def minimum(cls, *values: NumberLike) -> "BigNumber":
        """
        Минимум из значений, приведённых через cls.of().

        Raises:
            ValueError: нет ни одного значения
        """
        result = None
        for value in values:
            number = cls.of(value)
            if result is None or number.is_less_than(result):
                result = number

        if result is None:
            raise ValueError(f"{cls.__name__}.minimum() expects at least one value.")

        return result

    @classmethod
    def maximum(cls, *values: NumberLike) -> "BigNumber":
        """
        Максимум из значений, приведённых через cls.of().

        Raises:
            ValueError: нет ни одного значения
        """
        result = None
        for value in values:
            number = cls.of(value)
            if result is None or number.is_greater_than(result):
                result = number

        if result is None:
            raise ValueError(f"{cls.__name__}.maximum() expects at least one value.")

        return result

    # -------------------------------------------------------------------------
    # Comparison helpers
    # -------------------------------------------------------------------------

    def is_equal_to(self, that: NumberLike) -> bool:
        return self.compare_to(that) == 0

    def is_less_than(self, that: NumberLike) -> bool:
        return self.compare_to(that) < 0

    def is_less_than_or_equal_to(self, that: NumberLike) -> bool:
        return self.compare_to(that) <= 0

    def is_greater_than(self, that: NumberLike) -> bool:
        return self.compare_to(that) > 0

    def is_greater_than_or_equal_to(self, that: NumberLike) -> bool:
        return self.compare_to(that) >= 0

    def is_zero(self) -> bool:
        return self.sign == 0

    def is_negative(self) -> bool:
        return self.sign < 0

    def is_negative_or_zero(self) -> bool:
        return self.sign <= 0

    def is_positive(self) -> bool:
        return self.sign > 0

    def is_positive_or_zero(self) -> bool:
        return self.sign >= 0

    # -------------------------------------------------------------------------
    # Abstract contract
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def sign(self) -> int:
        """-1, 0 или 1."""

    @abstractmethod
    def compare_to(self, that: NumberLike) -> int:
        """-1, 0 или 1, если self меньше, равно или больше that."""

    @abstractmethod
    def to_big_integer(self) -> "BigInteger":
        """
        Raises:
            RoundingNecessaryError: значение не целое
        """

    @abstractmethod
    def to_big_decimal(self) -> "BigDecimal":
        """
        Raises:
            RoundingNecessaryError: нет конечного десятичного представления
        """

    @abstractmethod
    def to_big_rational(self) -> "BigRational":
        """Точная конверсия в дробь."""

    @abstractmethod
    def to_scale(
        self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY
    ) -> "BigDecimal":
        """
        Конверсия в BigDecimal с заданным scale.

        Raises:
            RoundingNecessaryError: только при RoundingMode.UNNECESSARY
        """

    @abstractmethod
    def to_int(self) -> int:
        """
        Точное значение как int.

        Raises:
            RoundingNecessaryError: значение не целое
        """

    @abstractmethod
    def to_float(self) -> float:
        """Приближение float (может терять точность)."""

    @abstractmethod
    def __str__(self) -> str:
        """Каноническая строка, разбираемая обратно через of() без потерь."""

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"

    def _compare_with(self, other: object):
        """
        compare_to() для операторов сравнения.

        Returns:
            -1/0/1; None для nan; NotImplemented для чужих типов
        """
        if isinstance(other, float):
            if math.isnan(other):
                return None
            if math.isinf(other):
                return -1 if other > 0 else 1
            # float сравнивается по точному двоичному значению, как Decimal и Fraction
            other = Fraction(other)
        if not isinstance(other, (BigNumber, int, Fraction)):
            return NotImplemented
        return self.compare_to(other)

    def __eq__(self, other: object) -> bool:
        result = self._compare_with(other)
        if result is NotImplemented:
            return result
        return result == 0

    def __lt__(self, other: object) -> bool:
        result = self._compare_with(other)
        if result is NotImplemented:
            return result
        return result is not None and result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare_with(other)
        if result is NotImplemented:
            return result
        return result is not None and result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare_with(other)
        if result is NotImplemented:
            return result
        return result is not None and result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare_with(other)
        if result is NotImplemented:
            return result
        return result is not None and result >= 0

    def __hash__(self) -> int:
        # hash(Fraction) согласован с int, float и Decimal
        rational = self.to_big_rational()
        return hash(Fraction(rational.numerator.to_int(), rational.denominator.to_int()))


def _parse(value: str) -> BigNumber:
    """Разбор строки по PARSE_REGEXP."""
    matches = PARSE_REGEXP.fullmatch(value)

    if matches is None:
        raise NumberFormatError(
            f'The given value "{value}" does not represent a valid number.'
        )

    integral = matches.group("integral")
    fractional = matches.group("fractional")
    exponent = matches.group("exponent")
    denominator = matches.group("denominator")

    if denominator is not None:
        numerator = _clean_up(integral)
        denominator = denominator.lstrip("0")

        if denominator == "":
            raise DivisionByZeroError.denominator_must_not_be_zero()

        return BigRational(BigInteger(numerator), BigInteger(denominator), False)

    if fractional is not None or exponent is not None:
        fractional = fractional or ""
        exponent_value = int(exponent) if exponent is not None else 0

        unscaled_value = _clean_up(integral + fractional)
        scale = len(fractional) - exponent_value

        if scale < 0:
            unscaled_value = _append_zeros(unscaled_value, -scale)
            scale = 0

        return BigDecimal(unscaled_value, scale)

    return BigInteger(_clean_up(integral))


# =============================================================================
# BIG INTEGER
# =============================================================================


class BigInteger(BigNumber):
    """Immutable arbitrary-precision целое."""

    __slots__ = ("_value",)

    def __init__(self, value: str):
        """
        Внутренний конструктор: value уже нормализован.

        Публичное создание — через BigInteger.of().
        """
        self._value = value

    @classmethod
    def of(cls, value: NumberLike) -> "BigInteger":
        """
        Raises:
            RoundingNecessaryError: значение не целое
        """
        return BigNumber.of(value).to_big_integer()

    @classmethod
    def zero(cls) -> "BigInteger":
        return cls("0")

    @classmethod
    def one(cls) -> "BigInteger":
        return cls("1")

    @classmethod
    def ten(cls) -> "BigInteger":
        return cls("10")

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def plus(self, that: NumberLike) -> "BigInteger":
        that = BigInteger.of(that)

        if that._value == "0":
            return self
        if self._value == "0":
            return that

        return BigInteger(_backend().add(self._value, that._value))

    def minus(self, that: NumberLike) -> "BigInteger":
        that = BigInteger.of(that)

        if that._value == "0":
            return self

        return BigInteger(_backend().sub(self._value, that._value))

    def multiplied_by(self, that: NumberLike) -> "BigInteger":
        that = BigInteger.of(that)

        if that._value == "1":
            return self
        if self._value == "1":
            return that

        return BigInteger(_backend().mul(self._value, that._value))

    def divided_by(
        self,
        that: NumberLike,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> "BigInteger":
        """
        Деление с округлением частного.

        Raises:
            DivisionByZeroError: that == 0
            RoundingNecessaryError: UNNECESSARY и деление неточное
        """
        that = BigInteger.of(that)

        if that._value == "1":
            return self
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        return BigInteger(_backend().div_round(self._value, that._value, rounding_mode))

    def power(self, exponent: int) -> "BigInteger":
        """
        Raises:
            ValueError: exponent вне [0, MAX_POWER]
        """
        if exponent == 0:
            return BigInteger.one()
        if exponent == 1:
            return self
        if exponent < 0 or exponent > MAX_POWER:
            raise ValueError(
                f"The exponent {exponent} is not in the range 0 to {MAX_POWER}."
            )

        return BigInteger(_backend().pow(self._value, exponent))

    def quotient(self, that: NumberLike) -> "BigInteger":
        """Частное, усечённое к нулю."""
        that = BigInteger.of(that)

        if that._value == "1":
            return self
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        return BigInteger(_backend().div_q(self._value, that._value))

    def remainder(self, that: NumberLike) -> "BigInteger":
        """Остаток со знаком делимого."""
        that = BigInteger.of(that)

        if that._value == "1":
            return BigInteger.zero()
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        return BigInteger(_backend().div_r(self._value, that._value))

    def quotient_and_remainder(
        self, that: NumberLike
    ) -> tuple["BigInteger", "BigInteger"]:
        that = BigInteger.of(that)

        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        quotient, remainder = _backend().div_q_r(self._value, that._value)
        return BigInteger(quotient), BigInteger(remainder)

    def mod(self, that: NumberLike) -> "BigInteger":
        """
        Неотрицательный модуль: результат в [0, that).

        Raises:
            DivisionByZeroError: that == 0
            ValueError: that < 0
        """
        that = BigInteger.of(that)

        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()
        if that.is_negative():
            raise ValueError("Modulus must not be negative.")

        backend = _backend()
        value = backend.div_r(self._value, that._value)
        if value[0] == "-":
            value = backend.add(value, that._value)

        return BigInteger(value)

    def gcd(self, that: NumberLike) -> "BigInteger":
        """Наибольший общий делитель (неотрицательный)."""
        that = BigInteger.of(that)

        if that._value == "0" and self._value[0] != "-":
            return self
        if self._value == "0" and that._value[0] != "-":
            return that

        return BigInteger(_backend().gcd(self._value, that._value))

    def abs(self) -> "BigInteger":
        return self.negated() if self.is_negative() else self

    def negated(self) -> "BigInteger":
        return BigInteger(_backend().neg(self._value))

    def is_even(self) -> bool:
        return int(self._value[-1]) % 2 == 0

    def is_odd(self) -> bool:
        return not self.is_even()

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        if self._value == "0":
            return 0
        return -1 if self._value[0] == "-" else 1

    def compare_to(self, that: NumberLike) -> int:
        that = BigNumber.of(that)

        if isinstance(that, BigInteger):
            return _backend().cmp(self._value, that._value)

        return -that.compare_to(self)

    def to_big_integer(self) -> "BigInteger":
        return self

    def to_big_decimal(self) -> "BigDecimal":
        return BigDecimal(self._value, 0)

    def to_big_rational(self) -> "BigRational":
        return BigRational(self, BigInteger.one(), False)

    def to_scale(
        self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY
    ) -> "BigDecimal":
        return self.to_big_decimal().to_scale(scale, rounding_mode)

    def to_int(self) -> int:
        return digits_to_int(self._value)

    def to_float(self) -> float:
        return float(self._value)

    def __str__(self) -> str:
        return self._value


# =============================================================================
# BIG DECIMAL
# =============================================================================


class BigDecimal(BigNumber):
    """
    Immutable arbitrary-precision десятичное: unscaled × 10^-scale.

    Examples:
        >>> str(BigDecimal.of("1.50").plus("0.5"))
        '2.00'
        >>> str(BigDecimal.of(1).divided_by(3, 4, RoundingMode.HALF_UP))
        '0.3333'
    """

    __slots__ = ("_value", "_scale")

    def __init__(self, value: str, scale: int = 0):
        """
        Внутренний конструктор: value нормализован, scale >= 0.

        Публичное создание — через BigDecimal.of() / of_unscaled_value().
        """
        self._value = value
        self._scale = scale

    @classmethod
    def of(cls, value: NumberLike) -> "BigDecimal":
        """
        Raises:
            RoundingNecessaryError: дробь без конечного десятичного представления
        """
        return BigNumber.of(value).to_big_decimal()

    @classmethod
    def of_unscaled_value(cls, value: NumberLike, scale: int = 0) -> "BigDecimal":
        """
        Создание из unscaled значения и scale: of_unscaled_value(123, 2) → 1.23.

        Raises:
            ValueError: scale < 0
        """
        if scale < 0:
            raise ValueError("The scale cannot be negative.")

        return cls(str(BigInteger.of(value)), scale)

    @classmethod
    def zero(cls) -> "BigDecimal":
        return cls("0", 0)

    @classmethod
    def one(cls) -> "BigDecimal":
        return cls("1", 0)

    @classmethod
    def ten(cls) -> "BigDecimal":
        return cls("10", 0)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def plus(self, that: NumberLike) -> "BigDecimal":
        """Сумма; scale результата = max(scale)."""
        that = BigDecimal.of(that)

        if that._value == "0" and that._scale <= self._scale:
            return self
        if self._value == "0" and self._scale <= that._scale:
            return that

        a, b = _scale_values(self, that)
        return BigDecimal(_backend().add(a, b), max(self._scale, that._scale))

    def minus(self, that: NumberLike) -> "BigDecimal":
        """Разность; scale результата = max(scale)."""
        that = BigDecimal.of(that)

        if that._value == "0" and that._scale <= self._scale:
            return self

        a, b = _scale_values(self, that)
        return BigDecimal(_backend().sub(a, b), max(self._scale, that._scale))

    def multiplied_by(self, that: NumberLike) -> "BigDecimal":
        """Произведение; scale результата = сумма scale."""
        that = BigDecimal.of(that)

        if that._value == "1" and that._scale == 0:
            return self
        if self._value == "1" and self._scale == 0:
            return that

        return BigDecimal(
            _backend().mul(self._value, that._value), self._scale + that._scale
        )

    def divided_by(
        self,
        that: NumberLike,
        scale: int | None = None,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> "BigDecimal":
        """
        Деление с заданным scale результата и округлением.

        Args:
            that: делитель
            scale: scale результата (default: scale делимого)
            rounding_mode: политика округления

        Raises:
            DivisionByZeroError: that == 0
            RoundingNecessaryError: UNNECESSARY и результат неточен на scale
            ValueError: scale < 0
        """
        that = BigDecimal.of(that)

        if that.is_zero():
            raise DivisionByZeroError.division_by_zero()

        if scale is None:
            scale = self._scale
        elif scale < 0:
            raise ValueError("Scale cannot be negative.")

        if that._value == "1" and that._scale == 0 and scale == self._scale:
            return self

        # q = round(a × 10^(scale + that.scale - self.scale) / b)
        shift = scale + that._scale - self._scale
        if shift >= 0:
            p = _append_zeros(self._value, shift)
            q = that._value
        else:
            p = self._value
            q = _append_zeros(that._value, -shift)

        return BigDecimal(_backend().div_round(p, q, rounding_mode), scale)

    def exactly_divided_by(self, that: NumberLike) -> "BigDecimal":
        """
        Точное деление: результат с минимальным scale.

        Деление конечно, только если знаменатель после сокращения содержит
        лишь множители 2 и 5.

        Raises:
            DivisionByZeroError: that == 0
            RoundingNecessaryError: результат — бесконечная дробь
        """
        that = BigDecimal.of(that)

        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        _, b = _scale_values(self, that)

        backend = _backend()
        d = backend.abs(b).rstrip("0")
        scale = len(backend.abs(b)) - len(d)

        for prime in (5, 2):
            while int(d[-1]) % prime == 0:
                d = backend.div_q(d, str(prime))
                scale += 1

        return self.divided_by(that, scale).strip_trailing_zeros()

    def power(self, exponent: int) -> "BigDecimal":
        """
        Raises:
            ValueError: exponent вне [0, MAX_POWER]
        """
        if exponent == 0:
            return BigDecimal.one()
        if exponent == 1:
            return self
        if exponent < 0 or exponent > MAX_POWER:
            raise ValueError(
                f"The exponent {exponent} is not in the range 0 to {MAX_POWER}."
            )

        return BigDecimal(_backend().pow(self._value, exponent), self._scale * exponent)

    def quotient(self, that: NumberLike) -> "BigDecimal":
        """Целая часть частного (scale 0), усечённая к нулю."""
        that = BigDecimal.of(that)

        if that.is_zero():
            raise DivisionByZeroError.division_by_zero()

        p, q = _scale_values(self, that)
        return BigDecimal(_backend().div_q(p, q), 0)

    def remainder(self, that: NumberLike) -> "BigDecimal":
        """Остаток от quotient() со знаком делимого; scale = max(scale)."""
        that = BigDecimal.of(that)

        if that.is_zero():
            raise DivisionByZeroError.division_by_zero()

        p, q = _scale_values(self, that)
        return BigDecimal(_backend().div_r(p, q), max(self._scale, that._scale))

    def quotient_and_remainder(
        self, that: NumberLike
    ) -> tuple["BigDecimal", "BigDecimal"]:
        that = BigDecimal.of(that)

        if that.is_zero():
            raise DivisionByZeroError.division_by_zero()

        p, q = _scale_values(self, that)
        quotient, remainder = _backend().div_q_r(p, q)

        return (
            BigDecimal(quotient, 0),
            BigDecimal(remainder, max(self._scale, that._scale)),
        )

    def with_point_moved_left(self, n: int) -> "BigDecimal":
        """Сдвиг точки влево: 1.23 → 0.0123 при n=2."""
        if n == 0:
            return self
        if n < 0:
            return self.with_point_moved_right(-n)

        return BigDecimal(self._value, self._scale + n)

    def with_point_moved_right(self, n: int) -> "BigDecimal":
        """Сдвиг точки вправо: 1.23 → 123 при n=2."""
        if n == 0:
            return self
        if n < 0:
            return self.with_point_moved_left(-n)

        value = self._value
        scale = self._scale - n

        if scale < 0:
            value = _append_zeros(value, -scale)
            scale = 0

        return BigDecimal(value, scale)

    def strip_trailing_zeros(self) -> "BigDecimal":
        """Минимальный scale без потери значения: 1.2300 → 1.23, 10.0 → 10."""
        if self._scale == 0:
            return self

        trimmed = self._value.rstrip("0")

        if trimmed in ("", "-"):
            return BigDecimal.zero()

        trailing_zeros = len(self._value) - len(trimmed)

        if trailing_zeros == 0:
            return self

        trailing_zeros = min(trailing_zeros, self._scale)

        value = self._value[: len(self._value) - trailing_zeros]
        return BigDecimal(value, self._scale - trailing_zeros)

    def abs(self) -> "BigDecimal":
        return self.negated() if self.is_negative() else self

    def negated(self) -> "BigDecimal":
        return BigDecimal(_backend().neg(self._value), self._scale)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def unscaled_value(self) -> BigInteger:
        return BigInteger(self._value)

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def integral_part(self) -> str:
        """Целая часть как строка (со знаком): -1.50 → "-1", -0.5 → "-0"."""
        if self._scale == 0:
            return self._value

        value = self._unscaled_value_with_leading_zeros()
        return value[: -self._scale]

    @property
    def fractional_part(self) -> str:
        """Дробная часть как строка длины scale: 1.05 → "05"."""
        if self._scale == 0:
            return ""

        value = self._unscaled_value_with_leading_zeros()
        return value[-self._scale :]

    def has_non_zero_fractional_part(self) -> bool:
        return self.fractional_part != "0" * self._scale

    def _unscaled_value_with_leading_zeros(self) -> str:
        """Unscaled значение, дополненное нулями до длины scale + 1."""
        value = self._value
        target_length = self._scale + 1
        negative = value[0] == "-"
        digits = value[1:] if negative else value

        if len(digits) >= target_length:
            return value

        digits = digits.rjust(target_length, "0")
        return "-" + digits if negative else digits

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        if self._value == "0":
            return 0
        return -1 if self._value[0] == "-" else 1

    def compare_to(self, that: NumberLike) -> int:
        that = BigNumber.of(that)

        if isinstance(that, BigInteger):
            that = that.to_big_decimal()

        if isinstance(that, BigDecimal):
            a, b = _scale_values(self, that)
            return _backend().cmp(a, b)

        return -that.compare_to(self)

    def to_big_integer(self) -> BigInteger:
        if self._scale == 0:
            return BigInteger(self._value)

        zero_scale = self.divided_by(BigDecimal.one(), 0)
        return BigInteger(zero_scale._value)

    def to_big_decimal(self) -> "BigDecimal":
        return self

    def to_big_rational(self) -> "BigRational":
        numerator = BigInteger(self._value)
        denominator = BigInteger("1" + "0" * self._scale)

        return BigRational(numerator, denominator, False)

    def to_scale(
        self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY
    ) -> "BigDecimal":
        if scale == self._scale:
            return self

        return self.divided_by(BigDecimal.one(), scale, rounding_mode)

    def to_int(self) -> int:
        return self.to_big_integer().to_int()

    def to_float(self) -> float:
        return float(str(self))

    def __str__(self) -> str:
        if self._scale == 0:
            return self._value

        value = self._unscaled_value_with_leading_zeros()
        return value[: -self._scale] + "." + value[-self._scale :]


def _scale_values(x: BigDecimal, y: BigDecimal) -> tuple[str, str]:
    """Unscaled значения x и y, приведённые к общему (максимальному) scale."""
    a = x._value
    b = y._value

    if x._scale > y._scale:
        b = _append_zeros(b, x._scale - y._scale)
    elif x._scale < y._scale:
        a = _append_zeros(a, y._scale - x._scale)

    return a, b


# =============================================================================
# BIG RATIONAL
# =============================================================================


class BigRational(BigNumber):
    """
    Immutable arbitrary-precision дробь numerator / denominator.

    Examples:
        >>> str(BigRational.nd(1, 3).plus(BigRational.nd(1, 6)))
        '9/18'
        >>> str(BigRational.nd(1, 3).plus(BigRational.nd(1, 6)).simplified())
        '1/2'
    """

    __slots__ = ("_numerator", "_denominator")

    def __init__(
        self,
        numerator: BigInteger,
        denominator: BigInteger,
        check_denominator: bool = True,
    ):
        """
        Args:
            numerator: числитель
            denominator: знаменатель
            check_denominator: проверить ноль и перенести знак в числитель
                (False только когда вызывающий гарантирует denominator > 0)

        Raises:
            DivisionByZeroError: denominator == 0 (при check_denominator)
        """
        if check_denominator:
            if denominator.is_zero():
                raise DivisionByZeroError.denominator_must_not_be_zero()

            if denominator.is_negative():
                numerator = numerator.negated()
                denominator = denominator.negated()

        self._numerator = numerator
        self._denominator = denominator

    @classmethod
    def of(cls, value: NumberLike) -> "BigRational":
        return BigNumber.of(value).to_big_rational()

    @classmethod
    def nd(cls, numerator: NumberLike, denominator: NumberLike) -> "BigRational":
        """
        Дробь из числителя и знаменателя.

        Raises:
            DivisionByZeroError: denominator == 0
        """
        return cls(BigInteger.of(numerator), BigInteger.of(denominator), True)

    @classmethod
    def zero(cls) -> "BigRational":
        return cls(BigInteger.zero(), BigInteger.one(), False)

    @classmethod
    def one(cls) -> "BigRational":
        return cls(BigInteger.one(), BigInteger.one(), False)

    @classmethod
    def ten(cls) -> "BigRational":
        return cls(BigInteger.ten(), BigInteger.one(), False)

    @property
    def numerator(self) -> BigInteger:
        return self._numerator

    @property
    def denominator(self) -> BigInteger:
        return self._denominator

    # -------------------------------------------------------------------------
    # Arithmetic (только через BigInteger, без округления)
    # -------------------------------------------------------------------------

    def quotient(self) -> BigInteger:
        return self._numerator.quotient(self._denominator)

    def remainder(self) -> BigInteger:
        return self._numerator.remainder(self._denominator)

    def quotient_and_remainder(self) -> tuple[BigInteger, BigInteger]:
        return self._numerator.quotient_and_remainder(self._denominator)

    def plus(self, that: NumberLike) -> "BigRational":
        that = BigRational.of(that)

        numerator = self._numerator.multiplied_by(that._denominator)
        numerator = numerator.plus(that._numerator.multiplied_by(self._denominator))
        denominator = self._denominator.multiplied_by(that._denominator)

        return BigRational(numerator, denominator, False)

    def minus(self, that: NumberLike) -> "BigRational":
        that = BigRational.of(that)

        numerator = self._numerator.multiplied_by(that._denominator)
        numerator = numerator.minus(that._numerator.multiplied_by(self._denominator))
        denominator = self._denominator.multiplied_by(that._denominator)

        return BigRational(numerator, denominator, False)

    def multiplied_by(self, that: NumberLike) -> "BigRational":
        that = BigRational.of(that)

        numerator = self._numerator.multiplied_by(that._numerator)
        denominator = self._denominator.multiplied_by(that._denominator)

        return BigRational(numerator, denominator, False)

    def divided_by(self, that: NumberLike) -> "BigRational":
        """
        Raises:
            DivisionByZeroError: that == 0
        """
        that = BigRational.of(that)

        numerator = self._numerator.multiplied_by(that._denominator)
        denominator = self._denominator.multiplied_by(that._numerator)

        return BigRational(numerator, denominator, True)

    def power(self, exponent: int) -> "BigRational":
        """
        Raises:
            ValueError: exponent вне [0, MAX_POWER]
        """
        if exponent == 0:
            return BigRational.one()
        if exponent == 1:
            return self

        return BigRational(
            self._numerator.power(exponent),
            self._denominator.power(exponent),
            False,
        )

    def reciprocal(self) -> "BigRational":
        """
        Raises:
            DivisionByZeroError: self == 0
        """
        return BigRational(self._denominator, self._numerator, True)

    def abs(self) -> "BigRational":
        return BigRational(self._numerator.abs(), self._denominator, False)

    def negated(self) -> "BigRational":
        return BigRational(self._numerator.negated(), self._denominator, False)

    def simplified(self) -> "BigRational":
        """Сокращение на НОД числителя и знаменателя."""
        gcd = self._numerator.gcd(self._denominator)

        numerator = self._numerator.quotient(gcd)
        denominator = self._denominator.quotient(gcd)

        return BigRational(numerator, denominator, False)

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        return self._numerator.sign

    def compare_to(self, that: NumberLike) -> int:
        return self.minus(that).sign

    def to_big_integer(self) -> BigInteger:
        simplified = self.simplified()

        if not simplified._denominator.is_equal_to(1):
            raise RoundingNecessaryError(
                "This rational number cannot be represented as an integer value "
                "without rounding."
            )

        return simplified._numerator

    def to_big_decimal(self) -> BigDecimal:
        return self._numerator.to_big_decimal().exactly_divided_by(self._denominator)

    def to_big_rational(self) -> "BigRational":
        return self

    def to_scale(
        self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY
    ) -> BigDecimal:
        return self._numerator.to_big_decimal().divided_by(
            self._denominator, scale, rounding_mode
        )

    def to_int(self) -> int:
        return self.to_big_integer().to_int()

    def to_float(self) -> float:
        numerator = self._numerator.to_int()
        denominator = self._denominator.to_int()
        try:
            # Целочисленное true division корректно округляет без промежуточного float
            return numerator / denominator
        except OverflowError:
            return math.copysign(math.inf, numerator)

    def __str__(self) -> str:
        numerator = str(self._numerator)
        denominator = str(self._denominator)

        if denominator == "1":
            return numerator

        return f"{numerator}/{denominator}"
