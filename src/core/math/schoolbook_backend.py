"""
SchoolbookBackend — чистая длинная арифметика над digit-strings

Всегда доступный fallback backend. Алгоритмы:
- add/sub: выравнивание длины нулями, поразрядно с переносом/заёмом
- mul: построчное умножение столбиком, сумма сдвинутых строк
- div_q_r: деление уголком по "focus window" — растущему префиксу делимого
- pow: бинарное возведение в степень (square-and-multiply), итеративно

Малые операнды обходят строковые алгоритмы и считаются нативно. Порог
определяется разрядностью платформенного целого:
- 64-bit: 18 цифр для add/sub/div, 9 цифр для mul
- 32-bit: 9 цифр для add/sub/div, 4 цифры для mul
"""

import sys
from typing import Final

from src.core.math.backend import NumberBackend


# =============================================================================
# NATIVE FAST-PATH THRESHOLDS
# =============================================================================

_IS_64_BIT: Final[bool] = sys.maxsize > 2**32

# Максимум цифр операнда, при котором сумма/разность/частное гарантированно
# помещается в машинное слово
MAX_DIGITS_ADD_DIV: Final[int] = 18 if _IS_64_BIT else 9

# Максимум цифр операнда для безопасного произведения в машинном слове
MAX_DIGITS_MUL: Final[int] = 9 if _IS_64_BIT else 4


def _trunc_div_mod(a: int, b: int) -> tuple[int, int]:
    """Усекающее деление (частное к нулю, остаток со знаком делимого)."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


class SchoolbookBackend(NumberBackend):
    """Длинная арифметика над десятичными строками."""

    name = "schoolbook"

    def __init__(
        self,
        max_digits_add_div: int = MAX_DIGITS_ADD_DIV,
        max_digits_mul: int = MAX_DIGITS_MUL,
    ):
        """
        Args:
            max_digits_add_div: порог native fast-path для add/sub/div
                (0 отключает fast-path)
            max_digits_mul: порог native fast-path для mul (0 отключает)
        """
        self.max_digits_add_div = max_digits_add_div
        self.max_digits_mul = max_digits_mul

    # -------------------------------------------------------------------------
    # Public primitives
    # -------------------------------------------------------------------------

    def add(self, a: str, b: str) -> str:
        if a == "0":
            return b
        if b == "0":
            return a

        a_neg = a[0] == "-"
        b_neg = b[0] == "-"
        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) <= self.max_digits_add_div and len(b_dig) <= self.max_digits_add_div:
            return str(int(a) + int(b))

        if a_neg == b_neg:
            result = self._do_add(a_dig, b_dig)
        else:
            result = self._do_sub(a_dig, b_dig)

        if a_neg:
            result = self.neg(result)

        return result

    def sub(self, a: str, b: str) -> str:
        return self.add(a, self.neg(b))

    def mul(self, a: str, b: str) -> str:
        if a == "0" or b == "0":
            return "0"
        if a == "1":
            return b
        if b == "1":
            return a
        if a == "-1":
            return self.neg(b)
        if b == "-1":
            return self.neg(a)

        a_neg = a[0] == "-"
        b_neg = b[0] == "-"
        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) <= self.max_digits_mul and len(b_dig) <= self.max_digits_mul:
            return str(int(a) * int(b))

        result = self._do_mul(a_dig, b_dig)

        if a_neg != b_neg:
            result = self.neg(result)

        return result

    def div_q(self, a: str, b: str) -> str:
        return self.div_q_r(a, b)[0]

    def div_r(self, a: str, b: str) -> str:
        return self.div_q_r(a, b)[1]

    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        if a == "0":
            return "0", "0"
        if a == b:
            return "1", "0"
        if b == "1":
            return a, "0"
        if b == "-1":
            return self.neg(a), "0"

        a_neg = a[0] == "-"
        b_neg = b[0] == "-"
        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) <= self.max_digits_add_div and len(b_dig) <= self.max_digits_add_div:
            q, r = _trunc_div_mod(int(a), int(b))
            return str(q), str(r)

        q_str, r_str = self._do_div(a_dig, b_dig)

        if a_neg != b_neg:
            q_str = self.neg(q_str)
        if a_neg:
            r_str = self.neg(r_str)

        return q_str, r_str

    def pow(self, a: str, e: int) -> str:
        self.check_exponent(e)

        result = "1"
        base = a
        while e > 0:
            if e & 1:
                result = self.mul(result, base)
            e >>= 1
            if e:
                base = self.mul(base, base)
        return result

    # -------------------------------------------------------------------------
    # Magnitude algorithms (беззнаковые digit-strings)
    # -------------------------------------------------------------------------

    def _do_add(self, a: str, b: str) -> str:
        a, b = self._pad(a, b)

        carry = 0
        digits = []
        for i in range(len(a) - 1, -1, -1):
            total = int(a[i]) + int(b[i]) + carry
            if total >= 10:
                carry = 1
                total -= 10
            else:
                carry = 0
            digits.append(str(total))

        if carry:
            digits.append(str(carry))

        return "".join(reversed(digits))

    def _do_sub(self, a: str, b: str) -> str:
        """a - b для беззнаковых a, b; результат может быть отрицательным."""
        if a == b:
            return "0"

        invert = self._do_cmp(a, b) < 0
        if invert:
            a, b = b, a

        a, b = self._pad(a, b)

        borrow = 0
        digits = []
        for i in range(len(a) - 1, -1, -1):
            diff = int(a[i]) - int(b[i]) - borrow
            if diff < 0:
                borrow = 1
                diff += 10
            else:
                borrow = 0
            digits.append(str(diff))

        result = "".join(reversed(digits)).lstrip("0")

        if invert:
            result = self.neg(result)

        return result

    def _do_mul(self, a: str, b: str) -> str:
        result = "0"

        for shift, a_char in enumerate(reversed(a)):
            a_digit = int(a_char)
            if a_digit == 0:
                continue

            carry = 0
            line = []
            for b_char in reversed(b):
                product = a_digit * int(b_char) + carry
                carry, digit = divmod(product, 10)
                line.append(str(digit))
            if carry:
                line.append(str(carry))

            row = "".join(reversed(line)) + "0" * shift
            result = self.add(result, row)

        return result

    def _do_div(self, a: str, b: str) -> tuple[str, str]:
        """
        Деление уголком беззнаковых a / b.

        На каждом шаге сравнивается focus window (префикс делимого длины
        len(b) или len(b) + 1) с делителем; из делимого вычитается
        b * 10^k и к частному прибавляется 10^k, пока остаток не станет
        меньше делителя.
        """
        if self._do_cmp(a, b) < 0:
            return "0", a

        # Здесь a >= b и len(a) >= len(b)
        x = len(a)
        y = len(b)

        quotient = "0"
        remainder = a
        focus_len = y

        while True:
            focus = a[:focus_len]

            if self._do_cmp(focus, b) < 0:
                if focus_len == x:
                    # Остаток меньше делителя
                    break
                focus_len += 1

            zeros = "0" * (x - focus_len)

            quotient = self.add(quotient, "1" + zeros)
            a = self.sub(a, b + zeros)
            remainder = a

            if remainder == "0":
                break

            x = len(a)
            if x < y:
                break

            focus_len = y

        return quotient, remainder

    @staticmethod
    def _do_cmp(a: str, b: str) -> int:
        """Сравнение беззнаковых digit-strings без ведущих нулей."""
        if len(a) != len(b):
            return 1 if len(a) > len(b) else -1
        if a == b:
            return 0
        return 1 if a > b else -1

    @staticmethod
    def _pad(a: str, b: str) -> tuple[str, str]:
        """Выравнивание длины ведущими нулями."""
        width = max(len(a), len(b))
        return a.rjust(width, "0"), b.rjust(width, "0")

    def __repr__(self) -> str:
        return (
            f"SchoolbookBackend(max_digits_add_div={self.max_digits_add_div}, "
            f"max_digits_mul={self.max_digits_mul})"
        )
