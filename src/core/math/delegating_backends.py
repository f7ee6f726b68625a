"""
Delegating backends — делегирование в низкоуровневые big-integer библиотеки

- BuiltinIntBackend: int интерпретатора (arbitrary precision, всегда есть)
- GmpBackend: gmpy2.mpz (GMP), доступен только при установленном gmpy2

Оба сохраняют семантику усекающего деления базового контракта:
частное к нулю, остаток со знаком делимого.

BuiltinIntBackend конвертирует через digits_to_int / int_to_digits:
прямые int(str) и str(int) ограничены sys.get_int_max_str_digits().
"""

import importlib
import importlib.util
import math

from src.core.math.backend import NumberBackend, digits_to_int, int_to_digits


class BuiltinIntBackend(NumberBackend):
    """Backend поверх встроенного int."""

    name = "builtin"

    def add(self, a: str, b: str) -> str:
        return int_to_digits(digits_to_int(a) + digits_to_int(b))

    def sub(self, a: str, b: str) -> str:
        return int_to_digits(digits_to_int(a) - digits_to_int(b))

    def mul(self, a: str, b: str) -> str:
        return int_to_digits(digits_to_int(a) * digits_to_int(b))

    def div_q(self, a: str, b: str) -> str:
        return self.div_q_r(a, b)[0]

    def div_r(self, a: str, b: str) -> str:
        return self.div_q_r(a, b)[1]

    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        x = digits_to_int(a)
        y = digits_to_int(b)
        # divmod() округляет к -inf, поэтому частное считаем по модулям
        q = abs(x) // abs(y)
        if (x < 0) != (y < 0):
            q = -q
        return int_to_digits(q), int_to_digits(x - q * y)

    def pow(self, a: str, e: int) -> str:
        self.check_exponent(e)
        return int_to_digits(digits_to_int(a) ** e)

    def gcd(self, a: str, b: str) -> str:
        return int_to_digits(math.gcd(digits_to_int(a), digits_to_int(b)))


class GmpBackend(NumberBackend):
    """Backend поверх gmpy2.mpz."""

    name = "gmp"

    def __init__(self):
        if not self.probe():
            raise RuntimeError("GmpBackend requires the gmpy2 package")
        self._gmpy2 = importlib.import_module("gmpy2")

    @classmethod
    def probe(cls) -> bool:
        return importlib.util.find_spec("gmpy2") is not None

    def add(self, a: str, b: str) -> str:
        return str(self._gmpy2.mpz(a) + self._gmpy2.mpz(b))

    def sub(self, a: str, b: str) -> str:
        return str(self._gmpy2.mpz(a) - self._gmpy2.mpz(b))

    def mul(self, a: str, b: str) -> str:
        return str(self._gmpy2.mpz(a) * self._gmpy2.mpz(b))

    def div_q(self, a: str, b: str) -> str:
        return str(self._gmpy2.t_div(self._gmpy2.mpz(a), self._gmpy2.mpz(b)))

    def div_r(self, a: str, b: str) -> str:
        return str(self._gmpy2.t_mod(self._gmpy2.mpz(a), self._gmpy2.mpz(b)))

    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        q, r = self._gmpy2.t_divmod(self._gmpy2.mpz(a), self._gmpy2.mpz(b))
        return str(q), str(r)

    def pow(self, a: str, e: int) -> str:
        self.check_exponent(e)
        return str(self._gmpy2.mpz(a) ** e)

    def gcd(self, a: str, b: str) -> str:
        return str(self._gmpy2.gcd(self._gmpy2.mpz(a), self._gmpy2.mpz(b)))
