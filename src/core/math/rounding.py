"""
RoundingMode — политики округления при делении

Политика определяет, нужно ли увеличить усечённое частное на 1 (в сторону
от нуля), когда деление неточное. Значение без состояния.

Сводная таблица (частное усечено к нулю, discarded fraction = остаток / делитель):

    mode          5.5   2.5   1.6   1.1   1.0  -1.0  -1.1  -1.6  -2.5  -5.5
    UP              6     3     2     2     1    -1    -2    -2    -3    -6
    DOWN            5     2     1     1     1    -1    -1    -1    -2    -5
    CEILING         6     3     2     2     1    -1    -1    -1    -2    -5
    FLOOR           5     2     1     1     1    -1    -2    -2    -3    -6
    HALF_UP         6     3     2     1     1    -1    -1    -2    -3    -6
    HALF_DOWN       5     2     2     1     1    -1    -1    -2    -2    -5
    HALF_CEILING    6     3     2     1     1    -1    -1    -2    -2    -5
    HALF_FLOOR      5     2     2     1     1    -1    -1    -2    -3    -6
    HALF_EVEN       6     2     2     1     1    -1    -1    -2    -2    -6
    UNNECESSARY   err   err   err   err     1    -1   err   err   err   err
"""

from enum import Enum


class RoundingMode(str, Enum):
    """Режим округления неточного результата деления."""

    UP = "UP"
    DOWN = "DOWN"
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_CEILING = "HALF_CEILING"
    HALF_FLOOR = "HALF_FLOOR"
    HALF_EVEN = "HALF_EVEN"
    UNNECESSARY = "UNNECESSARY"
