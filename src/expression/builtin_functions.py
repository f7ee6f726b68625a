"""
Built-in Functions — функции, доступные в каждой формуле

Математика:
- sqrt(x): квадратный корень
- ln(x): натуральный логарифм
- log(base, x): логарифм x по основанию base (основание — первый аргумент)

Календарь (аргумент — число дней с 1970-01-01 UTC; дробное значение
относится к UTC-дню, содержащему момент d × 86400 секунд):
- fn_day(d): день месяца (1..31)
- fn_month(d): месяц (1..12)
- fn_year(d): год
- fn_day_of_year(d): день года с нуля (0..365)
- fn_weekday(d): день недели ISO (1 = понедельник .. 7 = воскресенье)
- fn_business_days(d1, d2): рабочие дни в диапазоне [d1, d2] включительно
  (порядок аргументов не важен); рабочая неделя пн–пт, праздники из
  RECURRING_HOLIDAYS и FIXED_HOLIDAYS не считаются
"""

import math
from datetime import date, timedelta
from typing import Callable, Final

# =============================================================================
# CONSTANTS
# =============================================================================

EPOCH: Final[date] = date(1970, 1, 1)

# ISO weekday: 1 = понедельник
WORKING_WEEKDAYS: Final[frozenset[int]] = frozenset({1, 2, 3, 4, 5})

# Ежегодные праздники (месяц, день)
RECURRING_HOLIDAYS: Final[frozenset[tuple[int, int]]] = frozenset({(12, 25), (1, 1)})

# Праздники с конкретной датой
FIXED_HOLIDAYS: Final[frozenset[date]] = frozenset({date(2013, 12, 23)})


# =============================================================================
# MATH
# =============================================================================


def sqrt(x: float) -> float:
    return math.sqrt(x)


def ln(x: float) -> float:
    return math.log(x)


def log(base: float, x: float) -> float:
    return math.log(x, base)


# =============================================================================
# CALENDAR
# =============================================================================


def day_count_to_date(day_count: float) -> date:
    """
    Число дней с эпохи → календарная дата UTC.

    Raises:
        OverflowError: дата вне диапазона datetime.date
    """
    return EPOCH + timedelta(days=math.floor(day_count))


def is_business_day(day: date) -> bool:
    """Рабочий день: пн–пт и не праздник."""
    if day.isoweekday() not in WORKING_WEEKDAYS:
        return False
    if day in FIXED_HOLIDAYS:
        return False
    return (day.month, day.day) not in RECURRING_HOLIDAYS


def fn_day(day_count: float) -> int:
    return day_count_to_date(day_count).day


def fn_month(day_count: float) -> int:
    return day_count_to_date(day_count).month


def fn_year(day_count: float) -> int:
    return day_count_to_date(day_count).year


def fn_day_of_year(day_count: float) -> int:
    return day_count_to_date(day_count).timetuple().tm_yday - 1


def fn_weekday(day_count: float) -> int:
    return day_count_to_date(day_count).isoweekday()


def fn_business_days(day_count_1: float, day_count_2: float) -> int:
    """
    Количество рабочих дней между двумя датами включительно.

    Examples:
        >>> # 2024-01-01 (пн, праздник) .. 2024-01-07 (вс)
        >>> fn_business_days(19723, 19729)
        4
    """
    start, end = sorted((day_count_to_date(day_count_1), day_count_to_date(day_count_2)))

    days = 0
    current = start
    while current <= end:
        if is_business_day(current):
            days += 1
        current += timedelta(days=1)

    return days


# =============================================================================
# REGISTRY TABLE
# =============================================================================

BUILTIN_FUNCTIONS: Final[dict[str, Callable[..., float]]] = {
    "sqrt": sqrt,
    "ln": ln,
    "log": log,
    "fn_day": fn_day,
    "fn_month": fn_month,
    "fn_year": fn_year,
    "fn_day_of_year": fn_day_of_year,
    "fn_weekday": fn_weekday,
    "fn_business_days": fn_business_days,
}
