"""
Numeric Parsing — разбор и форматирование чисел из строк операций

Значения полей операций приходят строками (query string, JSON от внешних
производителей): "2 SP", "1.23456789 STEEM", "10000". Модуль задаёт единые
правила разбора и форматирования, совместимые с кошельками, которые
формируют эти строки:
- parse_float: разбор самого длинного числового префикса ("2 SP" → 2.0)
- parse_int: разбор целого префикса по основанию 10 ("42abc" → 42)
- to_fixed: форматирование с фиксированным числом знаков после точки

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Разбор никогда не бросает исключений: нечисловой ввод → NOT_A_NUMBER
2. Округление в to_fixed выполняется по точному десятичному значению float,
   половина округляется от нуля
3. NaN/Inf форматируются как "NaN"/"Infinity"/"-Infinity"
"""

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Final

# =============================================================================
# SENTINEL
# =============================================================================

# Результат разбора нечисловой строки. Вызывающий код обязан проверять его
# через is_not_a_number перед арифметикой или отображением.
NOT_A_NUMBER: Final[float] = math.nan

_FLOAT_PREFIX: Final = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
_INT_PREFIX: Final = re.compile(r"[+-]?\d+")

# Точности хватает на любой конечный float с запасом на знаки после точки
_EXACT: Final = Context(prec=512)


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_not_a_number(value: Any) -> bool:
    """
    Проверка, является ли значение sentinel NOT_A_NUMBER.

    Args:
        value: Любое значение (результат parse_float / parse_int / coerce)

    Returns:
        True только для float NaN
    """
    return isinstance(value, float) and math.isnan(value)


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# РАЗБОР
# =============================================================================


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        # true/false/null никогда не разбираются как числа
        return ""
    return str(value)


def parse_float(value: Any) -> float:
    """
    Разбор числового префикса строки.

    Пробелы в начале пропускаются, разбирается самый длинный префикс,
    являющийся числовым литералом. Хвост (единица измерения) игнорируется.

    Args:
        value: Строка или число

    Returns:
        Разобранное значение или NOT_A_NUMBER

    Examples:
        >>> parse_float("2 SP")
        2.0
        >>> parse_float("  1.5e3 VESTS")
        1500.0
        >>> parse_float("SP")
        nan
    """
    match = _FLOAT_PREFIX.match(_as_text(value).lstrip())
    if match is None:
        return NOT_A_NUMBER

    literal = match.group(0)
    if literal.endswith("Infinity"):
        return -math.inf if literal.startswith("-") else math.inf
    return float(literal)


def parse_int(value: Any) -> int | float:
    """
    Разбор целого префикса строки по основанию 10.

    Числа сначала приводятся к строке, поэтому 12.7 → 12.

    Args:
        value: Строка или число

    Returns:
        int или NOT_A_NUMBER, если префикса нет

    Examples:
        >>> parse_int("10000")
        10000
        >>> parse_int(" 42abc")
        42
        >>> parse_int("abc")
        nan
    """
    match = _INT_PREFIX.match(_as_text(value).lstrip())
    if match is None:
        return NOT_A_NUMBER
    return int(match.group(0))


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def to_fixed(value: float, digits: int) -> str:
    """
    Форматирование числа с фиксированным количеством знаков после точки.

    Округление по точному десятичному значению float, половина от нуля:
    to_fixed(1.0625, 3) == "1.063" (а не "1.062", как дал бы format()).

    Args:
        value: Число
        digits: Количество знаков после точки (>= 0)

    Returns:
        Строковое представление

    Raises:
        ValueError: Если digits отрицательный
    """
    if digits < 0:
        raise ValueError(f"digits must be non-negative, got {digits}")

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    # -0.0 печатается без знака
    if value == 0:
        value = 0.0

    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_EXACT)
    return f"{rounded:f}"
