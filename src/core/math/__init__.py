"""
Core math modules

Разбор и форматирование чисел из строковых значений операций.
"""

from src.core.math.numeric_parsing import (
    NOT_A_NUMBER,
    is_not_a_number,
    is_valid_float,
    parse_float,
    parse_int,
    to_fixed,
)

__all__ = [
    # Sentinel
    "NOT_A_NUMBER",
    "is_not_a_number",
    "is_valid_float",
    # Parsing
    "parse_float",
    "parse_int",
    # Formatting
    "to_fixed",
]
