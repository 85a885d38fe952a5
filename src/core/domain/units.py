"""
Units — Денежные единицы цепочки и их конверсия

Единицы:
- VESTS: нативная единица доли (каноническое хранение, 6 знаков)
- SP: отображаемая единица доли, конвертируется в VESTS через vests_to_sp
- STEEM, SBD: ликвидные токены (3 знака)

vests_to_sp = total_vesting_fund_steem / total_vesting_shares
(вычисляется из global properties цепочки вызывающим кодом).
"""

from enum import Enum
from typing import Any, Final, Mapping, Tuple

from pydantic import BaseModel, Field

from src.core.math.numeric_parsing import is_valid_float, parse_float, to_fixed


# =============================================================================
# ЕДИНИЦЫ
# =============================================================================


class AssetUnit(str, Enum):
    """Денежная единица в строке суммы ("1.000 STEEM")"""

    VESTS = "VESTS"
    SP = "SP"
    STEEM = "STEEM"
    SBD = "SBD"


# Порядок распознавания суффикса. "VESTS" проверяется первым: поиск идёт
# по подстроке, и порядок нельзя менять.
AMOUNT_UNIT_PRIORITY: Final[Tuple[AssetUnit, ...]] = (
    AssetUnit.VESTS,
    AssetUnit.SP,
    AssetUnit.STEEM,
    AssetUnit.SBD,
)

VESTS_PRECISION: Final[int] = 6
LIQUID_PRECISION: Final[int] = 3

# Порог, ниже которого format_number показывает 6 знаков вместо 3
SMALL_NUMBER_THRESHOLD: Final[float] = 0.001


def detect_amount_unit(amount: str) -> AssetUnit | None:
    """
    Единица суммы по подстроке, в порядке AMOUNT_UNIT_PRIORITY.

    Args:
        amount: Строка суммы ("2.5 SP")

    Returns:
        Первая найденная единица или None
    """
    for unit in AMOUNT_UNIT_PRIORITY:
        if unit.value in amount:
            return unit
    return None


# =============================================================================
# КОНТЕКСТ КОНВЕРСИИ
# =============================================================================


class ConversionContext(BaseModel):
    """
    Контекст денежной конверсии для обработки транзакции.

    vests_to_sp строго положителен, поэтому деление SP → VESTS безопасно.
    """

    vests_to_sp: float = Field(..., gt=0, description="SP за один VESTS")

    model_config = {"frozen": True}

    @classmethod
    def from_global_properties(cls, properties: Mapping[str, Any]) -> "ConversionContext":
        """Контекст из dynamic global properties цепочки"""
        return cls(vests_to_sp=get_vests_to_sp(properties))

    def sp_to_vests(self, sp: float) -> float:
        return sp / self.vests_to_sp


def get_vests_to_sp(properties: Mapping[str, Any]) -> float:
    """
    Отношение SP к VESTS из global properties.

    Args:
        properties: Словарь с total_vesting_fund_steem и total_vesting_shares
            (строки сумм, например "1000.000 STEEM" / "2000.000000 VESTS")

    Returns:
        total_vesting_fund_steem / total_vesting_shares

    Raises:
        KeyError: Если одно из полей отсутствует
        ValueError: Если значения не числовые или shares равен нулю
    """
    fund = parse_float(properties["total_vesting_fund_steem"])
    shares = parse_float(properties["total_vesting_shares"])

    if not is_valid_float(fund) or not is_valid_float(shares):
        raise ValueError(
            f"Global properties are not numeric: fund={properties['total_vesting_fund_steem']!r}, "
            f"shares={properties['total_vesting_shares']!r}"
        )
    if shares == 0:
        raise ValueError("total_vesting_shares must be non-zero")

    return fund / shares


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_amount(value: float, unit: AssetUnit) -> str:
    """Строка суммы с точностью, принятой для единицы"""
    digits = VESTS_PRECISION if unit in (AssetUnit.VESTS, AssetUnit.SP) else LIQUID_PRECISION
    return f"{to_fixed(value, digits)} {unit.value}"


def format_number(number: float) -> str:
    """
    Число для отображения: 6 знаков для очень малых значений, иначе 3.

    Examples:
        >>> format_number(12.34567)
        '12.346'
        >>> format_number(0.0001234)
        '0.000123'
    """
    six_digits = to_fixed(number, VESTS_PRECISION)
    if parse_float(six_digits) < SMALL_NUMBER_THRESHOLD:
        return six_digits
    return to_fixed(number, LIQUID_PRECISION)
