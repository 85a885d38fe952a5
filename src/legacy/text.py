"""Text helpers для legacy ссылок: имена операций и JSON значения полей."""

import json
import re
from typing import Any, Final

# Слова: АББРЕВИАТУРА перед Словом, Слово с заглавной, строчные, АББРЕВИАТУРА, цифры
_WORD_PATTERN: Final = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def snake_case(name: str) -> str:
    """
    Каноническое имя операции в snake_case.

    Examples:
        >>> snake_case("transfer-to-vesting")
        'transfer_to_vesting'
        >>> snake_case("claimRewardBalance")
        'claim_reward_balance'
        >>> snake_case("vote")
        'vote'
    """
    return "_".join(word.lower() for word in _WORD_PATTERN.findall(name))


def json_parse(text: Any, fallback: Any = None) -> Any:
    """
    Разбор JSON без исключений.

    Args:
        text: JSON строка
        fallback: Значение при ошибке разбора; пустой fallback → {}
            (в том числе для слишком глубокой вложенности)

    Returns:
        Разобранное значение или fallback
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return fallback or {}
