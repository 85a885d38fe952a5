"""
B64U — URL-safe Base64

Base64 с подстановкой символов, безопасных для path/query сегментов URL:
    +  ↔  -
    /  ↔  _
    =  ↔  .

Таблица одна и симметрична: кодирование и декодирование используют её же,
поэтому decode(encode(x)) == x для любой строки.
"""

import base64
import re
from typing import Dict, Final

_B64U_LOOKUP: Final[Dict[str, str]] = {
    "+": "-",
    "-": "+",
    "/": "_",
    "_": "/",
    "=": ".",
    ".": "=",
}

_ENCODE_PATTERN: Final = re.compile(r"[+/=]")
_DECODE_PATTERN: Final = re.compile(r"[\-_.]")


def _substitute(match: re.Match) -> str:
    return _B64U_LOOKUP[match.group(0)]


def b64u_encode(text: str | bytes) -> str:
    """
    Кодирование строки (UTF-8) или байтов в URL-safe Base64.

    Examples:
        >>> b64u_encode("hello?")
        'aGVsbG8_'
    """
    raw = text.encode("utf-8") if isinstance(text, str) else text
    encoded = base64.b64encode(raw).decode("ascii")
    return _ENCODE_PATTERN.sub(_substitute, encoded)


def b64u_decode(text: str) -> str:
    """
    Декодирование URL-safe Base64 в строку (UTF-8).

    Raises:
        ValueError: Если вход не является корректным Base64 или UTF-8
            (binascii.Error и UnicodeDecodeError являются подклассами ValueError)
    """
    standard = _DECODE_PATTERN.sub(_substitute, text)
    return base64.b64decode(standard, validate=True).decode("utf-8")
