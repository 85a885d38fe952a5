"""Messages — сообщения и URL для хост-среды."""

from typing import Any, Dict, Final, Mapping
from urllib.parse import quote, urlsplit

REQUEST_ID_PARAM: Final[str] = "requestId"
SIGN_COMPLETE_MESSAGE_TYPE: Final[str] = "signComplete"

# Символы, которые encodeURIComponent оставляет как есть
_URI_COMPONENT_SAFE: Final[str] = "!~*'()"


def encode_uri_component(value: Any) -> str:
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def build_sign_complete_message(request_id: Any, err: Any, res: Any) -> Dict[str, Any]:
    """
    Сообщение расширению браузера о завершении подписи.

    Returns:
        {"type": "signComplete", "payload": {"requestId": ..., "args": [err, res]}}
    """
    return {
        "type": SIGN_COMPLETE_MESSAGE_TYPE,
        "payload": {
            "requestId": request_id,
            "args": [err, res],
        },
    }


def build_search_params(query: Mapping[str, Any]) -> str:
    """
    Query string маршрута без requestId.

    Returns:
        "" для пустого query, иначе "?k=v&..."
    """
    if not query:
        return ""
    params = "&".join(
        f"{encode_uri_component(key)}={encode_uri_component(value)}"
        for key, value in query.items()
        if key != REQUEST_ID_PARAM
    )
    return f"?{params}"


def is_valid_url(value: str) -> bool:
    """Абсолютный URL: есть схема и location или путь"""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc or parts.path)
