"""Host Environment — определение среды, в которой открыт клиент подписи.

Все функции чистые: на вход строка user-agent и флаги, которые может
сообщить только сама среда (расширение браузера, мини-программа WeChat).

Порядок выбора канала возврата результата подписи:
1. Мини-программа WeChat (UA WeChat + подтверждение от среды)
2. iOS webview
3. Android webview
4. Нет канала (обычный браузер)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Optional

# Android Lollipop+: webview помечен "wv"; KitKat..Lollipop: версия вида {n}.0.0.0;
# старый Chrome webview: "Linux; U; Android"
_ANDROID_WEBVIEW: Final = re.compile(r"(Android.*(wv|.0.0.0)|Linux; U; Android)", re.IGNORECASE)

# iOS webview совпадает с Safari, но без "Safari"
_IOS_WEBVIEW: Final = re.compile(r"(iPhone|iPod|iPad)(?!.*Safari)", re.IGNORECASE)


class RelayChannel(str, Enum):
    """Канал передачи результата подписи хост-приложению"""

    WEIXIN_MINI_PROGRAM = "WEIXIN_MINI_PROGRAM"
    IOS_WEBVIEW = "IOS_WEBVIEW"
    ANDROID_WEBVIEW = "ANDROID_WEBVIEW"
    NONE = "NONE"


@dataclass(frozen=True)
class RelayRequest:
    """Сообщение для моста хост-приложения."""

    channel: RelayChannel
    data: Any

    # Имя обработчика моста (для iOS/Android)
    method: Optional[str]

    # Мини-программа закрывает страницу после postMessage
    navigate_back: bool


def is_electron(user_agent: str) -> bool:
    return "electron" in user_agent.lower()


def is_weixin_browser(user_agent: str) -> bool:
    """Встроенный браузер WeChat (необходимое условие мини-программы)"""
    return "micromessenger" in user_agent.lower()


def is_android_webview(user_agent: str) -> bool:
    return _ANDROID_WEBVIEW.search(user_agent) is not None


def is_ios_webview(user_agent: str) -> bool:
    return _IOS_WEBVIEW.search(user_agent) is not None


def is_web(user_agent: str, is_extension: bool) -> bool:
    """Обычная веб-страница: не расширение браузера и не Electron"""
    return not is_extension and not is_electron(user_agent)


def choose_relay_channel(user_agent: str, is_mini_program: bool) -> RelayChannel:
    """
    Канал возврата результата подписи.

    Args:
        user_agent: Строка user-agent
        is_mini_program: Ответ среды WeChat на запрос окружения
            (учитывается только при UA WeChat)

    Returns:
        RelayChannel
    """
    if is_weixin_browser(user_agent) and is_mini_program:
        return RelayChannel.WEIXIN_MINI_PROGRAM
    if is_ios_webview(user_agent):
        return RelayChannel.IOS_WEBVIEW
    if is_android_webview(user_agent):
        return RelayChannel.ANDROID_WEBVIEW
    return RelayChannel.NONE


def build_relay_request(
    channel: RelayChannel, data: Any, method: Optional[str] = None
) -> Optional[RelayRequest]:
    """
    Сообщение для выбранного канала.

    Args:
        channel: Канал из choose_relay_channel
        data: Полезная нагрузка (результат подписи)
        method: Имя обработчика моста, обязательно для iOS/Android

    Returns:
        RelayRequest или None для RelayChannel.NONE

    Raises:
        ValueError: Если для iOS/Android не заданы method или data
    """
    if channel == RelayChannel.NONE:
        return None
    if channel == RelayChannel.WEIXIN_MINI_PROGRAM:
        return RelayRequest(channel=channel, data=data, method=None, navigate_back=True)

    if not method or data is None or data == "":
        raise ValueError(f"method and data cannot be empty: method={method!r}, data={data!r}")
    return RelayRequest(channel=channel, data=data, method=method, navigate_back=False)
