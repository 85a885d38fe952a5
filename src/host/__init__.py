"""Host — определение среды клиента подписи и сообщения для неё."""

from .environment import (
    RelayChannel,
    RelayRequest,
    build_relay_request,
    choose_relay_channel,
    is_android_webview,
    is_electron,
    is_ios_webview,
    is_web,
    is_weixin_browser,
)
from .messages import (
    REQUEST_ID_PARAM,
    build_search_params,
    build_sign_complete_message,
    encode_uri_component,
    is_valid_url,
)

__all__ = [
    "RelayChannel",
    "RelayRequest",
    "choose_relay_channel",
    "build_relay_request",
    "is_electron",
    "is_weixin_browser",
    "is_android_webview",
    "is_ios_webview",
    "is_web",
    "REQUEST_ID_PARAM",
    "build_sign_complete_message",
    "build_search_params",
    "encode_uri_component",
    "is_valid_url",
]
