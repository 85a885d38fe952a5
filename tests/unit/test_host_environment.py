"""
Tests for host environment detection and host messages

Проверяет:
1. Распознавание webview/Electron/WeChat по user-agent
2. Порядок выбора канала возврата результата подписи
3. Сообщения и query string для хост-среды
"""

import pytest

from src.host import (
    REQUEST_ID_PARAM,
    RelayChannel,
    build_relay_request,
    build_search_params,
    build_sign_complete_message,
    choose_relay_channel,
    encode_uri_component,
    is_android_webview,
    is_electron,
    is_ios_webview,
    is_valid_url,
    is_web,
    is_weixin_browser,
)

ANDROID_WEBVIEW_UA = (
    "Mozilla/5.0 (Linux; Android 10; K; wv) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Version/4.0 Chrome/120.0.0.0 Mobile Safari/537.36"
)
ANDROID_CHROME_UA = (
    "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.1.2.3 Mobile Safari/537.36"
)
OLD_ANDROID_UA = "Mozilla/5.0 (Linux; U; Android 4.0.3; ko-kr; LG-L160L Build/IML74K) AppleWebkit/534.30"
IOS_WEBVIEW_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Mobile/15E148"
)
IOS_SAFARI_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
WEIXIN_IOS_UA = IOS_WEBVIEW_UA + " MicroMessenger/8.0.40(0x18002831) NetType/WIFI Language/zh_CN"
ELECTRON_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 (KHTML, like Gecko) "
    "signer/1.0.0 Chrome/118.1.2.3 Electron/27.0.0 Safari/537.36"
)
DESKTOP_UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.1.2.3 Safari/537.36"
)


class TestUserAgentDetection:
    """Тесты распознавания по user-agent"""

    def test_android_webview(self) -> None:
        assert is_android_webview(ANDROID_WEBVIEW_UA)
        assert is_android_webview(OLD_ANDROID_UA)
        assert not is_android_webview(ANDROID_CHROME_UA)
        assert not is_android_webview(DESKTOP_UA)

    def test_ios_webview(self) -> None:
        assert is_ios_webview(IOS_WEBVIEW_UA)
        assert not is_ios_webview(IOS_SAFARI_UA)
        assert not is_ios_webview(DESKTOP_UA)

    def test_electron(self) -> None:
        assert is_electron(ELECTRON_UA)
        assert not is_electron(DESKTOP_UA)

    def test_weixin(self) -> None:
        assert is_weixin_browser(WEIXIN_IOS_UA)
        assert not is_weixin_browser(IOS_WEBVIEW_UA)

    def test_is_web(self) -> None:
        assert is_web(DESKTOP_UA, is_extension=False)
        assert not is_web(DESKTOP_UA, is_extension=True)
        assert not is_web(ELECTRON_UA, is_extension=False)


class TestChooseRelayChannel:
    """Тесты выбора канала"""

    def test_mini_program_first(self) -> None:
        assert choose_relay_channel(WEIXIN_IOS_UA, is_mini_program=True) == RelayChannel.WEIXIN_MINI_PROGRAM

    def test_weixin_without_mini_program_falls_back(self) -> None:
        assert choose_relay_channel(WEIXIN_IOS_UA, is_mini_program=False) == RelayChannel.IOS_WEBVIEW

    def test_mini_program_flag_requires_weixin_ua(self) -> None:
        assert choose_relay_channel(DESKTOP_UA, is_mini_program=True) == RelayChannel.NONE

    def test_android(self) -> None:
        assert choose_relay_channel(ANDROID_WEBVIEW_UA, is_mini_program=False) == RelayChannel.ANDROID_WEBVIEW

    def test_browser(self) -> None:
        assert choose_relay_channel(IOS_SAFARI_UA, is_mini_program=False) == RelayChannel.NONE


class TestBuildRelayRequest:
    """Тесты build_relay_request"""

    def test_none_channel(self) -> None:
        assert build_relay_request(RelayChannel.NONE, {"id": 1}, "signResult") is None

    def test_mini_program_navigates_back(self) -> None:
        request = build_relay_request(RelayChannel.WEIXIN_MINI_PROGRAM, {"id": 1})
        assert request.navigate_back
        assert request.method is None

    def test_webview_request(self) -> None:
        request = build_relay_request(RelayChannel.ANDROID_WEBVIEW, {"id": 1}, "signResult")
        assert request.channel == RelayChannel.ANDROID_WEBVIEW
        assert request.method == "signResult"
        assert request.data == {"id": 1}
        assert not request.navigate_back

    @pytest.mark.parametrize("data, method", [({"id": 1}, None), (None, "signResult"), ("", "signResult")])
    def test_webview_requires_method_and_data(self, data, method) -> None:
        with pytest.raises(ValueError, match="method and data cannot be empty"):
            build_relay_request(RelayChannel.IOS_WEBVIEW, data, method)


class TestMessages:
    """Тесты сообщений и URL"""

    def test_sign_complete_message(self) -> None:
        assert build_sign_complete_message("req-1", None, {"id": "abc"}) == {
            "type": "signComplete",
            "payload": {"requestId": "req-1", "args": [None, {"id": "abc"}]},
        }

    def test_search_params(self) -> None:
        query = {"to": "bob smith", REQUEST_ID_PARAM: "42", "amount": "1.000 STEEM"}
        assert build_search_params(query) == "?to=bob%20smith&amount=1.000%20STEEM"

    def test_search_params_empty(self) -> None:
        assert build_search_params({}) == ""

    def test_encode_uri_component(self) -> None:
        assert encode_uri_component("a/b?c=d&e") == "a%2Fb%3Fc%3Dd%26e"
        assert encode_uri_component("(it's)!~*") == "(it's)!~*"
        assert encode_uri_component(5) == "5"

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://example.com/cb", True),
            ("steem://sign/op/abc", True),
            ("mailto:alice@example.com", True),
            ("example.com/cb", False),
            ("http://", False),
            ("", False),
            ("http://[::1", False),
        ],
    )
    def test_is_valid_url(self, value: str, expected: bool) -> None:
        assert is_valid_url(value) is expected
