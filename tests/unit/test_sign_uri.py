"""
Tests for the canonical signing URI codec

Проверяет:
1. Формат steem://sign/<kind>/<payload>[?params]
2. Декодирование op/ops в шаблон транзакции
3. Параметры nb / s / cb
4. Ошибки разбора
5. Заполнение callback и шаблона транзакции
"""

import json

import pytest
from pydantic import ValidationError

from src.core.codec import (
    EXPIRATION_PLACEHOLDER,
    REF_BLOCK_NUM_PLACEHOLDER,
    REF_BLOCK_PREFIX_PLACEHOLDER,
    ParsedSignUri,
    ResolveOptions,
    SignParams,
    SignUriError,
    b64u_decode,
    b64u_encode,
    decode,
    encode_op,
    encode_ops,
    encode_tx,
    resolve_callback,
    resolve_transaction,
)


@pytest.fixture
def vote_op():
    return ["vote", {"voter": "alice", "author": "bob", "permlink": "test", "weight": 10000}]


@pytest.fixture
def resolve_options():
    return ResolveOptions(
        ref_block_num=1234,
        ref_block_prefix=5678,
        expiration="2026-10-18T12:00:00",
        signers=["alice", "bob"],
        preferred_signer="alice",
    )


class TestEncode:
    """Тесты кодирования"""

    def test_encode_op_format(self, vote_op) -> None:
        uri = encode_op(vote_op)
        assert uri.startswith("steem://sign/op/")
        payload = uri[len("steem://sign/op/"):]
        assert json.loads(b64u_decode(payload)) == vote_op

    def test_compact_json(self, vote_op) -> None:
        payload = encode_op(vote_op)[len("steem://sign/op/"):]
        assert b64u_decode(payload) == (
            '["vote",{"voter":"alice","author":"bob","permlink":"test","weight":10000}]'
        )

    def test_single_operation_list_encoded_as_op(self, vote_op) -> None:
        assert encode_ops([vote_op]) == encode_op(vote_op)

    def test_multiple_operations_encoded_as_ops(self, vote_op) -> None:
        uri = encode_ops([vote_op, vote_op])
        assert uri.startswith("steem://sign/ops/")

    def test_encode_tx(self) -> None:
        uri = encode_tx({"operations": [], "extensions": []})
        assert uri.startswith("steem://sign/tx/")

    def test_params_order_and_encoding(self, vote_op) -> None:
        params = SignParams(callback="https://example.com/done", no_broadcast=True, signer="alice bob")
        uri = encode_op(vote_op, params)
        query = uri.split("?", 1)[1]
        assert query == f"nb&s=alice%20bob&cb={b64u_encode('https://example.com/done')}"

    def test_params_from_mapping(self, vote_op) -> None:
        uri = encode_op(vote_op, {"callback": None})
        assert "?" not in uri

    def test_no_params(self, vote_op) -> None:
        assert "?" not in encode_op(vote_op, SignParams())

    def test_unicode_kept(self) -> None:
        op = ["transfer", {"memo": "привет"}]
        payload = encode_op(op)[len("steem://sign/op/"):]
        assert "привет" in b64u_decode(payload)


class TestDecode:
    """Тесты декодирования"""

    def test_decode_op_template(self, vote_op) -> None:
        parsed = decode(encode_op(vote_op))
        assert isinstance(parsed, ParsedSignUri)
        assert parsed.tx == {
            "ref_block_num": REF_BLOCK_NUM_PLACEHOLDER,
            "ref_block_prefix": REF_BLOCK_PREFIX_PLACEHOLDER,
            "expiration": EXPIRATION_PLACEHOLDER,
            "extensions": [],
            "operations": [vote_op],
        }
        assert parsed.operations == [vote_op]
        assert parsed.params == SignParams()

    def test_decode_ops(self, vote_op) -> None:
        transfer = ["transfer", {"from": "alice", "to": "bob", "amount": "1.000 STEEM"}]
        parsed = decode(encode_ops([vote_op, transfer]))
        assert parsed.operations == [vote_op, transfer]

    def test_decode_tx(self) -> None:
        tx = {"ref_block_num": 1, "operations": [], "extensions": []}
        assert decode(encode_tx(tx)).tx == tx

    def test_decode_params(self, vote_op) -> None:
        params = SignParams(callback="https://example.com/?a=1&b=2", no_broadcast=True, signer="alice")
        parsed = decode(encode_op(vote_op, params))
        assert parsed.params == params

    def test_wrong_scheme(self) -> None:
        with pytest.raises(SignUriError, match="Invalid protocol"):
            decode("hive://sign/op/W10.")

    def test_wrong_action(self) -> None:
        with pytest.raises(SignUriError, match="Invalid action"):
            decode("steem://login/op/W10.")

    def test_unknown_kind(self) -> None:
        with pytest.raises(SignUriError, match="Invalid signing action 'foo'"):
            decode(f"steem://sign/foo/{b64u_encode('[]')}")

    def test_invalid_payload(self) -> None:
        with pytest.raises(SignUriError, match="Invalid payload"):
            decode("steem://sign/op/not-base64!")

    def test_missing_payload(self) -> None:
        with pytest.raises(SignUriError, match="Invalid payload"):
            decode("steem://sign/op")

    def test_tx_must_be_object(self) -> None:
        with pytest.raises(SignUriError, match="transaction must be an object"):
            decode(f"steem://sign/tx/{b64u_encode('[]')}")

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode("steem://sign/op/")


class TestResolveCallback:
    """Тесты resolve_callback"""

    def test_placeholders_substituted(self) -> None:
        url = "https://example.com/cb?sig={{sig}}&id={{id}}&block={{block}}"
        ctx = {"sig": "abc/def", "id": "tx1", "block": 42}
        assert resolve_callback(url, ctx) == "https://example.com/cb?sig=abc%2Fdef&id=tx1&block=42"

    def test_missing_values_empty(self) -> None:
        assert resolve_callback("https://e.com/{{txn}}/{{id}}", {}) == "https://e.com//"

    def test_unknown_placeholder_untouched(self) -> None:
        assert resolve_callback("https://e.com/{{other}}", {"other": "x"}) == "https://e.com/{{other}}"


class TestResolveTransaction:
    """Тесты resolve_transaction"""

    def test_template_filled(self, vote_op, resolve_options) -> None:
        resolved = resolve_transaction(decode(encode_op(vote_op)), resolve_options)
        assert resolved.signer == "alice"
        assert resolved.tx["ref_block_num"] == 1234
        assert resolved.tx["ref_block_prefix"] == 5678
        assert resolved.tx["expiration"] == "2026-10-18T12:00:00"
        assert resolved.tx["operations"] == [vote_op]

    def test_signer_placeholder(self, resolve_options) -> None:
        op = ["vote", {"voter": "__signer", "author": "bob", "permlink": "by-__signer"}]
        parsed = decode(encode_op(op, SignParams(signer="bob")))
        resolved = resolve_transaction(parsed, resolve_options)
        assert resolved.signer == "bob"
        assert resolved.tx["operations"][0][1] == {
            "voter": "bob",
            "author": "bob",
            "permlink": "by-bob",
        }

    def test_unavailable_signer(self, vote_op, resolve_options) -> None:
        parsed = decode(encode_op(vote_op, SignParams(signer="carol")))
        with pytest.raises(SignUriError, match="Signer 'carol' not available"):
            resolve_transaction(parsed, resolve_options)

    def test_parsed_not_mutated(self, vote_op, resolve_options) -> None:
        parsed = decode(encode_op(vote_op))
        resolve_transaction(parsed, resolve_options)
        assert parsed.tx["ref_block_num"] == REF_BLOCK_NUM_PLACEHOLDER

    def test_options_validated(self) -> None:
        with pytest.raises(ValidationError):
            ResolveOptions(
                ref_block_num=-1,
                ref_block_prefix=0,
                expiration="x",
                signers=["alice"],
                preferred_signer="alice",
            )
