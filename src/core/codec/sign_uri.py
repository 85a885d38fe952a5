"""
Sign URI — Канонический URI запроса на подпись

Формат:
    steem://sign/<kind>/<b64u(JSON)>[?nb&s=<signer>&cb=<b64u(callback)>]

kind:
- op:  одна операция [name, payload]
- ops: список операций
- tx:  транзакция целиком

Для op/ops декодер строит шаблон транзакции с placeholder-полями
(__ref_block_num, __ref_block_prefix, __expiration), которые заполняются
через resolve_transaction перед подписью.
"""

import json
import re
from typing import Any, Dict, Final, List, Mapping, Optional, Sequence
from urllib.parse import parse_qsl, quote, urlsplit

from pydantic import BaseModel, Field

from src.core.codec.b64u import b64u_decode, b64u_encode


SIGN_URI_SCHEME: Final[str] = "steem"
SIGN_URI_ACTION: Final[str] = "sign"

REF_BLOCK_NUM_PLACEHOLDER: Final[str] = "__ref_block_num"
REF_BLOCK_PREFIX_PLACEHOLDER: Final[str] = "__ref_block_prefix"
EXPIRATION_PLACEHOLDER: Final[str] = "__expiration"
SIGNER_PLACEHOLDER: Final[str] = "__signer"

_RESOLVE_PATTERN: Final = re.compile(r"__(ref_block_num|ref_block_prefix|expiration|signer)")
_CALLBACK_PATTERN: Final = re.compile(r"\{\{(sig|id|block|txn)\}\}")


class SignUriError(ValueError):
    """URI запроса на подпись не может быть разобран или разрешён"""


# =============================================================================
# MODELS
# =============================================================================


class SignParams(BaseModel):
    """Параметры запроса на подпись"""

    callback: Optional[str] = Field(None, description="URL возврата после подписи")
    no_broadcast: bool = Field(False, description="Только подписать, не отправлять в сеть")
    signer: Optional[str] = Field(None, description="Аккаунт, которым требуется подписать")

    model_config = {"frozen": True}


class ParsedSignUri(BaseModel):
    """Результат декодирования URI: транзакция (или её шаблон) и параметры"""

    tx: Dict[str, Any] = Field(..., description="Транзакция")
    params: SignParams = Field(default_factory=SignParams)

    model_config = {"frozen": True}

    @property
    def operations(self) -> List[Any]:
        return self.tx.get("operations", [])


class ResolveOptions(BaseModel):
    """Данные цепочки и доступные подписанты для заполнения шаблона"""

    ref_block_num: int = Field(..., ge=0)
    ref_block_prefix: int = Field(..., ge=0)
    expiration: str = Field(..., min_length=1, description="ISO время истечения транзакции")
    signers: List[str] = Field(..., min_length=1)
    preferred_signer: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class ResolvedTransaction(BaseModel):
    tx: Dict[str, Any]
    signer: str

    model_config = {"frozen": True}


# =============================================================================
# ENCODE
# =============================================================================


def _encode_json(data: Any) -> str:
    return b64u_encode(json.dumps(data, separators=(",", ":"), ensure_ascii=False))


def _encode_params(params: Optional[SignParams | Mapping[str, Any]]) -> str:
    if params is None:
        return ""
    if not isinstance(params, SignParams):
        params = SignParams.model_validate(dict(params))

    parts: List[str] = []
    if params.no_broadcast:
        parts.append("nb")
    if params.signer:
        parts.append(f"s={quote(params.signer, safe='')}")
    if params.callback:
        parts.append(f"cb={b64u_encode(params.callback)}")
    return f"?{'&'.join(parts)}" if parts else ""


def encode_tx(tx: Mapping[str, Any], params: Optional[SignParams | Mapping[str, Any]] = None) -> str:
    """URI для подписи транзакции целиком"""
    return f"{SIGN_URI_SCHEME}://{SIGN_URI_ACTION}/tx/{_encode_json(tx)}{_encode_params(params)}"


def encode_op(op: Sequence[Any], params: Optional[SignParams | Mapping[str, Any]] = None) -> str:
    """URI для подписи одной операции [name, payload]"""
    return f"{SIGN_URI_SCHEME}://{SIGN_URI_ACTION}/op/{_encode_json(list(op))}{_encode_params(params)}"


def encode_ops(
    ops: Sequence[Sequence[Any]], params: Optional[SignParams | Mapping[str, Any]] = None
) -> str:
    """
    URI для подписи списка операций.

    Список из одной операции кодируется как kind=op.
    """
    if len(ops) == 1:
        return encode_op(ops[0], params)
    payload = [list(op) for op in ops]
    return f"{SIGN_URI_SCHEME}://{SIGN_URI_ACTION}/ops/{_encode_json(payload)}{_encode_params(params)}"


# =============================================================================
# DECODE
# =============================================================================


def decode(uri: str) -> ParsedSignUri:
    """
    Декодирование канонического URI.

    Args:
        uri: steem://sign/<kind>/<payload>[?params]

    Returns:
        ParsedSignUri

    Raises:
        SignUriError: Неверная схема, действие, kind или payload
    """
    url = urlsplit(uri)
    if url.scheme != SIGN_URI_SCHEME:
        raise SignUriError(f"Invalid protocol, expected '{SIGN_URI_SCHEME}:' got '{url.scheme}:'")
    if url.netloc != SIGN_URI_ACTION:
        raise SignUriError(f"Invalid action, expected '{SIGN_URI_ACTION}' got '{url.netloc}'")

    segments = url.path.split("/")[1:]
    kind = segments[0] if segments else ""
    raw_payload = segments[1] if len(segments) > 1 else ""

    try:
        payload = json.loads(b64u_decode(raw_payload))
    except ValueError as e:
        raise SignUriError(f"Invalid payload: {e}") from e

    if kind == "tx":
        if not isinstance(payload, dict):
            raise SignUriError("Invalid payload: transaction must be an object")
        tx = payload
    elif kind in ("op", "ops"):
        operations = payload if kind == "ops" else [payload]
        tx = {
            "ref_block_num": REF_BLOCK_NUM_PLACEHOLDER,
            "ref_block_prefix": REF_BLOCK_PREFIX_PLACEHOLDER,
            "expiration": EXPIRATION_PLACEHOLDER,
            "extensions": [],
            "operations": operations,
        }
    else:
        raise SignUriError(f"Invalid signing action '{kind}'")

    query = dict(parse_qsl(url.query, keep_blank_values=True))
    params: Dict[str, Any] = {}
    if "cb" in query:
        try:
            params["callback"] = b64u_decode(query["cb"])
        except ValueError as e:
            raise SignUriError(f"Invalid callback: {e}") from e
    if "nb" in query:
        params["no_broadcast"] = True
    if "s" in query:
        params["signer"] = query["s"]

    return ParsedSignUri(tx=tx, params=SignParams(**params))


# =============================================================================
# RESOLVE
# =============================================================================


def resolve_callback(url: str, context: Mapping[str, Any]) -> str:
    """
    Подстановка результата подписи в callback URL.

    Placeholder'ы {{sig}}, {{id}}, {{block}}, {{txn}} заменяются
    percent-encoded значениями из context; отсутствующие → пустая строка.
    """

    def _replace(match: re.Match) -> str:
        value = context.get(match.group(1))
        return quote(str(value), safe="") if value else ""

    return _CALLBACK_PATTERN.sub(_replace, url)


def resolve_transaction(parsed: ParsedSignUri, options: ResolveOptions) -> ResolvedTransaction:
    """
    Заполнение шаблона транзакции данными цепочки и подписантом.

    Строка, целиком равная placeholder'у, заменяется значением как есть
    (ref_block_num остаётся int); placeholder внутри строки подставляется
    текстом.

    Raises:
        SignUriError: Если подписант недоступен
    """
    signer = parsed.params.signer or options.preferred_signer
    if signer not in options.signers:
        raise SignUriError(f"Signer '{signer}' not available")

    values: Dict[str, Any] = {
        "ref_block_num": options.ref_block_num,
        "ref_block_prefix": options.ref_block_prefix,
        "expiration": options.expiration,
        "signer": signer,
    }

    def _walk(value: Any) -> Any:
        if isinstance(value, str):
            whole = _RESOLVE_PATTERN.fullmatch(value)
            if whole:
                return values[whole.group(1)]
            return _RESOLVE_PATTERN.sub(lambda m: str(values[m.group(1)]), value)
        if isinstance(value, list):
            return [_walk(item) for item in value]
        if isinstance(value, dict):
            return {key: _walk(item) for key, item in value.items()}
        return value

    return ResolvedTransaction(tx=_walk(parsed.tx), signer=signer)
