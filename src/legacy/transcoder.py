"""Legacy URI Transcoder — legacy ссылка с query string → канонический URI.

Legacy формат:
    <scheme>://<operation>?<field>=<value>&...&redirect_uri=<callback>
    /<operation>?<field>=<value>&...            (путь приложения)

Порядок работы:
1. Имя операции: первый сегмент пути в snake_case
   (для не-web схем первым сегментом считается authority: app://vote)
2. Операция должна быть в реестре, иначе NOT_RECOGNIZED
3. Для каждого поля схемы, присутствующего в query:
   - array/object: разбор JSON, при ошибке исходная строка
   - bool: True для "true"/"1", иначе False
   - остальное: строка без изменений
4. Кодирование [[name, params]] + {callback} в канонический URI и обратное
   декодирование в структурированную форму

Транскодер ничего не логирует и не бросает: любое исключение при разборе,
кодировании или декодировании даёт MALFORMED_INPUT. Логирование выполняет
legacy_uri_to_parsed_sign_uri.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, unquote, urlsplit

from src.core.codec.sign_uri import ParsedSignUri, SignParams, decode, encode_ops
from src.core.domain.operation_schema import FieldType, OperationRegistry, OperationSchema
from src.legacy.text import json_parse, snake_case

logger = logging.getLogger(__name__)


class TranscodeStatus(str, Enum):
    """Исход транскодирования"""

    OK = "OK"
    NOT_RECOGNIZED = "NOT_RECOGNIZED"
    MALFORMED_INPUT = "MALFORMED_INPUT"


@dataclass(frozen=True)
class LegacyUriConfig:
    """Конфигурация разбора legacy ссылок."""

    # Параметр query string с URL возврата
    callback_param: str = "redirect_uri"

    # Значения, которые считаются истиной для полей типа bool
    bool_true_values: Tuple[Any, ...] = ("true", True, 1, "1")

    # Схемы, у которых authority является хостом, а не именем операции
    web_schemes: Tuple[str, ...] = ("http", "https")


@dataclass(frozen=True)
class TranscodeResult:
    """Результат транскодирования legacy ссылки."""

    status: TranscodeStatus
    operation_name: str

    # Канонический URI и его декодированная форма (только для OK)
    uri: Optional[str]
    parsed: Optional[ParsedSignUri]

    # Детали
    details: str

    @property
    def ok(self) -> bool:
        return self.status == TranscodeStatus.OK


class LegacyUriTranscoder:
    """Перевод legacy ссылок в канонический URI по реестру схем."""

    def __init__(self, registry: OperationRegistry, config: Optional[LegacyUriConfig] = None):
        self._registry = registry
        self._config = config or LegacyUriConfig()

    def operation_name(self, url: SplitResult) -> str:
        """Имя операции из первого сегмента пути (snake_case)."""
        segments: List[str] = [s for s in url.path.split("/") if s]
        if url.netloc and url.scheme and url.scheme not in self._config.web_schemes:
            segments.insert(0, url.netloc)
        return snake_case(unquote(segments[0])) if segments else ""

    def query_params(self, url: SplitResult) -> Dict[str, str]:
        """Плоский словарь query string; повторяющийся ключ → последнее значение."""
        return dict(parse_qsl(url.query, keep_blank_values=True))

    def resolve_params(self, schema: OperationSchema, query: Dict[str, str]) -> Dict[str, Any]:
        """Параметры операции по полям схемы.

        Поля, отсутствующие в query (или с пустым значением), пропускаются.
        """
        params: Dict[str, Any] = {}
        for key, spec in schema.field_specs.items():
            value: Any = query.get(key)
            if not value:
                continue

            kind = spec.kind
            if kind.is_structured:
                value = json_parse(value, value)
            elif kind is FieldType.BOOL:
                value = value in self._config.bool_true_values
            params[key] = value
        return params

    def transcode(self, uri: str) -> TranscodeResult:
        """Транскодирование legacy ссылки.

        Args:
            uri: Legacy ссылка

        Returns:
            TranscodeResult: OK с каноническим URI, NOT_RECOGNIZED для
            операций вне реестра, MALFORMED_INPUT для некорректного ввода
        """
        op_name = ""
        try:
            url = urlsplit(uri)
            op_name = self.operation_name(url)
            query = self.query_params(url)

            schema = self._registry.get(op_name)
            if schema is None:
                return TranscodeResult(
                    status=TranscodeStatus.NOT_RECOGNIZED,
                    operation_name=op_name,
                    uri=None,
                    parsed=None,
                    details=f"Operation '{op_name}' is not present in the schema registry",
                )

            op_params = self.resolve_params(schema, query)
            sign_params = SignParams(callback=query.get(self._config.callback_param))
            canonical = encode_ops([[op_name, op_params]], sign_params)
            parsed = decode(canonical)
        except Exception as e:
            return TranscodeResult(
                status=TranscodeStatus.MALFORMED_INPUT,
                operation_name=op_name,
                uri=None,
                parsed=None,
                details=f"{type(e).__name__}: {e}",
            )

        return TranscodeResult(
            status=TranscodeStatus.OK,
            operation_name=op_name,
            uri=canonical,
            parsed=parsed,
            details=f"PASS: operation={op_name}, fields={sorted(op_params)}",
        )


def legacy_uri_to_parsed_sign_uri(
    uri: str,
    registry: OperationRegistry,
    config: Optional[LegacyUriConfig] = None,
) -> Optional[ParsedSignUri]:
    """Декодированный канонический URI для legacy ссылки или None.

    None означает «не распознанная legacy ссылка», а не сбой.
    """
    result = LegacyUriTranscoder(registry, config).transcode(uri)
    if result.status == TranscodeStatus.MALFORMED_INPUT:
        logger.warning("Failed to parse legacy uri %r: %s", uri, result.details)
    elif result.status == TranscodeStatus.NOT_RECOGNIZED:
        logger.debug("Legacy uri %r not recognized: %s", uri, result.details)
    return result.parsed
