"""Legacy — перевод legacy ссылок с query string в канонический URI подписи."""

from .text import json_parse, snake_case
from .transcoder import (
    LegacyUriConfig,
    LegacyUriTranscoder,
    TranscodeResult,
    TranscodeStatus,
    legacy_uri_to_parsed_sign_uri,
)

__all__ = [
    "LegacyUriConfig",
    "LegacyUriTranscoder",
    "TranscodeResult",
    "TranscodeStatus",
    "legacy_uri_to_parsed_sign_uri",
    "json_parse",
    "snake_case",
]
