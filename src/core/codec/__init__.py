"""
Codec modules

URL-safe Base64 и канонический URI запроса на подпись.
"""

from src.core.codec.b64u import b64u_decode, b64u_encode
from src.core.codec.sign_uri import (
    EXPIRATION_PLACEHOLDER,
    REF_BLOCK_NUM_PLACEHOLDER,
    REF_BLOCK_PREFIX_PLACEHOLDER,
    SIGN_URI_SCHEME,
    SIGNER_PLACEHOLDER,
    ParsedSignUri,
    ResolvedTransaction,
    ResolveOptions,
    SignParams,
    SignUriError,
    decode,
    encode_op,
    encode_ops,
    encode_tx,
    resolve_callback,
    resolve_transaction,
)

__all__ = [
    # URL-safe Base64
    "b64u_encode",
    "b64u_decode",
    # Sign URI
    "SIGN_URI_SCHEME",
    "REF_BLOCK_NUM_PLACEHOLDER",
    "REF_BLOCK_PREFIX_PLACEHOLDER",
    "EXPIRATION_PLACEHOLDER",
    "SIGNER_PLACEHOLDER",
    "SignParams",
    "ParsedSignUri",
    "ResolveOptions",
    "ResolvedTransaction",
    "SignUriError",
    "encode_op",
    "encode_ops",
    "encode_tx",
    "decode",
    "resolve_callback",
    "resolve_transaction",
]
