"""Core request building and file encoding (no network)."""

from __future__ import annotations

from .codec import (
    compress,
    compress_and_encode,
    compress_on_disk,
    decode_and_decompress,
    decode_base64,
    decompress,
    encode_base64,
)
from .payload import OperationPayload, require_fields, validate_operation

__all__ = [
    "OperationPayload",
    "compress",
    "compress_and_encode",
    "compress_on_disk",
    "decode_and_decompress",
    "decode_base64",
    "decompress",
    "encode_base64",
    "require_fields",
    "validate_operation",
]
