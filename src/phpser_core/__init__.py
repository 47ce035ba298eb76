"""phpser_core — order-preserving reader for PHP serialize() payloads."""

from .decoder import DEFAULT_MAX_DEPTH, decode_value, max_safe_depth
from .errors import (
    PHPSerCoreError,
    KeyOrderError,
    MalformedContainer,
    InvalidLength,
    MalformedKey,
    TruncatedKey,
    DecodeError,
    UnknownMarker,
    InvalidNumericLiteral,
    TextLengthMismatch,
    EntryCountMismatch,
    DepthExceeded,
)
from .order import extract_top_level_keys
from .printer import format_scalar, render
from .report import Report, decode
from .values import (
    Key,
    Null,
    Value,
    VAssoc,
    VBool,
    VFloat,
    VInt,
    VNull,
    VText,
)

__all__ = [
    "decode",
    "decode_value",
    "extract_top_level_keys",
    "render",
    "format_scalar",
    "Report",
    "DEFAULT_MAX_DEPTH",
    "max_safe_depth",
    "Key",
    "Null",
    "Value",
    "VAssoc",
    "VBool",
    "VFloat",
    "VInt",
    "VNull",
    "VText",
    "PHPSerCoreError",
    "KeyOrderError",
    "MalformedContainer",
    "InvalidLength",
    "MalformedKey",
    "TruncatedKey",
    "DecodeError",
    "UnknownMarker",
    "InvalidNumericLiteral",
    "TextLengthMismatch",
    "EntryCountMismatch",
    "DepthExceeded",
]
