"""Recursive-descent decoder for PHP serialize() output."""

from __future__ import annotations

import logging
import re
import sys

from .errors import (
    DecodeError,
    UnknownMarker,
    InvalidNumericLiteral,
    TextLengthMismatch,
    EntryCountMismatch,
    DepthExceeded,
)
from .values import Key, Null, Value, VAssoc, VBool, VFloat, VInt, VText

logger = logging.getLogger(__name__)

# Each nesting level costs two Python frames (_decode_value + _decode_assoc).
DEFAULT_MAX_DEPTH = 256

# Frames reserved for callers and for rendering the decoded tree.
_STACK_HEADROOM = 200

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_RE = re.compile(rb"[+-]?\d+")
_FLOAT_RE = re.compile(rb"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_FLOAT_SPECIAL = {
    b"INF": float("inf"),
    b"-INF": float("-inf"),
    b"NAN": float("nan"),
}


def decode_value(data: bytes, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Decode one serialized value from *data*.

    Raises a DecodeError subclass on any grammar violation; there is no
    partial result. Bytes left over after the value are logged, not fatal.
    A *max_depth* above max_safe_depth() is lowered to it.
    """
    if max_depth < 1:
        raise ValueError("max_depth must be positive")
    ceiling = max_safe_depth()
    if max_depth > ceiling:
        logger.debug("Lowering max_depth from %d to %d", max_depth, ceiling)
        max_depth = ceiling
    value, pos = _decode_value(data, 0, 0, max_depth)
    if pos < len(data) and data[pos:].strip():
        logger.warning(
            "Ignoring %d trailing bytes at offset %d", len(data) - pos, pos
        )
    return value


def max_safe_depth() -> int:
    """Deepest nesting the decoder can follow under the current recursion limit."""
    return max(1, (sys.getrecursionlimit() - _STACK_HEADROOM) // 2)


# ---------------------------------------------------------------------------
# Low-level readers
# ---------------------------------------------------------------------------

def _expect(b: bytes, i: int, token: bytes) -> int:
    if not b.startswith(token, i):
        got = b[i:i + len(token)]
        raise DecodeError(f"expected {token!r}, got {got!r}", i)
    return i + len(token)


def _read_until(b: bytes, i: int, delim: bytes) -> tuple[bytes, int]:
    j = b.find(delim, i)
    if j == -1:
        raise DecodeError(f"unexpected end of input, {delim!r} not found", i)
    return b[i:j], j + len(delim)


def _read_count(b: bytes, i: int, what: str) -> tuple[int, int]:
    """Read ``<digits>:`` as a declared length or entry count."""
    raw, j = _read_until(b, i, b":")
    if not raw.isdigit():
        raise InvalidNumericLiteral(f"invalid {what}: {raw!r}", i)
    return int(raw), j


# ---------------------------------------------------------------------------
# Productions
# ---------------------------------------------------------------------------

def _decode_int(b: bytes, i: int) -> tuple[VInt, int]:
    raw, j = _read_until(b, i, b";")
    if not _INT_RE.fullmatch(raw):
        raise InvalidNumericLiteral(f"invalid integer: {raw!r}", i)
    n = int(raw)
    if not INT64_MIN <= n <= INT64_MAX:
        raise InvalidNumericLiteral(f"integer out of 64-bit range: {raw!r}", i)
    return VInt(n), j


def _decode_float(b: bytes, i: int) -> tuple[VFloat, int]:
    raw, j = _read_until(b, i, b";")
    if raw in _FLOAT_SPECIAL:
        return VFloat(_FLOAT_SPECIAL[raw]), j
    if not _FLOAT_RE.fullmatch(raw):
        raise InvalidNumericLiteral(f"invalid float: {raw!r}", i)
    return VFloat(float(raw)), j


def _decode_bool(b: bytes, i: int) -> tuple[VBool, int]:
    digit = b[i:i + 1]
    if digit not in (b"0", b"1"):
        raise InvalidNumericLiteral(f"invalid boolean: {digit!r}", i)
    return VBool(digit == b"1"), _expect(b, i + 1, b";")


def _decode_text(b: bytes, i: int) -> tuple[VText, int]:
    """Parse ``<n>:"<n bytes>";`` (the ``s:`` marker already consumed)."""
    n, i = _read_count(b, i, "string length")
    i = _expect(b, i, b'"')
    end = i + n
    if end > len(b):
        raise TextLengthMismatch(
            f"declared length {n} but only {len(b) - i} bytes remain", i
        )
    if not b.startswith(b'";', end):
        raise TextLengthMismatch(
            f"declared length {n} does not match payload", end
        )
    return VText(b[i:end]), end + 2


def _decode_key(b: bytes, i: int) -> tuple[Key, int]:
    marker = b[i:i + 2]
    if marker == b"i:":
        return _decode_int(b, i + 2)
    if marker == b"s:":
        return _decode_text(b, i + 2)
    raise UnknownMarker(f"unsupported key type: {marker!r}", i)


def _decode_assoc(b: bytes, i: int, depth: int, max_depth: int) -> tuple[VAssoc, int]:
    """Parse ``<n>:{<n key/value pairs>}`` (the ``a:`` marker already consumed)."""
    if depth >= max_depth:
        raise DepthExceeded(f"nesting deeper than {max_depth} levels", i)
    count, i = _read_count(b, i, "entry count")
    i = _expect(b, i, b"{")

    entries: dict[Key, Value] = {}
    for n in range(count):
        if b.startswith(b"}", i):
            raise EntryCountMismatch(
                f"declared {count} entries, found {n}", i
            )
        key, i = _decode_key(b, i)
        value, i = _decode_value(b, i, depth + 1, max_depth)
        entries[key] = value

    if not b.startswith(b"}", i):
        raise EntryCountMismatch(
            f"declared {count} entries, container continues", i
        )
    return VAssoc(entries), i + 1


def _decode_value(b: bytes, i: int, depth: int, max_depth: int) -> tuple[Value, int]:
    marker = b[i:i + 2]

    if marker == b"N;":
        return Null, i + 2
    if marker == b"b:":
        return _decode_bool(b, i + 2)
    if marker == b"i:":
        return _decode_int(b, i + 2)
    if marker == b"d:":
        return _decode_float(b, i + 2)
    if marker == b"s:":
        return _decode_text(b, i + 2)
    if marker == b"a:":
        return _decode_assoc(b, i + 2, depth, max_depth)

    if not marker:
        raise UnknownMarker("unexpected end of input, expected a type marker", i)
    raise UnknownMarker(f"unknown type marker: {marker!r}", i)
