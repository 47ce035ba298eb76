"""Top-level key order recovery by a flat byte scan.

The scan tracks no nesting: keys declared by nested containers are collected
as well, and the printer skips the ones it cannot resolve.
"""

from __future__ import annotations

from .errors import (
    MalformedContainer,
    InvalidLength,
    MalformedKey,
    TruncatedKey,
)
from .values import decode_text

_STRING_MARKER = b"s:"


def extract_top_level_keys(data: bytes) -> list[str]:
    """Return the string keys declared between the first ``{`` and last ``}``.

    Example::

        a:2:{s:3:"foo";s:3:"bar";s:3:"baz";i:42;}
        → ["foo", "baz"]
    """
    start = data.find(b"{")
    end = data.rfind(b"}")
    if start == -1 or end == -1 or end <= start:
        raise MalformedContainer("no top-level {...} container", max(start, 0))

    content = data[start + 1:end]
    base = start + 1
    keys: list[str] = []
    i = 0

    while i < len(content):
        if not content.startswith(_STRING_MARKER, i):
            i += 1
            continue

        scanned = _scan_string(content, i, base)
        if scanned is None:
            break
        key, i = scanned
        keys.append(decode_text(key))

        # A string right after a key is that key's value, not another key.
        if content.startswith(_STRING_MARKER, i):
            scanned = _scan_string(content, i, base)
            if scanned is None:
                break
            i = scanned[1]

    return keys


def _scan_string(content: bytes, i: int, base: int) -> tuple[bytes, int] | None:
    """Read ``s:<n>:"<payload>`` at *i*; return (payload, next index).

    Returns None when no length separator follows, which ends the scan.
    The index returned skips the closing ``";`` pair without checking it.
    """
    j = content.find(b":", i + 2)
    if j == -1:
        return None

    digits = content[i + 2:j]
    if not digits.isdigit():
        raise InvalidLength(f"invalid string length: {digits!r}", base + i + 2)
    n = int(digits)

    if content[j + 1:j + 2] != b'"':
        raise MalformedKey("expected '\"' after length", base + j + 1)

    payload_start = j + 2
    if payload_start + n > len(content):
        raise TruncatedKey(
            f"string length {n} exceeds remaining content", base + payload_start
        )

    return content[payload_start:payload_start + n], payload_start + n + 2
