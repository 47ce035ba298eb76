"""Exception hierarchy for phpser_core."""

from __future__ import annotations


class PHPSerCoreError(Exception):
    """Base class; *pos* is the byte offset where the problem was found."""

    def __init__(self, message: str, pos: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos

    def __str__(self) -> str:
        return f"{self.message} (at byte {self.pos})"


# ---------------------------------------------------------------------------
# Key order extraction — never fatal
# ---------------------------------------------------------------------------

class KeyOrderError(PHPSerCoreError):
    pass


class MalformedContainer(KeyOrderError):
    pass


class InvalidLength(KeyOrderError):
    pass


class MalformedKey(KeyOrderError):
    pass


class TruncatedKey(KeyOrderError):
    pass


# ---------------------------------------------------------------------------
# Value decoding — fatal to rendering
# ---------------------------------------------------------------------------

class DecodeError(PHPSerCoreError):
    """Grammar violation. Raised directly for missing delimiters."""


class UnknownMarker(DecodeError):
    pass


class InvalidNumericLiteral(DecodeError):
    pass


class TextLengthMismatch(DecodeError):
    pass


class EntryCountMismatch(DecodeError):
    pass


class DepthExceeded(DecodeError):
    pass
