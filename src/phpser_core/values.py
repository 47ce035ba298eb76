"""Value types for decoded PHP serialized data."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union


def decode_text(data: bytes) -> str:
    """Decode a payload for display: UTF-8 first, Latin-1 as a lossless fallback."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


# ---------------------------------------------------------------------------
# Null — singleton for N;
# ---------------------------------------------------------------------------

class VNull:
    """Singleton for the ``N;`` production."""

    _instance: "VNull | None" = None

    def __new__(cls) -> "VNull":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "null"


Null = VNull()


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True, slots=True)
class VInt:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VFloat:
    value: float

    def __str__(self) -> str:
        v = self.value
        if math.isnan(v):
            return "NAN"
        if math.isinf(v):
            return "INF" if v > 0 else "-INF"
        if v == 0 and math.copysign(1.0, v) < 0:
            return "-0"
        if v.is_integer() and abs(v) < 1e16:
            return str(int(v))
        return str(v)


@dataclass(frozen=True, slots=True)
class VText:
    data: bytes  # raw payload, exactly the declared byte length

    @classmethod
    def of(cls, text: str) -> "VText":
        return cls(text.encode("utf-8"))

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def text(self) -> str:
        return decode_text(self.data)

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Associative container
# ---------------------------------------------------------------------------

Key = Union[VInt, VText]


@dataclass(frozen=True)
class VAssoc:
    """The format's only aggregate; entries keep declaration order."""

    entries: dict[Key, "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return f"VAssoc({len(self.entries)})"

    def display_index(self) -> dict[str, Key]:
        """Map each key's display form to the first key that has it."""
        index: dict[str, Key] = {}
        for k in self.entries:
            index.setdefault(str(k), k)
        return index

    def lookup(
        self, key: str, index: dict[str, Key] | None = None
    ) -> "tuple[Key, Value] | None":
        """Find the entry for a key given in display form.

        An exact ``VText`` match wins; otherwise the first entry whose key
        displays as *key* (e.g. ``VInt(0)`` for ``"0"``). Pass a prebuilt
        display_index() when resolving many keys.
        """
        exact = VText.of(key)
        if exact in self.entries:
            return exact, self.entries[exact]
        if index is None:
            index = self.display_index()
        found = index.get(key)
        if found is None:
            return None
        return found, self.entries[found]


Value = Union[VNull, VBool, VInt, VFloat, VText, VAssoc]
