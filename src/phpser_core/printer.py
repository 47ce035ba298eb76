"""Indented text rendering of a decoded value tree."""

from __future__ import annotations

from .values import Key, Value, VAssoc


def format_scalar(value: Value) -> str:
    """Display form of a scalar (or a short VAssoc summary)."""
    return str(value)


def render(value: Value, key_order: list[str] | None = None, indent: str = "  ") -> str:
    """Render *value* as ``key: value`` lines.

    The top-level container follows *key_order*; keys that do not resolve
    are skipped and entries it never names follow in container order.
    Nested containers always use container order.
    """
    if not isinstance(value, VAssoc):
        return format_scalar(value) + "\n"

    lines: list[str] = []
    _render_entries(lines, _ordered_entries(value, key_order or []), 0, indent)
    return "".join(line + "\n" for line in lines)


def _ordered_entries(assoc: VAssoc, key_order: list[str]) -> list[tuple[Key, Value]]:
    """Top-level entries in *key_order*, each at most once, then the rest."""
    seen: set[Key] = set()
    ordered: list[tuple[Key, Value]] = []
    index = assoc.display_index()

    for name in key_order:
        found = assoc.lookup(name, index)
        if found is None or found[0] in seen:
            continue
        seen.add(found[0])
        ordered.append(found)

    for key, val in assoc.entries.items():
        if key not in seen:
            ordered.append((key, val))
    return ordered


def _render_entries(
    lines: list[str],
    entries: list[tuple[Key, Value]],
    depth: int,
    indent: str,
) -> None:
    pad = indent * depth
    for key, val in entries:
        if isinstance(val, VAssoc):
            lines.append(f"{pad}{key}:")
            _render_entries(lines, list(val.entries.items()), depth + 1, indent)
        else:
            lines.append(f"{pad}{key}: {format_scalar(val)}")
