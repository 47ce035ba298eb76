"""binreader — inspect a binary file and optionally decode it as PHP serialized data.

Provides the ``binreader`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime

from .decoder import DEFAULT_MAX_DEPTH
from .report import decode
from .values import decode_text

DEFAULT_MAX_SIZE = 10 * 1024 * 1024


# ---------------------------------------------------------------------------
# Colouring
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Palette:
    """ANSI sequences used to highlight section labels. Empty strings disable colour."""

    green: str = "\033[32m"
    yellow: str = "\033[33m"
    red: str = "\033[31m"
    reset: str = "\033[0m"

    @classmethod
    def plain(cls) -> "Palette":
        return cls("", "", "", "")


_LABEL_COLORS = (
    ("File content (raw):", "green"),
    ("Hex dump of file content:", "green"),
    ("PHP Serialized Data (parsed):", "green"),
    ("File Metadata:", "yellow"),
    ("Searching for pattern:", "yellow"),
    ("Comparing", "yellow"),
    ("Error:", "red"),
)


def colorize(text: str, palette: Palette) -> str:
    """Wrap the known section labels of *text* in the palette's colours."""
    if not palette.reset:
        return text
    for label, color in _LABEL_COLORS:
        text = text.replace(label, f"{getattr(palette, color)}{label}{palette.reset}")
    return text


# ---------------------------------------------------------------------------
# Byte helpers
# ---------------------------------------------------------------------------

def hexdump(data: bytes) -> str:
    """Canonical hex+ASCII dump, 16 bytes per line."""
    lines = []
    for off in range(0, len(data), 16):
        chunk = data[off:off + 16]
        left = " ".join(f"{b:02x}" for b in chunk[:8])
        right = " ".join(f"{b:02x}" for b in chunk[8:])
        hex_part = f"{left}  {right}" if right else left
        text = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(f"{off:08x}  {hex_part:<48}  |{text}|\n")
    return "".join(lines)


def find_all(data: bytes, pattern: bytes) -> list[int]:
    """Offsets of every non-overlapping occurrence of *pattern*."""
    if not pattern:
        return []
    offsets = []
    pos = data.find(pattern)
    while pos != -1:
        offsets.append(pos)
        pos = data.find(pattern, pos + len(pattern))
    return offsets


def diff_bytes(a: bytes, b: bytes) -> list[str]:
    """Describe every differing offset, plus a length mismatch if any."""
    diffs = [
        f"Offset {i}: {x:x} vs {y:x}"
        for i, (x, y) in enumerate(zip(a, b))
        if x != y
    ]
    if len(a) != len(b):
        diffs.append(f"Length mismatch: {len(a)} vs {len(b)} bytes")
    return diffs


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

class InputFileError(Exception):
    pass


def read_checked(path: str, max_size: int, what: str = "File") -> tuple[bytes, os.stat_result]:
    """Read *path* after existence and size checks."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        raise InputFileError(f"{what} '{path}' does not exist") from None
    except OSError as exc:
        raise InputFileError(f"Unable to access {what.lower()} '{path}': {exc}") from None

    if st.st_size > max_size:
        raise InputFileError(
            f"{what} '{path}' size ({st.st_size} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)"
        )

    try:
        with open(path, "rb") as fh:
            return fh.read(), st
    except OSError as exc:
        raise InputFileError(f"Unable to read {what.lower()} '{path}': {exc}") from None


def _fmt_time(ts: float) -> str:
    return datetime.fromtimestamp(ts).astimezone().strftime("%a, %d %b %Y %H:%M:%S %Z")


# ---------------------------------------------------------------------------
# Report sections
# ---------------------------------------------------------------------------

def _metadata_section(path: str, st: os.stat_result) -> str:
    return (
        "File Metadata:\n"
        f"  Name: {os.path.basename(path)}\n"
        f"  Size: {st.st_size} bytes\n"
        f"  Modified: {_fmt_time(st.st_mtime)}\n"
        f"  Last Accessed: {_fmt_time(st.st_atime)}\n"
        "\n"
    )


def _content_section(data: bytes, hex_view: bool) -> str:
    if hex_view:
        return "Hex dump of file content:\n" + hexdump(data)
    return "File content (raw):\n" + decode_text(data) + "\n"


def _verbose_section(path: str, data: bytes) -> str:
    raw = "[" + " ".join(str(b) for b in data) + "]"
    return f"File: {path}\nSize: {len(data)} bytes\nRaw bytes: {raw}\n"


def _search_section(data: bytes, pattern: str) -> str:
    out = f"Searching for pattern: {pattern!r}\n"
    offsets = find_all(data, pattern.encode("utf-8"))
    if offsets:
        out += f"Found {len(offsets)} matches at offsets: {offsets}\n"
    else:
        out += "No matches found\n"
    return out + "\n"


def _compare_section(path: str, data: bytes, other_path: str, other: bytes) -> str:
    out = f"Comparing '{path}' with '{other_path}':\n"
    if data == other:
        return out + "Files are identical\n\n"
    diffs = diff_bytes(data, other)
    out += "Files differ\n"
    out += f"Differences found: {len(diffs)}\n"
    out += "".join(f"  {d}\n" for d in diffs)
    return out + "\n"


def _php_section(data: bytes, max_depth: int) -> str:
    report = decode(data, max_depth=max_depth)
    out = "PHP Serialized Data (parsed):\n"
    for err in report.errors:
        if err is report.decode_error:
            out += f"Failed to parse as PHP serialized data: {err}\n"
        else:
            out += f"Error extracting key order: {err}\n"
    if report.ok:
        out += report.render()
    return out + "\n"


def build_report(args: argparse.Namespace) -> str:
    """Assemble the uncoloured report text for the parsed CLI arguments."""
    data, st = read_checked(args.file, args.max_size)

    out = ""
    if args.metadata:
        out += _metadata_section(args.file, st)
    if not args.php:
        out += _content_section(data, args.hex)
    if args.verbose:
        out += _verbose_section(args.file, data)
    if args.search:
        out += _search_section(data, args.search)
    if args.compare:
        other, _ = read_checked(args.compare, args.max_size, "Comparison file")
        out += _compare_section(args.file, data, args.compare, other)
    if args.php:
        out += _php_section(data, args.max_depth)
    return out


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binreader",
        description="Inspect a binary file; decode PHP serialized data with --php.",
    )
    parser.add_argument("-f", "--file", required=True, help="Path to the .bin file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    parser.add_argument("-o", "--output", help="Save output to a file")
    parser.add_argument(
        "-m", "--max-size", type=int, default=DEFAULT_MAX_SIZE,
        help="Maximum file size in bytes (default: 10MB)",
    )
    parser.add_argument("-x", "--hex", action="store_true", help="Display file content as a hex dump")
    parser.add_argument("-d", "--metadata", action="store_true", help="Show file metadata")
    parser.add_argument("-s", "--search", help="Search for a string in the file")
    parser.add_argument("-c", "--compare", help="Compare with another .bin file")
    parser.add_argument("-p", "--php", action="store_true", help="Parse content as PHP serialized data")
    parser.add_argument(
        "--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
        help=f"Maximum container nesting when decoding (default: {DEFAULT_MAX_DEPTH}; "
        "values above the interpreter's safe limit are lowered to it)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run ``binreader``; returns the process exit status."""
    args = make_parser().parse_args(argv)

    if not logging.getLogger().hasHandlers():
        level = logging.DEBUG if args.debug else logging.WARNING
        logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")

    if args.max_depth < 1:
        print("Error: --max-depth must be positive", file=sys.stderr)
        return 1

    palette = Palette.plain() if args.no_color else Palette()

    try:
        output = build_report(args)
    except InputFileError as exc:
        print(colorize(f"Error: {exc}", palette), file=sys.stderr)
        return 1

    sys.stdout.write(colorize(output, palette))

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as fh:
                fh.write(output)
        except OSError as exc:
            print(f"Error: Unable to write to output file '{args.output}': {exc}", file=sys.stderr)
            return 1
        print(f"Output saved to '{args.output}'")

    return 0


if __name__ == "__main__":
    sys.exit(main())
