"""Report — the combined result of decoding one input buffer."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .decoder import DEFAULT_MAX_DEPTH, decode_value
from .errors import DecodeError, KeyOrderError, PHPSerCoreError
from .order import extract_top_level_keys
from .printer import render
from .values import Value, decode_text

logger = logging.getLogger(__name__)


@dataclass
class Report:
    """Holds the decoded tree, the top-level key order and any errors."""

    data: bytes = b""
    value: Value | None = None
    key_order: list[str] = field(default_factory=list)
    errors: list[PHPSerCoreError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when the value tree was decoded."""
        return self.value is not None

    @property
    def decode_error(self) -> DecodeError | None:
        for err in self.errors:
            if isinstance(err, DecodeError):
                return err
        return None

    def render(self, raw_fallback: bool = True, indent: str = "  ") -> str:
        """Rendered tree, or the raw input when decoding failed."""
        if self.value is not None:
            return render(self.value, self.key_order, indent)
        if raw_fallback:
            return decode_text(self.data)
        return ""


def decode(data: bytes, max_depth: int = DEFAULT_MAX_DEPTH, concurrent: bool = False) -> Report:
    """Run key order extraction and value decoding over *data*.

    Never raises for malformed input: failures are recorded on the report.
    With *concurrent* the two passes run on separate threads.
    """
    report = Report(data=data)

    if concurrent:
        with ThreadPoolExecutor(max_workers=2) as pool:
            order_future = pool.submit(_extract, data)
            value_future = pool.submit(_decode, data, max_depth)
            key_order, order_error = order_future.result()
            value, value_error = value_future.result()
    else:
        key_order, order_error = _extract(data)
        value, value_error = _decode(data, max_depth)

    report.key_order = key_order
    report.value = value
    report.errors = [e for e in (order_error, value_error) if e is not None]
    return report


def _extract(data: bytes) -> tuple[list[str], KeyOrderError | None]:
    try:
        return extract_top_level_keys(data), None
    except KeyOrderError as exc:
        logger.debug("Key order extraction failed: %s", exc)
        return [], exc


def _decode(data: bytes, max_depth: int) -> tuple[Value | None, DecodeError | None]:
    try:
        return decode_value(data, max_depth), None
    except DecodeError as exc:
        logger.info("Decoding failed: %s", exc)
        return None, exc
