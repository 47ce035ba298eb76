"""Tests for the ordered printer."""

import time

from phpser_core.printer import format_scalar, render
from phpser_core.values import Null, VAssoc, VBool, VFloat, VInt, VText


def _t(s: str) -> VText:
    return VText.of(s)


SAMPLE = VAssoc({_t("foo"): _t("bar"), _t("baz"): VInt(42)})


# ---------------------------------------------------------------------------
# format_scalar
# ---------------------------------------------------------------------------

def test_format_scalars():
    assert format_scalar(Null) == "null"
    assert format_scalar(VBool(False)) == "false"
    assert format_scalar(VInt(3)) == "3"
    assert format_scalar(VFloat(1.5)) == "1.5"
    assert format_scalar(_t("hi")) == "hi"


# ---------------------------------------------------------------------------
# Top-level ordering
# ---------------------------------------------------------------------------

def test_render_in_key_order():
    assert render(SAMPLE, ["foo", "baz"]) == "foo: bar\nbaz: 42\n"

def test_render_reordered():
    assert render(SAMPLE, ["baz", "foo"]) == "baz: 42\nfoo: bar\n"

def test_unknown_keys_skipped():
    assert render(SAMPLE, ["nope", "foo", "bar", "baz"]) == "foo: bar\nbaz: 42\n"

def test_repeated_key_rendered_once():
    assert render(SAMPLE, ["foo", "foo", "baz"]) == "foo: bar\nbaz: 42\n"

def test_unnamed_entries_follow_in_container_order():
    assert render(SAMPLE, ["baz"]) == "baz: 42\nfoo: bar\n"

def test_empty_order_uses_container_order():
    assert render(SAMPLE, []) == "foo: bar\nbaz: 42\n"
    assert render(SAMPLE, None) == "foo: bar\nbaz: 42\n"

def test_int_key_resolves_by_display_form():
    tree = VAssoc({VInt(1): _t("b"), VInt(0): _t("a")})
    assert render(tree, ["0", "1"]) == "0: a\n1: b\n"

def test_many_unresolved_names_render_quickly():
    tree = VAssoc({VInt(i): _t("x") for i in range(20_000)})
    names = ["x"] * 20_000 + [f"v{i}" for i in range(20_000)]
    start = time.perf_counter()
    out = render(tree, names)
    assert time.perf_counter() - start < 2.0
    assert out.count("\n") == 20_000
    assert out.startswith("0: x\n1: x\n")


# ---------------------------------------------------------------------------
# Nesting
# ---------------------------------------------------------------------------

def test_nested_indentation():
    tree = VAssoc({
        _t("a"): VAssoc({
            _t("b"): VInt(1),
            _t("c"): VAssoc({VInt(0): VBool(True)}),
        }),
        _t("d"): Null,
    })
    assert render(tree, ["a", "d"]) == (
        "a:\n"
        "  b: 1\n"
        "  c:\n"
        "    0: true\n"
        "d: null\n"
    )

def test_nested_ignores_key_order():
    tree = VAssoc({_t("a"): VAssoc({_t("x"): VInt(1), _t("y"): VInt(2)})})
    assert render(tree, ["y", "a", "x"]) == "a:\n  x: 1\n  y: 2\n"

def test_empty_nested_container():
    tree = VAssoc({_t("a"): VAssoc({})})
    assert render(tree, ["a"]) == "a:\n"

def test_custom_indent():
    tree = VAssoc({_t("a"): VAssoc({_t("b"): VInt(1)})})
    assert render(tree, ["a"], indent="\t") == "a:\n\tb: 1\n"


# ---------------------------------------------------------------------------
# Non-container input
# ---------------------------------------------------------------------------

def test_scalar_top_level():
    assert render(VInt(5), []) == "5\n"

def test_empty_top_level():
    assert render(VAssoc({}), []) == ""
