"""Tests for the decode() facade and Report."""

import time

from phpser_core import (
    decode,
    DepthExceeded,
    Report,
    InvalidLength,
    MalformedContainer,
    TextLengthMismatch,
    UnknownMarker,
    VAssoc,
    VInt,
    VText,
)


def test_decode_sample(sample):
    report = decode(sample)
    assert report.ok
    assert report.errors == []
    assert report.key_order == ["foo", "baz"]
    assert report.value == VAssoc({VText(b"foo"): VText(b"bar"), VText(b"baz"): VInt(42)})
    assert report.render() == "foo: bar\nbaz: 42\n"

def test_decode_truncated_text():
    report = decode(b's:5:"ab"')
    assert not report.ok
    assert [type(e) for e in report.errors] == [MalformedContainer, TextLengthMismatch]
    assert isinstance(report.decode_error, TextLengthMismatch)
    assert report.key_order == []

def test_raw_fallback():
    report = decode(b's:5:"ab"')
    assert report.render() == 's:5:"ab"'
    assert report.render(raw_fallback=False) == ""

def test_empty_buffer():
    report = decode(b"")
    assert [type(e) for e in report.errors] == [MalformedContainer, UnknownMarker]
    assert report.render() == ""

def test_scalar_top_level():
    report = decode(b"i:5;")
    assert report.ok
    assert isinstance(report.errors[0], MalformedContainer)
    assert report.decode_error is None
    assert report.render() == "5\n"

def test_order_failure_does_not_block_render():
    # Trailing junk after the container breaks the flat scan only.
    report = decode(b"a:1:{i:0;i:1;}s:x:}")
    assert report.ok
    assert [type(e) for e in report.errors] == [InvalidLength]
    assert report.key_order == []
    assert report.render() == "0: 1\n"

def test_concurrent_matches_sequential(serialize):
    data = serialize({"b": {"x": 1}, "a": "text", 3: None})
    seq = decode(data)
    par = decode(data, concurrent=True)
    assert par.value == seq.value
    assert par.key_order == seq.key_order
    assert par.render() == seq.render()

def test_max_depth_passed_through():
    report = decode(b"a:1:{i:0;a:0:{}}", max_depth=1)
    assert not report.ok
    assert "nesting" in str(report.decode_error)

def test_report_defaults():
    report = Report()
    assert not report.ok
    assert report.render() == ""

def test_large_list_renders_quickly():
    n = 20_000
    data = b"a:%d:{" % n + b"".join(b'i:%d;s:1:"x";' % i for i in range(n)) + b"}"
    start = time.perf_counter()
    report = decode(data)
    out = report.render()
    assert time.perf_counter() - start < 2.0
    assert report.ok
    assert len(report.key_order) == n
    assert out.count("\n") == n

def test_oversized_max_depth_reports_depth_error():
    data = b"a:1:{i:0;" * 5000 + b"N;" + b"}" * 5000
    for concurrent in (False, True):
        report = decode(data, max_depth=100_000, concurrent=concurrent)
        assert not report.ok
        assert isinstance(report.decode_error, DepthExceeded)
