import pytest


def php_serialize(value) -> bytes:
    """Minimal serialize() for building test inputs."""
    if value is None:
        return b"N;"
    if isinstance(value, bool):
        return b"b:1;" if value else b"b:0;"
    if isinstance(value, int):
        return f"i:{value};".encode()
    if isinstance(value, float):
        return f"d:{value!r};".encode()
    if isinstance(value, str):
        value = value.encode("utf-8")
    if isinstance(value, bytes):
        return b"s:%d:\"%s\";" % (len(value), value)
    if isinstance(value, dict):
        body = b"".join(php_serialize(k) + php_serialize(v) for k, v in value.items())
        return b"a:%d:{%s}" % (len(value), body)
    raise TypeError(f"cannot serialize {type(value).__name__}")


@pytest.fixture
def serialize():
    """Return the test encoder for PHP serialized data."""
    return php_serialize


@pytest.fixture
def sample() -> bytes:
    return b'a:2:{s:3:"foo";s:3:"bar";s:3:"baz";i:42;}'
