import ast

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytebufs.formatting import debug_repr, format_bytes, lower_hex, upper_hex


def test_debug_repr_plain_ascii():
    assert debug_repr(b"hello world") == 'b"hello world"'


def test_debug_repr_escapes():
    assert debug_repr(b'\n\r\t\\"\x00\xff') == 'b"\\n\\r\\t\\\\\\"\\0\\xff"'


def test_debug_repr_empty():
    assert debug_repr(b"") == 'b""'


@given(st.binary())
def test_debug_repr_round_trips_as_literal(data):
    assert ast.literal_eval(debug_repr(data)) == data


@given(st.binary())
def test_debug_repr_is_ascii_only(data):
    text = debug_repr(data)
    assert all(0x20 <= ord(c) < 0x7F for c in text)


def test_debug_repr_accepts_bytearray_and_memoryview():
    data = b"abc\x01"
    assert debug_repr(bytearray(data)) == debug_repr(data)
    assert debug_repr(memoryview(data)) == debug_repr(data)


def test_debug_repr_rejects_str():
    with pytest.raises(TypeError):
        debug_repr("text")


@given(st.binary())
def test_lower_hex_round_trip(data):
    text = lower_hex(data)
    assert len(text) == 2 * len(data)
    assert text == text.lower()
    assert bytes.fromhex(text) == data


@given(st.binary())
def test_upper_hex_round_trip(data):
    text = upper_hex(data)
    assert len(text) == 2 * len(data)
    assert text == text.upper()
    assert bytes.fromhex(text) == data


@given(st.binary())
def test_upper_and_lower_agree(data):
    assert upper_hex(data).lower() == lower_hex(data)


@given(st.binary())
def test_format_bytes_dispatch(data):
    assert format_bytes(data, "") == debug_repr(data)
    assert format_bytes(data, "?") == debug_repr(data)
    assert format_bytes(data, "x") == lower_hex(data)
    assert format_bytes(data, "X") == upper_hex(data)


@pytest.mark.parametrize("spec", ["d", "b", "10x", "s"])
def test_format_bytes_unknown_spec(spec):
    with pytest.raises(ValueError):
        format_bytes(b"ab", spec)