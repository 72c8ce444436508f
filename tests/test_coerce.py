import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytebufs.coerce import as_bytes, resolve_range


class _HasBytes:
    def __init__(self, payload):
        self.payload = payload

    def __bytes__(self):
        return self.payload


def test_as_bytes_passes_bytes_through():
    data = b"hello world"
    assert as_bytes(data) is data


def test_as_bytes_bytearray_and_memoryview():
    assert as_bytes(bytearray(b"Hello")) == b"Hello"
    assert as_bytes(memoryview(b"world")) == b"world"


def test_as_bytes_str_is_utf8():
    assert as_bytes("Hello") == b"Hello"
    assert as_bytes("é") == "é".encode("utf-8")


def test_as_bytes_dunder_bytes():
    assert as_bytes(_HasBytes(b"abcdefgh")) == b"abcdefgh"


def test_as_bytes_iterable_of_ints():
    assert as_bytes([104, 105]) == bytes([104, 105])
    assert as_bytes(b for b in b"xyz") == b"xyz"


@pytest.mark.parametrize("value", [5, 1.5, None, True])
def test_as_bytes_rejects_scalars(value):
    with pytest.raises(TypeError):
        as_bytes(value)


def test_as_bytes_rejects_out_of_range_ints():
    with pytest.raises(ValueError):
        as_bytes([256])


def test_as_bytes_rejects_non_iterable_object():
    with pytest.raises(TypeError):
        as_bytes(object())


@given(st.binary())
def test_as_bytes_round_trips(data):
    assert as_bytes(bytearray(data)) == data
    assert as_bytes(list(data)) == data


def test_resolve_range_defaults():
    assert resolve_range(None, None, 11) == (0, 11)
    assert resolve_range(2, None, 11) == (2, 11)
    assert resolve_range(None, 5, 11) == (0, 5)


def test_resolve_range_explicit():
    assert resolve_range(2, 5, 11) == (2, 5)


def test_resolve_range_empty_is_allowed():
    assert resolve_range(3, 3, 3) == (3, 3)


def test_resolve_range_start_after_end():
    with pytest.raises(ValueError, match="start must not be greater"):
        resolve_range(5, 2, 11)


def test_resolve_range_end_out_of_bounds():
    with pytest.raises(IndexError, match="out of bounds"):
        resolve_range(0, 12, 11)


def test_resolve_range_negative():
    with pytest.raises(ValueError):
        resolve_range(-1, 2, 11)
    with pytest.raises(ValueError):
        resolve_range(None, None, -1)


@given(st.integers(0, 100), st.integers(0, 100), st.integers(0, 100))
def test_resolve_range_invariant(start, stop, length):
    if start <= stop <= length:
        begin, end = resolve_range(start, stop, length)
        assert 0 <= begin <= end <= length
        assert (begin, end) == (start, stop)
    elif start > stop:
        with pytest.raises(ValueError):
            resolve_range(start, stop, length)
    else:
        with pytest.raises(IndexError):
            resolve_range(start, stop, length)