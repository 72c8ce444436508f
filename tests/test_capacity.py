import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytebufs.capacity import (
    MAX_ORIGINAL_CAPACITY_WIDTH,
    MIN_ORIGINAL_CAPACITY_WIDTH,
    original_capacity_from_repr,
    original_capacity_to_repr,
)


def _expected_for_width(width):
    if width < MIN_ORIGINAL_CAPACITY_WIDTH:
        return 0
    if width < MAX_ORIGINAL_CAPACITY_WIDTH:
        return width - MIN_ORIGINAL_CAPACITY_WIDTH
    return MAX_ORIGINAL_CAPACITY_WIDTH - MIN_ORIGINAL_CAPACITY_WIDTH


def test_to_repr_zero():
    assert original_capacity_to_repr(0) == 0


@pytest.mark.parametrize("width", range(1, 33))
def test_to_repr_by_width(width):
    cap = 1 << (width - 1)
    expected = _expected_for_width(width)

    assert original_capacity_to_repr(cap) == expected

    if width > 1:
        assert original_capacity_to_repr(cap + 1) == expected

    if width == MIN_ORIGINAL_CAPACITY_WIDTH + 1:
        assert original_capacity_to_repr(cap - 24) == expected - 1
        assert original_capacity_to_repr(cap + 76) == expected
    elif width == MIN_ORIGINAL_CAPACITY_WIDTH + 2:
        assert original_capacity_to_repr(cap - 1) == expected - 1
        assert original_capacity_to_repr(cap - 48) == expected - 1


def test_from_repr():
    assert original_capacity_from_repr(0) == 0

    min_cap = 1 << MIN_ORIGINAL_CAPACITY_WIDTH

    assert original_capacity_from_repr(1) == min_cap
    assert original_capacity_from_repr(2) == min_cap * 2
    assert original_capacity_from_repr(3) == min_cap * 4
    assert original_capacity_from_repr(4) == min_cap * 8
    assert original_capacity_from_repr(5) == min_cap * 16
    assert original_capacity_from_repr(6) == min_cap * 32
    assert original_capacity_from_repr(7) == min_cap * 64


@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_repr_is_bounded_and_decodes_below_cap(cap):
    repr_ = original_capacity_to_repr(cap)
    assert 0 <= repr_ <= MAX_ORIGINAL_CAPACITY_WIDTH - MIN_ORIGINAL_CAPACITY_WIDTH
    assert original_capacity_from_repr(repr_) <= cap


@given(st.integers(min_value=0, max_value=7))
def test_from_repr_round_trips(repr_):
    assert original_capacity_to_repr(original_capacity_from_repr(repr_)) == repr_


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        original_capacity_to_repr(-1)


def test_negative_repr_rejected():
    with pytest.raises(ValueError):
        original_capacity_from_repr(-1)