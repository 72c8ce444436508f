"""Compact encoding of a buffer's original capacity as a small integer."""

from __future__ import annotations

__all__ = [
    "MAX_ORIGINAL_CAPACITY_WIDTH",
    "MIN_ORIGINAL_CAPACITY_WIDTH",
    "original_capacity_to_repr",
    "original_capacity_from_repr",
]

# Capacities above 2**(MAX - 1) are recorded as the maximum.
MAX_ORIGINAL_CAPACITY_WIDTH = 17
# Capacities below 1 KiB are not recorded at all.
MIN_ORIGINAL_CAPACITY_WIDTH = 10

_MAX_REPR = MAX_ORIGINAL_CAPACITY_WIDTH - MIN_ORIGINAL_CAPACITY_WIDTH


def original_capacity_to_repr(cap: int) -> int:
    """Encode a capacity as a power-of-two bucket number from 0 to 7."""
    if cap < 0:
        raise ValueError(f"capacity must not be negative: {cap}")
    width = (cap >> MIN_ORIGINAL_CAPACITY_WIDTH).bit_length()
    return min(width, _MAX_REPR)


def original_capacity_from_repr(repr_: int) -> int:
    """Decode a bucket number into the capacity it stands for."""
    if repr_ < 0:
        raise ValueError(f"capacity repr must not be negative: {repr_}")
    if repr_ == 0:
        return 0
    return 1 << (repr_ + (MIN_ORIGINAL_CAPACITY_WIDTH - 1))