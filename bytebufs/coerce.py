"""Conversion of byte-like values and resolution of slice bounds."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional, Tuple

__all__ = ["as_bytes", "resolve_range"]


def as_bytes(value: Any) -> bytes:
    """Return the bytes that ``value`` stands for.

    Accepts ``bytes``, ``bytearray``, ``memoryview``, ``str`` (encoded as
    UTF-8), objects defining ``__bytes__`` and iterables of integers in
    ``0..256``. Integers, floats and ``None`` raise ``TypeError``.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bool, int, float)) or value is None:
        raise TypeError(f"cannot interpret {type(value).__name__} as bytes")
    if hasattr(type(value), "__bytes__"):
        return bytes(value)
    if isinstance(value, Iterable):
        return bytes(value)
    raise TypeError(f"cannot interpret {type(value).__name__} as bytes")


def resolve_range(
    start: Optional[int], stop: Optional[int], length: int
) -> Tuple[int, int]:
    """Resolve optional bounds against ``length`` into ``(begin, end)``.

    A missing ``start`` means 0 and a missing ``stop`` means ``length``.
    Raises ``ValueError`` for negative bounds or ``start > stop`` and
    ``IndexError`` when ``stop`` lies past ``length``.
    """
    if length < 0:
        raise ValueError(f"length must not be negative: {length}")
    begin = 0 if start is None else start
    end = length if stop is None else stop
    if begin < 0 or end < 0:
        raise ValueError(f"range bounds must not be negative: {begin}..{end}")
    if begin > end:
        raise ValueError(
            f"range start must not be greater than end: {begin} <= {end}"
        )
    if end > length:
        raise IndexError(f"range end out of bounds: {end} <= {length}")
    return begin, end