"""Reference-counted storage shared between buffer handles."""

from __future__ import annotations

import threading

__all__ = ["SharedBuffer", "check_advance"]


def check_advance(cnt: int, remaining: int) -> None:
    """Raise ``ValueError`` if advancing by ``cnt`` would pass ``remaining``."""
    if cnt < 0:
        raise ValueError(f"cannot advance by a negative count: {cnt}")
    if cnt > remaining:
        raise ValueError(
            f"advance out of bounds: the len is {remaining} but advancing by {cnt}"
        )


class SharedBuffer:
    """A fixed-capacity block of memory with a reference count.

    Every handle that views part of the block holds one reference. The last
    handle to call :meth:`release` frees the storage; after that any access
    raises ``RuntimeError``.
    """

    __slots__ = ("_storage", "_ref_count", "_lock", "original_capacity_repr")

    def __init__(self, data: bytes, capacity: int, original_capacity_repr: int) -> None:
        data = bytes(data)
        if capacity < len(data):
            raise ValueError(
                f"capacity {capacity} is smaller than the data length {len(data)}"
            )
        storage = bytearray(capacity)
        storage[: len(data)] = data
        self._storage = storage
        self._ref_count = 1
        self._lock = threading.Lock()
        self.original_capacity_repr = original_capacity_repr

    def __repr__(self) -> str:
        return (
            f"SharedBuffer(capacity={len(self._storage)}, "
            f"ref_count={self._ref_count})"
        )

    @property
    def capacity(self) -> int:
        """Number of bytes the storage holds."""
        self._check_alive()
        return len(self._storage)

    @property
    def ref_count(self) -> int:
        """Number of handles currently holding a reference."""
        return self._ref_count

    @property
    def released(self) -> bool:
        """True once the last reference has been released."""
        return self._ref_count == 0

    def _check_alive(self) -> None:
        if self._ref_count == 0:
            raise RuntimeError("shared buffer has been released")

    def _check_range(self, start: int, length: int) -> None:
        if start < 0 or length < 0:
            raise IndexError(f"negative range: start={start}, length={length}")
        if start + length > len(self._storage):
            raise IndexError(
                f"range {start}..{start + length} out of bounds for "
                f"capacity {len(self._storage)}"
            )

    def acquire(self) -> SharedBuffer:
        """Add a reference and return the buffer."""
        with self._lock:
            self._check_alive()
            self._ref_count += 1
        return self

    def release(self) -> bool:
        """Drop a reference; return True if it was the last one."""
        with self._lock:
            self._check_alive()
            self._ref_count -= 1
            if self._ref_count == 0:
                self._storage = bytearray()
                return True
        return False

    def is_unique(self) -> bool:
        """True if exactly one handle holds a reference."""
        return self._ref_count == 1

    def read(self, start: int, length: int) -> bytes:
        """Return a copy of ``length`` bytes beginning at ``start``."""
        self._check_alive()
        self._check_range(start, length)
        return bytes(self._storage[start : start + length])

    def write(self, start: int, data: bytes) -> None:
        """Overwrite the storage at ``start`` with ``data``."""
        self._check_alive()
        data = bytes(data)
        self._check_range(start, len(data))
        self._storage[start : start + len(data)] = data

    def ensure_capacity(self, capacity: int) -> int:
        """Grow the storage to at least ``capacity`` bytes; return the capacity."""
        self._check_alive()
        if capacity < 0:
            raise ValueError(f"capacity must not be negative: {capacity}")
        current = len(self._storage)
        if capacity > current:
            self._storage.extend(bytes(capacity - current))
        return len(self._storage)