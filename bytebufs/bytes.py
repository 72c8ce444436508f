"""An immutable, cheaply cloneable and sliceable view of contiguous bytes."""

from __future__ import annotations

import functools
from typing import Any, Iterator, Optional, Union

from .coerce import as_bytes, resolve_range
from .formatting import debug_repr, format_bytes
from .shared import SharedBuffer, check_advance

__all__ = ["Bytes"]

_EMPTY = b""


def _comparable(other: Any) -> Optional[bytes]:
    """Return the bytes ``other`` compares as, or None if it does not compare."""
    if isinstance(other, Bytes):
        return other._view()
    if isinstance(other, (bytes, bytearray, memoryview, str)):
        return as_bytes(other)
    if hasattr(type(other), "__bytes__"):
        return bytes(other)
    return None


@functools.total_ordering
class Bytes:
    """A view into byte storage that may be shared with other handles.

    Handles built with :meth:`from_static` point at an immutable ``bytes``
    object and never count as unique. All other handles hold a reference to
    a :class:`SharedBuffer`; cloning, slicing and splitting add references
    rather than copying data.
    """

    __slots__ = ("_static", "_shared", "_offset", "_length")

    def __init__(self, data: Any = _EMPTY) -> None:
        raw = as_bytes(data)
        self._offset = 0
        self._length = len(raw)
        if raw:
            self._static: Optional[bytes] = None
            self._shared: Optional[SharedBuffer] = SharedBuffer(raw, len(raw), 0)
        else:
            self._static = _EMPTY
            self._shared = None

    # construction helpers

    @classmethod
    def _make(
        cls,
        static: Optional[bytes],
        shared: Optional[SharedBuffer],
        offset: int,
        length: int,
    ) -> Bytes:
        obj = cls.__new__(cls)
        obj._static = static
        obj._shared = shared
        obj._offset = offset
        obj._length = length
        return obj

    @classmethod
    def _from_shared(cls, shared: SharedBuffer, offset: int, length: int) -> Bytes:
        """Wrap ``shared``, taking over one reference the caller already holds."""
        return cls._make(None, shared, offset, length)

    @classmethod
    def _empty(cls) -> Bytes:
        return cls._make(_EMPTY, None, 0, 0)

    @classmethod
    def from_static(cls, data: Any) -> Bytes:
        """Create a handle that points directly at immutable data."""
        return cls._make(as_bytes(data), None, 0, 0)._with_full_length()

    def _with_full_length(self) -> Bytes:
        self._length = len(self._static or _EMPTY)
        return self

    @classmethod
    def copy_from_slice(cls, data: Any) -> Bytes:
        """Create a handle holding a copy of ``data``."""
        return cls(data)

    def __del__(self) -> None:
        shared = getattr(self, "_shared", None)
        if shared is not None and not shared.released:
            shared.release()

    # internals

    def _view(self) -> bytes:
        if self._length == 0:
            return _EMPTY
        if self._shared is not None:
            return self._shared.read(self._offset, self._length)
        assert self._static is not None
        return self._static[self._offset : self._offset + self._length]

    def _take(self) -> Bytes:
        """Move this handle's contents into a new handle and leave self empty."""
        taken = self._make(self._static, self._shared, self._offset, self._length)
        self._static = _EMPTY
        self._shared = None
        self._offset = 0
        self._length = 0
        return taken

    @staticmethod
    def _check_at(at: int, length: int, name: str) -> None:
        if at < 0:
            raise ValueError(f"{name} position must not be negative: {at}")
        if at > length:
            raise IndexError(f"{name} out of bounds: {at} <= {length}")

    # public API

    def __len__(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        """True if the view holds no bytes."""
        return self._length == 0

    def is_unique(self) -> bool:
        """True if this is the only handle to the data; always False for static data."""
        if self._shared is None:
            return False
        return self._shared.is_unique()

    def clone(self) -> Bytes:
        """Return another handle to the same bytes, sharing the storage."""
        if self._shared is not None:
            self._shared.acquire()
        return self._make(self._static, self._shared, self._offset, self._length)

    __copy__ = clone

    def slice(self, start: Optional[int] = None, stop: Optional[int] = None) -> Bytes:
        """Return a handle to bytes ``start..stop`` of this view, without copying."""
        begin, end = resolve_range(start, stop, self._length)
        if begin == end:
            return self._empty()
        ret = self.clone()
        ret._offset += begin
        ret._length = end - begin
        return ret

    def slice_ref(self, subset: Bytes) -> Bytes:
        """Return a handle equal to ``subset``, which must lie within this view.

        ``subset`` must be a handle into the same storage as ``self``; an
        empty subset is always accepted.
        """
        if not isinstance(subset, Bytes):
            raise TypeError(f"subset must be Bytes, not {type(subset).__name__}")
        if subset.is_empty():
            return self._empty()
        same_storage = (
            subset._shared is self._shared
            if self._shared is not None
            else subset._shared is None and subset._static is self._static
        )
        if not same_storage:
            raise ValueError("subset does not share storage with this buffer")
        if subset._offset < self._offset:
            raise ValueError(
                f"subset offset ({subset._offset}) is smaller than "
                f"self offset ({self._offset})"
            )
        if subset._offset + subset._length > self._offset + self._length:
            raise ValueError(
                f"subset is out of bounds: self = ({self._offset}, {self._length}), "
                f"subset = ({subset._offset}, {subset._length})"
            )
        begin = subset._offset - self._offset
        return self.slice(begin, begin + subset._length)

    def split_off(self, at: int) -> Bytes:
        """Keep ``[0, at)`` in self and return ``[at, len)``."""
        self._check_at(at, self._length, "split_off")
        if at == self._length:
            return self._empty()
        if at == 0:
            return self._take()
        ret = self.clone()
        self._length = at
        ret._offset += at
        ret._length -= at
        return ret

    def split_to(self, at: int) -> Bytes:
        """Keep ``[at, len)`` in self and return ``[0, at)``."""
        self._check_at(at, self._length, "split_to")
        if at == self._length:
            return self._take()
        if at == 0:
            return self._empty()
        ret = self.clone()
        self._offset += at
        self._length -= at
        ret._length = at
        return ret

    def truncate(self, length: int) -> None:
        """Keep the first ``length`` bytes; longer lengths have no effect."""
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        if length < self._length:
            self._length = length

    def clear(self) -> None:
        """Remove all bytes from the view."""
        self.truncate(0)

    # reading cursor

    def remaining(self) -> int:
        """Number of bytes left to read."""
        return self._length

    def chunk(self) -> bytes:
        """The bytes left to read, as one contiguous block."""
        return self._view()

    def advance(self, cnt: int) -> None:
        """Skip ``cnt`` bytes."""
        check_advance(cnt, self._length)
        self._offset += cnt
        self._length -= cnt

    def copy_to_bytes(self, length: int) -> Bytes:
        """Take the next ``length`` bytes as a new handle and advance past them."""
        if length == self._length:
            return self._take()
        ret = self.slice(None, length)
        self.advance(length)
        return ret

    # Python protocols

    def __bytes__(self) -> bytes:
        return self._view()

    def __iter__(self) -> Iterator[int]:
        return iter(self._view())

    def __getitem__(self, index: Union[int, slice]) -> Union[int, Bytes]:
        if isinstance(index, slice):
            begin, end, step = index.indices(self._length)
            if step != 1:
                return Bytes(self._view()[index])
            return self.slice(begin, max(begin, end))
        if not isinstance(index, int):
            raise TypeError(f"indices must be integers or slices, not {type(index).__name__}")
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("Bytes index out of range")
        if self._shared is not None:
            return self._shared.read(self._offset + index, 1)[0]
        assert self._static is not None
        return self._static[self._offset + index]

    def __eq__(self, other: object) -> bool:
        raw = _comparable(other)
        if raw is None:
            return NotImplemented
        return self._view() == raw

    def __lt__(self, other: object) -> bool:
        raw = _comparable(other)
        if raw is None:
            return NotImplemented
        return self._view() < raw

    def __hash__(self) -> int:
        return hash(self._view())

    def __repr__(self) -> str:
        return debug_repr(self._view())

    def __format__(self, spec: str) -> str:
        return format_bytes(self._view(), spec)