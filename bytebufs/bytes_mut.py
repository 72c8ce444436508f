"""A unique, growable view into byte storage that may be shared after splits."""

from __future__ import annotations

import functools
import sys
from typing import Any, Iterable, Iterator, Optional, Union

from .bytes import Bytes
from .capacity import original_capacity_from_repr, original_capacity_to_repr
from .coerce import as_bytes
from .formatting import debug_repr, format_bytes
from .shared import SharedBuffer, check_advance

__all__ = ["BytesMut"]

_USIZE_MAX = sys.maxsize * 2 + 1
_MIN_NON_ZERO_CAP = 8


def _grown(vec_cap: int, vec_len: int, additional: int) -> int:
    """Capacity of a growable array after reserving ``additional`` bytes."""
    needed = vec_len + additional
    if vec_cap >= needed:
        return vec_cap
    return max(vec_cap * 2, needed, _MIN_NON_ZERO_CAP)


def _comparable(other: Any) -> Optional[bytes]:
    if isinstance(other, BytesMut):
        return other._view()
    if isinstance(other, (bytes, bytearray, memoryview, str)):
        return as_bytes(other)
    if hasattr(type(other), "__bytes__"):
        return bytes(other)
    return None


@functools.total_ordering
class BytesMut:
    """A mutable byte buffer with spare capacity.

    While a buffer owns its storage alone it grows like a ``bytearray``.
    Splitting makes the pieces share one :class:`SharedBuffer`, each handle
    viewing a disjoint region, so splits and :meth:`freeze` copy nothing.
    """

    __slots__ = ("_shared", "_vec", "_offset", "_len", "_cap")

    def __init__(self, data: Any = b"") -> None:
        raw = as_bytes(data)
        self._init_vec(raw, len(raw))

    # construction and ownership

    def _init_vec(self, raw: bytes, capacity: int) -> None:
        repr_ = original_capacity_to_repr(capacity)
        self._shared = SharedBuffer(raw, capacity, repr_)
        self._vec = True
        self._offset = 0
        self._len = len(raw)
        self._cap = capacity

    @classmethod
    def _from_vec(cls, raw: bytes, capacity: int) -> BytesMut:
        obj = cls.__new__(cls)
        obj._init_vec(raw, capacity)
        return obj

    @classmethod
    def with_capacity(cls, capacity: int) -> BytesMut:
        """Create an empty buffer able to hold ``capacity`` bytes."""
        if capacity < 0:
            raise ValueError(f"capacity must not be negative: {capacity}")
        return cls._from_vec(b"", capacity)

    @classmethod
    def zeroed(cls, length: int) -> BytesMut:
        """Create a buffer of ``length`` zero bytes."""
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        return cls._from_vec(bytes(length), length)

    def _detach(self) -> None:
        """Forget the current storage without releasing it."""
        self._init_vec(b"", 0)

    def _drop(self) -> None:
        """Release the current storage and become an empty buffer."""
        shared = self._shared
        self._detach()
        if not shared.released:
            shared.release()

    def __del__(self) -> None:
        shared = getattr(self, "_shared", None)
        if shared is not None and not shared.released:
            shared.release()

    def _shallow_clone(self) -> BytesMut:
        self._vec = False
        self._shared.acquire()
        other = type(self).__new__(type(self))
        other._shared = self._shared
        other._vec = False
        other._offset = self._offset
        other._len = self._len
        other._cap = self._cap
        return other

    def _set_start(self, start: int) -> None:
        if start == 0:
            return
        self._offset += start
        self._len = max(self._len - start, 0)
        self._cap -= start

    def _set_end(self, end: int) -> None:
        if end > self._cap:
            raise IndexError(f"set_end out of bounds: {end} <= {self._cap}")
        self._cap = end
        self._len = min(self._len, end)

    def _view(self) -> bytes:
        if self._len == 0:
            return b""
        return self._shared.read(self._offset, self._len)

    def _write(self, pos: int, data: bytes) -> None:
        if data:
            self._shared.write(self._offset + pos, data)

    @staticmethod
    def _check_at(at: int, limit: int, name: str) -> None:
        if at < 0:
            raise ValueError(f"{name} position must not be negative: {at}")
        if at > limit:
            raise IndexError(f"{name} out of bounds: {at} <= {limit}")

    # sizes

    def __len__(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        """True if the buffer holds no bytes."""
        return self._len == 0

    def capacity(self) -> int:
        """Number of bytes the buffer can hold without growing."""
        return self._cap

    # conversion

    def freeze(self) -> Bytes:
        """Turn the buffer into an immutable :class:`Bytes`; self becomes empty."""
        frozen = Bytes._from_shared(self._shared, self._offset, self._len)
        self._detach()
        return frozen

    def copy(self) -> BytesMut:
        """Return an independent buffer holding a copy of the bytes."""
        return type(self)(self._view())

    __copy__ = copy

    # splitting

    def split_off(self, at: int) -> BytesMut:
        """Keep ``[0, at)`` in self and return ``[at, capacity)``."""
        self._check_at(at, self._cap, "split_off")
        other = self._shallow_clone()
        other._set_start(at)
        self._set_end(at)
        return other

    def split(self) -> BytesMut:
        """Return all bytes in a new handle; self keeps the spare capacity."""
        return self.split_to(self._len)

    def split_to(self, at: int) -> BytesMut:
        """Keep ``[at, len)`` in self and return ``[0, at)``."""
        self._check_at(at, self._len, "split_to")
        other = self._shallow_clone()
        other._set_end(at)
        self._set_start(at)
        return other

    def unsplit(self, other: BytesMut) -> None:
        """Absorb ``other``, ideally a piece previously split off; ``other`` is emptied."""
        if not isinstance(other, BytesMut):
            raise TypeError(f"expected BytesMut, not {type(other).__name__}")
        if other is self:
            raise ValueError("cannot unsplit a buffer into itself")
        if self.is_empty():
            old = self._shared
            self._shared = other._shared
            self._vec = other._vec
            self._offset = other._offset
            self._len = other._len
            self._cap = other._cap
            other._detach()
            if not old.released:
                old.release()
            return
        if other._cap == 0:
            other._drop()
            return
        if (
            self._offset + self._len == other._offset
            and not self._vec
            and not other._vec
            and self._shared is other._shared
        ):
            self._len += other._len
            self._cap += other._cap
            other._drop()
            return
        self.extend_from_slice(other._view())
        other._drop()

    # length changes

    def truncate(self, length: int) -> None:
        """Keep the first ``length`` bytes; capacity is preserved."""
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        if length <= self._len:
            self._len = length

    def clear(self) -> None:
        """Remove all bytes; capacity is preserved."""
        self.truncate(0)

    def resize(self, new_len: int, value: int) -> None:
        """Grow to ``new_len`` filling with ``value``, or truncate to it."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        if new_len > self._len:
            additional = new_len - self._len
            self.reserve(additional)
            self._write(self._len, bytes([value]) * additional)
            self._len = new_len
        else:
            self.truncate(new_len)

    def set_len(self, length: int) -> None:
        """Set the length directly; bytes past the old length keep whatever they held."""
        if length < 0 or length > self._cap:
            raise ValueError(f"set_len out of bounds: {length} <= {self._cap}")
        self._len = length

    def reserve(self, additional: int) -> None:
        """Make room for at least ``additional`` more bytes."""
        if additional < 0:
            raise ValueError(f"additional must not be negative: {additional}")
        if additional <= self._cap - self._len:
            return
        if self._vec:
            self._reserve_vec(additional)
        else:
            self._reserve_shared(additional)

    def _reserve_vec(self, additional: int) -> None:
        off = self._offset
        length = self._len
        if self._cap - length + off >= additional and off >= length:
            self._shared.write(0, self._view())
            self._offset = 0
            self._cap += off
            return
        new_capacity = _grown(off + self._cap, off + length, additional)
        self._shared.ensure_capacity(new_capacity)
        self._cap = new_capacity - off

    def _reserve_shared(self, additional: int) -> None:
        shared = self._shared
        length = self._len
        new_cap = length + additional
        if shared.is_unique():
            v_capacity = shared.capacity
            offset = self._offset
            if v_capacity >= new_cap + offset:
                self._cap = new_cap
            elif v_capacity >= new_cap and offset >= length:
                shared.write(0, self._view())
                self._offset = 0
                self._cap = v_capacity
            else:
                new_cap = max(v_capacity * 2, new_cap + offset)
                vec_len = offset + length
                grown = _grown(v_capacity, vec_len, new_cap - vec_len)
                shared.ensure_capacity(grown)
                self._cap = grown - offset
            return
        repr_ = shared.original_capacity_repr
        new_cap = max(new_cap, original_capacity_from_repr(repr_))
        data = self._view()
        self._shared = SharedBuffer(data, new_cap, repr_)
        shared.release()
        self._vec = True
        self._offset = 0
        self._len = len(data)
        self._cap = new_cap

    # appending

    def extend_from_slice(self, data: Any) -> None:
        """Append ``data``, growing the buffer if needed."""
        raw = as_bytes(data)
        self.reserve(len(raw))
        self._write(self._len, raw)
        self._len += len(raw)

    def extend(self, iterable: Iterable[Any]) -> None:
        """Append byte values (ints) or byte-like items such as :class:`Bytes`."""
        pending = bytearray()
        for item in iterable:
            if isinstance(item, int) and not isinstance(item, bool):
                if not 0 <= item <= 0xFF:
                    raise ValueError(f"byte value out of range: {item}")
                pending.append(item)
            else:
                if pending:
                    self.extend_from_slice(bytes(pending))
                    pending.clear()
                self.extend_from_slice(as_bytes(item))
        if pending:
            self.extend_from_slice(bytes(pending))

    # reading cursor

    def remaining(self) -> int:
        """Number of bytes left to read."""
        return self._len

    def chunk(self) -> bytes:
        """The bytes left to read."""
        return self._view()

    def advance(self, cnt: int) -> None:
        """Skip ``cnt`` bytes from the front."""
        check_advance(cnt, self._len)
        self._set_start(cnt)

    def copy_to_bytes(self, length: int) -> Bytes:
        """Take the next ``length`` bytes as :class:`Bytes`."""
        return self.split_to(length).freeze()

    # writing cursor

    def remaining_mut(self) -> int:
        """Number of bytes that could still be written."""
        return _USIZE_MAX - self._len

    def advance_mut(self, cnt: int) -> None:
        """Mark ``cnt`` bytes of spare capacity as part of the buffer."""
        check_advance(cnt, self._cap - self._len)
        self._len += cnt

    def put(self, src: Any) -> None:
        """Append everything readable from ``src``, a buffer or byte-like value."""
        if all(hasattr(src, name) for name in ("remaining", "chunk", "advance")):
            while src.remaining() > 0:
                piece = bytes(src.chunk())
                self.extend_from_slice(piece)
                src.advance(len(piece))
        else:
            self.extend_from_slice(src)

    def put_slice(self, src: Any) -> None:
        """Append ``src``."""
        self.extend_from_slice(src)

    def put_bytes(self, val: int, cnt: int) -> None:
        """Append ``cnt`` copies of the byte ``val``."""
        if not 0 <= val <= 0xFF:
            raise ValueError(f"byte value out of range: {val}")
        if cnt < 0:
            raise ValueError(f"count must not be negative: {cnt}")
        self.reserve(cnt)
        self._write(self._len, bytes([val]) * cnt)
        self._len += cnt

    def write_str(self, s: str) -> None:
        """Append ``s`` encoded as UTF-8."""
        raw = s.encode("utf-8")
        if self.remaining_mut() < len(raw):
            raise OverflowError("buffer cannot hold the string")
        self.put_slice(raw)

    # Python protocols

    def __bytes__(self) -> bytes:
        return self._view()

    def __iter__(self) -> Iterator[int]:
        return iter(self._view())

    def __getitem__(self, index: Union[int, slice]) -> Union[int, bytes]:
        if isinstance(index, slice):
            return self._view()[index]
        if not isinstance(index, int):
            raise TypeError(
                f"indices must be integers or slices, not {type(index).__name__}"
            )
        if index < 0:
            index += self._len
        if not 0 <= index < self._len:
            raise IndexError("BytesMut index out of range")
        return self._shared.read(self._offset + index, 1)[0]

    def __setitem__(self, index: Union[int, slice], value: Any) -> None:
        if isinstance(index, slice):
            updated = bytearray(self._view())
            updated[index] = as_bytes(value)
            if len(updated) != self._len:
                raise ValueError("slice assignment must not change the length")
            self._write(0, bytes(updated))
            return
        if not isinstance(index, int):
            raise TypeError(
                f"indices must be integers or slices, not {type(index).__name__}"
            )
        if not isinstance(value, int) or not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value!r}")
        if index < 0:
            index += self._len
        if not 0 <= index < self._len:
            raise IndexError("BytesMut index out of range")
        self._write(index, bytes([value]))

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