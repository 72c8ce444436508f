# bytebufs

Byte buffers for protocol and networking code.

- `Bytes` (in `bytebufs.bytes`) is an immutable view into byte storage.
  Cloning, slicing and splitting a `Bytes` does not copy the data. The views
  share one reference-counted `SharedBuffer` (in `bytebufs.shared`).
- `BytesMut` (in `bytebufs.bytes_mut`) is a writable view that grows when it
  needs more room. You can split it into pieces that each see a separate region
  of the same storage. Call `freeze()` on a piece to turn it into a `Bytes`
  without copying.

The package has no dependencies beyond the standard library.

## Installing

```
pip install bytebufs
```

## Using `Bytes`

```python
from bytebufs.bytes import Bytes

mem = Bytes(b"Hello world")
assert mem.slice(0, 5) == b"Hello"

head = mem.split_to(6)
assert head == b"Hello "
assert mem == b"world"

other = mem.clone()
assert not mem.is_unique()
```

- `Bytes(data)` accepts these inputs and stores a copy of them:
  - `bytes`, `bytearray` and `memoryview`
  - `str`, which is encoded as UTF-8
  - objects that define `__bytes__`
  - iterables of integers from 0 to 255
- `Bytes.from_static(data)` points directly at an immutable `bytes` object.
  Such a handle never reports itself as unique.
- `slice(start, stop)` returns a view that shares storage with the original.
- Indexing with a slice of step 1 also shares storage. Any other step makes a
  copy.
- `slice_ref(subset)` takes a `Bytes` that lies inside this one and returns the
  matching slice.
- `split_off(at)` and `split_to(at)` divide a view in two.
- `truncate(n)` and `clear()` shorten the view.
- The reading cursor methods are `remaining()`, `chunk()`, `advance(n)` and
  `copy_to_bytes(n)`.

Bounds are checked:
- A negative position or a `start` greater than `stop` raises `ValueError`.
- A position past the end raises `IndexError`.
- Advancing past the remaining bytes raises `ValueError`.

## Using `BytesMut`

```python
from bytebufs.bytes_mut import BytesMut

buf = BytesMut.with_capacity(64)
buf.put_slice(b"hello")
buf.extend_from_slice(b" world")

first = buf.split_to(5)
first[0] = ord("j")
assert first == b"jello"
assert buf == b" world"

frozen = first.freeze()
assert bytes(frozen) == b"jello"
```

Construction:
- `BytesMut(data)`, which takes the same inputs as `Bytes`.
- `BytesMut.with_capacity(n)`
- `BytesMut.zeroed(n)`

Splitting:
- `split()` moves all the bytes into a new handle. The original keeps the spare
  capacity.
- `split_to(at)` and `split_off(at)` divide the buffer.
- `unsplit(other)` joins a piece back on. If the two pieces are adjacent in the
  same storage, nothing is copied. Otherwise the bytes of `other` are appended.
  In both cases `other` is left empty.

Writing:
- `extend_from_slice(data)`
- `extend(iterable)`, which takes integers or byte-like items such as `Bytes`.
- `put(src)`, which drains anything that has `remaining()`, `chunk()` and
  `advance()`, or appends a byte-like value.
- `put_slice(src)` and `put_bytes(val, cnt)`.
- `write_str(s)`, which appends UTF-8 text.
- Item and slice assignment. A slice assignment must not change the length.

Size:
- `capacity()`
- `reserve(n)`
- `resize(new_len, value)`
- `truncate(n)` and `clear()`
- `set_len(n)`
- `advance_mut(n)`

`reserve` tries to reuse space the buffer already owns before it asks for new
storage. It can move the data back to the front of the storage. It can also
take back the whole storage once every other piece is gone.

`copy()` returns an independent buffer. Slicing a `BytesMut` with `[a:b]`
returns a plain `bytes` copy.

## Comparing and hashing

`Bytes` and `BytesMut` compare equal to, and order against, these values:
- each other
- `bytes`, `bytearray` and `memoryview`
- `str`, by its UTF-8 encoding
- objects with `__bytes__`

Their hash is the hash of their contents as `bytes`.

## Formatting

The `repr()` of both types is a byte-string literal such as `b"GET /\r\n"`.
Printable ASCII is shown as it is. `\n`, `\r`, `\t`, `\0`, `\\` and `\"` are
escaped, and every other byte is written as `\xNN`. Both types also support the
`x` and `X` format specs:

```python
from bytebufs.bytes import Bytes

b = Bytes(b"\x01\xab")
assert f"{b:x}" == "01ab"
assert f"{b:X}" == "01AB"
```

The helpers behind these are `debug_repr`, `lower_hex`, `upper_hex` and
`format_bytes`, all in `bytebufs.formatting`. `format_bytes` accepts the specs
`""`, `"?"`, `"x"` and `"X"`, and raises `ValueError` for any other.

## Other modules

- `bytebufs.capacity` encodes a buffer's original capacity as a bucket number
  from 0 to 7, and decodes it again. `BytesMut` uses this when it grows.
- `bytebufs.coerce` provides `as_bytes`, which converts a value to `bytes`, and
  `resolve_range`, which checks slice bounds.

## What it does not do

- There are no typed integer or float readers and writers. You encode and
  decode numbers yourself, for example with `struct`, and pass the bytes to
  `put_slice` or read them from `chunk()`.
- There is no built-in serialization support. Convert with `bytes(buf)` and
  construct from `bytes` yourself.
- There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```