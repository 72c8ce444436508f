"""Human-readable renderings of byte sequences: escaped literals and hex."""

from __future__ import annotations

from typing import Any

__all__ = ["debug_repr", "lower_hex", "upper_hex", "format_bytes"]


def _escape(b: int) -> str:
    special = {
        0x0A: "\\n",
        0x0D: "\\r",
        0x09: "\\t",
        0x5C: "\\\\",
        0x22: '\\"',
        0x00: "\\0",
    }
    if b in special:
        return special[b]
    if 0x20 <= b < 0x7F:
        return chr(b)
    return f"\\x{b:02x}"


_ESCAPES = tuple(_escape(b) for b in range(256))


def _to_bytes(data: Any) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        raise TypeError("expected a bytes-like object, not str")
    return bytes(data)


def debug_repr(data: Any) -> str:
    """Render bytes as a ``b"..."`` literal, printing ASCII where possible."""
    raw = _to_bytes(data)
    return 'b"' + "".join(_ESCAPES[b] for b in raw) + '"'


def lower_hex(data: Any) -> str:
    """Render bytes as lower-case hex digits, two per byte, no separators."""
    return _to_bytes(data).hex()


def upper_hex(data: Any) -> str:
    """Render bytes as upper-case hex digits, two per byte, no separators."""
    return _to_bytes(data).hex().upper()


def format_bytes(data: Any, spec: str) -> str:
    """Format bytes for ``format()``.

    ``""`` and ``"?"`` give the escaped literal, ``"x"`` lower-case hex and
    ``"X"`` upper-case hex. Any other spec raises ``ValueError``.
    """
    if spec in ("", "?"):
        return debug_repr(data)
    if spec == "x":
        return lower_hex(data)
    if spec == "X":
        return upper_hex(data)
    raise ValueError(f"unsupported format spec for bytes: {spec!r}")