"""Byte buffers with shared, reference-counted storage: Bytes, BytesMut and helpers."""

__version__ = "0.1.0"
__all__ = ["__version__"]