"""Byte-buffer helpers: fill, copy, move, search, compare and allocate.

Buffers are any writable objects supporting the buffer protocol
(``bytearray``, ``memoryview``); read-only arguments may also be ``bytes``.
"""

from __future__ import annotations

import sys
from typing import Optional, Union

Buffer = Union[bytearray, memoryview]
ReadBuffer = Union[bytes, bytearray, memoryview]

SIZE_MAX = sys.maxsize * 2 + 1


def _check_length(n: int, *buffers: ReadBuffer) -> None:
    if n < 0:
        raise ValueError("length must not be negative")
    for buf in buffers:
        if n > len(buf):
            raise ValueError(f"length {n} exceeds buffer size {len(buf)}")


def fill(buf: Buffer, value: int, n: int) -> Buffer:
    """Set the first *n* bytes of *buf* to the low byte of *value*."""
    _check_length(n, buf)
    buf[:n] = bytes([value & 0xFF]) * n
    return buf


def zero(buf: Buffer, n: int) -> Buffer:
    """Set the first *n* bytes of *buf* to zero."""
    return fill(buf, 0, n)


def copy(dest: Buffer, src: ReadBuffer, n: int) -> Buffer:
    """Copy the first *n* bytes of *src* into *dest*."""
    _check_length(n, dest, src)
    dest[:n] = src[:n]
    return dest


def move(dest: Buffer, src: ReadBuffer, n: int) -> Buffer:
    """Copy *n* bytes from *src* to *dest*, correct even when they overlap."""
    _check_length(n, dest, src)
    dest[:n] = bytes(src[:n])
    return dest


def find_byte(data: ReadBuffer, c: int, n: int) -> Optional[int]:
    """Return the index of the first byte equal to ``c & 0xFF`` in the first
    *n* bytes of *data*, or None."""
    _check_length(n, data)
    index = bytes(data[:n]).find(c & 0xFF)
    return None if index < 0 else index


def compare(a: ReadBuffer, b: ReadBuffer, n: int) -> int:
    """Compare the first *n* bytes of *a* and *b* as unsigned values.

    Returns the difference of the first pair of bytes that differ, or 0.
    """
    _check_length(n, a, b)
    for left, right in zip(bytes(a[:n]), bytes(b[:n])):
        if left != right:
            return left - right
    return 0


def allocate(count: int, size: int) -> bytearray:
    """Return a zeroed buffer of ``count * size`` bytes.

    A zero count or size yields a one-byte buffer. Raises OverflowError
    when the total would not fit in a machine size.
    """
    if count < 0 or size < 0:
        raise ValueError("count and size must not be negative")
    if count == 0 or size == 0:
        return allocate(1, 1)
    if count > SIZE_MAX // size:
        raise OverflowError("allocation size overflows")
    return bytearray(count * size)