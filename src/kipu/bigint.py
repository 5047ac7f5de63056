"""Codec between arbitrary non-negative integers and little-endian bytes.

Values that fit in 64 bits take the fixed-width path in kipu.int64 and
come out as exactly 8 bytes. Zero is a single zero byte, never an empty
buffer.
"""

from __future__ import annotations

from kipu import int64
from kipu.errors import DomainError


def encode(number: int) -> bytes:
    """Encode as little-endian bytes: 8 bytes up to 64 bits, one zero byte for 0."""
    num = int(number)

    if num == 0:
        return b"\x00"

    if num < 0:
        raise DomainError("int.encode only supports positive integers")

    if num <= int64.MAX_SAFE_BIGINT64:
        return int64.encode(num)

    out = bytearray()
    while num:
        out.append(num & 0xFF)
        num >>= 8

    return bytes(out)


def decode(buf: bytes) -> int:
    """Decode little-endian bytes; 8-byte buffers take the int64 path."""
    if len(buf) == int64.WIDTH:
        return int64.decode(buf)

    value = 0
    for i, byte in enumerate(buf):
        value |= byte << (8 * i)

    return value
