"""Fixed-width codec between 64-bit integers and 8 little-endian bytes."""

from __future__ import annotations

from kipu.errors import DomainError

MAX_SAFE_BIGINT64 = (1 << 64) - 1
WIDTH = 8


def encode(number: int) -> bytes:
    """Encode a 64-bit integer as exactly 8 bytes, least significant first."""
    num = int(number)

    if num < 0:
        raise DomainError("int64.encode only supports positive integers")

    if num > MAX_SAFE_BIGINT64:
        raise DomainError("int64.encode only supports 64-bit integers")

    return num.to_bytes(WIDTH, "little")


def decode(buf: bytes) -> int:
    """Decode up to 8 little-endian bytes.

    Missing trailing bytes count as zero, so truncated buffers decode to
    the same value as their zero-padded form.
    """
    if len(buf) > WIDTH:
        raise DomainError("int64.decode only supports 64-bit integers")

    return int.from_bytes(bytes(buf), "little")
