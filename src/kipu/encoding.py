"""Sqids encoding of checked, encrypted uid buffers.

A 10-byte buffer is split into two 5-byte halves, each read as a
little-endian integer below 2**40, and the pair is Sqids-encoded over an
alphabet without look-alike glyphs. With 17 symbols a 40-bit number
needs at most 10 characters, so prefix, two numbers and a separator
never exceed 22 and ``min_length`` pads the rest.
"""

from __future__ import annotations

from typing import Protocol

from sqids import Sqids

from kipu import int64
from kipu.errors import FormatError

ALPHABET = "34ACDEFHJLMNPRTXY"
LENGTH = 22
HALF = 5
MAX_BUFFER = 2 * HALF
MAX_HALF = (1 << (8 * HALF)) - 1


class Encoding(Protocol):
    """Reversible mapping between short buffers and fixed-length strings."""

    def encode(self, buf: bytes) -> str: ...

    def decode(self, s: str) -> bytes: ...


def _encode_int(number: int) -> bytes:
    return number.to_bytes(HALF, "little")


def _decode_int(buf: bytes) -> int:
    return int.from_bytes(buf, "little")


class SqidsEncoder:
    def __init__(self, alphabet: str = ALPHABET, length: int = LENGTH) -> None:
        self._sqids = Sqids(alphabet=alphabet, min_length=length)
        self._len = length

    def encode(self, buf: bytes) -> str:
        if len(buf) > MAX_BUFFER:
            raise FormatError(f"Invalid buffer length: {len(buf)}")

        lo = _decode_int(buf[:HALF])
        hi = _decode_int(buf[HALF:])

        return self._sqids.encode([lo, hi])

    def decode(self, s: str) -> bytes:
        if not isinstance(s, str) or len(s) != self._len:
            raise FormatError()

        s = s.upper()
        numbers = self._sqids.decode(s)
        if len(numbers) != 2:
            raise FormatError()

        lo, hi = numbers
        if lo > MAX_HALF or hi > MAX_HALF:
            raise FormatError()

        # padding after the last number is ignored by Sqids; only the
        # canonical spelling is accepted
        if self._sqids.encode(numbers) != s:
            raise FormatError()

        return _encode_int(lo) + _encode_int(hi)


_default = SqidsEncoder()


def encode(buf: bytes | int) -> str:
    """Encode a buffer, or an integer widened to 8 bytes, with the default encoder."""
    if isinstance(buf, int):
        buf = int64.encode(buf)
    return _default.encode(bytes(buf))


def decode(s: str) -> bytes:
    return _default.decode(s)
