"""Format-preserving encryption for checked uid buffers.

FF1 as specified in NIST SP 800-38G, with AES from ``cryptography`` as
the block cipher. ``BinaryFF1`` runs FF1 in radix 2 over the bits of a
byte buffer, so a 10-byte buffer maps to another 10-byte buffer and the
mapping is a permutation for every key.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

ROUNDS = 10
BLOCK = 16
MIN_DOMAIN = 1_000_000
MAX_RADIX = 1 << 16
_ZERO_BLOCK = bytes(BLOCK)


class DomainCipher(Protocol):
    """Keyed, length-preserving permutation over byte buffers."""

    def encrypt(self, buf: bytes) -> bytes: ...

    def decrypt(self, buf: bytes) -> bytes: ...


def _as_key(key: str | bytes) -> bytes:
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if len(raw) not in (16, 24, 32):
        raise ValueError(
            f"FF1 key must be 16, 24 or 32 bytes, got {len(raw)}"
        )
    return raw


def _num(digits: Sequence[int], radix: int) -> int:
    value = 0
    for digit in digits:
        value = value * radix + digit
    return value


def _str(value: int, radix: int, length: int) -> list[int]:
    digits = [0] * length
    for i in range(length - 1, -1, -1):
        value, digits[i] = divmod(value, radix)
    return digits


class FF1:
    """FF1 over numeral strings of a fixed radix."""

    def __init__(self, key: str | bytes, radix: int, tweak: bytes = b"") -> None:
        if not 2 <= radix <= MAX_RADIX:
            raise ValueError(f"FF1 radix must be in [2, {MAX_RADIX}], got {radix}")
        self._algorithm = algorithms.AES(_as_key(key))
        self.radix = radix
        self.tweak = bytes(tweak)

    def _prf(self, data: bytes) -> bytes:
        # CBC-MAC with a zero IV: the last ciphertext block
        encryptor = Cipher(self._algorithm, modes.CBC(_ZERO_BLOCK)).encryptor()
        out = encryptor.update(data) + encryptor.finalize()
        return out[-BLOCK:]

    def _ciph(self, block: bytes) -> bytes:
        encryptor = Cipher(self._algorithm, modes.ECB()).encryptor()
        return encryptor.update(block) + encryptor.finalize()

    def _check(self, digits: Sequence[int]) -> int:
        n = len(digits)
        if n < 2 or self.radix**n < MIN_DOMAIN:
            raise ValueError(f"FF1 input of length {n} is below the minimum domain")
        if any(not 0 <= d < self.radix for d in digits):
            raise ValueError(f"FF1 input contains a numeral outside radix {self.radix}")
        return n

    def _round_function(self, n: int, u: int, v: int):
        radix, t = self.radix, len(self.tweak)
        b = ((radix**v - 1).bit_length() + 7) // 8
        d = 4 * ((b + 3) // 4) + 4
        p = (
            bytes([1, 2, 1])
            + radix.to_bytes(3, "big")
            + bytes([10, u % 256])
            + n.to_bytes(4, "big")
            + t.to_bytes(4, "big")
        )
        pad = bytes((-t - b - 1) % BLOCK)

        def y(i: int, half: Sequence[int]) -> int:
            q = self.tweak + pad + bytes([i]) + _num(half, radix).to_bytes(b, "big")
            r = self._prf(p + q)
            s = r
            for j in range(1, (d + BLOCK - 1) // BLOCK):
                mask = j.to_bytes(BLOCK, "big")
                s += self._ciph(bytes(x ^ m for x, m in zip(r, mask)))
            return int.from_bytes(s[:d], "big")

        return y

    def encrypt(self, digits: Sequence[int]) -> list[int]:
        n = self._check(digits)
        u = n // 2
        v = n - u
        a, b = list(digits[:u]), list(digits[u:])
        y = self._round_function(n, u, v)
        for i in range(ROUNDS):
            m = u if i % 2 == 0 else v
            c = (_num(a, self.radix) + y(i, b)) % self.radix**m
            a, b = b, _str(c, self.radix, m)
        return a + b

    def decrypt(self, digits: Sequence[int]) -> list[int]:
        n = self._check(digits)
        u = n // 2
        v = n - u
        a, b = list(digits[:u]), list(digits[u:])
        y = self._round_function(n, u, v)
        for i in reversed(range(ROUNDS)):
            m = u if i % 2 == 0 else v
            c = (_num(b, self.radix) - y(i, a)) % self.radix**m
            a, b = _str(c, self.radix, m), a
        return a + b


def _bits(buf: bytes) -> list[int]:
    return [(byte >> shift) & 1 for byte in buf for shift in range(7, -1, -1)]


def _bytes(bits: Sequence[int]) -> bytes:
    out = bytearray()
    for i in range(0, len(bits), 8):
        out.append(_num(bits[i : i + 8], 2))
    return bytes(out)


class BinaryFF1:
    """FF1 in radix 2 over byte buffers, most significant bit first."""

    def __init__(self, key: str | bytes, tweak: bytes = b"") -> None:
        self._ff1 = FF1(key, 2, tweak)

    def encrypt(self, buf: bytes) -> bytes:
        return _bytes(self._ff1.encrypt(_bits(buf)))

    def decrypt(self, buf: bytes) -> bytes:
        return _bytes(self._ff1.decrypt(_bits(buf)))
