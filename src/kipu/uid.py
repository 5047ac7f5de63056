"""Public uids for internal row ids.

A row id is packed into 8 bytes, prefixed with its CRC-16, encrypted with
FF1 under a secret key and spelled as a 22-character Sqids string. The
result can be exposed publicly: it does not reveal the row id without the
key, and the checksum rejects typos and forged ids on the way back in.
"""

from __future__ import annotations

from kipu import int64
from kipu.checksum import WIDTH as CHECKSUM_WIDTH
from kipu.checksum import crc16
from kipu.cipher import BinaryFF1, DomainCipher
from kipu.encoding import LENGTH, Encoding, SqidsEncoder
from kipu.errors import DomainError, FormatError, RangeError, TamperError

CHECKED_WIDTH = CHECKSUM_WIDTH + int64.WIDTH


class UidCodec:
    """Encode row ids between 0 and MAX_SAFE_ID as 22-character uids.

    The codec holds only immutable state and is safe to share between
    threads. Uids decode only under the key that produced them.

    Args:
        key: Secret key. Do not log or share it. Encoded as UTF-8 when a
            ``str`` is given; must be 16, 24 or 32 bytes.
        cipher: Format-preserving cipher over 10-byte buffers. Defaults to
            ``BinaryFF1(key)``.
        encoding: Buffer-to-string codec. Defaults to ``SqidsEncoder()``.
    """

    MAX_SAFE_ID = int64.MAX_SAFE_BIGINT64
    UID_LENGTH = LENGTH

    def __init__(
        self,
        key: str | bytes,
        *,
        cipher: DomainCipher | None = None,
        encoding: Encoding | None = None,
    ) -> None:
        self._cipher = cipher if cipher is not None else BinaryFF1(key)
        self._encoding = encoding if encoding is not None else SqidsEncoder()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<key>)"

    def encode(self, number: int) -> str:
        """Encode a row id as a uid.

        Raises:
            DomainError: ``number`` is negative or wider than 64 bits.
        """
        if isinstance(number, bool) or not isinstance(number, int):
            raise DomainError("Uid only supports integers")
        if number < 0 or number > self.MAX_SAFE_ID:
            raise DomainError("Uid only supports numbers up to 64-bits")

        buf = int64.encode(number)
        checked = crc16(buf) + buf
        encrypted = self._cipher.encrypt(checked)

        return self._encoding.encode(encrypted)

    def decode(self, uid: str) -> int:
        """Decode a uid back into its row id.

        Lowercase input is accepted.

        Raises:
            FormatError: wrong length, unknown characters or wrong arity.
            TamperError: the checksum does not match after decryption.
        """
        if not isinstance(uid, str) or len(uid) != self.UID_LENGTH:
            raise FormatError()

        encrypted = self._encoding.decode(uid.upper())
        if len(encrypted) != CHECKED_WIDTH:
            raise FormatError()

        checked = self._cipher.decrypt(encrypted)
        checksum, buf = checked[:CHECKSUM_WIDTH], checked[CHECKSUM_WIDTH:]

        if crc16(buf) != checksum:
            raise TamperError()

        number = int64.decode(buf)
        if number > self.MAX_SAFE_ID:
            raise RangeError()

        return number
