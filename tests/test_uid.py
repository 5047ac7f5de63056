"""Tests for the uid codec."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from kipu import int64
from kipu.checksum import crc16
from kipu.encoding import ALPHABET, SqidsEncoder
from kipu.errors import DomainError, FormatError, RangeError, TamperError, UidError
from kipu.uid import UidCodec

KEY = "UFfRLVNbJHN/oGZ7ClrjYVZ6N4EEXhRU"

UIDS = [
    0,
    1,
    2,
    3,
    10,
    100,
    1000,
    100000,
    # postgres' maximum bigint
    9223372036854775807,
    # 64 bits
    (1 << 64) - 1,
]


class IdentityCipher:
    def encrypt(self, buf: bytes) -> bytes:
        return bytes(buf)

    def decrypt(self, buf: bytes) -> bytes:
        return bytes(buf)


@pytest.fixture(scope="module")
def codec():
    return UidCodec(KEY)


class TestRoundTrip:
    @pytest.mark.parametrize("uid", UIDS)
    def test_round_trip(self, codec, uid):
        public = codec.encode(uid)
        assert codec.decode(public) == uid
        assert codec.decode(public.lower()) == uid
        assert len(public) == UidCodec.UID_LENGTH

    def test_known_ids_are_distinct(self, codec):
        encoded = [codec.encode(n) for n in (0, 1, 9223372036854775807)]
        assert len(set(encoded)) == 3
        assert all(len(s) == 22 for s in encoded)

    def test_output_alphabet(self, codec):
        for uid in UIDS:
            assert set(codec.encode(uid)) <= set(ALPHABET)

    def test_deterministic(self):
        assert UidCodec(KEY).encode(42) == UidCodec(KEY).encode(42)

    def test_bytes_key(self, codec):
        assert UidCodec(KEY.encode()).encode(42) == codec.encode(42)


class TestKeys:
    def test_different_secrets_give_different_ids(self):
        encoder1 = UidCodec("9PVgC+trLutmJdvuMazSooHj9u4MzYQy")
        encoder2 = UidCodec("VhCQQsJHi7A+iwUhaVW7EHLm0QAfjxHH")
        assert encoder1.encode(1) != encoder2.encode(1)

    def test_other_key_cannot_decode(self, codec):
        other = UidCodec("VhCQQsJHi7A+iwUhaVW7EHLm0QAfjxHH")
        rejected = 0
        for uid in UIDS:
            try:
                other.decode(codec.encode(uid))
            except TamperError:
                rejected += 1
        assert rejected >= len(UIDS) - 1

    def test_bad_key_length(self):
        with pytest.raises(ValueError):
            UidCodec("too-short")

    def test_repr_hides_key(self, codec):
        assert KEY not in repr(codec)


class TestEncodeRejects:
    @pytest.mark.parametrize("value", [-1, 1 << 64])
    def test_out_of_range(self, codec, value):
        with pytest.raises(DomainError):
            codec.encode(value)

    def test_domain_error_is_range_error(self, codec):
        with pytest.raises(RangeError):
            codec.encode(-1)

    @pytest.mark.parametrize("value", ["1", 1.0, None, True])
    def test_non_integers(self, codec, value):
        with pytest.raises(DomainError):
            codec.encode(value)


class TestDecodeRejects:
    def test_invalid_id(self, codec):
        with pytest.raises(FormatError, match="Invalid id"):
            codec.decode("E5CDE3HB5LQQ69ZXV")

    @pytest.mark.parametrize("length", [0, 21, 23])
    def test_wrong_length(self, codec, length):
        with pytest.raises(FormatError):
            codec.decode("A" * length)

    @pytest.mark.parametrize("char", ["0", "O", "1", "I", "!", "é"])
    def test_out_of_alphabet(self, codec, char):
        public = codec.encode(12345)
        with pytest.raises(FormatError):
            codec.decode(char + public[1:])

    def test_non_string(self, codec):
        with pytest.raises(FormatError):
            codec.decode(12345)

    def test_single_character_mutations(self, codec):
        public = codec.encode(100000)
        accepted = 0
        attempts = 0
        for i, original in enumerate(public):
            for char in ALPHABET:
                if char == original:
                    continue
                attempts += 1
                mutated = public[:i] + char + public[i + 1 :]
                try:
                    codec.decode(mutated)
                except (TamperError, FormatError):
                    continue
                accepted += 1
        assert attempts == 22 * 16
        assert accepted <= attempts // 100

    def test_all_failures_are_uid_errors(self, codec):
        for bad in ("", "x" * 22, "A" * 22):
            with pytest.raises(UidError):
                codec.decode(bad)


class TestBufferLayout:
    def test_checksum_precedes_little_endian_payload(self):
        codec = UidCodec(KEY, cipher=IdentityCipher())
        buf = int64.encode(0x0102030405)
        public = codec.encode(0x0102030405)
        assert SqidsEncoder().decode(public) == crc16(buf) + buf

    def test_bad_checksum_is_tamper(self):
        codec = UidCodec(KEY, cipher=IdentityCipher())
        buf = int64.encode(7)
        forged = bytes(b ^ 0xFF for b in crc16(buf)) + buf
        with pytest.raises(TamperError):
            codec.decode(SqidsEncoder().encode(forged))

    def test_injected_encoding_is_used(self):
        class RecordingEncoding(SqidsEncoder):
            calls = 0

            def encode(self, buf):
                RecordingEncoding.calls += 1
                return super().encode(buf)

        codec = UidCodec(KEY, encoding=RecordingEncoding())
        codec.encode(1)
        assert RecordingEncoding.calls == 1


class TestConcurrency:
    def test_shared_codec_across_threads(self, codec):
        numbers = list(range(0, 2000, 7))
        expected = [codec.encode(n) for n in numbers]
        with ThreadPoolExecutor(max_workers=8) as pool:
            encoded = list(pool.map(codec.encode, numbers))
            decoded = list(pool.map(codec.decode, encoded))
        assert encoded == expected
        assert decoded == numbers
