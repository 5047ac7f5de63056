"""CRC-16 checksum for checked uid buffers.

Variant: CRC-16/XMODEM (poly 0x1021, init 0x0000, unreflected, no final
xor), serialised little-endian. Every issued uid embeds this value, so it
must never change for a deployment.
"""

from __future__ import annotations

import binascii

WIDTH = 2


def crc16(buf: bytes) -> bytes:
    """Return the 2-byte checksum of ``buf``."""
    return binascii.crc_hqx(bytes(buf), 0).to_bytes(WIDTH, "little")
