"""Uid steps for a resolution layer.

Storage hands row ids over as decimal strings (64-bit values do not fit
JSON-safe integers), and a resolver may see nulls for optional fields.
Strings are converted, anything else passes through untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from kipu.errors import DomainError, UidError
from kipu.uid import UidCodec

logger = logging.getLogger("kipu")

# 2**64 - 1 has 20 decimal digits
MAX_ROW_ID_DIGITS = len(str(UidCodec.MAX_SAFE_ID))


def parse_row_id(value: str) -> int:
    """Parse a decimal row id, rejecting signs, blanks and non-digits."""
    if not value.isascii() or not value.isdigit():
        raise DomainError("Row id must be a non-negative decimal integer")
    digits = value.lstrip("0") or "0"
    if len(digits) > MAX_ROW_ID_DIGITS:
        raise DomainError("Row id is wider than 64 bits")
    return int(digits)


def encode_uid(codec: UidCodec, row_id: Any) -> Any:
    """Encode a row id given as ``str`` or ``int``; pass other values through."""
    if isinstance(row_id, str):
        return codec.encode(parse_row_id(row_id))
    if isinstance(row_id, int) and not isinstance(row_id, bool):
        return codec.encode(row_id)
    return row_id


def decode_uid(codec: UidCodec, uid: Any) -> Any:
    """Decode a uid into a decimal row id string; pass non-strings through."""
    if not isinstance(uid, str):
        return uid
    return str(codec.decode(uid))


def decode_uid_or_none(codec: UidCodec, uid: Any) -> str | None:
    """Like ``decode_uid`` but an invalid uid resolves to ``None``."""
    try:
        return decode_uid(codec, uid)
    except UidError as exc:
        logger.debug("Rejected uid (%s)", exc.kind)
        return None
