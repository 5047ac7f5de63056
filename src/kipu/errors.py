"""Errors raised by the uid codec.

Every decode failure is an "Invalid id" to the outside world. The
subclass records which check rejected the input so the gateway can log
it without telling the caller.
"""

from __future__ import annotations


class UidError(ValueError):
    """Base class for all uid codec failures."""

    kind = "invalid"

    def __init__(self, message: str = "Invalid id") -> None:
        super().__init__(message)


class RangeError(UidError):
    """A value does not fit the supported 64-bit width."""

    kind = "range"


class DomainError(RangeError):
    """An input integer or buffer is outside the codec's domain."""

    kind = "domain"


class FormatError(UidError):
    """A public id has the wrong length, alphabet or arity."""

    kind = "format"


class TamperError(UidError):
    """The checksum did not survive decryption."""

    kind = "tamper"
