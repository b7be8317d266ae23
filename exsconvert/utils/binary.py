"""
Low-level helpers for fixed-layout binary records.
"""

import struct
from typing import Tuple

from exsconvert.utils.validation import EXSFormatError


def decode_fixed_string(raw: bytes) -> str:
    """
    Decode a fixed-width, NUL padded name field.

    NUL bytes are trimmed from both ends, then any remaining
    non-printable characters (embedded NULs, control bytes) are dropped.
    Decoding an already clean string is a no-op.

    Args:
        raw: Raw field bytes (typically 64 or 256 bytes)

    Returns:
        Decoded string
    """
    trimmed = bytes(raw).strip(b"\x00")
    if not trimmed:
        return ""
    text = trimmed.decode("utf-8", errors="replace")
    return "".join(ch for ch in text if ch.isprintable())


def twos_complement(value: int, bits: int) -> int:
    """Interpret the low `bits` of value as a signed integer."""
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def byte_order(big_endian: bool) -> str:
    """Return the struct byte-order prefix."""
    return ">" if big_endian else "<"


def unpack_at(data: bytes, offset: int, fmt: str, big_endian: bool) -> Tuple:
    """
    Unpack a struct format at an absolute offset.

    Raises:
        EXSFormatError: If the buffer is too short for the format
    """
    full = byte_order(big_endian) + fmt
    size = struct.calcsize(full)
    if offset < 0 or offset + size > len(data):
        raise EXSFormatError(
            f"short read at offset 0x{offset:X}: need {size} bytes, "
            f"have {max(0, len(data) - offset)}"
        )
    return struct.unpack_from(full, data, offset)


def require_bytes(data: bytes, offset: int, length: int, what: str = "record") -> None:
    """Raise EXSFormatError unless data holds `length` bytes at offset."""
    if offset + length > len(data):
        raise EXSFormatError(
            f"short read: {what} at 0x{offset:X} needs {length} bytes, "
            f"have {max(0, len(data) - offset)}"
        )
