"""Little-endian 32-bit numbers used for sizes, offsets and item ids."""

from __future__ import annotations

import struct

NUMBER_SIZE = 4
NUMBER_MAX = 0xFFFFFFFF

_NUMBER = struct.Struct("<I")


def pack_number(num: int) -> bytes:
    """Encode ``num`` as four little-endian bytes."""
    if not 0 <= num <= NUMBER_MAX:
        raise ValueError(f"number {num} does not fit in {NUMBER_SIZE} bytes")
    return _NUMBER.pack(num)


def unpack_number(data: bytes | bytearray | memoryview) -> int:
    """Decode the number held in the first four bytes of ``data``."""
    if len(data) < NUMBER_SIZE:
        raise ValueError(
            f"need at least {NUMBER_SIZE} bytes to read a number, got {len(data)}"
        )
    return _NUMBER.unpack_from(data)[0]


def hex_string(data: bytes | bytearray | memoryview) -> str:
    """Return ``data`` as a lower-case hexadecimal string without prefix."""
    return bytes(data).hex()