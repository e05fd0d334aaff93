"""Signed 32-bit integers <-> 4-byte little-endian "long" payloads."""

from __future__ import annotations

import struct

from ._constants import INT32_MAX, INT32_MIN, LONG_SIZE, UINT32_SPAN
from ._errors import ERR_MALFORMED, ERR_OUT_OF_RANGE, OSAError


def encode_long(n: int) -> bytes:
    """Pack ``n`` as the unsigned little-endian image of its two's complement."""
    # Python ints are arbitrary-precision, so the range check is explicit.
    if n < INT32_MIN or n > INT32_MAX:
        raise OSAError(ERR_OUT_OF_RANGE,
                       "integer {} outside signed 32-bit range".format(n))
    return struct.pack("<I", n % UINT32_SPAN)


def decode_long(payload: bytes) -> int:
    if len(payload) != LONG_SIZE:
        raise OSAError(ERR_MALFORMED,
                       "long payload must be {} bytes, got {}".format(
                           LONG_SIZE, len(payload)))
    n = struct.unpack("<I", payload)[0]
    if n > INT32_MAX:
        n -= UINT32_SPAN
    return n
