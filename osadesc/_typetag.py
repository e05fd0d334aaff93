"""Type markers <-> "type" descriptor payloads.

The payload is the marker's code as raw bytes.  Codes are read as Latin-1
so any byte sequence maps to a str and back unchanged.
"""

from __future__ import annotations

from ._constants import CODE_MISSING, CODE_NULL_TYPE
from ._errors import ERR_MALFORMED, ERR_UNSUPPORTED_VALUE, OSAError
from ._types import TypeMarker

_WELL_KNOWN = {
    CODE_MISSING: TypeMarker.MISSING,
    CODE_NULL_TYPE: TypeMarker.NULL_TYPE,
}


def encode_type(marker: TypeMarker) -> bytes:
    try:
        return marker.code.encode("latin-1")
    except UnicodeEncodeError:
        raise OSAError(ERR_UNSUPPORTED_VALUE,
                       "type code {!r} is not a byte string".format(marker.code))


def decode_type(payload: bytes) -> TypeMarker:
    if not payload:
        raise OSAError(ERR_MALFORMED, "type payload is empty")
    code = payload.decode("latin-1")
    marker = _WELL_KNOWN.get(code)
    if marker is None:
        marker = TypeMarker(code)
    return marker
