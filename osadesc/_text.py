"""UTF-16 text for "utxt" payloads.

Encoding always produces little-endian UTF-16 with no BOM.  Decoding looks
at the first two bytes: FE FF selects big-endian, FF FE little-endian, and
anything else is read as BOM-less little-endian.  Characters outside the
BMP travel as surrogate pairs in both directions.
"""

from __future__ import annotations

from ._constants import BOM_BE, BOM_LE
from ._errors import ERR_MALFORMED, ERR_UNSUPPORTED_VALUE, OSAError


def encode_utxt(text: str) -> bytes:
    try:
        return text.encode("utf-16-le")
    except UnicodeEncodeError:
        # Lone surrogates in the str cannot be written as UTF-16.
        raise OSAError(ERR_UNSUPPORTED_VALUE, "text contains an unpaired surrogate")


def decode_utxt(payload: bytes) -> str:
    if len(payload) % 2:
        raise OSAError(ERR_MALFORMED,
                       "utxt payload has odd length {}".format(len(payload)))
    # The "utf-16" codec consumes a leading BOM and honours its byte order,
    # which covers FE FF.  FF FE is stripped here so the default never has
    # to guess.
    if payload[:2] == BOM_BE:
        codec = "utf-16"
    elif payload[:2] == BOM_LE:
        payload = payload[2:]
        codec = "utf-16-le"
    else:
        codec = "utf-16-le"
    try:
        return payload.decode(codec)
    except UnicodeDecodeError as e:
        raise OSAError(ERR_MALFORMED, "invalid UTF-16 text: {}".format(e.reason))
