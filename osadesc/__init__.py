"""osadesc — Python values <-> OSA (Apple Event) descriptor trees.

Pack host values into the tagged descriptor tree an OSA script engine takes
as handler arguments, and unpack the tree it returns.

Quick start:
    >>> from osadesc import pack, unpack, Record
    >>> pack(["a", 1])
    Descriptor('list', (Descriptor('utxt', b'a\\x00'), Descriptor('long', b'\\x01\\x00\\x00\\x00')))
    >>> unpack(pack(Record([("key", True)])))
    Record([('key', True)])

Integers must fit in signed 32 bits; text travels as UTF-16.  Unpacking is
strict by default; pass ``LENIENT`` (or ``CodecConfig(strict=False)``) to
keep undecodable subtrees as RawDescriptor instead of raising.
"""

from __future__ import annotations

from ._codec import pack, unpack
from ._config import LENIENT, STRICT, CodecConfig
from ._constants import INT32_MAX, INT32_MIN
from ._engine import ScriptEngine, osa_eval
from ._errors import (
    ERR_MALFORMED,
    ERR_OUT_OF_RANGE,
    ERR_UNKNOWN_TAG,
    ERR_UNSUPPORTED_VALUE,
    OSAError,
)
from ._json_adapter import (
    descriptor_from_json,
    descriptor_to_json,
    value_from_json,
    value_to_json,
)
from ._types import Descriptor, RawDescriptor, Record, TypeMarker

__version__ = "1.0.0"

__all__ = [
    # Codec
    "pack",
    "unpack",
    "osa_eval",
    "ScriptEngine",
    # Configuration
    "CodecConfig",
    "STRICT",
    "LENIENT",
    # Types
    "Descriptor",
    "Record",
    "TypeMarker",
    "RawDescriptor",
    "INT32_MIN",
    "INT32_MAX",
    # JSON forms
    "descriptor_from_json",
    "descriptor_to_json",
    "value_from_json",
    "value_to_json",
    # Exception
    "OSAError",
    # Error codes
    "ERR_OUT_OF_RANGE",
    "ERR_UNSUPPORTED_VALUE",
    "ERR_UNKNOWN_TAG",
    "ERR_MALFORMED",
]
