"""Value <-> descriptor codec.

This module owns the tag table, the recursion, and the failure policy.
The value domain is closed:

    True / False     <-> "true" / "fals"   (also decodes "bool")
    None             <-> "null"
    int (int32)      <-> "long"
    str              <-> "utxt"
    list / tuple      -> "list"            (decodes to list)
    Record / dict     -> "reco"            (decodes to Record)
    TypeMarker       <-> "type"
    RawDescriptor    <-> any tag the decoder could not handle (lenient only)

Pack never recovers: a host value with no mapping is a programming error.
Unpack either raises (strict) or replaces the failing subtree with a
RawDescriptor and keeps going (lenient).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ._config import STRICT, CodecConfig
from ._constants import (
    CONTAINER_TAGS,
    LEAF_TAGS,
    TAG_BOOLEAN,
    TAG_FALSE,
    TAG_LIST,
    TAG_LONG,
    TAG_NULL,
    TAG_RECORD,
    TAG_TRUE,
    TAG_TYPE,
    TAG_USER_FIELDS,
    TAG_UTXT,
)
from ._container import (
    children_of,
    pack_pairs,
    pack_sequence,
    unpack_pairs,
    unpack_sequence,
)
from ._errors import (
    ERR_MALFORMED,
    ERR_UNKNOWN_TAG,
    ERR_UNSUPPORTED_VALUE,
    OSAError,
)
from ._integer import decode_long, encode_long
from ._text import decode_utxt, encode_utxt
from ._types import Descriptor, RawDescriptor, Record, TypeMarker, as_descriptor
from ._typetag import decode_type, encode_type

logger = logging.getLogger(__name__)


# ── Pack ──────────────────────────────────────────────────────

def pack(value: Any, config: Optional[CodecConfig] = None) -> Descriptor:
    """Encode a host value as a Descriptor tree.

    Raises OSAError with ERR_OUT_OF_RANGE or ERR_UNSUPPORTED_VALUE.
    """
    config = config or STRICT
    desc = _pack(value, config, 0)
    if config.debug:
        logger.debug("packed %r -> %r", value, desc)
    return desc


def _pack(val: Any, config: CodecConfig, depth: int) -> Descriptor:
    # Already-encoded subtrees pass through untouched.  Descriptor is a
    # tuple subclass, so this must come before the list/tuple branch.
    if isinstance(val, RawDescriptor):
        return _raw_to_descriptor(val)
    if isinstance(val, Descriptor):
        return val

    if val is None:
        return Descriptor(TAG_NULL, b"")

    # bool is a subclass of int; check it first or True packs as "long" 1.
    if isinstance(val, bool):
        return Descriptor(TAG_TRUE if val else TAG_FALSE, b"")

    if isinstance(val, int):
        return Descriptor(TAG_LONG, encode_long(val))

    if isinstance(val, str):
        return Descriptor(TAG_UTXT, encode_utxt(val))

    if isinstance(val, TypeMarker):
        return Descriptor(TAG_TYPE, encode_type(val))

    if isinstance(val, (list, tuple)):
        _check_pack_depth(depth, config)
        return Descriptor(
            TAG_LIST,
            pack_sequence(val, lambda item: _pack(item, config, depth + 1)))

    if isinstance(val, (Record, dict)):
        _check_pack_depth(depth, config)
        pairs = val.items() if isinstance(val, dict) else val.pairs()
        wrapper = pack_pairs(pairs, lambda item: _pack(item, config, depth + 1))
        return Descriptor(TAG_RECORD, (wrapper,))

    raise OSAError(ERR_UNSUPPORTED_VALUE,
                   "cannot pack {!r} of type {}".format(val, type(val).__name__))


def _raw_to_descriptor(raw: RawDescriptor) -> Descriptor:
    # Lenient unpack keeps a child that was not a (tag, payload) pair as is;
    # such a value has no wire form.
    try:
        return as_descriptor(raw.descriptor)
    except OSAError:
        raise OSAError(ERR_UNSUPPORTED_VALUE,
                       "cannot pack {!r}: not a descriptor".format(raw))


def _check_pack_depth(depth: int, config: CodecConfig) -> None:
    if depth + 1 > config.max_depth:
        raise OSAError(ERR_UNSUPPORTED_VALUE,
                       "value nested deeper than max_depth={}".format(config.max_depth))


# ── Unpack ────────────────────────────────────────────────────

def unpack(desc: Any, config: Optional[CodecConfig] = None) -> Any:
    """Decode a Descriptor tree into host values.

    In strict mode raises OSAError (ERR_UNKNOWN_TAG or ERR_MALFORMED) with
    ``.descriptor`` set to the innermost offending node.  In lenient mode
    never raises; undecodable subtrees come back as RawDescriptor.
    """
    config = config or STRICT
    value = _unpack(desc, config, 0)
    if config.debug:
        logger.debug("unpacked %r -> %r", desc, value)
    return value


def _unpack(obj: Any, config: CodecConfig, depth: int) -> Any:
    desc = obj
    try:
        desc = as_descriptor(obj)
        return _decode(desc, config, depth)
    except OSAError as e:
        if e.descriptor is None:
            e.descriptor = desc
        if config.strict:
            raise
        logger.warning("keeping undecodable descriptor raw: %s", e)
        return RawDescriptor(desc)


def _decode(desc: Descriptor, config: CodecConfig, depth: int) -> Any:
    tag = desc.tag

    if tag in LEAF_TAGS:
        payload = desc.payload
        if not isinstance(payload, bytes):
            raise OSAError(ERR_MALFORMED,
                           "{!r} expects raw bytes, got child descriptors".format(tag))
        return _decode_leaf(tag, payload)

    if tag in CONTAINER_TAGS:
        if depth + 1 > config.max_depth:
            raise OSAError(ERR_MALFORMED,
                           "descriptor nested deeper than max_depth={}".format(
                               config.max_depth))
        children = children_of(desc)

        def unpack_one(child: Any) -> Any:
            return _unpack(child, config, depth + 1)

        if tag == TAG_LIST:
            return unpack_sequence(children, unpack_one)
        if tag == TAG_RECORD:
            return Record(unpack_pairs(children, unpack_one))
        # TAG_USER_FIELDS
        raise OSAError(ERR_MALFORMED,
                       "{!r} is only valid inside a record".format(TAG_USER_FIELDS))

    raise OSAError(ERR_UNKNOWN_TAG, "unknown descriptor tag {!r}".format(tag))


def _decode_leaf(tag: str, payload: bytes) -> Any:
    if tag == TAG_TRUE or tag == TAG_FALSE or tag == TAG_NULL:
        if payload:
            raise OSAError(ERR_MALFORMED,
                           "{!r} payload must be empty, got {} bytes".format(
                               tag, len(payload)))
        if tag == TAG_NULL:
            return None
        return tag == TAG_TRUE

    if tag == TAG_BOOLEAN:
        if not payload:
            raise OSAError(ERR_MALFORMED, "bool payload is empty")
        return payload[0] != 0

    if tag == TAG_LONG:
        return decode_long(payload)

    if tag == TAG_TYPE:
        return decode_type(payload)

    # TAG_UTXT
    return decode_utxt(payload)
