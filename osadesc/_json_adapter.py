"""JSON renderings of values and descriptor trees.

Used by the CLI and the conformance vectors.

Descriptor JSON:
    leaf       {"tag": "utxt", "hex": "74006500"}
    container  {"tag": "list", "items": [<descriptor>, ...]}

Value JSON:
    null / true / false / integer / string / array map directly
    {"$record": [[key, value], ...]}   Record, keys may be any value
    {"$type": "gnsm"}                  TypeMarker
    {"$raw": <descriptor>}             RawDescriptor
    any other object                   Record with its string keys, in
                                       document order (duplicates kept)

JSON floats are rejected: there is no floating-point descriptor.  As with
integers, we intercept at the token level so "1.0" is caught before Python
turns it into a float that happens to be integral.
"""

from __future__ import annotations

import binascii
import json
from typing import Any, Dict, List, Tuple, Union

from ._errors import ERR_MALFORMED, ERR_UNSUPPORTED_VALUE, OSAError
from ._types import Descriptor, RawDescriptor, Record, TypeMarker, as_descriptor

_RECORD_KEY = "$record"
_TYPE_KEY = "$type"
_RAW_KEY = "$raw"


class _FloatSentinel:
    """Placeholder for a JSON float token, rejected during conversion."""
    __slots__ = ("token",)
    def __init__(self, token: str):
        self.token = token


class _Pairs:
    """A JSON object as parsed: its (key, value) pairs in document order."""
    __slots__ = ("items",)
    def __init__(self, items: List[Tuple[str, Any]]):
        self.items = items


def _loads(raw: Union[bytes, str]) -> Any:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise OSAError(ERR_MALFORMED, "JSON input is not valid UTF-8")
    try:
        return json.loads(raw, object_pairs_hook=_Pairs, parse_float=_FloatSentinel)
    except json.JSONDecodeError as e:
        raise OSAError(ERR_MALFORMED, "JSON parse error: {}".format(e))


# ── Descriptor trees ──────────────────────────────────────────

def descriptor_from_json(raw: Union[bytes, str]) -> Descriptor:
    return _descriptor_from_obj(_loads(raw))


def descriptor_to_json(desc: Any, indent: Any = None) -> str:
    return json.dumps(descriptor_to_obj(desc), indent=indent)


def descriptor_to_obj(desc: Any) -> Dict[str, Any]:
    desc = as_descriptor(desc)
    if isinstance(desc.payload, bytes):
        return {"tag": desc.tag, "hex": desc.payload.hex()}
    return {"tag": desc.tag, "items": [descriptor_to_obj(c) for c in desc.payload]}


def _descriptor_from_obj(x: Any) -> Descriptor:
    if not isinstance(x, _Pairs):
        raise OSAError(ERR_MALFORMED, "descriptor must be a JSON object")
    fields = dict(x.items)
    tag = fields.get("tag")
    if not isinstance(tag, str):
        raise OSAError(ERR_MALFORMED, "descriptor needs a string \"tag\"")
    if "hex" in fields and "items" in fields:
        raise OSAError(ERR_MALFORMED, "descriptor has both \"hex\" and \"items\"")

    if "items" in fields:
        items = fields["items"]
        if not isinstance(items, list):
            raise OSAError(ERR_MALFORMED, "\"items\" must be an array")
        return Descriptor(tag, tuple(_descriptor_from_obj(i) for i in items))

    hexed = fields.get("hex", "")
    if not isinstance(hexed, str):
        raise OSAError(ERR_MALFORMED, "\"hex\" must be a string")
    try:
        return Descriptor(tag, binascii.unhexlify(hexed))
    except (binascii.Error, ValueError):
        raise OSAError(ERR_MALFORMED, "bad hex payload for {!r}".format(tag))


# ── Values ────────────────────────────────────────────────────

def value_from_json(raw: Union[bytes, str]) -> Any:
    return json_to_value(_loads(raw))


def value_to_json(value: Any, indent: Any = None) -> str:
    return json.dumps(value_to_obj(value), indent=indent, ensure_ascii=False)


def json_to_value(x: Any) -> Any:
    """Convert a parsed JSON value into the codec's value domain."""
    if isinstance(x, _Pairs):
        if len(x.items) == 1:
            key, inner = x.items[0]
            if key == _RECORD_KEY:
                return _record_from_obj(inner)
            if key == _TYPE_KEY:
                if not isinstance(inner, str) or not inner:
                    raise OSAError(ERR_UNSUPPORTED_VALUE, "$type needs a non-empty string")
                return TypeMarker(inner)
            if key == _RAW_KEY:
                return RawDescriptor(_descriptor_from_obj(inner))
        return Record((k, json_to_value(v)) for k, v in x.items)

    if isinstance(x, list):
        return [json_to_value(v) for v in x]

    if isinstance(x, _FloatSentinel):
        raise OSAError(ERR_UNSUPPORTED_VALUE,
                       "floating point is not supported: {}".format(x.token))

    # bool, int, str and None are already in the value domain.
    if x is None or isinstance(x, (bool, int, str)):
        return x

    raise OSAError(ERR_UNSUPPORTED_VALUE,
                   "unexpected JSON type: {}".format(type(x).__name__))


def _record_from_obj(inner: Any) -> Record:
    if not isinstance(inner, list):
        raise OSAError(ERR_UNSUPPORTED_VALUE, "$record must be an array of pairs")
    pairs = []
    for entry in inner:
        if not isinstance(entry, list) or len(entry) != 2:
            raise OSAError(ERR_UNSUPPORTED_VALUE, "$record entries must be [key, value]")
        pairs.append((json_to_value(entry[0]), json_to_value(entry[1])))
    return Record(pairs)


def value_to_obj(val: Any) -> Any:
    """Convert a decoded value into plain JSON-serializable objects."""
    if val is None or isinstance(val, (bool, int, str)):
        return val
    if isinstance(val, (list, tuple)) and not isinstance(val, Descriptor):
        return [value_to_obj(v) for v in val]
    if isinstance(val, dict):
        val = Record(val)
    if isinstance(val, Record):
        return {_RECORD_KEY: [[value_to_obj(k), value_to_obj(v)] for k, v in val]}
    if isinstance(val, TypeMarker):
        return {_TYPE_KEY: val.code}
    if isinstance(val, RawDescriptor):
        try:
            return {_RAW_KEY: descriptor_to_obj(val.descriptor)}
        except OSAError:
            raise OSAError(ERR_UNSUPPORTED_VALUE,
                           "cannot render {!r} as JSON".format(val))
    raise OSAError(ERR_UNSUPPORTED_VALUE,
                   "cannot render {!r} as JSON".format(type(val).__name__))
