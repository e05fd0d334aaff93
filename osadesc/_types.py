"""The descriptor tree and the host-side value types that have no builtin.

    Descriptor     — (tag, payload) node of the wire tree
    Record         — ordered (key, value) pairs, keys of any value type
    TypeMarker     — a "type" value: missing, null-type, or an opaque code
    RawDescriptor  — an undecodable subtree kept verbatim (lenient unpack)

Booleans, null, integers, text and lists use bool, None, int, str and list.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, NamedTuple, Tuple, Union

from ._constants import CODE_MISSING, CODE_NULL_TYPE
from ._errors import ERR_MALFORMED, OSAError


class Descriptor(NamedTuple):
    """A node of the descriptor tree.

    Leaf tags carry ``bytes``; container tags carry a tuple of child
    Descriptors.
    """

    tag: str
    payload: Union[bytes, Tuple["Descriptor", ...]] = b""

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.payload, bytes)

    def __repr__(self) -> str:
        return "Descriptor({!r}, {!r})".format(self.tag, self.payload)


class Record:
    """An ordered, immutable sequence of (key, value) pairs.

    Keys are usually strings but any packable value is allowed, so this is
    not a dict.  Duplicate keys are kept in wire order; ``get`` and ``[]``
    return the first match.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[Tuple[Any, Any]] = ()) -> None:
        if isinstance(pairs, dict):
            pairs = pairs.items()
        self._pairs = tuple((k, v) for k, v in pairs)

    def pairs(self) -> Tuple[Tuple[Any, Any], ...]:
        return self._pairs

    def keys(self) -> list:
        return [k for k, _ in self._pairs]

    def values(self) -> list:
        return [v for _, v in self._pairs]

    def get(self, key: Any, default: Any = None) -> Any:
        for k, v in self._pairs:
            if k == key:
                return v
        return default

    def to_dict(self) -> dict:
        """Return a dict; later duplicates never shadow earlier keys."""
        out: dict = {}
        for k, v in self._pairs:
            out.setdefault(k, v)
        return out

    def __getitem__(self, key: Any) -> Any:
        for k, v in self._pairs:
            if k == key:
                return v
        raise KeyError(key)

    def __contains__(self, key: Any) -> bool:
        return any(k == key for k, _ in self._pairs)

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._pairs == other._pairs
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._pairs)

    def __repr__(self) -> str:
        return "Record({!r})".format(list(self._pairs))


class TypeMarker:
    """The value of a "type" descriptor.

    MISSING and NULL_TYPE are the two well-known aliases for "no type";
    any other code is opaque and preserved verbatim.
    """

    __slots__ = ("code",)

    MISSING: "TypeMarker"
    NULL_TYPE: "TypeMarker"

    def __init__(self, code: str) -> None:
        if not isinstance(code, str) or not code:
            raise ValueError("type code must be a non-empty string")
        self.code = code

    @property
    def is_missing(self) -> bool:
        return self.code == CODE_MISSING

    @property
    def is_null_type(self) -> bool:
        return self.code == CODE_NULL_TYPE

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypeMarker):
            return self.code == other.code
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("TypeMarker", self.code))

    def __repr__(self) -> str:
        if self.is_missing:
            return "TypeMarker.MISSING"
        if self.is_null_type:
            return "TypeMarker.NULL_TYPE"
        return "TypeMarker({!r})".format(self.code)


TypeMarker.MISSING = TypeMarker(CODE_MISSING)
TypeMarker.NULL_TYPE = TypeMarker(CODE_NULL_TYPE)


class RawDescriptor:
    """A subtree the lenient decoder could not turn into a value.

    Normally wraps a Descriptor.  When the failing node was not even a
    (tag, payload) pair, the object is kept as it was received.
    """

    __slots__ = ("descriptor",)

    def __init__(self, descriptor: Any) -> None:
        self.descriptor = descriptor

    @property
    def tag(self) -> Any:
        return getattr(self.descriptor, "tag", None)

    @property
    def payload(self) -> Any:
        return getattr(self.descriptor, "payload", None)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawDescriptor):
            return self.descriptor == other.descriptor
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("RawDescriptor", self.descriptor))

    def __repr__(self) -> str:
        return "RawDescriptor({!r})".format(self.descriptor)


def as_descriptor(obj: Any) -> Descriptor:
    """Coerce a (tag, payload) pair into a Descriptor.

    Plain tuples and lists are accepted so callers holding trees built by
    hand (or loaded from JSON) need not construct Descriptors themselves.
    Bytes-like tags are read as Latin-1; container payloads become tuples.
    """
    if isinstance(obj, Descriptor):
        return obj
    if not isinstance(obj, (tuple, list)) or len(obj) != 2:
        raise OSAError(ERR_MALFORMED,
                       "expected a (tag, payload) pair, got {!r}".format(obj))
    tag, payload = obj
    if isinstance(tag, (bytes, bytearray)):
        tag = bytes(tag).decode("latin-1")
    if not isinstance(tag, str):
        raise OSAError(ERR_MALFORMED, "descriptor tag must be text, got {!r}".format(tag))
    if payload is None:
        payload = b""
    elif isinstance(payload, (bytearray, memoryview)):
        payload = bytes(payload)
    elif isinstance(payload, list):
        payload = tuple(payload)
    return Descriptor(tag, payload)
