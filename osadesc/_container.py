"""List and record containers.

The element codec is passed in as a callable so the recursion (and its
depth accounting and error policy) stays in ``_codec``.

Children are handed to the element codec as received, so a child that is
not a (tag, payload) pair fails inside its own decode step.

Record layout on the wire:

    ("reco", (
        ("usrf", (
            ("list", (key1, value1, key2, value2, ...)),
        )),
    ))

Every packed record carries exactly one "usrf" child, even when empty.
Records produced by the script engine may also hold keyword entries,
children whose tag *is* the key and whose single child is the value:

    ("reco", (("pnam", (("utxt", b"..."),)), ("usrf", ...)))

Both forms decode to one ordered list of (key, value) pairs, in wire order.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Sequence, Tuple

from ._constants import TAG_LIST, TAG_USER_FIELDS
from ._errors import ERR_MALFORMED, OSAError
from ._types import Descriptor, as_descriptor

PackFn = Callable[[Any], Descriptor]
UnpackFn = Callable[[Any], Any]


def children_of(desc: Descriptor) -> Tuple[Any, ...]:
    """Return a container's children, rejecting leaf payloads."""
    if not isinstance(desc.payload, (tuple, list)):
        raise OSAError(ERR_MALFORMED,
                       "{!r} expects child descriptors, got raw bytes".format(desc.tag))
    return tuple(desc.payload)


# ── Lists ─────────────────────────────────────────────────────

def pack_sequence(items: Iterable[Any], pack_one: PackFn) -> Tuple[Descriptor, ...]:
    return tuple(pack_one(item) for item in items)


def unpack_sequence(children: Sequence[Any], unpack_one: UnpackFn) -> List[Any]:
    return [unpack_one(child) for child in children]


# ── Records ───────────────────────────────────────────────────

def pack_pairs(pairs: Iterable[Tuple[Any, Any]], pack_one: PackFn) -> Descriptor:
    """Flatten pairs into the "usrf" wrapper, preserving order."""
    flat: List[Descriptor] = []
    for key, value in pairs:
        flat.append(pack_one(key))
        flat.append(pack_one(value))
    return Descriptor(TAG_USER_FIELDS, (Descriptor(TAG_LIST, tuple(flat)),))


def unpack_pairs(children: Sequence[Any], unpack_one: UnpackFn) -> List[Tuple[Any, Any]]:
    """Collect (key, value) pairs from the children of a "reco"."""
    pairs: List[Tuple[Any, Any]] = []
    for raw in children:
        child = as_descriptor(raw)
        if child.tag == TAG_USER_FIELDS:
            items = _user_field_items(child)
            for i in range(0, len(items), 2):
                key = unpack_one(items[i])
                value = unpack_one(items[i + 1])
                pairs.append((key, value))
        else:
            pairs.append((child.tag, unpack_one(_keyword_value(child))))
    return pairs


def _user_field_items(wrapper: Descriptor) -> Tuple[Any, ...]:
    inner = children_of(wrapper)
    if len(inner) != 1:
        raise OSAError(ERR_MALFORMED,
                       "usrf must hold exactly one list, got {} children".format(len(inner)))
    lst = as_descriptor(inner[0])
    if lst.tag != TAG_LIST:
        raise OSAError(ERR_MALFORMED,
                       "usrf must hold a list, got {!r}".format(lst.tag))
    items = children_of(lst)
    if len(items) % 2:
        raise OSAError(ERR_MALFORMED,
                       "usrf list has odd length {}".format(len(items)))
    return items


def _keyword_value(entry: Descriptor) -> Any:
    inner = children_of(entry)
    if len(inner) != 1:
        raise OSAError(ERR_MALFORMED,
                       "record entry {!r} must hold one value, got {}".format(
                           entry.tag, len(inner)))
    return inner[0]
