#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Seeded property checks for the descriptor codec.
#
# This runner:
# - generates random values (bool/null/int32/text/list/record/type) within limits
# - checks pack/unpack invariants on each
# - checks that lenient unpacking of a tree with one foreign leaf changes
#   only that leaf
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, random, logging
from typing import Any, List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from osadesc import (
    INT32_MAX, INT32_MIN, LENIENT, Descriptor, OSAError, Record,
    TypeMarker, pack, unpack,
)

SEED = int(os.environ.get("OSADESC_SEED", "1337"))
TRIALS = int(os.environ.get("OSADESC_TRIALS", "2000"))
MAX_GEN_DEPTH = int(os.environ.get("OSADESC_GEN_MAX_DEPTH", "5"))
MAX_KEYS = int(os.environ.get("OSADESC_GEN_MAX_KEYS", "5"))
MAX_LIST = int(os.environ.get("OSADESC_GEN_MAX_LIST", "5"))
MAX_STR = int(os.environ.get("OSADESC_GEN_MAX_STR", "16"))

random.seed(SEED)

# Check (5) triggers a lenient-recovery warning on every trial.
logging.getLogger("osadesc").setLevel(logging.ERROR)

def rand_text() -> str:
    # Scalars only; astral characters exercise surrogate pairs.
    out = []
    for _ in range(random.randint(0, MAX_STR)):
        r = random.random()
        if r < 0.70:
            out.append(chr(random.randint(0x20, 0x7E)))
        elif r < 0.90:
            out.append(chr(random.randint(0x00A0, 0xD7FF)))
        else:
            out.append(chr(random.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_int() -> int:
    r = random.random()
    if r < 0.1:
        return random.choice([INT32_MIN, INT32_MAX, 0, -1])
    return random.randint(INT32_MIN, INT32_MAX)

def rand_leaf() -> Any:
    r = random.random()
    if r < 0.15:
        return random.random() < 0.5
    if r < 0.20:
        return None
    if r < 0.50:
        return rand_int()
    if r < 0.90:
        return rand_text()
    return random.choice([TypeMarker.MISSING, TypeMarker.NULL_TYPE, TypeMarker("utxt")])

def gen_value(depth: int) -> Any:
    if depth >= MAX_GEN_DEPTH:
        return rand_leaf()
    r = random.random()
    if r < 0.25:
        n = random.randint(0, MAX_KEYS)
        return Record((rand_text() if random.random() < 0.8 else gen_value(depth + 1),
                       gen_value(depth + 1)) for _ in range(n))
    if r < 0.50:
        return [gen_value(depth + 1) for _ in range(random.randint(0, MAX_LIST))]
    return rand_leaf()

def leaf_paths(desc: Descriptor, path: List[int]) -> List[List[int]]:
    if isinstance(desc.payload, bytes):
        return [path]
    out = []
    for i, child in enumerate(desc.payload):
        out.extend(leaf_paths(child, path + [i]))
    return out

def replace_at(desc: Descriptor, path: List[int], new: Descriptor) -> Descriptor:
    if not path:
        return new
    children = list(desc.payload)
    children[path[0]] = replace_at(children[path[0]], path[1:], new)
    return Descriptor(desc.tag, tuple(children))

def fail(msg: str, v: Any) -> int:
    print("INVARIANT FAIL:", msg)
    print("VALUE:", repr(v)[:2000])
    return 1

def main() -> int:
    for t in range(TRIALS):
        v = gen_value(0)

        # (1) Encode stability (encode twice, same tree)
        d1 = pack(v)
        if d1 != pack(v):
            return fail("pack stability", v)

        # (2) Round trip
        if unpack(d1) != v:
            return fail("unpack(pack(v)) == v", v)

        # (3) Re-pack of the decoded value reproduces the tree
        if pack(unpack(d1)) != d1:
            return fail("pack(unpack(d)) == d", v)

        # (4) Lenient decoding agrees with strict on valid trees
        if unpack(d1, LENIENT) != v:
            return fail("lenient == strict on valid input", v)

        # (5) A foreign leaf is isolated by lenient decoding and re-packs verbatim
        paths = leaf_paths(d1, [])
        if paths:
            path = random.choice(paths)
            foreign = Descriptor("doub", bytes(8))
            tampered = replace_at(d1, path, foreign)
            try:
                unpack(tampered)
                return fail("strict accepted a foreign tag", v)
            except OSAError:
                pass
            got = unpack(tampered, LENIENT)
            if pack(got) != tampered:
                return fail("lenient result re-packs verbatim", v)

        # (6) Out-of-range integers never pack
        for n in (INT32_MAX + 1 + t, INT32_MIN - 1 - t):
            try:
                pack([v, n])
                return fail("out-of-range integer packed", n)
            except OSAError:
                pass

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
