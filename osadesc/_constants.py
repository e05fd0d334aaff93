"""Descriptor tags, type-marker codes, and codec limits.

Tags are the four ASCII characters of an Apple Event descriptor type as
they appear on the wire.  Type-marker codes are stored byte-reversed
(little-endian FourCharCode), which is why "msng" reads as "gnsm".
"""

from __future__ import annotations

# ── Leaf tags ─────────────────────────────────────────────────
TAG_TRUE: str = "true"      # empty payload
TAG_FALSE: str = "fals"     # empty payload
TAG_BOOLEAN: str = "bool"   # >= 1 byte, first byte nonzero means true
TAG_LONG: str = "long"      # 4 bytes, little-endian two's complement
TAG_NULL: str = "null"      # empty payload
TAG_TYPE: str = "type"      # >= 1 byte, a type-marker code
TAG_UTXT: str = "utxt"      # UTF-16, BOM optional

# ── Container tags ────────────────────────────────────────────
TAG_LIST: str = "list"
TAG_RECORD: str = "reco"
TAG_USER_FIELDS: str = "usrf"   # wraps a "list" of alternating keys/values

LEAF_TAGS = frozenset([
    TAG_TRUE, TAG_FALSE, TAG_BOOLEAN, TAG_LONG, TAG_NULL, TAG_TYPE, TAG_UTXT,
])
CONTAINER_TAGS = frozenset([TAG_LIST, TAG_RECORD, TAG_USER_FIELDS])

# ── Type-marker codes ─────────────────────────────────────────
CODE_MISSING: str = "gnsm"
CODE_NULL_TYPE: str = "llun"

# ── Signed 32-bit integer range ──────────────────────────────
INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1
UINT32_SPAN: int = 2**32
LONG_SIZE: int = 4

# ── UTF-16 byte-order marks ──────────────────────────────────
BOM_BE: bytes = b"\xfe\xff"
BOM_LE: bytes = b"\xff\xfe"

# ── Defaults ──────────────────────────────────────────────────
DEFAULT_MAX_DEPTH: int = 64

LANGUAGES = ("AppleScript", "JavaScript")
