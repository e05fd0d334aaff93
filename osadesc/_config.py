"""Codec configuration, passed explicitly to pack/unpack."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ._constants import DEFAULT_MAX_DEPTH

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CodecConfig:
    """Decoding policy and limits.

    strict     — raise on undecodable subtrees (False: keep them as
                 RawDescriptor and log a warning)
    max_depth  — deepest container nesting accepted by pack and unpack
    debug      — log packed arguments and engine results at DEBUG
    """

    strict: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    debug: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be >= 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CodecConfig":
        """Build a config from OSADESC_STRICT, OSADESC_MAX_DEPTH, OSADESC_DEBUG."""
        env = os.environ if environ is None else environ
        return cls(
            strict=env.get("OSADESC_STRICT", "1").lower() in _TRUTHY,
            max_depth=int(env.get("OSADESC_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
            debug=env.get("OSADESC_DEBUG", "0").lower() in _TRUTHY,
        )


STRICT = CodecConfig()
LENIENT = CodecConfig(strict=False)
