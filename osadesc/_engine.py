"""Evaluate OSA source through an external script engine.

The engine itself (compiling source, dispatching the handler call,
reporting script errors) lives outside this package.  Anything with an
``execute`` method of the ScriptEngine shape can be used; osa_eval packs
the arguments on the way in and unpacks the result on the way out.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence, Tuple

from ._codec import pack, unpack
from ._config import STRICT, CodecConfig
from ._constants import LANGUAGES
from ._types import Descriptor

logger = logging.getLogger(__name__)


class ScriptEngine(Protocol):
    def execute(self, source: str, language: str, call: Optional[str],
                args: Tuple[Descriptor, ...]) -> Descriptor:
        """Run ``source``; call handler ``call`` with ``args`` if given."""
        ...


def osa_eval(engine: ScriptEngine, source: str, *,
             lang: str = "AppleScript",
             call: Optional[str] = None,
             args: Sequence[Any] = (),
             unpack_result: bool = True,
             config: Optional[CodecConfig] = None) -> Any:
    """Evaluate ``source`` and return its result.

    ``lang`` is "AppleScript" or "JavaScript".  With ``call`` set, the
    named handler is invoked with ``args`` packed in order; otherwise the
    script's top level runs and ``args`` must be empty.  The result is
    unpacked with ``config`` unless ``unpack_result`` is False, in which
    case the raw Descriptor comes back.  Engine errors are not caught.
    """
    config = config or STRICT
    if lang not in LANGUAGES:
        raise ValueError("unsupported OSA language {!r}; expected one of {}".format(
            lang, ", ".join(LANGUAGES)))
    if args and call is None:
        raise ValueError("args given without a handler to call")

    packed = tuple(pack(arg, config) for arg in args)
    if config.debug:
        logger.debug("%s call=%r args=%r", lang, call, packed)

    result = engine.execute(source, lang, call, packed)
    if config.debug:
        logger.debug("%s result=%r", lang, result)

    if not unpack_result:
        return result
    return unpack(result, config)
