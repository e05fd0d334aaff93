"""Error codes and the exception raised by the descriptor codec.

Pack errors always propagate.  Unpack errors propagate in strict mode; in
lenient mode the decoder catches them per subtree (see ``_codec``).
"""

from __future__ import annotations

from typing import Any, Optional

ERR_OUT_OF_RANGE: str = "ERR_OUT_OF_RANGE"            # integer outside int32
ERR_UNSUPPORTED_VALUE: str = "ERR_UNSUPPORTED_VALUE"  # no tag for host value
ERR_UNKNOWN_TAG: str = "ERR_UNKNOWN_TAG"              # tag not in the table
ERR_MALFORMED: str = "ERR_MALFORMED"                  # bad payload/shape/depth

PACK_ERRORS = (ERR_OUT_OF_RANGE, ERR_UNSUPPORTED_VALUE)
UNPACK_ERRORS = (ERR_UNKNOWN_TAG, ERR_MALFORMED)


class OSAError(Exception):
    """Exception for descriptor packing and unpacking errors.

    ``.code`` is one of the ERR_* strings above.  ``.descriptor`` holds the
    Descriptor being decoded when the error was raised by unpack, and is
    None for pack errors.
    """

    def __init__(self, code: str, msg: str = "",
                 descriptor: Optional[Any] = None) -> None:
        super().__init__(msg or code)
        self.code = code
        self.descriptor = descriptor

    def __str__(self) -> str:
        msg = super().__str__()
        if self.descriptor is None:
            return msg
        return "{} (in {!r})".format(msg, self.descriptor)
