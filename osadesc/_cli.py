"""osadesc command-line interface.

Usage:
    echo '{"key": true}' | python3 -m osadesc pack
    python3 -m osadesc unpack --input result.json [--lenient] [--max-depth N]
    python3 -m osadesc version

Values and descriptors are read and written in the JSON forms described in
``osadesc._json_adapter``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import (
    CodecConfig,
    OSAError,
    __version__,
    descriptor_from_json,
    descriptor_to_json,
    pack,
    unpack,
    value_from_json,
    value_to_json,
)
from ._constants import DEFAULT_MAX_DEPTH


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="osadesc",
        description="osadesc — pack and unpack OSA descriptor trees",
    )
    parser.add_argument("--debug", action="store_true",
                        help="Log codec activity to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── pack ──
    pack_p = sub.add_parser("pack", help="Value JSON -> descriptor JSON")
    pack_p.add_argument("--input", "-i", metavar="FILE",
                        help="Read JSON from FILE instead of stdin")
    pack_p.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        metavar="N", help="Deepest container nesting accepted")

    # ── unpack ──
    unpack_p = sub.add_parser("unpack", help="Descriptor JSON -> value JSON")
    unpack_p.add_argument("--input", "-i", metavar="FILE",
                          help="Read JSON from FILE instead of stdin")
    unpack_p.add_argument("--lenient", action="store_true",
                          help="Keep undecodable subtrees as $raw instead of failing")
    unpack_p.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                          metavar="N", help="Deepest container nesting accepted")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read JSON bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("osadesc: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _config(args: argparse.Namespace) -> CodecConfig:
    return CodecConfig(strict=not getattr(args, "lenient", False),
                       max_depth=args.max_depth,
                       debug=args.debug)


def _cmd_pack(args: argparse.Namespace) -> None:
    value = value_from_json(_read_input(args.input))
    print(descriptor_to_json(pack(value, _config(args))))


def _cmd_unpack(args: argparse.Namespace) -> None:
    desc = descriptor_from_json(_read_input(args.input))
    print(value_to_json(unpack(desc, _config(args))))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"osadesc {__version__}")
        return

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "pack":
            _cmd_pack(args)
        elif args.command == "unpack":
            _cmd_unpack(args)
    except OSAError as e:
        print(f"osadesc: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        # CodecConfig rejects a non-positive --max-depth.
        print(f"osadesc: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
