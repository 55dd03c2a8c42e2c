from __future__ import annotations

import argparse
import logging
import sys

from .api import parse_file, resolve_parser
from .errors import NormalizeError
from .format import format_file
from .shell import ShellConfig, run_shell


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="spantree",
        description="Normalize parser output into a gapless span tree",
        epilog="usage forms: 'spantree [options] shell FLAGFILE' or 'spantree [options] SOURCE'",
    )
    ap.add_argument("--parser", default="blocks", help="Built-in parser name or module:function")
    ap.add_argument("--proto", type=int, choices=(1, 2), default=2, help="Shell protocol version")
    ap.add_argument("--encoding", default=None, help="Source encoding (default: utf-8)")
    ap.add_argument("--indent", type=int, default=None, help="Indent JSON output")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level for messages on stderr",
    )
    ap.add_argument("args", nargs="+", metavar="ARG", help="shell FLAGFILE, or a single SOURCE file")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        parser = resolve_parser(args.parser)
    except (ImportError, ValueError) as exc:
        ap.error(str(exc))

    if len(args.args) == 2 and args.args[0] == "shell":
        config = ShellConfig(parser=parser, protocol=args.proto, default_encoding=args.encoding)
        return run_shell(config, args.args[1], sys.stdin, sys.stdout)

    if len(args.args) != 1:
        ap.error("expected 'shell FLAGFILE' or a single SOURCE")

    try:
        tree = parse_file(args.args[0], parser=parser, encoding=args.encoding)
    except (OSError, LookupError, UnicodeError, NormalizeError) as exc:
        print(f"spantree: {exc}", file=sys.stderr)
        return 1
    print(format_file(tree, indent=args.indent))
    return 0
