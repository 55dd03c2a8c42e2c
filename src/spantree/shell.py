from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .api import Parser, parse_file
from .errors import NormalizeError
from .format import format_file


logger = logging.getLogger(__name__)

END_OF_BATCH = "end"


@dataclass(frozen=True, slots=True)
class ShellConfig:
    parser: Parser
    protocol: int = 2  # 1: source/dest pairs, 2: source/encoding/dest triples
    default_encoding: str | None = None

    @property
    def lines_per_request(self) -> int:
        return 3 if self.protocol > 1 else 2


def process_request(config: ShellConfig, source: str, encoding: str | None, dest: str) -> bool:
    """Parse `source` and write its normalized JSON tree to `dest`."""
    try:
        tree = parse_file(source, parser=config.parser, encoding=encoding or config.default_encoding)
        Path(dest).write_text(format_file(tree), encoding="utf-8")
    except (OSError, LookupError, UnicodeError, NormalizeError) as exc:
        logger.warning("failed to process %s: %s", source, exc)
        return False
    except Exception:
        # plugin parsers may raise anything
        logger.exception("parser failed on %s", source)
        return False
    logger.debug("wrote %s", dest)
    return True


def run_shell(config: ShellConfig, flag_file: str | Path, stdin: TextIO, stdout: TextIO) -> int:
    """Serve parse requests read from `stdin`, one OK/KO line per request.

    Creating `flag_file` tells the caller the shell is ready. A request is two
    (protocol 1) or three (protocol 2) lines; a line reading `end` in place of
    a source path stops the loop.
    """
    Path(flag_file).write_bytes(b"")

    request: list[str] = []
    for raw in stdin:
        line = raw.rstrip("\r\n")
        if not request and line == END_OF_BATCH:
            break
        request.append(line)
        if len(request) < config.lines_per_request:
            continue

        if config.lines_per_request == 3:
            source, encoding, dest = request
        else:
            source, dest = request
            encoding = None
        ok = process_request(config, source, encoding, dest)
        stdout.write("OK\n" if ok else "KO\n")
        stdout.flush()
        request = []

    if request:
        logger.warning("input ended inside a request: %r", request)
    return 0
