"""Write a generated brace-language corpus, plus its normalized trees.

Each `<name>.c` source is parsed with the built-in block parser and its tree
is written next to it as `<name>.c.json`. Sources whose tree does not tile
the buffer are listed and make the script exit non-zero.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from spantree import format_file, parse_blocks, parse_file
from spantree.testing import assert_tiles, generate_corpus_files


logger = logging.getLogger("generate_corpus")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="generate_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=1000)
    ap.add_argument("--out", default="build/corpus")
    ap.add_argument("--no-trees", action="store_true", help="write the sources only")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"
    out_dir.mkdir(parents=True, exist_ok=True)

    bad: list[str] = []
    for rel, src in generate_corpus_files(seed=args.seed, count=args.count):
        p = out_dir / rel
        p.write_bytes(src.encode("utf-8"))
        if args.no_trees:
            continue
        tree = parse_file(p, parser=parse_blocks)
        try:
            assert_tiles(tree, len(src.encode("utf-16-le")) // 2)
        except AssertionError as exc:
            logger.error("%s: %s", rel, exc)
            bad.append(rel)
            continue
        (out_dir / f"{rel}.json").write_text(format_file(tree, indent=2), encoding="utf-8")

    logger.info("wrote %d sources to %s", args.count, out_dir)
    print(str(out_dir))
    return 1 if bad else 0


if __name__ == "__main__":
    raise SystemExit(main())
